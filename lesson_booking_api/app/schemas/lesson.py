"""
Pydantic models for lesson data.

``LessonBase`` contains the descriptive fields shared by every lesson
representation; ``LessonCreate`` adds the slug identifier for bulk
seeding and ``LessonRead`` is what the API returns.  ``LessonUpdate``
is the typed result of validating a ``PUT /lessons/{id}`` body: only
the allow-listed fields exist on it, so an untrusted request body is
never merged into a stored record.
"""

from typing import Optional

from pydantic import BaseModel, Field


# Fields a client may change through ``PUT /lessons/{id}``.
LESSON_UPDATE_FIELDS = ("topic", "location", "price", "space")

# Largest value a SQLite INTEGER column holds.
MAX_SPACE = 2**63 - 1


class LessonBase(BaseModel):
    topic: str = Field(..., description="Subject taught, e.g. Art")
    location: str = Field(..., description="Where the lesson takes place")
    price: float = Field(..., ge=0, description="Price per seat")
    space: int = Field(..., ge=0, le=MAX_SPACE, description="Remaining bookable seats")
    image: Optional[str] = Field(None, description="Image file served under /images")


class LessonCreate(LessonBase):
    """Schema for seeding a lesson into the catalog."""

    id: str = Field(..., min_length=1, description="Stable slug, e.g. Art-Hen-70")


class LessonRead(LessonBase):
    """Schema for reading a lesson from the API."""

    id: str

    model_config = {
        "from_attributes": True,
    }


class LessonUpdate(BaseModel):
    """Validated partial update for a lesson.

    All fields are optional; only fields that were set are written.
    """

    topic: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    space: Optional[int] = Field(default=None, ge=0, le=MAX_SPACE)

    model_config = {
        "extra": "forbid",
    }

    def changes(self) -> dict:
        """Return only the fields that were explicitly provided."""
        return self.model_dump(exclude_unset=True)
