"""
Lesson image endpoint for API v1.

Serves files from the configured images directory.  Only plain file
names are accepted; anything that would resolve outside the directory
is reported as missing.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse


router = APIRouter()


@router.get("/images/{file_name}")
async def get_image(file_name: str, request: Request) -> FileResponse:
    images_dir = Path(request.app.state.settings.images_dir).resolve()
    file_path = (images_dir / file_name).resolve()
    if file_path.parent != images_dir or not file_path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return FileResponse(file_path)
