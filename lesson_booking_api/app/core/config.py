"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, so the service runs without a dedicated
settings library.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a ``.env`` file loaded by your process manager.
"""

import os
from dataclasses import dataclass
from pathlib import Path


# Bundled resources (seed data, images) are resolved relative to this directory
PACKAGE_DIR = Path(__file__).resolve().parent.parent.parent  # lesson_booking_api/


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Lesson Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # Level for per-request access lines; empty follows LOG_LEVEL.
    access_log_level: str = os.getenv("ACCESS_LOG_LEVEL", "")

    # Path to the SQLite database file, or ``:memory:``.  Relative paths
    # are resolved against the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "lesson_booking.db")
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "20"))

    # ``sqlite`` keeps lessons and orders in the database above; ``memory``
    # keeps them in process and is reset on every restart.
    store_backend: str = os.getenv("STORE_BACKEND", "sqlite")

    # JSON array of lessons loaded into an empty catalog.  The memory
    # backend always seeds on startup; the SQLite backend only when
    # SEED_ON_STARTUP is set (otherwise use ``seed_lessons.py``).
    seed_file: str = os.getenv("SEED_FILE", str(PACKAGE_DIR / "seed" / "lessons.json"))
    seed_on_startup: bool = _env_flag("SEED_ON_STARTUP")

    images_dir: str = os.getenv("IMAGES_DIR", str(PACKAGE_DIR / "public" / "images"))

    # Comma-separated list of allowed origins for the storefront.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Optional prefix for every route, e.g. ``/api/v1``.  Empty by default
    # so the storefront can call ``/lessons`` and ``/orders`` directly.
    api_prefix: str = os.getenv("API_PREFIX", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
