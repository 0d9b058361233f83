"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Configuration, logging, errors and the database handle
live in ``core``; request and response models in ``schemas``; store
backends in ``stores``; business logic in ``services``; and HTTP
routes under ``api/<version>/``.
"""

from .main import app  # noqa: F401
