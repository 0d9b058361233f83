"""
Main entrypoint for the Lesson Booking API.

This module assembles the FastAPI application, sets up logging,
middleware and the catalog store, and includes the versioned router.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``.  Importing the
app here makes it easy to run with uvicorn, e.g.::

    uvicorn lesson_booking_api.app.main:app --reload

The store is chosen by ``STORE_BACKEND``; tests pass their own store
to ``create_app`` instead.
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import StoreUnavailableError
from .core.logging_config import ACCESS_LOGGER, setup_logging
from .services.catalog_service import CatalogService
from .services.order_service import OrderService
from .stores import CatalogStore, create_store


logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER)


async def open_store(app: FastAPI) -> None:
    """Open the store and seed it if configured.

    A store that cannot be opened does not stop the server: it starts
    degraded and ``/health`` reports the error until it is fixed.
    """
    settings: Settings = app.state.settings
    store: CatalogStore = app.state.store
    try:
        await store.open()
    except StoreUnavailableError as e:
        logger.error("Catalog store failed to initialise: %s", e.message)
        logger.warning("Server running degraded; /health will report the error")
        return

    if settings.seed_on_startup or settings.store_backend.lower() == "memory":
        seed_path = Path(settings.seed_file)
        if not seed_path.is_file():
            logger.warning("Seed file %s not found; catalog left as is", seed_path)
            return
        catalog: CatalogService = app.state.catalog_service
        await catalog.seed_lessons(catalog.load_seed_file(seed_path))


def create_app(settings: Optional[Settings] = None, store: Optional[CatalogStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        module-level settings.
    store : Optional[CatalogStore]
        Catalog store to serve from.  When omitted a store is built
        from ``settings.store_backend``.

    Returns
    -------
    FastAPI
        A configured FastAPI instance.  The store is opened when the
        application starts and closed when it shuts down.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the setup below
    # can safely log messages.
    setup_logging(settings.log_level, settings.log_file or None, settings.access_log_level or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Open the store (and seed it) before serving; close it on shutdown.
        await open_store(app)
        try:
            yield
        finally:
            await app.state.store.close()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    if store is None:
        store = create_store(settings)
    app.state.settings = settings
    app.state.store = store
    app.state.catalog_service = CatalogService(store)
    app.state.order_service = OrderService(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        access_logger.info(
            "%s %s %s - %.0fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    app.include_router(v1_router, prefix=settings.api_prefix.rstrip("/"))

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
