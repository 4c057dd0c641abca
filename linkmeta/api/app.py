"""FastAPI application factory.

Routers
-------
    /api/metadata  — resolve a raw URL into link metadata
    /health        — liveness check

The service keeps no state between requests, so there is no lifespan
setup beyond logging configuration.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from linkmeta import __version__
from linkmeta.api.routers import metadata as metadata_router
from linkmeta.api.routers import system as system_router
from linkmeta.config import settings
from linkmeta.observability import configure_logging


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Turns loose user input into a normalised URL plus presentable "
            "title, description and icon metadata for link previews."
        ),
        version=__version__,
    )

    # Link-creation UIs call this from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(
        RequestValidationError, metadata_router.validation_error_handler
    )
    app.include_router(metadata_router.router, prefix="/api", tags=["metadata"])
    app.include_router(system_router.router, tags=["system"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn linkmeta.api.app:app --reload
app = create_app()
