"""Application factory for the FastAPI host.

Centralizes app construction (metadata, middleware, handlers, routers) and
owns the submission service lifecycle: one service per app, closed on
shutdown so the admission worker stops cleanly.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from docgate.api.routes import documents_router, health_router
from docgate.core.config import settings
from docgate.core.exception_handlers import setup_exception_handlers
from docgate.core.logging import configure_logging
from docgate.core.middleware import request_id_middleware
from docgate.services.submission_service import (
    DocumentSubmissionService,
    build_submission_service,
)

logger = logging.getLogger(__name__)


def create_app(service: DocumentSubmissionService | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        service: Optional pre-built submission service (tests inject fakes).

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    submission_service = service or build_submission_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        pending = app.state.submission_service.close(timeout=5.0)
        if pending:
            logger.warning("shutdown.cancelled_submissions", extra={"count": len(pending)})

    app = FastAPI(
        title="docgate",
        description=(
            "Rate-limited gateway for document creation requests. Submissions are "
            "queued and sent to the document API at no more than the configured "
            "number of requests per window."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.submission_service = submission_service

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(documents_router, prefix="/v1")
    app.include_router(health_router)

    return app
