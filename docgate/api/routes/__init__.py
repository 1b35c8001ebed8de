from __future__ import annotations

from docgate.api.routes.documents import router as documents_router
from docgate.api.routes.health import router as health_router

__all__ = ["documents_router", "health_router"]
