from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> dict:
    """Health check endpoint.

    Reports "ok" while the rate limiter accepts submissions, "closed" after
    shutdown, together with queue and quota counters.
    """

    limiter_stats = request.app.state.submission_service.limiter.stats()
    return {
        "status": "closed" if limiter_stats["closed"] else "ok",
        "limiter": limiter_stats,
    }
