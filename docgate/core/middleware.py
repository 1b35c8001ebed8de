"""Request correlation middleware.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from docgate.core.config import settings
from docgate.core.logging import bind_request_id


async def request_id_middleware(request: Request, call_next) -> Response:
    """Bind a correlation id for the request and echo it back.

    The id comes from the configured header (``X-Request-ID`` by default) or
    is generated. Submissions made while handling the request inherit it, so
    the dispatch log lines written later by the admission worker carry the
    same id. The response also reports total handling time in
    ``X-Request-Duration-ms``.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or uuid.uuid4().hex
    started = time.perf_counter()

    with bind_request_id(request_id):
        response: Response = await call_next(request)

    response.headers[header_name] = request_id
    response.headers.setdefault(
        "X-Request-Duration-ms", f"{(time.perf_counter() - started) * 1000:.2f}"
    )
    return response
