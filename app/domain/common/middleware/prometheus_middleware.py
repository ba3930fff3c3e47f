"""
Starlette middleware recording request count and latency.

Labels come from the matched route template, so ``/hello/foo`` and
``/hello/bar`` share the ``/hello/{name}`` series.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fastapi.requests import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

if TYPE_CHECKING:
    from starlette.types import ASGIApp

    from app.infrastructure.observability.instrumentation import RequestInstrumentor


class PrometheusMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, instrumentor: RequestInstrumentor) -> None:
        super().__init__(app)
        self.instrumentor = instrumentor

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        context = self.instrumentor.before(request)

        try:
            response = await call_next(request)
        except Exception:
            self.instrumentor.after(context, request, HTTP_500_INTERNAL_SERVER_ERROR)
            raise

        self.instrumentor.after(context, request, response.status_code)

        return response
