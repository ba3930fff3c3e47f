"""
Request instrumentation.

``RequestInstrumentor`` exposes a ``before(request) -> context`` /
``after(context, request, status_code)`` pair that the host pipeline calls
around every handler; ``PrometheusMiddleware`` is the Starlette adapter.
``PrometheusMetrics`` bundles the registry, the built-in HTTP families and
the request filter.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from app.core.logging import get_logger
from app.domain.common.middleware.prometheus_middleware import PrometheusMiddleware

from .family import Family
from .labels import LabelSet
from .primitives import DEFAULT_BUCKETS, Counter, Histogram
from .registry import MetricRegistry

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

    from app.core.configs import MetricsConfiguration

logger = get_logger(__name__)

RequestFilter = Callable[['Request'], bool]


def include_all(_request: Request) -> bool:
    return True


@dataclass(frozen=True)
class HttpLabel(LabelSet):
    endpoint: str
    status: str
    method: str


@dataclass
class RequestContext:
    """Per-request state between ``before`` and ``after``."""

    method: str
    start: float = field(default_factory=time.perf_counter)
    endpoint: str | None = None
    status: int | None = None

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.start


class RequestInstrumentor:
    def __init__(
        self,
        requests_total: Family[Counter],
        requests_duration: Family[Histogram],
        request_filter: RequestFilter = include_all,
    ) -> None:
        self.requests_total = requests_total
        self.requests_duration = requests_duration
        self.request_filter = request_filter

    def before(self, request: Request) -> RequestContext | None:
        """Start timing *request*, or return ``None`` if it is filtered out."""
        try:
            if not self.request_filter(request):
                return None
        except Exception:
            logger.exception(f'request filter failed for {request.url.path}')
            return None

        return RequestContext(method=request.method)

    def after(
        self, context: RequestContext | None, request: Request, status_code: int
    ) -> None:
        """Record the finished request; never raises."""
        if context is None:
            return

        elapsed = context.elapsed

        try:
            context.status = status_code
            context.endpoint = self.route_template(request)

            if context.endpoint is None:
                logger.debug(
                    f'no route matched {request.method} {request.url.path}, '
                    'request not recorded'
                )
                return

            labels = HttpLabel(
                endpoint=context.endpoint,
                status=str(context.status),
                method=context.method,
            )
            counter = self.requests_total.get_or_create(labels)
            histogram = self.requests_duration.get_or_create(labels)

            counter.inc()
            histogram.observe(elapsed)

        except Exception:
            logger.exception(
                f'failed to record metrics for {request.method} {request.url.path}'
            )

    @staticmethod
    def route_template(request: Request) -> str | None:
        """Declared path of the matched route, e.g. ``/hello/{name}``."""
        route = request.scope.get('route')
        if route is None:
            return None
        return getattr(route, 'path_format', None) or getattr(route, 'path', None)


class PrometheusMetrics:
    """
    Registry plus request-count and request-duration families for an app.

    ::

        prometheus = PrometheusMetrics().with_request_filter(
            lambda request: request.url.path != '/metrics'
        )
        prometheus.registry.register('name_counter', 'Count of names', counter)
        prometheus.instrument(app)
    """

    def __init__(
        self,
        registry: MetricRegistry | None = None,
        namespace: str = 'rocket',
        buckets: tuple[float, ...] = DEFAULT_BUCKETS,
    ) -> None:
        self.registry = registry if registry is not None else MetricRegistry()
        self.namespace = namespace

        self.http_requests_total: Family[Counter] = Family(Counter)
        self.http_requests_duration_seconds: Family[Histogram] = Family(
            Histogram, buckets=buckets
        )

        self.registry.register(
            f'{namespace}_http_requests_total',
            'Total number of HTTP requests',
            self.http_requests_total,
        )
        self.registry.register(
            f'{namespace}_http_requests_duration_seconds',
            'HTTP request duration in seconds for all requests',
            self.http_requests_duration_seconds,
        )

        self.instrumentor = RequestInstrumentor(
            self.http_requests_total, self.http_requests_duration_seconds
        )

    @classmethod
    def from_config(
        cls, config: MetricsConfiguration, registry: MetricRegistry | None = None
    ) -> PrometheusMetrics:
        prometheus = cls(registry=registry, namespace=config.namespace)

        if config.excluded_paths:
            excluded = frozenset(config.excluded_paths)
            prometheus.with_request_filter(
                lambda request: request.url.path not in excluded
            )

        return prometheus

    def with_request_filter(self, request_filter: RequestFilter) -> PrometheusMetrics:
        """Only record requests for which *request_filter* returns ``True``."""
        self.instrumentor.request_filter = request_filter
        return self

    def instrument(self, app: FastAPI) -> None:
        app.add_middleware(PrometheusMiddleware, instrumentor=self.instrumentor)
