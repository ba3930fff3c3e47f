from fastapi import APIRouter
from fastapi.responses import Response

from app.infrastructure.observability import CONTENT_TYPE, MetricRegistry


def create_metrics_router(
    registry: MetricRegistry, path: str = '/metrics'
) -> APIRouter:
    """Build a router exposing *registry* in the text exposition format."""
    router = APIRouter(prefix=path, tags=['observability'])

    @router.get('', include_in_schema=False)
    async def get_metrics() -> Response:
        """Get all metrics in Prometheus format."""
        return Response(content=registry.render(), media_type=CONTENT_TYPE)

    return router
