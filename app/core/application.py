from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI
from kink import inject

from app.api import api_router, create_metrics_router
from app.core.config import Configuration
from app.core.logging import get_logger, setup_logging
from app.domain.hello import NameCounter
from app.infrastructure.observability import PrometheusMetrics, configure_observability

logger = get_logger(__name__)


def _lifespan(
    config: Configuration,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        setup_logging(config)
        logger.info(f'{config.app_name} {config.app_version} starting')

        yield

        logger.info(f'{config.app_name} stopped')

    return lifespan


@inject
def get_application(
    config: Configuration, prometheus: PrometheusMetrics, name_counter: NameCounter
) -> FastAPI:
    """Create and configure FastAPI application.

    ``name_counter`` is made available to the hello routes through
    ``app.state``; registering it with ``prometheus.registry`` is up to the
    caller.
    """
    app = FastAPI(
        debug=config.app_debug,
        description=config.app_description,
        docs_url='/docs' if config.app_environment != 'prod' else None,
        openapi_url='/docs/openapi.json' if config.app_environment != 'prod' else None,
        redoc_url=None,
        title=config.app_name,
        version=config.app_version,
        lifespan=_lifespan(config),
    )
    app.state.name_counter = name_counter

    configure_observability(app, config, prometheus)

    # Include routers
    app.include_router(api_router)

    if config.metrics.enabled:
        app.include_router(
            create_metrics_router(prometheus.registry, config.metrics.path)
        )

    return app
