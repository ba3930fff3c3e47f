from typing import Any

from fastapi import FastAPI
from gunicorn.app.base import BaseApplication  # type: ignore[import-untyped]
from kink import inject

from app.core.config import Configuration
from app.core.logging import get_logger

logger = get_logger(__name__)


class MetricsServer(BaseApplication):  # type: ignore[misc]
    """Gunicorn application serving one pre-built FastAPI instance."""

    def __init__(self, application: FastAPI, options: dict[str, Any]) -> None:
        self.options = options
        self.application = application

        super().__init__()

    def load_config(self) -> None:
        for key, value in self.options.items():
            if key in self.cfg.settings and value is not None:
                self.cfg.set(key.lower(), value)

    def load(self) -> FastAPI:
        return self.application


def server_options(config: Configuration) -> dict[str, Any]:
    """Gunicorn settings derived from ``config.api``."""
    if config.api.workers > 1:
        logger.warning(
            f'{config.api.workers} workers configured; each keeps its own '
            'metrics registry and /metrics shows one worker per scrape'
        )

    return {
        'bind': f'{config.api.host}:{config.api.port}',
        'workers': config.api.workers,
        'worker_class': 'uvicorn.workers.UvicornWorker',
        'preload_app': False,
        'timeout': config.api.timeout,
    }


@inject
def run_server(app: FastAPI, config: Configuration) -> None:
    MetricsServer(app, server_options(config)).run()


if __name__ == '__main__':
    from app.core.container import wire_dependencies

    wire_dependencies()
    run_server()  # type: ignore[call-arg]
