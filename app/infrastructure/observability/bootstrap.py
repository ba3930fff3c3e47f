from __future__ import annotations

from typing import TYPE_CHECKING

from app.core.logging import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

    from app.core.config import Configuration

    from .instrumentation import PrometheusMetrics

logger = get_logger(__name__)


def _setup_metrics(app: FastAPI, prometheus: PrometheusMetrics) -> None:
    prometheus.instrument(app)

    logger.debug(
        f'request metrics enabled under namespace {prometheus.namespace!r}'
    )


def configure_observability(
    app: FastAPI, config: Configuration, prometheus: PrometheusMetrics
) -> None:
    """Attach request instrumentation to the application."""
    if not config.metrics.enabled:
        return

    # Setup metrics
    _setup_metrics(app, prometheus)
