from fastapi import FastAPI
from kink import di

from app.core.application import get_application
from app.core.config import Configuration, get_config
from app.domain.hello import NAME_COUNTER_HELP, NAME_COUNTER_NAME, NameCounter
from app.infrastructure.observability import PrometheusMetrics


def wire_dependencies() -> None:
    _wire_core_dependencies()
    _wire_infrastructure_dependencies()
    _wire_application()


# noinspection PyArgumentList
def _wire_core_dependencies() -> None:
    """Wire core application dependencies."""
    di[Configuration] = get_config()


def _wire_infrastructure_dependencies() -> None:
    prometheus = PrometheusMetrics.from_config(di[Configuration].metrics)
    name_counter = NameCounter()
    prometheus.registry.register(NAME_COUNTER_NAME, NAME_COUNTER_HELP, name_counter)

    di[PrometheusMetrics] = prometheus
    di[NameCounter] = name_counter


def _wire_application() -> None:
    di[FastAPI] = get_application()  # type: ignore[call-arg]
