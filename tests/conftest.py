import os

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Keep runtime deterministic before any configuration is loaded
os.environ.setdefault('ENVIRONMENT', 'test')

from app.core.application import get_application  # noqa: E402
from app.core.config import Configuration  # noqa: E402
from app.domain.hello import (  # noqa: E402
    NAME_COUNTER_HELP,
    NAME_COUNTER_NAME,
    NameCounter,
)
from app.infrastructure.observability import (  # noqa: E402
    MetricRegistry,
    PrometheusMetrics,
)


@pytest.fixture()
def config() -> Configuration:
    return Configuration()


@pytest.fixture()
def registry() -> MetricRegistry:
    return MetricRegistry()


@pytest.fixture()
def name_counter() -> NameCounter:
    return NameCounter()


@pytest.fixture()
def prometheus(
    registry: MetricRegistry, name_counter: NameCounter
) -> PrometheusMetrics:
    prometheus = PrometheusMetrics(registry=registry).with_request_filter(
        lambda request: request.url.path != '/metrics'
    )
    prometheus.registry.register(NAME_COUNTER_NAME, NAME_COUNTER_HELP, name_counter)
    return prometheus


@pytest.fixture()
def app(
    config: Configuration, prometheus: PrometheusMetrics, name_counter: NameCounter
) -> FastAPI:
    return get_application(
        config=config, prometheus=prometheus, name_counter=name_counter
    )


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
