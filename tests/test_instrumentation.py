import asyncio

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from app.api import create_metrics_router
from app.infrastructure.observability import (
    DuplicateMetricName,
    InvalidBuckets,
    MetricRegistry,
    PrometheusMetrics,
    RequestInstrumentor,
)


def _values(prometheus: PrometheusMetrics) -> dict[tuple, int]:
    return {
        labels: counter.get()
        for labels, counter in prometheus.http_requests_total.collect()
    }


def _labels(endpoint: str, status: int, method: str = 'GET') -> tuple:
    return (('endpoint', endpoint), ('status', str(status)), ('method', method))


@pytest.fixture()
def instrumented() -> tuple[PrometheusMetrics, TestClient]:
    prometheus = PrometheusMetrics()
    app = FastAPI()

    @app.get('/items/{item_id:int}')
    async def get_item(item_id: int) -> dict[str, int]:
        return {'item_id': item_id}

    @app.get('/teapot')
    async def teapot() -> None:
        raise HTTPException(status_code=418, detail='I am a teapot')

    @app.get('/boom')
    async def boom() -> None:
        msg = 'boom'
        raise RuntimeError(msg)

    @app.get('/slow')
    async def slow() -> dict[str, bool]:
        await asyncio.sleep(0.06)
        return {'ok': True}

    @app.get('/sync')
    def sync_route() -> dict[str, bool]:
        return {'ok': True}

    prometheus.instrument(app)
    app.include_router(create_metrics_router(prometheus.registry))

    return prometheus, TestClient(app, raise_server_exceptions=False)


def test_builtin_families_are_registered_under_namespace():
    registry = MetricRegistry()
    PrometheusMetrics(registry=registry, namespace='api')

    assert list(registry) == [
        'api_http_requests_total',
        'api_http_requests_duration_seconds',
    ]


def test_second_facade_on_same_registry_fails_fast():
    registry = MetricRegistry()
    PrometheusMetrics(registry=registry)

    with pytest.raises(DuplicateMetricName):
        PrometheusMetrics(registry=registry)


def test_requests_are_labelled_by_route_template(instrumented):
    prometheus, client = instrumented

    client.get('/items/1')
    client.get('/items/2')
    client.get('/sync')

    assert _values(prometheus) == {
        _labels('/items/{item_id}', 200): 2,
        _labels('/sync', 200): 1,
    }


def test_duration_is_observed_with_the_same_labels(instrumented):
    prometheus, client = instrumented

    client.get('/items/7')

    [(labels, histogram)] = prometheus.http_requests_duration_seconds.collect()

    assert labels == _labels('/items/{item_id}', 200)
    assert histogram.count == 1
    assert histogram.sum >= 0


def test_error_statuses_are_recorded(instrumented):
    prometheus, client = instrumented

    assert client.get('/teapot').status_code == 418
    assert client.get('/boom').status_code == 500
    assert client.post('/sync').status_code == 405

    assert _values(prometheus) == {
        _labels('/teapot', 418): 1,
        _labels('/boom', 500): 1,
        _labels('/sync', 405, 'POST'): 1,
    }


def test_unmatched_requests_are_not_recorded(instrumented):
    prometheus, client = instrumented

    assert client.get('/does/not/exist').status_code == 404

    assert _values(prometheus) == {}
    assert len(prometheus.http_requests_duration_seconds) == 0


def test_excluded_requests_change_nothing(instrumented):
    prometheus, client = instrumented
    prometheus.with_request_filter(lambda request: request.url.path != '/metrics')

    client.get('/items/1')
    before = prometheus.registry.render()
    client.get('/metrics')
    client.get('/metrics')

    assert prometheus.registry.render() == before


def test_without_filter_the_endpoint_records_itself(instrumented):
    prometheus, client = instrumented

    client.get('/metrics')
    body = client.get('/metrics').text

    assert (
        'rocket_http_requests_total_total'
        '{endpoint="/metrics",status="200",method="GET"} 1'
    ) in body


def test_failing_filter_skips_recording_but_serves_request(instrumented):
    prometheus, client = instrumented

    def broken_filter(_request):
        msg = 'broken filter'
        raise RuntimeError(msg)

    prometheus.with_request_filter(broken_filter)

    assert client.get('/items/1').status_code == 200
    assert _values(prometheus) == {}


def test_recording_failure_never_fails_the_request(instrumented, monkeypatch):
    prometheus, client = instrumented

    def explode(_request):
        msg = 'no template'
        raise RuntimeError(msg)

    monkeypatch.setattr(RequestInstrumentor, 'route_template', staticmethod(explode))

    assert client.get('/items/1').status_code == 200
    assert _values(prometheus) == {}


def test_exposition_endpoint_content_type(instrumented):
    _, client = instrumented

    response = client.get('/metrics')

    assert response.status_code == 200
    assert response.headers['content-type'].startswith('text/plain; version=0.0.4')
    assert response.text.endswith('# EOF\n')


def test_duration_spans_awaited_handler(instrumented):
    prometheus, client = instrumented

    client.get('/slow')

    [(labels, histogram)] = prometheus.http_requests_duration_seconds.collect()

    assert labels == _labels('/slow', 200)
    assert histogram.sum >= 0.05
    assert dict(histogram.snapshot().buckets)[0.05] == 0


def test_invalid_buckets_fail_at_construction():
    registry = MetricRegistry()

    with pytest.raises(InvalidBuckets):
        PrometheusMetrics(registry=registry, buckets=(2.0, 1.0))

    assert len(registry) == 0


def test_count_and_duration_stay_in_step_when_recording_fails(instrumented):
    prometheus, client = instrumented

    def broken_histogram(_labels):
        msg = 'no histogram'
        raise RuntimeError(msg)

    prometheus.http_requests_duration_seconds.get_or_create = broken_histogram

    assert client.get('/items/1').status_code == 200
    assert _values(prometheus) == {}
