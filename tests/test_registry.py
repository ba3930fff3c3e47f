import concurrent.futures
import threading

import pytest

from app.infrastructure.observability import (
    Counter,
    DuplicateMetricName,
    Family,
    Histogram,
    InvalidMetricName,
    MetricRegistry,
)


def test_register_makes_metric_visible(registry):
    family = Family(Counter)
    registry.register('name_counter', 'Count of names', family)

    assert 'name_counter' in registry
    assert registry.get('name_counter') is family
    assert list(registry) == ['name_counter']
    assert len(registry) == 1


def test_duplicate_name_is_rejected(registry):
    registry.register('name_counter', 'Count of names', Family(Counter))

    with pytest.raises(DuplicateMetricName) as exc_info:
        registry.register('name_counter', 'Another', Family(Histogram))

    assert exc_info.value.name == 'name_counter'
    assert registry.get('name_counter').metric_type is Counter


@pytest.mark.parametrize('name', ['', '1abc', 'with-dash', 'with space'])
def test_invalid_names_are_rejected(registry, name):
    with pytest.raises(InvalidMetricName):
        registry.register(name, 'help', Counter())


def test_registries_are_independent():
    first, second = MetricRegistry(), MetricRegistry()
    first.register('requests', 'Requests', Counter())

    assert 'requests' not in second
    second.register('requests', 'Requests', Counter())


def test_render_empty_registry(registry):
    assert registry.render() == '# EOF\n'


def test_render_counter_family(registry):
    family = Family(Counter)
    registry.register('name_counter', 'Count of names', family)
    family.labels(name='foo').inc()
    family.labels(name='bar').inc()
    family.labels(name='foo').inc()

    assert registry.render() == (
        '# HELP name_counter Count of names.\n'
        '# TYPE name_counter counter\n'
        'name_counter_total{name="foo"} 2\n'
        'name_counter_total{name="bar"} 1\n'
        '# EOF\n'
    )


def test_render_families_in_registration_order(registry):
    registry.register('second', 'Second', Counter())
    registry.register('first', 'First', Counter())

    lines = registry.render().splitlines()

    assert lines.index('# TYPE second counter') < lines.index('# TYPE first counter')


def test_render_is_idempotent(registry):
    family = Family(Histogram)
    registry.register('latency', 'Latency', family)
    family.labels(method='GET').observe(0.3)

    assert registry.render() == registry.render()


def test_render_skips_metric_that_fails_to_encode(registry):
    class BrokenFamily(Family):
        def collect(self):
            msg = 'broken'
            raise RuntimeError(msg)

    healthy = Counter()
    healthy.inc()
    registry.register('broken', 'Broken', BrokenFamily(Counter))
    registry.register('healthy', 'Healthy', healthy)

    rendered = registry.render()

    assert 'broken' not in rendered
    assert 'healthy_total 1\n' in rendered
    assert rendered.endswith('# EOF\n')


def test_render_during_concurrent_updates_loses_nothing(registry):
    requests = Family(Counter)
    latency = Family(Histogram)
    registry.register('requests', 'Requests', requests)
    registry.register('latency', 'Latency', latency)

    workers, per_worker = 8, 300
    done = threading.Event()
    renders = []

    def update(worker: int) -> None:
        for _ in range(per_worker):
            requests.labels(worker=str(worker % 2)).inc()
            latency.labels(worker=str(worker % 2)).observe(0.2)

    def scrape() -> None:
        while not done.is_set():
            renders.append(registry.render())

    scraper = threading.Thread(target=scrape)
    scraper.start()
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        for future in [pool.submit(update, i) for i in range(workers)]:
            future.result()
    done.set()
    scraper.join()

    lines = registry.render().splitlines()
    expected = workers // 2 * per_worker

    assert renders
    assert all(render.endswith('# EOF\n') for render in renders)
    for worker in ('0', '1'):
        assert f'requests_total{{worker="{worker}"}} {expected}' in lines
        assert f'latency_count{{worker="{worker}"}} {expected}' in lines
        assert f'latency_bucket{{le="0.25",worker="{worker}"}} {expected}' in lines
