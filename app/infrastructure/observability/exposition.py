"""
Text exposition encoding.

Renders one registered metric as ``# HELP`` / ``# TYPE`` headers followed by
its samples. Counters always get a ``_total`` suffix; histogram buckets carry
``le`` as their first label::

    # HELP name_counter Count of names.
    # TYPE name_counter counter
    name_counter_total{name="foo"} 2
"""

from app.domain.common.utils import NumberUtils, StringUtils

from .family import Family
from .labels import EMPTY_LABELS, LabelTuple
from .primitives import Counter, Histogram, Metric

CONTENT_TYPE = 'text/plain; version=0.0.4; charset=utf-8'

EOF_MARKER = '# EOF'


def _format_labels(labels: LabelTuple) -> str:
    if not labels:
        return ''
    pairs = ','.join(
        f'{key}="{StringUtils.escape_label_value(value)}"' for key, value in labels
    )
    return f'{{{pairs}}}'


def _encode_counter(name: str, labels: LabelTuple, counter: Counter) -> list[str]:
    value = NumberUtils.format_value(counter.get())
    return [f'{name}_total{_format_labels(labels)} {value}']


def _encode_histogram(
    name: str, labels: LabelTuple, histogram: Histogram
) -> list[str]:
    snapshot = histogram.snapshot()
    series = _format_labels(labels)

    lines = []
    for bound, count in snapshot.buckets:
        le = ('le', NumberUtils.format_bound(bound))
        lines.append(f'{name}_bucket{_format_labels((le, *labels))} {count}')

    lines.append(f'{name}_sum{series} {NumberUtils.format_value(snapshot.sum)}')
    lines.append(f'{name}_count{series} {snapshot.count}')
    return lines


def _encode_sample(name: str, labels: LabelTuple, metric: Metric) -> list[str]:
    if isinstance(metric, Counter):
        return _encode_counter(name, labels, metric)
    return _encode_histogram(name, labels, metric)


def metric_type_of(metric: Family | Metric) -> str:
    if isinstance(metric, Family):
        return metric.metric_type.TYPE
    return metric.TYPE


def encode_metric(name: str, help_text: str, metric: Family | Metric) -> list[str]:
    """Encode one registered metric (family or bare primitive) into lines."""
    lines = [
        f'# HELP {name} {StringUtils.escape_help(StringUtils.as_sentence(help_text))}',
        f'# TYPE {name} {metric_type_of(metric)}',
    ]

    if isinstance(metric, Family):
        for labels, child in metric.collect():
            lines.extend(_encode_sample(name, labels, child))
    else:
        lines.extend(_encode_sample(name, EMPTY_LABELS, metric))

    return lines
