from .bootstrap import configure_observability
from .errors import (
    DuplicateMetricName,
    InvalidBuckets,
    InvalidMetricName,
    LabelSetMismatch,
    MetricsError,
    NegativeIncrement,
)
from .exposition import CONTENT_TYPE
from .family import Family
from .instrumentation import (
    PrometheusMetrics,
    RequestContext,
    RequestInstrumentor,
)
from .labels import LabelSet, LabelTuple
from .primitives import DEFAULT_BUCKETS, Counter, Histogram
from .registry import MetricRegistry

__all__ = [
    'CONTENT_TYPE',
    'DEFAULT_BUCKETS',
    'Counter',
    'DuplicateMetricName',
    'Family',
    'Histogram',
    'InvalidBuckets',
    'InvalidMetricName',
    'LabelSet',
    'LabelSetMismatch',
    'LabelTuple',
    'MetricRegistry',
    'MetricsError',
    'NegativeIncrement',
    'PrometheusMetrics',
    'RequestContext',
    'RequestInstrumentor',
    'configure_observability',
]
