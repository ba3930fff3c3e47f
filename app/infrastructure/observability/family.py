import threading
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from .errors import LabelSetMismatch
from .labels import LabelSet, LabelTuple, label_names, to_label_tuple
from .primitives import Counter, Histogram

M = TypeVar('M', Counter, Histogram)


class Family(Generic[M]):
    """
    A named group of same-typed metrics, one per distinct label tuple.

    Children are created lazily on first use. Lookups of existing children
    do not take the lock; creation does, and re-checks the map under it, so
    concurrent callers with the same labels always share one instance.

    There is no eviction: label values must come from a bounded set (route
    templates, not raw paths or free text).
    """

    def __init__(self, metric_type: type[M], **metric_kwargs: Any) -> None:
        # fail at construction on bad kwargs, e.g. unordered buckets
        metric_type(**metric_kwargs)

        self._metric_type = metric_type
        self._metric_kwargs = metric_kwargs
        self._metrics: dict[LabelTuple, M] = {}
        self._label_names: tuple[str, ...] | None = None
        self._lock = threading.Lock()

    @property
    def metric_type(self) -> type[M]:
        return self._metric_type

    def get_or_create(
        self, labels: LabelSet | Mapping[str, Any] | Iterable[tuple[str, Any]]
    ) -> M:
        key = to_label_tuple(labels)

        metric = self._metrics.get(key)
        if metric is not None:
            return metric

        with self._lock:
            metric = self._metrics.get(key)
            if metric is None:
                self._check_label_names(key)
                metric = self._metric_type(**self._metric_kwargs)
                self._metrics[key] = metric
            return metric

    def labels(self, **labels: Any) -> M:
        return self.get_or_create(labels)

    def _check_label_names(self, key: LabelTuple) -> None:
        names = label_names(key)
        if self._label_names is None:
            self._label_names = names
        elif names != self._label_names:
            raise LabelSetMismatch(self._label_names, names)

    def collect(self) -> list[tuple[LabelTuple, M]]:
        """Snapshot of ``(labels, metric)`` pairs in first-observation order."""
        with self._lock:
            return list(self._metrics.items())

    def __len__(self) -> int:
        return len(self._metrics)
