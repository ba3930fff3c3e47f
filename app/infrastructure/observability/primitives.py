"""
Counter and histogram accumulators.

Both guard their state with a ``threading.Lock``: sync FastAPI endpoints
run in a thread pool, so updates may come from several threads at once.
"""

import math
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from app.domain.common.utils import NumberUtils

from .errors import InvalidBuckets, NegativeIncrement

INF = float('inf')

DEFAULT_BUCKETS: tuple[float, ...] = (
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    INF,
)


class Counter:
    """Monotonically non-decreasing value."""

    TYPE: ClassVar[str] = 'counter'

    def __init__(self) -> None:
        self._value: int | float = 0
        self._lock = threading.Lock()

    def inc(self, amount: int | float = 1) -> int | float:
        """Increment by *amount* and return the new value."""
        if math.isnan(amount) or amount < 0:
            raise NegativeIncrement(amount)

        with self._lock:
            self._value += amount
            return self._value

    def get(self) -> int | float:
        with self._lock:
            return self._value


@dataclass(frozen=True)
class HistogramSnapshot:
    buckets: tuple[tuple[float, int], ...]
    count: int
    sum: float


class Histogram:
    """Fixed-bucket histogram with cumulative bucket counts."""

    TYPE: ClassVar[str] = 'histogram'

    def __init__(self, buckets: Sequence[float] = DEFAULT_BUCKETS) -> None:
        self._upper_bounds = self._validate_buckets(buckets)
        self._bucket_counts = [0] * len(self._upper_bounds)
        self._count = 0
        self._sum = 0.0
        self._lock = threading.Lock()

    @staticmethod
    def _validate_buckets(buckets: Sequence[float]) -> tuple[float, ...]:
        bounds = []
        for bucket in buckets:
            bound = NumberUtils.to_float(bucket)
            if bound is None:
                msg = f'invalid histogram bucket bound: {bucket!r}'
                raise InvalidBuckets(msg)
            bounds.append(bound)

        if not bounds:
            msg = 'histogram requires at least one bucket'
            raise InvalidBuckets(msg)

        if any(lower >= upper for lower, upper in zip(bounds, bounds[1:])):
            msg = f'histogram buckets must be strictly increasing: {bounds}'
            raise InvalidBuckets(msg)

        if bounds[-1] != INF:
            bounds.append(INF)

        return tuple(bounds)

    @property
    def upper_bounds(self) -> tuple[float, ...]:
        return self._upper_bounds

    def observe(self, value: float) -> None:
        if math.isnan(value):
            return

        with self._lock:
            for index, bound in enumerate(self._upper_bounds):
                if value <= bound:
                    self._bucket_counts[index] += 1
            self._count += 1
            self._sum += value

    def snapshot(self) -> HistogramSnapshot:
        with self._lock:
            return HistogramSnapshot(
                buckets=tuple(zip(self._upper_bounds, self._bucket_counts)),
                count=self._count,
                sum=self._sum,
            )

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def sum(self) -> float:
        with self._lock:
            return self._sum


Metric = Counter | Histogram
