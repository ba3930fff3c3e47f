import threading
from collections.abc import Iterator
from dataclasses import dataclass

from app.core.logging import get_logger
from app.domain.common.utils import StringUtils

from .errors import DuplicateMetricName, InvalidMetricName
from .exposition import EOF_MARKER, encode_metric
from .family import Family
from .primitives import Metric

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegisteredMetric:
    """A metric family (or bare primitive) together with its name and help."""

    name: str
    help: str
    metric: Family | Metric


class MetricRegistry:
    """
    Owns every registered metric for the lifetime of the process and renders
    them in the text exposition format.

    Construct one per application (or per test); nothing here is global.
    """

    def __init__(self) -> None:
        self._metrics: dict[str, RegisteredMetric] = {}
        self._lock = threading.Lock()

    def register(
        self, name: str, help: str, metric: Family | Metric  # noqa: A002
    ) -> None:
        """Register *metric* under *name*; names are unique per registry."""
        if not StringUtils.is_metric_name(name):
            raise InvalidMetricName(name)

        with self._lock:
            if name in self._metrics:
                raise DuplicateMetricName(name)
            self._metrics[name] = RegisteredMetric(
                name=name, help=help, metric=metric
            )

        logger.debug(f'registered metric {name}')

    def get(self, name: str) -> Family | Metric | None:
        with self._lock:
            registered = self._metrics.get(name)
        return registered.metric if registered else None

    def render(self) -> str:
        """
        Render all metrics in registration order.

        The registry lock is held for the whole pass so the set of families is
        stable; samples are read through each metric's own lock and may keep
        moving while other families are encoded. A metric that fails to
        encode is logged and left out.
        """
        lines: list[str] = []

        with self._lock:
            for registered in self._metrics.values():
                try:
                    lines.extend(
                        encode_metric(
                            registered.name, registered.help, registered.metric
                        )
                    )
                except Exception as e:
                    logger.exception(f'failed to encode metric {registered.name}: {e}')

        lines.append(EOF_MARKER)
        return '\n'.join(lines) + '\n'

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._metrics

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._metrics))

    def __len__(self) -> int:
        with self._lock:
            return len(self._metrics)
