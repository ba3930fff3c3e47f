"""
Label sets identifying one series within a metric family.

A label set is declared as a frozen dataclass::

    @dataclass(frozen=True)
    class NameLabel(LabelSet):
        name: str

and encoded into an ordered, hashable ``LabelTuple`` of ``(key, value)``
string pairs, which is what families use as their map key.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any, TypeAlias

from app.domain.common.utils import StringUtils

from .errors import MetricsError

LabelTuple: TypeAlias = tuple[tuple[str, str], ...]

EMPTY_LABELS: LabelTuple = ()


@dataclass(frozen=True)
class LabelSet:
    """Base class for label-set dataclasses; field order is label order."""

    def encode(self) -> LabelTuple:
        return tuple(
            (f.name, _label_value(getattr(self, f.name))) for f in fields(self)
        )


def _label_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def to_label_tuple(
    labels: LabelSet | Mapping[str, Any] | Iterable[tuple[str, Any]] | None,
) -> LabelTuple:
    """Normalize any supported label representation into a ``LabelTuple``."""
    if labels is None:
        return EMPTY_LABELS

    if isinstance(labels, LabelSet):
        encoded = labels.encode()
    elif isinstance(labels, Mapping):
        encoded = tuple((str(k), _label_value(v)) for k, v in labels.items())
    else:
        encoded = tuple((str(k), _label_value(v)) for k, v in labels)

    for key, _ in encoded:
        if not StringUtils.is_label_name(key):
            msg = f'invalid label name: {key!r}'
            raise MetricsError(msg)

    return encoded


def label_names(labels: LabelTuple) -> tuple[str, ...]:
    return tuple(key for key, _ in labels)
