"""Numeric Utilities Module"""

import math
from typing import Any

from prometheus_client.utils import floatToGoString


class NumberUtils:
    @staticmethod
    def to_float(value: Any, default: float | None = None) -> float | None:
        try:
            result = float(value)
        except (TypeError, ValueError):
            return default
        return default if math.isnan(result) else result

    @staticmethod
    def format_value(value: float) -> str:
        """Render a sample value: integers as-is, floats the way Go prints them."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return floatToGoString(value)

    @staticmethod
    def format_bound(bound: float) -> str:
        """Render a bucket bound, e.g. ``1.0``, ``0.005`` or ``+Inf``."""
        return floatToGoString(float(bound))
