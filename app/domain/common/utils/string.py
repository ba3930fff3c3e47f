"""String Utilities Module
Helpers for metric names and label values in the text exposition format.
"""

import re


class StringUtils:
    """Collection of static string utility methods."""

    _METRIC_NAME_RE = re.compile(r'^[a-zA-Z_:][a-zA-Z0-9_:]*$')
    _LABEL_NAME_RE = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

    # ---------- Validation ----------
    @staticmethod
    def is_metric_name(text: str) -> bool:
        return bool(StringUtils._METRIC_NAME_RE.match(text))

    @staticmethod
    def is_label_name(text: str) -> bool:
        return bool(StringUtils._LABEL_NAME_RE.match(text)) and not text.startswith(
            '__'
        )

    # ---------- Escaping ----------
    @staticmethod
    def escape_label_value(text: str) -> str:
        """Escape backslash, double quote and newline in a label value."""
        return (
            text.replace('\\', r'\\').replace('\n', r'\n').replace('"', r'\"')
        )

    @staticmethod
    def escape_help(text: str) -> str:
        """Escape backslash and newline in a ``# HELP`` docstring."""
        return text.replace('\\', r'\\').replace('\n', r'\n')

    # ---------- Formatting ----------
    @staticmethod
    def as_sentence(text: str) -> str:
        """Terminate *text* with a single period."""
        text = text.strip()
        return text if text.endswith('.') else f'{text}.'
