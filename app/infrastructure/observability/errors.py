class MetricsError(ValueError):
    """Base error for the in-process metrics core."""


class DuplicateMetricName(MetricsError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'metric already registered: {name}')


class InvalidMetricName(MetricsError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'invalid metric name: {name!r}')


class NegativeIncrement(MetricsError):
    def __init__(self, amount: float) -> None:
        self.amount = amount
        msg = f'counter increment must be a non-negative number: {amount}'
        super().__init__(msg)


class InvalidBuckets(MetricsError):
    pass


class LabelSetMismatch(MetricsError):
    def __init__(self, expected: tuple[str, ...], actual: tuple[str, ...]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'label names {list(actual)} do not match family labels {list(expected)}'
        )
