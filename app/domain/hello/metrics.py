from dataclasses import dataclass

from app.infrastructure.observability import Counter, Family, LabelSet

NAME_COUNTER_NAME = 'name_counter'
NAME_COUNTER_HELP = 'Count of names'


@dataclass(frozen=True)
class NameLabel(LabelSet):
    name: str


class NameCounter(Family[Counter]):
    """Greetings per (possibly upper-cased) name."""

    def __init__(self) -> None:
        super().__init__(Counter)
