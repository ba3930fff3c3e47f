from .metrics import NAME_COUNTER_HELP, NAME_COUNTER_NAME, NameCounter, NameLabel
from .schemas import Person

__all__ = [
    'NAME_COUNTER_HELP',
    'NAME_COUNTER_NAME',
    'NameCounter',
    'NameLabel',
    'Person',
]
