from .number import NumberUtils
from .string import StringUtils

__all__ = [
    'NumberUtils',
    'StringUtils',
]
