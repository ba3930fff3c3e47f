from .api import APIConfiguration
from .log import LogConfiguration
from .metrics import MetricsConfiguration

__all__ = [
    'APIConfiguration',
    'LogConfiguration',
    'MetricsConfiguration',
]
