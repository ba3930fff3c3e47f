from .metrics import create_metrics_router
from .router import router as api_router

__all__ = ['api_router', 'create_metrics_router']
