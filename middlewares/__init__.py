"""Built-in middlewares for action channels."""

from .metrics import MetricsMiddleware
from .error_handling_middleware import ErrorHandlingMiddleware

__all__ = [
    'MetricsMiddleware',
    'ErrorHandlingMiddleware',
]
