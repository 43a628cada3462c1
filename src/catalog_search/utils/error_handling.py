"""Error handling utilities."""
import logging
from functools import wraps
from typing import Callable, Any

logger = logging.getLogger(__name__)


def provider_boundary(fallback: Callable[[], Any], provider: str = "provider") -> Callable:
    """Decorator that keeps a provider failure from escaping its client.

    Any exception raised by the wrapped call is logged and replaced by a
    fresh value from ``fallback`` (an empty result or not-found).
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{provider} error in {func.__name__}: {str(e)}")
                return fallback()
        return wrapper
    return decorator
