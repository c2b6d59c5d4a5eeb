import functools
import logging
from crossval.utils.exceptions import CrossValidationException

def handle_search_errors(operation_name: str):
    """Decorator for consistent error reporting in search entry points.

    Errors raised by user fit/loss code are logged once and propagate unchanged.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except CrossValidationException:
                raise
            except Exception as e:
                logger = logging.getLogger(func.__module__)
                logger.error(f"{operation_name} failed: {e}", exc_info=True)
                raise
        return wrapper
    return decorator
