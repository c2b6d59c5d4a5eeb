"""
Utility package: exception hierarchy, error-handling decorator, random
generator resolution and shared constants.
"""

from .exceptions import (
    CrossValidationException,
    ValidationError,
    BoundsError,
    ConfigurationError,
    ModelTrainingError,
)
from .error_handling import handle_search_errors
from .random_state import resolve_rng

__all__ = [
    'CrossValidationException',
    'ValidationError',
    'BoundsError',
    'ConfigurationError',
    'ModelTrainingError',
    'handle_search_errors',
    'resolve_rng',
]
