"""
Custom exception hierarchy for the cross-validation and search library.
"""

class CrossValidationException(Exception):
    """Base exception for all library errors."""
    pass

class ValidationError(CrossValidationException):
    """Invalid construction or call parameters."""
    pass

class BoundsError(CrossValidationException):
    """A query point lies outside a distribution's domain."""
    pass

class ConfigurationError(CrossValidationException):
    """Configuration validation failed."""
    pass

class ModelTrainingError(CrossValidationException):
    """Model training failed."""
    pass
