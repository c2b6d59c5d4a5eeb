"""
Model Factory
=============

Responsibility:
- Wrap scikit-learn estimators in the fit/loss training contract.
- Instantiate registered estimators by name, filtering unsupported parameters.
- Provide ``model_type`` constructors for the search functions.
"""

from .model_factory import EstimatorModel, ModelFactory

__all__ = ['EstimatorModel', 'ModelFactory']
