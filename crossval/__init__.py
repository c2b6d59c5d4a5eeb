"""
crossval
========

Resampling, parameter spaces and budgeted hyperparameter search for any
model that follows the fit / loss contract.
"""

from crossval.observation_indexing import nobs, getobs
from crossval.resampling_engine import (
    AbstractResampler,
    MonadicResampler,
    VariadicResampler,
    FixedSplit,
    RandomSplit,
    LeaveOneOut,
    KFold,
    ForwardChaining,
    SlidingWindow,
)
from crossval.distributions import (
    AbstractDistribution,
    DiscreteDistribution,
    ContinuousDistribution,
    Discrete,
    DiscreteUniform,
    Uniform,
    LogUniform,
    Normal,
)
from crossval.parameter_space import AbstractSpace, FiniteSpace, InfiniteSpace, space
from crossval.budget_allocation import Budget, AllocationMode, allocate
from crossval.evaluation_engine import SearchTrace, loss_summary
from crossval.search_engine import (
    ParallelMap,
    validate,
    brute,
    brutefit,
    hc,
    hcfit,
    sha,
    shafit,
    hyperband,
    hyperbandfit,
    sasha,
    sashafit,
)
from crossval.model_factory import EstimatorModel, ModelFactory
from crossval.config_manager import ConfigurationManager
from crossval.logging_config import LoggingConfigurator
from crossval.utils.exceptions import (
    CrossValidationException,
    ValidationError,
    BoundsError,
    ConfigurationError,
    ModelTrainingError,
)

__version__ = "0.1.0"

__all__ = [
    'nobs', 'getobs',
    'AbstractResampler', 'MonadicResampler', 'VariadicResampler',
    'FixedSplit', 'RandomSplit', 'LeaveOneOut', 'KFold', 'ForwardChaining', 'SlidingWindow',
    'AbstractDistribution', 'DiscreteDistribution', 'ContinuousDistribution',
    'Discrete', 'DiscreteUniform', 'Uniform', 'LogUniform', 'Normal',
    'AbstractSpace', 'FiniteSpace', 'InfiniteSpace', 'space',
    'Budget', 'AllocationMode', 'allocate',
    'SearchTrace', 'loss_summary',
    'ParallelMap', 'validate', 'brute', 'brutefit', 'hc', 'hcfit', 'sha', 'shafit',
    'hyperband', 'hyperbandfit', 'sasha', 'sashafit',
    'EstimatorModel', 'ModelFactory',
    'ConfigurationManager', 'LoggingConfigurator',
    'CrossValidationException', 'ValidationError', 'BoundsError',
    'ConfigurationError', 'ModelTrainingError',
]
