"""
Distributions
=============

Responsibility:
- Discrete (weighted or uniform over values) and continuous (uniform,
  log-uniform, normal) sampling primitives.
- Domain bounds and the ``neighbors`` perturbation operator used by local search.
"""

from .distributions import (
    AbstractDistribution,
    DiscreteDistribution,
    ContinuousDistribution,
    Discrete,
    DiscreteUniform,
    Uniform,
    LogUniform,
    Normal,
)

__all__ = [
    'AbstractDistribution',
    'DiscreteDistribution',
    'ContinuousDistribution',
    'Discrete',
    'DiscreteUniform',
    'Uniform',
    'LogUniform',
    'Normal',
]
