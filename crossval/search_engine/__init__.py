"""
Search Engine
=============

Responsibility:
- Validation harness over any resampler.
- Brute-force, hill-climbing, successive-halving, Hyperband and SASHA searches.
- Order-preserving parallel dispatch of fit+loss tasks (joblib).
- Helpers around the model training contract (fit / loss).
"""

from .parallel import ParallelMap
from .training import fit_model, model_loss
from .search import (
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

__all__ = [
    'ParallelMap',
    'fit_model',
    'model_loss',
    'validate',
    'brute',
    'brutefit',
    'hc',
    'hcfit',
    'sha',
    'shafit',
    'hyperband',
    'hyperbandfit',
    'sasha',
    'sashafit',
]
