"""
Resampling Engine
=================

Responsibility:
- Split an indexed dataset into (train, test) pairs.
- Holdout (fixed and random), leave-one-out and k-fold policies.
- Forward-chaining and sliding-window time-series policies.
- Reproducible multi-pass iteration (permutations fixed at construction).
"""

from .resamplers import (
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

__all__ = [
    'AbstractResampler',
    'MonadicResampler',
    'VariadicResampler',
    'FixedSplit',
    'RandomSplit',
    'LeaveOneOut',
    'KFold',
    'ForwardChaining',
    'SlidingWindow',
]
