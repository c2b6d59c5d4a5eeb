"""
Parameter Space
===============

Responsibility:
- Named products of distributions.
- Finite spaces: counting, stride-ordered indexing and enumeration.
- Random sampling and neighbour perturbation for every space.
"""

from .parameter_space import AbstractSpace, FiniteSpace, InfiniteSpace, space

__all__ = ['AbstractSpace', 'FiniteSpace', 'InfiniteSpace', 'space']
