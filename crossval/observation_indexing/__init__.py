"""
Observation Indexing
====================

Responsibility:
- Count the observations of a dataset (single array-like or collection).
- Slice a dataset by observation index without aliasing the caller's data.
"""

from .observation_indexing import nobs, getobs

__all__ = ['nobs', 'getobs']
