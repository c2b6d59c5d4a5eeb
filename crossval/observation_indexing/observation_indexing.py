"""
Observation counting and slicing for dataset-like values.

A dataset is either a single array-like (numpy array, pandas object, range or
any sequence) or a fixed collection of array-likes (tuple, namedtuple or dict)
whose members share one observation count. Observations run along the leading
axis.
"""
from collections.abc import Mapping
from typing import Any, Sequence

import numpy as np
import pandas as pd

from crossval.utils.exceptions import ValidationError


def _is_collection(x: Any) -> bool:
    return isinstance(x, (tuple, Mapping))


def _members(x: Any):
    return list(x.values()) if isinstance(x, Mapping) else list(x)


def nobs(x: Any) -> int:
    """
    Number of observations held by ``x``.

    Raises:
        ValidationError: If the members of a collection disagree on their count.
    """
    if _is_collection(x):
        members = _members(x)
        if not members:
            return 0
        n = nobs(members[0])
        if any(nobs(m) != n for m in members[1:]):
            raise ValidationError("all data should have the same number of observations")
        return n
    if isinstance(x, (np.ndarray, pd.DataFrame, pd.Series)):
        return int(x.shape[0]) if x.ndim > 0 else 1
    return len(x)


def getobs(x: Any, indices: Sequence[int]) -> Any:
    """
    Slice ``x`` at ``indices`` along the observation axis.

    Collections keep their shape (tuple, namedtuple or dict) with every member
    sliced. Ranges and generic sequences are materialised into lists so that
    slices never alias the caller's data.
    """
    if isinstance(indices, range):
        indices = list(indices)
    idx = np.asarray(indices, dtype=np.intp)

    if isinstance(x, Mapping):
        return type(x)((k, getobs(v, idx)) for k, v in x.items())
    if isinstance(x, tuple):
        sliced = [getobs(m, idx) for m in x]
        if hasattr(x, '_fields'):
            return type(x)(*sliced)
        return tuple(sliced)
    if isinstance(x, (pd.DataFrame, pd.Series)):
        return x.iloc[idx]
    if isinstance(x, np.ndarray):
        return x[idx]
    return [x[i] for i in idx.tolist()]
