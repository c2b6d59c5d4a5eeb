"""
Random generator resolution.

Every randomised operation accepts an ``rng`` argument that is resolved here,
at the call boundary, so algorithms never read hidden global random state.
"""

from typing import Optional, Union

import numpy as np

RandomLike = Optional[Union[int, np.random.Generator]]


def resolve_rng(rng: RandomLike = None) -> np.random.Generator:
    """
    Return a numpy Generator for ``rng``.

    None yields a fresh unseeded generator, an int seeds a new generator and a
    Generator is passed through so that callers can share one stream.
    """
    if rng is None:
        return np.random.default_rng()
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return np.random.default_rng(int(rng))
    raise TypeError(f"Cannot build a random generator from {type(rng).__name__}")
