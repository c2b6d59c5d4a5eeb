"""
Resamplers for the cross-validation library.

Each resampler wraps a dataset and yields (train, test) pairs according to a
splitting policy. Parameters are validated once at construction; randomised
policies draw their permutation once at construction so that every traversal
of the same instance reproduces the same pairs.
"""
import abc
import math
from typing import Any, Iterator, List, Tuple, Union

import numpy as np

from crossval.observation_indexing import nobs, getobs
from crossval.utils.exceptions import ValidationError
from crossval.utils.random_state import RandomLike, resolve_rng
from crossval.utils import constants


def _split_size(data: Any, m: Union[int, float]) -> int:
    """Resolve a train size given as a count or as a ratio of the observations."""
    if isinstance(m, (float, np.floating)):
        return int(math.floor(nobs(data) * m))
    return int(m)


class AbstractResampler(abc.ABC):
    """
    Base class for all resamplers.

    Subclasses implement ``__len__`` and ``_pair``; iteration state lives in
    the generator returned by ``__iter__``, never on the resampler.
    """

    def __init__(self, data: Any):
        self.data = data
        self.n = nobs(data)

    @abc.abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError("Subclasses must implement __len__.")

    @abc.abstractmethod
    def _pair(self, i: int) -> Tuple[List[int], List[int]]:
        """Train and test observation indices of pair ``i`` (0-based)."""
        raise NotImplementedError("Subclasses must implement _pair.")

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        for i in range(len(self)):
            train, test = self._pair(i)
            yield getobs(self.data, train), getobs(self.data, test)

    def indices(self) -> List[Tuple[List[int], List[int]]]:
        """All (train, test) index pairs, without slicing the data."""
        return [self._pair(i) for i in range(len(self))]

    def first(self) -> Tuple[Any, Any]:
        return next(iter(self))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nobs={self.n}, pairs={len(self)})"


class MonadicResampler(AbstractResampler):
    """A resampler producing exactly one (train, test) pair."""

    def __len__(self) -> int:
        return 1


class VariadicResampler(AbstractResampler):
    """A resampler producing several (train, test) pairs."""
    pass


class FixedSplit(MonadicResampler):
    """Train on the first ``m`` observations, test on the rest."""

    def __init__(self, data: Any, m: Union[int, float] = constants.DEFAULT_SPLIT_RATIO):
        super().__init__(data)
        self.m = _split_size(data, m)
        if not 1 <= self.m < self.n:
            raise ValidationError(f"data cannot be split by {self.m}")

    def _pair(self, i):
        return list(range(self.m)), list(range(self.m, self.n))


class RandomSplit(MonadicResampler):
    """Like FixedSplit, applied through one random permutation of the observations."""

    def __init__(self, data: Any, m: Union[int, float] = constants.DEFAULT_SPLIT_RATIO,
                 rng: RandomLike = None):
        super().__init__(data)
        self.m = _split_size(data, m)
        if not 1 <= self.m < self.n:
            raise ValidationError(f"data cannot be split by {self.m}")
        self.perm = resolve_rng(rng).permutation(self.n)

    def _pair(self, i):
        return self.perm[:self.m].tolist(), self.perm[self.m:].tolist()


class LeaveOneOut(VariadicResampler):
    """Hold out every observation once."""

    def __init__(self, data: Any):
        super().__init__(data)
        if self.n <= 1:
            raise ValidationError(f"data has too few observations ({self.n}) to split")

    def __len__(self) -> int:
        return self.n

    def _pair(self, i):
        return list(range(i)) + list(range(i + 1, self.n)), [i]


class KFold(VariadicResampler):
    """
    Partition a random permutation into ``k`` contiguous folds.

    Folds have ``n // k`` observations; the first ``n % k`` folds get one extra.
    """

    def __init__(self, data: Any, k: int = constants.DEFAULT_KFOLD_K, rng: RandomLike = None):
        super().__init__(data)
        if not 1 < k <= self.n:
            raise ValidationError(f"data cannot be partitioned into {k} folds")
        self.k = k
        self.perm = resolve_rng(rng).permutation(self.n)

    def __len__(self) -> int:
        return self.k

    def _pair(self, i):
        extra, width = self.n % self.k, self.n // self.k
        start = i * width + min(extra, i)
        stop = (i + 1) * width + min(extra, i + 1)
        train = np.concatenate([self.perm[:start], self.perm[stop:]])
        return train.tolist(), self.perm[start:stop].tolist()


def _round_count(span: int, out: int, partial: bool) -> int:
    return -(-span // out) if partial else span // out


class ForwardChaining(VariadicResampler):
    """
    Expanding-window time-series split.

    Round ``i`` trains on the first ``init + i * out`` observations and tests on
    the next ``out`` ones; the last round is clipped (``partial=True``) or
    dropped (``partial=False``) when fewer than ``out`` observations remain.
    """

    def __init__(self, data: Any, init: int, out: int, partial: bool = True):
        super().__init__(data)
        if not 1 <= init <= self.n:
            raise ValidationError(f"invalid initial window of {init}")
        if not 1 <= out <= self.n:
            raise ValidationError(f"invalid out-of-sample window of {out}")
        if init + out > self.n:
            raise ValidationError(
                f"initial ({init}) and out-of-sample ({out}) window exceed number of data observations ({self.n})"
            )
        self.init = init
        self.out = out
        self.partial = partial

    def __len__(self) -> int:
        return _round_count(self.n - self.init, self.out, self.partial)

    def _pair(self, i):
        stop = self.init + i * self.out
        return list(range(stop)), list(range(stop, min(stop + self.out, self.n)))


class SlidingWindow(VariadicResampler):
    """
    Fixed-width rolling time-series split.

    Round ``i`` trains on ``window`` observations starting at ``i * out`` and
    tests on the next ``out`` ones, with the same tail policy as ForwardChaining.
    """

    def __init__(self, data: Any, window: int, out: int, partial: bool = True):
        super().__init__(data)
        if not 1 <= window <= self.n:
            raise ValidationError(f"invalid sliding window of {window}")
        if not 1 <= out <= self.n:
            raise ValidationError(f"invalid out-of-sample window of {out}")
        if window + out > self.n:
            raise ValidationError(
                f"sliding ({window}) and out-of-sample ({out}) window exceed number of data observations ({self.n})"
            )
        self.window = window
        self.out = out
        self.partial = partial

    def __len__(self) -> int:
        return _round_count(self.n - self.window, self.out, self.partial)

    def _pair(self, i):
        start = i * self.out
        stop = start + self.window
        return list(range(start, stop)), list(range(stop, min(stop + self.out, self.n)))
