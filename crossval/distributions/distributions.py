"""
Sampling distributions for hyperparameter search spaces.

Discrete distributions own an ordered list of values and are addressed by
0-based index; continuous distributions own two bounds (or a mean and a
standard deviation). Every distribution can draw samples, report its bounds
and perturb a point through ``neighbors`` for local search.
"""
import abc
import math
from typing import Any, List, Optional, Sequence

import numpy as np

from crossval.utils.exceptions import ValidationError, BoundsError
from crossval.utils.random_state import RandomLike, resolve_rng
from crossval.utils import constants


class AbstractDistribution(abc.ABC):
    """Base class for all distributions."""

    @abc.abstractmethod
    def _draw(self, rng: np.random.Generator) -> Any:
        """Draw one value from the distribution."""
        raise NotImplementedError("Subclasses must implement _draw.")

    @abc.abstractmethod
    def _neighbor(self, rng: np.random.Generator, at: Any, step: Any, check_bounds: bool) -> Any:
        raise NotImplementedError("Subclasses must implement _neighbor.")

    @property
    @abc.abstractmethod
    def lowerbound(self) -> Any:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def upperbound(self) -> Any:
        raise NotImplementedError

    def sample(self, rng: RandomLike = None, n: Optional[int] = None):
        """
        Draw one value, or a list of ``n`` independent values.

        Args:
            rng: Seed or numpy Generator.
            n: Number of draws; None returns a single value.
        """
        rng = resolve_rng(rng)
        if n is None:
            return self._draw(rng)
        return [self._draw(rng) for _ in range(n)]

    def neighbors(self, rng: RandomLike, at: Any, step: Any, n: Optional[int] = None,
                  check_bounds: bool = True):
        """
        Random points within ``step`` of ``at``, clamped to the bounds.

        Raises:
            BoundsError: If ``at`` lies outside the domain (unless check_bounds is False).
        """
        rng = resolve_rng(rng)
        if n is None:
            return self._neighbor(rng, at, step, check_bounds)
        return [self._neighbor(rng, at, step, check_bounds) for _ in range(n)]


class DiscreteDistribution(AbstractDistribution):
    """A distribution over an ordered, finite list of values."""

    def __init__(self, values: Sequence[Any]):
        self.values = list(values)
        if not self.values:
            raise ValidationError("discrete distribution needs at least one value")

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i):
        return self.values[i]

    def __iter__(self):
        return iter(self.values)

    @property
    def lowerbound(self) -> int:
        return 0

    @property
    def upperbound(self) -> int:
        return len(self.values) - 1

    def index(self, value: Any) -> int:
        """Position of the first occurrence of ``value``."""
        for i, v in enumerate(self.values):
            if v == value:
                return i
        raise BoundsError(f"{value!r} is not a value of {self!r}")

    def neighbor_index(self, rng: RandomLike, index: int, step: int, check_bounds: bool = True) -> int:
        """Uniform random index within ``step`` of ``index``, clamped to the bounds."""
        if check_bounds and not self.lowerbound <= index <= self.upperbound:
            raise BoundsError(f"index {index} outside [{self.lowerbound}, {self.upperbound}]")
        step = abs(int(step))
        a = max(self.lowerbound, index - step)
        b = min(index + step, self.upperbound)
        return int(resolve_rng(rng).integers(a, b + 1))

    def _neighbor(self, rng, at, step, check_bounds):
        return self.values[self.neighbor_index(rng, self.index(at), step, check_bounds=False)]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.values!r})"


class Discrete(DiscreteDistribution):
    """Explicit values with a probability mass for each."""

    def __init__(self, values: Sequence[Any], probs: Sequence[float]):
        super().__init__(values)
        if len(self.values) != len(probs):
            raise ValidationError(
                f"lengths of values ({len(self.values)}) and probabilities ({len(probs)}) do not match"
            )
        self.probs = np.asarray(probs, dtype=float)
        if np.any(self.probs < 0) or not math.isclose(
            float(self.probs.sum()), 1.0, abs_tol=constants.PROBABILITY_TOLERANCE
        ):
            raise ValidationError(f"invalid probabilities provided: {list(probs)}")

    def _draw(self, rng):
        q = rng.random()
        c = 0.0
        for value, p in zip(self.values, self.probs):
            c += p
            if q < c:
                return value
        return self.values[-1]


class DiscreteUniform(DiscreteDistribution):
    """Uniform choice over explicit values."""

    def _draw(self, rng):
        return self.values[int(rng.integers(len(self.values)))]


class ContinuousDistribution(AbstractDistribution):
    """A distribution over a real interval, drawn at ``dtype`` precision."""

    def __init__(self, dtype=float):
        self.dtype = dtype

    def _neighbor(self, rng, at, step, check_bounds):
        if check_bounds and not self.lowerbound <= at <= self.upperbound:
            raise BoundsError(f"{at!r} outside [{self.lowerbound}, {self.upperbound}]")
        a = max(self.lowerbound, at - abs(step))
        b = min(at + abs(step), self.upperbound)
        return self.dtype((b - a) * rng.random() + a)


class Uniform(ContinuousDistribution):

    def __init__(self, a: float, b: float, dtype=float):
        super().__init__(dtype)
        if not a < b:
            raise ValidationError(f"a must be smaller than b, got a={a}, b={b}")
        self.a = float(a)
        self.b = float(b)

    @property
    def lowerbound(self) -> float:
        return self.a

    @property
    def upperbound(self) -> float:
        return self.b

    def _draw(self, rng):
        return self.dtype(self.a + (self.b - self.a) * rng.random())

    def __repr__(self) -> str:
        return f"Uniform({self.a}, {self.b})"


class LogUniform(ContinuousDistribution):
    """Uniform in log space between two positive bounds."""

    def __init__(self, a: float, b: float, dtype=float):
        super().__init__(dtype)
        if not a < b:
            raise ValidationError(f"a must be smaller than b, got a={a}, b={b}")
        if a <= 0:
            raise ValidationError(f"log-uniform bounds must be positive, got a={a}")
        self.a = float(a)
        self.b = float(b)

    @property
    def lowerbound(self) -> float:
        return self.a

    @property
    def upperbound(self) -> float:
        return self.b

    def _draw(self, rng):
        lo, hi = math.log(self.a), math.log(self.b)
        return self.dtype(math.exp(lo + (hi - lo) * rng.random()))

    def __repr__(self) -> str:
        return f"LogUniform({self.a}, {self.b})"


class Normal(ContinuousDistribution):
    """
    Gaussian distribution. Unbounded: its bounds are -inf and +inf, so
    neighbours are drawn uniformly in ``[at - step, at + step]``.
    """

    def __init__(self, mean: float, std: float, dtype=float):
        super().__init__(dtype)
        if not std > 0:
            raise ValidationError(f"standard deviation must be larger than zero, got {std}")
        self.mean = float(mean)
        self.std = float(std)

    @property
    def lowerbound(self) -> float:
        return -math.inf

    @property
    def upperbound(self) -> float:
        return math.inf

    def _draw(self, rng):
        return self.dtype(self.mean + self.std * rng.standard_normal())

    def __repr__(self) -> str:
        return f"Normal({self.mean}, {self.std})"
