"""
Named products of distributions.

A space whose variables are all discrete is finite: it can be counted,
indexed and enumerated. Any continuous variable makes the space infinite, in
which case only random sampling is available.
"""
import abc
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from crossval.distributions import AbstractDistribution, DiscreteDistribution
from crossval.utils.exceptions import ValidationError, BoundsError
from crossval.utils.random_state import RandomLike, resolve_rng


class AbstractSpace(abc.ABC):
    """Base class for parameter spaces."""

    def __init__(self, variables: Dict[str, AbstractDistribution]):
        for name, dist in variables.items():
            if not isinstance(dist, AbstractDistribution):
                raise ValidationError(f"variable '{name}' is not a distribution: {dist!r}")
        self.variables = dict(variables)

    @property
    def names(self) -> List[str]:
        return list(self.variables.keys())

    def _draw(self, rng: np.random.Generator) -> Dict[str, Any]:
        return {name: dist.sample(rng) for name, dist in self.variables.items()}

    def sample(self, rng: RandomLike = None, n: Optional[int] = None):
        """
        Draw one combination, or ``n`` independent combinations (with replacement).

        Each variable is sampled independently from its distribution.
        """
        rng = resolve_rng(rng)
        if n is None:
            return self._draw(rng)
        return [self._draw(rng) for _ in range(n)]

    def _steps(self, step: Union[Any, Sequence[Any], Mapping]) -> Dict[str, Any]:
        if isinstance(step, Mapping):
            return {name: step[name] for name in self.variables}
        if isinstance(step, (list, tuple, np.ndarray)):
            if len(step) != len(self.variables):
                raise ValidationError(
                    f"expected {len(self.variables)} step sizes, got {len(step)}"
                )
            return dict(zip(self.variables, step))
        return {name: step for name in self.variables}

    def neighbors(self, rng: RandomLike, at: Mapping, step: Any, n: Optional[int] = None,
                  check_bounds: bool = True):
        """
        Perturb every variable of ``at`` independently by its distribution's
        neighbour operator.

        Args:
            rng: Seed or numpy Generator.
            at: Current combination (name -> value).
            step: Scalar, sequence in name order, or mapping keyed by name.
            n: Number of neighbours; None returns a single combination.
        """
        rng = resolve_rng(rng)
        steps = self._steps(step)

        def draw():
            return {
                name: dist.neighbors(rng, at[name], steps[name], check_bounds=check_bounds)
                for name, dist in self.variables.items()
            }

        if n is None:
            return draw()
        return [draw() for _ in range(n)]

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self.variables.items())
        return f"{self.__class__.__name__}({inner})"


class FiniteSpace(AbstractSpace):
    """
    Cartesian product of discrete distributions.

    Flat index ``i`` decodes through mixed-radix strides with the first
    variable varying fastest; enumeration visits every combination once in
    that order.
    """

    @property
    def shape(self):
        if not self.variables:
            return (0,)
        return tuple(len(d) for d in self.variables.values())

    def __len__(self) -> int:
        if not self.variables:
            return 0
        return int(np.prod(self.shape))

    def _strides(self) -> List[int]:
        strides, acc = [], 1
        for size in self.shape:
            strides.append(acc)
            acc *= size
        return strides

    def __getitem__(self, i: Union[int, Sequence[int]]):
        if isinstance(i, (list, tuple, np.ndarray)):
            return [self[j] for j in i]
        size = len(self)
        if not 0 <= i < size:
            raise BoundsError(f"index {i} outside space of {size} combinations")
        return {
            name: dist[(i // stride) % len(dist)]
            for (name, dist), stride in zip(self.variables.items(), self._strides())
        }

    def at(self, *indices: int) -> Dict[str, Any]:
        """Combination addressed by one index per variable."""
        if len(indices) != len(self.variables) or not all(
            0 <= j < s for j, s in zip(indices, self.shape)
        ):
            raise BoundsError(f"indices {indices} outside space of shape {self.shape}")
        return {name: dist[j] for (name, dist), j in zip(self.variables.items(), indices)}

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]


class InfiniteSpace(AbstractSpace):
    """Product containing at least one continuous distribution; sampling only."""
    pass


def space(**variables: AbstractDistribution) -> AbstractSpace:
    """
    Build a parameter space from named distributions.

    Example:
        sp = space(a=DiscreteUniform([1, 2]), b=Uniform(0.0, 1.0))
    """
    if all(isinstance(d, DiscreteDistribution) for d in variables.values()):
        return FiniteSpace(variables)
    return InfiniteSpace(variables)
