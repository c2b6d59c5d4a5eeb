"""
Budget allocation schedules for halving-style searches.

Given a total budget, an arm count and a discard rate, ``allocate`` plans the
rounds of a successive-halving run: how many arms survive each round and how
much of the budget every arm receives in it.
"""
import enum
import math
import numbers
from typing import Any, Dict, List, Optional, Tuple

from crossval.utils.exceptions import ValidationError
from crossval.utils import constants


class Budget:
    """
    A named quantity of training effort.

    The single keyword names the fit argument the allocated amount is passed
    as, e.g. ``Budget(epochs=81)``.
    """

    def __init__(self, **kwargs):
        if len(kwargs) != 1:
            raise ValidationError(f"budget takes exactly one named value, got {sorted(kwargs)}")
        (self.name, self.value), = kwargs.items()
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Real):
            raise ValidationError(f"budget value must be a real number, got {self.value!r}")
        if self.value <= 0:
            raise ValidationError(f"budget value must be positive, got {self.value}")

    def __repr__(self) -> str:
        return f"Budget({self.name}={self.value!r})"


class AllocationMode(enum.Enum):
    GEOMETRIC = constants.GEOMETRIC
    CONSTANT = constants.CONSTANT
    HYPERBAND = constants.HYPERBAND


def floor_log(x: float, base: float) -> int:
    """Largest integer ``k`` with ``base ** k <= x``, robust to float error."""
    return int(math.floor(math.log(x) / math.log(base) + constants.LOG_TOLERANCE))


def halving_rounds(narms: int, rate: float) -> int:
    """Rounds needed until ``ceil(narms / rate ** i)`` reaches a single arm."""
    if narms <= 1:
        return 1
    return max(1, int(math.ceil(math.log(narms) / math.log(rate) - constants.LOG_TOLERANCE)))


def _cast(template: Any, x: float, rounding) -> Any:
    if isinstance(template, numbers.Integral):
        return int(rounding(x))
    return float(x)


def _geometric(budget: Budget, nrounds: int, narms: int, rate: float):
    plan = []
    for i in range(1, nrounds + 1):
        share = budget.value / (math.ceil(narms / rate ** (i - 1)) * nrounds)
        amount = _cast(budget.value, share, math.floor)
        plan.append((math.ceil(narms / rate ** i), {budget.name: amount}))
    return plan


def _constant(budget: Budget, nrounds: int, narms: int, rate: float):
    share = budget.value * (rate - 1) * rate ** (nrounds - 1) / (narms * (rate ** nrounds - 1))
    amount = _cast(budget.value, share, math.floor)
    return [(math.ceil(narms / rate ** i), {budget.name: amount}) for i in range(1, nrounds + 1)]


def _hyperband(budget: Budget, nrounds: int, narms: int, rate: float):
    # Round to nearest, unlike the other schedules.
    plan = []
    for i in range(1, nrounds + 1):
        amount = _cast(budget.value, budget.value / rate ** (nrounds - i), round)
        plan.append((max(math.floor(narms / rate ** i), 1), {budget.name: amount}))
    return plan


_SCHEDULES = {
    AllocationMode.GEOMETRIC: _geometric,
    AllocationMode.CONSTANT: _constant,
    AllocationMode.HYPERBAND: _hyperband,
}


def allocate(budget: Budget, mode: AllocationMode, narms: int, rate: float,
             nrounds: Optional[int] = None) -> List[Tuple[int, Dict[str, Any]]]:
    """
    Plan a successive-halving run.

    Args:
        budget: Total budget to divide.
        mode: Allocation schedule.
        narms: Number of arms entering the first round.
        rate: Discard rate (> 1).
        nrounds: Number of rounds; derived from ``narms`` and ``rate`` when omitted.

    Returns:
        One ``(survivors, {budget.name: per_arm_amount})`` pair per round.
    """
    mode = AllocationMode(mode)
    if narms < 1:
        raise ValidationError(f"cannot allocate budget to {narms} arms")
    if not rate > 1:
        raise ValidationError(f"unable to discard arms with rate {rate}")
    if nrounds is None:
        nrounds = halving_rounds(narms, rate)
    elif nrounds < 1:
        raise ValidationError(f"invalid number of rounds {nrounds}")
    return _SCHEDULES[mode](budget, nrounds, narms, rate)
