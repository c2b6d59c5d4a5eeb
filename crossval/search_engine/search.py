"""
Model validation and hyperparameter search.

Every search builds arms from parameter combinations, dispatches fit+loss
tasks through a ``ParallelMap`` and reduces the results by arg-min (or
arg-max with ``maximize=True``) or by survival filtering. The plain variants
return the winning parameter dict; the ``*fit`` variants return the fitted
winning model.
"""
import copy
import logging
import math
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from crossval.budget_allocation import AllocationMode, Budget, allocate, floor_log
from crossval.evaluation_engine import SearchTrace
from crossval.parameter_space import AbstractSpace, FiniteSpace
from crossval.resampling_engine import AbstractResampler, MonadicResampler
from crossval.search_engine.parallel import ParallelMap
from crossval.search_engine.training import apply_and_score, build_arms, fit_and_score
from crossval.utils.error_handling import handle_search_errors
from crossval.utils.exceptions import ValidationError
from crossval.utils.random_state import RandomLike, resolve_rng
from crossval.utils import constants

logger = logging.getLogger(__name__)

Params = Dict[str, Any]
Candidates = Union[Sequence[Params], AbstractSpace]


# --- Helpers ---

def _candidates(parms: Candidates) -> List[Params]:
    if isinstance(parms, FiniteSpace):
        parms = list(parms)
    elif isinstance(parms, AbstractSpace):
        raise ValidationError("an infinite space cannot be enumerated; sample candidates from it instead")
    parms = list(parms)
    if len(parms) < 1:
        raise ValidationError("nothing to optimize")
    return parms


def _first_pair(data: AbstractResampler) -> Tuple[Any, Any]:
    if not isinstance(data, MonadicResampler):
        raise ValidationError(
            f"{type(data).__name__} yields several pairs; this search needs a single-pair resampler"
        )
    return data.first()


def _check_rate(rate: float) -> None:
    if not rate > 1:
        raise ValidationError(f"unable to discard arms with rate {rate}")


def _best_index(losses: np.ndarray, maximize: bool) -> int:
    return int(np.argmax(losses)) if maximize else int(np.argmin(losses))


def _improves(loss: float, best: float, maximize: bool) -> bool:
    return loss > best if maximize else loss < best


def _ranking(losses: np.ndarray, maximize: bool) -> np.ndarray:
    """Stable ordering of arms from best to worst."""
    return np.argsort(-losses if maximize else losses, kind="stable")


def _fit_split(dispatcher: ParallelMap, arms: List[Any], train: Any, test: Any,
               args: Dict[str, Any]) -> Tuple[List[Any], np.ndarray]:
    results = dispatcher(fit_and_score, [(arm, train, test, args) for arm in arms])
    models = [m for m, _ in results]
    losses = np.array([loss for _, loss in results], dtype=float)
    return models, losses


def _val(dispatcher: ParallelMap, model_type: Callable[..., Any], parms: List[Params],
         data: AbstractResampler, args: Dict[str, Any]) -> np.ndarray:
    """Loss of every candidate averaged over all pairs of ``data``."""
    total = np.zeros(len(parms))
    for train, test in data:
        _, losses = _fit_split(dispatcher, build_arms(model_type, parms), train, test, args)
        total += losses
    return total / len(data)


# --- Validation ---

@handle_search_errors("Model validation")
def validate(model: Any, data: AbstractResampler, args: Optional[Dict[str, Any]] = None,
             dispatcher: Optional[ParallelMap] = None) -> List[float]:
    """
    Fit and score on every (train, test) pair of ``data``.

    Args:
        model: A model following the training contract (deep-copied per pair),
            or a function mapping a train slice to a fitted model.
        data: Resampler providing the pairs.
        args: Extra fit-time keyword arguments (model form only).
        dispatcher: Parallel map; defaults to in-process execution.

    Returns:
        The losses in pair order.
    """
    dispatcher = dispatcher or ParallelMap()
    args = dict(args or {})

    logger.debug("Start model validation")
    if hasattr(model, "fit"):
        tasks = [(copy.deepcopy(model), train, test, args) for train, test in data]
        losses = [loss for _, loss in dispatcher(fit_and_score, tasks)]
    elif callable(model):
        losses = dispatcher(apply_and_score, [(model, train, test) for train, test in data])
    else:
        raise ValidationError(f"cannot validate {type(model).__name__}: expected a model or a function")
    logger.debug(f"Finished model validation: {losses}")
    return losses


# --- Brute force ---

@handle_search_errors("Brute-force search")
def brute(model_type: Callable[..., Any], parms: Candidates, data: AbstractResampler,
          args: Optional[Dict[str, Any]] = None, maximize: bool = False,
          dispatcher: Optional[ParallelMap] = None, trace: Optional[SearchTrace] = None) -> Params:
    """
    Evaluate every candidate on every pair and return the one with the best
    average loss.
    """
    parms = _candidates(parms)
    dispatcher = dispatcher or ParallelMap()
    args = dict(args or {})

    logger.info(f"Starting brute-force search over {len(parms)} candidates...")
    losses = _val(dispatcher, model_type, parms, data, args)
    if trace is not None:
        trace.record("brute", 0, parms, losses, args)
    ind = _best_index(losses, maximize)
    logger.info(f"Finished brute-force search: best {parms[ind]} (loss {losses[ind]:.6g})")
    return parms[ind]


@handle_search_errors("Brute-force search")
def brutefit(model_type: Callable[..., Any], parms: Candidates, data: MonadicResampler,
             args: Optional[Dict[str, Any]] = None, maximize: bool = False,
             dispatcher: Optional[ParallelMap] = None, trace: Optional[SearchTrace] = None) -> Any:
    """Brute-force search on the single pair of ``data``; returns the fitted best model."""
    parms = _candidates(parms)
    train, test = _first_pair(data)
    dispatcher = dispatcher or ParallelMap()
    args = dict(args or {})

    logger.info(f"Starting brute-force search over {len(parms)} candidates...")
    models, losses = _fit_split(dispatcher, build_arms(model_type, parms), train, test, args)
    if trace is not None:
        trace.record("brute", 0, parms, losses, args)
    ind = _best_index(losses, maximize)
    logger.info(f"Finished brute-force search: best {parms[ind]} (loss {losses[ind]:.6g})")
    return models[ind]


# --- Hill climbing ---

def _hc(rng, model_type, space, data, step, args, n, maximize, fit, dispatcher, trace):
    if n < 1:
        raise ValidationError(f"invalid sample size of {n}")
    if not isinstance(space, AbstractSpace):
        raise ValidationError(f"hill-climbing needs a parameter space, got {type(space).__name__}")
    rng = resolve_rng(rng)
    dispatcher = dispatcher or ParallelMap()
    args = dict(args or {})
    if fit:
        train, test = _first_pair(data)

    parm, model = None, None
    best = -math.inf if maximize else math.inf

    nbrs = space.sample(rng, n)
    step_idx = 0
    logger.info("Starting hill-climbing...")
    while nbrs:
        if fit:
            models, losses = _fit_split(dispatcher, build_arms(model_type, nbrs), train, test, args)
        else:
            losses = _val(dispatcher, model_type, nbrs, data, args)
        if trace is not None:
            trace.record("hc", step_idx, nbrs, losses, args)

        i = _best_index(losses, maximize)
        if not _improves(losses[i], best, maximize):
            break
        parm, best = nbrs[i], float(losses[i])
        if fit:
            model = models[i]
        logger.debug(f"Hill-climbing step {step_idx}: {parm} (loss {best:.6g})")

        nbrs = space.neighbors(rng, parm, step, n)
        step_idx += 1
    logger.info(f"Finished hill-climbing after {step_idx} steps: best {parm} (loss {best:.6g})")

    return model, parm


@handle_search_errors("Hill-climbing")
def hc(model_type: Callable[..., Any], space: AbstractSpace, data: AbstractResampler, step: Any,
       args: Optional[Dict[str, Any]] = None, n: int = constants.DEFAULT_HC_NEIGHBORS,
       maximize: bool = False, rng: RandomLike = None, dispatcher: Optional[ParallelMap] = None,
       trace: Optional[SearchTrace] = None) -> Params:
    """
    Hill-climbing local search.

    Draws ``n`` random starting points, then repeatedly moves to the best of
    ``n`` neighbours of the current best point. Stops as soon as a step brings
    no strict improvement.

    Args:
        step: Neighbourhood radius; scalar, sequence in variable order or dict by name.
        n: Points evaluated per step.
    """
    return _hc(rng, model_type, space, data, step, args, n, maximize, False, dispatcher, trace)[1]


@handle_search_errors("Hill-climbing")
def hcfit(model_type: Callable[..., Any], space: AbstractSpace, data: MonadicResampler, step: Any,
          args: Optional[Dict[str, Any]] = None, n: int = constants.DEFAULT_HC_NEIGHBORS,
          maximize: bool = False, rng: RandomLike = None, dispatcher: Optional[ParallelMap] = None,
          trace: Optional[SearchTrace] = None) -> Any:
    """Hill-climbing on the single pair of ``data``; returns the fitted best model."""
    return _hc(rng, model_type, space, data, step, args, n, maximize, True, dispatcher, trace)[0]


# --- Successive halving ---

def _halve(dispatcher, arms, parms, train, test, schedule, args, maximize, trace, algorithm,
           bracket=None):
    """Run one successive-halving schedule; returns survivors and their last losses."""
    losses = np.array([])
    for round_idx, (k, round_args) in enumerate(schedule):
        fit_args = {**args, **round_args}
        arms, losses = _fit_split(dispatcher, arms, train, test, fit_args)
        logger.debug(f"Round {round_idx}: fitted {len(arms)} arms with {fit_args}, losses {losses.tolist()}")
        if trace is not None:
            trace.record(algorithm, round_idx, parms, losses, fit_args, bracket)
        inds = _ranking(losses, maximize)[:k]
        arms = [arms[i] for i in inds]
        parms = [parms[i] for i in inds]
        losses = losses[inds]
    return arms, parms, losses


def _sha(model_type, parms, data, budget, mode, rate, args, maximize, dispatcher, trace):
    parms = _candidates(parms)
    _check_rate(rate)
    train, test = _first_pair(data)
    dispatcher = dispatcher or ParallelMap()

    schedule = allocate(budget, mode, len(parms), rate)
    logger.info(f"Starting successive halving: {len(parms)} arms, {len(schedule)} rounds...")
    arms, parms, losses = _halve(
        dispatcher, build_arms(model_type, parms), parms, train, test, schedule,
        dict(args or {}), maximize, trace, "sha",
    )
    logger.info(f"Finished successive halving: best {parms[0]} (loss {losses[0]:.6g})")
    return arms[0], parms[0]


@handle_search_errors("Successive halving")
def sha(model_type: Callable[..., Any], parms: Candidates, data: MonadicResampler, budget: Budget,
        mode: AllocationMode = AllocationMode.GEOMETRIC, rate: float = constants.DEFAULT_SHA_RATE,
        args: Optional[Dict[str, Any]] = None, maximize: bool = False,
        dispatcher: Optional[ParallelMap] = None, trace: Optional[SearchTrace] = None) -> Params:
    """
    Successive halving.

    All candidates start as arms. Every round fits the current arms with that
    round's share of ``budget`` (see ``allocate``), scores them and keeps the
    best ones, until a single arm remains.
    """
    return _sha(model_type, parms, data, budget, mode, rate, args, maximize, dispatcher, trace)[1]


@handle_search_errors("Successive halving")
def shafit(model_type: Callable[..., Any], parms: Candidates, data: MonadicResampler, budget: Budget,
           mode: AllocationMode = AllocationMode.GEOMETRIC, rate: float = constants.DEFAULT_SHA_RATE,
           args: Optional[Dict[str, Any]] = None, maximize: bool = False,
           dispatcher: Optional[ParallelMap] = None, trace: Optional[SearchTrace] = None) -> Any:
    """Successive halving; returns the fitted surviving model."""
    return _sha(model_type, parms, data, budget, mode, rate, args, maximize, dispatcher, trace)[0]


# --- Hyperband ---

def _hyperband(rng, model_type, space, data, budget, rate, args, maximize, dispatcher, trace):
    _check_rate(rate)
    if not isinstance(space, AbstractSpace):
        raise ValidationError(f"hyperband needs a parameter space, got {type(space).__name__}")
    train, test = _first_pair(data)
    rng = resolve_rng(rng)
    dispatcher = dispatcher or ParallelMap()
    args = dict(args or {})

    n = floor_log(budget.value, rate) + 1
    if n < 1:
        raise ValidationError(f"budget {budget} is too small for rate {rate}")

    arm, parm = None, None
    best = -math.inf if maximize else math.inf

    logger.info(f"Starting hyperband with {n} brackets...")
    for i in range(n, 0, -1):
        narms = math.ceil(n * rate ** (i - 1) / i)
        parms = space.sample(rng, narms)
        schedule = allocate(budget, AllocationMode.HYPERBAND, narms, rate, nrounds=i)

        logger.debug(f"Bracket {i}: {narms} arms over {i} rounds")
        arms, parms, losses = _halve(
            dispatcher, build_arms(model_type, parms), parms, train, test, schedule,
            args, maximize, trace, "hyperband", bracket=i,
        )
        if not _improves(losses[0], best, maximize):
            continue
        arm, parm, best = arms[0], parms[0], float(losses[0])
    logger.info(f"Finished hyperband: best {parm} (loss {best:.6g})")

    return arm, parm


@handle_search_errors("Hyperband")
def hyperband(model_type: Callable[..., Any], space: AbstractSpace, data: MonadicResampler,
              budget: Budget, rate: float = constants.DEFAULT_HYPERBAND_RATE,
              args: Optional[Dict[str, Any]] = None, maximize: bool = False, rng: RandomLike = None,
              dispatcher: Optional[ParallelMap] = None, trace: Optional[SearchTrace] = None) -> Params:
    """
    Hyperband.

    Runs brackets ``i = n..1`` with ``n = floor(log_rate(budget)) + 1``. Bracket
    ``i`` samples ``ceil(n * rate**(i-1) / i)`` candidates from ``space`` and
    halves them over ``i`` rounds with the Hyperband allocation schedule. The
    best surviving arm over all brackets wins.
    """
    return _hyperband(rng, model_type, space, data, budget, rate, args, maximize, dispatcher, trace)[1]


@handle_search_errors("Hyperband")
def hyperbandfit(model_type: Callable[..., Any], space: AbstractSpace, data: MonadicResampler,
                 budget: Budget, rate: float = constants.DEFAULT_HYPERBAND_RATE,
                 args: Optional[Dict[str, Any]] = None, maximize: bool = False, rng: RandomLike = None,
                 dispatcher: Optional[ParallelMap] = None, trace: Optional[SearchTrace] = None) -> Any:
    """Hyperband; returns the fitted best model."""
    return _hyperband(rng, model_type, space, data, budget, rate, args, maximize, dispatcher, trace)[0]


# --- SASHA ---

def _survival(losses: np.ndarray, round_idx: int, temp: float, maximize: bool) -> np.ndarray:
    best = losses.max() if maximize else losses.min()
    if temp == 0:
        return (losses == best).astype(float)
    sign = 1 if maximize else -1
    return np.exp(sign * round_idx * (losses - best) / temp)


def _sasha(rng, model_type, parms, data, args, temp, maximize, dispatcher, trace):
    parms = _candidates(parms)
    if temp < 0:
        raise ValidationError(f"initial temperature must be non-negative, got {temp}")
    train, test = _first_pair(data)
    rng = resolve_rng(rng)
    dispatcher = dispatcher or ParallelMap()
    args = dict(args or {})

    arms = build_arms(model_type, parms)

    n = 1
    logger.info(f"Starting SASHA over {len(arms)} arms...")
    while True:
        arms, losses = _fit_split(dispatcher, arms, train, test, args)
        if trace is not None:
            trace.record("sasha", n - 1, parms, losses, args)
        if len(arms) == 1:
            break

        prob = _survival(losses, n, temp, maximize)
        logger.debug(f"Round {n}: losses {losses.tolist()}, survival {prob.tolist()}")
        if np.all(prob >= 1):
            # every arm tied with the best: nothing can be eliminated
            arms, parms = arms[:1], parms[:1]
            break

        keep = np.flatnonzero(rng.random(len(prob)) < prob)
        arms = [arms[i] for i in keep]
        parms = [parms[i] for i in keep]
        if len(arms) == 1:
            break
        n += 1
    logger.info(f"Finished SASHA after {n} rounds: best {parms[0]}")

    return arms[0], parms[0]


@handle_search_errors("SASHA")
def sasha(model_type: Callable[..., Any], parms: Candidates, data: MonadicResampler,
          args: Optional[Dict[str, Any]] = None, temp: float = constants.DEFAULT_SASHA_TEMP,
          maximize: bool = False, rng: RandomLike = None, dispatcher: Optional[ParallelMap] = None,
          trace: Optional[SearchTrace] = None) -> Params:
    """
    Simulated-annealing successive halving.

    Each round refits every arm with ``args`` and keeps arm ``j`` with
    probability ``exp(-n * (loss_j - best) / temp)`` (sign flipped when
    maximizing), where ``n`` counts rounds, until one arm remains. The best
    arm of a round always survives.
    """
    return _sasha(rng, model_type, parms, data, args, temp, maximize, dispatcher, trace)[1]


@handle_search_errors("SASHA")
def sashafit(model_type: Callable[..., Any], parms: Candidates, data: MonadicResampler,
             args: Optional[Dict[str, Any]] = None, temp: float = constants.DEFAULT_SASHA_TEMP,
             maximize: bool = False, rng: RandomLike = None, dispatcher: Optional[ParallelMap] = None,
             trace: Optional[SearchTrace] = None) -> Any:
    """SASHA; returns the fitted surviving model."""
    return _sasha(rng, model_type, parms, data, args, temp, maximize, dispatcher, trace)[0]
