"""
Parallel map dispatcher backed by joblib.

Search rounds are synchronous barriers: a batch of independent fit tasks is
submitted, and the next decision is taken only once every result is back,
in input order.
"""
from typing import Any, Callable, Iterable, List, Optional

from joblib import Parallel, delayed

from crossval.utils.exceptions import ValidationError
from crossval.utils import constants


class ParallelMap:
    """
    Order-preserving ``map`` over independent tasks.

    Args:
        n_jobs: Worker count; 1 runs in-process, -1 uses all cores.
        backend: joblib backend name (e.g. 'loky', 'threading'); None uses joblib's default.
        verbose: joblib verbosity level.
    """

    def __init__(self, n_jobs: int = constants.DEFAULT_N_JOBS, backend: Optional[str] = None,
                 verbose: int = 0):
        if n_jobs == 0 or n_jobs < -1:
            raise ValidationError(f"n_jobs must be -1 (all cores) or a positive integer, got {n_jobs}")
        self.n_jobs = n_jobs
        self.backend = backend
        self.verbose = verbose

    def map(self, fn: Callable[[Any], Any], inputs: Iterable[Any]) -> List[Any]:
        """Return ``[fn(x) for x in inputs]``, evaluated by the worker pool."""
        inputs = list(inputs)
        if not inputs:
            return []
        if self.n_jobs == 1 and self.backend is None:
            return [fn(x) for x in inputs]
        return list(Parallel(n_jobs=self.n_jobs, backend=self.backend, verbose=self.verbose)(
            delayed(fn)(x) for x in inputs
        ))

    __call__ = map

    def __repr__(self) -> str:
        return f"ParallelMap(n_jobs={self.n_jobs}, backend={self.backend!r})"
