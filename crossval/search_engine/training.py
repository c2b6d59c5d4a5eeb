"""
Helpers around the model training contract.

A model type is any callable building a model from keyword parameters. Models
expose ``fit(*train, **args)`` returning the fitted model and
``loss(*test)`` returning a real scalar. Tuple datasets are splatted
positionally; any other dataset is passed as a single argument.
"""
from typing import Any, Callable, Dict, List, Sequence, Tuple


def fit_model(model: Any, train: Any, args: Dict[str, Any]) -> Any:
    if isinstance(train, tuple):
        fitted = model.fit(*train, **args)
    else:
        fitted = model.fit(train, **args)
    # fit() may work in place and return nothing
    return model if fitted is None else fitted


def model_loss(model: Any, test: Any) -> float:
    if isinstance(test, tuple):
        return float(model.loss(*test))
    return float(model.loss(test))


def build_arms(model_type: Callable[..., Any], params: Sequence[Dict[str, Any]]) -> List[Any]:
    return [model_type(**p) for p in params]


def fit_and_score(task: Tuple[Any, Any, Any, Dict[str, Any]]) -> Tuple[Any, float]:
    """Worker task: fit ``model`` on ``train`` and score it on ``test``."""
    model, train, test, args = task
    model = fit_model(model, train, args)
    return model, model_loss(model, test)


def apply_and_score(task: Tuple[Callable[[Any], Any], Any, Any]) -> float:
    """Worker task: build a fitted model with ``fn(train)`` and score it on ``test``."""
    fn, train, test = task
    return model_loss(fn(train), test)
