import functools
import inspect
from typing import Any, Callable, Dict, List

from sklearn.base import clone
from sklearn.ensemble import (
    ExtraTreesRegressor,
    RandomForestRegressor,
    GradientBoostingRegressor,
    HistGradientBoostingRegressor,
)
from sklearn.neighbors import KNeighborsRegressor
from sklearn.linear_model import (
    LinearRegression,
    Ridge,
    Lasso,
    ElasticNet,
    SGDRegressor,
    LogisticRegression,
)
from sklearn.svm import SVR
from sklearn.tree import DecisionTreeRegressor
from sklearn.neural_network import MLPRegressor
from sklearn.metrics import mean_squared_error

from crossval.utils.exceptions import ModelTrainingError


class EstimatorModel:
    """
    Training-contract adapter for a scikit-learn estimator.

    ``fit(X, y, **args)`` applies the fit-time arguments the estimator accepts
    as parameters (a ``max_iter`` or ``n_estimators`` budget, for instance),
    fits a clone of the estimator and returns the adapter. ``loss(X, y)``
    scores the predictions with ``metric(y_true, y_pred)``.
    """

    def __init__(self, estimator: Any, metric: Callable[[Any, Any], float] = mean_squared_error):
        self.estimator = estimator
        self.metric = metric

    def fit(self, X, y, **args) -> "EstimatorModel":
        estimator = clone(self.estimator)
        valid = ModelFactory._filter_params(type(estimator), args)
        if valid:
            estimator.set_params(**valid)
        try:
            estimator.fit(X, y)
        except Exception as e:
            raise ModelTrainingError(f"{type(estimator).__name__} failed to fit: {e}") from e
        self.estimator = estimator
        return self

    def loss(self, X, y) -> float:
        return float(self.metric(y, self.estimator.predict(X)))

    def __repr__(self) -> str:
        return f"EstimatorModel({self.estimator!r})"


class ModelFactory:
    """
    Factory for creating scikit-learn models wrapped in the training contract.
    """

    MODELS = {
        # Ensembles (Trees)
        'ExtraTreesRegressor': ExtraTreesRegressor,
        'RandomForestRegressor': RandomForestRegressor,
        'GradientBoostingRegressor': GradientBoostingRegressor,
        'HistGradientBoostingRegressor': HistGradientBoostingRegressor,
        'DecisionTreeRegressor': DecisionTreeRegressor,

        # Nearest Neighbors
        'KNeighborsRegressor': KNeighborsRegressor,

        # Neural Networks
        'MLPRegressor': MLPRegressor,

        # Linear / Kernel
        'LinearRegression': LinearRegression,
        'Ridge': Ridge,
        'Lasso': Lasso,
        'ElasticNet': ElasticNet,
        'SGDRegressor': SGDRegressor,
        'SVR': SVR,

        # Classification
        'LogisticRegression': LogisticRegression,
    }

    @classmethod
    def create(cls, model_name: str, params: Dict[str, Any] = None,
               metric: Callable[[Any, Any], float] = mean_squared_error) -> EstimatorModel:
        """
        Create and return a wrapped model.
        """
        if params is None:
            params = {}

        if model_name not in cls.MODELS:
            raise ValueError(f"Unknown model name: {model_name}. Available: {cls.get_available_models()}")

        model_class = cls.MODELS[model_name]
        valid_params = cls._filter_params(model_class, params)
        return EstimatorModel(model_class(**valid_params), metric=metric)

    @classmethod
    def model_type(cls, model_name: str,
                   metric: Callable[[Any, Any], float] = mean_squared_error) -> Callable[..., EstimatorModel]:
        """
        Constructor usable as ``model_type`` in every search: ``model_type(**params)``.
        """
        if model_name not in cls.MODELS:
            raise ValueError(f"Unknown model name: {model_name}. Available: {cls.get_available_models()}")
        return functools.partial(_create_from_kwargs, cls, model_name, metric)

    @classmethod
    def get_available_models(cls) -> List[str]:
        """Return list of all supported model names."""
        return list(cls.MODELS.keys())

    @staticmethod
    def _filter_params(model_class, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Remove parameters from `params` that are not accepted by `model_class` constructor.
        """
        sig = inspect.signature(model_class.__init__)

        valid_keys = [
            p.name for p in sig.parameters.values()
            if p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
        ]

        # Always allow **kwargs if the model supports it
        has_kwargs = any(p.kind == p.VAR_KEYWORD for p in sig.parameters.values())

        if has_kwargs:
            return params

        return {k: v for k, v in params.items() if k in valid_keys}


def _create_from_kwargs(factory, model_name, metric, **params):
    # module-level for pickling by joblib workers
    return factory.create(model_name, params, metric=metric)
