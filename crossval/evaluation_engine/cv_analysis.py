import numpy as np
import pandas as pd
from typing import Sequence


def loss_summary(losses: Sequence[float]) -> pd.DataFrame:
    """
    Summarize the per-pair losses returned by ``validate``.
    One row with the fold count, mean, std, min, max and range.
    """
    scores = np.asarray(losses, dtype=float)
    if scores.size == 0:
        return pd.DataFrame(columns=["folds", "mean", "std", "min", "max", "range"])
    return pd.DataFrame([{
        "folds": int(scores.size),
        "mean": float(np.mean(scores)),
        "std": float(np.std(scores)),
        "min": float(np.min(scores)),
        "max": float(np.max(scores)),
        "range": float(np.max(scores) - np.min(scores)),
    }])
