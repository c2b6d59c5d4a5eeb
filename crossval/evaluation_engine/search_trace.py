"""
Diagnostic record of a search run.

Searches append one row per evaluated arm (algorithm, bracket, round, params,
fit arguments and loss). The record does not influence any search decision.
"""
import copy
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd


class SearchTrace:
    """Collects per-round evaluations of a search for later inspection."""

    COLUMNS = ["algorithm", "bracket", "round", "params", "args", "loss"]

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []

    def record(self, algorithm: str, round_idx: int, params: Sequence[Dict[str, Any]],
               losses: Sequence[float], args: Optional[Dict[str, Any]] = None,
               bracket: Optional[int] = None) -> None:
        for p, loss in zip(params, losses):
            self.rows.append({
                "algorithm": algorithm,
                "bracket": bracket,
                "round": round_idx,
                "params": copy.deepcopy(p),
                "args": dict(args or {}),
                "loss": float(loss),
            })

    def __len__(self) -> int:
        return len(self.rows)

    def to_frame(self) -> pd.DataFrame:
        """All recorded evaluations as a DataFrame, params expanded into columns."""
        if not self.rows:
            return pd.DataFrame(columns=self.COLUMNS)
        df = pd.DataFrame(self.rows, columns=self.COLUMNS)
        params = pd.json_normalize(df["params"].tolist()).add_prefix("param_")
        return pd.concat([df.drop(columns=["params"]), params], axis=1)

    def best(self, maximize: bool = False) -> Optional[Dict[str, Any]]:
        """The recorded row with the best loss (first one on ties)."""
        if not self.rows:
            return None
        key = (lambda r: -r["loss"]) if maximize else (lambda r: r["loss"])
        return min(self.rows, key=key)
