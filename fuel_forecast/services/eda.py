from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from scipy.stats import kurtosis, skew


def descriptive_statistics(data: pd.DataFrame, value_col: str = "gasoline", date_col: str = "date") -> dict[str, Any]:
    """Summary statistics for one price column.

    Kurtosis is reported on the Pearson scale (normal = 3).
    """
    values = data[value_col].astype(float)
    if values.empty:
        return {"observations": 0}
    mean = float(values.mean())
    std = float(values.std(ddof=1)) if len(values) > 1 else 0.0
    return {
        "mean": round(mean, 2),
        "median": round(float(values.median()), 2),
        "std_dev": round(std, 2),
        "min": round(float(values.min()), 2),
        "min_date": data.loc[values.idxmin(), date_col],
        "max": round(float(values.max()), 2),
        "max_date": data.loc[values.idxmax(), date_col],
        "coeff_var": round(std / mean * 100, 1) if mean else np.nan,
        "skewness": round(float(skew(values, bias=False)), 2) if len(values) > 2 else np.nan,
        "kurtosis": round(float(kurtosis(values, fisher=False, bias=False)), 2) if len(values) > 3 else np.nan,
        "observations": int(len(values)),
        "span": f"{data[date_col].iloc[0]} to {data[date_col].iloc[-1]}",
    }


def monthly_profile(data: pd.DataFrame, value_col: str = "gasoline") -> pd.DataFrame:
    """Mean price per calendar month alongside its deviation from the overall mean."""
    profile = data.groupby("month")[value_col].mean()
    out = profile.reset_index(name="avg_price")
    out["deviation"] = out["avg_price"] - float(data[value_col].mean())
    out["avg_price"] = out["avg_price"].round(2)
    out["deviation"] = out["deviation"].round(2)
    return out
