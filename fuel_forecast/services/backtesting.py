from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from fuel_forecast.core.errors import DegenerateInputError, InvalidParameterError
from fuel_forecast.core.types import HoldoutResult
from fuel_forecast.services.metrics import compute_metrics
from fuel_forecast.services.regression import evaluate_polynomial, linear_regression, polynomial_regression

logger = logging.getLogger(__name__)

DEFAULT_HOLDOUT_MONTHS = 24
DEFAULT_DEGREES = (1, 2, 3, 4)


def model_label(degree: int) -> str:
    if degree == 1:
        return "Simple Linear"
    suffix = {2: "2nd", 3: "3rd"}.get(degree, f"{degree}th")
    return f"Polynomial ({suffix})"


def holdout_evaluation(series: Sequence[float], degree: int, holdout_months: int = DEFAULT_HOLDOUT_MONTHS) -> HoldoutResult:
    """Fit on all but the last ``holdout_months`` points and score the remainder.

    The test window is evaluated at its true positions ``n - h .. n - 1`` so
    the fitted curve is extrapolated, not refit.
    """
    values = np.array(series, dtype=float)
    n = len(values)
    if holdout_months < 1:
        raise InvalidParameterError(f"holdout_months must be at least 1, got {holdout_months}.")
    if n - holdout_months <= degree:
        raise DegenerateInputError(
            f"Not enough history for degree {degree} with a {holdout_months}-month holdout ({n} points)."
        )

    x = np.arange(n, dtype=float)
    train_x, test_x = x[: n - holdout_months], x[n - holdout_months :]
    train_y, test_y = values[: n - holdout_months], values[n - holdout_months :]
    fit = linear_regression(train_x, train_y) if degree == 1 else polynomial_regression(train_x, train_y, degree)
    test_pred = evaluate_polynomial(fit.coefficients, test_x)
    return HoldoutResult(
        model_id=model_label(degree),
        degree=degree,
        holdout_months=holdout_months,
        train_metrics=fit.metrics,
        test_metrics=compute_metrics(test_y, test_pred),
        coefficients=fit.coefficients,
        actual=test_y.tolist(),
        predicted=[float(p) for p in test_pred],
    )


def compare_models(
    series: Sequence[float],
    degrees: Sequence[int] = DEFAULT_DEGREES,
    holdout_months: int = DEFAULT_HOLDOUT_MONTHS,
) -> tuple[pd.DataFrame, list[str]]:
    """Holdout-score each degree and rank by test RMSE.

    Returns (rank_df, errors) where errors lists the degrees that could not be
    evaluated and why.
    """
    rows = []
    errors: list[str] = []
    for degree in degrees:
        try:
            result = holdout_evaluation(series, degree, holdout_months)
        except DegenerateInputError as ex:
            errors.append(f"degree={degree} skipped: {ex}")
            logger.warning("degree=%d skipped: %s", degree, ex)
            continue
        rows.append(
            {
                "model_id": result.model_id,
                "degree": degree,
                "train_r2": result.train_metrics.r_squared,
                "test_r2": result.test_metrics.r_squared,
                "rmse": result.test_metrics.rmse,
                "mae": result.test_metrics.mae,
                "mape": result.test_metrics.mape,
            }
        )
    if not rows:
        return pd.DataFrame(), errors
    rank_df = pd.DataFrame(rows).sort_values("rmse", ascending=True).reset_index(drop=True)
    rank_df["rank"] = np.arange(1, len(rank_df) + 1)
    return rank_df, errors
