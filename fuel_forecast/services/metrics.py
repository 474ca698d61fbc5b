from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from fuel_forecast.core.config import MAPE_PRECISION, METRIC_PRECISION
from fuel_forecast.core.errors import ShapeMismatchError
from fuel_forecast.core.types import FitMetrics

logger = logging.getLogger(__name__)


def _paired(actual: Sequence[float] | np.ndarray, predicted: Sequence[float] | np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    y_true = np.array(actual, dtype=float)
    y_pred = np.array(predicted, dtype=float)
    if y_true.shape != y_pred.shape or y_true.ndim != 1:
        raise ShapeMismatchError(f"actual and predicted must be 1-D and equal length, got {y_true.shape} and {y_pred.shape}.")
    if y_true.size == 0:
        raise ShapeMismatchError("Cannot score an empty series.")
    return y_true, y_pred


def r_squared(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Coefficient of determination.

    A constant ``y_true`` has no variance to explain: the score is 1.0 for a
    perfect fit and NaN otherwise.
    """
    ss_res = float(np.sum((y_true - y_pred) ** 2))
    ss_tot = float(np.sum((y_true - np.mean(y_true)) ** 2))
    if ss_tot == 0:
        logger.warning("R-squared undefined for constant actuals (ss_res=%s)", ss_res)
        return 1.0 if ss_res == 0 else math.nan
    return 1.0 - ss_res / ss_tot


def rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    return float(np.sqrt(np.mean((y_true - y_pred) ** 2)))


def mae(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    return float(np.mean(np.abs(y_true - y_pred)))


def mape(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean absolute percentage error, skipping zero-valued actuals."""
    nonzero = y_true != 0
    skipped = int((~nonzero).sum())
    if skipped:
        logger.warning("MAPE skipped %d zero-valued actual(s) out of %d", skipped, len(y_true))
    if not nonzero.any():
        return math.nan
    return float(np.mean(np.abs((y_true[nonzero] - y_pred[nonzero]) / y_true[nonzero])) * 100)


def compute_metrics(actual: Sequence[float] | np.ndarray, predicted: Sequence[float] | np.ndarray) -> FitMetrics:
    y_true, y_pred = _paired(actual, predicted)
    return FitMetrics(
        r_squared=round(r_squared(y_true, y_pred), METRIC_PRECISION),
        rmse=round(rmse(y_true, y_pred), METRIC_PRECISION),
        mae=round(mae(y_true, y_pred), METRIC_PRECISION),
        mape=round(mape(y_true, y_pred), MAPE_PRECISION),
    )
