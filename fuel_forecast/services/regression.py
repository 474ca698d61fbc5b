"""Least-squares regression over positional series.

Both fitters return in-sample predictions, residuals (actual - predicted) and
rounded fit metrics. Inputs are copied; nothing is cached between calls.
"""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from fuel_forecast.core.errors import DegenerateInputError, InvalidParameterError, ShapeMismatchError
from fuel_forecast.core.types import RegressionResult
from fuel_forecast.services.linalg import mat_mul, mat_vec_mul, solve_linear_system, transpose
from fuel_forecast.services.metrics import compute_metrics

logger = logging.getLogger(__name__)

_EPS = np.finfo(float).eps


def _xy(x: Sequence[float], y: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    xs = np.array(x, dtype=float)
    ys = np.array(y, dtype=float)
    if xs.ndim != 1 or ys.ndim != 1:
        raise ShapeMismatchError("x and y must be one-dimensional sequences.")
    if len(xs) != len(ys):
        raise ShapeMismatchError(f"x and y differ in length ({len(xs)} vs {len(ys)}).")
    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
        raise DegenerateInputError("x and y must contain only finite values.")
    return xs, ys


def design_matrix(x: Sequence[float] | np.ndarray, degree: int) -> np.ndarray:
    """Vandermonde matrix with rows ``[1, x, x**2, ..., x**degree]``."""
    xs = np.asarray(x, dtype=float)
    return np.column_stack([xs**j for j in range(degree + 1)])


def evaluate_polynomial(coefficients: Sequence[float], x: float | Sequence[float] | np.ndarray):
    """Evaluate ``sum(c_j * x**j)``; returns a float for scalar ``x``."""
    xs = np.asarray(x, dtype=float)
    total = np.zeros_like(xs)
    for j, c in enumerate(coefficients):
        total = total + c * xs**j
    return float(total) if total.ndim == 0 else total


def polynomial_slope(coefficients: Sequence[float], at: float) -> float:
    """First derivative of the polynomial at ``at``."""
    return float(sum(j * coefficients[j] * at ** (j - 1) for j in range(1, len(coefficients))))


def _build_result(coefficients: np.ndarray, xs: np.ndarray, ys: np.ndarray) -> RegressionResult:
    predictions = evaluate_polynomial(coefficients, xs)
    residuals = ys - predictions
    metrics = compute_metrics(ys, predictions)
    return RegressionResult(
        coefficients=[float(c) for c in coefficients],
        r_squared=metrics.r_squared,
        rmse=metrics.rmse,
        mae=metrics.mae,
        mape=metrics.mape,
        predictions=[float(p) for p in predictions],
        residuals=[float(r) for r in residuals],
    )


def linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionResult:
    """Fit ``y = b0 + b1 * x`` from the closed-form normal equations."""
    xs, ys = _xy(x, y)
    n = len(xs)
    if n < 2:
        raise DegenerateInputError(f"Linear regression needs at least 2 points, got {n}.")

    sum_x = float(np.sum(xs))
    sum_y = float(np.sum(ys))
    sum_xy = float(np.sum(xs * ys))
    sum_x2 = float(np.sum(xs * xs))

    denominator = n * sum_x2 - sum_x * sum_x
    # Spread lost to rounding against the magnitude of x leaves the slope meaningless.
    spread = float(np.sum((xs - np.mean(xs)) ** 2))
    if denominator <= 0 or spread <= _EPS * n * sum_x2:
        raise DegenerateInputError("Linear regression is undefined when x values are identical or nearly so.")

    b1 = (n * sum_xy - sum_x * sum_y) / denominator
    b0 = sum_y / n - b1 * (sum_x / n)
    logger.debug("linear fit n=%d b0=%.6f b1=%.6f", n, b0, b1)
    return _build_result(np.array([b0, b1]), xs, ys)


def polynomial_regression(x: Sequence[float], y: Sequence[float], degree: int) -> RegressionResult:
    """Fit a degree-``degree`` polynomial by solving ``(X^T X) beta = X^T y``.

    ``degree`` must be an integer with ``1 <= degree < len(x)`` and ``x`` must
    hold at least ``degree + 1`` distinct values, otherwise the normal
    equations are rank-deficient and ``DegenerateInputError`` is raised.
    """
    xs, ys = _xy(x, y)
    n = len(xs)
    if isinstance(degree, bool) or int(degree) != degree:
        raise InvalidParameterError(f"degree must be an integer, got {degree!r}.")
    degree = int(degree)
    if degree < 1:
        raise InvalidParameterError(f"degree must be at least 1, got {degree}.")
    if degree >= n:
        raise DegenerateInputError(f"Degree {degree} needs more than {degree} points, got {n}.")
    distinct = len(np.unique(xs))
    if distinct <= degree:
        raise DegenerateInputError(f"Degree {degree} needs at least {degree + 1} distinct x values, got {distinct}.")

    X = design_matrix(xs, degree)
    Xt = transpose(X)
    coefficients = solve_linear_system(mat_mul(Xt, X), mat_vec_mul(Xt, ys))
    logger.debug("polynomial fit n=%d degree=%d coefficients=%s", n, degree, coefficients.tolist())
    return _build_result(coefficients, xs, ys)
