"""Out-of-sample projection of a fitted polynomial.

Two modes are offered. ``forecast`` evaluates the polynomial directly and widens
the band linearly with the step index; the interval width comes from fixed
settings, not from residual variance. ``long_range_forecast`` is meant for
multi-year horizons: it follows the fitted slope at the end of the training
window with geometric damping, superimposes a calendar-month seasonal pattern,
and widens the band with a sqrt-of-time term plus a linear model-risk term.
"""
from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
import pandas as pd

from fuel_forecast.core.config import FORECAST_PRECISION, MONTHS_PER_YEAR, ForecastSettings
from fuel_forecast.core.errors import DegenerateInputError, InvalidParameterError, ShapeMismatchError
from fuel_forecast.core.types import ForecastPoint
from fuel_forecast.services.regression import evaluate_polynomial, polynomial_slope

logger = logging.getLogger(__name__)


def _point(predicted: float, uncertainty: float, z: float) -> ForecastPoint:
    return ForecastPoint(
        predicted=round(predicted, FORECAST_PRECISION),
        lower95=round(predicted - z * uncertainty, FORECAST_PRECISION),
        upper95=round(predicted + z * uncertainty, FORECAST_PRECISION),
    )


def _coefficients(coefficients: Sequence[float]) -> list[float]:
    coefs = [float(c) for c in coefficients]
    if not coefs:
        raise DegenerateInputError("At least one coefficient is required.")
    if not np.all(np.isfinite(coefs)):
        raise DegenerateInputError("Coefficients must be finite.")
    return coefs


def forecast(
    coefficients: Sequence[float],
    future_x: Sequence[float],
    settings: ForecastSettings | None = None,
) -> list[ForecastPoint]:
    settings = settings or ForecastSettings()
    coefs = _coefficients(coefficients)
    xs = [float(xi) for xi in future_x]
    if not np.all(np.isfinite(xs)):
        raise DegenerateInputError("future_x must contain only finite values.")
    points = []
    for idx, xi in enumerate(xs):
        predicted = evaluate_polynomial(coefs, xi)
        uncertainty = settings.base_uncertainty * (1 + idx * settings.step_growth)
        points.append(_point(predicted, uncertainty, settings.z_95))
    return points


def long_range_forecast(
    historical_prices: Sequence[float],
    coefficients: Sequence[float],
    months: int,
    start_index: int,
    seasonal_factors: Sequence[float],
    settings: ForecastSettings | None = None,
) -> list[ForecastPoint]:
    """Damped-trend plus seasonal forecast for ``months`` steps.

    Parameters
    ----------
    historical_prices:
        The training series; its last value anchors the projection and its
        mean scales the seasonal adjustment.
    coefficients:
        Fitted polynomial coefficients, constant term first.
    start_index:
        Position at which the trend slope is measured, normally the index
        just past the training window.
    seasonal_factors:
        Twelve additive weights. Step 0 uses ``seasonal_factors[0]``, i.e. the
        first forecast month is phase 0 regardless of its calendar month.
    """
    settings = settings or ForecastSettings()
    history = np.array(historical_prices, dtype=float)
    if history.ndim != 1 or history.size == 0:
        raise DegenerateInputError("historical_prices must be a non-empty sequence.")
    if not np.all(np.isfinite(history)):
        raise DegenerateInputError("historical_prices must contain only finite values.")
    coefs = _coefficients(coefficients)
    factors = [float(f) for f in seasonal_factors]
    if len(factors) != MONTHS_PER_YEAR:
        raise ShapeMismatchError(f"Expected {MONTHS_PER_YEAR} seasonal factors, got {len(factors)}.")
    if not np.all(np.isfinite(factors)):
        raise DegenerateInputError("Seasonal factors must be finite.")
    if months < 0:
        raise InvalidParameterError(f"months must be non-negative, got {months}.")

    trend_slope = polynomial_slope(coefs, start_index)
    avg_price = float(np.mean(history))
    current_price = float(history[-1])
    logger.debug(
        "long-range forecast months=%d slope=%.6f anchor=%.4f mean=%.4f",
        months,
        trend_slope,
        current_price,
        avg_price,
    )

    points = []
    for i in range(months):
        current_price += trend_slope * settings.damping_rate**i
        seasonal_adj = factors[i % MONTHS_PER_YEAR] * avg_price * settings.seasonal_scale
        time_uncertainty = settings.base_uncertainty * math.sqrt(1 + i * settings.time_variance_rate)
        model_uncertainty = settings.model_uncertainty_rate * i
        points.append(_point(current_price + seasonal_adj, time_uncertainty + model_uncertainty, settings.z_95))
    return points


def forecast_frame(points: Sequence[ForecastPoint], last_period: str | pd.Timestamp) -> pd.DataFrame:
    """Tabulate forecast points by month, starting the month after ``last_period``."""
    start = pd.Timestamp(last_period).to_period("M") + 1
    periods = pd.period_range(start=start, periods=len(points), freq="M")
    return pd.DataFrame(
        {
            "date": periods.strftime("%Y-%m"),
            "year": periods.year,
            "month": periods.month,
            "predicted": [p.predicted for p in points],
            "lower_95": [p.lower95 for p in points],
            "upper_95": [p.upper95 for p in points],
        }
    )
