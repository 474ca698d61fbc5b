from __future__ import annotations

from dataclasses import dataclass

from scipy.stats import norm


RANDOM_SEED = 42
DEFAULT_DEGREE = 3
DEFAULT_HORIZON_MONTHS = 60
MONTHS_PER_YEAR = 12

METRIC_PRECISION = 4
MAPE_PRECISION = 2
FORECAST_PRECISION = 2

# Additive monthly weights, index 0 = January.
DEFAULT_SEASONAL_FACTORS = (
    -0.12, -0.08, 0.02, 0.08, 0.14, 0.18,
    0.15, 0.12, 0.05, -0.02, -0.08, -0.14,
)

# Two-sided 95% normal quantile.
Z_95 = round(float(norm.ppf(0.975)), 2)


@dataclass(frozen=True)
class ForecastSettings:
    """Modeling assumptions behind the forecast intervals and trend.

    base_uncertainty:
        One-step standard error in price units (INR/litre).
    step_growth:
        Linear widening per step for the direct polynomial forecast.
    damping_rate:
        Per-step decay of the trend slope; 0.97 halves it in roughly 23 months.
    seasonal_scale:
        Fraction of the historical mean price that a seasonal factor of 1.0 adds.
    time_variance_rate:
        Random-walk term, uncertainty grows with sqrt(1 + rate * step).
    model_uncertainty_rate:
        Model mis-specification term, grows linearly per step.
    z_95:
        Normal quantile for the 95% band.
    """

    base_uncertainty: float = 3.3
    step_growth: float = 0.12
    damping_rate: float = 0.97
    seasonal_scale: float = 0.12
    time_variance_rate: float = 0.5
    model_uncertainty_rate: float = 0.8
    z_95: float = Z_95
