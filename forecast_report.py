"""Fit the mock fuel series and log a long-range forecast summary."""
from __future__ import annotations

import logging
from typing import Any

from fuel_forecast.core.config import DEFAULT_DEGREE, DEFAULT_HORIZON_MONTHS, DEFAULT_SEASONAL_FACTORS
from fuel_forecast.services.backtesting import compare_models
from fuel_forecast.services.data_loader import generate_fuel_data, price_series
from fuel_forecast.services.eda import descriptive_statistics
from fuel_forecast.services.forecasting import forecast_frame, long_range_forecast
from fuel_forecast.services.regression import polynomial_regression
from fuel_forecast.services.reporting import build_forecast_table, yearly_summary

logger = logging.getLogger("fuel_forecast")


def run_report(
    fuel: str = "gasoline",
    degree: int = DEFAULT_DEGREE,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
) -> dict[str, Any]:
    data = generate_fuel_data()
    prices = price_series(data, fuel)
    x = list(range(len(prices)))
    fit = polynomial_regression(x, prices, degree)
    logger.info(
        "Fitted degree %d on %d months: R2=%.4f RMSE=%.4f MAE=%.4f MAPE=%.2f%%",
        degree,
        len(prices),
        fit.r_squared,
        fit.rmse,
        fit.mae,
        fit.mape,
    )

    points = long_range_forecast(prices, fit.coefficients, horizon_months, len(x), DEFAULT_SEASONAL_FACTORS)
    forecast_df = forecast_frame(points, data["date"].iloc[-1])
    rank_df, errors = compare_models(prices)
    for err in errors:
        logger.warning(err)

    return {
        "fit": fit,
        "stats": descriptive_statistics(data, fuel),
        "forecast": forecast_df,
        "table": build_forecast_table(data, forecast_df, fuel),
        "yearly": yearly_summary(forecast_df),
        "comparison": rank_df,
    }


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    report = run_report()
    logger.info("Model comparison:\n%s", report["comparison"].to_string(index=False))
    logger.info("Yearly outlook:\n%s", report["yearly"].to_string(index=False))
