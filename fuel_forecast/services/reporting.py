from __future__ import annotations

import pandas as pd


def build_forecast_table(
    history: pd.DataFrame,
    forecast_df: pd.DataFrame,
    value_col: str = "gasoline",
    context_months: int = 36,
) -> pd.DataFrame:
    """Recent actuals followed by forecast rows.

    A bridge row repeats the last actual as predicted value and band so the
    forecast line starts from the observed series.
    """
    hist = history[["date", value_col]].tail(context_months).copy()
    hist = hist.rename(columns={value_col: "actual"})
    hist["predicted"] = pd.NA
    hist["lower_95"] = pd.NA
    hist["upper_95"] = pd.NA

    last = hist.iloc[-1]
    bridge = pd.DataFrame(
        [
            {
                "date": last["date"],
                "actual": last["actual"],
                "predicted": last["actual"],
                "lower_95": last["actual"],
                "upper_95": last["actual"],
            }
        ]
    )
    fut = forecast_df[["date", "predicted", "lower_95", "upper_95"]].copy()
    fut["actual"] = pd.NA
    combined = pd.concat([hist, bridge, fut], ignore_index=True, sort=False)
    return combined[["date", "actual", "predicted", "lower_95", "upper_95"]]


def yearly_summary(forecast_df: pd.DataFrame) -> pd.DataFrame:
    grouped = forecast_df.groupby("year", sort=True)
    summary = grouped.agg(
        avg_price=("predicted", "mean"),
        min_price=("predicted", "min"),
        max_price=("predicted", "max"),
        low_95=("lower_95", "min"),
        high_95=("upper_95", "max"),
        month_count=("predicted", "size"),
    ).reset_index()
    for col in ["avg_price", "min_price", "max_price", "low_95", "high_95"]:
        summary[col] = summary[col].round(2)
    return summary
