"""Deterministic mock fuel price history.

Prices are built in USD per gallon (crude in USD per barrel) from yearly anchor
levels, interpolated toward the next year's anchor across the months, with a
seasonal swing and seeded noise, then converted to INR per litre / barrel.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

import pandas as pd

from fuel_forecast.core.config import DEFAULT_SEASONAL_FACTORS, RANDOM_SEED

USD_TO_INR = 83
GALLON_TO_LITRE = 3.785
FUEL_CONV = USD_TO_INR / GALLON_TO_LITRE
CRUDE_CONV = USD_TO_INR

FIRST_YEAR = 2014
LAST_YEAR = 2026
LAST_YEAR_MONTHS = 2
WEEKS_PER_YEAR = 52
FUEL_TYPES = ("gasoline", "diesel", "crude_oil")


@dataclass(frozen=True)
class YearlyAnchor:
    gasoline: float
    diesel: float
    crude: float
    volatility: float


YEARLY_ANCHORS: dict[int, YearlyAnchor] = {
    2014: YearlyAnchor(3.45, 3.82, 93, 0.08),
    2015: YearlyAnchor(2.42, 2.72, 49, 0.10),
    2016: YearlyAnchor(2.15, 2.31, 43, 0.07),
    2017: YearlyAnchor(2.41, 2.65, 51, 0.06),
    2018: YearlyAnchor(2.73, 3.18, 65, 0.08),
    2019: YearlyAnchor(2.61, 3.06, 57, 0.05),
    2020: YearlyAnchor(2.18, 2.56, 39, 0.15),
    2021: YearlyAnchor(3.02, 3.29, 68, 0.12),
    2022: YearlyAnchor(3.97, 4.99, 95, 0.18),
    2023: YearlyAnchor(3.52, 4.22, 78, 0.08),
    2024: YearlyAnchor(3.38, 3.95, 76, 0.06),
    2025: YearlyAnchor(3.29, 3.78, 72, 0.05),
    2026: YearlyAnchor(3.35, 3.84, 74, 0.04),
}


class SeededRandom:
    """Park-Miller minimal standard generator returning floats in [0, 1)."""

    MULTIPLIER = 16807
    MODULUS = 2147483647

    def __init__(self, seed: int = RANDOM_SEED):
        if not 0 < seed < self.MODULUS:
            raise ValueError(f"seed must be in (0, {self.MODULUS}), got {seed}.")
        self.state = seed

    def random(self) -> float:
        self.state = (self.state * self.MULTIPLIER) % self.MODULUS
        return (self.state - 1) / (self.MODULUS - 1)


def generate_fuel_data(rng: SeededRandom | None = None) -> pd.DataFrame:
    """Monthly history from January 2014 through February 2026."""
    rng = rng or SeededRandom()
    rows = []
    for year in range(FIRST_YEAR, LAST_YEAR + 1):
        anchor = YEARLY_ANCHORS[year]
        following = YEARLY_ANCHORS[min(year + 1, LAST_YEAR)]
        months_in_year = LAST_YEAR_MONTHS if year == LAST_YEAR else 12
        for month in range(1, months_in_year + 1):
            seasonal = DEFAULT_SEASONAL_FACTORS[month - 1]
            noise = (rng.random() - 0.5) * anchor.volatility
            progress = (month - 1) / 11

            gas_usd = anchor.gasoline + (following.gasoline - anchor.gasoline) * progress + seasonal * 0.35 + noise
            diesel_usd = anchor.diesel + (following.diesel - anchor.diesel) * progress + seasonal * 0.28 + noise * 1.1
            crude_usd = anchor.crude + (following.crude - anchor.crude) * progress + seasonal * 8 + noise * 15

            rows.append(
                {
                    "date": f"{year}-{month:02d}",
                    "year": year,
                    "month": month,
                    "gasoline": round(max(gas_usd, 1.5) * FUEL_CONV, 2),
                    "diesel": round(max(diesel_usd, 1.8) * FUEL_CONV, 2),
                    "crude_oil": float(round(max(crude_usd, 20) * CRUDE_CONV)),
                }
            )
    return pd.DataFrame(rows)


def price_series(data: pd.DataFrame, fuel: str = "gasoline") -> list[float]:
    if fuel not in FUEL_TYPES:
        raise ValueError(f"Unknown fuel type {fuel!r}. Expected one of {', '.join(FUEL_TYPES)}.")
    return data[fuel].astype(float).tolist()


def weekly_series(data: pd.DataFrame, year: int) -> pd.DataFrame:
    """Spread one year of monthly prices across 52 weeks with a small deterministic jitter."""
    year_data = data[data["year"] == year].reset_index(drop=True)
    if year_data.empty:
        return pd.DataFrame(columns=["week", "gasoline", "diesel"])
    rows = []
    for week in range(1, WEEKS_PER_YEAR + 1):
        idx = min(int((week - 1) / WEEKS_PER_YEAR * len(year_data)), len(year_data) - 1)
        row = year_data.iloc[idx]
        jitter = math.sin(week * 3.7 + year) * 0.65
        rows.append(
            {
                "week": week,
                "gasoline": round(float(row["gasoline"]) + jitter, 2),
                "diesel": round(float(row["diesel"]) + jitter * 0.8, 2),
            }
        )
    return pd.DataFrame(rows)
