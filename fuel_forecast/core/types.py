from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class FitMetrics:
    r_squared: float
    rmse: float
    mae: float
    mape: float


@dataclass
class RegressionResult:
    coefficients: list[float]
    r_squared: float
    rmse: float
    mae: float
    mape: float
    predictions: list[float] = field(default_factory=list)
    residuals: list[float] = field(default_factory=list)

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    @property
    def metrics(self) -> FitMetrics:
        return FitMetrics(r_squared=self.r_squared, rmse=self.rmse, mae=self.mae, mape=self.mape)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ForecastPoint:
    predicted: float
    lower95: float
    upper95: float

    @property
    def width(self) -> float:
        return self.upper95 - self.lower95

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass
class HoldoutResult:
    model_id: str
    degree: int
    holdout_months: int
    train_metrics: FitMetrics
    test_metrics: FitMetrics
    coefficients: list[float] = field(default_factory=list)
    actual: list[float] = field(default_factory=list)
    predicted: list[float] = field(default_factory=list)
