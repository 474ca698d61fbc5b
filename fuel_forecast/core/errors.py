from __future__ import annotations


class ForecastEngineError(ValueError):
    """Base class for rejected regression or forecast inputs."""


class DegenerateInputError(ForecastEngineError):
    """Too few points, constant x, or a singular normal-equations system."""


class ShapeMismatchError(ForecastEngineError):
    """Sequence lengths or matrix shapes do not line up."""


class InvalidParameterError(ForecastEngineError):
    """A model or horizon parameter is out of range."""
