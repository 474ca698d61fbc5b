from __future__ import annotations

import pytest

from fuel_forecast.core.errors import DegenerateInputError, InvalidParameterError, ShapeMismatchError
from fuel_forecast.services.regression import (
    design_matrix,
    evaluate_polynomial,
    linear_regression,
    polynomial_regression,
    polynomial_slope,
)

NOISY_Y = [3.0, 1.0, 4.0, 1.0, 5.0, 9.0, 2.0, 6.0]


def test_linear_regression_exact_line():
    result = linear_regression([0, 1, 2, 3], [1, 3, 5, 7])
    assert result.coefficients == pytest.approx([1.0, 2.0])
    assert result.r_squared == pytest.approx(1.0)
    assert result.rmse == pytest.approx(0.0)
    assert result.degree == 1


def test_linear_regression_perfect_fit_residuals():
    x = list(range(10))
    y = [2 * xi + 5 for xi in x]
    result = linear_regression(x, y)
    assert result.r_squared == pytest.approx(1.0)
    assert result.residuals == pytest.approx([0.0] * 10, abs=1e-9)


def test_linear_residuals_sum_to_zero():
    result = linear_regression(list(range(len(NOISY_Y))), NOISY_Y)
    assert sum(result.residuals) == pytest.approx(0.0, abs=1e-9)
    assert len(result.predictions) == len(result.residuals) == len(NOISY_Y)


def test_polynomial_degree_one_matches_linear():
    x = list(range(len(NOISY_Y)))
    lin = linear_regression(x, NOISY_Y)
    poly = polynomial_regression(x, NOISY_Y, 1)
    assert poly.coefficients == pytest.approx(lin.coefficients, rel=1e-9, abs=1e-9)
    assert poly.rmse == pytest.approx(lin.rmse, abs=1e-4)


def test_polynomial_through_three_points():
    result = polynomial_regression([0, 1, 2], [1, 2, 5], 2)
    assert result.coefficients == pytest.approx([1.0, 0.0, 1.0], abs=1e-9)
    assert result.r_squared == pytest.approx(1.0)
    assert result.residuals == pytest.approx([0.0, 0.0, 0.0], abs=1e-9)
    assert len(result.coefficients) == 3


def test_cubic_fit_recovers_known_polynomial():
    coefs = [2.0, -0.5, 0.1, 0.01]
    x = list(range(20))
    y = [evaluate_polynomial(coefs, xi) for xi in x]
    result = polynomial_regression(x, y, 3)
    assert result.coefficients == pytest.approx(coefs, abs=1e-4)
    assert result.rmse == pytest.approx(0.0, abs=1e-4)


def test_fits_are_idempotent():
    x = list(range(len(NOISY_Y)))
    assert linear_regression(x, NOISY_Y) == linear_regression(x, NOISY_Y)
    assert polynomial_regression(x, NOISY_Y, 3) == polynomial_regression(x, NOISY_Y, 3)


def test_degenerate_inputs_raise():
    with pytest.raises(DegenerateInputError):
        linear_regression([2, 2, 2], [1, 2, 3])
    with pytest.raises(DegenerateInputError):
        linear_regression([1], [1])
    with pytest.raises(DegenerateInputError):
        polynomial_regression([0, 1, 2], [1, 2, 3], 3)
    with pytest.raises(DegenerateInputError):
        polynomial_regression([1, 1, 2, 2], [1, 2, 3, 4], 2)
    with pytest.raises(InvalidParameterError):
        polynomial_regression([0, 1, 2], [1, 2, 3], 0)
    with pytest.raises(InvalidParameterError):
        polynomial_regression([0, 1, 2], [1, 2, 3], 1.5)


def test_length_mismatch_raises():
    with pytest.raises(ShapeMismatchError):
        linear_regression([0, 1, 2], [1, 2])
    with pytest.raises(ShapeMismatchError):
        polynomial_regression([0, 1, 2], [1, 2], 1)


def test_design_matrix_and_slope():
    X = design_matrix([0, 2, 3], 2)
    assert X.tolist() == [[1, 0, 0], [1, 2, 4], [1, 3, 9]]
    # d/dx (1 + 2x + 3x^2) = 2 + 6x
    assert polynomial_slope([1, 2, 3], 4) == pytest.approx(26.0)
    assert polynomial_slope([7], 10) == 0.0


def test_nearly_constant_x_is_rejected():
    x = [1e9, 1e9 + 1e-6, 1e9 + 2e-6]
    with pytest.raises(DegenerateInputError):
        linear_regression(x, [1.0, 2.0, 3.0])
    # Large offsets with a real spread still fit.
    result = linear_regression([1e3, 1e3 + 1, 1e3 + 2], [1.0, 3.0, 5.0])
    assert result.coefficients[1] == pytest.approx(2.0)
