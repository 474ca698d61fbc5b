from __future__ import annotations

import numpy as np
import pytest

from fuel_forecast.core.errors import DegenerateInputError, ShapeMismatchError
from fuel_forecast.services.linalg import mat_mul, mat_vec_mul, solve_linear_system, transpose


def test_transpose_swaps_rows_and_columns():
    out = transpose([[1, 2, 3], [4, 5, 6]])
    assert out.shape == (3, 2)
    assert out.tolist() == [[1, 4], [2, 5], [3, 6]]


def test_mat_mul_and_mat_vec_mul():
    A = [[1, 2], [3, 4]]
    B = [[5, 6], [7, 8]]
    assert mat_mul(A, B).tolist() == [[19, 22], [43, 50]]
    assert mat_vec_mul(A, [1, 1]).tolist() == [3, 7]


def test_shape_mismatch_is_rejected():
    with pytest.raises(ShapeMismatchError):
        mat_mul([[1, 2, 3]], [[1, 2]])
    with pytest.raises(ShapeMismatchError):
        mat_vec_mul([[1, 2]], [1, 2, 3])
    with pytest.raises(ShapeMismatchError):
        solve_linear_system([[1, 2, 3], [4, 5, 6]], [1, 2])


def test_solve_matches_numpy():
    A = np.array([[4.0, -2.0, 1.0], [-2.0, 4.0, -2.0], [1.0, -2.0, 3.0]])
    b = np.array([11.0, -16.0, 17.0])
    assert solve_linear_system(A, b) == pytest.approx(np.linalg.solve(A, b))


def test_solve_needs_row_swap_for_zero_leading_pivot():
    x = solve_linear_system([[0, 1], [1, 0]], [2, 3])
    assert x.tolist() == pytest.approx([3, 2])


def test_singular_system_raises():
    with pytest.raises(DegenerateInputError):
        solve_linear_system([[1, 2], [2, 4]], [3, 6])


def test_solve_does_not_mutate_inputs():
    A = [[2.0, 1.0], [1.0, 3.0]]
    b = [3.0, 5.0]
    solve_linear_system(A, b)
    assert A == [[2.0, 1.0], [1.0, 3.0]]
    assert b == [3.0, 5.0]
