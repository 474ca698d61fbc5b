"""Dense matrix helpers used to solve the least-squares normal equations."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from fuel_forecast.core.errors import DegenerateInputError, ShapeMismatchError

# Pivots below eps * size * column scale are treated as zero.
_PIVOT_TOLERANCE = np.finfo(float).eps


def _as_matrix(A: Sequence[Sequence[float]] | np.ndarray, name: str = "A") -> np.ndarray:
    arr = np.array(A, dtype=float)
    if arr.ndim != 2:
        raise ShapeMismatchError(f"{name} must be two-dimensional, got shape {arr.shape}.")
    return arr


def transpose(A: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    arr = _as_matrix(A)
    rows, cols = arr.shape
    result = np.zeros((cols, rows))
    for i in range(rows):
        result[:, i] = arr[i]
    return result


def mat_mul(A: Sequence[Sequence[float]] | np.ndarray, B: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    left = _as_matrix(A, "A")
    right = _as_matrix(B, "B")
    if left.shape[1] != right.shape[0]:
        raise ShapeMismatchError(f"Cannot multiply {left.shape} by {right.shape}: inner dimensions differ.")
    result = np.zeros((left.shape[0], right.shape[1]))
    for i in range(left.shape[0]):
        for j in range(right.shape[1]):
            result[i, j] = float(np.dot(left[i], right[:, j]))
    return result


def mat_vec_mul(A: Sequence[Sequence[float]] | np.ndarray, v: Sequence[float] | np.ndarray) -> np.ndarray:
    arr = _as_matrix(A)
    vec = np.array(v, dtype=float)
    if vec.ndim != 1 or arr.shape[1] != len(vec):
        raise ShapeMismatchError(f"Cannot multiply matrix {arr.shape} by vector of length {vec.size}.")
    return np.array([float(np.dot(row, vec)) for row in arr])


def solve_linear_system(A: Sequence[Sequence[float]] | np.ndarray, b: Sequence[float] | np.ndarray) -> np.ndarray:
    """Solve ``A x = b`` by Gaussian elimination with partial pivoting.

    Raises
    ------
    ShapeMismatchError
        If ``A`` is not square or ``b`` does not match its row count.
    DegenerateInputError
        If a pivot is zero, non-finite or negligible relative to its column,
        i.e. ``A`` is singular to working precision.
    """
    matrix = _as_matrix(A)
    rhs = np.array(b, dtype=float)
    n = matrix.shape[0]
    if matrix.shape[1] != n:
        raise ShapeMismatchError(f"Coefficient matrix must be square, got shape {matrix.shape}.")
    if rhs.ndim != 1 or len(rhs) != n:
        raise ShapeMismatchError(f"Right-hand side must have length {n}, got {rhs.size}.")

    column_scale = np.abs(matrix).max(axis=0) if n else np.zeros(0)
    aug = np.column_stack([matrix, rhs])

    for col in range(n):
        max_row = col + int(np.argmax(np.abs(aug[col:, col])))
        if max_row != col:
            aug[[col, max_row]] = aug[[max_row, col]]

        pivot = aug[col, col]
        if not np.isfinite(pivot) or abs(pivot) <= _PIVOT_TOLERANCE * n * column_scale[col]:
            raise DegenerateInputError(f"Matrix is singular to working precision (pivot {pivot!r} in column {col}).")

        for row in range(col + 1, n):
            factor = aug[row, col] / pivot
            aug[row, col:] -= factor * aug[col, col:]

    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        x[i] = (aug[i, n] - np.dot(aug[i, i + 1 : n], x[i + 1 :])) / aug[i, i]

    if not np.all(np.isfinite(x)):
        raise DegenerateInputError("Solution contains non-finite values.")
    return x
