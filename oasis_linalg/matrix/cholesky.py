################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Cholesky decomposition and inverse for symmetric positive-definite matrices

The decomposition factors a symmetric matrix as M = Tᵀ T with T upper
triangular:

    T(i, i) = sqrt(M(i, i) - Σ_{k<i} T(k, i)²)
    T(i, j) = (M(i, j) - Σ_{k<i} T(k, i) T(k, j)) / T(i, i),   j > i

A diagonal residual with magnitude below ``zero_tol`` is snapped to an exact
zero so round-off cannot produce a spurious negative square root. The zero
pivot is then reported as singular when it is used as a divisor.

The inverse B = M⁻¹ is recovered from T by back-substitution, last row first:

    B(j, j) = 1 / d(j) - Σ_{k>j} T(j, k) B(j, k) / T(j, j)
    B(i, j) = B(j, i) = -Σ_{k>i} T(i, k) B(k, j) / T(i, i),   i < j

where d(j) = T(j, j)² is the diagonal residual kept from the decomposition,
so 1 / d(j) carries no square root round-off. Writing both B(i, j) and
B(j, i) makes the result symmetric by construction.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
from typing import List
from typing import Tuple

from .matrix_builder import MatrixBuilder
from .matrix_errors import NotPositiveDefiniteError
from .matrix_errors import NotSquareError
from .matrix_errors import SingularMatrixError


if TYPE_CHECKING:
    from .matrix import Matrix


# Residuals below this magnitude are treated as an exact zero pivot
DEFAULT_ZERO_TOL: float = 1e-5


def cholesky_decompose(matrix: Matrix, zero_tol: float = DEFAULT_ZERO_TOL) -> Matrix:
    """Return the upper-triangular factor T with M = Tᵀ T.

    Only the upper triangle of ``matrix`` is read; symmetry is the caller's
    responsibility.

    Args:
        matrix: Square matrix to factor
        zero_tol: Magnitude below which a diagonal residual counts as zero

    Returns:
        Upper-triangular factor T

    Raises:
        NotSquareError: If the matrix is not square
        NotPositiveDefiniteError: If a diagonal residual is negative
        SingularMatrixError: If a zero pivot is needed as a divisor
    """
    if not matrix.is_square():
        raise NotSquareError("cholesky requires a square matrix")
    t: List[List[float]]
    t, _ = _decompose(matrix, zero_tol)
    return _to_matrix(t)


def cholesky_inverse(matrix: Matrix, zero_tol: float = DEFAULT_ZERO_TOL) -> Matrix:
    """Invert a symmetric positive-definite matrix through its Cholesky factor.

    Args:
        matrix: Square symmetric matrix to invert
        zero_tol: Magnitude below which a diagonal residual counts as zero

    Returns:
        Symmetric inverse of ``matrix``

    Raises:
        NotSquareError: If the matrix is not square
        NotPositiveDefiniteError: If the decomposition fails on a negative
            residual
        SingularMatrixError: If a zero pivot is met in either stage
    """
    if not matrix.is_square():
        raise NotSquareError("cholesky requires a square matrix")
    t: List[List[float]]
    residuals: List[float]
    t, residuals = _decompose(matrix, zero_tol)
    b: List[List[float]] = _invert_upper(t, residuals)
    return _to_matrix(b)


def _decompose(
    matrix: Matrix, zero_tol: float
) -> Tuple[List[List[float]], List[float]]:
    """Return the upper factor and the diagonal residuals T(i, i)²."""
    size: int = matrix.rows
    t: List[List[float]] = [[0.0 for _ in range(size)] for _ in range(size)]
    residuals: List[float] = [0.0 for _ in range(size)]
    for i in range(size):
        acc: float = 0.0
        for k in range(i):
            acc += t[k][i] * t[k][i]
        d: float = matrix.get(i, i) - acc
        if abs(d) < zero_tol:
            t[i][i] = 0.0
        elif d < 0.0:
            raise NotPositiveDefiniteError(
                f"negative residual {d!r} at diagonal {i}"
            )
        else:
            t[i][i] = math.sqrt(d)
            residuals[i] = d

        # The last row has no off-diagonal entries to divide by its pivot
        if i + 1 < size and t[i][i] == 0.0:
            raise SingularMatrixError(f"zero pivot at diagonal {i}")
        for j in range(i + 1, size):
            acc = 0.0
            for k in range(i):
                acc += t[k][i] * t[k][j]
            t[i][j] = (matrix.get(i, j) - acc) / t[i][i]
    return t, residuals


def _invert_upper(t: List[List[float]], residuals: List[float]) -> List[List[float]]:
    size: int = len(t)
    b: List[List[float]] = [[0.0 for _ in range(size)] for _ in range(size)]
    for j in range(size - 1, -1, -1):
        tjj: float = t[j][j]
        if tjj == 0.0:
            raise SingularMatrixError(f"zero pivot at diagonal {j}")
        acc: float = 0.0
        for k in range(j + 1, size):
            acc += t[j][k] * b[j][k]
        b[j][j] = 1.0 / residuals[j] - acc / tjj

        for i in range(j - 1, -1, -1):
            if t[i][i] == 0.0:
                raise SingularMatrixError(f"zero pivot at diagonal {i}")
            acc = 0.0
            for k in range(i + 1, size):
                acc += t[i][k] * b[k][j]
            # Subtract from +0.0 so a zero sum stays positive zero
            b[i][j] = 0.0 - acc / t[i][i]
            b[j][i] = b[i][j]
    return b


def _to_matrix(grid: List[List[float]]) -> Matrix:
    size: int = len(grid)
    builder: MatrixBuilder = MatrixBuilder(size, size, fill=0.0)
    for i in range(size):
        for j in range(size):
            builder.set(i, j, grid[i][j])
    return builder.build()
