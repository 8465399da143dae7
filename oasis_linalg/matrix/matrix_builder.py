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
Staged construction of immutable matrices

A MatrixBuilder owns a mutable row-major grid that can be filled cell by cell
with set() and then frozen into a Matrix with build(). Each build() call copies
the grid, so later writes never leak into matrices that were already built.
"""

from __future__ import annotations

import numbers
from typing import TYPE_CHECKING
from typing import Any
from typing import List

from .matrix_errors import IndexOutOfBoundsError
from .matrix_errors import InvalidShapeError
from .matrix_errors import InvalidValueError


if TYPE_CHECKING:
    from .matrix import Matrix
    from .matrix import Scalar


def require_index(value: Any, name: str) -> None:
    """Require a row or column index to be an int."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidValueError(
            f"{name} index must be an int, got {type(value).__name__}"
        )


class MatrixBuilder:
    """Mutable scratch grid used to assemble a Matrix."""

    def __init__(self, rows: int, columns: int, fill: Scalar = 0) -> None:
        if isinstance(rows, bool) or not isinstance(rows, int) or rows < 1:
            raise InvalidShapeError("builder rows must be a positive int")
        if isinstance(columns, bool) or not isinstance(columns, int) or columns < 1:
            raise InvalidShapeError("builder columns must be a positive int")
        self._rows: int = rows
        self._columns: int = columns
        self._grid: List[List[Scalar]] = [
            [fill for _ in range(columns)] for _ in range(rows)
        ]

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> MatrixBuilder:
        """Return a builder pre-filled with the cells of a matrix."""
        builder: MatrixBuilder = cls(matrix.rows, matrix.columns)
        for i in range(matrix.rows):
            for j in range(matrix.columns):
                builder._grid[i][j] = matrix.get(i, j)
        return builder

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    def get(self, row: int, column: int) -> Scalar:
        """Return the staged value at (row, column)."""
        self._check_bounds(row, column)
        return self._grid[row][column]

    def set(self, row: int, column: int, value: Scalar) -> MatrixBuilder:
        """Stage a value at (row, column) and return the builder."""
        self._check_bounds(row, column)
        self._grid[row][column] = value
        return self

    def build(self) -> Matrix:
        """Freeze the staged grid into a new Matrix."""
        from .matrix import Matrix

        return Matrix(self._grid)

    def _check_bounds(self, row: int, column: int) -> None:
        require_index(row, "row")
        require_index(column, "column")
        if row < 0 or row >= self._rows or column < 0 or column >= self._columns:
            raise IndexOutOfBoundsError(
                f"index ({row}, {column}) out of range for "
                f"{self._rows}x{self._columns} builder"
            )
