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
Immutable dense matrix value type

Cells are stored row-major as a tuple of row tuples, so a Matrix can be shared
between readers without copying. Every operation that transforms a matrix
returns a new instance with a freshly allocated grid. Staged construction
goes through MatrixBuilder.

Cells may be any real number (int, float, Fraction or a numpy real scalar).
Arithmetic uses the cell type's own operators, so integer and rational
matrices stay exact until a division or square root is required.

Determinants use Laplace (cofactor) expansion along the first row:

    det(M) = Σ_j (-1)^j · M(0, j) · det(M without row 0 and column j)

The expansion costs O(n!) and is intended for small matrices only. Callers
are responsible for bounding the matrix size.

The inverse of a symmetric matrix is first attempted through a Cholesky
factorization. If the matrix is not positive definite, or a zero pivot is
met, the attempt is abandoned and the general adjoint / determinant formula
is used instead:

    M⁻¹ = adj(M) / det(M)
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from fractions import Fraction
from typing import Any
from typing import Callable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple
from typing import Union

import numpy as np
from numpy.typing import NDArray

from ..config.linalg_params import LinalgParams
from .cholesky import cholesky_inverse
from .matrix_builder import MatrixBuilder
from .matrix_builder import require_index
from .matrix_errors import DegenerateResultError
from .matrix_errors import IndexOutOfBoundsError
from .matrix_errors import InvalidShapeError
from .matrix_errors import InvalidValueError
from .matrix_errors import NotPositiveDefiniteError
from .matrix_errors import NotSquareError
from .matrix_errors import ShapeMismatchError
from .matrix_errors import SingularMatrixError


_LOG: logging.Logger = logging.getLogger(__name__)


Scalar = Union[int, float, Fraction]
Row = Tuple[Scalar, ...]
Grid = Tuple[Row, ...]
GridLike = Union[Sequence[Sequence[Scalar]], NDArray[Any], "Matrix"]
MapFunction = Callable[[Scalar, int, int, "Matrix"], Scalar]


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _require_cell(value: Any, row: int, column: int) -> Scalar:
    if not _is_scalar(value):
        raise InvalidValueError(
            f"cell ({row}, {column}) must be a real number, got {type(value).__name__}"
        )
    return value


def _is_row_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _freeze_grid(grid: GridLike) -> Grid:
    """Validate a grid literal and copy it into nested tuples."""
    if isinstance(grid, Matrix):
        return grid._cells
    if isinstance(grid, np.ndarray):
        if grid.ndim != 2:
            raise InvalidShapeError(
                f"numpy grid must be two-dimensional, got {grid.ndim} dimensions"
            )
        grid = grid.tolist()
    if not _is_row_sequence(grid):
        raise InvalidShapeError("grid must be a sequence of rows")
    if len(grid) == 0:
        raise InvalidShapeError("grid must have at least one row")

    rows: List[Row] = []
    columns: int = -1
    for i, row in enumerate(grid):
        if isinstance(row, np.ndarray):
            row = row.tolist()
        if not _is_row_sequence(row):
            raise InvalidShapeError(f"row {i} must be a sequence of cells")
        if len(row) == 0:
            raise InvalidShapeError(f"row {i} must have at least one column")
        if columns < 0:
            columns = len(row)
        elif len(row) != columns:
            raise InvalidShapeError(
                f"row {i} has {len(row)} columns, expected {columns}"
            )
        rows.append(tuple(_require_cell(value, i, j) for j, value in enumerate(row)))
    return tuple(rows)


@dataclass(frozen=True, eq=False)
class Matrix:
    """Immutable rectangular grid of real numbers.

    Attributes:
        rows: Number of rows, at least 1
        columns: Number of columns, at least 1
    """

    _cells: Grid

    # Let numpy defer to the reflected operators instead of broadcasting
    __array_ufunc__ = None

    def __init__(self, grid: GridLike) -> None:
        """Validate and copy a rectangular grid of real numbers.

        Raises:
            InvalidShapeError: If the grid is empty, ragged, or not 2-D
            InvalidValueError: If a cell is not a real number
        """
        object.__setattr__(self, "_cells", _freeze_grid(grid))

    ############################################################################
    # Construction
    ############################################################################

    @classmethod
    def identity(cls, size: int) -> Matrix:
        """Return the size x size identity matrix."""
        if isinstance(size, bool) or not isinstance(size, numbers.Integral):
            raise InvalidShapeError("identity size must be an int")
        if size < 1:
            raise InvalidShapeError(f"identity size must be positive, got {size}")
        builder: MatrixBuilder = MatrixBuilder(int(size), int(size), fill=0)
        for i in range(int(size)):
            builder.set(i, i, 1)
        return builder.build()

    @classmethod
    def from_numpy(cls, array: NDArray[Any]) -> Matrix:
        """Return a matrix holding the values of a 2-D numpy array."""
        return cls(np.asarray(array))

    def to_builder(self) -> MatrixBuilder:
        """Return a builder pre-filled with this matrix."""
        return MatrixBuilder.from_matrix(self)

    ############################################################################
    # Storage access
    ############################################################################

    @property
    def rows(self) -> int:
        return len(self._cells)

    @property
    def columns(self) -> int:
        return len(self._cells[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.columns)

    def get(self, row: int, column: int) -> Scalar:
        """Return the value at zero-based (row, column)."""
        self._check_bounds(row, column)
        return self._cells[row][column]

    def is_square(self) -> bool:
        return self.rows == self.columns

    def is_symmetric(self, tol: float = 0.0) -> bool:
        """Return True if M(i, j) matches M(j, i) for every off-diagonal pair.

        Args:
            tol: Absolute tolerance for the comparison, zero for exact

        Returns:
            False for non-square matrices
        """
        if not self.is_square():
            return False
        for i in range(self.rows):
            for j in range(i + 1, self.columns):
                if not abs(self._cells[i][j] - self._cells[j][i]) <= tol:
                    return False
        return True

    def to_list(self) -> List[List[Scalar]]:
        """Return a mutable copy of the cells as nested lists."""
        return [list(row) for row in self._cells]

    def to_numpy(self, dtype: Any = np.float64) -> NDArray[Any]:
        """Return the cells as a new 2-D numpy array."""
        return np.array(self.to_list(), dtype=dtype)

    def __getitem__(self, key: Union[int, Tuple[int, int]]) -> Union[Row, Scalar]:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise InvalidValueError("matrix index must be (row, column)")
            return self.get(key[0], key[1])
        if isinstance(key, bool) or not isinstance(key, numbers.Integral):
            raise InvalidValueError("matrix index must be an int or (row, column)")
        if key < 0 or key >= self.rows:
            raise IndexOutOfBoundsError(
                f"row {key} out of range for {self.rows}x{self.columns} matrix"
            )
        return self._cells[key]

    def __iter__(self) -> Iterator[Row]:
        return iter(self._cells)

    def __len__(self) -> int:
        return self.rows

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r})"

    ############################################################################
    # Elementwise algebra
    ############################################################################

    def map(self, fn: MapFunction) -> Matrix:
        """Return a new matrix with cell (i, j) = fn(value, i, j, self)."""
        grid: List[List[Scalar]] = []
        for i, row in enumerate(self._cells):
            grid.append([fn(value, i, j, self) for j, value in enumerate(row)])
        return Matrix(grid)

    def add(self, value: Union[Matrix, Scalar]) -> Matrix:
        """Add a same-shaped matrix or broadcast a scalar."""
        if isinstance(value, Matrix):
            self._require_same_shape(value, "add")
            return self.map(lambda element, i, j, _: element + value._cells[i][j])
        scalar: Scalar = self._require_scalar_operand(value, "add")
        return self.map(lambda element, _i, _j, _: element + scalar)

    def subtract(self, value: Union[Matrix, Scalar]) -> Matrix:
        """Subtract a same-shaped matrix or broadcast a scalar."""
        if isinstance(value, Matrix):
            self._require_same_shape(value, "subtract")
            return self.map(lambda element, i, j, _: element - value._cells[i][j])
        scalar: Scalar = self._require_scalar_operand(value, "subtract")
        return self.map(lambda element, _i, _j, _: element - scalar)

    def multiply(self, value: Union[Matrix, Scalar]) -> Matrix:
        """Return the matrix product with a matrix, or scale by a scalar.

        Raises:
            ShapeMismatchError: If self.columns != value.rows
        """
        if isinstance(value, Matrix):
            if self.columns != value.rows:
                raise ShapeMismatchError(
                    f"cannot multiply {self.rows}x{self.columns} by "
                    f"{value.rows}x{value.columns}"
                )
            builder: MatrixBuilder = MatrixBuilder(self.rows, value.columns)
            for i in range(self.rows):
                row: Row = self._cells[i]
                for j in range(value.columns):
                    total: Scalar = 0
                    for k in range(self.columns):
                        total += row[k] * value._cells[k][j]
                    builder.set(i, j, total)
            return builder.build()
        scalar: Scalar = self._require_scalar_operand(value, "multiply")
        return self.map(lambda element, _i, _j, _: element * scalar)

    def eq(self, other: Matrix) -> bool:
        """Return True if both matrices have the same shape and values."""
        if not isinstance(other, Matrix):
            raise InvalidValueError("eq requires a Matrix")
        if self.shape != other.shape:
            return False
        for i in range(self.rows - 1, -1, -1):
            for j in range(self.columns - 1, -1, -1):
                if self._cells[i][j] != other._cells[i][j]:
                    return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.eq(other)

    def __hash__(self) -> int:
        return hash(self._cells)

    def __add__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix) or _is_scalar(other):
            return self.add(other)
        return NotImplemented

    def __radd__(self, other: Any) -> Matrix:
        if _is_scalar(other):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix) or _is_scalar(other):
            return self.subtract(other)
        return NotImplemented

    def __rsub__(self, other: Any) -> Matrix:
        if _is_scalar(other):
            return self.map(lambda element, _i, _j, _: other - element)
        return NotImplemented

    def __mul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix) or _is_scalar(other):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        if _is_scalar(other):
            return self.multiply(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    ############################################################################
    # Structural operations
    ############################################################################

    def transpose(self) -> Matrix:
        """Return the columns x rows transpose."""
        builder: MatrixBuilder = MatrixBuilder(self.columns, self.rows)
        for i, row in enumerate(self._cells):
            for j, value in enumerate(row):
                builder.set(j, i, value)
        return builder.build()

    def trace(self) -> Scalar:
        """Return the sum of the main diagonal."""
        self._require_square("trace")
        total: Scalar = 0
        for i in range(self.rows):
            total += self._cells[i][i]
        return total

    def submatrix(
        self, row: Optional[int] = None, column: Optional[int] = None
    ) -> Matrix:
        """Return a copy with the given row and/or column removed.

        Args:
            row: Row to remove, or None to keep every row
            column: Column to remove, or None to keep every column

        Raises:
            InvalidValueError: If a given index is not an int
            IndexOutOfBoundsError: If a given index is outside the matrix
            DegenerateResultError: If no rows or no columns would remain
        """
        if row is not None:
            require_index(row, "row")
        if column is not None:
            require_index(column, "column")
        if row is not None and (row < 0 or row >= self.rows):
            raise IndexOutOfBoundsError(
                f"row {row} out of range for {self.rows}x{self.columns} matrix"
            )
        if column is not None and (column < 0 or column >= self.columns):
            raise IndexOutOfBoundsError(
                f"column {column} out of range for {self.rows}x{self.columns} matrix"
            )
        rows: int = self.rows - (0 if row is None else 1)
        columns: int = self.columns - (0 if column is None else 1)
        if rows < 1 or columns < 1:
            raise DegenerateResultError(
                f"submatrix of {self.rows}x{self.columns} would be {rows}x{columns}"
            )
        grid: List[List[Scalar]] = []
        for i, values in enumerate(self._cells):
            if i == row:
                continue
            grid.append([value for j, value in enumerate(values) if j != column])
        return Matrix(grid)

    ############################################################################
    # Determinant, adjoint and inverse
    ############################################################################

    def determinant(self) -> Scalar:
        """Return the determinant by cofactor expansion along the first row."""
        self._require_square("determinant")
        if self.rows == 1:
            return self._cells[0][0]
        total: Scalar = 0
        for j in range(self.columns):
            sign: int = 1 if j % 2 == 0 else -1
            total += sign * self._cells[0][j] * self.submatrix(0, j).determinant()
        return total

    def adjoint(self) -> Matrix:
        """Return the adjugate, the transpose of the cofactor matrix."""
        self._require_square("adjoint")
        if self.rows == 1:
            # The empty minor of a 1x1 matrix has determinant 1
            return Matrix([[1]])
        return self.map(_cofactor).transpose()

    def inverse(self, params: Optional[LinalgParams] = None) -> Matrix:
        """Return the inverse of a square, non-singular matrix.

        Symmetric matrices first try the Cholesky inverse. Failure of that
        attempt is not an error; the general adjoint / determinant path is
        used instead. This includes cells too large to convert to float.

        Args:
            params: Inverse engine parameters, defaults when None

        Raises:
            NotSquareError: If the matrix is not square
            SingularMatrixError: If the determinant is exactly zero
        """
        if params is None:
            params = LinalgParams.defaults()
        else:
            params.validate()

        self._require_square("inverse")
        det: Scalar = self.determinant()
        if det == 0:
            raise SingularMatrixError("matrix has a zero determinant")

        if params.cholesky_enabled and self.is_symmetric(params.symmetry_tol):
            try:
                result: Matrix = cholesky_inverse(self, params.cholesky_zero_tol)
            except (
                NotPositiveDefiniteError,
                SingularMatrixError,
                OverflowError,
            ) as exc:
                _LOG.info("Skipping Cholesky inverse, %s", exc)
            else:
                _LOG.debug(
                    "Inverted %dx%d matrix with Cholesky", self.rows, self.columns
                )
                return result

        return self.adjoint().multiply(1 / det)

    ############################################################################
    # Helpers
    ############################################################################

    def _check_bounds(self, row: int, column: int) -> None:
        require_index(row, "row")
        require_index(column, "column")
        if row < 0 or row >= self.rows or column < 0 or column >= self.columns:
            raise IndexOutOfBoundsError(
                f"index ({row}, {column}) out of range for "
                f"{self.rows}x{self.columns} matrix"
            )

    def _require_square(self, name: str) -> None:
        if not self.is_square():
            raise NotSquareError(
                f"{name} requires a square matrix, got {self.rows}x{self.columns}"
            )

    def _require_same_shape(self, other: Matrix, name: str) -> None:
        if self.shape != other.shape:
            raise ShapeMismatchError(
                f"cannot {name} {other.rows}x{other.columns} and "
                f"{self.rows}x{self.columns} matrices"
            )

    @staticmethod
    def _require_scalar_operand(value: Any, name: str) -> Scalar:
        if not _is_scalar(value):
            raise InvalidValueError(
                f"{name} requires a Matrix or a real scalar, got {type(value).__name__}"
            )
        return value


def _cofactor(_value: Scalar, row: int, column: int, source: Matrix) -> Scalar:
    sign: int = 1 if (row + column) % 2 == 0 else -1
    return sign * source.submatrix(row, column).determinant()
