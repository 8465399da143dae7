################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Exception types raised by dense matrix operations."""

from __future__ import annotations


class MatrixError(Exception):
    """Base class for all matrix errors."""


class InvalidShapeError(MatrixError, ValueError):
    """Raised when a grid is empty, ragged, or not two-dimensional."""


class InvalidValueError(MatrixError, TypeError):
    """Raised when a cell or operand is not a real number or matrix."""


class IndexOutOfBoundsError(MatrixError, IndexError):
    """Raised when a row or column index is outside the matrix."""


class ShapeMismatchError(MatrixError, ValueError):
    """Raised when operand shapes are incompatible."""


class NotSquareError(MatrixError, ValueError):
    """Raised when a square-only operation receives a non-square matrix."""


class DegenerateResultError(MatrixError, ValueError):
    """Raised when a submatrix would have zero rows or columns."""


class SingularMatrixError(MatrixError, ZeroDivisionError):
    """Raised when a matrix has a zero determinant or a zero pivot."""


class NotPositiveDefiniteError(MatrixError, ValueError):
    """Raised when a Cholesky decomposition meets a negative residual."""
