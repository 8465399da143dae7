################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Dense matrix algebra with determinant, adjoint and inverse."""

from __future__ import annotations

from oasis_linalg.config.linalg_params import LinalgParams
from oasis_linalg.config.linalg_params import LinalgParamsError
from oasis_linalg.matrix.cholesky import cholesky_decompose
from oasis_linalg.matrix.cholesky import cholesky_inverse
from oasis_linalg.matrix.matrix import Matrix
from oasis_linalg.matrix.matrix_builder import MatrixBuilder
from oasis_linalg.matrix.matrix_errors import DegenerateResultError
from oasis_linalg.matrix.matrix_errors import IndexOutOfBoundsError
from oasis_linalg.matrix.matrix_errors import InvalidShapeError
from oasis_linalg.matrix.matrix_errors import InvalidValueError
from oasis_linalg.matrix.matrix_errors import MatrixError
from oasis_linalg.matrix.matrix_errors import NotPositiveDefiniteError
from oasis_linalg.matrix.matrix_errors import NotSquareError
from oasis_linalg.matrix.matrix_errors import ShapeMismatchError
from oasis_linalg.matrix.matrix_errors import SingularMatrixError


__all__ = [
    "DegenerateResultError",
    "IndexOutOfBoundsError",
    "InvalidShapeError",
    "InvalidValueError",
    "LinalgParams",
    "LinalgParamsError",
    "Matrix",
    "MatrixBuilder",
    "MatrixError",
    "NotPositiveDefiniteError",
    "NotSquareError",
    "ShapeMismatchError",
    "SingularMatrixError",
    "cholesky_decompose",
    "cholesky_inverse",
]
