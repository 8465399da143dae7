################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for elementwise matrix algebra and equality."""

from __future__ import annotations

from typing import Any
from typing import List

import numpy as np
import pytest

from oasis_linalg.matrix.matrix import Matrix
from oasis_linalg.matrix.matrix_errors import InvalidValueError
from oasis_linalg.matrix.matrix_errors import ShapeMismatchError


def test_map_passes_position_and_source() -> None:
    """Checks map callbacks see value, row, column and the source matrix."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    seen: List[Any] = []

    def record(value: int, row: int, column: int, source: Matrix) -> int:
        seen.append((value, row, column, source))
        return value * 10 + row + column

    mapped: Matrix = matrix.map(record)

    assert mapped.to_list() == [[10, 21], [31, 42]]
    assert [entry[:3] for entry in seen] == [
        (1, 0, 0),
        (2, 0, 1),
        (3, 1, 0),
        (4, 1, 1),
    ]
    assert all(entry[3] is matrix for entry in seen)
    assert matrix.to_list() == [[1, 2], [3, 4]]


def test_add_scalar_and_matrix() -> None:
    """Checks add broadcasts scalars and sums matching matrices."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    assert matrix.add(1).to_list() == [[2, 3], [4, 5]]
    assert matrix.add(Matrix([[10, 20], [30, 40]])).to_list() == [[11, 22], [33, 44]]
    assert (matrix + 1).eq(matrix.add(1))
    assert (1 + matrix).eq(matrix.add(1))


def test_subtract_scalar_and_matrix() -> None:
    """Checks subtract broadcasts scalars and differences matching matrices."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    assert matrix.subtract(1).to_list() == [[0, 1], [2, 3]]
    assert matrix.subtract(matrix).to_list() == [[0, 0], [0, 0]]
    assert (matrix - 1).eq(matrix.subtract(1))
    assert (10 - matrix).to_list() == [[9, 8], [7, 6]]


def test_add_subtract_shape_mismatch() -> None:
    """Checks elementwise operations reject differently shaped matrices."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    other: Matrix = Matrix([[1, 2, 3], [4, 5, 6]])
    with pytest.raises(ShapeMismatchError):
        matrix.add(other)
    with pytest.raises(ShapeMismatchError):
        matrix.subtract(other)


def test_multiply_scalar() -> None:
    """Checks multiply scales every cell by a scalar."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    assert matrix.multiply(2).to_list() == [[2, 4], [6, 8]]
    assert (0.5 * matrix).to_list() == [[0.5, 1.0], [1.5, 2.0]]
    assert (matrix * 3).to_list() == [[3, 6], [9, 12]]


def test_numpy_scalar_operands() -> None:
    """Checks numpy scalars broadcast from either side."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    assert (np.float64(2.0) * matrix).to_list() == [[2.0, 4.0], [6.0, 8.0]]
    assert matrix.add(np.int64(1)).to_list() == [[2, 3], [4, 5]]


def test_multiply_matrix_product() -> None:
    """Checks the standard matrix product of a 2x3 and a 3x2 matrix."""
    a: Matrix = Matrix([[1, 2, 3], [4, 5, 6]])
    b: Matrix = Matrix([[7, 8], [9, 10], [11, 12]])
    product: Matrix = a.multiply(b)
    assert product.shape == (2, 2)
    assert product.to_list() == [[58, 64], [139, 154]]
    assert (a @ b).eq(product)
    assert (a * b).eq(product)
    assert np.array_equal(product.to_numpy(), a.to_numpy() @ b.to_numpy())


def test_multiply_shape_mismatch() -> None:
    """Checks matrix products require inner dimensions to agree."""
    a: Matrix = Matrix([[1, 2, 3], [4, 5, 6]])
    with pytest.raises(ShapeMismatchError):
        a.multiply(a)


def test_identity_law() -> None:
    """Checks identity is a two-sided multiplicative unit."""
    matrix: Matrix = Matrix([[2, -1, 3], [0.5, 4, 2], [-2, 1, 0.25]])
    identity: Matrix = Matrix.identity(3)
    assert identity.multiply(matrix).eq(matrix)
    assert matrix.multiply(identity).eq(matrix)


@pytest.mark.parametrize("operand", ["1", None, True, [1, 2], 1j])
def test_invalid_operands_raise(operand: Any) -> None:
    """Checks operands must be a matrix or a real scalar."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    with pytest.raises(InvalidValueError):
        matrix.add(operand)
    with pytest.raises(InvalidValueError):
        matrix.subtract(operand)
    with pytest.raises(InvalidValueError):
        matrix.multiply(operand)


def test_operators_reject_unsupported_types() -> None:
    """Checks Python operators fall back to TypeError for foreign types."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    with pytest.raises(TypeError):
        matrix + "1"
    with pytest.raises(TypeError):
        matrix @ 2


def test_eq() -> None:
    """Checks deep value equality with shape short-circuit."""
    matrix: Matrix = Matrix([[1, 2], [3, 4]])
    assert matrix.eq(Matrix([[1, 2], [3, 4]]))
    assert matrix.eq(Matrix([[1.0, 2.0], [3.0, 4.0]]))
    assert not matrix.eq(Matrix([[1, 2], [3, 5]]))
    assert not matrix.eq(Matrix([[1, 2, 0], [3, 4, 0]]))
    assert not Matrix([[1, 2]]).eq(Matrix([[1], [2]]))
    with pytest.raises(InvalidValueError):
        matrix.eq([[1, 2], [3, 4]])  # type: ignore[arg-type]


def test_equality_operator_and_hash() -> None:
    """Checks == mirrors eq and equal matrices hash alike."""
    a: Matrix = Matrix([[1, 2], [3, 4]])
    b: Matrix = Matrix([[1, 2], [3, 4]])
    assert a == b
    assert a != Matrix([[0, 2], [3, 4]])
    assert a != [[1, 2], [3, 4]]
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
