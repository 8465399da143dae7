################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML schema utilities for matrices and linear algebra parameters."""

from __future__ import annotations

import numbers
from typing import Any
from typing import List

import yaml

from ..config.linalg_params import LinalgParams
from ..config.linalg_params import LinalgParamsError
from ..matrix.matrix import Matrix
from ..matrix.matrix_errors import MatrixError


# Schema version written by dumps_yaml
FORMAT_VERSION: int = 1


class MatrixYamlError(Exception):
    """Raised when the matrix YAML schema is invalid."""


def matrix_to_dict(matrix: Matrix) -> dict[str, object]:
    """Convert a matrix to a YAML-safe dictionary.

    Integers are written unchanged. Every other real cell, including
    fractions, is written as a float.
    """
    cells: List[List[object]] = []
    for row in matrix:
        cells.append([_cell_to_yaml(value) for value in row])
    return {
        "format_version": FORMAT_VERSION,
        "rows": matrix.rows,
        "columns": matrix.columns,
        "cells": cells,
    }


def matrix_from_dict(data: dict[str, object]) -> Matrix:
    """Parse a YAML dictionary into a matrix."""
    if not isinstance(data, dict):
        raise MatrixYamlError("YAML root must be a mapping")
    _require_keys("root", data, {"format_version", "rows", "columns", "cells"})

    format_version: int = _require_int(data["format_version"], "format_version")
    if format_version != FORMAT_VERSION:
        raise MatrixYamlError(f"Unsupported format_version {format_version}")
    rows: int = _require_int(data["rows"], "rows")
    columns: int = _require_int(data["columns"], "columns")

    try:
        matrix: Matrix = Matrix(_require_list(data["cells"], "cells"))
    except MatrixError as exc:
        raise MatrixYamlError(f"cells are invalid: {exc}") from exc

    if matrix.shape != (rows, columns):
        raise MatrixYamlError(
            f"cells are {matrix.rows}x{matrix.columns}, "
            f"header declares {rows}x{columns}"
        )
    return matrix


def dumps_yaml(matrix: Matrix) -> str:
    """Serialize a matrix to deterministic YAML."""
    data: dict[str, object] = matrix_to_dict(matrix)
    return yaml.safe_dump(
        data,
        sort_keys=False,
        indent=2,
        default_flow_style=None,
    )


def loads_yaml(text: str) -> Matrix:
    """Parse a matrix from YAML text."""
    loaded: Any = _safe_load(text)
    if not isinstance(loaded, dict):
        raise MatrixYamlError("YAML root must be a mapping")
    return matrix_from_dict(loaded)


def dumps_params_yaml(params: LinalgParams) -> str:
    """Serialize linear algebra parameters to YAML."""
    return yaml.safe_dump(params.as_nested_dict(), sort_keys=False, indent=2)


def loads_params_yaml(text: str) -> LinalgParams:
    """Parse linear algebra parameters from YAML text.

    An empty document yields the defaults.
    """
    loaded: Any = _safe_load(text)
    if loaded is None:
        return LinalgParams.defaults()
    if not isinstance(loaded, dict):
        raise MatrixYamlError("YAML root must be a mapping")
    try:
        return LinalgParams.from_dict(loaded)
    except LinalgParamsError as exc:
        raise MatrixYamlError(str(exc)) from exc


def _safe_load(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MatrixYamlError(f"Malformed YAML: {exc}") from exc


def _cell_to_yaml(value: object) -> object:
    if isinstance(value, numbers.Integral):
        return int(value)
    return float(value)  # type: ignore[arg-type]


def _require_keys(scope: str, data: dict[str, object], required: set[str]) -> None:
    """Ensure a mapping has exactly the required keys."""
    unknown: set[str] = {key for key in data.keys() if key not in required}
    if unknown:
        raise MatrixYamlError(
            f"Unexpected keys in {scope}: {', '.join(sorted(unknown))}"
        )
    missing: set[str] = {key for key in required if key not in data}
    if missing:
        raise MatrixYamlError(f"Missing keys in {scope}: {', '.join(sorted(missing))}")


def _require_int(value: object, name: str) -> int:
    """Ensure the value is an integer."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise MatrixYamlError(f"{name} must be an integer")
    return int(value)


def _require_list(value: object, name: str) -> list[object]:
    """Ensure the value is a list."""
    if not isinstance(value, list):
        raise MatrixYamlError(f"{name} must be a list")
    return value
