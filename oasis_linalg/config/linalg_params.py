################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tunable parameters for the matrix inverse engine."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any


# Allow the Cholesky fast path for symmetric matrices
CHOLESKY_ENABLED: bool = True
# Residuals below this magnitude are treated as an exact zero pivot
CHOLESKY_ZERO_TOL: float = 1e-5
# Absolute tolerance when comparing M(i, j) with M(j, i)
SYMMETRY_TOL: float = 0.0


class LinalgParamsError(Exception):
    """Raised when linear algebra parameter validation fails."""


def _require_bool(value: Any, name: str) -> None:
    """Require a boolean value."""
    if not isinstance(value, bool):
        raise LinalgParamsError(f"{name} must be a bool")


def _require_non_negative(value: Any, name: str) -> None:
    """Require a finite non-negative real value."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise LinalgParamsError(f"{name} must be a real number")
    if not math.isfinite(float(value)):
        raise LinalgParamsError(f"{name} must be finite")
    if value < 0.0:
        raise LinalgParamsError(f"{name} must be non-negative")


@dataclass(frozen=True)
class LinalgParams:
    """Configuration for symmetric detection and the Cholesky inverse."""

    # Allow the Cholesky fast path for symmetric matrices
    cholesky_enabled: bool = CHOLESKY_ENABLED
    # Residuals below this magnitude are treated as an exact zero pivot
    cholesky_zero_tol: float = CHOLESKY_ZERO_TOL
    # Absolute tolerance when comparing M(i, j) with M(j, i)
    symmetry_tol: float = SYMMETRY_TOL

    @classmethod
    def defaults(cls) -> LinalgParams:
        """Return the default parameter set."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LinalgParams:
        """Build parameters from a flat mapping, validating keys and values."""
        if not isinstance(data, dict):
            raise LinalgParamsError("parameters must be a mapping")
        known: set[str] = {field.name for field in fields(cls)}
        unknown: set[str] = {key for key in data.keys() if key not in known}
        if unknown:
            raise LinalgParamsError(
                f"Unexpected parameters: {', '.join(sorted(unknown))}"
            )
        params: LinalgParams = cls(**data)
        params.validate()
        return params

    def validate(self) -> None:
        """Validate parameter invariants."""
        _require_bool(self.cholesky_enabled, "cholesky_enabled")
        _require_non_negative(self.cholesky_zero_tol, "cholesky_zero_tol")
        _require_non_negative(self.symmetry_tol, "symmetry_tol")

    def replace(self, **overrides: Any) -> LinalgParams:
        """Return a modified copy of the parameters."""
        return replace(self, **overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a plain dict representation for debugging."""
        return {field.name: getattr(self, field.name) for field in fields(self)}
