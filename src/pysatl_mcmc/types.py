"""
Core Type Definitions
=====================

Fundamental types and data structures shared by the state, distribution
and operator layers of PySATL MCMC.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from enum import StrEnum
from math import inf
from typing import Any, TypeAlias, cast, overload

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of primitive value kinds stored in tensors.

    Attributes
    ----------
    REAL : str
        Floating point values.
    INT : str
        Integer values.
    BOOL : str
        Boolean values.
    """

    REAL = "real"
    INT = "int"
    BOOL = "bool"

    @property
    def dtype(self) -> type[np.generic]:
        """NumPy dtype used for buffers of this kind."""
        return _DTYPES[self]


_DTYPES: dict[Kind, type[np.generic]] = {
    Kind.REAL: np.float64,
    Kind.INT: np.int64,
    Kind.BOOL: np.bool_,
}

NumPyNumber = np.floating[Any] | np.integer[Any] | np.bool_
"""Type alias for NumPy scalar types."""

Number = NumPyNumber | int | float | bool
"""Type alias for all primitive values a tensor may hold."""

NumericArray = NDArray[np.floating[Any] | np.integer[Any]]
"""Type alias for numeric arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

EPS = 1e-12
"""Absolute tolerance used for hyperparameter change detection."""


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    1D interval with configurable closure.

    Parameters
    ----------
    left : float, default=-inf
        Left endpoint of the interval.
    right : float, default=inf
        Right endpoint of the interval.
    left_closed : bool, default=True
        Whether left endpoint is included (ignored if left = -inf).
    right_closed : bool, default=True
        Whether right endpoint is included (ignored if right = inf).
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        """Adjust closure for infinite endpoints."""
        if self.left == -inf and self.left_closed:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf and self.right_closed:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check if point(s) are contained in the interval.

        Parameters
        ----------
        x : Number or NumericArray
            Point(s) to check.

        Returns
        -------
        bool or BoolArray
            True for points within the interval, False otherwise.
            NaN is never contained.
        """
        arr = np.asarray(x, dtype=float)

        left_ok = (arr > self.left) | (self.left_closed & (arr >= self.left))
        right_ok = (arr < self.right) | (self.right_closed & (arr <= self.right))
        result = left_ok & right_ok

        if np.ndim(arr) == 0:
            return bool(result)

        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        """Check if a single point is in the interval."""
        return bool(self.contains(cast(Number, x)))

    @property
    def is_empty(self) -> bool:
        """Check if the interval is empty."""
        if self.left > self.right:
            return True

        return bool(self.left == self.right and not (self.left_closed and self.right_closed))

    def intersect(self, other: "Interval1D") -> "Interval1D":
        """
        Tightest interval contained in both ``self`` and ``other``.

        Parameters
        ----------
        other : Interval1D
            Interval to intersect with.

        Returns
        -------
        Interval1D
            Intersection. May be empty.
        """
        if self.left > other.left:
            left, left_closed = self.left, self.left_closed
        elif self.left < other.left:
            left, left_closed = other.left, other.left_closed
        else:
            left, left_closed = self.left, self.left_closed and other.left_closed

        if self.right < other.right:
            right, right_closed = self.right, self.right_closed
        elif self.right > other.right:
            right, right_closed = other.right, other.right_closed
        else:
            right, right_closed = self.right, self.right_closed and other.right_closed

        return Interval1D(left, right, left_closed, right_closed)

    def includes(self, other: "Interval1D") -> bool:
        """Check whether ``other`` lies entirely inside this interval."""
        if other.is_empty:
            return True
        left_ok = other.left > self.left or (
            other.left == self.left and (self.left_closed or not other.left_closed)
        )
        right_ok = other.right < self.right or (
            other.right == self.right and (self.right_closed or not other.right_closed)
        )
        return left_ok and right_ok


ElementKey: TypeAlias = str
"""Type alias for tensor element keys."""


__all__ = [
    "Kind",
    "Interval1D",
    "BoolArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "ElementKey",
    "EPS",
]
