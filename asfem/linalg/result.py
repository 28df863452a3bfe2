# Copyright (C) 2020-2025 Yang Bai and the AsFem developers
#
# This file is part of asfem.
#
# asfem is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# asfem is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with asfem.  If not, see <https://www.gnu.org/licenses/>.

"""Tagged results for dense linear algebra operations.

Dense operations raise on structural errors. With :py:func:`attempt`, callers that
prefer to branch on the failure instead of handling an exception get a
:py:class:`Result` holding either the value or the error.

Examples:
    Checking a matrix product without ``try``::

        result = attempt(operator.mul, a, b)
        if not result.ok:
            log.warning(str(result.error))

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from asfem import _exceptions

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """The outcome of a dense operation, either a value or a structural error."""

    value: T | None = None
    error: _exceptions.ShapeError | _exceptions.SingularMatrixError | None = None

    @property
    def ok(self) -> bool:
        """``True`` if the operation succeeded."""
        return self.error is None

    @property
    def is_shape_mismatch(self) -> bool:
        """``True`` if the operation failed due to incompatible shapes."""
        return isinstance(self.error, _exceptions.ShapeMismatchError)

    @property
    def is_not_square(self) -> bool:
        """``True`` if the operation failed due to a non-square matrix."""
        return isinstance(self.error, _exceptions.NotSquareError)

    def unwrap(self) -> T:
        """Returns the value, or raises the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(operation: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Runs a dense operation and wraps its outcome into a :py:class:`Result`.

    Only structural errors (shape mismatch, non-square, singular) are captured, all
    other exceptions propagate.

    Args:
        operation: The operation, e.g., ``operator.add`` or ``DenseMatrix.inverse``.
        *args: The positional arguments for the operation.
        **kwargs: The keyword arguments for the operation.

    Returns:
        The tagged result of the operation.

    """
    try:
        return Result(value=operation(*args, **kwargs))
    except (
        _exceptions.ShapeError,
        _exceptions.SingularMatrixError,
    ) as structural_error:
        return Result(error=structural_error)
