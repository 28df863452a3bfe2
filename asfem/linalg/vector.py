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

"""Dense element-local vectors with 1-based indexing."""

from __future__ import annotations

import numbers
import time
from typing import Sequence

import numpy as np

from asfem import _exceptions


def check_index(index: int, size: int, name: str) -> None:
    """Checks a 1-based index against the size of its dimension.

    Args:
        index: The 1-based index.
        size: The size of the dimension.
        name: The name of the dimension, used in the error message.

    """
    if not 1 <= index <= size:
        raise IndexError(
            f"The {name} index {index} is out of range, it has to be in [1, {size}]."
        )


class DenseVector:
    """A dense vector of real values, indexed starting from 1.

    The vector is meant for element-local computations (e.g. the local residual).
    It owns a contiguous buffer of length ``m``.
    """

    def __init__(self, m: int = 0, val: float | Sequence[float] = 0.0) -> None:
        """Initializes self.

        Args:
            m: The length of the vector.
            val: Either a scalar, which is used to fill the vector, or a sequence of
                ``m`` values.

        """
        self._m = m
        if isinstance(val, numbers.Real):
            self._vals = np.full(m, float(val))
        else:
            values = np.asarray(val, dtype=float).ravel()
            if values.size != m:
                raise _exceptions.InputError(
                    "asfem.DenseVector",
                    "val",
                    f"Expected {m} values, got {values.size}.",
                )
            self._vals = values.copy()

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> DenseVector:
        """Creates a vector from a (flattened) numpy array.

        Args:
            array: The array whose values are copied.

        Returns:
            The new vector.

        """
        values = np.asarray(array, dtype=float).ravel()
        return cls(values.size, values)

    @property
    def m(self) -> int:
        """The length of the vector."""
        return self._m

    @property
    def shape(self) -> tuple[int]:
        """The shape of the vector."""
        return (self._m,)

    @property
    def data(self) -> np.ndarray:
        """The underlying buffer (not a copy)."""
        return self._vals

    def resize(self, m: int, val: float = 0.0) -> None:
        """Reallocates the vector, all entries are set to ``val``.

        Args:
            m: The new length.
            val: The fill value.

        """
        self._m = m
        self._vals = np.full(m, float(val))

    def clean(self) -> None:
        """Releases the values, the length is kept."""
        self._vals = np.zeros(0)

    def get(self, i: int) -> float:
        """Returns the i-th entry, i starts from 1."""
        if __debug__:
            check_index(i, self._m, "row")
        return float(self._vals[i - 1])

    def set(self, i: int, value: float) -> None:
        """Sets the i-th entry, i starts from 1."""
        if __debug__:
            check_index(i, self._m, "row")
        self._vals[i - 1] = value

    def add(self, i: int, value: float) -> None:
        """Adds ``value`` to the i-th entry, i starts from 1."""
        if __debug__:
            check_index(i, self._m, "row")
        self._vals[i - 1] += value

    def assign(self, other: float | DenseVector) -> DenseVector:
        """Assigns a scalar (to every entry) or the values of another vector.

        An empty vector adopts the length of ``other``, otherwise the lengths have
        to match.

        Args:
            other: The scalar or vector to be assigned.

        Returns:
            The vector itself.

        """
        if isinstance(other, DenseVector):
            if self._m == 0:
                self._m = other.m
                self._vals = other.data.copy()
            elif self._m == other.m:
                self._vals[:] = other.data
            else:
                raise _exceptions.ShapeMismatchError("a=b", self.shape, other.shape)
        else:
            self._vals.fill(other)
        return self

    def copy(self) -> DenseVector:
        """Returns a deep copy of the vector."""
        return DenseVector(self._m, self._vals)

    def to_numpy(self) -> np.ndarray:
        """Returns a copy of the values as numpy array."""
        return self._vals.copy()

    def set_zero(self) -> None:
        """Sets all entries to zero."""
        self._vals.fill(0.0)

    def set_random(self) -> None:
        """Sets all entries to uniform random values in [0, 1).

        The generator is seeded from the wall clock, so this is only meant for
        ad hoc testing.
        """
        rng = np.random.default_rng(int(time.time()))
        self._vals[:] = rng.random(self._vals.size)

    def norm(self) -> float:
        """Returns the euclidean norm of the vector."""
        return float(np.linalg.norm(self._vals))

    def dot(self, other: DenseVector) -> float:
        """Returns the inner product with another vector of the same length."""
        self._check_same_shape("a.b", other)
        return float(np.dot(self._vals, other.data))

    def _check_same_shape(self, operation: str, other: DenseVector) -> None:
        if self._m != other.m:
            raise _exceptions.ShapeMismatchError(operation, self.shape, other.shape)

    def __add__(self, other: float | DenseVector) -> DenseVector:
        if isinstance(other, DenseVector):
            self._check_same_shape("a+b", other)
            return DenseVector(self._m, self._vals + other.data)
        if isinstance(other, numbers.Real):
            return DenseVector(self._m, self._vals + other)
        return NotImplemented

    def __radd__(self, other: float) -> DenseVector:
        return self.__add__(other)

    def __iadd__(self, other: float | DenseVector) -> DenseVector:
        if isinstance(other, DenseVector):
            self._check_same_shape("a+=b", other)
            self._vals += other.data
        elif isinstance(other, numbers.Real):
            self._vals += other
        else:
            return NotImplemented
        return self

    def __sub__(self, other: float | DenseVector) -> DenseVector:
        if isinstance(other, DenseVector):
            self._check_same_shape("a-b", other)
            return DenseVector(self._m, self._vals - other.data)
        if isinstance(other, numbers.Real):
            return DenseVector(self._m, self._vals - other)
        return NotImplemented

    def __rsub__(self, other: float) -> DenseVector:
        if isinstance(other, numbers.Real):
            return DenseVector(self._m, other - self._vals)
        return NotImplemented

    def __isub__(self, other: float | DenseVector) -> DenseVector:
        if isinstance(other, DenseVector):
            self._check_same_shape("a-=b", other)
            self._vals -= other.data
        elif isinstance(other, numbers.Real):
            self._vals -= other
        else:
            return NotImplemented
        return self

    def __mul__(self, other: float) -> DenseVector:
        if isinstance(other, numbers.Real):
            return DenseVector(self._m, self._vals * other)
        return NotImplemented

    def __rmul__(self, other: float) -> DenseVector:
        return self.__mul__(other)

    def __imul__(self, other: float) -> DenseVector:
        if isinstance(other, numbers.Real):
            self._vals *= other
            return self
        return NotImplemented

    def __truediv__(self, other: float) -> DenseVector:
        if isinstance(other, numbers.Real):
            return DenseVector(self._m, self._vals / other)
        return NotImplemented

    def __itruediv__(self, other: float) -> DenseVector:
        if isinstance(other, numbers.Real):
            self._vals /= other
            return self
        return NotImplemented

    def __neg__(self) -> DenseVector:
        return DenseVector(self._m, -self._vals)

    def __repr__(self) -> str:
        return f"DenseVector({self._m}, {self._vals.tolist()})"
