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

"""Dense element-local matrices with 1-based indexing.

The matrices are mainly used for the computation of element stiffness matrices
(Jacobians) and for the small tensor algebra in material and boundary condition
kernels. Entries are stored row-major in a flat buffer, entry ``(i, j)`` lives at
offset ``(i-1)*n + (j-1)``.

Access through :py:meth:`DenseMatrix.get` and friends checks the indices unless
Python runs with ``-O``. Shape errors in arithmetic always raise a
:py:class:`asfem._exceptions.ShapeError`.
"""

from __future__ import annotations

import numbers
import time
from typing import Sequence

import numpy as np

from asfem import _exceptions
from asfem.linalg.vector import check_index
from asfem.linalg.vector import DenseVector


class DenseMatrix:
    """A dense ``m`` x ``n`` matrix of real values, indexed starting from 1."""

    def __init__(
        self, m: int = 0, n: int = 0, val: float | Sequence[float] = 0.0
    ) -> None:
        """Initializes self.

        Args:
            m: The number of rows.
            n: The number of columns.
            val: Either a scalar, which is used to fill the matrix, or a sequence of
                ``m*n`` values in row-major order.

        """
        self._m = m
        self._n = n
        if isinstance(val, numbers.Real):
            self._vals = np.full(m * n, float(val))
        else:
            values = np.asarray(val, dtype=float).ravel()
            if values.size != m * n:
                raise _exceptions.InputError(
                    "asfem.DenseMatrix",
                    "val",
                    f"Expected {m * n} values, got {values.size}.",
                )
            self._vals = values.copy()

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> DenseMatrix:
        """Creates a matrix from a two-dimensional numpy array.

        Args:
            array: The array whose values are copied.

        Returns:
            The new matrix.

        """
        values = np.atleast_2d(np.asarray(array, dtype=float))
        return cls(values.shape[0], values.shape[1], values.ravel())

    @classmethod
    def identity(cls, m: int) -> DenseMatrix:
        """Creates the ``m`` x ``m`` identity matrix."""
        return cls.from_numpy(np.eye(m))

    @property
    def m(self) -> int:
        """The number of rows."""
        return self._m

    @property
    def n(self) -> int:
        """The number of columns."""
        return self._n

    @property
    def shape(self) -> tuple[int, int]:
        """The shape ``(m, n)`` of the matrix."""
        return (self._m, self._n)

    @property
    def data(self) -> np.ndarray:
        """The flat, row-major buffer (not a copy)."""
        return self._vals

    def resize(self, m: int, n: int, val: float = 0.0) -> None:
        """Reallocates the matrix, all entries are set to ``val``.

        Args:
            m: The new number of rows.
            n: The new number of columns.
            val: The fill value.

        """
        self._m = m
        self._n = n
        self._vals = np.full(m * n, float(val))

    def clean(self) -> None:
        """Releases the values, the shape is kept."""
        self._vals = np.zeros(0)

    def get(self, i: int, j: int) -> float:
        """Returns entry ``(i, j)``, both indices start from 1."""
        if __debug__:
            check_index(i, self._m, "row")
            check_index(j, self._n, "column")
        return float(self._vals[(i - 1) * self._n + j - 1])

    def set(self, i: int, j: int, value: float) -> None:
        """Sets entry ``(i, j)``, both indices start from 1."""
        if __debug__:
            check_index(i, self._m, "row")
            check_index(j, self._n, "column")
        self._vals[(i - 1) * self._n + j - 1] = value

    def add(self, i: int, j: int, value: float) -> None:
        """Adds ``value`` to entry ``(i, j)``, both indices start from 1."""
        if __debug__:
            check_index(i, self._m, "row")
            check_index(j, self._n, "column")
        self._vals[(i - 1) * self._n + j - 1] += value

    def get_flat(self, k: int) -> float:
        """Returns the k-th entry of the flat buffer, k starts from 1."""
        if __debug__:
            check_index(k, self._vals.size, "flat")
        return float(self._vals[k - 1])

    def set_flat(self, k: int, value: float) -> None:
        """Sets the k-th entry of the flat buffer, k starts from 1."""
        if __debug__:
            check_index(k, self._vals.size, "flat")
        self._vals[k - 1] = value

    def assign(self, other: float | DenseMatrix) -> DenseMatrix:
        """Assigns a scalar (to every entry) or the values of another matrix.

        A freshly created matrix (with shape ``(0, 0)``) adopts the shape of
        ``other``. Otherwise, the shapes have to match.

        Args:
            other: The scalar or matrix to be assigned.

        Returns:
            The matrix itself.

        Raises:
            ShapeMismatchError: If the shapes differ.

        """
        if isinstance(other, DenseMatrix):
            if self._m == 0 and self._n == 0:
                self._m, self._n = other.shape
                self._vals = other.data.copy()
            elif self.shape == other.shape:
                self._vals[:] = other.data
            else:
                raise _exceptions.ShapeMismatchError("a=b", self.shape, other.shape)
        else:
            self._vals.fill(other)
        return self

    def copy(self) -> DenseMatrix:
        """Returns a deep copy of the matrix."""
        return DenseMatrix(self._m, self._n, self._vals)

    def to_numpy(self) -> np.ndarray:
        """Returns a copy of the values as two-dimensional numpy array."""
        return self._vals.reshape(self._m, self._n).copy()

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

    def inverse(self) -> DenseMatrix:
        """Returns the inverse matrix, the matrix itself is not changed.

        The inverse is computed with an LU factorization, which is fine for the
        small, well-conditioned element matrices this class is made for.

        Raises:
            NotSquareError: If the matrix is not square.
            SingularMatrixError: If the factorization detects a singular matrix.

        """
        self._check_square("inverse")
        try:
            inverse = np.linalg.inv(self._vals.reshape(self._m, self._n))
        except np.linalg.LinAlgError as linalg_error:
            raise _exceptions.SingularMatrixError(str(linalg_error)) from linalg_error

        return DenseMatrix(self._m, self._n, inverse.ravel())

    def det(self) -> float:
        """Returns the determinant of the matrix.

        Raises:
            NotSquareError: If the matrix is not square.

        """
        self._check_square("det")
        return float(np.linalg.det(self._vals.reshape(self._m, self._n)))

    def transpose(self) -> DenseMatrix:
        """Returns the transposed matrix, the matrix itself is not changed."""
        transposed = self._vals.reshape(self._m, self._n).T
        return DenseMatrix(self._n, self._m, transposed.ravel())

    def transpose_inplace(self) -> None:
        """Transposes the matrix itself, also its shape changes."""
        temp = self.transpose()
        self.resize(temp.m, temp.n)
        self.assign(temp)

    def _check_square(self, operation: str) -> None:
        if self._m != self._n:
            raise _exceptions.NotSquareError(operation, self.shape)

    def _check_same_shape(
        self, operation: str, other: DenseMatrix | DenseVector
    ) -> None:
        if self.shape != other.shape:
            raise _exceptions.ShapeMismatchError(operation, self.shape, other.shape)

    def _matmul(self, other: DenseMatrix | DenseVector) -> DenseMatrix | DenseVector:
        if isinstance(other, DenseVector):
            if self._n != other.m:
                raise _exceptions.ShapeMismatchError("A*b", self.shape, other.shape)
            result = self._vals.reshape(self._m, self._n) @ other.data
            return DenseVector(self._m, result)

        if self._n != other.m:
            raise _exceptions.ShapeMismatchError("A*B", self.shape, other.shape)
        result = self._vals.reshape(self._m, self._n) @ other.to_numpy()
        return DenseMatrix(self._m, other.n, result.ravel())

    def __add__(self, other: float | DenseMatrix) -> DenseMatrix:
        if isinstance(other, (DenseMatrix, DenseVector)):
            self._check_same_shape("a+b", other)
            return DenseMatrix(self._m, self._n, self._vals + other.data)
        if isinstance(other, numbers.Real):
            return DenseMatrix(self._m, self._n, self._vals + other)
        return NotImplemented

    def __radd__(self, other: float) -> DenseMatrix:
        return self.__add__(other)

    def __iadd__(self, other: float | DenseMatrix) -> DenseMatrix:
        if isinstance(other, (DenseMatrix, DenseVector)):
            self._check_same_shape("a+=b", other)
            self._vals += other.data
        elif isinstance(other, numbers.Real):
            self._vals += other
        else:
            return NotImplemented
        return self

    def __sub__(self, other: float | DenseMatrix) -> DenseMatrix:
        if isinstance(other, (DenseMatrix, DenseVector)):
            self._check_same_shape("a-b", other)
            return DenseMatrix(self._m, self._n, self._vals - other.data)
        if isinstance(other, numbers.Real):
            return DenseMatrix(self._m, self._n, self._vals - other)
        return NotImplemented

    def __rsub__(self, other: float) -> DenseMatrix:
        if isinstance(other, DenseVector):
            raise _exceptions.ShapeMismatchError("a-b", other.shape, self.shape)
        if isinstance(other, numbers.Real):
            return DenseMatrix(self._m, self._n, other - self._vals)
        return NotImplemented

    def __isub__(self, other: float | DenseMatrix) -> DenseMatrix:
        if isinstance(other, (DenseMatrix, DenseVector)):
            self._check_same_shape("a-=b", other)
            self._vals -= other.data
        elif isinstance(other, numbers.Real):
            self._vals -= other
        else:
            return NotImplemented
        return self

    def __mul__(
        self, other: float | DenseMatrix | DenseVector
    ) -> DenseMatrix | DenseVector:
        if isinstance(other, (DenseMatrix, DenseVector)):
            return self._matmul(other)
        if isinstance(other, numbers.Real):
            return DenseMatrix(self._m, self._n, self._vals * other)
        return NotImplemented

    def __rmul__(self, other: float) -> DenseMatrix:
        if isinstance(other, numbers.Real):
            return DenseMatrix(self._m, self._n, self._vals * other)
        return NotImplemented

    def __matmul__(self, other: DenseMatrix | DenseVector) -> DenseMatrix | DenseVector:
        if isinstance(other, (DenseMatrix, DenseVector)):
            return self._matmul(other)
        return NotImplemented

    def __imul__(self, other: float) -> DenseMatrix:
        if isinstance(other, numbers.Real):
            self._vals *= other
            return self
        return NotImplemented

    def __truediv__(self, other: float) -> DenseMatrix:
        if isinstance(other, numbers.Real):
            return DenseMatrix(self._m, self._n, self._vals / other)
        return NotImplemented

    def __itruediv__(self, other: float) -> DenseMatrix:
        if isinstance(other, numbers.Real):
            self._vals /= other
            return self
        return NotImplemented

    def __neg__(self) -> DenseMatrix:
        return DenseMatrix(self._m, self._n, -self._vals)

    def __repr__(self) -> str:
        return f"DenseMatrix({self._m}, {self._n}, {self._vals.tolist()})"
