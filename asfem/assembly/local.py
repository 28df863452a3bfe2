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

"""Element-local data passed to the material and element kernels.

Each element computation owns one :py:class:`LocalAssemblyContext`, whose dense
local Jacobian and residual are filled by the kernels and then scattered into the
global system by the DOF ids of the element.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
import enum

import numpy as np

from asfem.linalg import DenseMatrix
from asfem.linalg import DenseVector


class FECalcType(enum.Enum):
    """The quantity computed by a kernel."""

    RESIDUAL = "residual"
    JACOBIAN = "jacobian"


@dataclass
class LocalElementInfo:
    """Information on the current element and quadrature point.

    Attributes:
        element_id: The 1-based id of the element.
        element_type: The element type, e.g. ``"edge2"``.
        node_coords: The coordinates of the element's nodes.
        dof_ids: The 1-based global DOF ids of the element.
        time: The current time.
        gauss_point: The physical coordinate of the current quadrature point.

    """

    element_id: int
    element_type: str
    node_coords: np.ndarray
    dof_ids: list[int]
    time: float = 0.0
    gauss_point: float = 0.0

    @property
    def num_dofs(self) -> int:
        return len(self.dof_ids)


@dataclass
class LocalElementSolution:
    """The solution of an element, nodal and interpolated to a quadrature point.

    Attributes:
        nodal_values: The nodal solution of the element.
        value: The solution at the quadrature point.
        gradient: The spatial derivative of the solution at the quadrature point.

    """

    nodal_values: DenseVector
    value: float = 0.0
    gradient: float = 0.0


MaterialProperties = dict[str, float]


@dataclass
class LocalAssemblyContext:
    """The element-local Jacobian ``K`` and residual ``R``."""

    K: DenseMatrix = field(default_factory=DenseMatrix)  # pylint: disable=invalid-name
    R: DenseVector = field(default_factory=DenseVector)  # pylint: disable=invalid-name

    def reset(self, num_dofs: int) -> None:
        """Zeroes the local contributions, resizing them if necessary.

        Args:
            num_dofs: The number of DOFs of the element.

        """
        if self.K.shape != (num_dofs, num_dofs):
            self.K.resize(num_dofs, num_dofs)
        else:
            self.K.set_zero()

        if self.R.m != num_dofs:
            self.R.resize(num_dofs)
        else:
            self.R.set_zero()

    def interpolate(
        self, nodal_values: DenseVector, values: DenseVector, gradients: DenseVector
    ) -> LocalElementSolution:
        """Interpolates a nodal solution to a quadrature point.

        Args:
            nodal_values: The nodal solution of the element.
            values: The shape function values at the quadrature point.
            gradients: The shape function derivatives at the quadrature point.

        Returns:
            The local solution.

        """
        return LocalElementSolution(
            nodal_values=nodal_values,
            value=nodal_values.dot(values),
            gradient=nodal_values.dot(gradients),
        )

    def scatter(
        self,
        dof_ids: list[int],
        rows: list[int],
        cols: list[int],
        vals: list[float],
    ) -> None:
        """Appends the local Jacobian as triplets with 0-based global indices.

        Args:
            dof_ids: The 1-based global DOF ids of the element.
            rows: The list of row indices, which is extended.
            cols: The list of column indices, which is extended.
            vals: The list of values, which is extended.

        """
        for i, row in enumerate(dof_ids, start=1):
            for j, col in enumerate(dof_ids, start=1):
                rows.append(row - 1)
                cols.append(col - 1)
                vals.append(self.K.get(i, j))

    def add_residual_to(self, dof_ids: list[int], residual: np.ndarray) -> None:
        """Adds the local residual to the global one.

        Args:
            dof_ids: The 1-based global DOF ids of the element.
            residual: The global residual, which is modified.

        """
        for i, dof in enumerate(dof_ids, start=1):
            residual[dof - 1] += self.R.get(i)
