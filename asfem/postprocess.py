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

"""Postprocessors computing scalar quantities of a solution."""

from __future__ import annotations

import abc

import numpy as np

from asfem import _exceptions
from asfem.assembly import mesh as mesh_module
from asfem.assembly.local import LocalElementSolution
from asfem.linalg import DenseVector


class VolumeIntegralPostprocessorBase(abc.ABC):
    """Base class for postprocessors integrating a quantity over the mesh."""

    def __init__(
        self, mesh: mesh_module.LineMesh, quadrature_order: int | None = None
    ) -> None:
        """Initializes self.

        Args:
            mesh: The mesh.
            quadrature_order: The number of Gauss points per element, defaults to
                the one of the element type.

        """
        self.mesh = mesh
        if quadrature_order is None:
            quadrature_order = mesh_module.quadrature_order(mesh.element_type)
        self.points, self.weights = mesh_module.gauss_points(quadrature_order)

    @abc.abstractmethod
    def compute_volume_integral_value(
        self, shape: mesh_module.ShapeFunctionValues, solution: LocalElementSolution
    ) -> float:
        """Computes the integrand at a quadrature point.

        Args:
            shape: The shape functions at the quadrature point.
            solution: The local solution at the quadrature point.

        Returns:
            The value of the integrand.

        """
        pass

    def compute(self, u: np.ndarray) -> float:
        """Integrates over the mesh.

        Args:
            u: The global solution, one value per node.

        Returns:
            The integral.

        """
        u = np.asarray(u, dtype=float)
        if u.shape != (self.mesh.num_nodes,):
            raise _exceptions.InputError(
                f"asfem.postprocess.{type(self).__name__}",
                "u",
                f"Expected a vector of length {self.mesh.num_nodes}, "
                f"got shape {u.shape}.",
            )

        value = 0.0
        for element_id in range(1, self.mesh.num_elements + 1):
            coords = self.mesh.element_coords(element_id)
            nodal_values = DenseVector.from_numpy(
                u[self.mesh.element_nodes(element_id) - 1]
            )
            for xi, weight in zip(self.points, self.weights):
                shape = mesh_module.physical_shape_functions(
                    self.mesh.element_type, coords, xi, weight
                )
                solution = LocalElementSolution(
                    nodal_values=nodal_values,
                    value=nodal_values.dot(shape.values),
                    gradient=nodal_values.dot(shape.gradients),
                )
                value += self.compute_volume_integral_value(shape, solution) * shape.jxw

        return value


class VolumeIntegralPostprocessor(VolumeIntegralPostprocessorBase):
    """Integrates the solution field over the mesh."""

    def compute_volume_integral_value(
        self, shape: mesh_module.ShapeFunctionValues, solution: LocalElementSolution
    ) -> float:
        return solution.value
