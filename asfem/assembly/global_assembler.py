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

"""Assembly of the global residual and Jacobian from element contributions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy import sparse

from asfem import _exceptions
from asfem import _utils
from asfem import log
from asfem.assembly import mesh as mesh_module
from asfem.assembly.local import FECalcType
from asfem.assembly.local import LocalAssemblyContext
from asfem.assembly.local import LocalElementInfo
from asfem.linalg import DenseVector

if TYPE_CHECKING:
    from asfem.kernels import DirichletBC
    from asfem.kernels import Element
    from asfem.kernels import FreeEnergyMaterial


class GlobalAssembler:
    """A nonlinear problem on a line mesh with one DOF per node.

    The DOF id of a node equals its (1-based) node id. Instances can be passed to
    :py:meth:`asfem.nonlinear_solvers.NonlinearSolverEngine.solve`.
    """

    def __init__(
        self,
        mesh: mesh_module.LineMesh,
        element: Element,
        material: FreeEnergyMaterial | None = None,
        material_params: list[float] | None = None,
        bcs: DirichletBC | list[DirichletBC] | None = None,
        time: float = 0.0,
        quadrature_order: int | None = None,
    ) -> None:
        """Initializes self.

        Args:
            mesh: The mesh.
            element: The element kernel.
            material: The material kernel, if any.
            material_params: The parameters of the material.
            bcs: The Dirichlet boundary conditions.
            time: The current time.
            quadrature_order: The number of Gauss points per element, defaults to
                the one of the element type.

        """
        self.mesh = mesh
        self.element = element
        self.material = material
        self.material_params = material_params or []
        self.bcs: list[DirichletBC] = _utils.enlist(bcs) if bcs is not None else []
        self.time = time

        if quadrature_order is None:
            quadrature_order = mesh_module.quadrature_order(mesh.element_type)
        self.points, self.weights = mesh_module.gauss_points(quadrature_order)

        self._context = LocalAssemblyContext()

    @property
    def num_dofs(self) -> int:
        return self.mesh.num_nodes

    def _check_size(self, x: np.ndarray) -> None:
        if x.shape != (self.num_dofs,):
            raise _exceptions.InputError(
                "asfem.assembly.GlobalAssembler",
                "x",
                f"Expected a vector of length {self.num_dofs}, got shape {x.shape}.",
            )

    def _element_loop(
        self,
        calc_type: FECalcType,
        x: np.ndarray,
        residual: np.ndarray | None = None,
        triplets: tuple[list[int], list[int], list[float]] | None = None,
    ) -> None:
        context = self._context
        for element_id in range(1, self.mesh.num_elements + 1):
            dof_ids = [int(node) for node in self.mesh.element_nodes(element_id)]
            coords = self.mesh.element_coords(element_id)
            nodal_values = DenseVector.from_numpy(x[np.asarray(dof_ids) - 1])
            context.reset(len(dof_ids))

            for xi, weight in zip(self.points, self.weights):
                shape = mesh_module.physical_shape_functions(
                    self.mesh.element_type, coords, xi, weight
                )
                info = LocalElementInfo(
                    element_id=element_id,
                    element_type=self.mesh.element_type,
                    node_coords=coords,
                    dof_ids=dof_ids,
                    time=self.time,
                    gauss_point=shape.x,
                )
                solution = context.interpolate(
                    nodal_values, shape.values, shape.gradients
                )
                if self.material is not None:
                    props = self.material.compute_properties(
                        self.material_params, info, solution
                    )
                else:
                    props = {}

                self.element.compute(calc_type, info, shape, solution, props, context)

            if calc_type is FECalcType.RESIDUAL:
                context.add_residual_to(dof_ids, residual)
            else:
                context.scatter(dof_ids, *triplets)

    def _apply_bcs(
        self,
        calc_type: FECalcType,
        x: np.ndarray,
        jacobian: sparse.csr_matrix | None = None,
        residual: np.ndarray | None = None,
    ) -> None:
        for bc in self.bcs:
            for node in self.mesh.boundary_nodes(bc.boundary):
                bc.apply(
                    calc_type,
                    node,
                    float(self.mesh.nodes[node - 1]),
                    self.time,
                    x,
                    jacobian=jacobian,
                    residual=residual,
                )

    def apply_bc_values(self, x: np.ndarray) -> np.ndarray:
        """Inserts the prescribed Dirichlet values into a solution.

        The penalty terms vanish for the returned vector, so that they do not
        dominate the initial residual of a nonlinear solve.

        Args:
            x: The global solution, which is not modified.

        Returns:
            A copy of ``x`` with the boundary DOFs set to their prescribed values.

        """
        x = np.array(x, dtype=float)
        self._check_size(x)

        for bc in self.bcs:
            for node in self.mesh.boundary_nodes(bc.boundary):
                x[node - 1] = bc.compute_value(
                    self.time, float(self.mesh.nodes[node - 1])
                )

        return x

    def residual(self, x: np.ndarray) -> np.ndarray:
        """Assembles the global residual.

        Args:
            x: The global solution.

        Returns:
            The residual, including the boundary conditions.

        """
        x = np.asarray(x, dtype=float)
        self._check_size(x)

        residual = np.zeros(self.num_dofs)
        self._element_loop(FECalcType.RESIDUAL, x, residual=residual)
        self._apply_bcs(FECalcType.RESIDUAL, x, residual=residual)

        return residual

    def jacobian(self, x: np.ndarray) -> sparse.csr_matrix:
        """Assembles the global Jacobian.

        Args:
            x: The global solution.

        Returns:
            The Jacobian as sparse matrix, including the boundary conditions.

        """
        x = np.asarray(x, dtype=float)
        self._check_size(x)

        rows: list[int] = []
        cols: list[int] = []
        vals: list[float] = []
        self._element_loop(FECalcType.JACOBIAN, x, triplets=(rows, cols, vals))

        jacobian = sparse.coo_matrix(
            (vals, (rows, cols)), shape=(self.num_dofs, self.num_dofs)
        ).tocsr()
        self._apply_bcs(FECalcType.JACOBIAN, x, jacobian=jacobian)
        log.trace(f"Assembled Jacobian with {jacobian.nnz:,} nonzero entries.")

        return jacobian
