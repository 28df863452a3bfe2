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

"""Dirichlet boundary conditions, enforced with the penalty method.

For a boundary DOF ``d`` with prescribed value ``g``, the penalty ``p`` is added to
the diagonal entry ``K[d, d]`` of the Jacobian and ``p (u[d] - g)`` is added to the
residual.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from asfem import _exceptions
from asfem.assembly.local import FECalcType

if TYPE_CHECKING:
    from scipy import sparse


class DirichletBC:
    """A constant Dirichlet boundary condition."""

    def __init__(self, boundary: str, value: float, penalty: float = 1.0e8) -> None:
        """Initializes self.

        Args:
            boundary: The name of the boundary of the mesh.
            value: The prescribed value.
            penalty: The penalty parameter.

        """
        if penalty <= 0.0:
            raise _exceptions.InputError(
                "asfem.kernels.DirichletBC",
                "penalty",
                "The penalty parameter has to be positive.",
            )
        self.boundary = boundary
        self.value = value
        self.penalty = penalty

    def compute_value(
        self, time: float, node_coord: float  # pylint: disable=unused-argument
    ) -> float:
        """Computes the prescribed value at a boundary node.

        Args:
            time: The current time.
            node_coord: The coordinate of the node.

        Returns:
            The prescribed value.

        """
        return self.value

    def apply(
        self,
        calc_type: FECalcType,
        dof_id: int,
        node_coord: float,
        time: float,
        u: np.ndarray,
        jacobian: sparse.csr_matrix | None = None,
        residual: np.ndarray | None = None,
    ) -> None:
        """Applies the boundary condition to a single DOF.

        Args:
            calc_type: Whether the residual or the Jacobian is modified.
            dof_id: The 1-based id of the DOF.
            node_coord: The coordinate of the boundary node.
            time: The current time.
            u: The current global solution.
            jacobian: The global Jacobian, modified for ``FECalcType.JACOBIAN``.
            residual: The global residual, modified for ``FECalcType.RESIDUAL``.

        """
        index = dof_id - 1
        if calc_type is FECalcType.RESIDUAL:
            value = self.compute_value(time, node_coord)
            residual[index] += self.penalty * (u[index] - value)
        else:
            jacobian[index, index] += self.penalty


class CyclicDirichletBC(DirichletBC):
    """A Dirichlet boundary condition modulated by a periodic signal.

    The signal is piecewise linear through the points ``(tspan[k], yspan[k])`` and
    repeats with the period ``tspan[-1] - tspan[0]``. The prescribed value is
    ``value * signal(time)``.
    """

    def __init__(
        self,
        boundary: str,
        value: float,
        tspan: list[float],
        yspan: list[float],
        penalty: float = 1.0e8,
    ) -> None:
        """Initializes self.

        Args:
            boundary: The name of the boundary of the mesh.
            value: The amplitude of the prescribed value.
            tspan: The (strictly increasing) times of the signal.
            yspan: The values of the signal at ``tspan``.
            penalty: The penalty parameter.

        """
        super().__init__(boundary, value, penalty=penalty)

        self.tspan = np.asarray(tspan, dtype=float)
        self.yspan = np.asarray(yspan, dtype=float)

        if self.tspan.size < 2 or self.tspan.size != self.yspan.size:
            raise _exceptions.InputError(
                "asfem.kernels.CyclicDirichletBC",
                "tspan",
                "tspan and yspan need the same length of at least two.",
            )
        if np.any(np.diff(self.tspan) <= 0.0):
            raise _exceptions.InputError(
                "asfem.kernels.CyclicDirichletBC",
                "tspan",
                "tspan has to be strictly increasing.",
            )

    @classmethod
    def from_params(
        cls,
        boundary: str,
        value: float,
        params: list[float],
        penalty: float = 1.0e8,
    ) -> CyclicDirichletBC:
        """Creates the boundary condition from a flat parameter list.

        Args:
            boundary: The name of the boundary of the mesh.
            value: The amplitude of the prescribed value.
            params: The signal as ``[t_1, y_1, t_2, y_2, ...]``.
            penalty: The penalty parameter.

        Returns:
            The boundary condition.

        """
        if len(params) % 2 != 0:
            raise _exceptions.InputError(
                "asfem.kernels.CyclicDirichletBC",
                "params",
                "The parameters have to be given as pairs of time and value.",
            )
        return cls(boundary, value, params[0::2], params[1::2], penalty=penalty)

    @property
    def period(self) -> float:
        return float(self.tspan[-1] - self.tspan[0])

    def signal(self, time: float) -> float:
        """Evaluates the periodic signal."""
        shifted = self.tspan[0] + np.mod(time - self.tspan[0], self.period)
        return float(np.interp(shifted, self.tspan, self.yspan))

    def compute_value(self, time: float, node_coord: float) -> float:
        return self.value * self.signal(time)
