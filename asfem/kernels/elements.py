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

"""Element kernels for scalar problems in 1D.

The kernels add the contributions of a single quadrature point to the local
Jacobian and residual of a :py:class:`asfem.assembly.LocalAssemblyContext`.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

import numpy as np

from asfem.assembly.local import FECalcType
from asfem.linalg import DenseMatrix

if TYPE_CHECKING:
    from asfem.assembly.local import LocalAssemblyContext
    from asfem.assembly.local import LocalElementInfo
    from asfem.assembly.local import LocalElementSolution
    from asfem.assembly.local import MaterialProperties
    from asfem.assembly.mesh import ShapeFunctionValues


class Element(abc.ABC):
    """Base class for element kernels."""

    def compute(
        self,
        calc_type: FECalcType,
        info: LocalElementInfo,
        shape: ShapeFunctionValues,
        solution: LocalElementSolution,
        props: MaterialProperties,
        context: LocalAssemblyContext,
    ) -> None:
        """Adds the contribution of a quadrature point to the local system.

        Args:
            calc_type: Whether the residual or the Jacobian is computed.
            info: The local element information.
            shape: The shape functions at the quadrature point.
            solution: The local solution at the quadrature point.
            props: The material properties at the quadrature point.
            context: The local system, which is modified.

        """
        if calc_type is FECalcType.RESIDUAL:
            self.compute_residual(info, shape, solution, props, context)
        else:
            self.compute_jacobian(info, shape, solution, props, context)

    @abc.abstractmethod
    def compute_residual(
        self,
        info: LocalElementInfo,
        shape: ShapeFunctionValues,
        solution: LocalElementSolution,
        props: MaterialProperties,
        context: LocalAssemblyContext,
    ) -> None:
        pass

    @abc.abstractmethod
    def compute_jacobian(
        self,
        info: LocalElementInfo,
        shape: ShapeFunctionValues,
        solution: LocalElementSolution,
        props: MaterialProperties,
        context: LocalAssemblyContext,
    ) -> None:
        pass


class AllenCahnElement(Element):
    """Steady Allen-Cahn type equation ``dF/dc - kappa c'' = 0``.

    The free energy derivatives are taken from the material properties ``"dFdc"``
    and ``"d2Fdc2"``.
    """

    def __init__(self, kappa: float = 1.0) -> None:
        """Initializes self.

        Args:
            kappa: The gradient energy coefficient.

        """
        self.kappa = kappa

    def compute_residual(
        self,
        info: LocalElementInfo,
        shape: ShapeFunctionValues,
        solution: LocalElementSolution,
        props: MaterialProperties,
        context: LocalAssemblyContext,
    ) -> None:
        context.R += (
            shape.values * props["dFdc"]
            + shape.gradients * (self.kappa * solution.gradient)
        ) * shape.jxw

    def compute_jacobian(
        self,
        info: LocalElementInfo,
        shape: ShapeFunctionValues,
        solution: LocalElementSolution,
        props: MaterialProperties,
        context: LocalAssemblyContext,
    ) -> None:
        mass = DenseMatrix.from_numpy(
            np.outer(shape.values.to_numpy(), shape.values.to_numpy())
        )
        stiffness = DenseMatrix.from_numpy(
            np.outer(shape.gradients.to_numpy(), shape.gradients.to_numpy())
        )
        context.K += (mass * props["d2Fdc2"] + stiffness * self.kappa) * shape.jxw


class NonlinearDiffusionReactionElement(Element):
    """Diffusion with a cubic reaction term, ``-u'' + k u^3 = f``."""

    def __init__(self, k: float = 1.0, source: float = 0.0) -> None:
        """Initializes self.

        Args:
            k: The reaction coefficient.
            source: The constant source term ``f``.

        """
        self.k = k
        self.source = source

    def compute_residual(
        self,
        info: LocalElementInfo,
        shape: ShapeFunctionValues,
        solution: LocalElementSolution,
        props: MaterialProperties,
        context: LocalAssemblyContext,
    ) -> None:
        u = solution.value
        for i in range(1, info.num_dofs + 1):
            context.R.add(
                i,
                (
                    solution.gradient * shape.gradients.get(i)
                    + (self.k * u**3 - self.source) * shape.values.get(i)
                )
                * shape.jxw,
            )

    def compute_jacobian(
        self,
        info: LocalElementInfo,
        shape: ShapeFunctionValues,
        solution: LocalElementSolution,
        props: MaterialProperties,
        context: LocalAssemblyContext,
    ) -> None:
        u = solution.value
        reaction = 3.0 * self.k * u**2
        for i in range(1, info.num_dofs + 1):
            for j in range(1, info.num_dofs + 1):
                context.K.add(
                    i,
                    j,
                    (
                        shape.gradients.get(j) * shape.gradients.get(i)
                        + reaction * shape.values.get(j) * shape.values.get(i)
                    )
                    * shape.jxw,
                )
