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

"""Free energy materials."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from asfem import _exceptions

if TYPE_CHECKING:
    from asfem.assembly.local import LocalElementInfo
    from asfem.assembly.local import LocalElementSolution
    from asfem.assembly.local import MaterialProperties


class FreeEnergyMaterial(abc.ABC):
    """Base class for materials defined by a free energy density ``F(c)``.

    The computed properties are stored under the names ``"F"``, ``"dFdc"`` and
    ``"d2Fdc2"``.
    """

    num_params: int = 0

    def check_params(self, params: list[float]) -> None:
        """Checks the number of material parameters.

        Args:
            params: The material parameters from the input.

        """
        if len(params) != self.num_params:
            raise _exceptions.InputError(
                f"asfem.kernels.{type(self).__name__}",
                "params",
                f"Expected {self.num_params} parameters, got {len(params)}.",
            )

    def compute_properties(
        self,
        params: list[float],
        info: LocalElementInfo,  # pylint: disable=unused-argument
        solution: LocalElementSolution,
    ) -> MaterialProperties:
        """Computes the free energy and its derivatives at a quadrature point.

        Args:
            params: The material parameters.
            info: The local element information.
            solution: The local solution.

        Returns:
            The material properties.

        """
        self.check_params(params)
        c = solution.value
        return {
            "F": self.compute_f(params, c),
            "dFdc": self.compute_dfdc(params, c),
            "d2Fdc2": self.compute_d2fdc2(params, c),
        }

    @abc.abstractmethod
    def compute_f(self, params: list[float], c: float) -> float:
        """Computes the free energy density."""
        pass

    @abc.abstractmethod
    def compute_dfdc(self, params: list[float], c: float) -> float:
        """Computes the chemical potential ``dF/dc``."""
        pass

    @abc.abstractmethod
    def compute_d2fdc2(self, params: list[float], c: float) -> float:
        """Computes the second derivative ``d^2F/dc^2``."""
        pass


class DoubleWellFreeEnergyMaterial(FreeEnergyMaterial):
    """The double well potential ``F = factor (c - ca)^2 (c - cb)^2``.

    The parameters are ``[ca, cb, factor]``, the two minima of the potential and its
    height scaling.
    """

    num_params = 3

    def compute_f(self, params: list[float], c: float) -> float:
        ca, cb, factor = params
        return factor * (c - ca) ** 2 * (c - cb) ** 2

    def compute_dfdc(self, params: list[float], c: float) -> float:
        ca, cb, factor = params
        return 2.0 * factor * (c - ca) * (c - cb) * (2.0 * c - ca - cb)

    def compute_d2fdc2(self, params: list[float], c: float) -> float:
        ca, cb, factor = params
        return (
            2.0
            * factor
            * (
                (c - cb) * (2.0 * c - ca - cb)
                + (c - ca) * (2.0 * c - ca - cb)
                + 2.0 * (c - ca) * (c - cb)
            )
        )
