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

"""Material, element and boundary condition kernels."""

from asfem.kernels import boundary_conditions
from asfem.kernels import elements
from asfem.kernels import materials
from asfem.kernels.boundary_conditions import CyclicDirichletBC
from asfem.kernels.boundary_conditions import DirichletBC
from asfem.kernels.elements import AllenCahnElement
from asfem.kernels.elements import Element
from asfem.kernels.elements import NonlinearDiffusionReactionElement
from asfem.kernels.materials import DoubleWellFreeEnergyMaterial
from asfem.kernels.materials import FreeEnergyMaterial

__all__ = [
    "boundary_conditions",
    "elements",
    "materials",
    "CyclicDirichletBC",
    "DirichletBC",
    "AllenCahnElement",
    "Element",
    "NonlinearDiffusionReactionElement",
    "DoubleWellFreeEnergyMaterial",
    "FreeEnergyMaterial",
]
