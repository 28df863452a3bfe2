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

"""Meshes, element-local data and the assembly of the global system."""

from asfem.assembly import global_assembler
from asfem.assembly import local
from asfem.assembly import mesh
from asfem.assembly.global_assembler import GlobalAssembler
from asfem.assembly.local import FECalcType
from asfem.assembly.local import LocalAssemblyContext
from asfem.assembly.local import LocalElementInfo
from asfem.assembly.local import LocalElementSolution
from asfem.assembly.mesh import gauss_points
from asfem.assembly.mesh import interval_mesh
from asfem.assembly.mesh import LineMesh
from asfem.assembly.mesh import ShapeFunctionValues

__all__ = [
    "global_assembler",
    "local",
    "mesh",
    "GlobalAssembler",
    "FECalcType",
    "LocalAssemblyContext",
    "LocalElementInfo",
    "LocalElementSolution",
    "gauss_points",
    "interval_mesh",
    "LineMesh",
    "ShapeFunctionValues",
]
