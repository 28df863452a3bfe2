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

r"""asfem is a finite element framework for multiphysics problems.

asfem solves the discretized nonlinear systems with PETSc's SNES, through
`petsc4py <https://petsc.org/release/petsc4py/>`_, and assembles them from
element-local dense matrices and vectors with 1-based indexing.
"""

from asfem import assembly
from asfem import io
from asfem import kernels
from asfem import linalg
from asfem import log
from asfem import nonlinear_solvers
from asfem import postprocess
from asfem.assembly import GlobalAssembler
from asfem.assembly import interval_mesh
from asfem.driver import abort_on_fatal_errors
from asfem.driver import solve
from asfem.io import load_config
from asfem.linalg import attempt
from asfem.linalg import DenseMatrix
from asfem.linalg import DenseVector
from asfem.log import LogLevel
from asfem.log import set_log_level
from asfem.nonlinear_solvers import LineSearchType
from asfem.nonlinear_solvers import NonlinearSolverConfig
from asfem.nonlinear_solvers import NonlinearSolverEngine
from asfem.nonlinear_solvers import NonlinearSolverType
from asfem.nonlinear_solvers import SolveResult
from asfem.postprocess import VolumeIntegralPostprocessor

__version__ = "0.1.0"

__all__ = [
    "assembly",
    "io",
    "kernels",
    "linalg",
    "log",
    "nonlinear_solvers",
    "postprocess",
    "GlobalAssembler",
    "interval_mesh",
    "abort_on_fatal_errors",
    "solve",
    "load_config",
    "attempt",
    "DenseMatrix",
    "DenseVector",
    "LogLevel",
    "set_log_level",
    "LineSearchType",
    "NonlinearSolverConfig",
    "NonlinearSolverEngine",
    "NonlinearSolverType",
    "SolveResult",
    "VolumeIntegralPostprocessor",
]
