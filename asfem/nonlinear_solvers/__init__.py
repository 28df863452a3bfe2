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

"""Nonlinear solvers for the discretized systems.

This module configures PETSc's SNES from the nonlinear solver settings, choosing
among Newton-Raphson, line search and trust region Newton methods, quasi-Newton
methods and nonlinear CG / GMRES.
"""

from asfem.nonlinear_solvers import dispatch
from asfem.nonlinear_solvers import engine
from asfem.nonlinear_solvers import solver_config
from asfem.nonlinear_solvers.dispatch import resolve_line_search
from asfem.nonlinear_solvers.dispatch import snes_options
from asfem.nonlinear_solvers.engine import NonlinearSolverEngine
from asfem.nonlinear_solvers.engine import SolveResult
from asfem.nonlinear_solvers.solver_config import LinearSolverConfig
from asfem.nonlinear_solvers.solver_config import LineSearchStrategy
from asfem.nonlinear_solvers.solver_config import LineSearchType
from asfem.nonlinear_solvers.solver_config import NonlinearSolverConfig
from asfem.nonlinear_solvers.solver_config import NonlinearSolverType

__all__ = [
    "dispatch",
    "engine",
    "solver_config",
    "resolve_line_search",
    "snes_options",
    "NonlinearSolverEngine",
    "SolveResult",
    "LinearSolverConfig",
    "LineSearchStrategy",
    "LineSearchType",
    "NonlinearSolverConfig",
    "NonlinearSolverType",
]
