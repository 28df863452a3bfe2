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

"""Translation of the solver settings into PETSc SNES options.

Each outer method is described by one entry of :py:data:`OUTER_METHODS`, which
holds the PETSc SNES type, the quasi-Newton variant, the line search used when the
user asks for the default one, and whether the method accepts a line search order.
An explicitly requested line search is mapped through
:py:data:`EXPLICIT_LINE_SEARCHES`, independently of the outer method.
"""

from __future__ import annotations

from typing import NamedTuple, TYPE_CHECKING

from asfem import log
from asfem.nonlinear_solvers.solver_config import LineSearchStrategy
from asfem.nonlinear_solvers.solver_config import LineSearchType
from asfem.nonlinear_solvers.solver_config import NonlinearSolverType

if TYPE_CHECKING:
    from asfem import _typing
    from asfem.nonlinear_solvers.solver_config import NonlinearSolverConfig


class OuterMethod(NamedTuple):
    """The PETSc realization of an outer nonlinear method."""

    snes_type: str
    qn_type: str | None
    default_line_search: LineSearchStrategy
    order_aware: bool


OUTER_METHODS: dict[NonlinearSolverType, OuterMethod] = {
    NonlinearSolverType.NEWTON_RAPHSON: OuterMethod(
        "newtonls", None, LineSearchStrategy.BASIC, True
    ),
    NonlinearSolverType.NEWTON_LS: OuterMethod(
        "newtonls", None, LineSearchStrategy.BACKTRACE, True
    ),
    NonlinearSolverType.NEWTON_TR: OuterMethod(
        "newtontr", None, LineSearchStrategy.BASIC, False
    ),
    NonlinearSolverType.LBFGS: OuterMethod(
        "qn", "lbfgs", LineSearchStrategy.CRITICAL_POINT, False
    ),
    NonlinearSolverType.BROYDEN: OuterMethod(
        "qn", "broyden", LineSearchStrategy.BASIC, False
    ),
    NonlinearSolverType.BAD_BROYDEN: OuterMethod(
        "qn", "badbroyden", LineSearchStrategy.L2, False
    ),
    NonlinearSolverType.NEWTON_CG: OuterMethod(
        "ncg", None, LineSearchStrategy.CRITICAL_POINT, False
    ),
    NonlinearSolverType.NEWTON_GMRES: OuterMethod(
        "ngmres", None, LineSearchStrategy.L2, False
    ),
}

EXPLICIT_LINE_SEARCHES: dict[LineSearchType, LineSearchStrategy] = {
    LineSearchType.BACKTRACE: LineSearchStrategy.BACKTRACE,
    LineSearchType.CP: LineSearchStrategy.CRITICAL_POINT,
    LineSearchType.L2: LineSearchStrategy.L2,
    LineSearchType.BASIC: LineSearchStrategy.BASIC,
}


def resolve_line_search(
    solver_type: NonlinearSolverType, line_search_type: LineSearchType
) -> LineSearchStrategy:
    """Determines the line search strategy for an outer method.

    Args:
        solver_type: The outer nonlinear method.
        line_search_type: The requested line search.

    Returns:
        The default strategy of ``solver_type`` if ``line_search_type`` is
        ``DEFAULT``, and the requested strategy otherwise.

    """
    if line_search_type is LineSearchType.DEFAULT:
        return OUTER_METHODS[solver_type].default_line_search

    return EXPLICIT_LINE_SEARCHES[line_search_type]


def linear_solver_options(config: NonlinearSolverConfig) -> _typing.KspOption:
    """Returns the PETSc options of the inner linear solve.

    Args:
        config: The nonlinear solver settings.

    Returns:
        The KSP / PC options.

    """
    linear_solver = config.linear_solver
    options: _typing.KspOption = {
        "ksp_type": linear_solver.ksp_type,
        "ksp_rtol": linear_solver.rtol,
        "ksp_atol": linear_solver.atol,
        "ksp_max_it": linear_solver.max_iter,
        "pc_type": linear_solver.pc_type,
    }
    if linear_solver.ksp_type in ["gmres", "fgmres"]:
        options["ksp_gmres_restart"] = linear_solver.gmres_restart

    return options


def snes_options(config: NonlinearSolverConfig) -> _typing.KspOption:
    """Returns the PETSc options of the outer nonlinear solver.

    This includes the options of the inner linear solve and of the line search.

    Args:
        config: The nonlinear solver settings.

    Returns:
        The SNES options.

    """
    options: _typing.KspOption = {
        "snes_atol": config.abs_tol,
        "snes_rtol": config.rel_tol,
        "snes_stol": config.s_tol,
        "snes_max_it": config.max_iter,
        "snes_max_funcs": -1,
    }
    options.update(linear_solver_options(config))

    method = OUTER_METHODS.get(config.solver_type)
    if method is None:
        log.debug(
            f"No PETSc method is registered for {config.solver_type}, "
            "the PETSc defaults are used."
        )
    else:
        options["snes_type"] = method.snes_type
        if method.qn_type is not None:
            options["snes_qn_type"] = method.qn_type

        # newtontr gets a line search type as well
        options["snes_linesearch_type"] = resolve_line_search(
            config.solver_type, config.line_search_type
        ).value
        if method.order_aware:
            options["snes_linesearch_order"] = config.line_search_order

    # the order is re-applied for every outer method, including newtontr
    options["snes_linesearch_order"] = config.line_search_order

    return options
