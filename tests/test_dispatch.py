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

import pytest

from asfem._exceptions import InputError
from asfem.nonlinear_solvers import dispatch
from asfem.nonlinear_solvers import LinearSolverConfig
from asfem.nonlinear_solvers import LineSearchStrategy
from asfem.nonlinear_solvers import LineSearchType
from asfem.nonlinear_solvers import NonlinearSolverConfig
from asfem.nonlinear_solvers import NonlinearSolverType

default_line_searches = {
    NonlinearSolverType.NEWTON_RAPHSON: LineSearchStrategy.BASIC,
    NonlinearSolverType.NEWTON_LS: LineSearchStrategy.BACKTRACE,
    NonlinearSolverType.NEWTON_TR: LineSearchStrategy.BASIC,
    NonlinearSolverType.LBFGS: LineSearchStrategy.CRITICAL_POINT,
    NonlinearSolverType.BROYDEN: LineSearchStrategy.BASIC,
    NonlinearSolverType.BAD_BROYDEN: LineSearchStrategy.L2,
    NonlinearSolverType.NEWTON_CG: LineSearchStrategy.CRITICAL_POINT,
    NonlinearSolverType.NEWTON_GMRES: LineSearchStrategy.L2,
}

explicit_line_searches = {
    LineSearchType.BACKTRACE: "bt",
    LineSearchType.CP: "cp",
    LineSearchType.L2: "l2",
    LineSearchType.BASIC: "basic",
}

snes_types = {
    NonlinearSolverType.NEWTON_RAPHSON: ("newtonls", None),
    NonlinearSolverType.NEWTON_LS: ("newtonls", None),
    NonlinearSolverType.NEWTON_TR: ("newtontr", None),
    NonlinearSolverType.LBFGS: ("qn", "lbfgs"),
    NonlinearSolverType.BROYDEN: ("qn", "broyden"),
    NonlinearSolverType.BAD_BROYDEN: ("qn", "badbroyden"),
    NonlinearSolverType.NEWTON_CG: ("ncg", None),
    NonlinearSolverType.NEWTON_GMRES: ("ngmres", None),
}


@pytest.mark.parametrize("solver_type", list(NonlinearSolverType))
def test_default_line_search(solver_type):
    strategy = dispatch.resolve_line_search(solver_type, LineSearchType.DEFAULT)
    assert strategy == default_line_searches[solver_type]

    options = dispatch.snes_options(NonlinearSolverConfig(solver_type=solver_type))
    assert options["snes_linesearch_type"] == default_line_searches[solver_type].value


@pytest.mark.parametrize("line_search_type", list(explicit_line_searches.keys()))
@pytest.mark.parametrize("solver_type", list(NonlinearSolverType))
def test_explicit_line_search(solver_type, line_search_type):
    strategy = dispatch.resolve_line_search(solver_type, line_search_type)
    assert strategy.value == explicit_line_searches[line_search_type]

    config = NonlinearSolverConfig(
        solver_type=solver_type, line_search_type=line_search_type
    )
    options = dispatch.snes_options(config)
    assert options["snes_linesearch_type"] == explicit_line_searches[line_search_type]


def test_trust_region_with_l2():
    strategy = dispatch.resolve_line_search(
        NonlinearSolverType.NEWTON_TR, LineSearchType.L2
    )
    assert strategy is LineSearchStrategy.L2


@pytest.mark.parametrize("solver_type", list(NonlinearSolverType))
def test_outer_method(solver_type):
    options = dispatch.snes_options(NonlinearSolverConfig(solver_type=solver_type))
    snes_type, qn_type = snes_types[solver_type]

    assert options["snes_type"] == snes_type
    if qn_type is None:
        assert "snes_qn_type" not in options
    else:
        assert options["snes_qn_type"] == qn_type


@pytest.mark.parametrize("solver_type", list(NonlinearSolverType))
def test_line_search_order_always_applied(solver_type):
    config = NonlinearSolverConfig(solver_type=solver_type, line_search_order=2)
    options = dispatch.snes_options(config)
    assert options["snes_linesearch_order"] == 2


def test_tolerances():
    config = NonlinearSolverConfig(
        max_iter=12, abs_tol=1e-6, rel_tol=1e-8, s_tol=1e-12
    )
    options = dispatch.snes_options(config)

    assert options["snes_atol"] == 1e-6
    assert options["snes_rtol"] == 1e-8
    assert options["snes_stol"] == 1e-12
    assert options["snes_max_it"] == 12
    assert options["snes_max_funcs"] == -1


def test_linear_solver_options():
    options = dispatch.snes_options(NonlinearSolverConfig())

    assert options["ksp_type"] == "gmres"
    assert options["ksp_gmres_restart"] == 1200
    assert options["pc_type"] == "lu"
    assert options["ksp_rtol"] == 1e-10
    assert options["ksp_atol"] == 1e-10
    assert options["ksp_max_it"] == 500000

    config = NonlinearSolverConfig(
        linear_solver=LinearSolverConfig(ksp_type="cg", pc_type="jacobi")
    )
    options = dispatch.linear_solver_options(config)
    assert options["ksp_type"] == "cg"
    assert options["pc_type"] == "jacobi"
    assert "ksp_gmres_restart" not in options


@pytest.mark.parametrize(
    "name,solver_type",
    [
        ("NewtonRaphson", NonlinearSolverType.NEWTON_RAPHSON),
        ("nr", NonlinearSolverType.NEWTON_RAPHSON),
        ("newton", NonlinearSolverType.NEWTON_RAPHSON),
        ("newtonls", NonlinearSolverType.NEWTON_LS),
        ("NewtonTR", NonlinearSolverType.NEWTON_TR),
        ("lbfgs", NonlinearSolverType.LBFGS),
        ("broyden", NonlinearSolverType.BROYDEN),
        ("badbroyden", NonlinearSolverType.BAD_BROYDEN),
        ("ncg", NonlinearSolverType.NEWTON_CG),
        ("newtoncg", NonlinearSolverType.NEWTON_CG),
        ("ngmres", NonlinearSolverType.NEWTON_GMRES),
    ],
)
def test_solver_type_from_string(name, solver_type):
    assert NonlinearSolverType.from_string(name) is solver_type


def test_line_search_type_from_string():
    assert LineSearchType.from_string("bt") is LineSearchType.BACKTRACE
    assert LineSearchType.from_string("BackTrace") is LineSearchType.BACKTRACE
    assert LineSearchType.from_string("default") is LineSearchType.DEFAULT
    assert LineSearchType.from_string(" L2 ") is LineSearchType.L2


def test_unknown_tags():
    with pytest.raises(InputError):
        NonlinearSolverType.from_string("gradient_descent")
    with pytest.raises(InputError):
        LineSearchType.from_string("armijo")
