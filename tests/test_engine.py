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

import numpy as np
from petsc4py import PETSc
import pytest

import asfem
from asfem._exceptions import EngineStateError
from asfem._exceptions import PETScSNESError
from asfem._exceptions import ShapeMismatchError
from asfem.kernels import DirichletBC
from asfem.kernels import NonlinearDiffusionReactionElement
from asfem.linalg import DenseMatrix
from asfem.nonlinear_solvers import dispatch
from asfem.nonlinear_solvers import LineSearchStrategy
from asfem.nonlinear_solvers import LineSearchType
from asfem.nonlinear_solvers import NonlinearSolverConfig
from asfem.nonlinear_solvers import NonlinearSolverEngine
from asfem.nonlinear_solvers import NonlinearSolverType


class MismatchedElement(NonlinearDiffusionReactionElement):
    def compute_residual(self, info, shape, solution, props, context):
        context.K + DenseMatrix(3, 3)


@pytest.fixture
def engine():
    engine = NonlinearSolverEngine()
    yield engine
    engine.destroy()


def test_configure_twice(engine):
    engine.configure(NonlinearSolverConfig())
    with pytest.raises(EngineStateError):
        engine.configure(NonlinearSolverConfig())


def test_configure_after_destroy(engine):
    engine.configure(NonlinearSolverConfig())
    engine.destroy()

    assert not engine.is_configured
    with pytest.raises(EngineStateError):
        engine.configure(NonlinearSolverConfig())


def test_solve_before_configure(engine, diffusion_reaction, x0):
    with pytest.raises(EngineStateError):
        engine.solve(diffusion_reaction, x0)


def test_configure_sets_up_petsc(engine):
    config = NonlinearSolverConfig(
        solver_type=NonlinearSolverType.NEWTON_LS,
        max_iter=17,
        abs_tol=1e-9,
        rel_tol=1e-11,
    )
    engine.configure(config)

    assert engine.is_configured
    assert engine.line_search is LineSearchStrategy.BACKTRACE
    assert engine.snes.getType() == "newtonls"
    assert engine.ksp.getType() == "gmres"
    assert engine.pc.getType() == "lu"

    rtol, atol, _, max_it = engine.snes.getTolerances()
    assert rtol == pytest.approx(1e-11)
    assert atol == pytest.approx(1e-9)
    assert max_it == 17

    # the options of the engine do not remain in the global database
    options = PETSc.Options()
    for key in ["snes_type", "snes_linesearch_type", "ksp_type", "pc_type"]:
        assert not options.hasName(key)


@pytest.mark.parametrize("solver_type", list(NonlinearSolverType))
@pytest.mark.parametrize("line_search_type", list(LineSearchType))
def test_line_search_of_snes(engine, solver_type, line_search_type):
    engine.configure(
        NonlinearSolverConfig(
            solver_type=solver_type, line_search_type=line_search_type
        )
    )
    expected = dispatch.resolve_line_search(solver_type, line_search_type)

    assert engine.line_search is expected
    assert engine.snes.getLineSearch().getType() == expected.value


@pytest.mark.parametrize(
    "solver_type,line_search_type,expected",
    [
        (NonlinearSolverType.NEWTON_TR, LineSearchType.DEFAULT, "basic"),
        (NonlinearSolverType.NEWTON_TR, LineSearchType.L2, "l2"),
        (NonlinearSolverType.LBFGS, LineSearchType.DEFAULT, "cp"),
        (NonlinearSolverType.NEWTON_GMRES, LineSearchType.BACKTRACE, "bt"),
    ],
)
def test_line_search_table(engine, solver_type, line_search_type, expected):
    engine.configure(
        NonlinearSolverConfig(
            solver_type=solver_type, line_search_type=line_search_type
        )
    )
    assert engine.snes.getLineSearch().getType() == expected


@pytest.mark.parametrize(
    "solver_type,line_search_type",
    [
        (NonlinearSolverType.NEWTON_RAPHSON, LineSearchType.DEFAULT),
        (NonlinearSolverType.NEWTON_LS, LineSearchType.DEFAULT),
        (NonlinearSolverType.NEWTON_LS, LineSearchType.BASIC),
        (NonlinearSolverType.NEWTON_TR, LineSearchType.DEFAULT),
    ],
)
def test_solve_diffusion_reaction(
    engine, diffusion_reaction, mesh, solver_type, line_search_type
):
    config = NonlinearSolverConfig(
        solver_type=solver_type, line_search_type=line_search_type, abs_tol=1e-6
    )
    engine.configure(config)
    result = engine.solve(diffusion_reaction, mesh.nodes.copy())

    assert result.converged
    assert result.reason > 0
    assert result.iterations >= 1
    result.raise_for_status()

    u = result.solution
    assert u[0] == pytest.approx(0.0, abs=1e-6)
    assert u[-1] == pytest.approx(1.0, abs=1e-6)
    assert np.all(np.diff(u) > 0.0)
    # the reaction term pulls the solution below the linear profile
    assert np.all(u[1:-1] < mesh.nodes[1:-1])
    assert np.linalg.norm(diffusion_reaction.residual(u)) < 1e-5


def test_linear_problem_is_exact(engine, mesh, bcs, x0):
    problem = asfem.GlobalAssembler(
        mesh, NonlinearDiffusionReactionElement(k=0.0), bcs=bcs
    )
    engine.configure(NonlinearSolverConfig())
    result = engine.solve(problem, x0)

    assert result.converged
    assert np.allclose(result.solution, mesh.nodes, atol=1e-6)


def test_repeated_solves(engine, mesh, x0):
    engine.configure(NonlinearSolverConfig(solver_type=NonlinearSolverType.NEWTON_LS))

    for value in [0.5, 1.0, 2.0]:
        problem = asfem.GlobalAssembler(
            mesh,
            NonlinearDiffusionReactionElement(k=1.0),
            bcs=[DirichletBC("left", 0.0), DirichletBC("right", value)],
        )
        result = engine.solve(problem, x0)
        assert result.converged
        assert result.solution[-1] == pytest.approx(value, abs=1e-6)

    coarse = asfem.interval_mesh(4)
    problem = asfem.GlobalAssembler(
        coarse,
        NonlinearDiffusionReactionElement(k=1.0),
        bcs=[DirichletBC("left", 0.0), DirichletBC("right", 1.0)],
    )
    result = engine.solve(problem, np.zeros(coarse.num_nodes))
    assert result.converged
    assert result.solution.shape == (coarse.num_nodes,)


def test_not_converged(engine, mesh, bcs, x0):
    problem = asfem.GlobalAssembler(
        mesh, NonlinearDiffusionReactionElement(k=10.0), bcs=bcs
    )
    config = NonlinearSolverConfig(max_iter=1, abs_tol=1e-14, rel_tol=1e-14)
    engine.configure(config)
    result = engine.solve(problem, x0)

    assert not result.converged
    assert result.reason < 0
    assert result.iterations == 1
    with pytest.raises(PETScSNESError) as e_info:
        result.raise_for_status()
    assert "snes_diverged_max_it" in str(e_info.value)


def test_initial_guess_violating_bcs(diffusion_reaction, x0):
    result = asfem.solve(diffusion_reaction, x0, NonlinearSolverConfig())
    reference = asfem.solve(
        diffusion_reaction,
        x0,
        NonlinearSolverConfig(abs_tol=1e-30, rel_tol=1e-30, max_iter=10),
    )

    assert result.converged
    assert result.iterations >= 2
    assert np.allclose(result.solution, reference.solution, atol=1e-6)
    assert np.max(np.abs(diffusion_reaction.residual(result.solution))) < 1e-6


def test_failed_solve_cleans_up(engine, mesh, bcs, x0):
    problem = asfem.GlobalAssembler(mesh, MismatchedElement(), bcs=bcs)
    engine.configure(NonlinearSolverConfig())
    indent_level = asfem.log.asfem_logger.indent_level

    with pytest.raises(ShapeMismatchError):
        engine.solve(problem, x0)

    assert asfem.log.asfem_logger.indent_level == indent_level
    assert engine._problem is None


def test_initial_guess_not_modified(engine, diffusion_reaction, x0):
    engine.configure(NonlinearSolverConfig())
    engine.solve(diffusion_reaction, x0)
    assert np.all(x0 == 0.0)


def test_monitor(engine, diffusion_reaction, x0):
    asfem.set_log_level(asfem.LogLevel.DEBUG)
    try:
        engine.configure(NonlinearSolverConfig(monitor=True))
        result = engine.solve(diffusion_reaction, x0)
    finally:
        asfem.set_log_level(asfem.LogLevel.INFO)

    assert result.converged


def test_driver_solve(diffusion_reaction, x0, config):
    result = asfem.solve(diffusion_reaction, x0, config)
    assert result.converged
    assert result.solution[-1] == pytest.approx(1.0, abs=1e-6)


def test_driver_solve_from_path(diffusion_reaction, x0, dir_path):
    result = asfem.solve(diffusion_reaction, x0, f"{dir_path}/config_asfem.ini")
    assert result.converged


def test_driver_aborts_on_config_error(diffusion_reaction, x0, config):
    config.set("NonlinearSolver", "max_iter", "many")
    with pytest.raises(SystemExit) as e_info:
        asfem.solve(diffusion_reaction, x0, config)
    assert e_info.value.code == 1


def test_driver_aborts_on_shape_error_in_kernel(mesh, bcs, x0):
    problem = asfem.GlobalAssembler(mesh, MismatchedElement(), bcs=bcs)
    with pytest.raises(SystemExit) as e_info:
        asfem.solve(problem, x0)

    assert e_info.value.code == 1
    assert isinstance(e_info.value.__cause__, ShapeMismatchError)


def test_driver_aborts_on_wrong_size(diffusion_reaction):
    with pytest.raises(SystemExit) as e_info:
        asfem.solve(diffusion_reaction, np.zeros(3))
    assert e_info.value.code == 1
