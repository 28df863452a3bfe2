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

"""Top level driver of a simulation.

Structural errors (incompatible shapes, non-square or singular matrices, misuse of
the solver engine and faulty input) are fatal for a simulation: the driver logs
them and terminates the process with exit code 1.
"""

from __future__ import annotations

import contextlib
from typing import Iterator, TYPE_CHECKING

import numpy as np

from asfem import _exceptions
from asfem import log
from asfem.io import config as config_module
from asfem.nonlinear_solvers.engine import NonlinearSolverEngine
from asfem.nonlinear_solvers.solver_config import NonlinearSolverConfig

if TYPE_CHECKING:
    from asfem import _typing
    from asfem.nonlinear_solvers.engine import SolveResult

fatal_errors = (
    _exceptions.ShapeError,
    _exceptions.SingularMatrixError,
    _exceptions.EngineStateError,
    _exceptions.ConfigError,
    _exceptions.InputError,
)


@contextlib.contextmanager
def abort_on_fatal_errors() -> Iterator[None]:
    """Terminates the process if a structural error occurs inside the block.

    Raises:
        SystemExit: With exit code 1, if one of the fatal errors is raised.

    """
    try:
        yield
    except fatal_errors as error:
        log.critical(f"{type(error).__name__}: {error}")
        raise SystemExit(1) from error


def _nonlinear_solver_config(
    config: NonlinearSolverConfig | config_module.Config | str | None,
) -> NonlinearSolverConfig:
    if config is None:
        return NonlinearSolverConfig()
    elif isinstance(config, NonlinearSolverConfig):
        return config
    elif isinstance(config, config_module.Config):
        return NonlinearSolverConfig.from_config(config)
    else:
        return NonlinearSolverConfig.from_config(config_module.load_config(config))


def solve(
    problem: _typing.NonlinearProblem,
    initial_guess: np.ndarray,
    config: NonlinearSolverConfig | config_module.Config | str | None = None,
) -> SolveResult:
    """Solves a nonlinear problem, aborting on structural errors.

    Args:
        problem: The nonlinear problem, e.g., a
            :py:class:`asfem.assembly.GlobalAssembler`.
        initial_guess: The initial guess for the solution.
        config: The settings of the nonlinear solver, either directly, as config
            or as path to a config file. Defaults to the default settings.

    Returns:
        The outcome of the solve. Non-convergence is not fatal and has to be
        handled by the caller.

    """
    with abort_on_fatal_errors():
        solver_config = _nonlinear_solver_config(config)

        engine = NonlinearSolverEngine()
        engine.configure(solver_config)
        try:
            result = engine.solve(problem, initial_guess)
        finally:
            engine.destroy()

    log.info(
        f"Nonlinear solve finished: converged = {result.converged}, "
        f"iterations = {result.iterations}, ||F|| = {result.residual_norm:.6e}."
    )
    return result
