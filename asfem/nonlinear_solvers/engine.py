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

"""Interface to PETSc's SNES for the nonlinear systems of asfem."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from petsc4py import PETSc

from asfem import _exceptions
from asfem import _utils
from asfem import log
from asfem.nonlinear_solvers import dispatch

if TYPE_CHECKING:
    from asfem import _typing
    from asfem.nonlinear_solvers.solver_config import LineSearchStrategy
    from asfem.nonlinear_solvers.solver_config import NonlinearSolverConfig


@dataclass(frozen=True)
class SolveResult:
    """The outcome of a nonlinear solve.

    Attributes:
        converged: Whether PETSc reported convergence.
        iterations: The number of outer iterations.
        residual_norm: The norm of the final residual.
        reason: The converged reason reported by PETSc (negative for divergence).
        solution: The final iterate.

    """

    converged: bool
    iterations: int
    residual_norm: float
    reason: int
    solution: np.ndarray

    def raise_for_status(self) -> None:
        """Raises an exception if the solve did not converge.

        Raises:
            PETScSNESError: If PETSc reported divergence.

        """
        if not self.converged:
            raise _exceptions.PETScSNESError(self.reason)


class NonlinearSolverEngine:
    """Wraps a PETSc SNES object, configured once and used for many solves."""

    def __init__(self, comm: PETSc.Comm | None = None) -> None:
        """Initializes self.

        Args:
            comm: The communicator of the PETSc objects, defaults to
                ``PETSc.COMM_SELF``.

        """
        self.comm = comm if comm is not None else PETSc.COMM_SELF

        self.config: NonlinearSolverConfig | None = None
        self.options: _typing.KspOption = {}
        self.line_search: LineSearchStrategy | None = None

        self.snes: PETSc.SNES | None = None
        self.ksp: PETSc.KSP | None = None
        self.pc: PETSc.PC | None = None

        self._configured_once = False
        self._problem: _typing.NonlinearProblem | None = None
        self._size: int | None = None
        self._callback_error: Exception | None = None

    @property
    def is_configured(self) -> bool:
        """Whether the PETSc objects exist, i.e., :py:meth:`solve` may be called."""
        return self.snes is not None

    def configure(self, config: NonlinearSolverConfig) -> None:
        """Creates and configures the PETSc objects.

        Args:
            config: The settings of the nonlinear solver.

        Raises:
            EngineStateError: If the engine has been configured before, even if it
                has been destroyed since.

        """
        if self._configured_once:
            raise _exceptions.EngineStateError(
                "The nonlinear solver engine can only be configured once."
            )
        self._configured_once = True

        with log.block("Configuring the nonlinear solver.", level=log.DEBUG):
            self.config = config
            self.options = dispatch.snes_options(config)
            self.line_search = dispatch.resolve_line_search(
                config.solver_type, config.line_search_type
            )

            self.snes = PETSc.SNES().create(self.comm)
            self.ksp = self.snes.getKSP()
            self.pc = self.ksp.getPC()
            line_search = self.snes.getLineSearch()

            # the line search of newtontr is not set up by the SNES itself
            _utils.setup_petsc_options(
                [self.snes, line_search], [self.options, self.options]
            )
            line_search.setType(self.line_search.value)
            self.snes.setTolerances(
                rtol=config.rel_tol,
                atol=config.abs_tol,
                stol=config.s_tol,
                max_it=config.max_iter,
            )

            if config.monitor:
                self.snes.setMonitor(self._monitor)

            log.debug(
                f"Using SNES type {self.snes.getType()} with "
                f"line search {line_search.getType()}."
            )

    def _monitor(self, snes: PETSc.SNES, iteration: int, norm: float) -> None:
        log.debug(f"SNES iteration {iteration:4d}: ||F|| = {norm:.6e}")

    @log.profile_execution_time("assembling the residual for SNES")
    def _form_function(
        self,
        snes: PETSc.SNES,  # pylint: disable=unused-argument
        x: PETSc.Vec,
        f: PETSc.Vec,
    ) -> None:
        """Interface for PETSc SNESSetFunction."""
        try:
            residual = self._problem.residual(x.getArray(readonly=True).copy())
        except Exception as error:
            self._callback_error = error
            raise
        f.setArray(residual)

    @log.profile_execution_time("assembling the Jacobian for SNES")
    def _form_jacobian(
        self,
        snes: PETSc.SNES,  # pylint: disable=unused-argument
        x: PETSc.Vec,
        J: PETSc.Mat,  # pylint: disable=invalid-name
        P: PETSc.Mat,  # pylint: disable=invalid-name
    ) -> None:
        """Interface for PETSc SNESSetJacobian."""
        try:
            jacobian = self._problem.jacobian(x.getArray(readonly=True).copy())
        except Exception as error:
            self._callback_error = error
            raise
        _utils.update_petsc_matrix(J, jacobian)
        if P.handle != J.handle:
            _utils.update_petsc_matrix(P, jacobian)

    def _run_snes(self, x: PETSc.Vec) -> None:
        """Runs SNES, raising errors of the callbacks instead of PETSc's wrapper."""
        self._callback_error = None
        try:
            self.snes.solve(None, x)
        except PETSc.Error as petsc_error:
            if self._callback_error is not None:
                raise self._callback_error from petsc_error
            raise

    def solve(
        self, problem: _typing.NonlinearProblem, initial_guess: np.ndarray
    ) -> SolveResult:
        """Solves the nonlinear system ``problem.residual(x) = 0``.

        The iteration starts from ``problem.apply_bc_values(initial_guess)``.

        Args:
            problem: The nonlinear problem, providing the residual and the Jacobian.
            initial_guess: The initial guess for the solution, which is not modified.

        Returns:
            The outcome of the solve. Non-convergence is reported via
            :py:attr:`SolveResult.converged`, use
            :py:meth:`SolveResult.raise_for_status` to turn it into an exception.

        Raises:
            EngineStateError: If the engine has not been configured.

        """
        if not self.is_configured:
            raise _exceptions.EngineStateError(
                "The nonlinear solver engine has to be configured before solving."
            )

        x = f = jacobian = None
        with log.block("Solving the nonlinear system with PETSc SNES.", log.DEBUG):
            try:
                start = np.asarray(
                    problem.apply_bc_values(initial_guess), dtype=PETSc.ScalarType
                )
                size = start.shape[0]
                if self._size is not None and self._size != size:
                    self.snes.reset()
                self._size = size
                self._problem = problem

                x = PETSc.Vec().createSeq(size, comm=self.comm)
                x.setArray(start)
                f = x.duplicate()
                jacobian = _utils.scipy_to_petsc(problem.jacobian(start), self.comm)

                self.snes.setFunction(self._form_function, f)
                self.snes.setJacobian(self._form_jacobian, jacobian)
                self._run_snes(x)

                reason = self.snes.getConvergedReason()
                result = SolveResult(
                    converged=reason > 0,
                    iterations=self.snes.getIterationNumber(),
                    residual_norm=self.snes.getFunctionNorm(),
                    reason=reason,
                    solution=x.getArray().copy(),
                )
            finally:
                for petsc_object in (x, f, jacobian):
                    if petsc_object is not None:
                        petsc_object.destroy()
                self._problem = None
                self._callback_error = None

            if not result.converged:
                log.warning(
                    f"The nonlinear solver did not converge after "
                    f"{result.iterations} iterations (converged reason {reason})."
                )
            else:
                log.debug(
                    f"The nonlinear solver converged after {result.iterations} "
                    f"iterations, ||F|| = {result.residual_norm:.6e}."
                )

        return result

    def destroy(self) -> None:
        """Releases the PETSc objects.

        The engine cannot be configured again afterwards.
        """
        if self.snes is not None:
            self.snes.destroy()
            if hasattr(PETSc, "garbage_cleanup"):
                PETSc.garbage_cleanup(comm=self.comm)

        self.snes = None
        self.ksp = None
        self.pc = None
        self._size = None
