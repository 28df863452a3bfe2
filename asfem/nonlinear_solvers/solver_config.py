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

"""Settings of the nonlinear solver."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
import enum
from typing import TYPE_CHECKING

from asfem import _exceptions

if TYPE_CHECKING:
    from asfem.io import config as config_module


class NonlinearSolverType(str, enum.Enum):
    """The outer nonlinear solution methods."""

    NEWTON_RAPHSON = "newtonraphson"
    NEWTON_LS = "newtonls"
    NEWTON_TR = "newtontr"
    LBFGS = "lbfgs"
    BROYDEN = "broyden"
    BAD_BROYDEN = "badbroyden"
    NEWTON_CG = "newtoncg"
    NEWTON_GMRES = "newtongmres"

    @classmethod
    def from_string(cls, name: str) -> NonlinearSolverType:
        """Converts a (case insensitive) name from an input file to the method.

        Args:
            name: The name of the method, aliases like ``"nr"`` or ``"ngmres"`` are
                accepted.

        Returns:
            The corresponding solver type.

        """
        aliases = {
            "newton": cls.NEWTON_RAPHSON,
            "nr": cls.NEWTON_RAPHSON,
            "ncg": cls.NEWTON_CG,
            "ngmres": cls.NEWTON_GMRES,
        }
        key = name.strip().casefold()
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError as value_error:
            raise _exceptions.InputError(
                "asfem.NonlinearSolverType",
                "name",
                f"Unknown nonlinear solver type {name}.",
            ) from value_error


class LineSearchType(str, enum.Enum):
    """The requested line search, ``DEFAULT`` depends on the outer method."""

    DEFAULT = "default"
    BACKTRACE = "backtrace"
    CP = "cp"
    L2 = "l2"
    BASIC = "basic"

    @classmethod
    def from_string(cls, name: str) -> LineSearchType:
        """Converts a (case insensitive) name from an input file to the line search.

        Args:
            name: The name of the line search, ``"bt"`` is accepted for backtracking.

        Returns:
            The corresponding line search type.

        """
        key = name.strip().casefold()
        if key == "bt":
            return cls.BACKTRACE
        try:
            return cls(key)
        except ValueError as value_error:
            raise _exceptions.InputError(
                "asfem.LineSearchType",
                "name",
                f"Unknown line search type {name}.",
            ) from value_error


class LineSearchStrategy(str, enum.Enum):
    """The concrete line search strategies, valued by their PETSc names."""

    BACKTRACE = "bt"
    CRITICAL_POINT = "cp"
    L2 = "l2"
    BASIC = "basic"


@dataclass(frozen=True)
class LinearSolverConfig:
    """Settings of the inner linear solve, a preconditioned Krylov method."""

    ksp_type: str = "gmres"
    pc_type: str = "lu"
    gmres_restart: int = 1200
    rtol: float = 1e-10
    atol: float = 1e-10
    max_iter: int = 500000


@dataclass(frozen=True)
class NonlinearSolverConfig:
    """Settings of the outer nonlinear solver.

    The record is created once (usually from a config file) and consumed by
    :py:meth:`asfem.nonlinear_solvers.NonlinearSolverEngine.configure`.
    """

    solver_type: NonlinearSolverType = NonlinearSolverType.NEWTON_RAPHSON
    max_iter: int = 25
    abs_tol: float = 1e-7
    rel_tol: float = 1e-9
    s_tol: float = 0.0
    line_search_type: LineSearchType = LineSearchType.DEFAULT
    line_search_order: int = 3
    monitor: bool = False
    linear_solver: LinearSolverConfig = field(default_factory=LinearSolverConfig)

    @classmethod
    def from_config(cls, config: config_module.Config) -> NonlinearSolverConfig:
        """Creates the settings from the config of the simulation.

        The config is validated first.

        Args:
            config: The config, see :py:class:`asfem.io.Config`.

        Returns:
            The nonlinear solver settings.

        """
        config.validate_config()

        linear_solver = LinearSolverConfig(
            ksp_type=config.get("LinearSolver", "ksp_type").casefold(),
            pc_type=config.get("LinearSolver", "pc_type").casefold(),
            gmres_restart=config.getint("LinearSolver", "gmres_restart"),
            rtol=config.getfloat("LinearSolver", "rtol"),
            atol=config.getfloat("LinearSolver", "atol"),
            max_iter=config.getint("LinearSolver", "max_iter"),
        )

        return cls(
            solver_type=NonlinearSolverType.from_string(
                config.get("NonlinearSolver", "type")
            ),
            max_iter=config.getint("NonlinearSolver", "max_iter"),
            abs_tol=config.getfloat("NonlinearSolver", "abs_tol"),
            rel_tol=config.getfloat("NonlinearSolver", "rel_tol"),
            s_tol=config.getfloat("NonlinearSolver", "s_tol"),
            line_search_type=LineSearchType.from_string(
                config.get("NonlinearSolver", "line_search")
            ),
            line_search_order=config.getint("NonlinearSolver", "line_search_order"),
            monitor=config.getboolean("NonlinearSolver", "monitor"),
            linear_solver=linear_solver,
        )
