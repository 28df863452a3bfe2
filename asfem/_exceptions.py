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

"""Exceptions raised by asfem."""

from __future__ import annotations


class AsFemException(Exception):
    """Base class for exceptions raised by asfem."""

    pass


class ShapeError(AsFemException):
    """Base class for structural errors of dense matrices and vectors.

    These indicate programming errors, not transient runtime conditions. The top
    level driver treats them as fatal.
    """

    def __init__(self, operation: str, message: str | None = None) -> None:
        """Initializes self.

        Args:
            operation: The operation which failed, e.g., ``"a+b"``.
            message: A message detailing what went wrong.

        """
        super().__init__()
        self.operation = operation
        self.message = message

    def __str__(self) -> str:
        """Returns the string representation of the exception."""
        main_msg = f"{self.operation} cannot be applied."
        post_msg = f"\n{self.message}" if self.message is not None else ""
        return main_msg + post_msg


class ShapeMismatchError(ShapeError):
    """Raised when the shapes of two operands are incompatible."""

    def __init__(
        self,
        operation: str,
        lhs_shape: tuple[int, ...],
        rhs_shape: tuple[int, ...],
    ) -> None:
        """Initializes self.

        Args:
            operation: The operation which failed.
            lhs_shape: The shape of the left-hand side operand.
            rhs_shape: The shape of the right-hand side operand.

        """
        super().__init__(
            operation,
            f"The operands have incompatible shapes {lhs_shape} and {rhs_shape}.",
        )
        self.lhs_shape = lhs_shape
        self.rhs_shape = rhs_shape


class NotSquareError(ShapeError):
    """Raised when an operation requires a square matrix."""

    def __init__(self, operation: str, shape: tuple[int, int]) -> None:
        """Initializes self.

        Args:
            operation: The operation which failed.
            shape: The shape of the (non-square) matrix.

        """
        super().__init__(
            operation,
            f"The operation only works for square matrices, but the shape is {shape}.",
        )
        self.shape = shape


class SingularMatrixError(AsFemException):
    """Raised when the dense LU factorization reports a singular matrix."""

    def __init__(self, message: str = "The matrix is singular.") -> None:
        """Initializes self.

        Args:
            message: The message reported by the dense solver.

        """
        super().__init__()
        self.message = message

    def __str__(self) -> str:
        """Returns the string representation of the exception."""
        return self.message


class EngineStateError(AsFemException):
    """Raised when the nonlinear solver engine is used out of order."""

    pass


class PETScError(AsFemException):
    """This exception is raised when the solution of a problem with PETSc fails.

    Also returns the PETSc error code and reason.
    """

    def __init__(
        self,
        error_code: int,
        message: str = "The PETSc solver did not converge.",
    ) -> None:
        """Initializes self.

        Args:
            error_code: The error code issued by PETSc.
            message: The message, detailing why PETSc issued an error.

        """
        super().__init__()
        self.message = message
        self.error_code = error_code
        self.error_dict: dict[int, str] = {}

    def __str__(self) -> str:
        """Returns the string representation of the exception."""
        return (
            f"{self.message} ConvergedReason = "
            f"{self.error_code}{self.error_dict.get(self.error_code, '')}"
        )


class PETScSNESError(PETScError):
    """This exception is raised if the solution of a nonlinear problem with PETSc fails.

    Also returns the PETSc error code and reason.
    """

    def __init__(
        self,
        error_code: int,
        message: str = "The PETSc nonlinear solver did not converge.",
    ) -> None:
        """Initializes self.

        Args:
            error_code: The error code issued by PETSc.
            message: The message, detailing why PETSc issued an error.

        """
        super().__init__(error_code, message)
        self.error_dict = {
            -1: (
                " (snes_diverged_function_domain, "
                "the new x location passed to the function is not in the domain)"
            ),
            -2: " (snes_diverged_function_count)",
            -3: " (snes_diverged_linear_solve, linear solve failed)",
            -4: " (snes_diverged_fnorm_nan)",
            -5: " (snes_diverged_max_it, maximum number of iterations exceeded)",
            -6: " (snes_diverged_line_search, the line search failed)",
            -7: " (snes_diverged_inner, inner solve failed)",
            -8: (
                " (snes_diverged_local_min, ||J^T b|| is small, "
                "implies converged to local minimum)"
            ),
            -9: " (snes_diverged_dtol, ||F|| > divtol*||F_initial||)",
            -10: (
                " (snes_diverged_jacobian_domain, "
                "Jacobian calculation does not make sense)"
            ),
            -11: " (snes_diverged_tr_delta)",
        }


class InputError(AsFemException):
    """This gets raised when the user input to a public API method is wrong."""

    def __init__(self, obj: str, param: str, message: str | None = None) -> None:
        """Initializes self.

        Args:
            obj: The object which raises the exception.
            param: The faulty input parameter.
            message: A message detailing what went wrong.

        """
        super().__init__()
        self.obj = obj
        self.param = param
        self.message = message

    def __str__(self) -> str:
        """Returns the string representation of the exception."""
        main_msg = (
            f"Not a valid input for object {self.obj}. "
            f"The faulty input is for the parameter {self.param}."
        )
        post_msg = f"\n{self.message}" if self.message is not None else ""
        return main_msg + post_msg


class ConfigError(AsFemException):
    """This exception gets raised when parameters in the config file are wrong."""

    pre_message = "You have some error(s) in your config file.\n"

    def __init__(self, config_errors: list[str]) -> None:
        """Initializes self.

        Args:
            config_errors: The list of errors that occurred while trying to validate
                the config.

        """
        super().__init__()
        self.config_errors = config_errors

    def __str__(self) -> str:
        """Returns the string representation of the exception."""
        except_str = f"{self.pre_message}"
        for error in self.config_errors:
            except_str += error
        return except_str
