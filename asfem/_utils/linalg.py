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

"""Linear algebra helper functions for the PETSc backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from petsc4py import PETSc
from scipy import sparse

from asfem import _exceptions

if TYPE_CHECKING:
    from asfem import _typing


def setup_petsc_options(
    objs: list[PETSc.KSP | PETSc.SNES | PETSc.SNESLineSearch],
    petsc_options: list[_typing.KspOption],
) -> None:
    """Applies options to PETSc objects via the options database.

    This is used to pass user defined command line type options for PETSc
    to the PETSc objects. Here, ``petsc_options[i]`` is applied to ``objs[i]``.
    The options are removed from the global database afterwards, so that they do
    not affect other PETSc objects.

    Args:
        objs: A list of PETSc objects (e.g. nonlinear solvers) to which the (command
            line) options are applied to.
        petsc_options: A list of command line options that specify the solver
            from PETSc.

    """
    opts = PETSc.Options()

    for obj, options in zip(objs, petsc_options):
        for key, value in options.items():
            opts.setValue(key, value)

        try:
            obj.setFromOptions()
        finally:
            for key in options.keys():
                opts.delValue(key)


def _csr_arrays(
    matrix: sparse.spmatrix,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Returns the CSR arrays of a sparse matrix with PETSc's index type."""
    csr = sparse.csr_matrix(matrix)
    csr.sort_indices()
    return (
        csr.indptr.astype(PETSc.IntType),
        csr.indices.astype(PETSc.IntType),
        csr.data.astype(PETSc.ScalarType),
    )


def scipy_to_petsc(
    matrix: sparse.spmatrix, comm: PETSc.Comm | None = None
) -> PETSc.Mat:
    """Converts a (square) scipy sparse matrix to a sequential PETSc AIJ matrix.

    Args:
        matrix: The sparse matrix.
        comm: The communicator of the PETSc matrix, defaults to ``PETSc.COMM_SELF``.

    Returns:
        The assembled PETSc matrix. Later insertions outside of the initial sparsity
        pattern are allowed.

    """
    if comm is None:
        comm = PETSc.COMM_SELF

    if matrix.shape[0] != matrix.shape[1]:
        raise _exceptions.InputError(
            "asfem._utils.scipy_to_petsc",
            "matrix",
            f"The Jacobian has to be square, but its shape is {matrix.shape}.",
        )

    indptr, indices, data = _csr_arrays(matrix)
    petsc_matrix = PETSc.Mat().createAIJ(
        size=matrix.shape, csr=(indptr, indices, data), comm=comm
    )
    petsc_matrix.setOption(PETSc.Mat.Option.NEW_NONZERO_ALLOCATION_ERR, False)
    petsc_matrix.assemble()

    return petsc_matrix


def update_petsc_matrix(petsc_matrix: PETSc.Mat, matrix: sparse.spmatrix) -> None:
    """Overwrites the values of a PETSc matrix with those of a scipy matrix.

    Args:
        petsc_matrix: The PETSc matrix, which is overwritten.
        matrix: The sparse matrix with the new values.

    """
    indptr, indices, data = _csr_arrays(matrix)
    petsc_matrix.zeroEntries()
    petsc_matrix.setValuesCSR(indptr, indices, data)
    petsc_matrix.assemble()
