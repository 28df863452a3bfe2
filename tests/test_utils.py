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

"""Tests for the utils module.

"""

import numpy as np
from petsc4py import PETSc
import pytest
from scipy import sparse

from asfem import _utils
from asfem._exceptions import InputError


def test_enlist():
    assert _utils.enlist(1) == [1]
    assert _utils.enlist([1, 2]) == [1, 2]
    assert _utils.enlist("abc") == ["abc"]


def test_scipy_to_petsc(rng):
    array = rng.rand(4, 4)
    array[array < 0.5] = 0.0
    np.fill_diagonal(array, 1.0)
    matrix = sparse.csr_matrix(array)

    petsc_matrix = _utils.scipy_to_petsc(matrix)
    try:
        assert petsc_matrix.getSize() == (4, 4)
        assert np.allclose(petsc_matrix.convert("dense").getDenseArray(), array)
    finally:
        petsc_matrix.destroy()


def test_update_petsc_matrix():
    matrix = sparse.diags([1.0, 2.0, 3.0]).tocsr()
    petsc_matrix = _utils.scipy_to_petsc(matrix)
    try:
        _utils.update_petsc_matrix(petsc_matrix, 2.0 * matrix)
        assert petsc_matrix.getDiagonal().getArray().tolist() == [2.0, 4.0, 6.0]
    finally:
        petsc_matrix.destroy()


def test_non_square_matrix():
    with pytest.raises(InputError):
        _utils.scipy_to_petsc(sparse.csr_matrix(np.ones((2, 3))))


def test_setup_petsc_options():
    ksp = PETSc.KSP().create(PETSc.COMM_SELF)
    snes = PETSc.SNES().create(PETSc.COMM_SELF)
    try:
        _utils.setup_petsc_options(
            [ksp, snes],
            [{"ksp_type": "cg", "pc_type": "jacobi"}, {"snes_type": "newtontr"}],
        )
        assert ksp.getType() == "cg"
        assert ksp.getPC().getType() == "jacobi"
        assert snes.getType() == "newtontr"

        # the options database is cleared afterwards
        assert not PETSc.Options().hasName("ksp_type")
    finally:
        ksp.destroy()
        snes.destroy()
