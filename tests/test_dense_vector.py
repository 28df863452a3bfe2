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
import pytest

import asfem
from asfem import DenseVector
from asfem._exceptions import InputError
from asfem._exceptions import ShapeMismatchError


def test_construction():
    assert DenseVector().m == 0
    assert DenseVector(4).shape == (4,)
    assert np.all(DenseVector(4).to_numpy() == 0.0)
    assert np.all(DenseVector(3, -2.0).to_numpy() == -2.0)
    assert np.allclose(DenseVector(3, [1.0, 2.0, 3.0]).to_numpy(), [1.0, 2.0, 3.0])

    with pytest.raises(InputError):
        DenseVector(3, [1.0, 2.0])


def test_one_based_access():
    vector = DenseVector(3, [1.0, 2.0, 3.0])
    assert vector.get(1) == 1.0
    assert vector.get(3) == 3.0

    vector.set(2, 5.0)
    vector.add(2, 1.0)
    assert vector.get(2) == 6.0
    assert vector.data[1] == 6.0


@pytest.mark.skipif(not __debug__, reason="bounds are only checked in debug mode")
def test_bounds_check():
    vector = DenseVector(3)
    with pytest.raises(IndexError):
        vector.get(0)
    with pytest.raises(IndexError):
        vector.set(4, 1.0)


def test_assign():
    source = DenseVector(2, [1.0, 2.0])

    target = DenseVector()
    target.assign(source)
    assert np.allclose(target.to_numpy(), [1.0, 2.0])

    target.assign(0.5)
    assert np.all(target.to_numpy() == 0.5)
    assert source.get(1) == 1.0

    with pytest.raises(ShapeMismatchError):
        DenseVector(3).assign(source)


def test_arithmetic(rng):
    a = DenseVector.from_numpy(rng.rand(5))
    b = DenseVector.from_numpy(rng.rand(5))
    s = 0.3

    assert np.allclose(((a + b) - b).to_numpy(), a.to_numpy())
    assert np.allclose(((a * s) / s).to_numpy(), a.to_numpy())
    assert np.allclose((2.0 * a).to_numpy(), 2.0 * a.to_numpy())
    assert np.allclose((1.0 - a).to_numpy(), 1.0 - a.to_numpy())

    c = a.copy()
    c += b
    c *= 2.0
    c -= b
    c /= 2.0
    assert np.allclose(c.to_numpy(), a.to_numpy() + 0.5 * b.to_numpy())


def test_norm_and_dot(rng):
    a = rng.rand(6)
    b = rng.rand(6)

    assert DenseVector.from_numpy(a).norm() == pytest.approx(np.linalg.norm(a))
    assert DenseVector.from_numpy(a).dot(DenseVector.from_numpy(b)) == pytest.approx(
        np.dot(a, b)
    )


def test_shape_mismatch():
    a = DenseVector(2)
    b = DenseVector(3)

    with pytest.raises(ShapeMismatchError):
        a + b
    with pytest.raises(ShapeMismatchError):
        a.dot(b)

    result = asfem.attempt(a.__sub__, b)
    assert result.is_shape_mismatch


def test_resize_and_clean():
    vector = DenseVector(2, 1.0)
    vector.resize(4, 3.0)
    assert vector.m == 4
    assert np.all(vector.to_numpy() == 3.0)

    vector.set_random()
    assert np.all(vector.to_numpy() < 1.0)

    vector.clean()
    assert vector.data.size == 0
