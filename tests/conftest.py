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
import pathlib

import numpy as np
import pytest

import asfem
from asfem.kernels import DirichletBC
from asfem.kernels import NonlinearDiffusionReactionElement


@pytest.fixture()
def dir_path():
    return str(pathlib.Path(__file__).parent)


@pytest.fixture
def config(dir_path):
    return asfem.load_config(f"{dir_path}/config_asfem.ini")


@pytest.fixture
def rng():
    return np.random.RandomState(300696)


@pytest.fixture
def mesh():
    return asfem.interval_mesh(16)


@pytest.fixture
def bcs():
    return [DirichletBC("left", 0.0), DirichletBC("right", 1.0)]


@pytest.fixture
def diffusion_reaction(mesh, bcs):
    return asfem.GlobalAssembler(
        mesh, NonlinearDiffusionReactionElement(k=1.0, source=0.0), bcs=bcs
    )


@pytest.fixture
def x0(mesh):
    return np.zeros(mesh.num_nodes)
