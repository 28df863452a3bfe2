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
from scipy import sparse

import asfem
from asfem._exceptions import InputError
from asfem.assembly import FECalcType
from asfem.assembly import LocalElementInfo
from asfem.assembly import LocalElementSolution
from asfem.kernels import AllenCahnElement
from asfem.kernels import CyclicDirichletBC
from asfem.kernels import DirichletBC
from asfem.kernels import DoubleWellFreeEnergyMaterial
from asfem.linalg import DenseVector
from asfem.nonlinear_solvers import NonlinearSolverConfig

params = [0.1, 0.9, 2.0]


@pytest.fixture
def material():
    return DoubleWellFreeEnergyMaterial()


def test_double_well_minima(material):
    for c in params[:2]:
        assert material.compute_f(params, c) == pytest.approx(0.0)
        assert material.compute_dfdc(params, c) == pytest.approx(0.0)
        assert material.compute_d2fdc2(params, c) == pytest.approx(
            2.0 * params[2] * (params[0] - params[1]) ** 2
        )

    assert material.compute_f(params, 0.5) == pytest.approx(2.0 * 0.4**4)


@pytest.mark.parametrize("c", [-0.3, 0.2, 0.5, 1.4])
def test_double_well_derivatives(material, c):
    eps = 1e-6
    dfdc = (
        material.compute_f(params, c + eps) - material.compute_f(params, c - eps)
    ) / (2.0 * eps)
    d2fdc2 = (
        material.compute_dfdc(params, c + eps) - material.compute_dfdc(params, c - eps)
    ) / (2.0 * eps)

    assert material.compute_dfdc(params, c) == pytest.approx(dfdc, rel=1e-6, abs=1e-8)
    assert material.compute_d2fdc2(params, c) == pytest.approx(
        d2fdc2, rel=1e-6, abs=1e-8
    )


def test_material_properties(material):
    info = LocalElementInfo(
        element_id=1,
        element_type="edge2",
        node_coords=np.array([0.0, 1.0]),
        dof_ids=[1, 2],
    )
    solution = LocalElementSolution(nodal_values=DenseVector(2), value=0.3)
    props = material.compute_properties(params, info, solution)

    assert set(props.keys()) == {"F", "dFdc", "d2Fdc2"}
    assert props["dFdc"] == pytest.approx(material.compute_dfdc(params, 0.3))

    with pytest.raises(InputError):
        material.compute_properties([1.0, 2.0], info, solution)


def test_allen_cahn_uniform_state():
    mesh = asfem.interval_mesh(10)
    problem = asfem.GlobalAssembler(
        mesh,
        AllenCahnElement(kappa=0.01),
        material=DoubleWellFreeEnergyMaterial(),
        material_params=[0.0, 1.0, 1.0],
        bcs=[DirichletBC("left", 1.0), DirichletBC("right", 1.0)],
    )

    result = asfem.solve(problem, np.full(mesh.num_nodes, 0.9), NonlinearSolverConfig())

    assert result.converged
    assert np.allclose(result.solution, 1.0, atol=1e-6)


def test_dirichlet_bc():
    bc = DirichletBC("left", 2.0, penalty=10.0)
    u = np.array([1.5, 0.0])

    residual = np.zeros(2)
    bc.apply(FECalcType.RESIDUAL, 1, 0.0, 0.0, u, residual=residual)
    assert residual.tolist() == [-5.0, 0.0]

    jacobian = sparse.csr_matrix(np.eye(2))
    bc.apply(FECalcType.JACOBIAN, 1, 0.0, 0.0, u, jacobian=jacobian)
    assert jacobian.toarray().tolist() == [[11.0, 0.0], [0.0, 1.0]]

    with pytest.raises(InputError):
        DirichletBC("left", 0.0, penalty=0.0)


def test_cyclic_signal():
    bc = CyclicDirichletBC("right", 2.0, tspan=[0.0, 1.0, 2.0], yspan=[0.0, 1.0, 0.0])

    assert bc.period == pytest.approx(2.0)
    assert bc.signal(0.5) == pytest.approx(0.5)
    assert bc.signal(1.0) == pytest.approx(1.0)
    assert bc.signal(2.5) == pytest.approx(0.5)
    assert bc.signal(3.0) == pytest.approx(1.0)
    assert bc.compute_value(0.25, 1.0) == pytest.approx(0.5)
    assert bc.compute_value(4.25, 1.0) == pytest.approx(0.5)


def test_cyclic_from_params():
    bc = CyclicDirichletBC.from_params("right", 1.0, [0.0, 1.0, 1.0, 3.0])
    assert bc.tspan.tolist() == [0.0, 1.0]
    assert bc.yspan.tolist() == [1.0, 3.0]
    assert bc.compute_value(0.5, 0.0) == pytest.approx(2.0)

    with pytest.raises(InputError):
        CyclicDirichletBC.from_params("right", 1.0, [0.0, 1.0, 1.0])


def test_cyclic_validation():
    with pytest.raises(InputError):
        CyclicDirichletBC("right", 1.0, tspan=[0.0], yspan=[1.0])
    with pytest.raises(InputError):
        CyclicDirichletBC("right", 1.0, tspan=[0.0, 1.0], yspan=[1.0, 2.0, 3.0])
    with pytest.raises(InputError):
        CyclicDirichletBC("right", 1.0, tspan=[0.0, 1.0, 1.0], yspan=[0.0, 1.0, 2.0])


def test_time_dependent_bc(mesh):
    bc = CyclicDirichletBC("right", 1.0, tspan=[0.0, 1.0], yspan=[0.0, 1.0])
    x = np.zeros(mesh.num_nodes)
    element = asfem.kernels.NonlinearDiffusionReactionElement(k=0.0)

    early = asfem.GlobalAssembler(mesh, element, bcs=[bc], time=0.25).residual(x)
    late = asfem.GlobalAssembler(mesh, element, bcs=[bc], time=0.75).residual(x)

    assert early[-1] == pytest.approx(-0.25e8)
    assert late[-1] == pytest.approx(-0.75e8)
