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

"""Line meshes, Gauss quadrature and Lagrange shape functions in 1D."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

import numpy as np
from typing_extensions import Literal

from asfem import _exceptions
from asfem import log
from asfem.linalg import DenseMatrix
from asfem.linalg import DenseVector

ElementType = Literal["edge2", "edge3"]

_nodes_per_element: dict[str, int] = {"edge2": 2, "edge3": 3}
_default_quadrature_order: dict[str, int] = {"edge2": 2, "edge3": 3}


def nodes_per_element(element_type: str) -> int:
    """Returns the number of nodes of an element type."""
    try:
        return _nodes_per_element[element_type]
    except KeyError as key_error:
        raise _exceptions.InputError(
            "asfem.assembly.mesh",
            "element_type",
            f"Unsupported element type {element_type}, "
            f"use one of {list(_nodes_per_element.keys())}.",
        ) from key_error


def gauss_points(order: int) -> tuple[np.ndarray, np.ndarray]:
    """Computes the Gauss-Legendre points and weights on the reference line [-1, 1].

    Args:
        order: The number of quadrature points.

    Returns:
        A tuple ``(points, weights)``.

    """
    if order < 1:
        raise _exceptions.InputError(
            "asfem.assembly.gauss_points",
            "order",
            "The number of quadrature points has to be positive.",
        )
    points, weights = np.polynomial.legendre.leggauss(order)
    return points, weights


def reference_shape_functions(
    element_type: str, xi: float
) -> tuple[np.ndarray, np.ndarray]:
    """Evaluates the Lagrange shape functions on the reference line.

    For ``edge3`` elements the two end nodes come first, followed by the midpoint.

    Args:
        element_type: The element type, ``"edge2"`` or ``"edge3"``.
        xi: The reference coordinate in [-1, 1].

    Returns:
        A tuple ``(values, derivatives)`` with respect to ``xi``.

    """
    if element_type == "edge2":
        values = np.array([0.5 * (1.0 - xi), 0.5 * (1.0 + xi)])
        derivatives = np.array([-0.5, 0.5])
    elif element_type == "edge3":
        values = np.array(
            [0.5 * xi * (xi - 1.0), 0.5 * xi * (xi + 1.0), 1.0 - xi * xi]
        )
        derivatives = np.array([xi - 0.5, xi + 0.5, -2.0 * xi])
    else:
        raise _exceptions.InputError(
            "asfem.assembly.reference_shape_functions",
            "element_type",
            f"Unsupported element type {element_type}.",
        )

    return values, derivatives


@dataclass
class ShapeFunctionValues:
    """The shape functions of an element at a single quadrature point.

    Attributes:
        values: The shape function values ``N_i``.
        gradients: The physical derivatives ``dN_i/dx``.
        x: The physical coordinate of the quadrature point.
        jxw: The Jacobian determinant times the quadrature weight.

    """

    values: DenseVector
    gradients: DenseVector
    x: float
    jxw: float


def physical_shape_functions(
    element_type: str, node_coords: np.ndarray, xi: float, weight: float
) -> ShapeFunctionValues:
    """Maps the reference shape functions to a physical element.

    Args:
        element_type: The element type.
        node_coords: The coordinates of the element's nodes.
        xi: The reference coordinate of the quadrature point.
        weight: The quadrature weight.

    Returns:
        The shape functions in physical coordinates.

    """
    values, derivatives = reference_shape_functions(element_type, xi)

    jacobian = DenseMatrix(1, 1, float(np.dot(derivatives, node_coords)))
    det_jacobian = jacobian.det()
    if det_jacobian <= 0.0:
        raise _exceptions.InputError(
            "asfem.assembly.physical_shape_functions",
            "node_coords",
            f"The element is inverted or degenerate, det(J) = {det_jacobian}.",
        )
    inverse_jacobian = jacobian.inverse()

    return ShapeFunctionValues(
        values=DenseVector.from_numpy(values),
        gradients=DenseVector.from_numpy(derivatives) * inverse_jacobian.get(1, 1),
        x=float(np.dot(values, node_coords)),
        jxw=det_jacobian * weight,
    )


@dataclass
class LineMesh:
    """A mesh of the interval ``[start, end]`` with Lagrange line elements.

    Node and element ids are 1-based. ``connectivity[e]`` holds the node ids of the
    element with id ``e + 1``.
    """

    nodes: np.ndarray
    connectivity: np.ndarray
    element_type: str = "edge2"
    boundaries: dict[str, list[int]] = field(default_factory=dict)

    @property
    def num_nodes(self) -> int:
        return self.nodes.shape[0]

    @property
    def num_elements(self) -> int:
        return self.connectivity.shape[0]

    @property
    def nodes_per_element(self) -> int:
        return nodes_per_element(self.element_type)

    def element_nodes(self, element_id: int) -> np.ndarray:
        """Returns the 1-based node ids of an element (with 1-based id)."""
        return self.connectivity[element_id - 1]

    def element_coords(self, element_id: int) -> np.ndarray:
        """Returns the coordinates of an element's nodes."""
        return self.nodes[self.element_nodes(element_id) - 1]

    def boundary_nodes(self, name: str) -> list[int]:
        """Returns the 1-based node ids of a named boundary."""
        if name not in self.boundaries:
            raise _exceptions.InputError(
                "asfem.assembly.LineMesh",
                "name",
                f"The boundary {name} does not exist, "
                f"possible boundaries are {list(self.boundaries.keys())}.",
            )
        return self.boundaries[name]


def interval_mesh(
    n: int = 10,
    start: float = 0.0,
    end: float = 1.0,
    element_type: ElementType = "edge2",
) -> LineMesh:
    """Creates a uniform mesh of an interval.

    The boundary nodes are stored as ``"left"`` and ``"right"``.

    Args:
        n: The number of elements.
        start: The left end point of the interval.
        end: The right end point of the interval.
        element_type: The element type, either ``"edge2"`` or ``"edge3"``.

    Returns:
        The mesh.

    """
    if n < 1:
        raise _exceptions.InputError(
            "asfem.assembly.interval_mesh",
            "n",
            "The number of elements must be positive.",
        )
    if end <= start:
        raise _exceptions.InputError(
            "asfem.assembly.interval_mesh",
            "end",
            "The end point has to be larger than the start point.",
        )

    log.begin("Generating mesh.", level=log.DEBUG)
    nodes_per_elem = nodes_per_element(element_type)
    num_nodes = (nodes_per_elem - 1) * n + 1
    nodes = np.linspace(start, end, num_nodes)

    step = nodes_per_elem - 1
    first = np.arange(n) * step + 1
    if element_type == "edge2":
        connectivity = np.column_stack([first, first + 1])
    else:
        connectivity = np.column_stack([first, first + 2, first + 1])

    mesh = LineMesh(
        nodes=nodes,
        connectivity=connectivity,
        element_type=element_type,
        boundaries={"left": [1], "right": [num_nodes]},
    )
    log.debug(
        f"Mesh contains {mesh.num_nodes:,} nodes and {mesh.num_elements:,} "
        f"elements of type {element_type}."
    )
    log.end()

    return mesh


def quadrature_order(element_type: str) -> int:
    """Returns the default number of Gauss points of an element type."""
    nodes_per_element(element_type)
    return _default_quadrature_order[element_type]
