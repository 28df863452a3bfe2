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

"""Type hints for asfem."""

from __future__ import annotations

from typing import Union

import numpy as np
from scipy import sparse
from typing_extensions import Protocol

KspOption = dict[str, Union[int, float, str, None]]


class NonlinearProblem(Protocol):
    """A nonlinear system of equations ``F(x) = 0``."""

    def residual(self, x: np.ndarray) -> np.ndarray:
        """Returns the (global) residual ``F(x)``."""
        ...

    def jacobian(self, x: np.ndarray) -> sparse.spmatrix:
        """Returns the (global) Jacobian ``F'(x)`` as sparse matrix."""
        ...

    def apply_bc_values(self, x: np.ndarray) -> np.ndarray:
        """Returns a copy of ``x`` with the prescribed Dirichlet values inserted."""
        ...
