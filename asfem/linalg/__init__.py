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

"""Dense element-local linear algebra.

The containers in this module use 1-based indexing, following the node and DOF
numbering of the finite element literature.
"""

from asfem.linalg.matrix import DenseMatrix
from asfem.linalg.result import attempt
from asfem.linalg.result import Result
from asfem.linalg.vector import DenseVector

__all__ = [
    "DenseMatrix",
    "attempt",
    "Result",
    "DenseVector",
]
