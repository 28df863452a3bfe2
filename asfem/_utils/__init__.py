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

"""Utility and helper functions used in asfem."""

from asfem._utils import linalg
from asfem._utils.helpers import enlist
from asfem._utils.linalg import scipy_to_petsc
from asfem._utils.linalg import setup_petsc_options
from asfem._utils.linalg import update_petsc_matrix

__all__ = [
    "linalg",
    "enlist",
    "scipy_to_petsc",
    "setup_petsc_options",
    "update_petsc_matrix",
]
