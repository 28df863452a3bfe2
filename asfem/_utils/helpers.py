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

"""Helper functions."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


def enlist(arg: list[T] | T) -> list[T]:
    """Wraps the input argument into a list, if it isn't a list already.

    Args:
        arg: The input argument, which is to wrapped into a list.

    Returns:
        The object wrapped into a list.

    """
    if isinstance(arg, list):
        return arg
    else:
        return [arg]
