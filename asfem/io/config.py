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

"""Management of configuration files."""

from __future__ import annotations

from configparser import ConfigParser
import pathlib
from typing import Any

from asfem import _exceptions


def load_config(path: str) -> Config:
    """Loads a config object from a config file.

    Loads the config from a .ini file via the configparser package.

    Args:
        path: The path to the .ini file storing the configuration.

    Returns:
        The output config file, which includes the path to the .ini file.

    """
    return Config(path)


class Config(ConfigParser):
    """Class for handling the config in asfem."""

    def __init__(self, config_file: str | None = None) -> None:
        """Initializes self.

        Args:
            config_file: Path to the config file.

        """
        super().__init__()
        self.config_errors: list[str] = []

        self.config_scheme: dict[str, dict[str, dict[str, Any]]] = {
            "NonlinearSolver": {
                "type": {
                    "type": "str",
                    "possible_options": [
                        "newtonraphson",
                        "newton",
                        "nr",
                        "newtonls",
                        "newtontr",
                        "lbfgs",
                        "broyden",
                        "badbroyden",
                        "newtoncg",
                        "ncg",
                        "newtongmres",
                        "ngmres",
                    ],
                },
                "line_search": {
                    "type": "str",
                    "possible_options": [
                        "default",
                        "backtrace",
                        "bt",
                        "cp",
                        "l2",
                        "basic",
                    ],
                },
                "max_iter": {
                    "type": "int",
                    "attributes": ["non_negative"],
                },
                "abs_tol": {
                    "type": "float",
                    "attributes": ["non_negative"],
                },
                "rel_tol": {
                    "type": "float",
                    "attributes": ["less_than_one", "non_negative"],
                },
                "s_tol": {
                    "type": "float",
                    "attributes": ["non_negative"],
                },
                "line_search_order": {
                    "type": "int",
                    "attributes": ["non_negative"],
                },
                "monitor": {
                    "type": "bool",
                },
            },
            "LinearSolver": {
                "ksp_type": {
                    "type": "str",
                    "possible_options": ["gmres", "fgmres", "bcgs", "cg", "preonly"],
                },
                "pc_type": {
                    "type": "str",
                    "possible_options": ["lu", "ilu", "jacobi", "none"],
                },
                "gmres_restart": {
                    "type": "int",
                    "attributes": ["positive"],
                },
                "rtol": {
                    "type": "float",
                    "attributes": ["less_than_one", "non_negative"],
                },
                "atol": {
                    "type": "float",
                    "attributes": ["non_negative"],
                },
                "max_iter": {
                    "type": "int",
                    "attributes": ["positive"],
                },
            },
        }

        self.default_config_str = """
[NonlinearSolver]
type = newtonraphson
line_search = default
max_iter = 25
abs_tol = 1e-7
rel_tol = 1e-9
s_tol = 0.0
line_search_order = 3
monitor = False

[LinearSolver]
ksp_type = gmres
pc_type = lu
gmres_restart = 1200
rtol = 1e-10
atol = 1e-10
max_iter = 500000
"""

        self.read_string(self.default_config_str)

        if config_file is not None:
            file = pathlib.Path(config_file)
            if file.is_file():
                self.read(config_file)
            else:
                raise _exceptions.InputError(
                    "asfem.Config",
                    "config_file",
                    f"Could not find the specified config file {config_file}. "
                    "Please supply a path to an existing configuration file.",
                )

    def validate_config(self) -> None:
        """Validates the configuration file."""
        self.config_errors = []
        self._check_sections()
        self._check_keys()

        if len(self.config_errors) > 0:
            raise _exceptions.ConfigError(self.config_errors)

    def _check_sections(self) -> None:
        """Checks whether all sections are valid."""
        for section_name, section in self.items():
            if section_name not in self.config_scheme and section_name != "DEFAULT":
                self.config_errors.append(
                    f"The following section is not valid: {section}\n"
                )

    def _check_keys(self) -> None:
        """Checks the keys of the sections."""
        for section_name, section in self.items():
            if section_name not in self.config_scheme:
                continue
            for key in section.keys():
                if key not in self.config_scheme[section_name].keys():
                    self.config_errors.append(
                        f"Key {key} is not valid for section {section_name}.\n"
                    )
                elif self._check_key_type(section_name, key):
                    self._check_possible_options(section_name, key)
                    self._check_attributes(section_name, key)

    def _check_key_type(self, section: str, key: str) -> bool:
        """Checks if the type of the key is correct.

        Args:
            section: The corresponding section
            key: The corresponding key

        Returns:
            ``True`` if the type is correct, ``False`` otherwise.

        """
        key_type = self.config_scheme[section][key]["type"]
        try:
            if key_type.casefold() == "str":
                self.get(section, key)
            elif key_type.casefold() == "bool":
                self.getboolean(section, key)
            elif key_type.casefold() == "int":
                self.getint(section, key)
            elif key_type.casefold() == "float":
                self.getfloat(section, key)
        except ValueError:
            self.config_errors.append(
                f"Key {key} in section {section} has the wrong type. "
                f"Required type is {key_type}.\n"
            )
            return False

        return True

    def _check_possible_options(self, section: str, key: str) -> None:
        """Checks, whether the given option is possible.

        Args:
            section: The corresponding section
            key: The corresponding key

        """
        if "possible_options" in self.config_scheme[section][key].keys():
            if (
                self[section][key].casefold()
                not in self.config_scheme[section][key]["possible_options"]
            ):
                self.config_errors.append(
                    f"Key {key} in section {section} has a wrong value. "
                    f"Possible options are "
                    f"{self.config_scheme[section][key]['possible_options']}.\n"
                )

    def _check_attributes(self, section: str, key: str) -> None:
        """Checks the attributes of a key.

        Args:
            section: The corresponding section
            key: The corresponding key

        """
        if "attributes" in self.config_scheme[section][key].keys():
            key_attributes = self.config_scheme[section][key]["attributes"]
            value = self.getfloat(section, key)

            if "non_negative" in key_attributes and value < 0:
                self.config_errors.append(
                    f"Key {key} in section {section} is negative, but it must not be.\n"
                )
            if "positive" in key_attributes and value <= 0:
                self.config_errors.append(
                    f"Key {key} in section {section} is non-positive, "
                    f"but it most be positive.\n"
                )
            if "less_than_one" in key_attributes and value >= 1:
                self.config_errors.append(
                    f"Key {key} in section {section} is larger than one, "
                    f"but it must be smaller.\n"
                )
