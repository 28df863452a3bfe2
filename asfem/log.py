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

"""Logging for asfem.

Messages are issued by rank 0 of ``PETSc.COMM_WORLD`` only. Blocks opened with
:py:func:`begin` (or :py:func:`block`) indent all messages until they are closed
and report their elapsed time.
"""

from __future__ import annotations

import contextlib
import datetime
import enum
import functools
import logging
from typing import Any, Callable, Iterator, NamedTuple, TypeVar

from petsc4py import PETSc


class LogLevel(enum.IntEnum):
    """The log levels of asfem, compatible with the ones of :py:mod:`logging`."""

    TRACE = logging.DEBUG - 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


TRACE = LogLevel.TRACE
DEBUG = LogLevel.DEBUG
INFO = LogLevel.INFO
WARNING = LogLevel.WARNING
ERROR = LogLevel.ERROR
CRITICAL = LogLevel.CRITICAL

logging.addLevelName(TRACE, "TRACE")


class _Block(NamedTuple):
    message: str
    level: int
    start: datetime.datetime


class Logger:
    """Logger with indented, timed blocks, writing to the console and log files."""

    def __init__(self, name: str) -> None:
        """Initializes the logger.

        Args:
            name: The name of the underlying :py:class:`logging.Logger`.

        """
        self._handler = logging.StreamHandler()
        self._handler.setLevel(INFO)

        self._log = logging.getLogger(name)
        self._log.addHandler(self._handler)
        self._log.setLevel(TRACE)

        self._logfiles: dict[str, logging.FileHandler] = {}
        self._blocks: list[_Block] = []
        self._use_timestamp = True

    @property
    def indent_level(self) -> int:
        """The number of currently open blocks."""
        return len(self._blocks)

    def log(self, level: int, message: str) -> None:
        """Issues a message on rank 0.

        Args:
            level: The log level of the message.
            message: The message, which may span several lines.

        """
        comm = PETSc.COMM_WORLD
        if comm.getRank() == 0:
            self._log.log(level, self._format(message))
        comm.barrier()

    def _format(self, message: str) -> str:
        prefix = 2 * self.indent_level * " "
        if self._use_timestamp:
            prefix = datetime.datetime.now().isoformat() + " | " + prefix
        return "\n".join(prefix + line for line in message.split("\n"))

    def begin(self, message: str, level: int = INFO) -> None:
        """Opens a timed block, which has to be closed by :py:meth:`end`.

        Args:
            message: Describes what is done in the block.
            level: The log level of the start and finish messages.

        """
        start_message = "Start: " + message
        self.log(level, start_message)
        self.log(level, "-" * len(start_message))
        self._blocks.append(_Block(message, level, datetime.datetime.now()))

    def end(self) -> None:
        """Closes the innermost block opened with :py:meth:`begin`."""
        message, level, start = self._blocks.pop()
        elapsed_time = datetime.datetime.now() - start
        self.log(level, f"Finish: {message} -- Elapsed time: {elapsed_time}\n")

    @contextlib.contextmanager
    def block(self, message: str, level: int = INFO) -> Iterator[None]:
        """Wraps :py:meth:`begin` and :py:meth:`end`, closing the block on errors.

        Args:
            message: Describes what is done in the block.
            level: The log level of the start and finish messages.

        """
        self.begin(message, level=level)
        try:
            yield
        finally:
            self.end()

    def set_log_level(self, level: int) -> None:
        """Sets the log level of the console output."""
        self._handler.setLevel(level)

    def add_logfile(
        self, filename: str, mode: str = "a", level: int = DEBUG
    ) -> logging.FileHandler:
        """Writes the log to a file as well.

        Args:
            filename: The path of the log file.
            mode: ``"a"`` appends to the file, ``"w"`` overwrites it.
            level: The log level of the file.

        Returns:
            The handler of the log file.

        """
        if filename in self._logfiles:
            self.warning(f"Adding logfile {filename} multiple times.")
            return self._logfiles[filename]

        handler = logging.FileHandler(filename, mode, encoding="utf-8")
        handler.setLevel(level)
        self._log.addHandler(handler)
        self._logfiles[filename] = handler
        return handler

    def remove_logfile(self, filename: str) -> None:
        """Stops writing to a log file added with :py:meth:`add_logfile`."""
        handler = self._logfiles.pop(filename)
        self._log.removeHandler(handler)
        handler.close()

    def add_timestamps(self) -> None:
        self._use_timestamp = True

    def remove_timestamps(self) -> None:
        self._use_timestamp = False

    def trace(self, message: str) -> None:
        self.log(TRACE, message)

    def debug(self, message: str) -> None:
        self.log(DEBUG, message)

    def info(self, message: str) -> None:
        self.log(INFO, message)

    def warning(self, message: str) -> None:
        self.log(WARNING, message)

    def error(self, message: str) -> None:
        """Issues a message at the error level, this does not raise."""
        self.log(ERROR, message)

    def critical(self, message: str) -> None:
        """Issues a message at the critical level.

        This does not raise, see :py:mod:`asfem.driver` for the abort policy.
        """
        self.log(CRITICAL, message)


asfem_logger = Logger("asfem")

trace = asfem_logger.trace
debug = asfem_logger.debug
info = asfem_logger.info
warning = asfem_logger.warning
error = asfem_logger.error
critical = asfem_logger.critical

begin = asfem_logger.begin
end = asfem_logger.end
block = asfem_logger.block

set_log_level = asfem_logger.set_log_level
add_logfile = asfem_logger.add_logfile
remove_logfile = asfem_logger.remove_logfile
add_timestamps = asfem_logger.add_timestamps
remove_timestamps = asfem_logger.remove_timestamps


T = TypeVar("T")


def profile_execution_time(
    action: str, level: int = TRACE
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Logs the execution time of each call of the decorated function.

    Args:
        action: Describes what the function does.
        level: The log level of the timing messages.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            start_time = datetime.datetime.now()
            result = func(*args, **kwargs)
            elapsed_time = datetime.datetime.now() - start_time
            asfem_logger.log(level, f"Elapsed time for {action}: {elapsed_time}.\n")
            return result

        return wrapper

    return decorator
