#
# sonar-client
# Copyright (C) 2025 Olivier Korach
# mailto:olivier.korach AT gmail DOT com
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 3 of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program; if not, write to the Free Software Foundation,
# Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#
""" sonar-client logging module """

import logging
from typing import Optional

CRITICAL = logging.CRITICAL
ERROR = logging.ERROR
WARNING = logging.WARNING
INFO = logging.INFO
DEBUG = logging.DEBUG

_LEVELS = {"DEBUG": DEBUG, "WARN": WARNING, "WARNING": WARNING, "ERROR": ERROR, "CRITICAL": CRITICAL}

DEFAULT_LOGGER_NAME = "sonar-client"
DEFAULT_LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)-7s | %(threadName)-15s | %(message)s"

__LOGGER = logging.getLogger(DEFAULT_LOGGER_NAME)
__FORMATTER = logging.Formatter(DEFAULT_LOG_FORMAT)


def set_logger(filename: Optional[str] = None, logger_name: Optional[str] = None) -> None:
    """Sets the logger name, and where logs go: stderr, plus a file if one is given

    Handlers set by a previous call are closed and replaced
    """
    global __LOGGER
    if logger_name is not None:
        __LOGGER = logging.getLogger(logger_name)
    for handler in list(__LOGGER.handlers):
        __LOGGER.removeHandler(handler)
        handler.close()
    handlers = [logging.StreamHandler()]
    if filename is not None:
        handlers.append(logging.FileHandler(filename))
    for handler in handlers:
        handler.setFormatter(__FORMATTER)
        __LOGGER.addHandler(handler)


def get_logging_level(level: str) -> int:
    """Returns the int logging level corresponding to the input string, INFO if unknown"""
    return _LEVELS.get(level, INFO)


def debug(*params) -> None:
    """DEBUG log"""
    __LOGGER.debug(*params)


def info(*params) -> None:
    """INFO log"""
    __LOGGER.info(*params)


def error(*params) -> None:
    """ERROR log"""
    __LOGGER.error(*params)


def critical(*params) -> None:
    """CRITICAL log"""
    __LOGGER.critical(*params)


def log(*params) -> None:
    """Log with variable log level"""
    __LOGGER.log(*params)


def set_debug_level(level: str) -> None:
    """Sets the logging level"""
    __LOGGER.setLevel(get_logging_level(level))
    __LOGGER.info("Set logging level to %s", level)


def get_level() -> int:
    """Returns the logging level"""
    return __LOGGER.getEffectiveLevel()
