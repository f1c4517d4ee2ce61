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

""" Logging tests """

import logging as std_logging
import os
from collections.abc import Generator

import utilities as util
from sonarclient import errcodes
from sonarclient import logging as log
from cli import sonar_client
import cli.options as opt

CMD = ["sonar-client", *util.STD_OPTS]


def test_no_log_file(api: util.ApiStub, json_file: Generator[str]) -> None:
    """Tests that when no log file is specified, no file is produced"""
    util.clean("sonar-client.log")
    util.run_success_cmd(sonar_client.main, [*CMD, f"--{opt.REPORT_FILE}", json_file, "webhooks", "list"])
    assert not os.path.isfile("sonar-client.log")
    assert util.file_not_empty(json_file)


def test_custom_log_file(api: util.ApiStub) -> None:
    """Tests that when a specific log file is given, logs come in that file"""
    logfile = "sonar-client-logging.log"
    util.clean(logfile)
    util.run_success_cmd(sonar_client.main, [*CMD, f"-{opt.LOGFILE_SHORT}", logfile, "-v", "DEBUG", "webhooks", "list"])
    assert util.file_not_empty(logfile)
    with open(logfile, encoding="utf-8") as f:
        first_line = f.readline()
    assert "| sonar-client |" in first_line
    assert util.file_contains(logfile, f"GET: {util.API_URL}webhooks/list")
    assert not util.file_contains(logfile, util.TOKEN)
    util.clean(logfile)


def test_missing_log_filename() -> None:
    """Tests that correct error is raise when log file name is forgotten"""
    util.run_failed_cmd(sonar_client.main, [*CMD, f"-{opt.LOGFILE_SHORT}"], errcodes.ARGS_ERROR)


def test_levels() -> None:
    """test_levels"""
    assert log.get_logging_level("DEBUG") == log.DEBUG
    assert log.get_logging_level("WARN") == log.WARNING
    assert log.get_logging_level("WARNING") == log.WARNING
    assert log.get_logging_level("ERROR") == log.ERROR
    assert log.get_logging_level("CRITICAL") == log.CRITICAL
    assert log.get_logging_level("INFO") == log.INFO
    assert log.get_logging_level("whatever") == log.INFO
    log.set_debug_level("WARN")
    assert log.get_level() == log.WARNING
    log.set_debug_level("DEBUG")
    assert log.get_level() == log.DEBUG


def test_handlers_replaced() -> None:
    """Setting the logger again does not duplicate log lines"""
    log.set_logger(util.TEST_LOGFILE)
    log.set_logger(util.TEST_LOGFILE)
    handlers = std_logging.getLogger(log.DEFAULT_LOGGER_NAME).handlers
    assert len(handlers) == 2
    assert sum(1 for h in handlers if isinstance(h, std_logging.FileHandler)) == 1
    log.set_logger()
    assert len(std_logging.getLogger(log.DEFAULT_LOGGER_NAME).handlers) == 1
    log.set_logger(util.TEST_LOGFILE)
