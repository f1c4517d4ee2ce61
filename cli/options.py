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
"""

Cmd line options

"""

import os
import sys
from argparse import ArgumentParser, Namespace
from typing import Optional, Any

import sonarclient.logging as log
from sonarclient import errcodes, version, exceptions
from sonarclient.utilities import json_dump, redacted_token

# Command line options

URL_SHORT = "u"
URL = "url"

TOKEN_SHORT = "t"
TOKEN = "token"

LOGIN = "login"
PASSWORD = "password"

VERBOSE_SHORT = "v"
VERBOSE = "verbosity"

HTTP_TIMEOUT = "httpTimeout"
CERT_SHORT = "c"
CERT = "clientCert"

REPORT_FILE_SHORT = "f"
REPORT_FILE = "file"

LOGFILE_SHORT = "l"
LOGFILE = "logfile"

DEFAULT_URL = "http://localhost:9000"
DEFAULT_HTTP_TIMEOUT = 10


class ArgumentsError(exceptions.SonarException):
    """
    Arguments error
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, errcodes.ARGS_ERROR)


def __check_file_writeable(file: Optional[str]) -> None:
    """If not stdout, verifies that the chosen output file is writeable"""
    if file and file != "-":
        try:
            with open(file, mode="w", encoding="utf-8"):
                pass
        except (PermissionError, FileNotFoundError) as e:
            raise exceptions.SonarException(f"Can't write to file '{file}': {e}", errcodes.OS_ERROR) from e
        os.remove(file)


def parse_and_check(parser: ArgumentParser, logger_name: Optional[str] = None, argv: Optional[list[str]] = None) -> Namespace:
    """Parses arguments, applies default settings and perform common environment checks"""
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        sys.exit(errcodes.ARGS_ERROR)

    kwargs = vars(args)
    log.set_logger(filename=kwargs[LOGFILE], logger_name=logger_name)
    log.set_debug_level(kwargs[VERBOSE])
    log.info("sonar-client version %s", version.PACKAGE_VERSION)

    redacted = kwargs | {TOKEN: redacted_token(kwargs[TOKEN]), PASSWORD: redacted_token(kwargs[PASSWORD])}
    log.debug("CLI arguments = %s", json_dump({k: v for k, v in redacted.items() if isinstance(v, (str, int, bool, type(None)))}))
    __check_file_writeable(kwargs.get(REPORT_FILE))
    try:
        args.httpTimeout = int(args.httpTimeout)
    except ValueError as e:
        raise ArgumentsError(f"--{HTTP_TIMEOUT} must be an integer number of seconds, not '{args.httpTimeout}'") from e
    return args


def add_optional_arg(parser: ArgumentParser, *args: Any, **kwargs: Any) -> ArgumentParser:
    """Adds an optional argument to the parser"""
    kwargs = {"required": False, "default": None} | kwargs
    if kwargs.get("action") == "store_true":
        kwargs["default"] = False
    parser.add_argument(*args, **kwargs)
    return parser


def set_common_args(desc: str) -> ArgumentParser:
    """Parses options common to all sonar-client commands"""
    parser = ArgumentParser(description=desc)
    args = [f"-{TOKEN_SHORT}", f"--{TOKEN}"]
    help_str = "Token to authenticate to SonarQube, default is environment variable $SONAR_TOKEN"
    parser = add_optional_arg(parser, *args, default=os.getenv("SONAR_TOKEN", None), help=help_str)

    help_str = "Login for basic authentication when no token is given, default is environment variable $SONAR_USER"
    parser = add_optional_arg(parser, f"--{LOGIN}", default=os.getenv("SONAR_USER", None), help=help_str)
    help_str = "Password for basic authentication, default is environment variable $SONAR_PASSWORD"
    parser = add_optional_arg(parser, f"--{PASSWORD}", default=os.getenv("SONAR_PASSWORD", None), help=help_str)

    args = [f"-{URL_SHORT}", f"--{URL}"]
    help_str = f"""Root URL of the SonarQube Server platform,
        default is environment variable $SONAR_HOST_URL or {DEFAULT_URL} if not set"""
    parser = add_optional_arg(parser, *args, help=help_str, default=os.getenv("SONAR_HOST_URL", DEFAULT_URL))

    args = [f"-{VERBOSE_SHORT}", f"--{VERBOSE}"]
    parser = add_optional_arg(parser, *args, choices=["WARN", "INFO", "DEBUG"], default="INFO", help="Logging verbosity level")

    args = [f"-{CERT_SHORT}", f"--{CERT}"]
    parser = add_optional_arg(parser, *args, help="Optional client certificate file (as .pem file)")

    args = [f"--{HTTP_TIMEOUT}"]
    help_str = f"HTTP timeout for requests to SonarQube, {DEFAULT_HTTP_TIMEOUT} by default (in seconds)"
    parser = add_optional_arg(parser, *args, default=DEFAULT_HTTP_TIMEOUT, help=help_str)

    args = [f"-{LOGFILE_SHORT}", f"--{LOGFILE}"]
    parser = add_optional_arg(parser, *args, help="Define location of logfile, logs are only sent to stderr if not set")

    return set_output_file_args(parser)


def set_output_file_args(parser: ArgumentParser, help_str: Optional[str] = None) -> ArgumentParser:
    """Sets the output file CLI options"""
    help_str = help_str or "Output file, stdout by default"
    parser.add_argument(f"-{REPORT_FILE_SHORT}", f"--{REPORT_FILE}", required=False, default=None, help=help_str)
    return parser
