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
    Calls any SonarQube Web API action supported by sonar-client

    Usage: sonar-client [common options] <service> <method> [--<param> <value> ...]
    e.g.   sonar-client -u https://sonar.acme.com webhooks create --name ci --url https://ci.acme.com/hook
"""

import dataclasses
from argparse import ArgumentParser, Namespace
from typing import Any, Callable, Optional

import requests

from cli import options
import sonarclient.logging as log
from sonarclient import errcodes, exceptions
from sonarclient.client import Client
from sonarclient.options import wire_fields
from sonarclient.services import SERVICES
from sonarclient.services.project_analyses import ProjectAnalysesSearchOption
import sonarclient.utilities as util

TOOL_NAME = "sonar-client"

SERVICE = "service"
METHOD = "method"
ALL = "all"
ALL_PAGE_SIZE = 500

_OPT_PREFIX = "opt_"


def _to_bool(value: str) -> bool:
    """Converts a true/false CLI value"""
    if value.lower() in ("true", "yes", "1"):
        return True
    if value.lower() in ("false", "no", "0"):
        return False
    raise ValueError(f"'{value}' is not a boolean")


def _arg_type(f: dataclasses.Field) -> Callable[[str], Any]:
    """Returns the CLI value converter of an option field, deducted from its default value"""
    if f.default_factory is list:
        return util.csv_to_list
    if f.default_factory is dict:
        return util.string_to_dict
    if f.default is None:
        return _to_bool
    if isinstance(f.default, int):
        return int
    return str


def _arg_help(f: dataclasses.Field) -> Optional[str]:
    if f.default_factory is list:
        return "Comma separated list of values"
    if f.default_factory is dict:
        return "key=value pairs separated by semicolons"
    if f.default is None:
        return "true or false"
    return None


def __add_method_parser(subparsers: Any, method: str, service_class: type, with_all: bool = False) -> None:
    option_class = service_class.OPERATIONS[method]
    doc = getattr(service_class, method).__doc__
    parser = subparsers.add_parser(method, allow_abbrev=False, help=doc.strip().splitlines()[0] if doc else None)
    for f in wire_fields(option_class) if option_class else []:
        options.add_optional_arg(parser, f"--{f.metadata['wire']}", dest=f"{_OPT_PREFIX}{f.name}", type=_arg_type(f), help=_arg_help(f))
    if with_all:
        options.add_optional_arg(parser, f"--{ALL}", action="store_true", help=f"Retrieve all pages, {ALL_PAGE_SIZE} items at a time")


def build_parser(desc: str = "Calls SonarQube Web API actions") -> ArgumentParser:
    """Builds the command line parser, with one sub-command per service and per method"""
    parser = options.set_common_args(desc)
    services = parser.add_subparsers(dest=SERVICE, required=True, metavar="<service>")
    for name, service_class in SERVICES.items():
        service_parser = services.add_parser(name, help=f"api/{service_class.API_ROOT} actions")
        methods = service_parser.add_subparsers(dest=METHOD, required=True, metavar="<method>")
        for method, option_class in service_class.OPERATIONS.items():
            __add_method_parser(methods, method, service_class, with_all=option_class is ProjectAnalysesSearchOption)
    return parser


def __option_object(option_class: type, kwargs: dict[str, Any]) -> Any:
    """Builds the options object of a method from the CLI arguments that were set"""
    values = {}
    for f in wire_fields(option_class):
        value = kwargs.get(f"{_OPT_PREFIX}{f.name}")
        if value is not None:
            values[f.name] = value
    return option_class(**values)


def call(client: Client, service_name: str, method: str, kwargs: dict[str, Any]) -> Any:
    """Calls a service method with the CLI arguments, returns what the method returns"""
    service = getattr(client, service_name)
    option_class = service.OPERATIONS[method]
    if option_class is None:
        return getattr(service, method)()
    opt = __option_object(option_class, kwargs)
    if kwargs.get(ALL, False):
        if not opt.page_size:
            opt.page_size = ALL_PAGE_SIZE
        return service.search_all(opt)
    return getattr(service, method)(opt)


def write_result(file: Optional[str], result: Any) -> None:
    """Writes a method result in a file (or stdout): JSON for decoded results, raw text or bytes otherwise"""
    if isinstance(result, requests.Response):
        log.info("%s %s: HTTP %s", result.request.method if result.request else "", result.url, result.status_code)
        return
    data = result[0]
    if isinstance(data, bytes):
        with util.open_file(file, mode="wb") as fd:
            fd.write(data)
        return
    with util.open_file(file) as fd:
        if isinstance(data, str):
            print(data, file=fd)
        else:
            print(util.json_dump(data), file=fd)


def __client(args: Namespace) -> Client:
    return Client(
        url=args.url,
        token=args.token,
        username=args.login,
        password=args.password,
        http_timeout=args.httpTimeout,
        cert_file=args.clientCert,
    )


def main() -> None:
    """Main entry point"""
    start_time = util.start_clock()
    try:
        args = options.parse_and_check(parser=build_parser(), logger_name=TOOL_NAME)
        kwargs = vars(args)
        client = __client(args)
        log.info("Calling %s %s on %s", args.service, args.method, client.url)
        result = call(client, args.service, args.method, kwargs)
        write_result(kwargs[options.REPORT_FILE], result)
    except exceptions.SonarException as e:
        util.final_exit(e.errcode, e.message, start_time)
    except OSError as e:
        util.final_exit(errcodes.OS_ERROR, f"OS error: {e}", start_time)
    util.final_exit(errcodes.OK, start_time=start_time)


if __name__ == "__main__":
    main()
