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

    Utilities for sonar-client

"""
import sys
import re
import json
import datetime
from contextlib import contextmanager
from http import HTTPStatus
from typing import IO, Any, Generator, Optional, Union

import requests

import sonarclient.logging as log
from sonarclient import errcodes


def redacted_token(token: Optional[str]) -> str:
    """Redacts a token for security (before printing)"""
    if token is None:
        return "-"
    if token[0:4] in ("squ_", "sqa_", "sqp_"):
        return re.sub(r"(......).*(..)", r"\1***\2", token)
    return re.sub(r"(..).*(..)", r"\1***\2", token)


def sonar_error(response: requests.Response) -> str:
    """Formats the error returned in a Sonar HTTP response, falls back on the raw body"""
    try:
        json_res = json.loads(response.text)
    except json.decoder.JSONDecodeError:
        return response.text
    if isinstance(json_res, dict):
        if "errors" in json_res:
            return " | ".join([e.get("msg", "") for e in json_res["errors"]])
        if "message" in json_res:
            return json_res["message"]
    log.debug("No error found in response %s", response.text)
    return response.text


def http_error_string(status: int) -> str:
    """Returns the error string for a HTTPStatus code"""
    try:
        status = HTTPStatus(status)
    except ValueError:
        return f"HTTP Error {status}"
    if status == HTTPStatus.UNAUTHORIZED:
        return "UNAUTHORIZED"
    elif status == HTTPStatus.FORBIDDEN:
        return "INSUFFICIENT_PERMISSIONS"
    elif status == HTTPStatus.NOT_FOUND:
        return "NOT_FOUND"
    elif status == HTTPStatus.BAD_REQUEST:
        return "BAD_REQUEST"
    elif status == HTTPStatus.INTERNAL_SERVER_ERROR:
        return "INTERNAL_SERVER_ERROR"
    return f"HTTP Error {status.value} - {status.phrase}"


def json_dump(jsondata: Union[list, dict], indent: int = 3, sort_keys: bool = False) -> str:
    """JSON dump helper"""
    return json.dumps(jsondata, indent=indent, sort_keys=sort_keys, separators=(",", ": "))


def csv_to_list(string: Optional[str], separator: str = ",") -> list[str]:
    """Converts a csv string to a list"""
    if isinstance(string, (list, tuple, set)):
        return list(string)
    if not string or re.match(r"^\s*$", string):
        return []
    return [s.strip() for s in string.split(separator)]


def list_to_csv(array: Union[None, str, list[str], tuple[str], set[str]], separator: str = ",") -> Optional[str]:
    """Converts a list of strings to CSV"""
    if array is None or isinstance(array, str):
        return array
    return separator.join([str(e) for e in array])


def string_to_dict(string: Optional[str], entry_separator: str = ";", kv_separator: str = "=") -> dict[str, str]:
    """Converts a 'k1=v1;k2=v2' string into a dict"""
    result = {}
    for entry in csv_to_list(string, entry_separator):
        if entry == "":
            continue
        k, _, v = entry.partition(kv_separator)
        result[k.strip()] = v.strip()
    return result


def dict_to_string(data: Optional[dict[str, Any]], entry_separator: str = ";", kv_separator: str = "=") -> str:
    """Converts a dict into a 'k1=v1;k2=v2' string, keys sorted"""
    if not data:
        return ""
    return entry_separator.join(f"{k}{kv_separator}{v}" for k, v in sorted(data.items()))


def start_clock() -> datetime.datetime:
    """Returns the now timestamp"""
    return datetime.datetime.now()


def final_exit(exit_code: int, err_msg: Optional[str] = None, start_time: Optional[datetime.datetime] = None) -> None:
    """Exits, with error msg if the exit code is not OK"""
    if exit_code != errcodes.OK:
        log.critical(err_msg)
        print(f"FATAL: {err_msg}", file=sys.stderr)
    if start_time:
        log.info("Total execution time: %s", str(datetime.datetime.now() - start_time))
    sys.exit(exit_code)


@contextmanager
def open_file(file: Optional[str] = None, mode: str = "w") -> Generator[IO, None, None]:
    """Opens a file if not None or -, otherwise stdout, in binary if mode has a b"""
    binary = "b" in mode
    stdout = sys.stdout.buffer if binary else sys.stdout
    if file and file != "-":
        fd = open(file=file, mode=mode) if binary else open(file=file, mode=mode, encoding="utf-8", newline="")
    else:
        fd = stdout
    try:
        yield fd
    finally:
        if fd is not stdout:
            fd.close()
