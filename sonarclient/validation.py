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

    Client side validation of API request options.

    All functions are pure: they return None when the value is acceptable
    and raise a ValidationError subclass identifying the faulty field otherwise.

"""

import datetime
from collections.abc import Collection, Iterable, Mapping
from typing import Any, Optional

from dateutil import parser as dateparser

from sonarclient.exceptions import MissingRequired, InvalidValue, InvalidFormat, OutOfRange

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 500

SQ_DATE_FORMAT = "%Y-%m-%d"
_DATETIME_MIN_LEN = 20

LANGUAGES = frozenset(
    (
        "abap",
        "ansible",
        "apex",
        "azureresourcemanager",
        "c",
        "cloudformation",
        "cobol",
        "cpp",
        "cs",
        "css",
        "dart",
        "docker",
        "flex",
        "githubactions",
        "go",
        "ipynb",
        "java",
        "jcl",
        "js",
        "json",
        "jsp",
        "kotlin",
        "kubernetes",
        "objc",
        "php",
        "pli",
        "plsql",
        "py",
        "rpg",
        "ruby",
        "rust",
        "scala",
        "secrets",
        "swift",
        "terraform",
        "text",
        "ts",
        "tsql",
        "vb",
        "vbnet",
        "web",
        "xml",
        "yaml",
    )
)


def authorized_values_list(allowed: Iterable[str]) -> str:
    """Returns the sorted, comma separated list of allowed values"""
    return ", ".join(sorted(allowed))


def validate_options(opt: Any, option_class: type) -> None:
    """Fails if the options object is missing"""
    if opt is None:
        raise MissingRequired(option_class.__name__, "cannot be None")


def validate_required(value: Any, field: str) -> None:
    """Fails if a required value is empty"""
    if value is None or value == "":
        raise MissingRequired(field, "is required")


def validate_max_length(value: Optional[str], max_len: int, field: str) -> None:
    """Fails if a string exceeds a maximum length"""
    if value is not None and len(value) > max_len:
        raise OutOfRange(field, f"exceeds maximum length of {max_len} characters")


def validate_min_length(value: Optional[str], min_len: int, field: str) -> None:
    """Fails if a non empty string is shorter than a minimum length"""
    if value and len(value) < min_len:
        raise OutOfRange(field, f"must be at least {min_len} characters")


def validate_range(value: int, min_value: int, max_value: int, field: str) -> None:
    """Fails if a number is outside the [min_value, max_value] interval"""
    if value < min_value or value > max_value:
        raise OutOfRange(field, f"must be between {min_value} and {max_value}")


def validate_in_slice(value: Optional[str], allowed: Collection[str], field: str) -> None:
    """Fails if a non empty value is not among the allowed ones, case insensitive"""
    if not value:
        return
    if value.lower() not in (a.lower() for a in allowed):
        raise InvalidValue(field, f"must be one of: {', '.join(allowed)}")


def is_value_authorized(value: Optional[str], allowed: Collection[str], field: str) -> None:
    """Fails if a non empty value is not exactly one of the allowed values"""
    if not value:
        return
    if value not in allowed:
        raise InvalidValue(field, f"must be one of: {authorized_values_list(allowed)}")


def are_values_authorized(values: Optional[Iterable[str]], allowed: Collection[str], field: str) -> None:
    """Fails if one of the values is not allowed"""
    for value in values or ():
        if value not in allowed:
            raise InvalidValue(field, f"value '{value}' is not allowed. Must be one of: {authorized_values_list(allowed)}")


def validate_map_keys(mapping: Optional[Mapping[str, str]], allowed: Collection[str], field: str) -> None:
    """Fails if a key of the mapping is not allowed"""
    for key in mapping or {}:
        if key not in allowed:
            raise InvalidValue(field, f"key '{key}' is not allowed. Must be one of: {authorized_values_list(allowed)}")


def validate_map_values(mapping: Optional[Mapping[str, str]], allowed: Collection[str], field: str) -> None:
    """Fails if a value of the mapping is not allowed"""
    for key, value in (mapping or {}).items():
        if value not in allowed:
            raise InvalidValue(field, f"value '{value}' for key '{key}' is not allowed. Must be one of: {authorized_values_list(allowed)}")


def validate_pagination(page: int, page_size: int) -> None:
    """Validates the common p/ps pagination parameters, 0 meaning not set"""
    if page != 0 and page < MIN_PAGE_SIZE:
        raise OutOfRange("Page", "must be greater than 0")
    if page_size != 0 and (page_size < MIN_PAGE_SIZE or page_size > MAX_PAGE_SIZE):
        raise OutOfRange("PageSize", f"must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}")


def validate_language(language: Optional[str], field: str = "Language") -> None:
    """Fails if the language key is unknown"""
    is_value_authorized(language, LANGUAGES, field)


def validate_languages(languages: Optional[Iterable[str]], field: str = "Languages") -> None:
    """Fails if one of the language keys is unknown"""
    are_values_authorized(languages, LANGUAGES, field)


def is_date(value: str) -> bool:
    """Whether a string is a YYYY-MM-DD date"""
    try:
        datetime.datetime.strptime(value, SQ_DATE_FORMAT)
    except ValueError:
        return False
    return len(value) == 10


def is_datetime(value: str) -> bool:
    """Whether a string is a YYYY-MM-DDTHH:mm:ss+zone datetime"""
    if len(value) < _DATETIME_MIN_LEN or value.count("T") != 1:
        return False
    try:
        dateparser.isoparse(value)
    except ValueError:
        return False
    return is_date(value.split("T")[0])


def validate_date_or_datetime(value: Optional[str], field: str) -> None:
    """Fails if a non empty value is neither a date nor a datetime"""
    if value and not is_date(value) and not is_datetime(value):
        raise InvalidFormat(field, "must be a valid date (YYYY-MM-DD) or datetime (YYYY-MM-DDTHH:mm:ssZ)")
