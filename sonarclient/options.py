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

    Declarative mapping between request option objects and API parameters.

    Options are dataclasses whose fields carry their API parameter name:

        @dataclass
        class WebhooksCreateOption:
            name: str = param("name")
            url: str = param("url")

    to_params() turns such an object into the dict sent as query string or form body.

"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Union

from sonarclient import errcodes, exceptions, validation
from sonarclient.utilities import dict_to_string

WIRE = "wire"
COMMA = "comma"
SEMICOLON_MAP = "map"

ApiParams = dict[str, Union[str, list[str]]]


def param(wire: str, default: Any = "", *, comma: bool = False, kind: Optional[type] = None) -> Any:
    """Declares an option field and its API parameter name

    :param wire: Parameter name in the API
    :param default: Default value, which is never sent
    :param comma: For list fields, join values with commas instead of repeating the parameter
    :param kind: list or dict for collection fields, defaults are then empty collections
    """
    metadata = {WIRE: wire, COMMA: comma, SEMICOLON_MAP: kind is dict}
    if kind in (list, dict):
        return dataclasses.field(default_factory=kind, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


@dataclass
class PaginationArgs:
    """Common p/ps pagination parameters, flattened in the options that inherit them"""

    page: int = param("p", 0)
    page_size: int = param("ps", 0)

    def validate(self) -> None:
        """Validates the pagination arguments"""
        validation.validate_pagination(self.page, self.page_size)


def _encode(value: Any, f: dataclasses.Field) -> Union[None, str, list[str]]:
    """Encodes one option value, returns None for values that must be omitted"""
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return None if value == 0 else str(value)
    if isinstance(value, dict):
        return dict_to_string(value) or None
    if isinstance(value, (list, tuple, set)):
        if len(value) == 0:
            return None
        values = [str(v) for v in value]
        return ",".join(values) if f.metadata.get(COMMA, False) else values
    value = str(value)
    return None if value == "" else value


def to_params(opt: Any) -> ApiParams:
    """Converts an options object into API parameters, empty values omitted

    :param opt: Options dataclass instance, or None
    :return: Ordered dict of parameter name to string (or list of strings for repeated parameters)
    :raises SonarException: if opt is not an options dataclass
    """
    if opt is None:
        return {}
    if not dataclasses.is_dataclass(opt) or isinstance(opt, type):
        raise exceptions.SonarException(f"Can't convert {type(opt).__name__} into API parameters", errcodes.ARGS_ERROR)
    params = {}
    for f in dataclasses.fields(opt):
        if WIRE not in f.metadata:
            continue
        encoded = _encode(getattr(opt, f.name), f)
        if encoded is not None:
            params[f.metadata[WIRE]] = encoded
    return params


def wire_fields(option_class: type) -> list[dataclasses.Field]:
    """Returns the fields of an option class that map to an API parameter"""
    return [f for f in dataclasses.fields(option_class) if WIRE in f.metadata]
