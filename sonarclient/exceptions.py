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

Exceptions raised by the sonar-client APIs

"""
from typing import Optional

import requests

from sonarclient import errcodes


class SonarException(Exception):
    """
    sonar-client exceptions
    """

    def __init__(self, message: str, errcode: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errcode = errcode

    def __str__(self) -> str:
        return f"ERROR {self.errcode}: {self.message}"


class ValidationError(SonarException):
    """
    Request options rejected client side, before any HTTP request is sent
    """

    kind = "validation error"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field} {message}", errcodes.VALIDATION_ERROR)
        self.field = field  #: Name of the option field that failed
        self.reason = message  #: Why the field failed, without the field name

    @property
    def err(self) -> type:
        """Returns the kind of validation error, as an exception class"""
        return type(self)

    def __str__(self) -> str:
        return f"ERROR {self.errcode}: validation failed for field '{self.field}': {self.reason} ({self.kind})"


class MissingRequired(ValidationError):
    """A required field is missing"""

    kind = "missing required field"


class InvalidValue(ValidationError):
    """A field value is not among the allowed values"""

    kind = "invalid value"


class InvalidFormat(ValidationError):
    """A field value is not correctly formatted"""

    kind = "invalid format"


class OutOfRange(ValidationError):
    """A field length or numeric value is out of bounds"""

    kind = "value out of range"


class ApiError(SonarException):
    """
    Non successful HTTP response returned by the SonarQube API
    """

    def __init__(self, response: requests.Response, message: str) -> None:
        super().__init__(message, errcodes.from_http_status(response.status_code))
        self.response = response  #: The raw HTTP response
        self.status_code = response.status_code
        self.body = response.text


class HttpTimeout(SonarException):
    """HTTP request timed out"""

    def __init__(self, message: str) -> None:
        super().__init__(message, errcodes.HTTP_TIMEOUT)


class ConnectionError(SonarException):
    """ConnectionError error"""

    def __init__(self, message: str) -> None:
        super().__init__(message, errcodes.CONNECTION_ERROR)
