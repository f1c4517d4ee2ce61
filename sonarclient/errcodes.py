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

"""sonar-client error codes"""

from http import HTTPStatus

OK = 0

# HTTP 401
SONAR_API_AUTHENTICATION = 1

# HTTP 403
SONAR_API_AUTHORIZATION = 2

# General Sonar Web API error
SONAR_API = 3

# Object key passed to the API does not exist (HTTP 404)
NO_SUCH_KEY = 5

# Request options rejected before being sent
VALIDATION_ERROR = 6

# Incorrect sonar-client CLI argument
ARGS_ERROR = 10

# HTTP request timeout
HTTP_TIMEOUT = 12

# Can't write output file
OS_ERROR = 13

# Server unreachable
CONNECTION_ERROR = 14

_HTTP_ERRCODES = {
    HTTPStatus.UNAUTHORIZED: SONAR_API_AUTHENTICATION,
    HTTPStatus.FORBIDDEN: SONAR_API_AUTHORIZATION,
    HTTPStatus.NOT_FOUND: NO_SUCH_KEY,
}


def from_http_status(status: int) -> int:
    """Returns the error code matching an HTTP error status"""
    return _HTTP_ERRCODES.get(status, SONAR_API)
