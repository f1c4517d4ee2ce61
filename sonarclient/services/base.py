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

"""Parent of all API services"""

from __future__ import annotations
from typing import Any, ClassVar, Optional, TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from sonarclient.client import Client


class Service:
    """
    Abstraction of a group of SonarQube Web API actions, e.g. api/webhooks/*
    Subclasses declare their API root and, in OPERATIONS, the option class of each public method
    """

    API_ROOT: ClassVar[str] = ""
    OPERATIONS: ClassVar[dict[str, Optional[type]]] = {}

    def __init__(self, client: Client) -> None:
        self.client = client

    def __str__(self) -> str:
        return f"service '{self.API_ROOT}'"

    def api(self, action: str) -> str:
        """Returns the API path of an action of the service"""
        return f"{self.API_ROOT}/{action}"

    def _fetch(self, method: str, action: str, opt: Any = None, result: Optional[type] = dict) -> tuple[Any, requests.Response]:
        """Sends a request expecting a result, JSON decoded by default"""
        return self.client.do(self.client.new_request(method, self.api(action), opt), result)

    def _submit(self, action: str, opt: Any = None) -> requests.Response:
        """POSTs a request whose response body is not needed"""
        _, r = self.client.do(self.client.new_request("POST", self.api(action), opt), None)
        return r
