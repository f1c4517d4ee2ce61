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

    The SonarQube Web API client: builds requests from option objects,
    sends them and decodes responses

"""

import json
import time
from http import HTTPStatus
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import exceptions, version, options
from sonarclient.utilities import redacted_token, sonar_error, http_error_string
from sonarclient.services import SERVICES

DEFAULT_URL = "http://localhost:9000/api/"
DEFAULT_HTTP_TIMEOUT = 10

_APP_JSON = "application/json"
_TEXT_PLAIN = "text/plain, */*"
_PROTOBUF = "application/x-protobuf, */*"
_FORM = "application/x-www-form-urlencoded"

_SUCCESS_STATUSES = (HTTPStatus.OK, HTTPStatus.CREATED, HTTPStatus.ACCEPTED, HTTPStatus.NO_CONTENT)
_BODY_METHODS = ("POST", "PUT", "PATCH")


def normalize_url(url: Optional[str]) -> str:
    """Returns the API base URL, always ending with /api/"""
    if not url:
        return DEFAULT_URL
    url = url.rstrip("/")
    if not url.endswith("/api"):
        url += "/api"
    return url + "/"


class Client:
    """
    Client of a SonarQube Server Web API. One attribute per API service, e.g. client.webhooks
    The client holds no per call state and can be shared between threads
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        http_timeout: int = DEFAULT_HTTP_TIMEOUT,
        user_agent: Optional[str] = None,
        cert_file: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Constructor

        :param url: Root URL of the SonarQube platform, with or without the /api suffix
        :param token: User token, takes precedence over username/password
        :param username: Login for basic authentication
        :param password: Password for basic authentication
        :param http_timeout: HTTP timeout in seconds
        :param user_agent: User-Agent header, defaults to sonar-client <version>
        :param cert_file: Optional client certificate file (.pem)
        :param session: requests Session to use, a new one is created if None
        """
        self.url = normalize_url(url)  #: API base URL, ending with /
        self.http_timeout = int(http_timeout)
        self.user_agent = user_agent or f"sonar-client {version.PACKAGE_VERSION}"
        self.__token = token
        self.__username = username
        self.__password = password
        self.__cert_file = cert_file
        self.session = session or requests.Session()
        for name, service_class in SERVICES.items():
            setattr(self, name, service_class(self))

    def __str__(self) -> str:
        return f"{self.url}@{redacted_token(self.__token)}"

    def __credentials(self) -> Optional[tuple[str, str]]:
        if self.__token:
            return self.__token, ""
        if self.__username:
            return self.__username, self.__password or ""
        return None

    def url_for(self, path: str) -> str:
        """Returns the full URL of an API path"""
        return self.url + path.lstrip("/")

    def new_request(self, method: str, path: str, opt: Any = None) -> requests.PreparedRequest:
        """Builds an HTTP request for an API path

        :param method: HTTP method (GET, POST, ...)
        :param path: API path relative to the base URL, e.g. webhooks/list
        :param opt: Request options dataclass, or None
        :return: The prepared request, options encoded in query string (GET) or form body (POST)
        """
        method = method.upper()
        params = options.to_params(opt)
        headers = {"user-agent": self.user_agent, "accept": _APP_JSON}
        req = requests.Request(method=method, url=self.url_for(path), headers=headers, auth=self.__credentials())
        if method in _BODY_METHODS:
            headers["content-type"] = _FORM
            req.data = params
        else:
            req.params = params
        return self.session.prepare_request(req)

    def do(self, req: requests.PreparedRequest, result: Optional[type] = dict, mute: tuple[int, ...] = ()) -> tuple[Any, requests.Response]:
        """Sends a prepared request and decodes the response

        :param req: The request, as returned by new_request()
        :param result: dict to decode a JSON body, str to get the raw body, bytes for binary (protobuf) bodies,
            None to discard it
        :param mute: HTTP error statuses that should not be logged as errors
        :raises ApiError: if the HTTP status is not a success
        :raises HttpTimeout: if the request timed out
        :raises ConnectionError: if the server can't be reached
        :return: the decoded result and the HTTP response
        """
        if result is str:
            req.headers["accept"] = _TEXT_PLAIN
        elif result is bytes:
            req.headers["accept"] = _PROTOBUF
        log.debug("%s: %s", req.method, req.url)
        start = time.perf_counter_ns()
        try:
            r = self.session.send(req, timeout=self.http_timeout, verify=self.__cert_file or True)
        except requests.Timeout as e:
            log.error("%s: %s timed out after %d s", req.method, req.url, self.http_timeout)
            raise exceptions.HttpTimeout(f"{req.method} {req.url} timed out: {e}") from e
        except requests.RequestException as e:
            log.error("%s: %s failed: %s", req.method, req.url, str(e))
            raise exceptions.ConnectionError(f"{req.method} {req.url} failed: {e}") from e
        log.debug("%s: %s took %d ms", req.method, req.url, (time.perf_counter_ns() - start) // 1000000)
        if r.status_code not in _SUCCESS_STATUSES:
            msg = sonar_error(r)
            lvl = log.DEBUG if r.status_code in mute else log.ERROR
            log.log(lvl, "%s: %s returned %s: %s", req.method, req.url, http_error_string(r.status_code), msg)
            raise exceptions.ApiError(r, f"{http_error_string(r.status_code)}: {msg}")
        return self.__decode(r, result), r

    @staticmethod
    def __decode(r: requests.Response, result: Optional[type]) -> Any:
        if result is None:
            return None
        if result is str:
            return r.text
        if result is bytes:
            return r.content
        if r.status_code == HTTPStatus.NO_CONTENT or r.text.strip() == "":
            return {}
        try:
            return json.loads(r.text)
        except json.decoder.JSONDecodeError as e:
            raise exceptions.ApiError(r, f"Invalid JSON in response of {r.url}: {e}") from e

    def get(self, path: str, opt: Any = None, result: Optional[type] = dict) -> tuple[Any, requests.Response]:
        """Makes an HTTP GET request to SonarQube

        :param path: API to invoke (without the base URL)
        :param opt: request options, defaults to None
        :return: the decoded result and the HTTP response
        """
        return self.do(self.new_request("GET", path, opt), result)

    def post(self, path: str, opt: Any = None, result: Optional[type] = None) -> tuple[Any, requests.Response]:
        """Makes an HTTP POST request to SonarQube

        :param path: API to invoke (without the base URL)
        :param opt: request options, defaults to None
        :return: the decoded result (None by default) and the HTTP response
        """
        return self.do(self.new_request("POST", path, opt), result)
