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

"""api/user_tokens"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.exceptions import MissingRequired
from sonarclient.options import param
from sonarclient.services.base import Service

MAX_NAME_LENGTH = 100

USER_TOKEN = "USER_TOKEN"
GLOBAL_ANALYSIS_TOKEN = "GLOBAL_ANALYSIS_TOKEN"
PROJECT_ANALYSIS_TOKEN = "PROJECT_ANALYSIS_TOKEN"
TOKEN_TYPES = frozenset((USER_TOKEN, GLOBAL_ANALYSIS_TOKEN, PROJECT_ANALYSIS_TOKEN))


@dataclass
class UserTokensGenerateOption:
    expiration_date: str = param("expirationDate")
    login: str = param("login")
    name: str = param("name")
    project_key: str = param("projectKey")
    type: str = param("type")


@dataclass
class UserTokensRevokeOption:
    login: str = param("login")
    name: str = param("name")


@dataclass
class UserTokensSearchOption:
    login: str = param("login")


class UserTokensService(Service):
    """
    Abstraction of the api/user_tokens web services
    """

    API_ROOT = "user_tokens"
    OPERATIONS = {
        "generate": UserTokensGenerateOption,
        "revoke": UserTokensRevokeOption,
        "search": UserTokensSearchOption,
    }

    def validate_generate_opt(self, opt: Optional[UserTokensGenerateOption]) -> None:
        """Validates the token name and type, project analysis tokens need a project"""
        v.validate_options(opt, UserTokensGenerateOption)
        v.validate_required(opt.name, "Name")
        v.validate_max_length(opt.name, MAX_NAME_LENGTH, "Name")
        if not opt.type:
            return
        v.is_value_authorized(opt.type, TOKEN_TYPES, "Type")
        if opt.type == PROJECT_ANALYSIS_TOKEN and not opt.project_key:
            raise MissingRequired("ProjectKey", f"is required when Type is {PROJECT_ANALYSIS_TOKEN}")

    def validate_revoke_opt(self, opt: Optional[UserTokensRevokeOption]) -> None:
        v.validate_options(opt, UserTokensRevokeOption)
        v.validate_required(opt.name, "Name")

    def generate(self, opt: UserTokensGenerateOption) -> tuple[dict[str, Any], requests.Response]:
        """Generates a token, for the current user if no login is given

        :return: {"login", "name", "token", "type", "createdAt", "expirationDate"...} and the HTTP response
        """
        self.validate_generate_opt(opt)
        log.info("Generating %s token '%s' for user '%s'", opt.type or USER_TOKEN, opt.name, opt.login)
        return self._fetch("POST", "generate", opt)

    def revoke(self, opt: UserTokensRevokeOption) -> requests.Response:
        """Revokes a token"""
        self.validate_revoke_opt(opt)
        log.info("Revoking token '%s' of user '%s'", opt.name, opt.login)
        return self._submit("revoke", opt)

    def search(self, opt: Optional[UserTokensSearchOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Lists the tokens of a user, the current user if no login is given

        :return: {"login": ..., "userTokens": [...]} and the HTTP response
        """
        return self._fetch("GET", "search", opt)
