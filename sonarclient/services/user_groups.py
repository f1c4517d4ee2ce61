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

"""api/user_groups: groups and their members"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.options import param, PaginationArgs
from sonarclient.services.base import Service

MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 200

SEARCH_FIELDS = frozenset(("name", "description", "membersCount", "managed"))
SELECTED_FILTERS = frozenset(("all", "deselected", "selected"))


@dataclass
class UserGroupsMembershipOption:
    """Adds a user to, or removes it from, a group"""

    login: str = param("login")
    name: str = param("name")


@dataclass
class UserGroupsCreateOption:
    description: str = param("description")
    name: str = param("name")


@dataclass
class UserGroupsDeleteOption:
    name: str = param("name")


@dataclass
class UserGroupsSearchOption(PaginationArgs):
    managed: Optional[bool] = param("managed", None)
    fields: list[str] = param("f", comma=True, kind=list)
    query: str = param("q")


@dataclass
class UserGroupsUpdateOption:
    current_name: str = param("currentName")
    description: str = param("description")
    name: str = param("name")


@dataclass
class UserGroupsUsersOption(PaginationArgs):
    name: str = param("name")
    query: str = param("q")
    selected: str = param("selected")


class UserGroupsService(Service):
    """
    Abstraction of the api/user_groups web services
    """

    API_ROOT = "user_groups"
    OPERATIONS = {
        "add_user": UserGroupsMembershipOption,
        "create": UserGroupsCreateOption,
        "delete": UserGroupsDeleteOption,
        "remove_user": UserGroupsMembershipOption,
        "search": UserGroupsSearchOption,
        "update": UserGroupsUpdateOption,
        "users": UserGroupsUsersOption,
    }

    def validate_membership_opt(self, opt: Optional[UserGroupsMembershipOption]) -> None:
        v.validate_options(opt, UserGroupsMembershipOption)
        v.validate_required(opt.name, "Name")

    def validate_create_opt(self, opt: Optional[UserGroupsCreateOption]) -> None:
        v.validate_options(opt, UserGroupsCreateOption)
        v.validate_required(opt.name, "Name")
        v.validate_max_length(opt.name, MAX_NAME_LENGTH, "Name")
        v.validate_max_length(opt.description, MAX_DESCRIPTION_LENGTH, "Description")

    def validate_delete_opt(self, opt: Optional[UserGroupsDeleteOption]) -> None:
        v.validate_options(opt, UserGroupsDeleteOption)
        v.validate_required(opt.name, "Name")

    def validate_search_opt(self, opt: Optional[UserGroupsSearchOption]) -> None:
        v.validate_options(opt, UserGroupsSearchOption)
        opt.validate()
        v.are_values_authorized(opt.fields, SEARCH_FIELDS, "Fields")

    def validate_update_opt(self, opt: Optional[UserGroupsUpdateOption]) -> None:
        v.validate_options(opt, UserGroupsUpdateOption)
        v.validate_required(opt.current_name, "CurrentName")
        v.validate_max_length(opt.name, MAX_NAME_LENGTH, "Name")
        v.validate_max_length(opt.description, MAX_DESCRIPTION_LENGTH, "Description")

    def validate_users_opt(self, opt: Optional[UserGroupsUsersOption]) -> None:
        v.validate_options(opt, UserGroupsUsersOption)
        opt.validate()
        v.validate_required(opt.name, "Name")
        v.is_value_authorized(opt.selected, SELECTED_FILTERS, "Selected")

    def add_user(self, opt: UserGroupsMembershipOption) -> requests.Response:
        """Adds a user to a group, the current user if no login is given"""
        self.validate_membership_opt(opt)
        return self._submit("add_user", opt)

    def create(self, opt: UserGroupsCreateOption) -> tuple[dict[str, Any], requests.Response]:
        """Creates a group

        :return: {"group": {"id", "name", "description", "membersCount", "default"}} and the HTTP response
        """
        self.validate_create_opt(opt)
        log.info("Creating group '%s'", opt.name)
        return self._fetch("POST", "create", opt)

    def delete(self, opt: UserGroupsDeleteOption) -> requests.Response:
        self.validate_delete_opt(opt)
        log.info("Deleting group '%s'", opt.name)
        return self._submit("delete", opt)

    def remove_user(self, opt: UserGroupsMembershipOption) -> requests.Response:
        """Removes a user from a group"""
        self.validate_membership_opt(opt)
        return self._submit("remove_user", opt)

    def search(self, opt: Optional[UserGroupsSearchOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Searches groups

        :return: {"groups": [...], "paging": {...}} and the HTTP response
        """
        if opt is None:
            opt = UserGroupsSearchOption()
        self.validate_search_opt(opt)
        return self._fetch("GET", "search", opt)

    def update(self, opt: UserGroupsUpdateOption) -> requests.Response:
        """Renames a group, or changes its description"""
        self.validate_update_opt(opt)
        return self._submit("update", opt)

    def users(self, opt: UserGroupsUsersOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches the members of a group

        :return: {"users": [...], "paging": {...}} and the HTTP response
        """
        self.validate_users_opt(opt)
        return self._fetch("GET", "users", opt)
