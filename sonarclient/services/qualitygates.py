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

    api/qualitygates: quality gates, their conditions, permissions and projects

"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.exceptions import MissingRequired
from sonarclient.options import param, PaginationArgs
from sonarclient.services.base import Service

MAX_NAME_LENGTH = 100
MAX_CONDITION_ERROR_LENGTH = 64

CONDITION_OPERATORS = ("LT", "GT")
SELECTED_VALUES = ("all", "deselected", "selected")


@dataclass
class QualitygatesAddGroupOption:
    gate_name: str = param("gateName")
    group_name: str = param("groupName")


@dataclass
class QualitygatesAddUserOption:
    gate_name: str = param("gateName")
    login: str = param("login")


@dataclass
class QualitygatesCopyOption:
    name: str = param("name")
    source_name: str = param("sourceName")


@dataclass
class QualitygatesCreateOption:
    name: str = param("name")


@dataclass
class QualitygatesCreateConditionOption:
    error: str = param("error")
    gate_name: str = param("gateName")
    metric: str = param("metric")
    op: str = param("op")


@dataclass
class QualitygatesDeleteConditionOption:
    id: str = param("id")


@dataclass
class QualitygatesDeselectOption:
    project_key: str = param("projectKey")


@dataclass
class QualitygatesDestroyOption:
    name: str = param("name")


@dataclass
class QualitygatesGetByProjectOption:
    project: str = param("project")


@dataclass
class QualitygatesProjectStatusOption:
    analysis_id: str = param("analysisId")
    branch: str = param("branch")
    project_id: str = param("projectId")
    project_key: str = param("projectKey")
    pull_request: str = param("pullRequest")


@dataclass
class QualitygatesRemoveGroupOption:
    gate_name: str = param("gateName")
    group_name: str = param("groupName")


@dataclass
class QualitygatesRemoveUserOption:
    gate_name: str = param("gateName")
    login: str = param("login")


@dataclass
class QualitygatesRenameOption:
    current_name: str = param("currentName")
    name: str = param("name")


@dataclass
class QualitygatesSearchOption(PaginationArgs):
    gate_name: str = param("gateName")
    query: str = param("query")
    selected: str = param("selected")


@dataclass
class QualitygatesSearchGroupsOption(PaginationArgs):
    gate_name: str = param("gateName")
    query: str = param("q")
    selected: str = param("selected")


@dataclass
class QualitygatesSearchUsersOption(PaginationArgs):
    gate_name: str = param("gateName")
    query: str = param("q")
    selected: str = param("selected")


@dataclass
class QualitygatesSelectOption:
    gate_name: str = param("gateName")
    project_key: str = param("projectKey")


@dataclass
class QualitygatesSetAsDefaultOption:
    name: str = param("name")


@dataclass
class QualitygatesShowOption:
    name: str = param("name")


@dataclass
class QualitygatesUpdateConditionOption:
    error: str = param("error")
    id: str = param("id")
    metric: str = param("metric")
    op: str = param("op")


def _gate_name(value: str, field: str = "GateName") -> None:
    v.validate_required(value, field)
    v.validate_max_length(value, MAX_NAME_LENGTH, field)


class QualitygatesService(Service):
    """
    Abstraction of the api/qualitygates web services
    """

    API_ROOT = "qualitygates"
    OPERATIONS = {
        "add_group": QualitygatesAddGroupOption,
        "add_user": QualitygatesAddUserOption,
        "copy": QualitygatesCopyOption,
        "create": QualitygatesCreateOption,
        "create_condition": QualitygatesCreateConditionOption,
        "delete_condition": QualitygatesDeleteConditionOption,
        "deselect": QualitygatesDeselectOption,
        "destroy": QualitygatesDestroyOption,
        "get_by_project": QualitygatesGetByProjectOption,
        "list": None,
        "project_status": QualitygatesProjectStatusOption,
        "remove_group": QualitygatesRemoveGroupOption,
        "remove_user": QualitygatesRemoveUserOption,
        "rename": QualitygatesRenameOption,
        "search": QualitygatesSearchOption,
        "search_groups": QualitygatesSearchGroupsOption,
        "search_users": QualitygatesSearchUsersOption,
        "select": QualitygatesSelectOption,
        "set_as_default": QualitygatesSetAsDefaultOption,
        "show": QualitygatesShowOption,
        "update_condition": QualitygatesUpdateConditionOption,
    }

    # Validators

    def validate_add_group_opt(self, opt: Optional[QualitygatesAddGroupOption]) -> None:
        v.validate_options(opt, QualitygatesAddGroupOption)
        _gate_name(opt.gate_name)
        v.validate_required(opt.group_name, "GroupName")

    def validate_add_user_opt(self, opt: Optional[QualitygatesAddUserOption]) -> None:
        v.validate_options(opt, QualitygatesAddUserOption)
        _gate_name(opt.gate_name)
        v.validate_required(opt.login, "Login")

    def validate_copy_opt(self, opt: Optional[QualitygatesCopyOption]) -> None:
        v.validate_options(opt, QualitygatesCopyOption)
        v.validate_required(opt.name, "Name")
        _gate_name(opt.source_name, "SourceName")

    def validate_create_opt(self, opt: Optional[QualitygatesCreateOption]) -> None:
        v.validate_options(opt, QualitygatesCreateOption)
        _gate_name(opt.name, "Name")

    def validate_create_condition_opt(self, opt: Optional[QualitygatesCreateConditionOption]) -> None:
        v.validate_options(opt, QualitygatesCreateConditionOption)
        v.validate_required(opt.error, "Error")
        v.validate_max_length(opt.error, MAX_CONDITION_ERROR_LENGTH, "Error")
        v.validate_required(opt.gate_name, "GateName")
        v.validate_required(opt.metric, "Metric")
        v.validate_in_slice(opt.op, CONDITION_OPERATORS, "Op")

    def validate_delete_condition_opt(self, opt: Optional[QualitygatesDeleteConditionOption]) -> None:
        v.validate_options(opt, QualitygatesDeleteConditionOption)
        v.validate_required(opt.id, "ID")

    def validate_deselect_opt(self, opt: Optional[QualitygatesDeselectOption]) -> None:
        v.validate_options(opt, QualitygatesDeselectOption)
        v.validate_required(opt.project_key, "ProjectKey")

    def validate_destroy_opt(self, opt: Optional[QualitygatesDestroyOption]) -> None:
        v.validate_options(opt, QualitygatesDestroyOption)
        _gate_name(opt.name, "Name")

    def validate_get_by_project_opt(self, opt: Optional[QualitygatesGetByProjectOption]) -> None:
        v.validate_options(opt, QualitygatesGetByProjectOption)
        v.validate_required(opt.project, "Project")

    def validate_project_status_opt(self, opt: Optional[QualitygatesProjectStatusOption]) -> None:
        """Validates that the analysis or project is identified, by one of its ids or its key"""
        v.validate_options(opt, QualitygatesProjectStatusOption)
        if not (opt.analysis_id or opt.project_id or opt.project_key):
            raise MissingRequired(
                QualitygatesProjectStatusOption.__name__, "at least one of AnalysisID, ProjectID, or ProjectKey must be provided"
            )

    def validate_remove_group_opt(self, opt: Optional[QualitygatesRemoveGroupOption]) -> None:
        v.validate_options(opt, QualitygatesRemoveGroupOption)
        _gate_name(opt.gate_name)
        v.validate_required(opt.group_name, "GroupName")

    def validate_remove_user_opt(self, opt: Optional[QualitygatesRemoveUserOption]) -> None:
        v.validate_options(opt, QualitygatesRemoveUserOption)
        _gate_name(opt.gate_name)
        v.validate_required(opt.login, "Login")

    def validate_rename_opt(self, opt: Optional[QualitygatesRenameOption]) -> None:
        v.validate_options(opt, QualitygatesRenameOption)
        _gate_name(opt.current_name, "CurrentName")
        _gate_name(opt.name, "Name")

    def validate_search_opt(self, opt: Optional[QualitygatesSearchOption]) -> None:
        v.validate_options(opt, QualitygatesSearchOption)
        opt.validate()
        _gate_name(opt.gate_name)
        v.validate_in_slice(opt.selected, SELECTED_VALUES, "Selected")

    def validate_search_groups_opt(self, opt: Optional[QualitygatesSearchGroupsOption]) -> None:
        v.validate_options(opt, QualitygatesSearchGroupsOption)
        opt.validate()
        v.validate_required(opt.gate_name, "GateName")
        v.validate_in_slice(opt.selected, SELECTED_VALUES, "Selected")

    def validate_search_users_opt(self, opt: Optional[QualitygatesSearchUsersOption]) -> None:
        v.validate_options(opt, QualitygatesSearchUsersOption)
        opt.validate()
        v.validate_required(opt.gate_name, "GateName")
        v.validate_in_slice(opt.selected, SELECTED_VALUES, "Selected")

    def validate_select_opt(self, opt: Optional[QualitygatesSelectOption]) -> None:
        v.validate_options(opt, QualitygatesSelectOption)
        _gate_name(opt.gate_name)
        v.validate_required(opt.project_key, "ProjectKey")

    def validate_set_as_default_opt(self, opt: Optional[QualitygatesSetAsDefaultOption]) -> None:
        v.validate_options(opt, QualitygatesSetAsDefaultOption)
        _gate_name(opt.name, "Name")

    def validate_show_opt(self, opt: Optional[QualitygatesShowOption]) -> None:
        v.validate_options(opt, QualitygatesShowOption)
        v.validate_required(opt.name, "Name")

    def validate_update_condition_opt(self, opt: Optional[QualitygatesUpdateConditionOption]) -> None:
        v.validate_options(opt, QualitygatesUpdateConditionOption)
        v.validate_required(opt.error, "Error")
        v.validate_max_length(opt.error, MAX_CONDITION_ERROR_LENGTH, "Error")
        v.validate_required(opt.id, "ID")
        v.validate_required(opt.metric, "Metric")
        v.validate_in_slice(opt.op, CONDITION_OPERATORS, "Op")

    # Operations

    def add_group(self, opt: QualitygatesAddGroupOption) -> requests.Response:
        """Allows a group to edit a quality gate"""
        self.validate_add_group_opt(opt)
        return self._submit("add_group", opt)

    def add_user(self, opt: QualitygatesAddUserOption) -> requests.Response:
        """Allows a user to edit a quality gate"""
        self.validate_add_user_opt(opt)
        return self._submit("add_user", opt)

    def copy(self, opt: QualitygatesCopyOption) -> requests.Response:
        self.validate_copy_opt(opt)
        log.info("Copying quality gate '%s' into '%s'", opt.source_name, opt.name)
        return self._submit("copy", opt)

    def create(self, opt: QualitygatesCreateOption) -> tuple[dict[str, Any], requests.Response]:
        """Creates a quality gate

        :return: {"name": ...} and the HTTP response
        """
        self.validate_create_opt(opt)
        log.info("Creating quality gate '%s'", opt.name)
        return self._fetch("POST", "create", opt)

    def create_condition(self, opt: QualitygatesCreateConditionOption) -> tuple[dict[str, Any], requests.Response]:
        """Adds a condition to a quality gate

        :return: {"id", "metric", "op", "error"} and the HTTP response
        """
        self.validate_create_condition_opt(opt)
        return self._fetch("POST", "create_condition", opt)

    def delete_condition(self, opt: QualitygatesDeleteConditionOption) -> requests.Response:
        self.validate_delete_condition_opt(opt)
        return self._submit("delete_condition", opt)

    def deselect(self, opt: QualitygatesDeselectOption) -> requests.Response:
        """Removes the association of a project with a quality gate, the project then uses the default gate"""
        self.validate_deselect_opt(opt)
        return self._submit("deselect", opt)

    def destroy(self, opt: QualitygatesDestroyOption) -> requests.Response:
        """Deletes a quality gate"""
        self.validate_destroy_opt(opt)
        log.info("Deleting quality gate '%s'", opt.name)
        return self._submit("destroy", opt)

    def get_by_project(self, opt: QualitygatesGetByProjectOption) -> tuple[dict[str, Any], requests.Response]:
        """Returns the quality gate of a project

        :return: {"qualityGate": {"name", "default"}} and the HTTP response
        """
        self.validate_get_by_project_opt(opt)
        return self._fetch("GET", "get_by_project", opt)

    def list(self) -> tuple[dict[str, Any], requests.Response]:
        """Lists all quality gates

        :return: {"qualitygates": [...], "default", "actions"} and the HTTP response
        """
        return self._fetch("GET", "list")

    def project_status(self, opt: QualitygatesProjectStatusOption) -> tuple[dict[str, Any], requests.Response]:
        """Returns the quality gate status of a project or analysis

        :return: {"projectStatus": {"status", "conditions", ...}} and the HTTP response
        """
        self.validate_project_status_opt(opt)
        return self._fetch("GET", "project_status", opt)

    def remove_group(self, opt: QualitygatesRemoveGroupOption) -> requests.Response:
        self.validate_remove_group_opt(opt)
        return self._submit("remove_group", opt)

    def remove_user(self, opt: QualitygatesRemoveUserOption) -> requests.Response:
        self.validate_remove_user_opt(opt)
        return self._submit("remove_user", opt)

    def rename(self, opt: QualitygatesRenameOption) -> requests.Response:
        self.validate_rename_opt(opt)
        log.info("Renaming quality gate '%s' into '%s'", opt.current_name, opt.name)
        return self._submit("rename", opt)

    def search(self, opt: QualitygatesSearchOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches the projects associated (or not) with a quality gate

        :return: {"paging": {...}, "results": [...]} and the HTTP response
        """
        self.validate_search_opt(opt)
        return self._fetch("GET", "search", opt)

    def search_groups(self, opt: QualitygatesSearchGroupsOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches the groups allowed (or not) to edit a quality gate"""
        self.validate_search_groups_opt(opt)
        return self._fetch("GET", "search_groups", opt)

    def search_users(self, opt: QualitygatesSearchUsersOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches the users allowed (or not) to edit a quality gate"""
        self.validate_search_users_opt(opt)
        return self._fetch("GET", "search_users", opt)

    def select(self, opt: QualitygatesSelectOption) -> requests.Response:
        """Associates a project with a quality gate"""
        self.validate_select_opt(opt)
        return self._submit("select", opt)

    def set_as_default(self, opt: QualitygatesSetAsDefaultOption) -> requests.Response:
        self.validate_set_as_default_opt(opt)
        log.info("Setting quality gate '%s' as default", opt.name)
        return self._submit("set_as_default", opt)

    def show(self, opt: QualitygatesShowOption) -> tuple[dict[str, Any], requests.Response]:
        """Shows a quality gate and its conditions"""
        self.validate_show_opt(opt)
        return self._fetch("GET", "show", opt)

    def update_condition(self, opt: QualitygatesUpdateConditionOption) -> requests.Response:
        self.validate_update_condition_opt(opt)
        return self._submit("update_condition", opt)
