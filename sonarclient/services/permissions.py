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

"""api/permissions: global and project permissions, and permission templates"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Union

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.exceptions import MissingRequired, InvalidValue
from sonarclient.options import param, PaginationArgs
from sonarclient.services.base import Service

MIN_QUERY_LENGTH = 3

GLOBAL_PERMISSIONS = frozenset(("admin", "gateadmin", "profileadmin", "provisioning", "scan", "applicationcreator", "portfoliocreator"))
PROJECT_PERMISSIONS = frozenset(("admin", "codeviewer", "issueadmin", "securityhotspotadmin", "scan", "user"))
QUALIFIERS = frozenset(("TRK",))


@dataclass
class PermissionsGroupOption:
    """Grants or revokes a permission to a group, globally or on a project"""

    group_name: str = param("groupName")
    permission: str = param("permission")
    project_id: str = param("projectId")
    project_key: str = param("projectKey")


@dataclass
class PermissionsUserOption:
    """Grants or revokes a permission to a user, globally or on a project"""

    login: str = param("login")
    permission: str = param("permission")
    project_id: str = param("projectId")
    project_key: str = param("projectKey")


@dataclass
class PermissionsTemplateOption:
    """Designates a permission template, by id or by name"""

    template_id: str = param("templateId")
    template_name: str = param("templateName")


@dataclass
class PermissionsTemplateGroupOption(PermissionsTemplateOption):
    group_name: str = param("groupName")
    permission: str = param("permission")


@dataclass
class PermissionsTemplateUserOption(PermissionsTemplateOption):
    login: str = param("login")
    permission: str = param("permission")


@dataclass
class PermissionsProjectCreatorOption(PermissionsTemplateOption):
    permission: str = param("permission")


@dataclass
class PermissionsApplyTemplateOption(PermissionsTemplateOption):
    project_id: str = param("projectId")
    project_key: str = param("projectKey")


@dataclass
class PermissionsBulkApplyTemplateOption(PermissionsTemplateOption):
    analyzed_before: str = param("analyzedBefore")
    on_provisioned_only: Optional[bool] = param("onProvisionedOnly", None)
    projects: list[str] = param("projects", comma=True, kind=list)
    query: str = param("q")
    qualifiers: str = param("qualifiers")


@dataclass
class PermissionsCreateTemplateOption:
    description: str = param("description")
    name: str = param("name")
    project_key_pattern: str = param("projectKeyPattern")


@dataclass
class PermissionsSearchOption(PaginationArgs):
    """Searches the groups or users having permissions, globally or on a project"""

    permission: str = param("permission")
    project_id: str = param("projectId")
    project_key: str = param("projectKey")
    query: str = param("q")


@dataclass
class PermissionsSearchTemplatesOption:
    query: str = param("q")


@dataclass
class PermissionsSetDefaultTemplateOption(PermissionsTemplateOption):
    qualifier: str = param("qualifier")


@dataclass
class PermissionsTemplateMembersOption(PaginationArgs, PermissionsTemplateOption):
    """Searches the groups or users of a permission template"""

    permission: str = param("permission")
    query: str = param("q")


@dataclass
class PermissionsUpdateTemplateOption:
    description: str = param("description")
    id: str = param("id")
    name: str = param("name")
    project_key_pattern: str = param("projectKeyPattern")


def _validate_permission(permission: Optional[str]) -> None:
    """Fails if the permission is neither a global nor a project one"""
    if permission and permission not in GLOBAL_PERMISSIONS | PROJECT_PERMISSIONS:
        raise InvalidValue("Permission", "must be a valid global or project permission")


def _validate_template(opt: PermissionsTemplateOption) -> None:
    if not opt.template_id and not opt.template_name:
        raise MissingRequired("TemplateID/TemplateName", "either TemplateID or TemplateName must be provided")


def _validate_template_permission(opt: Union[PermissionsTemplateGroupOption, PermissionsTemplateUserOption, PermissionsProjectCreatorOption]) -> None:
    """Permission templates only carry project permissions"""
    v.validate_required(opt.permission, "Permission")
    v.is_value_authorized(opt.permission, PROJECT_PERMISSIONS, "Permission")
    _validate_template(opt)


class PermissionsService(Service):
    """
    Abstraction of the api/permissions web services
    Permissions are global unless a project id or key is given
    """

    API_ROOT = "permissions"
    OPERATIONS = {
        "add_group": PermissionsGroupOption,
        "add_group_to_template": PermissionsTemplateGroupOption,
        "add_project_creator_to_template": PermissionsProjectCreatorOption,
        "add_user": PermissionsUserOption,
        "add_user_to_template": PermissionsTemplateUserOption,
        "apply_template": PermissionsApplyTemplateOption,
        "bulk_apply_template": PermissionsBulkApplyTemplateOption,
        "create_template": PermissionsCreateTemplateOption,
        "delete_template": PermissionsTemplateOption,
        "groups": PermissionsSearchOption,
        "remove_group": PermissionsGroupOption,
        "remove_group_from_template": PermissionsTemplateGroupOption,
        "remove_project_creator_from_template": PermissionsProjectCreatorOption,
        "remove_user": PermissionsUserOption,
        "remove_user_from_template": PermissionsTemplateUserOption,
        "search_templates": PermissionsSearchTemplatesOption,
        "set_default_template": PermissionsSetDefaultTemplateOption,
        "template_groups": PermissionsTemplateMembersOption,
        "template_users": PermissionsTemplateMembersOption,
        "update_template": PermissionsUpdateTemplateOption,
        "users": PermissionsSearchOption,
    }

    def validate_group_opt(self, opt: Optional[PermissionsGroupOption]) -> None:
        v.validate_options(opt, PermissionsGroupOption)
        v.validate_required(opt.group_name, "GroupName")
        v.validate_required(opt.permission, "Permission")
        _validate_permission(opt.permission)

    def validate_user_opt(self, opt: Optional[PermissionsUserOption]) -> None:
        v.validate_options(opt, PermissionsUserOption)
        v.validate_required(opt.login, "Login")
        v.validate_required(opt.permission, "Permission")
        _validate_permission(opt.permission)

    def validate_template_group_opt(self, opt: Optional[PermissionsTemplateGroupOption]) -> None:
        v.validate_options(opt, PermissionsTemplateGroupOption)
        v.validate_required(opt.group_name, "GroupName")
        _validate_template_permission(opt)

    def validate_template_user_opt(self, opt: Optional[PermissionsTemplateUserOption]) -> None:
        v.validate_options(opt, PermissionsTemplateUserOption)
        v.validate_required(opt.login, "Login")
        _validate_template_permission(opt)

    def validate_project_creator_opt(self, opt: Optional[PermissionsProjectCreatorOption]) -> None:
        v.validate_options(opt, PermissionsProjectCreatorOption)
        _validate_template_permission(opt)

    def validate_apply_template_opt(self, opt: Optional[PermissionsApplyTemplateOption]) -> None:
        v.validate_options(opt, PermissionsApplyTemplateOption)
        if not opt.project_id and not opt.project_key:
            raise MissingRequired("ProjectID/ProjectKey", "either ProjectID or ProjectKey must be provided")
        _validate_template(opt)

    def validate_bulk_apply_template_opt(self, opt: Optional[PermissionsBulkApplyTemplateOption]) -> None:
        v.validate_options(opt, PermissionsBulkApplyTemplateOption)
        _validate_template(opt)
        v.is_value_authorized(opt.qualifiers, QUALIFIERS, "Qualifiers")
        v.validate_date_or_datetime(opt.analyzed_before, "AnalyzedBefore")

    def validate_create_template_opt(self, opt: Optional[PermissionsCreateTemplateOption]) -> None:
        v.validate_options(opt, PermissionsCreateTemplateOption)
        v.validate_required(opt.name, "Name")

    def validate_delete_template_opt(self, opt: Optional[PermissionsTemplateOption]) -> None:
        v.validate_options(opt, PermissionsTemplateOption)
        _validate_template(opt)

    def validate_search_opt(self, opt: Optional[PermissionsSearchOption]) -> None:
        """Validates the groups and users searches"""
        v.validate_options(opt, PermissionsSearchOption)
        opt.validate()
        _validate_permission(opt.permission)
        v.validate_min_length(opt.query, MIN_QUERY_LENGTH, "Query")

    def validate_set_default_template_opt(self, opt: Optional[PermissionsSetDefaultTemplateOption]) -> None:
        v.validate_options(opt, PermissionsSetDefaultTemplateOption)
        _validate_template(opt)
        v.is_value_authorized(opt.qualifier, QUALIFIERS, "Qualifier")

    def validate_template_members_opt(self, opt: Optional[PermissionsTemplateMembersOption]) -> None:
        v.validate_options(opt, PermissionsTemplateMembersOption)
        opt.validate()
        _validate_template(opt)
        v.is_value_authorized(opt.permission, PROJECT_PERMISSIONS, "Permission")
        v.validate_min_length(opt.query, MIN_QUERY_LENGTH, "Query")

    def validate_update_template_opt(self, opt: Optional[PermissionsUpdateTemplateOption]) -> None:
        v.validate_options(opt, PermissionsUpdateTemplateOption)
        v.validate_required(opt.id, "ID")

    def add_group(self, opt: PermissionsGroupOption) -> requests.Response:
        """Grants a permission to a group, on a project if one is given"""
        self.validate_group_opt(opt)
        log.info("Granting permission '%s' to group '%s' on project '%s'", opt.permission, opt.group_name, opt.project_key)
        return self._submit("add_group", opt)

    def add_group_to_template(self, opt: PermissionsTemplateGroupOption) -> requests.Response:
        self.validate_template_group_opt(opt)
        return self._submit("add_group_to_template", opt)

    def add_project_creator_to_template(self, opt: PermissionsProjectCreatorOption) -> requests.Response:
        """Grants a permission of a template to the creator of the projects it applies to"""
        self.validate_project_creator_opt(opt)
        return self._submit("add_project_creator_to_template", opt)

    def add_user(self, opt: PermissionsUserOption) -> requests.Response:
        """Grants a permission to a user, on a project if one is given"""
        self.validate_user_opt(opt)
        log.info("Granting permission '%s' to user '%s' on project '%s'", opt.permission, opt.login, opt.project_key)
        return self._submit("add_user", opt)

    def add_user_to_template(self, opt: PermissionsTemplateUserOption) -> requests.Response:
        self.validate_template_user_opt(opt)
        return self._submit("add_user_to_template", opt)

    def apply_template(self, opt: PermissionsApplyTemplateOption) -> requests.Response:
        """Applies a permission template to a project, replacing its permissions"""
        self.validate_apply_template_opt(opt)
        return self._submit("apply_template", opt)

    def bulk_apply_template(self, opt: PermissionsBulkApplyTemplateOption) -> requests.Response:
        """Applies a permission template to the projects matching the filters"""
        self.validate_bulk_apply_template_opt(opt)
        return self._submit("bulk_apply_template", opt)

    def create_template(self, opt: PermissionsCreateTemplateOption) -> tuple[dict[str, Any], requests.Response]:
        """Creates a permission template

        :return: {"permissionTemplate": {"name", "description", "projectKeyPattern"}} and the HTTP response
        """
        self.validate_create_template_opt(opt)
        log.info("Creating permission template '%s'", opt.name)
        return self._fetch("POST", "create_template", opt)

    def delete_template(self, opt: PermissionsTemplateOption) -> requests.Response:
        self.validate_delete_template_opt(opt)
        log.info("Deleting permission template '%s'", opt.template_name or opt.template_id)
        return self._submit("delete_template", opt)

    def groups(self, opt: Optional[PermissionsSearchOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Lists the groups with their permissions, global ones if no project is given

        :return: {"groups": [...], "paging": {...}} and the HTTP response
        """
        if opt is None:
            opt = PermissionsSearchOption()
        self.validate_search_opt(opt)
        return self._fetch("GET", "groups", opt)

    def remove_group(self, opt: PermissionsGroupOption) -> requests.Response:
        self.validate_group_opt(opt)
        log.info("Revoking permission '%s' from group '%s' on project '%s'", opt.permission, opt.group_name, opt.project_key)
        return self._submit("remove_group", opt)

    def remove_group_from_template(self, opt: PermissionsTemplateGroupOption) -> requests.Response:
        self.validate_template_group_opt(opt)
        return self._submit("remove_group_from_template", opt)

    def remove_project_creator_from_template(self, opt: PermissionsProjectCreatorOption) -> requests.Response:
        self.validate_project_creator_opt(opt)
        return self._submit("remove_project_creator_from_template", opt)

    def remove_user(self, opt: PermissionsUserOption) -> requests.Response:
        self.validate_user_opt(opt)
        log.info("Revoking permission '%s' from user '%s' on project '%s'", opt.permission, opt.login, opt.project_key)
        return self._submit("remove_user", opt)

    def remove_user_from_template(self, opt: PermissionsTemplateUserOption) -> requests.Response:
        self.validate_template_user_opt(opt)
        return self._submit("remove_user_from_template", opt)

    def search_templates(self, opt: Optional[PermissionsSearchTemplatesOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Lists permission templates

        :return: {"permissionTemplates": [...], "defaultTemplates": [...], "permissions": [...]} and the HTTP response
        """
        return self._fetch("GET", "search_templates", opt)

    def set_default_template(self, opt: PermissionsSetDefaultTemplateOption) -> requests.Response:
        """Makes a permission template the default one for new projects"""
        self.validate_set_default_template_opt(opt)
        return self._submit("set_default_template", opt)

    def template_groups(self, opt: PermissionsTemplateMembersOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the groups with their permissions on a template"""
        self.validate_template_members_opt(opt)
        return self._fetch("GET", "template_groups", opt)

    def template_users(self, opt: PermissionsTemplateMembersOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the users with their permissions on a template"""
        self.validate_template_members_opt(opt)
        return self._fetch("GET", "template_users", opt)

    def update_template(self, opt: PermissionsUpdateTemplateOption) -> tuple[dict[str, Any], requests.Response]:
        """Updates the name, description or project key pattern of a template

        :return: {"permissionTemplate": {...}} and the HTTP response
        """
        self.validate_update_template_opt(opt)
        return self._fetch("POST", "update_template", opt)

    def users(self, opt: Optional[PermissionsSearchOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Lists the users with their permissions, global ones if no project is given

        :return: {"users": [...], "paging": {...}} and the HTTP response
        """
        if opt is None:
            opt = PermissionsSearchOption()
        self.validate_search_opt(opt)
        return self._fetch("GET", "users", opt)
