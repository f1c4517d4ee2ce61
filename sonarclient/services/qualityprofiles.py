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

    api/qualityprofiles: quality profiles, their rules, inheritance, permissions and projects

    Most actions identify a quality profile by its language and name,
    a few (rule activation, copy, rename, show) by its key

"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.exceptions import InvalidValue
from sonarclient.options import param, PaginationArgs
from sonarclient.services.base import Service

MAX_NAME_LENGTH = 100

SEVERITIES = frozenset(("INFO", "MINOR", "MAJOR", "CRITICAL", "BLOCKER"))
IMPACT_SOFTWARE_QUALITIES = frozenset(("MAINTAINABILITY", "RELIABILITY", "SECURITY"))
IMPACT_SEVERITIES = frozenset(("INFO", "LOW", "MEDIUM", "HIGH", "BLOCKER"))
SELECTED_FILTERS = frozenset(("all", "deselected", "selected"))
CHANGELOG_FILTER_MODES = frozenset(("MQR", "STANDARD"))


@dataclass
class QualityprofilesActivateRuleOption:
    key: str = param("key")
    rule: str = param("rule")
    impacts: dict[str, str] = param("impacts", kind=dict)
    params: dict[str, str] = param("params", kind=dict)
    prioritized_rule: Optional[bool] = param("prioritizedRule", None)
    reset: Optional[bool] = param("reset", None)
    severity: str = param("severity")


@dataclass
class QualityprofilesAddGroupOption:
    group: str = param("group")
    language: str = param("language")
    quality_profile: str = param("qualityProfile")


@dataclass
class QualityprofilesAddProjectOption:
    language: str = param("language")
    project: str = param("project")
    quality_profile: str = param("qualityProfile")


@dataclass
class QualityprofilesAddUserOption:
    language: str = param("language")
    login: str = param("login")
    quality_profile: str = param("qualityProfile")


@dataclass
class QualityprofilesProfileOption:
    """Identifies a quality profile by its language and name"""

    language: str = param("language")
    quality_profile: str = param("qualityProfile")


@dataclass
class QualityprofilesChangeParentOption:
    language: str = param("language")
    quality_profile: str = param("qualityProfile")
    parent_quality_profile: str = param("parentQualityProfile")


@dataclass
class QualityprofilesChangelogOption(PaginationArgs):
    language: str = param("language")
    quality_profile: str = param("qualityProfile")
    filter_mode: str = param("filterMode")
    since: str = param("since")
    to: str = param("to")


@dataclass
class QualityprofilesCompareOption:
    left_key: str = param("leftKey")
    right_key: str = param("rightKey")


@dataclass
class QualityprofilesCopyOption:
    from_key: str = param("fromKey")
    to_name: str = param("toName")


@dataclass
class QualityprofilesCreateOption:
    language: str = param("language")
    name: str = param("name")


@dataclass
class QualityprofilesDeactivateRuleOption:
    key: str = param("key")
    rule: str = param("rule")


@dataclass
class QualityprofilesProjectsOption(PaginationArgs):
    key: str = param("key")
    query: str = param("q")
    selected: str = param("selected")


@dataclass
class QualityprofilesRenameOption:
    key: str = param("key")
    name: str = param("name")


@dataclass
class QualityprofilesRestoreOption:
    backup: str = param("backup")


@dataclass
class QualityprofilesSearchOption:
    defaults: Optional[bool] = param("defaults", None)
    language: str = param("language")
    project: str = param("project")
    quality_profile: str = param("qualityProfile")


@dataclass
class QualityprofilesSearchGroupsOption(PaginationArgs):
    language: str = param("language")
    quality_profile: str = param("qualityProfile")
    query: str = param("q")
    selected: str = param("selected")


@dataclass
class QualityprofilesSearchUsersOption(PaginationArgs):
    language: str = param("language")
    quality_profile: str = param("qualityProfile")
    query: str = param("q")
    selected: str = param("selected")


@dataclass
class QualityprofilesShowOption:
    key: str = param("key")
    compare_to_sonar_way: Optional[bool] = param("compareToSonarWay", None)


def _language(language: str) -> None:
    v.validate_required(language, "Language")
    v.validate_language(language)


def _profile(opt: Any) -> None:
    """Validates the language and name identifying a quality profile"""
    _language(opt.language)
    v.validate_required(opt.quality_profile, "QualityProfile")


class QualityprofilesService(Service):
    """
    Abstraction of the api/qualityprofiles web services
    """

    API_ROOT = "qualityprofiles"
    OPERATIONS = {
        "activate_rule": QualityprofilesActivateRuleOption,
        "add_group": QualityprofilesAddGroupOption,
        "add_project": QualityprofilesAddProjectOption,
        "add_user": QualityprofilesAddUserOption,
        "backup": QualityprofilesProfileOption,
        "change_parent": QualityprofilesChangeParentOption,
        "changelog": QualityprofilesChangelogOption,
        "compare": QualityprofilesCompareOption,
        "copy": QualityprofilesCopyOption,
        "create": QualityprofilesCreateOption,
        "deactivate_rule": QualityprofilesDeactivateRuleOption,
        "delete": QualityprofilesProfileOption,
        "export": QualityprofilesProfileOption,
        "exporters": None,
        "importers": None,
        "inheritance": QualityprofilesProfileOption,
        "projects": QualityprofilesProjectsOption,
        "remove_group": QualityprofilesAddGroupOption,
        "remove_project": QualityprofilesAddProjectOption,
        "remove_user": QualityprofilesAddUserOption,
        "rename": QualityprofilesRenameOption,
        "restore": QualityprofilesRestoreOption,
        "search": QualityprofilesSearchOption,
        "search_groups": QualityprofilesSearchGroupsOption,
        "search_users": QualityprofilesSearchUsersOption,
        "set_default": QualityprofilesProfileOption,
        "show": QualityprofilesShowOption,
    }

    # Validators

    def validate_activate_rule_opt(self, opt: Optional[QualityprofilesActivateRuleOption]) -> None:
        """Validates a rule activation, impacts and severity can't be both overridden"""
        v.validate_options(opt, QualityprofilesActivateRuleOption)
        v.validate_required(opt.key, "Key")
        v.validate_required(opt.rule, "Rule")
        if opt.impacts and opt.severity:
            raise InvalidValue(QualityprofilesActivateRuleOption.__name__, "cannot set both Impacts and Severity")
        v.is_value_authorized(opt.severity, SEVERITIES, "Severity")
        v.validate_map_keys(opt.impacts, IMPACT_SOFTWARE_QUALITIES, "Impacts")
        v.validate_map_values(opt.impacts, IMPACT_SEVERITIES, "Impacts")

    def validate_add_group_opt(self, opt: Optional[QualityprofilesAddGroupOption]) -> None:
        v.validate_options(opt, QualityprofilesAddGroupOption)
        v.validate_required(opt.group, "Group")
        _profile(opt)

    def validate_add_project_opt(self, opt: Optional[QualityprofilesAddProjectOption]) -> None:
        v.validate_options(opt, QualityprofilesAddProjectOption)
        _language(opt.language)
        v.validate_required(opt.project, "Project")
        v.validate_required(opt.quality_profile, "QualityProfile")

    def validate_add_user_opt(self, opt: Optional[QualityprofilesAddUserOption]) -> None:
        v.validate_options(opt, QualityprofilesAddUserOption)
        _language(opt.language)
        v.validate_required(opt.login, "Login")
        v.validate_required(opt.quality_profile, "QualityProfile")

    def validate_profile_opt(self, opt: Optional[QualityprofilesProfileOption]) -> None:
        """Validates the options of actions on a single profile: backup, delete, inheritance, set_default"""
        v.validate_options(opt, QualityprofilesProfileOption)
        _profile(opt)

    def validate_change_parent_opt(self, opt: Optional[QualityprofilesChangeParentOption]) -> None:
        v.validate_options(opt, QualityprofilesChangeParentOption)
        _profile(opt)

    def validate_changelog_opt(self, opt: Optional[QualityprofilesChangelogOption]) -> None:
        v.validate_options(opt, QualityprofilesChangelogOption)
        opt.validate()
        _profile(opt)
        v.is_value_authorized(opt.filter_mode, CHANGELOG_FILTER_MODES, "FilterMode")

    def validate_compare_opt(self, opt: Optional[QualityprofilesCompareOption]) -> None:
        v.validate_options(opt, QualityprofilesCompareOption)
        v.validate_required(opt.left_key, "LeftKey")
        v.validate_required(opt.right_key, "RightKey")

    def validate_copy_opt(self, opt: Optional[QualityprofilesCopyOption]) -> None:
        v.validate_options(opt, QualityprofilesCopyOption)
        v.validate_required(opt.from_key, "FromKey")
        v.validate_required(opt.to_name, "ToName")
        v.validate_max_length(opt.to_name, MAX_NAME_LENGTH, "ToName")

    def validate_create_opt(self, opt: Optional[QualityprofilesCreateOption]) -> None:
        v.validate_options(opt, QualityprofilesCreateOption)
        _language(opt.language)
        v.validate_required(opt.name, "Name")
        v.validate_max_length(opt.name, MAX_NAME_LENGTH, "Name")

    def validate_deactivate_rule_opt(self, opt: Optional[QualityprofilesDeactivateRuleOption]) -> None:
        v.validate_options(opt, QualityprofilesDeactivateRuleOption)
        v.validate_required(opt.key, "Key")
        v.validate_required(opt.rule, "Rule")

    def validate_export_opt(self, opt: Optional[QualityprofilesProfileOption]) -> None:
        """Validates the export options, the default profile of the language is exported if no name is given"""
        v.validate_options(opt, QualityprofilesProfileOption)
        _language(opt.language)

    def validate_projects_opt(self, opt: Optional[QualityprofilesProjectsOption]) -> None:
        v.validate_options(opt, QualityprofilesProjectsOption)
        opt.validate()
        v.validate_required(opt.key, "Key")
        v.is_value_authorized(opt.selected, SELECTED_FILTERS, "Selected")

    def validate_rename_opt(self, opt: Optional[QualityprofilesRenameOption]) -> None:
        v.validate_options(opt, QualityprofilesRenameOption)
        v.validate_required(opt.key, "Key")
        v.validate_required(opt.name, "Name")
        v.validate_max_length(opt.name, MAX_NAME_LENGTH, "Name")

    def validate_restore_opt(self, opt: Optional[QualityprofilesRestoreOption]) -> None:
        v.validate_options(opt, QualityprofilesRestoreOption)
        v.validate_required(opt.backup, "Backup")

    def validate_search_opt(self, opt: Optional[QualityprofilesSearchOption]) -> None:
        v.validate_options(opt, QualityprofilesSearchOption)
        v.validate_language(opt.language)

    def validate_search_groups_opt(self, opt: Optional[QualityprofilesSearchGroupsOption]) -> None:
        v.validate_options(opt, QualityprofilesSearchGroupsOption)
        opt.validate()
        _profile(opt)
        v.is_value_authorized(opt.selected, SELECTED_FILTERS, "Selected")

    def validate_search_users_opt(self, opt: Optional[QualityprofilesSearchUsersOption]) -> None:
        v.validate_options(opt, QualityprofilesSearchUsersOption)
        opt.validate()
        _profile(opt)
        v.is_value_authorized(opt.selected, SELECTED_FILTERS, "Selected")

    def validate_show_opt(self, opt: Optional[QualityprofilesShowOption]) -> None:
        v.validate_options(opt, QualityprofilesShowOption)
        v.validate_required(opt.key, "Key")

    # Operations

    def activate_rule(self, opt: QualityprofilesActivateRuleOption) -> requests.Response:
        """Activates a rule in a quality profile, or updates its severity, impacts and parameters"""
        self.validate_activate_rule_opt(opt)
        log.debug("Activating rule %s in quality profile %s", opt.rule, opt.key)
        return self._submit("activate_rule", opt)

    def add_group(self, opt: QualityprofilesAddGroupOption) -> requests.Response:
        """Allows a group to edit a quality profile"""
        self.validate_add_group_opt(opt)
        return self._submit("add_group", opt)

    def add_project(self, opt: QualityprofilesAddProjectOption) -> requests.Response:
        """Associates a project with a quality profile"""
        self.validate_add_project_opt(opt)
        return self._submit("add_project", opt)

    def add_user(self, opt: QualityprofilesAddUserOption) -> requests.Response:
        """Allows a user to edit a quality profile"""
        self.validate_add_user_opt(opt)
        return self._submit("add_user", opt)

    def backup(self, opt: QualityprofilesProfileOption) -> tuple[str, requests.Response]:
        """Backs up a quality profile

        :return: The XML backup, as a string, and the HTTP response
        """
        self.validate_profile_opt(opt)
        return self._fetch("GET", "backup", opt, str)

    def change_parent(self, opt: QualityprofilesChangeParentOption) -> requests.Response:
        """Changes the parent of a quality profile, removes the parent if none is given"""
        self.validate_change_parent_opt(opt)
        return self._submit("change_parent", opt)

    def changelog(self, opt: QualityprofilesChangelogOption) -> tuple[dict[str, Any], requests.Response]:
        """Returns the history of changes of a quality profile

        :return: {"events": [...], "paging": {...}} and the HTTP response
        """
        self.validate_changelog_opt(opt)
        return self._fetch("GET", "changelog", opt)

    def compare(self, opt: QualityprofilesCompareOption) -> tuple[dict[str, Any], requests.Response]:
        """Compares two quality profiles

        :return: {"left", "right", "inLeft", "inRight", "modified", "same"} and the HTTP response
        """
        self.validate_compare_opt(opt)
        return self._fetch("GET", "compare", opt)

    def copy(self, opt: QualityprofilesCopyOption) -> tuple[dict[str, Any], requests.Response]:
        """Copies a quality profile into a new one"""
        self.validate_copy_opt(opt)
        log.info("Copying quality profile %s into '%s'", opt.from_key, opt.to_name)
        return self._fetch("POST", "copy", opt)

    def create(self, opt: QualityprofilesCreateOption) -> tuple[dict[str, Any], requests.Response]:
        """Creates a quality profile

        :return: {"profile": {...}, "warnings": [...]} and the HTTP response
        """
        self.validate_create_opt(opt)
        log.info("Creating %s quality profile '%s'", opt.language, opt.name)
        return self._fetch("POST", "create", opt)

    def deactivate_rule(self, opt: QualityprofilesDeactivateRuleOption) -> requests.Response:
        self.validate_deactivate_rule_opt(opt)
        log.debug("Deactivating rule %s in quality profile %s", opt.rule, opt.key)
        return self._submit("deactivate_rule", opt)

    def delete(self, opt: QualityprofilesProfileOption) -> requests.Response:
        """Deletes a quality profile and all its descendants"""
        self.validate_profile_opt(opt)
        log.info("Deleting %s quality profile '%s'", opt.language, opt.quality_profile)
        return self._submit("delete", opt)

    def export(self, opt: QualityprofilesProfileOption) -> tuple[str, requests.Response]:
        """Exports a quality profile

        :return: The exported profile, as a string, and the HTTP response
        """
        self.validate_export_opt(opt)
        return self._fetch("GET", "export", opt, str)

    def exporters(self) -> tuple[dict[str, Any], requests.Response]:
        """Lists the supported quality profile export formats"""
        return self._fetch("GET", "exporters")

    def importers(self) -> tuple[dict[str, Any], requests.Response]:
        """Lists the supported quality profile importers"""
        return self._fetch("GET", "importers")

    def inheritance(self, opt: QualityprofilesProfileOption) -> tuple[dict[str, Any], requests.Response]:
        """Shows the ancestors and children of a quality profile

        :return: {"profile", "ancestors", "children"} and the HTTP response
        """
        self.validate_profile_opt(opt)
        return self._fetch("GET", "inheritance", opt)

    def projects(self, opt: QualityprofilesProjectsOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the projects associated (or not) with a quality profile"""
        self.validate_projects_opt(opt)
        return self._fetch("GET", "projects", opt)

    def remove_group(self, opt: QualityprofilesAddGroupOption) -> requests.Response:
        self.validate_add_group_opt(opt)
        return self._submit("remove_group", opt)

    def remove_project(self, opt: QualityprofilesAddProjectOption) -> requests.Response:
        self.validate_add_project_opt(opt)
        return self._submit("remove_project", opt)

    def remove_user(self, opt: QualityprofilesAddUserOption) -> requests.Response:
        self.validate_add_user_opt(opt)
        return self._submit("remove_user", opt)

    def rename(self, opt: QualityprofilesRenameOption) -> requests.Response:
        self.validate_rename_opt(opt)
        log.info("Renaming quality profile %s into '%s'", opt.key, opt.name)
        return self._submit("rename", opt)

    def restore(self, opt: QualityprofilesRestoreOption) -> requests.Response:
        """Restores a quality profile from an XML backup"""
        self.validate_restore_opt(opt)
        return self._submit("restore", opt)

    def search(self, opt: Optional[QualityprofilesSearchOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Searches quality profiles

        :return: {"profiles": [...], "actions": {...}} and the HTTP response
        """
        if opt is None:
            opt = QualityprofilesSearchOption()
        self.validate_search_opt(opt)
        return self._fetch("GET", "search", opt)

    def search_groups(self, opt: QualityprofilesSearchGroupsOption) -> tuple[dict[str, Any], requests.Response]:
        self.validate_search_groups_opt(opt)
        return self._fetch("GET", "search_groups", opt)

    def search_users(self, opt: QualityprofilesSearchUsersOption) -> tuple[dict[str, Any], requests.Response]:
        self.validate_search_users_opt(opt)
        return self._fetch("GET", "search_users", opt)

    def set_default(self, opt: QualityprofilesProfileOption) -> requests.Response:
        """Sets a quality profile as the default one of its language"""
        self.validate_profile_opt(opt)
        log.info("Setting %s quality profile '%s' as default", opt.language, opt.quality_profile)
        return self._submit("set_default", opt)

    def show(self, opt: QualityprofilesShowOption) -> tuple[dict[str, Any], requests.Response]:
        """Shows a quality profile

        :return: {"profile": {...}, "compareToSonarWay": {...}} and the HTTP response
        """
        self.validate_show_opt(opt)
        return self._fetch("GET", "show", opt)
