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

"""api/issues: search, triage and synchronization of issues"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.exceptions import MissingRequired
from sonarclient.options import param, PaginationArgs
from sonarclient.services.base import Service
from sonarclient.services.qualityprofiles import SEVERITIES, IMPACT_SEVERITIES, IMPACT_SOFTWARE_QUALITIES

MAX_AUTHORS_PAGE_SIZE = 100

ISSUE_TYPES = frozenset(("BUG", "VULNERABILITY", "CODE_SMELL"))
STATUSES = frozenset(("OPEN", "CONFIRMED", "REOPENED", "RESOLVED", "CLOSED", "ACCEPTED", "FALSE_POSITIVE", "FIXED"))
RESOLUTIONS = frozenset(("FALSE-POSITIVE", "WONTFIX", "FIXED", "REMOVED", "ACCEPTED"))
TRANSITIONS = frozenset(("confirm", "unconfirm", "reopen", "resolve", "falsepositive", "wontfix", "accept", "close"))
SCOPES = frozenset(("MAIN", "TEST"))
CLEAN_CODE_ATTRIBUTE_CATEGORIES = frozenset(("ADAPTABLE", "CONSISTENT", "INTENTIONAL", "RESPONSIBLE"))
OWASP_TOP10 = frozenset(f"a{i}" for i in range(1, 11))
OWASP_MOBILE_TOP10 = frozenset(f"m{i}" for i in range(1, 11))
SANS_TOP25 = frozenset(("insecure-interaction", "risky-resource", "porous-defenses"))


@dataclass
class IssuesCommentOption:
    """Adds a comment to an issue"""

    issue: str = param("issue")
    text: str = param("text")


@dataclass
class IssuesEditCommentOption:
    comment: str = param("comment")
    text: str = param("text")


@dataclass
class IssuesDeleteCommentOption:
    comment: str = param("comment")


@dataclass
class IssuesProjectOption:
    """Designates a project, for anticipated transitions"""

    project_key: str = param("projectKey")


@dataclass
class IssuesAssignOption:
    assignee: str = param("assignee")
    issue: str = param("issue")


@dataclass
class IssuesAuthorsOption:
    page_size: int = param("ps", 0)
    project: str = param("project")
    query: str = param("q")


@dataclass
class IssuesBulkChangeOption:
    add_tags: list[str] = param("add_tags", comma=True, kind=list)
    assign: str = param("assign")
    comment: str = param("comment")
    do_transition: str = param("do_transition")
    issues: list[str] = param("issues", comma=True, kind=list)
    remove_tags: list[str] = param("remove_tags", comma=True, kind=list)
    send_notifications: Optional[bool] = param("sendNotifications", None)
    set_severity: str = param("set_severity")
    set_type: str = param("set_type")


@dataclass
class IssuesIssueOption:
    """Designates an issue, for its changelog"""

    issue: str = param("issue")


@dataclass
class IssuesComponentTagsOption:
    component_uuid: str = param("componentUuid")
    created_after: str = param("createdAfter")
    page_size: int = param("ps", 0)


@dataclass
class IssuesDoTransitionOption:
    issue: str = param("issue")
    transition: str = param("transition")


@dataclass
class IssuesListOption(PaginationArgs):
    branch: str = param("branch")
    component: str = param("component")
    in_new_code_period: Optional[bool] = param("inNewCodePeriod", None)
    project: str = param("project")
    pull_request: str = param("pullRequest")
    resolved: Optional[bool] = param("resolved", None)
    types: list[str] = param("types", comma=True, kind=list)


@dataclass
class IssuesPullTaintOption:
    branch_name: str = param("branchName")
    changed_since: str = param("changedSince")
    languages: list[str] = param("languages", comma=True, kind=list)
    project_key: str = param("projectKey")


@dataclass
class IssuesPullOption(IssuesPullTaintOption):
    resolved_only: Optional[bool] = param("resolvedOnly", None)
    rule_repositories: list[str] = param("ruleRepositories", comma=True, kind=list)


@dataclass
class IssuesReindexOption:
    project: str = param("project")


@dataclass
class IssuesSearchOption(PaginationArgs):
    additional_fields: list[str] = param("additionalFields", comma=True, kind=list)
    asc: Optional[bool] = param("asc", None)
    assigned: Optional[bool] = param("assigned", None)
    assignees: list[str] = param("assignees", comma=True, kind=list)
    author: str = param("author")
    branch: str = param("branch")
    casa: list[str] = param("casa", comma=True, kind=list)
    clean_code_attribute_categories: list[str] = param("cleanCodeAttributeCategories", comma=True, kind=list)
    code_variants: list[str] = param("codeVariants", comma=True, kind=list)
    compliance_standards: list[str] = param("complianceStandards", comma=True, kind=list)
    components: list[str] = param("components", comma=True, kind=list)
    created_after: str = param("createdAfter")
    created_at: str = param("createdAt")
    created_before: str = param("createdBefore")
    created_in_last: str = param("createdInLast")
    cwe: list[str] = param("cwe", comma=True, kind=list)
    directories: list[str] = param("directories", comma=True, kind=list)
    facets: list[str] = param("facets", comma=True, kind=list)
    files: list[str] = param("files", comma=True, kind=list)
    fixed_in_pull_request: str = param("fixedInPullRequest")
    impact_severities: list[str] = param("impactSeverities", comma=True, kind=list)
    impact_software_qualities: list[str] = param("impactSoftwareQualities", comma=True, kind=list)
    in_new_code_period: Optional[bool] = param("inNewCodePeriod", None)
    issue_statuses: list[str] = param("issueStatuses", comma=True, kind=list)
    issues: list[str] = param("issues", comma=True, kind=list)
    languages: list[str] = param("languages", comma=True, kind=list)
    on_component_only: Optional[bool] = param("onComponentOnly", None)
    owasp_asvs_40: list[str] = param("owaspAsvs-4.0", comma=True, kind=list)
    owasp_asvs_level: int = param("owaspAsvsLevel", 0)
    owasp_mobile_top10_2024: list[str] = param("owaspMobileTop10-2024", comma=True, kind=list)
    owasp_top10: list[str] = param("owaspTop10", comma=True, kind=list)
    owasp_top10_2021: list[str] = param("owaspTop10-2021", comma=True, kind=list)
    pci_dss_32: list[str] = param("pciDss-3.2", comma=True, kind=list)
    pci_dss_40: list[str] = param("pciDss-4.0", comma=True, kind=list)
    prioritized_rule: Optional[bool] = param("prioritizedRule", None)
    projects: list[str] = param("projects", comma=True, kind=list)
    pull_request: str = param("pullRequest")
    resolutions: list[str] = param("resolutions", comma=True, kind=list)
    resolved: Optional[bool] = param("resolved", None)
    rules: list[str] = param("rules", comma=True, kind=list)
    sans_top25: list[str] = param("sansTop25", comma=True, kind=list)
    scopes: list[str] = param("scopes", comma=True, kind=list)
    severities: list[str] = param("severities", comma=True, kind=list)
    sonarsource_security: list[str] = param("sonarsourceSecurity", comma=True, kind=list)
    sort: str = param("s")
    statuses: list[str] = param("statuses", comma=True, kind=list)
    stig_asd_v5r3: list[str] = param("stig-ASD_V5R3", comma=True, kind=list)
    tags: list[str] = param("tags", comma=True, kind=list)
    time_zone: str = param("timeZone")
    types: list[str] = param("types", comma=True, kind=list)


@dataclass
class IssuesSetSeverityOption:
    impact: str = param("impact")
    issue: str = param("issue")
    severity: str = param("severity")


@dataclass
class IssuesSetTagsOption:
    issue: str = param("issue")
    tags: list[str] = param("tags", comma=True, kind=list)


@dataclass
class IssuesSetTypeOption:
    issue: str = param("issue")
    type: str = param("type")


@dataclass
class IssuesTagsOption:
    all: Optional[bool] = param("all", None)
    branch: str = param("branch")
    page_size: int = param("ps", 0)
    project: str = param("project")
    query: str = param("q")


def _validate_page_size(page_size: int, max_page_size: int) -> None:
    if page_size != 0:
        v.validate_range(page_size, v.MIN_PAGE_SIZE, max_page_size, "PageSize")


class IssuesService(Service):
    """
    Abstraction of the api/issues web services
    """

    API_ROOT = "issues"
    OPERATIONS = {
        "add_comment": IssuesCommentOption,
        "anticipated_transitions": IssuesProjectOption,
        "assign": IssuesAssignOption,
        "authors": IssuesAuthorsOption,
        "bulk_change": IssuesBulkChangeOption,
        "changelog": IssuesIssueOption,
        "component_tags": IssuesComponentTagsOption,
        "delete_comment": IssuesDeleteCommentOption,
        "do_transition": IssuesDoTransitionOption,
        "edit_comment": IssuesEditCommentOption,
        "list": IssuesListOption,
        "pull": IssuesPullOption,
        "pull_taint": IssuesPullTaintOption,
        "reindex": IssuesReindexOption,
        "search": IssuesSearchOption,
        "set_severity": IssuesSetSeverityOption,
        "set_tags": IssuesSetTagsOption,
        "set_type": IssuesSetTypeOption,
        "tags": IssuesTagsOption,
    }

    def validate_add_comment_opt(self, opt: Optional[IssuesCommentOption]) -> None:
        v.validate_options(opt, IssuesCommentOption)
        v.validate_required(opt.issue, "Issue")
        v.validate_required(opt.text, "Text")

    def validate_anticipated_transitions_opt(self, opt: Optional[IssuesProjectOption]) -> None:
        v.validate_options(opt, IssuesProjectOption)
        v.validate_required(opt.project_key, "ProjectKey")

    def validate_assign_opt(self, opt: Optional[IssuesAssignOption]) -> None:
        v.validate_options(opt, IssuesAssignOption)
        v.validate_required(opt.issue, "Issue")

    def validate_authors_opt(self, opt: Optional[IssuesAuthorsOption]) -> None:
        v.validate_options(opt, IssuesAuthorsOption)
        _validate_page_size(opt.page_size, MAX_AUTHORS_PAGE_SIZE)

    def validate_bulk_change_opt(self, opt: Optional[IssuesBulkChangeOption]) -> None:
        v.validate_options(opt, IssuesBulkChangeOption)
        if len(opt.issues) == 0:
            raise MissingRequired("Issues", "is required")
        v.is_value_authorized(opt.set_severity, SEVERITIES, "SetSeverity")
        v.is_value_authorized(opt.set_type, ISSUE_TYPES, "SetType")
        v.is_value_authorized(opt.do_transition, TRANSITIONS, "DoTransition")

    def validate_changelog_opt(self, opt: Optional[IssuesIssueOption]) -> None:
        v.validate_options(opt, IssuesIssueOption)
        v.validate_required(opt.issue, "Issue")

    def validate_component_tags_opt(self, opt: Optional[IssuesComponentTagsOption]) -> None:
        v.validate_options(opt, IssuesComponentTagsOption)
        v.validate_required(opt.component_uuid, "ComponentUuid")

    def validate_delete_comment_opt(self, opt: Optional[IssuesDeleteCommentOption]) -> None:
        v.validate_options(opt, IssuesDeleteCommentOption)
        v.validate_required(opt.comment, "Comment")

    def validate_do_transition_opt(self, opt: Optional[IssuesDoTransitionOption]) -> None:
        v.validate_options(opt, IssuesDoTransitionOption)
        v.validate_required(opt.issue, "Issue")
        v.validate_required(opt.transition, "Transition")
        v.is_value_authorized(opt.transition, TRANSITIONS, "Transition")

    def validate_edit_comment_opt(self, opt: Optional[IssuesEditCommentOption]) -> None:
        v.validate_options(opt, IssuesEditCommentOption)
        v.validate_required(opt.comment, "Comment")
        v.validate_required(opt.text, "Text")

    def validate_list_opt(self, opt: Optional[IssuesListOption]) -> None:
        v.validate_options(opt, IssuesListOption)
        if not opt.project and not opt.component:
            raise MissingRequired("Project", "either Project or Component is required")
        opt.validate()
        v.are_values_authorized(opt.types, ISSUE_TYPES, "Types")

    def validate_pull_opt(self, opt: Optional[IssuesPullTaintOption]) -> None:
        """Validates the issues and taint vulnerabilities pulls"""
        v.validate_options(opt, IssuesPullTaintOption)
        v.validate_required(opt.project_key, "ProjectKey")
        v.validate_languages(opt.languages)

    def validate_reindex_opt(self, opt: Optional[IssuesReindexOption]) -> None:
        v.validate_options(opt, IssuesReindexOption)
        v.validate_required(opt.project, "Project")

    def validate_search_opt(self, opt: Optional[IssuesSearchOption]) -> None:
        """Validates the search filters that only accept enumerated values"""
        v.validate_options(opt, IssuesSearchOption)
        opt.validate()
        v.are_values_authorized(opt.impact_severities, IMPACT_SEVERITIES, "ImpactSeverities")
        v.are_values_authorized(opt.impact_software_qualities, IMPACT_SOFTWARE_QUALITIES, "ImpactSoftwareQualities")
        v.are_values_authorized(opt.clean_code_attribute_categories, CLEAN_CODE_ATTRIBUTE_CATEGORIES, "CleanCodeAttributeCategories")
        v.are_values_authorized(opt.severities, SEVERITIES, "Severities")
        v.are_values_authorized(opt.types, ISSUE_TYPES, "Types")
        v.are_values_authorized(opt.statuses, STATUSES, "Statuses")
        v.are_values_authorized(opt.issue_statuses, STATUSES, "IssueStatuses")
        v.are_values_authorized(opt.resolutions, RESOLUTIONS, "Resolutions")
        v.are_values_authorized(opt.scopes, SCOPES, "Scopes")
        v.validate_languages(opt.languages)
        v.are_values_authorized(opt.owasp_top10, OWASP_TOP10, "OwaspTop10")
        v.are_values_authorized(opt.owasp_top10_2021, OWASP_TOP10, "OwaspTop102021")
        v.are_values_authorized(opt.owasp_mobile_top10_2024, OWASP_MOBILE_TOP10, "OwaspMobileTop102024")
        v.are_values_authorized(opt.sans_top25, SANS_TOP25, "SansTop25")

    def validate_set_severity_opt(self, opt: Optional[IssuesSetSeverityOption]) -> None:
        v.validate_options(opt, IssuesSetSeverityOption)
        v.validate_required(opt.issue, "Issue")
        v.is_value_authorized(opt.severity, SEVERITIES, "Severity")

    def validate_set_tags_opt(self, opt: Optional[IssuesSetTagsOption]) -> None:
        v.validate_options(opt, IssuesSetTagsOption)
        v.validate_required(opt.issue, "Issue")

    def validate_set_type_opt(self, opt: Optional[IssuesSetTypeOption]) -> None:
        v.validate_options(opt, IssuesSetTypeOption)
        v.validate_required(opt.issue, "Issue")
        v.validate_required(opt.type, "Type")
        v.is_value_authorized(opt.type, ISSUE_TYPES, "Type")

    def validate_tags_opt(self, opt: Optional[IssuesTagsOption]) -> None:
        v.validate_options(opt, IssuesTagsOption)
        _validate_page_size(opt.page_size, v.MAX_PAGE_SIZE)

    def add_comment(self, opt: IssuesCommentOption) -> tuple[dict[str, Any], requests.Response]:
        """Adds a comment to an issue

        :return: {"issue": {...}, "components": [...], "rules": [...], "users": [...]} and the HTTP response
        """
        self.validate_add_comment_opt(opt)
        return self._fetch("POST", "add_comment", opt)

    def anticipated_transitions(self, opt: IssuesProjectOption) -> requests.Response:
        """Receives issue transitions anticipated by SonarLint before the next analysis"""
        self.validate_anticipated_transitions_opt(opt)
        return self._submit("anticipated_transitions", opt)

    def assign(self, opt: IssuesAssignOption) -> tuple[dict[str, Any], requests.Response]:
        """Assigns an issue, or unassigns it if no assignee is given"""
        self.validate_assign_opt(opt)
        log.info("Assigning issue %s to '%s'", opt.issue, opt.assignee)
        return self._fetch("POST", "assign", opt)

    def authors(self, opt: Optional[IssuesAuthorsOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Searches SCM accounts that authored issues

        :return: {"authors": [...]} and the HTTP response
        """
        if opt is None:
            opt = IssuesAuthorsOption()
        self.validate_authors_opt(opt)
        return self._fetch("GET", "authors", opt)

    def bulk_change(self, opt: IssuesBulkChangeOption) -> tuple[dict[str, Any], requests.Response]:
        """Applies the same changes to a list of issues

        :return: {"total", "success", "ignored", "failures"} and the HTTP response
        """
        self.validate_bulk_change_opt(opt)
        log.info("Bulk changing %d issues", len(opt.issues))
        return self._fetch("POST", "bulk_change", opt)

    def changelog(self, opt: IssuesIssueOption) -> tuple[dict[str, Any], requests.Response]:
        """Returns the changelog of an issue

        :return: {"changelog": [...]} and the HTTP response
        """
        self.validate_changelog_opt(opt)
        return self._fetch("GET", "changelog", opt)

    def component_tags(self, opt: IssuesComponentTagsOption) -> tuple[dict[str, Any], requests.Response]:
        self.validate_component_tags_opt(opt)
        return self._fetch("GET", "component_tags", opt)

    def delete_comment(self, opt: IssuesDeleteCommentOption) -> tuple[dict[str, Any], requests.Response]:
        self.validate_delete_comment_opt(opt)
        return self._fetch("POST", "delete_comment", opt)

    def do_transition(self, opt: IssuesDoTransitionOption) -> tuple[dict[str, Any], requests.Response]:
        """Changes the status of an issue with a workflow transition"""
        self.validate_do_transition_opt(opt)
        log.info("Applying transition '%s' to issue %s", opt.transition, opt.issue)
        return self._fetch("POST", "do_transition", opt)

    def edit_comment(self, opt: IssuesEditCommentOption) -> tuple[dict[str, Any], requests.Response]:
        self.validate_edit_comment_opt(opt)
        return self._fetch("POST", "edit_comment", opt)

    def list(self, opt: IssuesListOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the issues of a project or component, lighter than search

        :return: {"issues": [...], "components": [...], "paging": {...}} and the HTTP response
        """
        self.validate_list_opt(opt)
        return self._fetch("GET", "list", opt)

    def pull(self, opt: IssuesPullOption) -> tuple[bytes, requests.Response]:
        """Pulls the issues of a project branch, as a protobuf stream

        :return: The raw protobuf bytes and the HTTP response
        """
        self.validate_pull_opt(opt)
        return self._fetch("GET", "pull", opt, result=bytes)

    def pull_taint(self, opt: IssuesPullTaintOption) -> tuple[bytes, requests.Response]:
        """Pulls the taint vulnerabilities of a project branch, as a protobuf stream"""
        self.validate_pull_opt(opt)
        return self._fetch("GET", "pull_taint", opt, result=bytes)

    def reindex(self, opt: IssuesReindexOption) -> requests.Response:
        """Reindexes the issues of a project"""
        self.validate_reindex_opt(opt)
        log.info("Reindexing issues of project '%s'", opt.project)
        return self._submit("reindex", opt)

    def search(self, opt: Optional[IssuesSearchOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Searches issues, one page

        :return: {"issues": [...], "components": [...], "facets": [...], "paging": {...}} and the HTTP response
        """
        if opt is None:
            opt = IssuesSearchOption()
        self.validate_search_opt(opt)
        return self._fetch("GET", "search", opt)

    def set_severity(self, opt: IssuesSetSeverityOption) -> tuple[dict[str, Any], requests.Response]:
        """Changes the severity of an issue, or one of its impacts"""
        self.validate_set_severity_opt(opt)
        return self._fetch("POST", "set_severity", opt)

    def set_tags(self, opt: IssuesSetTagsOption) -> tuple[dict[str, Any], requests.Response]:
        """Sets the tags of an issue, no tags removes them all"""
        self.validate_set_tags_opt(opt)
        return self._fetch("POST", "set_tags", opt)

    def set_type(self, opt: IssuesSetTypeOption) -> tuple[dict[str, Any], requests.Response]:
        self.validate_set_type_opt(opt)
        return self._fetch("POST", "set_type", opt)

    def tags(self, opt: Optional[IssuesTagsOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Lists the tags used on issues

        :return: {"tags": [...]} and the HTTP response
        """
        if opt is None:
            opt = IssuesTagsOption()
        self.validate_tags_opt(opt)
        return self._fetch("GET", "tags", opt)
