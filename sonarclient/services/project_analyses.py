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

"""api/project_analyses: analyses of a project and their events"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.options import param, PaginationArgs
from sonarclient.services.base import Service

DEFAULT_PAGE_SIZE = 100

EVENT_CATEGORIES = frozenset(("VERSION", "OTHER"))
SEARCH_CATEGORIES = frozenset(("VERSION", "OTHER", "QUALITY_PROFILE", "QUALITY_GATE", "DEFINITION_CHANGE", "SQ_UPGRADE"))


@dataclass
class ProjectAnalysesCreateEventOption:
    analysis: str = param("analysis")
    category: str = param("category")
    name: str = param("name")


@dataclass
class ProjectAnalysesDeleteOption:
    analysis: str = param("analysis")


@dataclass
class ProjectAnalysesDeleteEventOption:
    event: str = param("event")


@dataclass
class ProjectAnalysesSearchOption(PaginationArgs):
    branch: str = param("branch")
    category: str = param("category")
    from_date: str = param("from")
    project: str = param("project")
    pull_request: str = param("pullRequest")
    to_date: str = param("to")


@dataclass
class ProjectAnalysesUpdateEventOption:
    event: str = param("event")
    name: str = param("name")


class ProjectAnalysesService(Service):
    """
    Abstraction of the api/project_analyses web services
    """

    API_ROOT = "project_analyses"
    OPERATIONS = {
        "create_event": ProjectAnalysesCreateEventOption,
        "delete": ProjectAnalysesDeleteOption,
        "delete_event": ProjectAnalysesDeleteEventOption,
        "search": ProjectAnalysesSearchOption,
        "update_event": ProjectAnalysesUpdateEventOption,
    }

    def validate_create_event_opt(self, opt: Optional[ProjectAnalysesCreateEventOption]) -> None:
        v.validate_options(opt, ProjectAnalysesCreateEventOption)
        v.validate_required(opt.analysis, "Analysis")
        v.validate_required(opt.name, "Name")
        v.is_value_authorized(opt.category, EVENT_CATEGORIES, "Category")

    def validate_delete_opt(self, opt: Optional[ProjectAnalysesDeleteOption]) -> None:
        v.validate_options(opt, ProjectAnalysesDeleteOption)
        v.validate_required(opt.analysis, "Analysis")

    def validate_delete_event_opt(self, opt: Optional[ProjectAnalysesDeleteEventOption]) -> None:
        v.validate_options(opt, ProjectAnalysesDeleteEventOption)
        v.validate_required(opt.event, "Event")

    def validate_search_opt(self, opt: Optional[ProjectAnalysesSearchOption]) -> None:
        v.validate_options(opt, ProjectAnalysesSearchOption)
        opt.validate()
        v.validate_required(opt.project, "Project")
        v.is_value_authorized(opt.category, SEARCH_CATEGORIES, "Category")
        v.validate_date_or_datetime(opt.from_date, "From")
        v.validate_date_or_datetime(opt.to_date, "To")

    def validate_update_event_opt(self, opt: Optional[ProjectAnalysesUpdateEventOption]) -> None:
        v.validate_options(opt, ProjectAnalysesUpdateEventOption)
        v.validate_required(opt.event, "Event")
        v.validate_required(opt.name, "Name")

    def create_event(self, opt: ProjectAnalysesCreateEventOption) -> tuple[dict[str, Any], requests.Response]:
        """Creates a VERSION or OTHER event on an analysis

        :return: {"event": {...}} and the HTTP response
        """
        self.validate_create_event_opt(opt)
        return self._fetch("POST", "create_event", opt)

    def delete(self, opt: ProjectAnalysesDeleteOption) -> requests.Response:
        """Deletes a project analysis"""
        self.validate_delete_opt(opt)
        log.info("Deleting analysis %s", opt.analysis)
        return self._submit("delete", opt)

    def delete_event(self, opt: ProjectAnalysesDeleteEventOption) -> requests.Response:
        self.validate_delete_event_opt(opt)
        return self._submit("delete_event", opt)

    def search(self, opt: ProjectAnalysesSearchOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches a project analyses and their events, one page

        :return: {"analyses": [...], "paging": {...}} and the HTTP response
        """
        self.validate_search_opt(opt)
        return self._fetch("GET", "search", opt)

    def search_all(self, opt: ProjectAnalysesSearchOption) -> tuple[list[dict[str, Any]], requests.Response]:
        """Searches all analyses of a project, iterating over all pages from the first one

        The page of the options is ignored. Stops when the number of analyses collected
        reaches the reported total, or when a page comes back empty

        :return: The list of analyses and the HTTP response of the last page
        """
        self.validate_search_opt(opt)
        page_opt = dataclasses.replace(opt, page=1, page_size=opt.page_size or DEFAULT_PAGE_SIZE)
        analyses = []
        while True:
            data, r = self._fetch("GET", "search", page_opt)
            page = data.get("analyses", [])
            analyses += page
            total = data.get("paging", {}).get("total", 0)
            log.debug("Project '%s' analyses page %d: %d/%d analyses", opt.project, page_opt.page, len(analyses), total)
            if len(page) == 0 or len(analyses) >= total:
                return analyses, r
            page_opt.page += 1

    def update_event(self, opt: ProjectAnalysesUpdateEventOption) -> tuple[dict[str, Any], requests.Response]:
        self.validate_update_event_opt(opt)
        return self._fetch("POST", "update_event", opt)
