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

"""api/new_code_periods"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.exceptions import MissingRequired, InvalidValue
from sonarclient.options import param
from sonarclient.services.base import Service

SPECIFIC_ANALYSIS = "SPECIFIC_ANALYSIS"
PREVIOUS_VERSION = "PREVIOUS_VERSION"
NUMBER_OF_DAYS = "NUMBER_OF_DAYS"
REFERENCE_BRANCH = "REFERENCE_BRANCH"
NEW_CODE_PERIOD_TYPES = frozenset((SPECIFIC_ANALYSIS, PREVIOUS_VERSION, NUMBER_OF_DAYS, REFERENCE_BRANCH))


@dataclass
class NewCodePeriodsListOption:
    project: str = param("project")


@dataclass
class NewCodePeriodsSetOption:
    branch: str = param("branch")
    project: str = param("project")
    type: str = param("type")
    value: str = param("value")


@dataclass
class NewCodePeriodsShowOption:
    branch: str = param("branch")
    project: str = param("project")


@dataclass
class NewCodePeriodsUnsetOption:
    branch: str = param("branch")
    project: str = param("project")


class NewCodePeriodsService(Service):
    """
    Abstraction of the api/new_code_periods web services
    New code periods can be set globally, per project or per branch
    """

    API_ROOT = "new_code_periods"
    OPERATIONS = {
        "list": NewCodePeriodsListOption,
        "set": NewCodePeriodsSetOption,
        "show": NewCodePeriodsShowOption,
        "unset": NewCodePeriodsUnsetOption,
    }

    def validate_list_opt(self, opt: Optional[NewCodePeriodsListOption]) -> None:
        v.validate_options(opt, NewCodePeriodsListOption)
        v.validate_required(opt.project, "Project")

    def validate_set_opt(self, opt: Optional[NewCodePeriodsSetOption]) -> None:
        """Validates the new code period type, and the fields each type requires"""
        v.validate_options(opt, NewCodePeriodsSetOption)
        v.validate_required(opt.type, "Type")
        v.is_value_authorized(opt.type, NEW_CODE_PERIOD_TYPES, "Type")
        if opt.type == PREVIOUS_VERSION:
            if opt.value:
                raise InvalidValue("Value", f"should not be provided when Type is {PREVIOUS_VERSION}")
        elif opt.type == NUMBER_OF_DAYS and not opt.value:
            raise MissingRequired("Value", f"is required when Type is {NUMBER_OF_DAYS}")
        elif opt.type == SPECIFIC_ANALYSIS and not opt.branch:
            raise MissingRequired("Branch", f"is required when Type is {SPECIFIC_ANALYSIS}")
        elif opt.type == REFERENCE_BRANCH and not opt.project:
            raise MissingRequired("Project", f"is required when Type is {REFERENCE_BRANCH}")

    def list(self, opt: NewCodePeriodsListOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the new code periods of all branches of a project

        :return: {"newCodePeriods": [...]} and the HTTP response
        """
        self.validate_list_opt(opt)
        return self._fetch("GET", "list", opt)

    def set(self, opt: NewCodePeriodsSetOption) -> requests.Response:
        """Sets the new code period, globally if neither project nor branch is set"""
        self.validate_set_opt(opt)
        log.info("Setting new code period %s/%s for project '%s' branch '%s'", opt.type, opt.value, opt.project, opt.branch)
        return self._submit("set", opt)

    def show(self, opt: Optional[NewCodePeriodsShowOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Shows the new code period, the global one if no project is given

        :return: {"projectKey", "branchKey", "type", "value", "inherited"} and the HTTP response
        """
        return self._fetch("GET", "show", opt)

    def unset(self, opt: Optional[NewCodePeriodsUnsetOption] = None) -> requests.Response:
        """Unsets the new code period, which then falls back to the upper level setting"""
        return self._submit("unset", opt)
