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

"""api/project_badges: SVG badges of project measures and quality gate status"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

from sonarclient import validation as v
from sonarclient.options import param
from sonarclient.services.base import Service

BADGE_METRICS = frozenset(
    (
        "coverage",
        "duplicated_lines_density",
        "ncloc",
        "alert_status",
        "security_hotspots",
        "bugs",
        "code_smells",
        "vulnerabilities",
        "sqale_rating",
        "reliability_rating",
        "security_rating",
        "sqale_index",
        "software_quality_reliability_issues",
        "software_quality_maintainability_issues",
        "software_quality_security_issues",
        "software_quality_maintainability_rating",
        "software_quality_reliability_rating",
        "software_quality_security_rating",
        "software_quality_maintainability_remediation_effort",
    )
)


@dataclass
class ProjectBadgesMeasureOption:
    branch: str = param("branch")
    metric: str = param("metric")
    project: str = param("project")
    token: str = param("token")


@dataclass
class ProjectBadgesQualityGateOption:
    branch: str = param("branch")
    project: str = param("project")
    token: str = param("token")


@dataclass
class ProjectBadgesTokenOption:
    project: str = param("project")


class ProjectBadgesService(Service):
    """
    Abstraction of the api/project_badges web services
    """

    API_ROOT = "project_badges"
    OPERATIONS = {
        "measure": ProjectBadgesMeasureOption,
        "quality_gate": ProjectBadgesQualityGateOption,
        "renew_token": ProjectBadgesTokenOption,
        "token": ProjectBadgesTokenOption,
    }

    def validate_measure_opt(self, opt: Optional[ProjectBadgesMeasureOption]) -> None:
        v.validate_options(opt, ProjectBadgesMeasureOption)
        v.validate_required(opt.project, "Project")
        v.validate_required(opt.metric, "Metric")
        v.is_value_authorized(opt.metric, BADGE_METRICS, "Metric")

    def validate_quality_gate_opt(self, opt: Optional[ProjectBadgesQualityGateOption]) -> None:
        v.validate_options(opt, ProjectBadgesQualityGateOption)
        v.validate_required(opt.project, "Project")

    def validate_token_opt(self, opt: Optional[ProjectBadgesTokenOption]) -> None:
        v.validate_options(opt, ProjectBadgesTokenOption)
        v.validate_required(opt.project, "Project")

    def measure(self, opt: ProjectBadgesMeasureOption) -> tuple[str, requests.Response]:
        """Generates the SVG badge of a project measure

        :return: The SVG image, as a string, and the HTTP response
        """
        self.validate_measure_opt(opt)
        return self._fetch("GET", "measure", opt, str)

    def quality_gate(self, opt: ProjectBadgesQualityGateOption) -> tuple[str, requests.Response]:
        """Generates the SVG badge of a project quality gate status"""
        self.validate_quality_gate_opt(opt)
        return self._fetch("GET", "quality_gate", opt, str)

    def renew_token(self, opt: ProjectBadgesTokenOption) -> requests.Response:
        """Creates a new token for the project badges, the previous one becomes invalid"""
        self.validate_token_opt(opt)
        return self._submit("renew_token", opt)

    def token(self, opt: ProjectBadgesTokenOption) -> tuple[dict[str, Any], requests.Response]:
        """Returns the token to access the badges of a private project

        :return: {"token": ...} and the HTTP response
        """
        self.validate_token_opt(opt)
        return self._fetch("GET", "token", opt)
