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

    SonarQube Web API services, one per API group (api/webhooks, api/qualitygates...)

"""

from sonarclient.services.alm_integrations import AlmIntegrationsService
from sonarclient.services.alm_settings import AlmSettingsService
from sonarclient.services.issues import IssuesService
from sonarclient.services.new_code_periods import NewCodePeriodsService
from sonarclient.services.permissions import PermissionsService
from sonarclient.services.project_analyses import ProjectAnalysesService
from sonarclient.services.project_badges import ProjectBadgesService
from sonarclient.services.qualitygates import QualitygatesService
from sonarclient.services.qualityprofiles import QualityprofilesService
from sonarclient.services.user_groups import UserGroupsService
from sonarclient.services.user_tokens import UserTokensService
from sonarclient.services.users import UsersService
from sonarclient.services.webhooks import WebhooksService

#: Client attribute name -> service class
SERVICES = {
    "alm_integrations": AlmIntegrationsService,
    "alm_settings": AlmSettingsService,
    "issues": IssuesService,
    "new_code_periods": NewCodePeriodsService,
    "permissions": PermissionsService,
    "project_analyses": ProjectAnalysesService,
    "project_badges": ProjectBadgesService,
    "qualitygates": QualitygatesService,
    "qualityprofiles": QualityprofilesService,
    "user_groups": UserGroupsService,
    "user_tokens": UserTokensService,
    "users": UsersService,
    "webhooks": WebhooksService,
}
