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

"""api/alm_settings: DevOps platform settings"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.options import param
from sonarclient.services.base import Service

MAX_ALM_KEY_LENGTH = 200
MAX_ALM_URL_LENGTH = 2000
MAX_PERSONAL_ACCESS_TOKEN_LENGTH = 2000
MAX_GITHUB_APP_ID_LENGTH = 80
MAX_GITHUB_CLIENT_ID_LENGTH = 80
MAX_GITHUB_CLIENT_SECRET_LENGTH = 160
MAX_GITHUB_PRIVATE_KEY_LENGTH = 2500
MAX_GITHUB_WEBHOOK_SECRET_LENGTH = 160
MAX_BBC_CLIENT_ID_LENGTH = 2000
MAX_BBC_CLIENT_SECRET_LENGTH = 2000
MAX_BBC_CLIENT_ID_UPDATE_LENGTH = 80
MAX_BBC_CLIENT_SECRET_UPDATE_LENGTH = 160
MAX_BBC_WORKSPACE_UPDATE_LENGTH = 80


@dataclass
class AlmSettingsCountBindingOption:
    alm_setting: str = param("almSetting")


@dataclass
class AlmSettingsCreatePatOption:
    """Options to create an Azure DevOps, Bitbucket Server or GitLab setting"""

    key: str = param("key")
    personal_access_token: str = param("personalAccessToken")
    url: str = param("url")


@dataclass
class AlmSettingsCreateBitbucketCloudOption:
    client_id: str = param("clientId")
    client_secret: str = param("clientSecret")
    key: str = param("key")
    workspace: str = param("workspace")


@dataclass
class AlmSettingsCreateGithubOption:
    app_id: str = param("appId")
    client_id: str = param("clientId")
    client_secret: str = param("clientSecret")
    key: str = param("key")
    private_key: str = param("privateKey")
    url: str = param("url")
    webhook_secret: str = param("webhookSecret")


@dataclass
class AlmSettingsDeleteOption:
    key: str = param("key")


@dataclass
class AlmSettingsGetBindingOption:
    project: str = param("project")


@dataclass
class AlmSettingsListOption:
    project: str = param("project")


@dataclass
class AlmSettingsUpdatePatOption:
    """Options to update an Azure DevOps, Bitbucket Server or GitLab setting"""

    key: str = param("key")
    new_key: str = param("newKey")
    personal_access_token: str = param("personalAccessToken")
    url: str = param("url")


@dataclass
class AlmSettingsUpdateBitbucketCloudOption:
    client_id: str = param("clientId")
    client_secret: str = param("clientSecret")
    key: str = param("key")
    new_key: str = param("newKey")
    workspace: str = param("workspace")


@dataclass
class AlmSettingsUpdateGithubOption:
    app_id: str = param("appId")
    client_id: str = param("clientId")
    client_secret: str = param("clientSecret")
    key: str = param("key")
    new_key: str = param("newKey")
    private_key: str = param("privateKey")
    url: str = param("url")
    webhook_secret: str = param("webhookSecret")


@dataclass
class AlmSettingsValidateOption:
    key: str = param("key")


def _required(value: str, max_len: int, field: str) -> None:
    v.validate_required(value, field)
    v.validate_max_length(value, max_len, field)


def _optional(value: str, max_len: int, field: str) -> None:
    if value:
        v.validate_max_length(value, max_len, field)


class AlmSettingsService(Service):
    """
    Abstraction of the api/alm_settings web services
    """

    API_ROOT = "alm_settings"
    OPERATIONS = {
        "count_binding": AlmSettingsCountBindingOption,
        "create_azure": AlmSettingsCreatePatOption,
        "create_bitbucket": AlmSettingsCreatePatOption,
        "create_bitbucketcloud": AlmSettingsCreateBitbucketCloudOption,
        "create_github": AlmSettingsCreateGithubOption,
        "create_gitlab": AlmSettingsCreatePatOption,
        "delete": AlmSettingsDeleteOption,
        "get_binding": AlmSettingsGetBindingOption,
        "list": AlmSettingsListOption,
        "list_definitions": None,
        "update_azure": AlmSettingsUpdatePatOption,
        "update_bitbucket": AlmSettingsUpdatePatOption,
        "update_bitbucketcloud": AlmSettingsUpdateBitbucketCloudOption,
        "update_github": AlmSettingsUpdateGithubOption,
        "update_gitlab": AlmSettingsUpdatePatOption,
        "validate": AlmSettingsValidateOption,
    }

    # Validators

    def validate_count_binding_opt(self, opt: Optional[AlmSettingsCountBindingOption]) -> None:
        v.validate_options(opt, AlmSettingsCountBindingOption)
        v.validate_required(opt.alm_setting, "AlmSetting")

    def validate_create_pat_opt(self, opt: Optional[AlmSettingsCreatePatOption]) -> None:
        """Validates the creation options of Azure DevOps, Bitbucket Server and GitLab settings"""
        v.validate_options(opt, AlmSettingsCreatePatOption)
        _required(opt.key, MAX_ALM_KEY_LENGTH, "Key")
        _required(opt.personal_access_token, MAX_PERSONAL_ACCESS_TOKEN_LENGTH, "PersonalAccessToken")
        _required(opt.url, MAX_ALM_URL_LENGTH, "URL")

    def validate_create_bitbucketcloud_opt(self, opt: Optional[AlmSettingsCreateBitbucketCloudOption]) -> None:
        v.validate_options(opt, AlmSettingsCreateBitbucketCloudOption)
        _required(opt.client_id, MAX_BBC_CLIENT_ID_LENGTH, "ClientID")
        _required(opt.client_secret, MAX_BBC_CLIENT_SECRET_LENGTH, "ClientSecret")
        _required(opt.key, MAX_ALM_KEY_LENGTH, "Key")
        v.validate_required(opt.workspace, "Workspace")

    def validate_create_github_opt(self, opt: Optional[AlmSettingsCreateGithubOption]) -> None:
        v.validate_options(opt, AlmSettingsCreateGithubOption)
        _required(opt.app_id, MAX_GITHUB_APP_ID_LENGTH, "AppID")
        _required(opt.client_id, MAX_GITHUB_CLIENT_ID_LENGTH, "ClientID")
        _required(opt.client_secret, MAX_GITHUB_CLIENT_SECRET_LENGTH, "ClientSecret")
        _required(opt.key, MAX_ALM_KEY_LENGTH, "Key")
        _required(opt.private_key, MAX_GITHUB_PRIVATE_KEY_LENGTH, "PrivateKey")
        _required(opt.url, MAX_ALM_URL_LENGTH, "URL")
        _optional(opt.webhook_secret, MAX_GITHUB_WEBHOOK_SECRET_LENGTH, "WebhookSecret")

    def validate_delete_opt(self, opt: Optional[AlmSettingsDeleteOption]) -> None:
        v.validate_options(opt, AlmSettingsDeleteOption)
        v.validate_required(opt.key, "Key")

    def validate_get_binding_opt(self, opt: Optional[AlmSettingsGetBindingOption]) -> None:
        v.validate_options(opt, AlmSettingsGetBindingOption)
        v.validate_required(opt.project, "Project")

    def validate_update_pat_opt(self, opt: Optional[AlmSettingsUpdatePatOption]) -> None:
        """Validates the update options of Azure DevOps, Bitbucket Server and GitLab settings"""
        v.validate_options(opt, AlmSettingsUpdatePatOption)
        _required(opt.key, MAX_ALM_KEY_LENGTH, "Key")
        _optional(opt.new_key, MAX_ALM_KEY_LENGTH, "NewKey")
        _optional(opt.personal_access_token, MAX_PERSONAL_ACCESS_TOKEN_LENGTH, "PersonalAccessToken")
        _required(opt.url, MAX_ALM_URL_LENGTH, "URL")

    def validate_update_bitbucketcloud_opt(self, opt: Optional[AlmSettingsUpdateBitbucketCloudOption]) -> None:
        v.validate_options(opt, AlmSettingsUpdateBitbucketCloudOption)
        _required(opt.client_id, MAX_BBC_CLIENT_ID_UPDATE_LENGTH, "ClientID")
        _optional(opt.client_secret, MAX_BBC_CLIENT_SECRET_UPDATE_LENGTH, "ClientSecret")
        _required(opt.key, MAX_ALM_KEY_LENGTH, "Key")
        _optional(opt.new_key, MAX_ALM_KEY_LENGTH, "NewKey")
        _required(opt.workspace, MAX_BBC_WORKSPACE_UPDATE_LENGTH, "Workspace")

    def validate_update_github_opt(self, opt: Optional[AlmSettingsUpdateGithubOption]) -> None:
        v.validate_options(opt, AlmSettingsUpdateGithubOption)
        _required(opt.app_id, MAX_GITHUB_APP_ID_LENGTH, "AppID")
        _required(opt.client_id, MAX_GITHUB_CLIENT_ID_LENGTH, "ClientID")
        _optional(opt.client_secret, MAX_GITHUB_CLIENT_SECRET_LENGTH, "ClientSecret")
        _required(opt.key, MAX_ALM_KEY_LENGTH, "Key")
        _optional(opt.new_key, MAX_ALM_KEY_LENGTH, "NewKey")
        _optional(opt.private_key, MAX_GITHUB_PRIVATE_KEY_LENGTH, "PrivateKey")
        _required(opt.url, MAX_ALM_URL_LENGTH, "URL")
        _optional(opt.webhook_secret, MAX_GITHUB_WEBHOOK_SECRET_LENGTH, "WebhookSecret")

    def validate_validate_opt(self, opt: Optional[AlmSettingsValidateOption]) -> None:
        v.validate_options(opt, AlmSettingsValidateOption)
        _required(opt.key, MAX_ALM_KEY_LENGTH, "Key")

    # Operations

    def count_binding(self, opt: AlmSettingsCountBindingOption) -> tuple[dict[str, Any], requests.Response]:
        """Counts the projects bound to a DevOps platform setting

        :return: {"key": ..., "projects": <count>} and the HTTP response
        """
        self.validate_count_binding_opt(opt)
        return self._fetch("GET", "count_binding", opt)

    def create_azure(self, opt: AlmSettingsCreatePatOption) -> requests.Response:
        """Creates an Azure DevOps setting"""
        self.validate_create_pat_opt(opt)
        log.info("Creating Azure DevOps setting '%s'", opt.key)
        return self._submit("create_azure", opt)

    def create_bitbucket(self, opt: AlmSettingsCreatePatOption) -> requests.Response:
        """Creates a Bitbucket Server setting"""
        self.validate_create_pat_opt(opt)
        log.info("Creating Bitbucket Server setting '%s'", opt.key)
        return self._submit("create_bitbucket", opt)

    def create_bitbucketcloud(self, opt: AlmSettingsCreateBitbucketCloudOption) -> requests.Response:
        """Creates a Bitbucket Cloud setting"""
        self.validate_create_bitbucketcloud_opt(opt)
        log.info("Creating Bitbucket Cloud setting '%s'", opt.key)
        return self._submit("create_bitbucketcloud", opt)

    def create_github(self, opt: AlmSettingsCreateGithubOption) -> requests.Response:
        """Creates a GitHub setting"""
        self.validate_create_github_opt(opt)
        log.info("Creating GitHub setting '%s'", opt.key)
        return self._submit("create_github", opt)

    def create_gitlab(self, opt: AlmSettingsCreatePatOption) -> requests.Response:
        """Creates a GitLab setting"""
        self.validate_create_pat_opt(opt)
        log.info("Creating GitLab setting '%s'", opt.key)
        return self._submit("create_gitlab", opt)

    def delete(self, opt: AlmSettingsDeleteOption) -> requests.Response:
        """Deletes a DevOps platform setting"""
        self.validate_delete_opt(opt)
        log.info("Deleting DevOps platform setting '%s'", opt.key)
        return self._submit("delete", opt)

    def get_binding(self, opt: AlmSettingsGetBindingOption) -> tuple[dict[str, Any], requests.Response]:
        """Gets the DevOps platform binding of a project"""
        self.validate_get_binding_opt(opt)
        return self._fetch("GET", "get_binding", opt)

    def list(self, opt: Optional[AlmSettingsListOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Lists the DevOps platform settings, optionally those available for a project"""
        return self._fetch("GET", "list", opt)

    def list_definitions(self) -> tuple[dict[str, Any], requests.Response]:
        """Lists the DevOps platform settings definitions, grouped by platform"""
        return self._fetch("GET", "list_definitions")

    def update_azure(self, opt: AlmSettingsUpdatePatOption) -> requests.Response:
        self.validate_update_pat_opt(opt)
        return self._submit("update_azure", opt)

    def update_bitbucket(self, opt: AlmSettingsUpdatePatOption) -> requests.Response:
        self.validate_update_pat_opt(opt)
        return self._submit("update_bitbucket", opt)

    def update_bitbucketcloud(self, opt: AlmSettingsUpdateBitbucketCloudOption) -> requests.Response:
        self.validate_update_bitbucketcloud_opt(opt)
        return self._submit("update_bitbucketcloud", opt)

    def update_github(self, opt: AlmSettingsUpdateGithubOption) -> requests.Response:
        self.validate_update_github_opt(opt)
        return self._submit("update_github", opt)

    def update_gitlab(self, opt: AlmSettingsUpdatePatOption) -> requests.Response:
        self.validate_update_pat_opt(opt)
        return self._submit("update_gitlab", opt)

    def validate(self, opt: AlmSettingsValidateOption) -> tuple[dict[str, Any], requests.Response]:
        """Validates a DevOps platform setting by checking the connectivity and permissions

        :return: {"errors": [{"msg": ...}]} and the HTTP response
        """
        self.validate_validate_opt(opt)
        return self._fetch("GET", "validate", opt)
