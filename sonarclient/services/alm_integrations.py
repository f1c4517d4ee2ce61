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

"""api/alm_integrations: import repositories of DevOps platforms as SonarQube projects"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.exceptions import MissingRequired, InvalidValue
from sonarclient.options import param
from sonarclient.services.base import Service

MAX_ALM_SETTING_KEY_LENGTH = 200
MAX_PAT_LENGTH = 2000
MAX_USERNAME_LENGTH = 2000
MAX_GITHUB_REPO_KEY_LENGTH = 256
MAX_PAGE_SIZE_ALM_INTEGRATIONS = 100

NCD_PREVIOUS_VERSION = "PREVIOUS_VERSION"
NCD_NUMBER_OF_DAYS = "NUMBER_OF_DAYS"
NCD_REFERENCE_BRANCH = "REFERENCE_BRANCH"
NEW_CODE_DEFINITION_TYPES = frozenset((NCD_PREVIOUS_VERSION, NCD_NUMBER_OF_DAYS, NCD_REFERENCE_BRANCH))


@dataclass
class AlmIntegrationsCheckPatOption:
    alm_setting: str = param("almSetting")


@dataclass
class AlmIntegrationsGetGithubClientIdOption:
    alm_setting: str = param("almSetting")


@dataclass
class AlmIntegrationsImportAzureProjectOption:
    alm_setting: str = param("almSetting")
    new_code_definition_type: str = param("newCodeDefinitionType")
    new_code_definition_value: str = param("newCodeDefinitionValue")
    project_name: str = param("projectName")
    repository_name: str = param("repositoryName")


@dataclass
class AlmIntegrationsImportBitbucketCloudRepoOption:
    alm_setting: str = param("almSetting")
    new_code_definition_type: str = param("newCodeDefinitionType")
    new_code_definition_value: str = param("newCodeDefinitionValue")
    repository_slug: str = param("repositorySlug")


@dataclass
class AlmIntegrationsImportBitbucketServerProjectOption:
    alm_setting: str = param("almSetting")
    new_code_definition_type: str = param("newCodeDefinitionType")
    new_code_definition_value: str = param("newCodeDefinitionValue")
    project_key: str = param("projectKey")
    repository_slug: str = param("repositorySlug")


@dataclass
class AlmIntegrationsImportGithubProjectOption:
    alm_setting: str = param("almSetting")
    new_code_definition_type: str = param("newCodeDefinitionType")
    new_code_definition_value: str = param("newCodeDefinitionValue")
    repository_key: str = param("repositoryKey")


@dataclass
class AlmIntegrationsImportGitlabProjectOption:
    alm_setting: str = param("almSetting")
    gitlab_project_id: str = param("gitlabProjectId")
    new_code_definition_type: str = param("newCodeDefinitionType")
    new_code_definition_value: str = param("newCodeDefinitionValue")


@dataclass
class AlmIntegrationsListAzureProjectsOption:
    alm_setting: str = param("almSetting")


@dataclass
class AlmIntegrationsListBitbucketServerProjectsOption:
    alm_setting: str = param("almSetting")
    page_size: int = param("pageSize", 0)
    start: int = param("start", 0)


@dataclass
class AlmIntegrationsListGithubOrganizationsOption:
    alm_setting: str = param("almSetting")
    p: int = param("p", 0)
    ps: int = param("ps", 0)
    token: str = param("token")


@dataclass
class AlmIntegrationsListGithubRepositoriesOption:
    alm_setting: str = param("almSetting")
    organization: str = param("organization")
    p: int = param("p", 0)
    ps: int = param("ps", 0)
    q: str = param("q")


@dataclass
class AlmIntegrationsSearchAzureReposOption:
    alm_setting: str = param("almSetting")
    project_name: str = param("projectName")
    search_query: str = param("searchQuery")


@dataclass
class AlmIntegrationsSearchBitbucketCloudReposOption:
    alm_setting: str = param("almSetting")
    p: int = param("p", 0)
    ps: int = param("ps", 0)
    repository_name: str = param("repositoryName")


@dataclass
class AlmIntegrationsSearchBitbucketServerReposOption:
    alm_setting: str = param("almSetting")
    page_size: int = param("pageSize", 0)
    project_name: str = param("projectName")
    repository_name: str = param("repositoryName")
    start: int = param("start", 0)


@dataclass
class AlmIntegrationsSearchGitlabReposOption:
    alm_setting: str = param("almSetting")
    p: int = param("p", 0)
    project_name: str = param("projectName")
    ps: int = param("ps", 0)


@dataclass
class AlmIntegrationsSetPatOption:
    alm_setting: str = param("almSetting")
    pat: str = param("pat")
    username: str = param("username")


def validate_new_code_definition(definition_type: Optional[str], definition_value: Optional[str]) -> None:
    """Validates the new code definition of an imported project

    NUMBER_OF_DAYS requires a value, PREVIOUS_VERSION and REFERENCE_BRANCH must not have one
    """
    if not definition_type:
        return
    v.is_value_authorized(definition_type, NEW_CODE_DEFINITION_TYPES, "NewCodeDefinitionType")
    if definition_type == NCD_NUMBER_OF_DAYS and not definition_value:
        raise MissingRequired("NewCodeDefinitionValue", f"is required when NewCodeDefinitionType is {NCD_NUMBER_OF_DAYS}")
    if definition_type in (NCD_PREVIOUS_VERSION, NCD_REFERENCE_BRANCH) and definition_value:
        raise InvalidValue("NewCodeDefinitionValue", f"should not be provided when NewCodeDefinitionType is {definition_type}")


def _required_key(value: str, field: str, max_len: int = MAX_ALM_SETTING_KEY_LENGTH) -> None:
    v.validate_required(value, field)
    v.validate_max_length(value, max_len, field)


def _optional_key(value: str, field: str, max_len: int = MAX_ALM_SETTING_KEY_LENGTH) -> None:
    if value:
        v.validate_max_length(value, max_len, field)


def _page_size(value: int, field: str) -> None:
    if value != 0:
        v.validate_range(value, v.MIN_PAGE_SIZE, MAX_PAGE_SIZE_ALM_INTEGRATIONS, field)


class AlmIntegrationsService(Service):
    """
    Abstraction of the api/alm_integrations web services
    """

    API_ROOT = "alm_integrations"
    OPERATIONS = {
        "check_pat": AlmIntegrationsCheckPatOption,
        "get_github_client_id": AlmIntegrationsGetGithubClientIdOption,
        "import_azure_project": AlmIntegrationsImportAzureProjectOption,
        "import_bitbucketcloud_repo": AlmIntegrationsImportBitbucketCloudRepoOption,
        "import_bitbucketserver_project": AlmIntegrationsImportBitbucketServerProjectOption,
        "import_github_project": AlmIntegrationsImportGithubProjectOption,
        "import_gitlab_project": AlmIntegrationsImportGitlabProjectOption,
        "list_azure_projects": AlmIntegrationsListAzureProjectsOption,
        "list_bitbucketserver_projects": AlmIntegrationsListBitbucketServerProjectsOption,
        "list_github_organizations": AlmIntegrationsListGithubOrganizationsOption,
        "list_github_repositories": AlmIntegrationsListGithubRepositoriesOption,
        "search_azure_repos": AlmIntegrationsSearchAzureReposOption,
        "search_bitbucketcloud_repos": AlmIntegrationsSearchBitbucketCloudReposOption,
        "search_bitbucketserver_repos": AlmIntegrationsSearchBitbucketServerReposOption,
        "search_gitlab_repos": AlmIntegrationsSearchGitlabReposOption,
        "set_pat": AlmIntegrationsSetPatOption,
    }

    # Validators

    def validate_check_pat_opt(self, opt: Optional[AlmIntegrationsCheckPatOption]) -> None:
        v.validate_options(opt, AlmIntegrationsCheckPatOption)
        _required_key(opt.alm_setting, "AlmSetting")

    def validate_get_github_client_id_opt(self, opt: Optional[AlmIntegrationsGetGithubClientIdOption]) -> None:
        v.validate_options(opt, AlmIntegrationsGetGithubClientIdOption)
        _required_key(opt.alm_setting, "AlmSetting")

    def validate_import_azure_project_opt(self, opt: Optional[AlmIntegrationsImportAzureProjectOption]) -> None:
        v.validate_options(opt, AlmIntegrationsImportAzureProjectOption)
        # AlmSetting can be omitted when a single Azure DevOps integration exists
        _optional_key(opt.alm_setting, "AlmSetting")
        validate_new_code_definition(opt.new_code_definition_type, opt.new_code_definition_value)
        _required_key(opt.project_name, "ProjectName")
        _required_key(opt.repository_name, "RepositoryName")

    def validate_import_bitbucketcloud_repo_opt(self, opt: Optional[AlmIntegrationsImportBitbucketCloudRepoOption]) -> None:
        v.validate_options(opt, AlmIntegrationsImportBitbucketCloudRepoOption)
        _optional_key(opt.alm_setting, "AlmSetting")
        validate_new_code_definition(opt.new_code_definition_type, opt.new_code_definition_value)
        _required_key(opt.repository_slug, "RepositorySlug")

    def validate_import_bitbucketserver_project_opt(self, opt: Optional[AlmIntegrationsImportBitbucketServerProjectOption]) -> None:
        v.validate_options(opt, AlmIntegrationsImportBitbucketServerProjectOption)
        _optional_key(opt.alm_setting, "AlmSetting")
        validate_new_code_definition(opt.new_code_definition_type, opt.new_code_definition_value)
        _required_key(opt.project_key, "ProjectKey")
        _required_key(opt.repository_slug, "RepositorySlug")

    def validate_import_github_project_opt(self, opt: Optional[AlmIntegrationsImportGithubProjectOption]) -> None:
        v.validate_options(opt, AlmIntegrationsImportGithubProjectOption)
        _optional_key(opt.alm_setting, "AlmSetting")
        validate_new_code_definition(opt.new_code_definition_type, opt.new_code_definition_value)
        _required_key(opt.repository_key, "RepositoryKey", MAX_GITHUB_REPO_KEY_LENGTH)

    def validate_import_gitlab_project_opt(self, opt: Optional[AlmIntegrationsImportGitlabProjectOption]) -> None:
        v.validate_options(opt, AlmIntegrationsImportGitlabProjectOption)
        validate_new_code_definition(opt.new_code_definition_type, opt.new_code_definition_value)
        v.validate_required(opt.gitlab_project_id, "GitlabProjectId")

    def validate_list_azure_projects_opt(self, opt: Optional[AlmIntegrationsListAzureProjectsOption]) -> None:
        v.validate_options(opt, AlmIntegrationsListAzureProjectsOption)
        _required_key(opt.alm_setting, "AlmSetting")

    def validate_list_bitbucketserver_projects_opt(self, opt: Optional[AlmIntegrationsListBitbucketServerProjectsOption]) -> None:
        v.validate_options(opt, AlmIntegrationsListBitbucketServerProjectsOption)
        _required_key(opt.alm_setting, "AlmSetting")
        _page_size(opt.page_size, "PageSize")

    def validate_list_github_organizations_opt(self, opt: Optional[AlmIntegrationsListGithubOrganizationsOption]) -> None:
        v.validate_options(opt, AlmIntegrationsListGithubOrganizationsOption)
        _required_key(opt.alm_setting, "AlmSetting")
        _optional_key(opt.token, "Token")

    def validate_list_github_repositories_opt(self, opt: Optional[AlmIntegrationsListGithubRepositoriesOption]) -> None:
        v.validate_options(opt, AlmIntegrationsListGithubRepositoriesOption)
        _required_key(opt.alm_setting, "AlmSetting")
        _required_key(opt.organization, "Organization")

    def validate_search_azure_repos_opt(self, opt: Optional[AlmIntegrationsSearchAzureReposOption]) -> None:
        v.validate_options(opt, AlmIntegrationsSearchAzureReposOption)
        _required_key(opt.alm_setting, "AlmSetting")
        _optional_key(opt.project_name, "ProjectName")
        _optional_key(opt.search_query, "SearchQuery")

    def validate_search_bitbucketcloud_repos_opt(self, opt: Optional[AlmIntegrationsSearchBitbucketCloudReposOption]) -> None:
        v.validate_options(opt, AlmIntegrationsSearchBitbucketCloudReposOption)
        _required_key(opt.alm_setting, "AlmSetting")
        _page_size(opt.ps, "Ps")
        _optional_key(opt.repository_name, "RepositoryName")

    def validate_search_bitbucketserver_repos_opt(self, opt: Optional[AlmIntegrationsSearchBitbucketServerReposOption]) -> None:
        v.validate_options(opt, AlmIntegrationsSearchBitbucketServerReposOption)
        _required_key(opt.alm_setting, "AlmSetting")
        _page_size(opt.page_size, "PageSize")
        _optional_key(opt.project_name, "ProjectName")
        _optional_key(opt.repository_name, "RepositoryName")

    def validate_search_gitlab_repos_opt(self, opt: Optional[AlmIntegrationsSearchGitlabReposOption]) -> None:
        v.validate_options(opt, AlmIntegrationsSearchGitlabReposOption)
        _required_key(opt.alm_setting, "AlmSetting")
        _page_size(opt.ps, "Ps")
        _optional_key(opt.project_name, "ProjectName")

    def validate_set_pat_opt(self, opt: Optional[AlmIntegrationsSetPatOption]) -> None:
        v.validate_options(opt, AlmIntegrationsSetPatOption)
        # AlmSetting can be omitted when a single DevOps platform integration exists
        _required_key(opt.pat, "Pat", MAX_PAT_LENGTH)
        _optional_key(opt.username, "Username", MAX_USERNAME_LENGTH)

    # Operations

    def check_pat(self, opt: AlmIntegrationsCheckPatOption) -> requests.Response:
        """Checks the validity of the personal access token of the current user for a DevOps platform setting

        :return: The HTTP response, status 200 when the PAT is valid
        """
        self.validate_check_pat_opt(opt)
        _, r = self._fetch("GET", "check_pat", opt, None)
        return r

    def get_github_client_id(self, opt: AlmIntegrationsGetGithubClientIdOption) -> tuple[dict[str, Any], requests.Response]:
        """Gets the client id of a GitHub integration

        :return: {"clientId": ...} and the HTTP response
        """
        self.validate_get_github_client_id_opt(opt)
        return self._fetch("GET", "get_github_client_id", opt)

    def import_azure_project(self, opt: AlmIntegrationsImportAzureProjectOption) -> requests.Response:
        """Creates a SonarQube project from an Azure DevOps repository"""
        self.validate_import_azure_project_opt(opt)
        log.info("Importing Azure DevOps repo %s of project %s", opt.repository_name, opt.project_name)
        return self._submit("import_azure_project", opt)

    def import_bitbucketcloud_repo(self, opt: AlmIntegrationsImportBitbucketCloudRepoOption) -> requests.Response:
        """Creates a SonarQube project from a Bitbucket Cloud repository"""
        self.validate_import_bitbucketcloud_repo_opt(opt)
        log.info("Importing Bitbucket Cloud repo %s", opt.repository_slug)
        return self._submit("import_bitbucketcloud_repo", opt)

    def import_bitbucketserver_project(self, opt: AlmIntegrationsImportBitbucketServerProjectOption) -> requests.Response:
        """Creates a SonarQube project from a Bitbucket Server repository"""
        self.validate_import_bitbucketserver_project_opt(opt)
        log.info("Importing Bitbucket Server repo %s of project %s", opt.repository_slug, opt.project_key)
        return self._submit("import_bitbucketserver_project", opt)

    def import_github_project(self, opt: AlmIntegrationsImportGithubProjectOption) -> requests.Response:
        """Creates a SonarQube project from a GitHub repository"""
        self.validate_import_github_project_opt(opt)
        log.info("Importing GitHub repo %s", opt.repository_key)
        return self._submit("import_github_project", opt)

    def import_gitlab_project(self, opt: AlmIntegrationsImportGitlabProjectOption) -> requests.Response:
        """Creates a SonarQube project from a GitLab project"""
        self.validate_import_gitlab_project_opt(opt)
        log.info("Importing GitLab project id %s", opt.gitlab_project_id)
        return self._submit("import_gitlab_project", opt)

    def list_azure_projects(self, opt: AlmIntegrationsListAzureProjectsOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the Azure DevOps projects visible with the user PAT"""
        self.validate_list_azure_projects_opt(opt)
        return self._fetch("GET", "list_azure_projects", opt)

    def list_bitbucketserver_projects(self, opt: AlmIntegrationsListBitbucketServerProjectsOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the Bitbucket Server projects"""
        self.validate_list_bitbucketserver_projects_opt(opt)
        return self._fetch("GET", "list_bitbucketserver_projects", opt)

    def list_github_organizations(self, opt: AlmIntegrationsListGithubOrganizationsOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the GitHub organizations"""
        self.validate_list_github_organizations_opt(opt)
        return self._fetch("GET", "list_github_organizations", opt)

    def list_github_repositories(self, opt: AlmIntegrationsListGithubRepositoriesOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the repositories of a GitHub organization"""
        self.validate_list_github_repositories_opt(opt)
        return self._fetch("GET", "list_github_repositories", opt)

    def search_azure_repos(self, opt: AlmIntegrationsSearchAzureReposOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches Azure DevOps repositories"""
        self.validate_search_azure_repos_opt(opt)
        return self._fetch("GET", "search_azure_repos", opt)

    def search_bitbucketcloud_repos(self, opt: AlmIntegrationsSearchBitbucketCloudReposOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches Bitbucket Cloud repositories"""
        self.validate_search_bitbucketcloud_repos_opt(opt)
        return self._fetch("GET", "search_bitbucketcloud_repos", opt)

    def search_bitbucketserver_repos(self, opt: AlmIntegrationsSearchBitbucketServerReposOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches Bitbucket Server repositories"""
        self.validate_search_bitbucketserver_repos_opt(opt)
        return self._fetch("GET", "search_bitbucketserver_repos", opt)

    def search_gitlab_repos(self, opt: AlmIntegrationsSearchGitlabReposOption) -> tuple[dict[str, Any], requests.Response]:
        """Searches GitLab projects"""
        self.validate_search_gitlab_repos_opt(opt)
        return self._fetch("GET", "search_gitlab_repos", opt)

    def set_pat(self, opt: AlmIntegrationsSetPatOption) -> requests.Response:
        """Sets the personal access token of the current user for a DevOps platform setting"""
        self.validate_set_pat_opt(opt)
        return self._submit("set_pat", opt)
