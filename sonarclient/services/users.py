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

"""api/users: local and external user accounts"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.exceptions import MissingRequired
from sonarclient.options import param, PaginationArgs
from sonarclient.services.base import Service

MIN_LOGIN_LENGTH = 2
MAX_LOGIN_LENGTH = 255
MIN_PASSWORD_LENGTH = 12
MAX_EMAIL_LENGTH = 100
MAX_NAME_LENGTH = 200

HOMEPAGE_TYPES = frozenset(("PROJECT", "PROJECTS", "ISSUES", "PORTFOLIOS", "PORTFOLIO", "APPLICATION"))
NOTICES = frozenset(
    (
        "educationPrinciples",
        "sonarlintAd",
        "showDesignAndArchitectureBanner",
        "showNewModesBanner",
        "showSandboxedIssuesIntro",
        "issueCleanCodeGuide",
        "issueNewIssueStatusAndTransitionGuide",
        "showDesignAndArchitectureOptInBanner",
        "overviewZeroNewIssuesSimplification",
        "showDesignAndArchitectureTour",
        "showEnableSca",
    )
)
SELECTED_FILTERS = frozenset(("all", "deselected", "selected"))


@dataclass
class UsersLoginOption:
    """Designates a user, to anonymize it"""

    login: str = param("login")


@dataclass
class UsersChangePasswordOption:
    login: str = param("login")
    password: str = param("password")
    previous_password: str = param("previousPassword")


@dataclass
class UsersCreateOption:
    email: str = param("email")
    local: Optional[bool] = param("local", None)
    login: str = param("login")
    name: str = param("name")
    password: str = param("password")
    scm_accounts: list[str] = param("scmAccount", kind=list)


@dataclass
class UsersDeactivateOption:
    anonymize: Optional[bool] = param("anonymize", None)
    login: str = param("login")


@dataclass
class UsersDismissNoticeOption:
    notice: str = param("notice")


@dataclass
class UsersGroupsOption(PaginationArgs):
    login: str = param("login")
    query: str = param("q")
    selected: str = param("selected")


@dataclass
class UsersSearchOption(PaginationArgs):
    deactivated: Optional[bool] = param("deactivated", None)
    external_identity: str = param("externalIdentity")
    last_connected_after: str = param("lastConnectedAfter")
    last_connected_before: str = param("lastConnectedBefore")
    managed: Optional[bool] = param("managed", None)
    query: str = param("q")
    sl_last_connected_after: str = param("slLastConnectedAfter")
    sl_last_connected_before: str = param("slLastConnectedBefore")


@dataclass
class UsersSetHomepageOption:
    branch: str = param("branch")
    component: str = param("component")
    type: str = param("type")


@dataclass
class UsersUpdateOption:
    email: str = param("email")
    login: str = param("login")
    name: str = param("name")
    scm_accounts: list[str] = param("scmAccount", kind=list)


@dataclass
class UsersUpdateIdentityProviderOption:
    login: str = param("login")
    new_external_identity: str = param("newExternalIdentity")
    new_external_provider: str = param("newExternalProvider")


@dataclass
class UsersUpdateLoginOption:
    login: str = param("login")
    new_login: str = param("newLogin")


def _validate_login(login: Optional[str], field: str = "Login") -> None:
    v.validate_required(login, field)
    v.validate_min_length(login, MIN_LOGIN_LENGTH, field)
    v.validate_max_length(login, MAX_LOGIN_LENGTH, field)


class UsersService(Service):
    """
    Abstraction of the api/users web services
    Most actions require the 'Administer System' permission
    """

    API_ROOT = "users"
    OPERATIONS = {
        "anonymize": UsersLoginOption,
        "change_password": UsersChangePasswordOption,
        "create": UsersCreateOption,
        "current": None,
        "deactivate": UsersDeactivateOption,
        "dismiss_notice": UsersDismissNoticeOption,
        "groups": UsersGroupsOption,
        "identity_providers": None,
        "search": UsersSearchOption,
        "set_homepage": UsersSetHomepageOption,
        "update": UsersUpdateOption,
        "update_identity_provider": UsersUpdateIdentityProviderOption,
        "update_login": UsersUpdateLoginOption,
    }

    def validate_anonymize_opt(self, opt: Optional[UsersLoginOption]) -> None:
        v.validate_options(opt, UsersLoginOption)
        v.validate_required(opt.login, "Login")

    def validate_change_password_opt(self, opt: Optional[UsersChangePasswordOption]) -> None:
        v.validate_options(opt, UsersChangePasswordOption)
        v.validate_required(opt.login, "Login")
        v.validate_required(opt.password, "Password")
        v.validate_min_length(opt.password, MIN_PASSWORD_LENGTH, "Password")

    def validate_create_opt(self, opt: Optional[UsersCreateOption]) -> None:
        """Validates a user creation, local users need a password"""
        v.validate_options(opt, UsersCreateOption)
        _validate_login(opt.login)
        v.validate_required(opt.name, "Name")
        v.validate_max_length(opt.name, MAX_NAME_LENGTH, "Name")
        v.validate_max_length(opt.email, MAX_EMAIL_LENGTH, "Email")
        if opt.local and not opt.password:
            raise MissingRequired("Password", "is required for local users")
        v.validate_min_length(opt.password, MIN_PASSWORD_LENGTH, "Password")

    def validate_deactivate_opt(self, opt: Optional[UsersDeactivateOption]) -> None:
        v.validate_options(opt, UsersDeactivateOption)
        v.validate_required(opt.login, "Login")

    def validate_dismiss_notice_opt(self, opt: Optional[UsersDismissNoticeOption]) -> None:
        v.validate_options(opt, UsersDismissNoticeOption)
        v.validate_required(opt.notice, "Notice")
        v.is_value_authorized(opt.notice, NOTICES, "Notice")

    def validate_groups_opt(self, opt: Optional[UsersGroupsOption]) -> None:
        v.validate_options(opt, UsersGroupsOption)
        v.validate_required(opt.login, "Login")
        opt.validate()
        v.is_value_authorized(opt.selected, SELECTED_FILTERS, "Selected")

    def validate_search_opt(self, opt: Optional[UsersSearchOption]) -> None:
        v.validate_options(opt, UsersSearchOption)
        opt.validate()

    def validate_set_homepage_opt(self, opt: Optional[UsersSetHomepageOption]) -> None:
        v.validate_options(opt, UsersSetHomepageOption)
        v.validate_required(opt.type, "Type")
        v.is_value_authorized(opt.type, HOMEPAGE_TYPES, "Type")

    def validate_update_opt(self, opt: Optional[UsersUpdateOption]) -> None:
        v.validate_options(opt, UsersUpdateOption)
        v.validate_required(opt.login, "Login")
        v.validate_max_length(opt.email, MAX_EMAIL_LENGTH, "Email")
        v.validate_max_length(opt.name, MAX_NAME_LENGTH, "Name")

    def validate_update_identity_provider_opt(self, opt: Optional[UsersUpdateIdentityProviderOption]) -> None:
        v.validate_options(opt, UsersUpdateIdentityProviderOption)
        v.validate_required(opt.login, "Login")
        v.validate_required(opt.new_external_provider, "NewExternalProvider")

    def validate_update_login_opt(self, opt: Optional[UsersUpdateLoginOption]) -> None:
        v.validate_options(opt, UsersUpdateLoginOption)
        v.validate_required(opt.login, "Login")
        _validate_login(opt.new_login, "NewLogin")

    def anonymize(self, opt: UsersLoginOption) -> requests.Response:
        """Anonymizes a deactivated user"""
        self.validate_anonymize_opt(opt)
        log.info("Anonymizing user '%s'", opt.login)
        return self._submit("anonymize", opt)

    def change_password(self, opt: UsersChangePasswordOption) -> requests.Response:
        """Changes the password of a user

        :param opt: The previous password is needed only to change one's own password
        """
        self.validate_change_password_opt(opt)
        return self._submit("change_password", opt)

    def create(self, opt: UsersCreateOption) -> tuple[dict[str, Any], requests.Response]:
        """Creates a user, or reactivates a deactivated user with the same login

        :return: {"user": {"login", "name", "email", "scmAccounts", "active", "local"}} and the HTTP response
        """
        self.validate_create_opt(opt)
        log.info("Creating user '%s'", opt.login)
        return self._fetch("POST", "create", opt)

    def current(self) -> tuple[dict[str, Any], requests.Response]:
        """Returns the details of the authenticated user"""
        return self._fetch("GET", "current")

    def deactivate(self, opt: UsersDeactivateOption) -> tuple[dict[str, Any], requests.Response]:
        """Deactivates a user, and optionally anonymizes it

        :return: {"user": {...}} and the HTTP response
        """
        self.validate_deactivate_opt(opt)
        log.info("Deactivating user '%s'", opt.login)
        return self._fetch("POST", "deactivate", opt)

    def dismiss_notice(self, opt: UsersDismissNoticeOption) -> requests.Response:
        """Dismisses a notice for the current user"""
        self.validate_dismiss_notice_opt(opt)
        return self._submit("dismiss_notice", opt)

    def groups(self, opt: UsersGroupsOption) -> tuple[dict[str, Any], requests.Response]:
        """Lists the groups of a user

        :return: {"groups": [...], "paging": {...}} and the HTTP response
        """
        self.validate_groups_opt(opt)
        return self._fetch("GET", "groups", opt)

    def identity_providers(self) -> tuple[dict[str, Any], requests.Response]:
        """Lists the external identity providers"""
        return self._fetch("GET", "identity_providers")

    def search(self, opt: Optional[UsersSearchOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Searches users, only active ones unless deactivated is set

        :return: {"users": [...], "paging": {...}} and the HTTP response
        """
        if opt is None:
            opt = UsersSearchOption()
        self.validate_search_opt(opt)
        return self._fetch("GET", "search", opt)

    def set_homepage(self, opt: UsersSetHomepageOption) -> requests.Response:
        self.validate_set_homepage_opt(opt)
        return self._submit("set_homepage", opt)

    def update(self, opt: UsersUpdateOption) -> tuple[dict[str, Any], requests.Response]:
        """Updates the name, email or SCM accounts of a user

        :return: {"user": {...}} and the HTTP response
        """
        self.validate_update_opt(opt)
        return self._fetch("POST", "update", opt)

    def update_identity_provider(self, opt: UsersUpdateIdentityProviderOption) -> requests.Response:
        """Moves a user to another installed identity provider"""
        self.validate_update_identity_provider_opt(opt)
        log.info("Moving user '%s' to identity provider '%s'", opt.login, opt.new_external_provider)
        return self._submit("update_identity_provider", opt)

    def update_login(self, opt: UsersUpdateLoginOption) -> requests.Response:
        self.validate_update_login_opt(opt)
        log.info("Renaming user '%s' into '%s'", opt.login, opt.new_login)
        return self._submit("update_login", opt)
