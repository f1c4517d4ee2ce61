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

    api/webhooks: global and project webhooks, and their deliveries

"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import requests

import sonarclient.logging as log
from sonarclient import validation as v
from sonarclient.options import param, PaginationArgs
from sonarclient.services.base import Service

MAX_NAME_LENGTH = 100
MAX_PROJECT_LENGTH = 400
MIN_SECRET_LENGTH = 16
MAX_SECRET_LENGTH = 200
MAX_URL_LENGTH = 512
MAX_KEY_LENGTH = 40


@dataclass
class WebhooksCreateOption:
    name: str = param("name")
    project: str = param("project")
    secret: str = param("secret")
    url: str = param("url")


@dataclass
class WebhooksDeleteOption:
    webhook: str = param("webhook")


@dataclass
class WebhooksDeliveriesOption(PaginationArgs):
    ce_task_id: str = param("ceTaskId")
    component_key: str = param("componentKey")
    webhook: str = param("webhook")


@dataclass
class WebhooksDeliveryOption:
    delivery_id: str = param("deliveryId")


@dataclass
class WebhooksListOption:
    project: str = param("project")


@dataclass
class WebhooksUpdateOption:
    name: str = param("name")
    secret: str = param("secret")
    url: str = param("url")
    webhook: str = param("webhook")


def _name_and_url(opt: Any) -> None:
    v.validate_required(opt.name, "Name")
    v.validate_max_length(opt.name, MAX_NAME_LENGTH, "Name")
    v.validate_required(opt.url, "URL")
    v.validate_max_length(opt.url, MAX_URL_LENGTH, "URL")


def _webhook_key(key: str) -> None:
    v.validate_required(key, "Webhook")
    v.validate_max_length(key, MAX_KEY_LENGTH, "Webhook")


class WebhooksService(Service):
    """
    Abstraction of the api/webhooks web services
    """

    API_ROOT = "webhooks"
    OPERATIONS = {
        "create": WebhooksCreateOption,
        "delete": WebhooksDeleteOption,
        "deliveries": WebhooksDeliveriesOption,
        "delivery": WebhooksDeliveryOption,
        "list": WebhooksListOption,
        "update": WebhooksUpdateOption,
    }

    def validate_create_opt(self, opt: Optional[WebhooksCreateOption]) -> None:
        v.validate_options(opt, WebhooksCreateOption)
        _name_and_url(opt)
        v.validate_max_length(opt.project, MAX_PROJECT_LENGTH, "Project")
        v.validate_min_length(opt.secret, MIN_SECRET_LENGTH, "Secret")
        v.validate_max_length(opt.secret, MAX_SECRET_LENGTH, "Secret")

    def validate_delete_opt(self, opt: Optional[WebhooksDeleteOption]) -> None:
        v.validate_options(opt, WebhooksDeleteOption)
        _webhook_key(opt.webhook)

    def validate_deliveries_opt(self, opt: Optional[WebhooksDeliveriesOption]) -> None:
        v.validate_options(opt, WebhooksDeliveriesOption)
        opt.validate()

    def validate_delivery_opt(self, opt: Optional[WebhooksDeliveryOption]) -> None:
        v.validate_options(opt, WebhooksDeliveryOption)
        v.validate_required(opt.delivery_id, "DeliveryID")

    def validate_update_opt(self, opt: Optional[WebhooksUpdateOption]) -> None:
        v.validate_options(opt, WebhooksUpdateOption)
        _name_and_url(opt)
        _webhook_key(opt.webhook)
        v.validate_max_length(opt.secret, MAX_SECRET_LENGTH, "Secret")

    def create(self, opt: WebhooksCreateOption) -> tuple[dict[str, Any], requests.Response]:
        """Creates a webhook, a global one if no project is given

        :return: {"webhook": {"key", "name", "url", "hasSecret"}} and the HTTP response
        """
        self.validate_create_opt(opt)
        log.info("Creating webhook '%s' for project '%s'", opt.name, opt.project)
        return self._fetch("POST", "create", opt)

    def delete(self, opt: WebhooksDeleteOption) -> requests.Response:
        self.validate_delete_opt(opt)
        log.info("Deleting webhook %s", opt.webhook)
        return self._submit("delete", opt)

    def deliveries(self, opt: Optional[WebhooksDeliveriesOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Lists the recent deliveries of a webhook, a project or a background task

        :return: {"deliveries": [...], "paging": {...}} and the HTTP response
        """
        if opt is None:
            opt = WebhooksDeliveriesOption()
        self.validate_deliveries_opt(opt)
        return self._fetch("GET", "deliveries", opt)

    def delivery(self, opt: WebhooksDeliveryOption) -> tuple[dict[str, Any], requests.Response]:
        """Returns a webhook delivery, with its payload"""
        self.validate_delivery_opt(opt)
        return self._fetch("GET", "delivery", opt)

    def list(self, opt: Optional[WebhooksListOption] = None) -> tuple[dict[str, Any], requests.Response]:
        """Lists the global webhooks, or the webhooks of a project

        :return: {"webhooks": [...]} and the HTTP response
        """
        return self._fetch("GET", "list", opt)

    def update(self, opt: WebhooksUpdateOption) -> requests.Response:
        self.validate_update_opt(opt)
        return self._submit("update", opt)
