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

    sonar-client: a client of the SonarQube Server Web API

    Usage:
        from sonarclient.client import Client
        from sonarclient.services.webhooks import WebhooksCreateOption

        client = Client(url="https://sonar.acme.com", token=...)
        data, _ = client.webhooks.create(WebhooksCreateOption(name="ci", url="https://ci.acme.com/hook"))

"""
