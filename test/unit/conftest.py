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

""" Test fixtures """

from collections.abc import Generator
import pytest

import utilities as util
from sonarclient.client import Client


@pytest.fixture(autouse=True)
def run_around_tests():
    util.start_logging()
    yield


@pytest.fixture
def api() -> Generator[util.ApiStub]:
    """HTTP transport stub, answers 200 {} unless responses are queued"""
    stub = util.ApiStub()
    with util.stub_transport(stub):
        yield stub


@pytest.fixture
def client(api: util.ApiStub) -> Client:
    """Client whose requests are answered by the api stub"""
    return Client(url=util.SQ_URL, token=util.TOKEN)


@pytest.fixture
def json_file() -> Generator[str]:
    """setup of tests"""
    util.clean(util.JSON_FILE)
    yield util.JSON_FILE
    util.clean(util.JSON_FILE)


@pytest.fixture
def txt_file() -> Generator[str]:
    """setup of tests"""
    util.clean(util.TXT_FILE)
    yield util.TXT_FILE
    util.clean(util.TXT_FILE)
