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

""" api/project_analyses tests """

import pytest

import utilities as util
from sonarclient import client as cl
from sonarclient.exceptions import MissingRequired, InvalidValue, InvalidFormat, OutOfRange
from sonarclient.services import project_analyses as pa


def __page(first: int, count: int, total: int) -> dict:
    return {"paging": {"total": total}, "analyses": [{"key": f"A{i}"} for i in range(first, first + count)]}


def test_search(client: cl.Client, api: util.ApiStub) -> None:
    """test_search"""
    api.reply(200, __page(0, 2, 2))
    opt = pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY, category="VERSION", from_date="2025-01-01", to_date="2025-06-30T23:59:59+0000")
    data, _ = client.project_analyses.search(opt)
    assert len(data["analyses"]) == 2
    assert util.query(api.last) == {
        "category": ["VERSION"],
        "from": ["2025-01-01"],
        "project": [util.PROJECT_KEY],
        "to": ["2025-06-30T23:59:59+0000"],
    }


def test_search_validation(client: cl.Client, api: util.ApiStub) -> None:
    """test_search_validation"""
    with pytest.raises(MissingRequired) as e:
        client.project_analyses.search(pa.ProjectAnalysesSearchOption())
    assert e.value.field == "Project"
    with pytest.raises(InvalidValue) as e:
        client.project_analyses.search(pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY, category="ISSUE"))
    assert e.value.field == "Category"
    with pytest.raises(InvalidFormat) as e:
        client.project_analyses.search(pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY, from_date="01/01/2025"))
    assert e.value.field == "From"
    with pytest.raises(InvalidFormat) as e:
        client.project_analyses.search(pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY, to_date="tomorrow"))
    assert e.value.field == "To"
    with pytest.raises(OutOfRange) as e:
        client.project_analyses.search(pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY, page_size=501))
    assert e.value.field == "PageSize"
    assert api.count == 0


def test_search_all(client: cl.Client, api: util.ApiStub) -> None:
    """All pages are fetched, no extra request once the total is reached"""
    api.reply(200, __page(0, 2, 3)).reply(200, __page(2, 1, 3))
    opt = pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY, page_size=2)
    analyses, r = client.project_analyses.search_all(opt)
    assert [a["key"] for a in analyses] == ["A0", "A1", "A2"]
    assert api.count == 2
    assert util.query(api.requests[0])["p"] == ["1"]
    assert util.query(api.requests[1])["p"] == ["2"]
    assert r.status_code == 200
    assert opt.page == 0


def test_search_all_from_page_2(client: cl.Client, api: util.ApiStub) -> None:
    """Iteration always starts from the first page, whatever page is requested"""
    api.reply(200, __page(0, 100, 250)).reply(200, __page(100, 100, 250)).reply(200, __page(200, 50, 250))
    opt = pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY, page=2, page_size=100)
    analyses, _ = client.project_analyses.search_all(opt)
    assert len(analyses) == 250
    assert api.count == 3
    assert [util.query(req)["p"] for req in api.requests] == [["1"], ["2"], ["3"]]
    assert opt.page == 2


def test_search_all_empty_page(client: cl.Client, api: util.ApiStub) -> None:
    """Iteration stops on an empty page even if the total is not reached"""
    api.reply(200, __page(0, 100, 250)).reply(200, __page(100, 0, 250))
    analyses, _ = client.project_analyses.search_all(pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY))
    assert len(analyses) == 100
    assert api.count == 2
    assert util.query(api.requests[0])["ps"] == [str(pa.DEFAULT_PAGE_SIZE)]


def test_search_all_no_analysis(client: cl.Client, api: util.ApiStub) -> None:
    """test_search_all_no_analysis"""
    api.reply(200, {"paging": {"pageIndex": 1, "pageSize": 100, "total": 0}, "analyses": []})
    analyses, _ = client.project_analyses.search_all(pa.ProjectAnalysesSearchOption(project=util.PROJECT_KEY))
    assert analyses == []
    assert api.count == 1


def test_events(client: cl.Client, api: util.ApiStub) -> None:
    """test_events"""
    api.reply(200, {"event": {"key": "E1", "analysis": "A1", "category": "VERSION", "name": "1.0"}})
    data, _ = client.project_analyses.create_event(pa.ProjectAnalysesCreateEventOption(analysis="A1", category="VERSION", name="1.0"))
    assert data["event"]["key"] == "E1"
    assert api.last.method == "POST"
    assert util.form(api.last) == {"analysis": ["A1"], "category": ["VERSION"], "name": ["1.0"]}

    with pytest.raises(InvalidValue) as e:
        client.project_analyses.create_event(pa.ProjectAnalysesCreateEventOption(analysis="A1", category="QUALITY_GATE", name="x"))
    assert e.value.field == "Category"
    with pytest.raises(MissingRequired) as e:
        client.project_analyses.create_event(pa.ProjectAnalysesCreateEventOption(analysis="A1"))
    assert e.value.field == "Name"

    api.reply(200, {"event": {"key": "E1", "name": "1.0.1"}})
    data, _ = client.project_analyses.update_event(pa.ProjectAnalysesUpdateEventOption(event="E1", name="1.0.1"))
    assert data["event"]["name"] == "1.0.1"
    with pytest.raises(MissingRequired) as e:
        client.project_analyses.update_event(pa.ProjectAnalysesUpdateEventOption(event="E1"))
    assert e.value.field == "Name"

    client.project_analyses.delete_event(pa.ProjectAnalysesDeleteEventOption(event="E1"))
    assert util.path(api.last) == "project_analyses/delete_event"
    with pytest.raises(MissingRequired) as e:
        client.project_analyses.delete_event(pa.ProjectAnalysesDeleteEventOption())
    assert e.value.field == "Event"
    assert api.count == 3


def test_delete(client: cl.Client, api: util.ApiStub) -> None:
    """test_delete"""
    client.project_analyses.delete(pa.ProjectAnalysesDeleteOption(analysis="A1"))
    assert util.form(api.last) == {"analysis": ["A1"]}
    with pytest.raises(MissingRequired) as e:
        client.project_analyses.delete(None)
    assert e.value.field == "ProjectAnalysesDeleteOption"
