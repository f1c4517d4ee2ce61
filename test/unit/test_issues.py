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

""" api/issues tests """

import pytest

import utilities as util
from sonarclient import client as cl
from sonarclient.exceptions import MissingRequired, InvalidValue, OutOfRange
from sonarclient.services import issues as iss

ISSUE = "AYJ1-2KEjx0OmuUEsFvj"


def test_comments(client: cl.Client, api: util.ApiStub) -> None:
    """test_comments"""
    api.reply(200, {"issue": {"key": ISSUE, "comments": [{"key": "C1", "markdown": "Looks fine"}]}})
    data, _ = client.issues.add_comment(iss.IssuesCommentOption(issue=ISSUE, text="Looks fine"))
    assert data["issue"]["comments"][0]["key"] == "C1"
    assert api.last.method == "POST"
    assert util.form(api.last) == {"issue": [ISSUE], "text": ["Looks fine"]}
    client.issues.edit_comment(iss.IssuesEditCommentOption(comment="C1", text="Not fine"))
    assert util.path(api.last) == "issues/edit_comment"
    client.issues.delete_comment(iss.IssuesDeleteCommentOption(comment="C1"))
    assert util.form(api.last) == {"comment": ["C1"]}
    with pytest.raises(MissingRequired) as e:
        client.issues.add_comment(iss.IssuesCommentOption(issue=ISSUE))
    assert e.value.field == "Text"
    with pytest.raises(MissingRequired) as e:
        client.issues.edit_comment(iss.IssuesEditCommentOption(text="Not fine"))
    assert e.value.field == "Comment"
    with pytest.raises(MissingRequired) as e:
        client.issues.delete_comment(None)
    assert e.value.field == "IssuesDeleteCommentOption"
    assert api.count == 3


def test_assign_and_transition(client: cl.Client, api: util.ApiStub) -> None:
    """An issue without assignee is unassigned"""
    client.issues.assign(iss.IssuesAssignOption(issue=ISSUE, assignee="olivier"))
    assert util.form(api.last) == {"assignee": ["olivier"], "issue": [ISSUE]}
    client.issues.assign(iss.IssuesAssignOption(issue=ISSUE))
    assert util.form(api.last) == {"issue": [ISSUE]}
    client.issues.do_transition(iss.IssuesDoTransitionOption(issue=ISSUE, transition="falsepositive"))
    assert util.path(api.last) == "issues/do_transition"
    with pytest.raises(InvalidValue) as e:
        client.issues.do_transition(iss.IssuesDoTransitionOption(issue=ISSUE, transition="ignore"))
    assert e.value.field == "Transition"
    with pytest.raises(MissingRequired) as e:
        client.issues.do_transition(iss.IssuesDoTransitionOption(issue=ISSUE))
    assert e.value.field == "Transition"
    with pytest.raises(MissingRequired) as e:
        client.issues.assign(iss.IssuesAssignOption(assignee="olivier"))
    assert e.value.field == "Issue"
    assert api.count == 3


def test_bulk_change(client: cl.Client, api: util.ApiStub) -> None:
    """test_bulk_change"""
    api.reply(200, {"total": 2, "success": 2, "ignored": 0, "failures": 0})
    opt = iss.IssuesBulkChangeOption(issues=[ISSUE, "AYJ2"], add_tags=["security", "cwe"], do_transition="confirm", send_notifications=False)
    data, _ = client.issues.bulk_change(opt)
    assert data["success"] == 2
    assert util.form(api.last) == {
        "add_tags": ["security,cwe"],
        "do_transition": ["confirm"],
        "issues": [f"{ISSUE},AYJ2"],
        "sendNotifications": ["false"],
    }
    with pytest.raises(MissingRequired) as e:
        client.issues.bulk_change(iss.IssuesBulkChangeOption(set_type="BUG"))
    assert e.value.field == "Issues"
    for field, opt in (
        ("SetSeverity", iss.IssuesBulkChangeOption(issues=[ISSUE], set_severity="HIGH")),
        ("SetType", iss.IssuesBulkChangeOption(issues=[ISSUE], set_type="SECURITY_HOTSPOT")),
        ("DoTransition", iss.IssuesBulkChangeOption(issues=[ISSUE], do_transition="delete")),
    ):
        with pytest.raises(InvalidValue) as e:
            client.issues.bulk_change(opt)
        assert e.value.field == field
    assert api.count == 1


def test_severity_tags_type(client: cl.Client, api: util.ApiStub) -> None:
    """test_severity_tags_type"""
    client.issues.set_severity(iss.IssuesSetSeverityOption(issue=ISSUE, severity="BLOCKER"))
    assert util.form(api.last) == {"issue": [ISSUE], "severity": ["BLOCKER"]}
    client.issues.set_severity(iss.IssuesSetSeverityOption(issue=ISSUE, impact="SECURITY=HIGH"))
    assert util.form(api.last) == {"impact": ["SECURITY=HIGH"], "issue": [ISSUE]}
    client.issues.set_tags(iss.IssuesSetTagsOption(issue=ISSUE, tags=["cert", "owasp"]))
    assert util.form(api.last) == {"issue": [ISSUE], "tags": ["cert,owasp"]}
    client.issues.set_type(iss.IssuesSetTypeOption(issue=ISSUE, type="VULNERABILITY"))
    assert util.path(api.last) == "issues/set_type"
    with pytest.raises(InvalidValue) as e:
        client.issues.set_severity(iss.IssuesSetSeverityOption(issue=ISSUE, severity="HIGH"))
    assert e.value.field == "Severity"
    with pytest.raises(InvalidValue) as e:
        client.issues.set_type(iss.IssuesSetTypeOption(issue=ISSUE, type="SECURITY_HOTSPOT"))
    assert e.value.field == "Type"
    with pytest.raises(MissingRequired) as e:
        client.issues.set_type(iss.IssuesSetTypeOption(issue=ISSUE))
    assert e.value.field == "Type"
    with pytest.raises(MissingRequired) as e:
        client.issues.set_tags(iss.IssuesSetTagsOption(tags=["cert"]))
    assert e.value.field == "Issue"
    assert api.count == 4


def test_search(client: cl.Client, api: util.ApiStub) -> None:
    """test_search"""
    api.reply(200, {"paging": {"pageIndex": 1, "pageSize": 100, "total": 1}, "issues": [{"key": ISSUE}]})
    data, _ = client.issues.search()
    assert data["issues"][0]["key"] == ISSUE
    assert util.query(api.last) == {}
    opt = iss.IssuesSearchOption(
        components=[util.PROJECT_KEY],
        types=["BUG", "VULNERABILITY"],
        impact_severities=["HIGH"],
        owasp_top10_2021=["a1", "a3"],
        resolved=False,
        sort="CREATION_DATE",
        owasp_asvs_level=2,
        page_size=100,
    )
    client.issues.search(opt)
    assert util.query(api.last) == {
        "components": [util.PROJECT_KEY],
        "impactSeverities": ["HIGH"],
        "owaspAsvsLevel": ["2"],
        "owaspTop10-2021": ["a1,a3"],
        "ps": ["100"],
        "resolved": ["false"],
        "s": ["CREATION_DATE"],
        "types": ["BUG,VULNERABILITY"],
    }
    for field, opt in (
        ("Types", iss.IssuesSearchOption(types=["BUG", "HOTSPOT"])),
        ("Severities", iss.IssuesSearchOption(severities=["HIGH"])),
        ("ImpactSeverities", iss.IssuesSearchOption(impact_severities=["MAJOR"])),
        ("ImpactSoftwareQualities", iss.IssuesSearchOption(impact_software_qualities=["USABILITY"])),
        ("Statuses", iss.IssuesSearchOption(statuses=["WONTFIX"])),
        ("Resolutions", iss.IssuesSearchOption(resolutions=["OPEN"])),
        ("Scopes", iss.IssuesSearchOption(scopes=["DOC"])),
        ("OwaspTop10", iss.IssuesSearchOption(owasp_top10=["a11"])),
        ("SansTop25", iss.IssuesSearchOption(sans_top25=["injection"])),
        ("Languages", iss.IssuesSearchOption(languages=["java", "klingon"])),
    ):
        with pytest.raises(InvalidValue) as e:
            client.issues.search(opt)
        assert e.value.field == field
    with pytest.raises(OutOfRange):
        client.issues.search(iss.IssuesSearchOption(page_size=501))
    assert api.count == 2


def test_list(client: cl.Client, api: util.ApiStub) -> None:
    """Issues are listed by project or by component"""
    client.issues.list(iss.IssuesListOption(project=util.PROJECT_KEY, branch="main", types=["CODE_SMELL"], in_new_code_period=True))
    assert util.query(api.last) == {"branch": ["main"], "inNewCodePeriod": ["true"], "project": [util.PROJECT_KEY], "types": ["CODE_SMELL"]}
    client.issues.list(iss.IssuesListOption(component=f"{util.PROJECT_KEY}:src/main.py"))
    assert util.path(api.last) == "issues/list"
    with pytest.raises(MissingRequired) as e:
        client.issues.list(iss.IssuesListOption(branch="main"))
    assert e.value.field == "Project"
    with pytest.raises(InvalidValue) as e:
        client.issues.list(iss.IssuesListOption(project=util.PROJECT_KEY, types=["TYPO"]))
    assert e.value.field == "Types"
    assert api.count == 2


def test_pull(client: cl.Client, api: util.ApiStub) -> None:
    """Pulls return raw protobuf content"""
    api.reply(200, b"\x0a\x04main\x10\x01")
    opt = iss.IssuesPullOption(project_key=util.PROJECT_KEY, branch_name="main", languages=["java", "py"], resolved_only=True)
    data, _ = client.issues.pull(opt)
    assert data == b"\x0a\x04main\x10\x01"
    assert api.last.headers["accept"] == "application/x-protobuf, */*"
    assert util.query(api.last) == {"branchName": ["main"], "languages": ["java,py"], "projectKey": [util.PROJECT_KEY], "resolvedOnly": ["true"]}
    api.reply(200, b"\x00")
    data, _ = client.issues.pull_taint(iss.IssuesPullTaintOption(project_key=util.PROJECT_KEY, changed_since="1700000000000"))
    assert data == b"\x00"
    assert util.path(api.last) == "issues/pull_taint"
    with pytest.raises(MissingRequired) as e:
        client.issues.pull(iss.IssuesPullOption(branch_name="main"))
    assert e.value.field == "ProjectKey"
    with pytest.raises(InvalidValue) as e:
        client.issues.pull_taint(iss.IssuesPullTaintOption(project_key=util.PROJECT_KEY, languages=["cobolscript"]))
    assert e.value.field == "Languages"
    assert api.count == 2


def test_authors_and_tags(client: cl.Client, api: util.ApiStub) -> None:
    """test_authors_and_tags"""
    api.reply(200, {"authors": ["okorach@acme.com"]})
    data, _ = client.issues.authors()
    assert data["authors"] == ["okorach@acme.com"]
    client.issues.authors(iss.IssuesAuthorsOption(project=util.PROJECT_KEY, query="oko", page_size=100))
    assert util.query(api.last) == {"project": [util.PROJECT_KEY], "ps": ["100"], "q": ["oko"]}
    with pytest.raises(OutOfRange) as e:
        client.issues.authors(iss.IssuesAuthorsOption(page_size=101))
    assert e.value.field == "PageSize"

    api.reply(200, {"tags": ["cwe", "security"]})
    data, _ = client.issues.tags(iss.IssuesTagsOption(project=util.PROJECT_KEY, all=True, page_size=500))
    assert data["tags"] == ["cwe", "security"]
    assert util.query(api.last) == {"all": ["true"], "project": [util.PROJECT_KEY], "ps": ["500"]}
    with pytest.raises(OutOfRange):
        client.issues.tags(iss.IssuesTagsOption(page_size=-3))

    client.issues.component_tags(iss.IssuesComponentTagsOption(component_uuid="AU-1", created_after="2024-01-01"))
    assert util.query(api.last) == {"componentUuid": ["AU-1"], "createdAfter": ["2024-01-01"]}
    with pytest.raises(MissingRequired) as e:
        client.issues.component_tags(iss.IssuesComponentTagsOption())
    assert e.value.field == "ComponentUuid"
    assert api.count == 4


def test_changelog_and_project_actions(client: cl.Client, api: util.ApiStub) -> None:
    """test_changelog_and_project_actions"""
    api.reply(200, {"changelog": [{"user": "olivier", "diffs": [{"key": "status", "newValue": "CONFIRMED"}]}]})
    data, _ = client.issues.changelog(iss.IssuesIssueOption(issue=ISSUE))
    assert data["changelog"][0]["user"] == "olivier"
    assert util.query(api.last) == {"issue": [ISSUE]}
    r = client.issues.reindex(iss.IssuesReindexOption(project=util.PROJECT_KEY))
    assert r.status_code == 200
    assert util.form(api.last) == {"project": [util.PROJECT_KEY]}
    client.issues.anticipated_transitions(iss.IssuesProjectOption(project_key=util.PROJECT_KEY))
    assert util.path(api.last) == "issues/anticipated_transitions"
    with pytest.raises(MissingRequired) as e:
        client.issues.changelog(iss.IssuesIssueOption())
    assert e.value.field == "Issue"
    with pytest.raises(MissingRequired) as e:
        client.issues.reindex(iss.IssuesReindexOption())
    assert e.value.field == "Project"
    with pytest.raises(MissingRequired) as e:
        client.issues.anticipated_transitions(iss.IssuesProjectOption())
    assert e.value.field == "ProjectKey"
    assert api.count == 3
