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

""" api/qualityprofiles tests """

import pytest

import utilities as util
from sonarclient import client as cl
from sonarclient.exceptions import MissingRequired, InvalidValue, OutOfRange
from sonarclient.services import qualityprofiles as qp

QP_KEY = "AU-TpxcA-iU5OvuD2FL3"
QP_NAME = "Sonar way (extended)"
RULE = "java:S1128"


def test_activate_rule(client: cl.Client, api: util.ApiStub) -> None:
    """test_activate_rule"""
    opt = qp.QualityprofilesActivateRuleOption(key=QP_KEY, rule=RULE, severity="MAJOR", params={"max": "10"}, prioritized_rule=True)
    client.qualityprofiles.activate_rule(opt)
    assert util.path(api.last) == "qualityprofiles/activate_rule"
    assert util.form(api.last) == {"key": [QP_KEY], "rule": [RULE], "params": ["max=10"], "prioritizedRule": ["true"], "severity": ["MAJOR"]}

    opt = qp.QualityprofilesActivateRuleOption(key=QP_KEY, rule=RULE, impacts={"SECURITY": "HIGH", "MAINTAINABILITY": "LOW"})
    client.qualityprofiles.activate_rule(opt)
    assert util.form(api.last)["impacts"] == ["MAINTAINABILITY=LOW;SECURITY=HIGH"]
    assert api.count == 2


def test_activate_rule_validation(client: cl.Client, api: util.ApiStub) -> None:
    """Impacts and severity can't be both set"""
    with pytest.raises(InvalidValue) as e:
        client.qualityprofiles.activate_rule(qp.QualityprofilesActivateRuleOption(key=QP_KEY, rule=RULE, impacts={"SECURITY": "HIGH"}, severity="MAJOR"))
    assert e.value.field == "QualityprofilesActivateRuleOption"
    assert e.value.reason == "cannot set both Impacts and Severity"
    with pytest.raises(InvalidValue) as e:
        client.qualityprofiles.activate_rule(qp.QualityprofilesActivateRuleOption(key=QP_KEY, rule=RULE, severity="major"))
    assert e.value.field == "Severity"
    with pytest.raises(InvalidValue) as e:
        client.qualityprofiles.activate_rule(qp.QualityprofilesActivateRuleOption(key=QP_KEY, rule=RULE, impacts={"PORTABILITY": "HIGH"}))
    assert e.value.field == "Impacts"
    with pytest.raises(InvalidValue) as e:
        client.qualityprofiles.activate_rule(qp.QualityprofilesActivateRuleOption(key=QP_KEY, rule=RULE, impacts={"SECURITY": "SEVERE"}))
    assert e.value.field == "Impacts"
    with pytest.raises(MissingRequired) as e:
        client.qualityprofiles.activate_rule(qp.QualityprofilesActivateRuleOption(key=QP_KEY))
    assert e.value.field == "Rule"
    assert api.count == 0

    client.qualityprofiles.deactivate_rule(qp.QualityprofilesDeactivateRuleOption(key=QP_KEY, rule=RULE))
    assert util.form(api.last) == {"key": [QP_KEY], "rule": [RULE]}
    with pytest.raises(MissingRequired) as e:
        client.qualityprofiles.deactivate_rule(qp.QualityprofilesDeactivateRuleOption(rule=RULE))
    assert e.value.field == "Key"


def test_language(client: cl.Client, api: util.ApiStub) -> None:
    """Language keys are checked against the known languages"""
    with pytest.raises(MissingRequired) as e:
        client.qualityprofiles.create(qp.QualityprofilesCreateOption(name=QP_NAME))
    assert e.value.field == "Language"
    with pytest.raises(InvalidValue) as e:
        client.qualityprofiles.create(qp.QualityprofilesCreateOption(language="java8", name=QP_NAME))
    assert e.value.field == "Language"
    with pytest.raises(InvalidValue) as e:
        client.qualityprofiles.search(qp.QualityprofilesSearchOption(language="python"))
    assert e.value.field == "Language"
    with pytest.raises(OutOfRange) as e:
        client.qualityprofiles.create(qp.QualityprofilesCreateOption(language="java", name="x" * 101))
    assert e.value.field == "Name"
    assert api.count == 0

    api.reply(200, {"profile": {"key": QP_KEY, "name": QP_NAME, "language": "java"}, "warnings": []})
    data, _ = client.qualityprofiles.create(qp.QualityprofilesCreateOption(language="java", name=QP_NAME))
    assert data["profile"]["key"] == QP_KEY
    assert api.last.method == "POST"


def test_profile_actions(client: cl.Client, api: util.ApiStub) -> None:
    """Actions identifying a profile by its language and name"""
    opt = qp.QualityprofilesProfileOption(language="py", quality_profile=QP_NAME)
    qps = client.qualityprofiles
    api.reply(200, '<?xml version="1.0" encoding="UTF-8"?><profile><name>Sonar way (extended)</name></profile>')
    xml, _ = qps.backup(opt)
    assert xml.startswith("<?xml")
    assert util.query(api.last) == {"language": ["py"], "qualityProfile": [QP_NAME]}
    qps.inheritance(opt)
    qps.set_default(opt)
    assert util.path(api.last) == "qualityprofiles/set_default"
    qps.delete(opt)
    assert api.last.method == "POST"
    assert api.count == 4

    for method in ("backup", "delete", "inheritance", "set_default"):
        with pytest.raises(MissingRequired) as e:
            getattr(qps, method)(qp.QualityprofilesProfileOption(language="py"))
        assert e.value.field == "QualityProfile"
    assert api.count == 4


def test_export(client: cl.Client, api: util.ApiStub) -> None:
    """The default profile of the language is exported when no profile name is given"""
    api.reply(200, "<profile/>")
    data, _ = client.qualityprofiles.export(qp.QualityprofilesProfileOption(language="java"))
    assert data == "<profile/>"
    assert util.query(api.last) == {"language": ["java"]}
    with pytest.raises(MissingRequired):
        client.qualityprofiles.export(qp.QualityprofilesProfileOption(quality_profile=QP_NAME))

    api.reply(200, {"exporters": [{"key": "pmd", "name": "PMD", "languages": ["java"]}]})
    data, _ = client.qualityprofiles.exporters()
    assert data["exporters"][0]["key"] == "pmd"
    client.qualityprofiles.importers()
    assert util.path(api.last) == "qualityprofiles/importers"


def test_inheritance_changes(client: cl.Client, api: util.ApiStub) -> None:
    """test_inheritance_changes"""
    qps = client.qualityprofiles
    qps.change_parent(qp.QualityprofilesChangeParentOption(language="java", quality_profile=QP_NAME, parent_quality_profile="Sonar way"))
    assert util.form(api.last) == {"language": ["java"], "qualityProfile": [QP_NAME], "parentQualityProfile": ["Sonar way"]}
    qps.change_parent(qp.QualityprofilesChangeParentOption(language="java", quality_profile=QP_NAME))
    assert "parentQualityProfile" not in util.form(api.last)

    api.reply(200, {"events": [], "paging": {"pageIndex": 1, "pageSize": 50, "total": 0}})
    qps.changelog(qp.QualityprofilesChangelogOption(language="java", quality_profile=QP_NAME, since="2025-01-01", filter_mode="MQR", page_size=50))
    assert util.query(api.last) == {"ps": ["50"], "language": ["java"], "qualityProfile": [QP_NAME], "filterMode": ["MQR"], "since": ["2025-01-01"]}
    with pytest.raises(InvalidValue) as e:
        qps.changelog(qp.QualityprofilesChangelogOption(language="java", quality_profile=QP_NAME, filter_mode="mqr"))
    assert e.value.field == "FilterMode"

    qps.compare(qp.QualityprofilesCompareOption(left_key=QP_KEY, right_key="AU-TpxcA-iU5OvuD2FL1"))
    with pytest.raises(MissingRequired) as e:
        qps.compare(qp.QualityprofilesCompareOption(left_key=QP_KEY))
    assert e.value.field == "RightKey"
    assert api.count == 4


def test_copy_rename_show(client: cl.Client, api: util.ApiStub) -> None:
    """test_copy_rename_show"""
    qps = client.qualityprofiles
    api.reply(200, {"key": "AU-new", "name": "Copy", "language": "java", "isDefault": False})
    data, _ = qps.copy(qp.QualityprofilesCopyOption(from_key=QP_KEY, to_name="Copy"))
    assert data["key"] == "AU-new"
    assert util.form(api.last) == {"fromKey": [QP_KEY], "toName": ["Copy"]}
    with pytest.raises(OutOfRange) as e:
        qps.copy(qp.QualityprofilesCopyOption(from_key=QP_KEY, to_name="x" * 101))
    assert e.value.field == "ToName"

    qps.rename(qp.QualityprofilesRenameOption(key="AU-new", name="Renamed"))
    with pytest.raises(MissingRequired) as e:
        qps.rename(qp.QualityprofilesRenameOption(name="Renamed"))
    assert e.value.field == "Key"

    qps.show(qp.QualityprofilesShowOption(key=QP_KEY, compare_to_sonar_way=True))
    assert util.query(api.last) == {"key": [QP_KEY], "compareToSonarWay": ["true"]}
    qps.show(qp.QualityprofilesShowOption(key=QP_KEY))
    assert util.query(api.last) == {"key": [QP_KEY]}

    qps.restore(qp.QualityprofilesRestoreOption(backup="<profile/>"))
    assert util.form(api.last) == {"backup": ["<profile/>"]}
    with pytest.raises(MissingRequired) as e:
        qps.restore(qp.QualityprofilesRestoreOption())
    assert e.value.field == "Backup"
    assert api.count == 5


def test_projects(client: cl.Client, api: util.ApiStub) -> None:
    """test_projects"""
    qps = client.qualityprofiles
    opt = qp.QualityprofilesAddProjectOption(language="java", project=util.PROJECT_KEY, quality_profile=QP_NAME)
    qps.add_project(opt)
    assert util.form(api.last) == {"language": ["java"], "project": [util.PROJECT_KEY], "qualityProfile": [QP_NAME]}
    qps.remove_project(opt)
    assert util.path(api.last) == "qualityprofiles/remove_project"
    with pytest.raises(MissingRequired) as e:
        qps.add_project(qp.QualityprofilesAddProjectOption(language="java", quality_profile=QP_NAME))
    assert e.value.field == "Project"

    qps.projects(qp.QualityprofilesProjectsOption(key=QP_KEY, selected="deselected", query="sonar"))
    assert util.query(api.last) == {"key": [QP_KEY], "q": ["sonar"], "selected": ["deselected"]}
    with pytest.raises(InvalidValue) as e:
        qps.projects(qp.QualityprofilesProjectsOption(key=QP_KEY, selected="Selected"))
    assert e.value.field == "Selected"
    assert api.count == 3


def test_permissions(client: cl.Client, api: util.ApiStub) -> None:
    """test_permissions"""
    qps = client.qualityprofiles
    qps.add_group(qp.QualityprofilesAddGroupOption(group="sonar-users", language="java", quality_profile=QP_NAME))
    qps.remove_group(qp.QualityprofilesAddGroupOption(group="sonar-users", language="java", quality_profile=QP_NAME))
    qps.add_user(qp.QualityprofilesAddUserOption(login="admin", language="java", quality_profile=QP_NAME))
    qps.remove_user(qp.QualityprofilesAddUserOption(login="admin", language="java", quality_profile=QP_NAME))
    assert util.path(api.last) == "qualityprofiles/remove_user"
    assert util.form(api.last) == {"language": ["java"], "login": ["admin"], "qualityProfile": [QP_NAME]}
    with pytest.raises(MissingRequired) as e:
        qps.add_group(qp.QualityprofilesAddGroupOption(language="java", quality_profile=QP_NAME))
    assert e.value.field == "Group"
    with pytest.raises(MissingRequired) as e:
        qps.add_user(qp.QualityprofilesAddUserOption(language="java", quality_profile=QP_NAME))
    assert e.value.field == "Login"

    qps.search_groups(qp.QualityprofilesSearchGroupsOption(language="java", quality_profile=QP_NAME, selected="all"))
    qps.search_users(qp.QualityprofilesSearchUsersOption(language="java", quality_profile=QP_NAME, query="adm", page=1, page_size=25))
    assert util.query(api.last) == {"p": ["1"], "ps": ["25"], "language": ["java"], "qualityProfile": [QP_NAME], "q": ["adm"]}
    with pytest.raises(MissingRequired) as e:
        qps.search_users(qp.QualityprofilesSearchUsersOption(language="java"))
    assert e.value.field == "QualityProfile"
    assert api.count == 6


def test_search(client: cl.Client, api: util.ApiStub) -> None:
    """test_search"""
    api.reply(200, {"profiles": [{"key": QP_KEY, "name": QP_NAME, "language": "java", "isDefault": True}]})
    data, _ = client.qualityprofiles.search()
    assert data["profiles"][0]["isDefault"]
    assert util.query(api.last) == {}
    client.qualityprofiles.search(qp.QualityprofilesSearchOption(defaults=True, language="java"))
    assert util.query(api.last) == {"defaults": ["true"], "language": ["java"]}
    client.qualityprofiles.search(qp.QualityprofilesSearchOption(defaults=False, project=util.PROJECT_KEY))
    assert util.query(api.last) == {"defaults": ["false"], "project": [util.PROJECT_KEY]}
