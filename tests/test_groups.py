from __future__ import annotations

import pytest

from groups import DEFAULT_GROUP, TEST_GROUPS, group_names, lookup
from projects import PROJECTS


@pytest.mark.parametrize("name", ["all", "mobile", "desktop", "comprehensive", "quick"])
def test_lookup_known_groups_have_projects(name):
    group = lookup(name)
    assert group is not None
    assert group.name == name
    assert group.projects
    assert group.description


@pytest.mark.parametrize("name", ["", "help", "ALL", "mobile ", "smoke", "unknown"])
def test_lookup_unknown_returns_none(name):
    assert lookup(name) is None


def test_every_group_references_known_projects():
    for group in TEST_GROUPS.values():
        assert set(group.projects) <= set(PROJECTS), group


def test_all_group_covers_every_project():
    assert set(lookup("all").projects) == set(PROJECTS)


def test_quick_group_filters_by_title():
    quick = lookup("quick")
    assert quick.projects == ("comprehensive",)
    assert quick.extra_args == ("--grep", "Quick Validation")


def test_only_quick_group_has_extra_args():
    assert [g.name for g in TEST_GROUPS.values() if g.extra_args] == ["quick"]


def test_lookup_is_stable_across_calls():
    assert lookup("mobile") == lookup("mobile")
    assert lookup("mobile") is lookup("mobile")


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        TEST_GROUPS["new"] = lookup("all")  # type: ignore[index]


def test_default_group_exists_and_names_keep_order():
    assert DEFAULT_GROUP in TEST_GROUPS
    assert group_names() == ["all", "mobile", "desktop", "comprehensive", "quick"]
