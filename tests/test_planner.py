from __future__ import annotations

from pathlib import Path

import pytest

from jspm_bundler.bundle.paths import BundlePaths
from jspm_bundler.bundle.planner import group_short_paths, plan_group
from jspm_bundler.errors import CyclicExclusionError, GroupNotFoundError
from jspm_bundler.schemas.groups import BuilderOptions, parse_group_table


def test_combined_group_plans_one_request(tmp_path: Path) -> None:
    groups = parse_group_table({"app": {"combine": True, "items": ["a", "b"], "exclude": []}})
    plan = plan_group("app", groups, BundlePaths(base_path=tmp_path), BuilderOptions())

    assert not plan.skipped
    assert len(plan.requests) == 1
    request = plan.requests[0]
    assert request.expression == "a + b"
    assert request.destination.as_posix().endswith("app/app.js")


def test_individual_group_plans_one_request_per_item(tmp_path: Path) -> None:
    groups = parse_group_table({"pages": {"combine": False, "items": ["a", "b"]}})
    plan = plan_group("pages", groups, BundlePaths(base_path=tmp_path), BuilderOptions())

    assert [request.expression for request in plan.requests] == ["a", "b"]
    assert [request.destination.name for request in plan.requests] == ["a.js", "b.js"]


def test_exclusions_are_shared_across_items(tmp_path: Path, group_table) -> None:
    groups = parse_group_table(group_table)
    plan = plan_group("routes", groups, BundlePaths(base_path=tmp_path), BuilderOptions())

    assert [request.expression for request in plan.requests] == [
        "routes/home - jquery - lodash",
        "routes/about - jquery - lodash",
    ]


def test_disabled_group_is_skipped(tmp_path: Path, group_table) -> None:
    groups = parse_group_table(group_table)
    plan = plan_group("legacy", groups, BundlePaths(base_path=tmp_path), BuilderOptions())
    assert plan.skipped
    assert plan.requests == []


def test_unknown_group_raises(tmp_path: Path) -> None:
    with pytest.raises(GroupNotFoundError):
        plan_group("missing", {}, BundlePaths(base_path=tmp_path), BuilderOptions())


def test_cyclic_exclusion_surfaces_from_planning(tmp_path: Path) -> None:
    groups = parse_group_table(
        {
            "a": {"combine": True, "items": ["x"], "exclude": ["b"]},
            "b": {"items": ["b"]},
        }
    )
    with pytest.raises(CyclicExclusionError):
        plan_group("a", groups, BundlePaths(base_path=tmp_path), BuilderOptions())


def test_group_builder_options_are_defaulted_not_overridden(tmp_path: Path) -> None:
    groups = parse_group_table(
        {"app": {"combine": True, "items": ["a"], "builder": {"minify": False, "lowResSourceMaps": True}}}
    )
    defaults = BuilderOptions(minify=True, mangle=True)
    plan = plan_group("app", groups, BundlePaths(base_path=tmp_path), defaults)

    options = plan.requests[0].options.engine_payload()
    assert options["minify"] is False
    assert options["mangle"] is True
    assert options["sourceMaps"] is False
    assert options["lowResSourceMaps"] is True
    assert plan.requests[0].destination.name == "app.js"
    assert groups["app"].builder.mangle is False


def test_group_short_paths(tmp_path: Path, group_table) -> None:
    groups = parse_group_table(group_table)
    paths = BundlePaths(base_path=tmp_path)
    assert group_short_paths("app", groups, paths, BuilderOptions()) == ["bundles/app/app.js"]
    assert group_short_paths("routes", groups, paths, BuilderOptions(minify=True)) == [
        "bundles/routes/home.min.js",
        "bundles/routes/about.min.js",
    ]
