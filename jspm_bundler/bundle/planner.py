"""Turn configured groups into build requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from ..errors import GroupNotFoundError
from ..schemas.groups import BuilderOptions, GroupSpec, GroupTable
from .exclusions import exclusion_string
from .paths import BundlePaths


@dataclass(slots=True)
class BuildRequest:
    """A single invocation of the bundling engine."""

    name: str
    expression: str
    destination: Path
    options: BuilderOptions


@dataclass(slots=True)
class GroupPlan:
    """Outcome of planning one group."""

    group: str
    requests: List[BuildRequest] = field(default_factory=list)
    skipped: bool = False


def effective_group(spec: GroupSpec, defaults: BuilderOptions) -> GroupSpec:
    """Return a copy of ``spec`` whose builder options are filled from ``defaults``."""

    return spec.model_copy(update={"builder": spec.builder.with_defaults(defaults)})


def lookup_group(name: str, groups: GroupTable) -> GroupSpec:
    spec = groups.get(name)
    if spec is None:
        raise GroupNotFoundError(name)
    return spec


def plan_group(
    name: str,
    groups: GroupTable,
    paths: BundlePaths,
    defaults: BuilderOptions,
) -> GroupPlan:
    """Plan the build requests for group ``name``.

    Raises ``GroupNotFoundError`` for an undeclared group and
    ``CyclicExclusionError`` when its exclusions loop back on themselves.
    A group with ``bundle: false`` yields a skipped plan with no requests.
    """

    spec = effective_group(lookup_group(name, groups), defaults)
    if not spec.bundle:
        return GroupPlan(group=name, skipped=True)

    minus = exclusion_string(spec.exclude, groups)
    builder = spec.builder

    if spec.combine:
        request = BuildRequest(
            name=name,
            expression=" + ".join(spec.items) + minus,
            destination=paths.destination(name, True, builder),
            options=builder,
        )
        return GroupPlan(group=name, requests=[request])

    requests = [
        BuildRequest(
            name=item,
            expression=item + minus,
            destination=paths.destination(item, False, builder),
            options=builder,
        )
        for item in spec.items
    ]
    return GroupPlan(group=name, requests=requests)


def group_short_paths(
    name: str,
    groups: GroupTable,
    paths: BundlePaths,
    defaults: BuilderOptions,
) -> List[str]:
    """Short paths of every artifact group ``name`` produces."""

    spec = effective_group(lookup_group(name, groups), defaults)
    if spec.combine:
        return [paths.short_path(name, True, spec.builder)]
    return [paths.short_path(item, False, spec.builder) for item in spec.items]
