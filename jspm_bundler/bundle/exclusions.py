"""Expansion of group exclusion lists into bundle arithmetic."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Sequence

from ..errors import CyclicExclusionError
from ..schemas.groups import GroupTable


def _names(exclude: Any) -> Iterable[str]:
    if exclude is None:
        return []
    if isinstance(exclude, Mapping):
        return list(exclude.keys())
    if isinstance(exclude, str):
        return [exclude]
    return list(exclude)


def resolve_exclusions(
    exclude: Sequence[str] | Mapping[str, Any] | None,
    groups: GroupTable,
    _chain: Sequence[str] = (),
) -> List[str]:
    """Flatten ``exclude`` into item names.

    A name that is a key of ``groups`` expands to that group's items, which
    may themselves name groups. Anything else is excluded literally. Order
    follows traversal and duplicates are kept.
    """

    minus: List[str] = []
    for name in _names(exclude):
        group = groups.get(name)
        if group is None:
            minus.append(name)
            continue
        if name in _chain:
            raise CyclicExclusionError([*_chain, name])
        minus.extend(resolve_exclusions(group.items, groups, (*_chain, name)))
    return minus


def exclusion_string(
    exclude: Sequence[str] | Mapping[str, Any] | None,
    groups: GroupTable,
) -> str:
    """Render exclusions as a suffix for a bundle expression (``" - a - b"``)."""

    joined = " - ".join(resolve_exclusions(exclude, groups))
    return f" - {joined}" if joined else ""
