from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

import pytest

from jspm_bundler.bundle.engine import BuildOutput
from jspm_bundler.errors import BuildEngineError


class FakeEngine:
    """In-process engine that writes the expression into the artifact."""

    def __init__(self, fail_on: Optional[Set[str]] = None) -> None:
        self.fail_on = set(fail_on or ())
        self.calls: List[Tuple[str, Path, Dict[str, Any]]] = []

    async def build(self, expression: str, destination: Path, options: Mapping[str, Any]) -> BuildOutput:
        self.calls.append((expression, destination, dict(options)))
        included = expression.split(" - ")[0]
        for name in included.split(" + "):
            if name in self.fail_on:
                raise BuildEngineError(f"cannot build {name}")
        destination.write_text(f"// {expression}\n", encoding="utf-8")
        return BuildOutput(modules=[f"{name}.js" for name in included.split(" + ")])


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def make_engine():
    return FakeEngine


@pytest.fixture
def group_table() -> Dict[str, Dict[str, Any]]:
    return {
        "vendor": {"combine": True, "items": ["jquery", "lodash"]},
        "app": {"combine": True, "items": ["app/main", "app/util"], "exclude": ["vendor"]},
        "routes": {"combine": False, "items": ["routes/home", "routes/about"], "exclude": ["vendor"]},
        "legacy": {"combine": True, "bundle": False, "items": ["legacy/shim"]},
    }
