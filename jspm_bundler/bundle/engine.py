"""Bundling engine contract and the command-backed implementation."""

from __future__ import annotations

import asyncio
import json
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol

from ..errors import BuildEngineError


@dataclass(slots=True)
class BuildOutput:
    modules: List[str] = field(default_factory=list)


class BundleEngine(Protocol):
    async def build(
        self,
        expression: str,
        destination: Path,
        options: Mapping[str, Any],
    ) -> BuildOutput:  # pragma: no cover - interface
        ...


class CommandBundleEngine:
    """Delegate builds to an external command such as a jspm wrapper script.

    The command template may reference ``{expression}``, ``{destination}``
    and ``{options}`` (JSON). The same values are exported as environment
    variables. The command reports the bundled modules on stdout, either as
    JSON (``{"modules": [...]}`` or a list) or one module per line.
    """

    def __init__(self, command: str, env: Optional[Dict[str, str]] = None) -> None:
        self.command = command
        self.env = env or {}

    async def build(
        self,
        expression: str,
        destination: Path,
        options: Mapping[str, Any],
    ) -> BuildOutput:
        options_json = json.dumps(dict(options), sort_keys=True)
        cmd = self._render_command(expression, destination, options_json)
        env = {
            **os.environ,
            **self.env,
            "JSPM_BUNDLER_EXPRESSION": expression,
            "JSPM_BUNDLER_DESTINATION": str(destination),
            "JSPM_BUNDLER_OPTIONS": options_json,
        }
        proc = await asyncio.create_subprocess_shell(
            cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
        )
        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise BuildEngineError(
                f"Bundling command failed (exit {proc.returncode}) for '{expression}': {detail}"
            )
        if not destination.exists():
            raise BuildEngineError(f"Bundling command did not write {destination}")
        return BuildOutput(modules=parse_modules(stdout.decode("utf-8", errors="replace")))

    def _render_command(self, expression: str, destination: Path, options_json: str) -> str:
        replacements = {
            "{expression}": shlex.quote(expression),
            "{destination}": shlex.quote(str(destination)),
            "{options}": shlex.quote(options_json),
        }
        command = self.command
        for placeholder, value in replacements.items():
            command = command.replace(placeholder, value)
        return command


def parse_modules(output: str) -> List[str]:
    text = output.strip()
    if not text:
        return []
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return [line.strip() for line in text.splitlines() if line.strip()]
    if isinstance(payload, dict):
        payload = payload.get("modules") or []
    if not isinstance(payload, list):
        raise BuildEngineError(f"Unexpected bundling command output: {text[:200]}")
    return [str(module) for module in payload]
