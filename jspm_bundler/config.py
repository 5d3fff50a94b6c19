"""Bundler options, project configuration and config file loading."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import BundlerConfigError
from .schemas.groups import BuilderOptions, GroupTable, parse_group_table

DEFAULT_CONFIG_FILE = "bundles.yml"


class EngineOptions(BaseModel):
    command: Optional[str] = Field(default=None, description="Shell command template for the bundling engine.")

    model_config = ConfigDict(extra="forbid")


class BundlerOptions(BaseModel):
    """Global options shared by every group."""

    bundle_dest: str = Field(default="bundles/", alias="bundleDest")
    bundle_file: str = Field(default="bundles.js", alias="bundleFile")
    builder: BuilderOptions = Field(default_factory=BuilderOptions)
    checksum_algorithm: str = Field(default="sha1", alias="checksumAlgorithm")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("checksum_algorithm")
    @classmethod
    def _fixed_length_digest(cls, value: str) -> str:
        name = value.lower()
        if name not in hashlib.algorithms_available or name.startswith("shake_"):
            raise ValueError(f"Unsupported checksum algorithm '{value}'")
        return name


@dataclass(slots=True)
class BundlerConfig:
    """Everything read from a bundler config file."""

    groups: GroupTable
    options: BundlerOptions = field(default_factory=BundlerOptions)
    engine: EngineOptions = field(default_factory=EngineOptions)
    source: Optional[Path] = None


def resolve_base_path(project_root: Path) -> Path:
    """Return the base URL directory declared by the project's package.json.

    Bundle artifacts and the manifest file are written below this directory.
    A project without package.json uses its root.
    """

    project_root = Path(project_root).resolve()
    package_json = project_root / "package.json"
    base_url = "."
    if package_json.exists():
        try:
            payload = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise BundlerConfigError(f"Invalid project configuration at {package_json}: {exc}") from exc
        jspm = payload.get("jspm") if isinstance(payload, dict) else None
        directories = jspm.get("directories") if isinstance(jspm, dict) else None
        if isinstance(directories, dict) and directories.get("baseURL"):
            base_url = str(directories["baseURL"])
    return (project_root / base_url).resolve()


def parse_config(payload: Mapping[str, Any], *, source: Optional[Path] = None) -> BundlerConfig:
    """Validate a raw config mapping into a ``BundlerConfig``."""

    data = dict(payload)
    raw_groups = data.pop("groups", None) or {}
    raw_engine = data.pop("engine", None) or {}
    if not isinstance(raw_groups, Mapping):
        raise BundlerConfigError(f"'groups' must be a mapping (got {type(raw_groups).__name__})")
    try:
        return BundlerConfig(
            groups=parse_group_table(raw_groups),
            options=BundlerOptions.model_validate(data),
            engine=EngineOptions.model_validate(raw_engine),
            source=source,
        )
    except ValidationError as exc:
        where = f" in {source}" if source else ""
        raise BundlerConfigError(f"Invalid bundler configuration{where}: {exc}") from exc


def load_config(path: Path) -> BundlerConfig:
    """Load a YAML (or JSON) bundler config file."""

    if not path.exists():
        raise BundlerConfigError(f"Bundler configuration not found: {path}")
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise BundlerConfigError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise BundlerConfigError(f"Bundler configuration at {path} must be a mapping")
    return parse_config(payload, source=path)
