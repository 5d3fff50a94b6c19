"""Bundle and unbundle orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .bundle.checksums import calc_checksums
from .bundle.engine import BundleEngine, CommandBundleEngine
from .bundle.manifest import dump_manifest, load_manifest, merge_manifest, prune_manifest
from .bundle.paths import BundlePaths
from .bundle.planner import group_short_paths, plan_group
from .bundle.sequencer import BuildFailure, BuiltBundle, run_requests
from .config import BundlerConfig, BundlerOptions, resolve_base_path
from .errors import BundlerConfigError, BundlerError
from .schemas.groups import GroupSpec, GroupTable, parse_group_table

logger = logging.getLogger(__name__)

GroupNames = Union[str, Sequence[str], None]


@dataclass(slots=True)
class BundleReport:
    manifest_path: Path
    built: List[BuiltBundle] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    checksums: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, object]:
        return {
            "manifest_path": str(self.manifest_path),
            "built": [{"path": bundle.path, "modules": bundle.modules} for bundle in self.built],
            "failed": dict(self.failed),
            "skipped": list(self.skipped),
            "checksums": dict(self.checksums),
        }


@dataclass(slots=True)
class UnbundleReport:
    manifest_path: Path
    removed: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    cleared: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, object]:
        return {
            "manifest_path": str(self.manifest_path),
            "removed": list(self.removed),
            "failed": dict(self.failed),
            "cleared": self.cleared,
        }


def _normalize_names(groups: GroupNames, default: Sequence[str]) -> List[str]:
    if groups is None:
        return list(default)
    if isinstance(groups, str):
        return [groups]
    return list(groups)


class Bundler:
    """Builds configured bundle groups and keeps the bundle manifest current."""

    def __init__(
        self,
        engine: Optional[BundleEngine],
        *,
        base_path: Path,
        options: Optional[BundlerOptions] = None,
        groups: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.engine = engine
        self.options = options or BundlerOptions()
        self.paths = BundlePaths(
            base_path=Path(base_path),
            bundle_dest=self.options.bundle_dest,
            bundle_file=self.options.bundle_file,
        )
        self._groups: GroupTable = parse_group_table(groups)

    @classmethod
    def from_config(
        cls,
        config: BundlerConfig,
        project_root: Path,
        *,
        engine: Optional[BundleEngine] = None,
    ) -> "Bundler":
        if engine is None and config.engine.command:
            engine = CommandBundleEngine(config.engine.command)
        return cls(
            engine,
            base_path=resolve_base_path(project_root),
            options=config.options,
            groups=config.groups,
        )

    @property
    def group_table(self) -> Mapping[str, GroupSpec]:
        return dict(self._groups)

    @property
    def manifest_path(self) -> Path:
        return self.paths.manifest_path

    def groups(self, table: Mapping[str, Any]) -> "Bundler":
        """Replace the group table and return the bundler for chaining."""

        self._groups = parse_group_table(table)
        return self

    async def bundle(self, groups: GroupNames = None) -> BundleReport:
        """Build ``groups`` (every declared group by default) and update the manifest once."""

        if not self._groups:
            raise BundlerConfigError("Cant bundle until bundles are defined")
        if self.engine is None:
            raise BundlerConfigError("No bundling engine configured")

        logger.info("-- Bundling -------------")
        report = BundleReport(manifest_path=self.manifest_path)

        for name in _normalize_names(groups, list(self._groups)):
            try:
                plan = plan_group(name, self._groups, self.paths, self.options.builder)
            except BundlerError as exc:
                logger.warning("%s", exc)
                report.failed[name] = str(exc)
                continue
            if plan.skipped:
                logger.warning("Skipping: %s", name)
                report.skipped.append(name)
                continue

            logger.info("Bundling group: %s ...", name)
            for result in await run_requests(plan.requests, self.engine, self.paths):
                if isinstance(result, BuildFailure):
                    key = name if result.name == name else f"{name}/{result.name}"
                    report.failed[key] = result.error
                else:
                    report.built.append(result)

        report.checksums = await calc_checksums(
            report.built,
            self.paths,
            algorithm=self.options.checksum_algorithm,
        )
        manifest = merge_manifest(load_manifest(self.manifest_path), report.built, report.checksums)
        dump_manifest(manifest, self.manifest_path)
        logger.info("-- Complete -------------")
        return report

    async def unbundle(self, groups: GroupNames = None) -> UnbundleReport:
        """Remove ``groups`` from the manifest, or clear it when no groups are given."""

        logger.info("-- Unbundling -----------")
        report = UnbundleReport(manifest_path=self.manifest_path)

        if groups is None:
            logger.info("Removing all bundles...")
            dump_manifest(None, self.manifest_path)
            report.cleared = True
            return report

        for name in _normalize_names(groups, list(self._groups)):
            try:
                short_paths = group_short_paths(name, self._groups, self.paths, self.options.builder)
            except BundlerError as exc:
                logger.warning("%s", exc)
                report.failed[name] = str(exc)
                continue
            for short_path in short_paths:
                logger.info(" ✔ Removed: %s", short_path)
                report.removed.append(short_path)

        manifest = prune_manifest(load_manifest(self.manifest_path), report.removed)
        dump_manifest(manifest, self.manifest_path)
        return report
