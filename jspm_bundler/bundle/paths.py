"""Destination and loader-relative paths for bundle artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import BundlerConfigError
from ..schemas.groups import BuilderOptions


@dataclass(frozen=True, slots=True)
class BundlePaths:
    """Path layout below the resolved base directory."""

    base_path: Path
    bundle_dest: str = "bundles/"
    bundle_file: str = "bundles.js"

    @property
    def output_dir(self) -> Path:
        return self.base_path / self.bundle_dest.lstrip("/")

    @property
    def manifest_path(self) -> Path:
        return self.base_path / self.bundle_file.lstrip("/")

    def destination(self, name: str, combine: bool, builder: BuilderOptions) -> Path:
        """Absolute artifact path for ``name``.

        Combined groups nest under a directory named after the group.
        """

        filename = name + (".min.js" if builder.minify else ".js")
        if combine:
            return self.output_dir / name / filename
        return self.output_dir / filename

    def short_path(self, name: str, combine: bool, builder: BuilderOptions) -> str:
        return self.relative(self.destination(name, combine, builder))

    def relative(self, path: Path) -> str:
        """Strip the base directory so the path matches what the loader sees."""

        try:
            return path.relative_to(self.base_path).as_posix()
        except ValueError as exc:
            raise BundlerConfigError(f"Bundle path {path} is outside {self.base_path}") from exc

    def absolute(self, short_path: str) -> Path:
        return self.base_path / short_path
