"""Read, merge, prune and write the bundle manifest.

The manifest is written as a small JavaScript module so the runtime loader
can evaluate it directly; the JSON payloads inside it are decoded again when
the bundler reloads the file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from pydantic import ValidationError

from ..schemas.manifest import BundleManifest
from .sequencer import BuiltBundle
from .utils import write_text

logger = logging.getLogger(__name__)

_EXPORT_PREFIX = "module.exports.{key} = "
_KEYS = ("chksums", "bundles")


def render_manifest(manifest: Optional[BundleManifest]) -> str:
    manifest = manifest or BundleManifest()
    chksums = json.dumps(manifest.chksums, indent="\t")
    bundles = json.dumps(manifest.bundles, indent="\t")
    return (
        "(function(module){\n"
        f"  var chksums = module.exports.chksums = {chksums};\n"
        f"  var bundles = module.exports.bundles = {bundles};\n"
        "  System.config({bundles: bundles});\n"
        '})((typeof module !== "undefined") ? module : {exports: {}});'
    )


def parse_manifest(text: str) -> BundleManifest:
    """Decode manifest text written by ``render_manifest`` (or plain JSON).

    Raises ``ValueError`` when the payload cannot be decoded.
    """

    stripped = text.strip()
    if stripped.startswith("{"):
        return BundleManifest.model_validate(json.loads(stripped))

    decoder = json.JSONDecoder()
    payload: Dict[str, Any] = {}
    for key in _KEYS:
        marker = _EXPORT_PREFIX.format(key=key)
        index = text.find(marker)
        if index < 0:
            raise ValueError(f"Manifest is missing the '{key}' export")
        value, _ = decoder.raw_decode(text, index + len(marker))
        payload[key] = value
    return BundleManifest.model_validate(payload)


def load_manifest(path: Path) -> BundleManifest:
    """Load the manifest at ``path``; an empty manifest when missing or unreadable."""

    try:
        return parse_manifest(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Unable to read bundle manifest %s: %s", path, exc)
        return BundleManifest()


def merge_manifest(
    manifest: BundleManifest,
    bundles: Iterable[object],
    chksums: Optional[Mapping[str, str]] = None,
) -> BundleManifest:
    """Return ``manifest`` with ``bundles`` added, keyed by short path.

    Later entries replace earlier ones for the same path. Every merged bundle
    gets a checksum entry, empty when none was computed.
    """

    chksums = chksums or {}
    merged = manifest.model_copy(deep=True)
    for bundle in bundles:
        if not isinstance(bundle, BuiltBundle) or not bundle.path:
            continue
        merged.bundles[bundle.path] = list(bundle.modules)
        merged.chksums[bundle.path] = chksums.get(bundle.path) or ""
    return merged


def prune_manifest(manifest: BundleManifest, paths: Iterable[str]) -> BundleManifest:
    """Return ``manifest`` without the given short paths; unknown paths are ignored."""

    pruned = manifest.model_copy(deep=True)
    for path in paths:
        pruned.bundles.pop(path, None)
        pruned.chksums.pop(path, None)
    return pruned


def dump_manifest(manifest: Optional[BundleManifest], path: Path) -> None:
    """Write the manifest to disk; ``None`` writes an empty manifest."""

    logger.info("Updating manifest...")
    write_text(path, render_manifest(manifest))
    logger.info(" ✔ Manifest updated")
