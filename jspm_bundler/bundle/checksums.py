"""Checksums of freshly built bundle artifacts."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable

from .paths import BundlePaths
from .sequencer import BuiltBundle
from .utils import compute_checksum

logger = logging.getLogger(__name__)


async def calc_checksums(
    bundles: Iterable[object],
    paths: BundlePaths,
    *,
    algorithm: str = "sha1",
) -> Dict[str, str]:
    """Return a short path to checksum mapping for every built bundle.

    Entries that are not ``BuiltBundle`` are ignored. A bundle whose artifact
    cannot be read is logged and left out of the result.
    """

    logger.info("Calculating checksums...")
    chksums: Dict[str, str] = {}
    for bundle in bundles:
        if not isinstance(bundle, BuiltBundle):
            continue
        filepath = paths.absolute(bundle.path)
        try:
            digest = await asyncio.to_thread(compute_checksum, filepath, algorithm)
        except (OSError, ValueError, TypeError) as exc:
            logger.warning(" Error: %s: %s", bundle.path, exc)
            continue
        logger.info(" ✔ %s %s", filepath.name, digest)
        chksums[bundle.path] = digest
    return chksums
