"""Shared file helpers used by bundle tooling."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Optional


def compute_checksum(path: Path, algorithm: str = "sha1") -> str:
    """Return the hex digest of a file using ``algorithm``."""

    digest = hashlib.new(algorithm)
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


def write_text(path: Path, content: str, *, newline: Optional[str] = None) -> None:
    """Write text to file ensuring parent directories exist."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline=newline)
