"""Error types raised by the bundler."""

from __future__ import annotations

from typing import Sequence


class BundlerError(RuntimeError):
    """Base class for bundler failures."""


class BundlerConfigError(BundlerError):
    """Raised when the bundler cannot run with the configuration it was given."""


class GroupNotFoundError(BundlerError):
    """Raised when a group name is not declared in the group table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unable to find group: {name}")
        self.name = name


class CyclicExclusionError(BundlerError):
    """Raised when exclusion resolution reaches a group it is already expanding."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"Cyclic exclusion: {' -> '.join(self.chain)}")


class BuildEngineError(BundlerError):
    """Raised by bundling engines when a build request fails."""
