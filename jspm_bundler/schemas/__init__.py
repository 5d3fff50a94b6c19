"""Schema definitions for bundle groups and the bundle manifest."""

from .groups import BuilderOptions, GroupSpec, GroupTable
from .manifest import BundleManifest

__all__ = [
    "BuilderOptions",
    "BundleManifest",
    "GroupSpec",
    "GroupTable",
]
