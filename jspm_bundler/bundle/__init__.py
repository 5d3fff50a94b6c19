"""Bundle planning, building and manifest utilities."""

from .checksums import calc_checksums
from .engine import BuildOutput, BundleEngine, CommandBundleEngine
from .exclusions import exclusion_string, resolve_exclusions
from .manifest import dump_manifest, load_manifest, merge_manifest, prune_manifest
from .paths import BundlePaths
from .planner import BuildRequest, GroupPlan, plan_group
from .sequencer import BuildFailure, BuiltBundle, run_requests

__all__ = [
    "BuildFailure",
    "BuildOutput",
    "BuildRequest",
    "BuiltBundle",
    "BundleEngine",
    "BundlePaths",
    "CommandBundleEngine",
    "GroupPlan",
    "calc_checksums",
    "dump_manifest",
    "exclusion_string",
    "load_manifest",
    "merge_manifest",
    "plan_group",
    "prune_manifest",
    "resolve_exclusions",
    "run_requests",
]
