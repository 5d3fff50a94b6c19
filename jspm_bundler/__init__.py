"""Group-based bundling and bundle manifest tracking for jspm projects."""

__version__ = "0.1.0"
from .bundle.engine import BuildOutput, BundleEngine, CommandBundleEngine
from .bundle.paths import BundlePaths
from .bundle.planner import BuildRequest
from .bundle.sequencer import BuildFailure, BuiltBundle
from .bundler import Bundler, BundleReport, UnbundleReport
from .config import BundlerConfig, BundlerOptions, load_config, resolve_base_path
from .errors import (
    BuildEngineError,
    BundlerConfigError,
    BundlerError,
    CyclicExclusionError,
    GroupNotFoundError,
)
from .schemas import BuilderOptions, BundleManifest, GroupSpec

__all__ = [
    "__version__",
    "Bundler",
    "BundleReport",
    "UnbundleReport",
    "BundlerConfig",
    "BundlerOptions",
    "load_config",
    "resolve_base_path",
    "BuildOutput",
    "BundleEngine",
    "CommandBundleEngine",
    "BundlePaths",
    "BuildRequest",
    "BuildFailure",
    "BuiltBundle",
    "BuilderOptions",
    "BundleManifest",
    "GroupSpec",
    "BundlerError",
    "BundlerConfigError",
    "GroupNotFoundError",
    "CyclicExclusionError",
    "BuildEngineError",
]
