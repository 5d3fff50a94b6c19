"""Run build requests through the bundling engine one at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Union

from .engine import BundleEngine
from .paths import BundlePaths
from .planner import BuildRequest

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BuiltBundle:
    path: str
    modules: List[str]


@dataclass(slots=True)
class BuildFailure:
    name: str
    expression: str
    error: str


BuildResult = Union[BuiltBundle, BuildFailure]


async def run_requests(
    requests: Iterable[BuildRequest],
    engine: BundleEngine,
    paths: BundlePaths,
) -> List[BuildResult]:
    """Build ``requests`` in order, awaiting each before starting the next.

    A failure to prepare the destination or to build it is logged and
    recorded as a ``BuildFailure``; the remaining requests still run.
    """

    results: List[BuildResult] = []
    for request in requests:
        try:
            short_path = paths.relative(request.destination)
            request.destination.parent.mkdir(parents=True, exist_ok=True)
            output = await engine.build(
                request.expression,
                request.destination,
                request.options.engine_payload(),
            )
        except Exception as exc:  # a failed request never aborts the batch
            logger.error("Build Error for %s: %s", request.name, exc)
            results.append(BuildFailure(name=request.name, expression=request.expression, error=str(exc)))
            continue
        logger.info(" ✔ Bundled: %s", request.name)
        results.append(BuiltBundle(path=short_path, modules=list(output.modules)))
    return results
