"""Pydantic model for the persisted bundle manifest."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class BundleManifest(BaseModel):
    bundles: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Loader-relative bundle path mapped to the modules it contains.",
    )
    chksums: Dict[str, str] = Field(
        default_factory=dict,
        description="Loader-relative bundle path mapped to the artifact checksum.",
    )

    model_config = ConfigDict(extra="ignore")

    def is_empty(self) -> bool:
        return not self.bundles and not self.chksums
