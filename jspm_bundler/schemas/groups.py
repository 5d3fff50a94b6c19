"""Pydantic models describing bundle groups."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _names(value: Any) -> List[str]:
    """Accept a sequence of names or a mapping keyed by name."""

    if value is None:
        return []
    if isinstance(value, Mapping):
        return [str(key) for key in value.keys()]
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


class BuilderOptions(BaseModel):
    """Options handed to the bundling engine; unknown keys pass through."""

    minify: bool = False
    mangle: bool = False
    source_maps: bool = Field(default=False, alias="sourceMaps")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def explicit_payload(self) -> Dict[str, Any]:
        """Return only the options that were set explicitly, keyed by alias."""

        fields = type(self).model_fields
        own = self.model_dump(by_alias=True)
        explicit = {
            fields[name].alias or name
            for name in self.model_fields_set
            if name in fields
        }
        explicit.update((self.model_extra or {}).keys())
        return {key: value for key, value in own.items() if key in explicit}

    def with_defaults(self, defaults: "BuilderOptions") -> "BuilderOptions":
        """Fill keys missing from these options with values from ``defaults``."""

        payload = defaults.model_dump(by_alias=True)
        payload.update(self.explicit_payload())
        return BuilderOptions.model_validate(payload)

    def engine_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class GroupSpec(BaseModel):
    """One named group from the group table."""

    combine: bool = False
    bundle: bool = True
    items: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)
    builder: BuilderOptions = Field(default_factory=BuilderOptions)

    model_config = ConfigDict(extra="forbid")

    @field_validator("items", "exclude", mode="before")
    @classmethod
    def _normalize_names(cls, value: Any) -> List[str]:
        return _names(value)

    @field_validator("builder", mode="before")
    @classmethod
    def _default_builder(cls, value: Any) -> Any:
        return {} if value is None else value


GroupTable = Dict[str, GroupSpec]


def parse_group_table(payload: Mapping[str, Any] | None) -> GroupTable:
    """Validate a raw mapping of group name to group configuration."""

    table: GroupTable = {}
    for name, raw in (payload or {}).items():
        if isinstance(raw, GroupSpec):
            table[str(name)] = raw
        else:
            table[str(name)] = GroupSpec.model_validate(raw or {})
    return table
