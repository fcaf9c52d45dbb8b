"""Record types for the PHP extension catalog."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

Performance = Literal["low", "medium", "high"]
Security = Literal["safe", "caution", "risk"]
Size = Literal["small", "medium", "large"]

PresetPerformance = Literal["high", "medium", "balanced"]
PresetSecurity = Literal["strict", "balanced", "permissive"]


class ExtensionInfo(BaseModel):
    """Metadata describing one PHP extension.

    Attributes are snake_case; the camelCase aliases (``displayName``,
    ``useCase``, ``phpVersions``) are the serialized form.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    display_name: str = Field(alias="displayName")
    description: str
    category: str
    icon: str
    use_case: tuple[str, ...] = Field(alias="useCase")
    frameworks: tuple[str, ...]
    dependencies: tuple[str, ...] = ()
    conflicts: tuple[str, ...] = ()
    php_versions: str = Field(alias="phpVersions")
    performance: Performance
    security: Security
    size: Size
    popularity: int = Field(ge=1, le=10)
    documentation: str
    examples: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys and lists instead of tuples."""
        return self.model_dump(mode="json", by_alias=True)


class FrameworkPreset(BaseModel):
    """Recommended extensions and php.ini settings for a framework."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    icon: str
    category: str
    extensions: tuple[str, ...]
    settings: Mapping[str, str | int]
    recommendations: tuple[str, ...] = ()
    performance: PresetPerformance
    security: PresetSecurity

    @field_validator("settings", mode="after")
    @classmethod
    def _freeze_settings(
        cls, value: Mapping[str, str | int]
    ) -> Mapping[str, str | int]:
        # shared through FRAMEWORK_PRESETS
        return MappingProxyType(dict(value))

    @field_serializer("settings")
    def _dump_settings(
        self, value: Mapping[str, str | int]
    ) -> dict[str, str | int]:
        return dict(value)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
