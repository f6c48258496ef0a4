"""Pydantic models describing declarative config (file-based catalog) blobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_PACKAGE: Final[str] = "olm.package"
SCHEMA_CHANNEL: Final[str] = "olm.channel"
SCHEMA_BUNDLE: Final[str] = "olm.bundle"

PROPERTY_PACKAGE: Final[str] = "olm.package"
PROPERTY_PACKAGE_REQUIRED: Final[str] = "olm.package.required"
PROPERTY_GVK: Final[str] = "olm.gvk"
PROPERTY_GVK_REQUIRED: Final[str] = "olm.gvk.required"
PROPERTY_BUNDLE_OBJECT: Final[str] = "olm.bundle.object"


class DeclarativeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DeclarativeProperty(DeclarativeBaseModel):
    type: str
    value: Any = None


class DeclarativePackage(DeclarativeBaseModel):
    schema_: Literal["olm.package"] = Field(default="olm.package", alias="schema")
    name: str
    default_channel: str = Field(default="", alias="defaultChannel")
    description: str = ""
    properties: list[DeclarativeProperty] = Field(default_factory=list)


class ChannelEntry(DeclarativeBaseModel):
    name: str
    replaces: str = ""
    skips: list[str] = Field(default_factory=list)
    skip_range: str = Field(default="", alias="skipRange")


class DeclarativeChannel(DeclarativeBaseModel):
    schema_: Literal["olm.channel"] = Field(default="olm.channel", alias="schema")
    package: str
    name: str
    entries: list[ChannelEntry] = Field(default_factory=list)
    properties: list[DeclarativeProperty] = Field(default_factory=list)


class RelatedImage(DeclarativeBaseModel):
    name: str = ""
    image: str


class DeclarativeBundle(DeclarativeBaseModel):
    schema_: Literal["olm.bundle"] = Field(default="olm.bundle", alias="schema")
    package: str
    name: str
    image: str = ""
    properties: list[DeclarativeProperty] = Field(default_factory=list)
    related_images: list[RelatedImage] = Field(default_factory=list, alias="relatedImages")

    def property_values(self, property_type: str) -> list[Any]:
        return [prop.value for prop in self.properties if prop.type == property_type]


@dataclass(slots=True)
class Meta:
    """A blob with a schema this tool does not interpret; kept verbatim."""

    schema: str
    package: str
    blob: dict[str, Any]


@dataclass(slots=True)
class DeclarativeConfig:
    packages: list[DeclarativePackage] = field(default_factory=list)
    channels: list[DeclarativeChannel] = field(default_factory=list)
    bundles: list[DeclarativeBundle] = field(default_factory=list)
    others: list[Meta] = field(default_factory=list)
