"""Pydantic models for the declarative node description.

The description is consumed by the host's form renderer, so the JSON uses the
renderer's camelCase vocabulary (``displayName``, ``displayOptions`` ...).
Models are frozen: a loaded description is never mutated at runtime.

Three kinds of entries may appear in a property's ``options`` list:
- ``PropertyOption``: an enumerated choice of an ``options`` property
- ``NodeProperty``: a field offered inside a ``collection``
- ``PropertyGroup``: a named group of fields inside a ``fixedCollection``
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_SCHEMA_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="forbid",
    frozen=True,
)


class PropertyType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OPTIONS = "options"
    COLLECTION = "collection"
    FIXED_COLLECTION = "fixedCollection"


class DisplayOptions(BaseModel):
    """Visibility conditions, keyed by the name of the parameter they test."""

    model_config = _SCHEMA_CONFIG

    show: dict[str, list[Any]] = Field(default_factory=dict)
    hide: dict[str, list[Any]] = Field(default_factory=dict)


class TypeOptions(BaseModel):
    model_config = _SCHEMA_CONFIG

    min_value: float | None = None
    max_value: float | None = None
    multiple_values: bool = False
    always_open_edit_window: bool = False


class PropertyOption(BaseModel):
    model_config = _SCHEMA_CONFIG

    name: str
    value: str | int | float | bool
    description: str | None = None


class NodeProperty(BaseModel):
    model_config = _SCHEMA_CONFIG

    display_name: str
    name: str
    type: PropertyType
    default: Any = None
    required: bool = False
    description: str | None = None
    placeholder: str | None = None
    display_options: DisplayOptions | None = None
    type_options: TypeOptions | None = None
    options: list[PropertyOption | PropertyGroup | NodeProperty] | None = None

    def choices(self) -> list[Any]:
        """Allowed values of an ``options`` property."""
        return [o.value for o in self.options or [] if isinstance(o, PropertyOption)]

    def fields(self) -> list[NodeProperty]:
        """Fields offered inside a ``collection`` property."""
        return [o for o in self.options or [] if isinstance(o, NodeProperty)]

    def groups(self) -> list[PropertyGroup]:
        return [o for o in self.options or [] if isinstance(o, PropertyGroup)]


class PropertyGroup(BaseModel):
    model_config = _SCHEMA_CONFIG

    display_name: str
    name: str
    values: list[NodeProperty]


class CredentialRequirement(BaseModel):
    model_config = _SCHEMA_CONFIG

    name: str
    required: bool = False


class NodeDescription(BaseModel):
    model_config = _SCHEMA_CONFIG

    display_name: str
    name: str
    icon: str | None = None
    group: list[str] = Field(default_factory=list)
    version: int = Field(ge=1)
    subtitle: str | None = None
    description: str
    defaults: dict[str, Any] = Field(default_factory=dict)
    inputs: list[str] = Field(default_factory=list)
    outputs: list[str] = Field(default_factory=list)
    credentials: list[CredentialRequirement] = Field(default_factory=list)
    properties: list[NodeProperty]

    def properties_named(self, name: str) -> list[NodeProperty]:
        """All top-level declarations sharing ``name``, in declaration order."""
        return [p for p in self.properties if p.name == name]


NodeProperty.model_rebuild()
