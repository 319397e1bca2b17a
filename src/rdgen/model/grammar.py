# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Grammar model consumed by the code generator.

The model is built by a grammar front-end and handed to the emitters fully
resolved. Entities reference each other by name; :class:`GrammarModel`
checks that every reference resolves when it is constructed.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Primitive value kinds a pattern-leaf entity can map to."""

    TEXT = "text"
    BOOLEAN = "boolean"


class ConsumeString(BaseModel):
    """Consume a literal piece of text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    text: str
    is_optional: bool = False
    property_name: str | None = None


class ConsumePattern(BaseModel):
    """Consume a regular expression and keep its single capturing group."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pattern"] = "pattern"
    pattern: str
    is_optional: bool = False
    property_name: str | None = None

    @field_validator("pattern")
    @classmethod
    def check_single_capture_group(cls, value: str) -> str:
        try:
            compiled = re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid pattern {value!r}: {exc}") from exc
        if compiled.groups != 1:
            raise ValueError(f"pattern {value!r} must have exactly one capturing group, found {compiled.groups}")
        return value


class ConsumeEntity(BaseModel):
    """Parse a referenced entity. Plurality comes from the bound property."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["entity"] = "entity"
    entity: str
    is_optional: bool = False
    property_name: str | None = None


class ConsumeAll(BaseModel):
    """Parse a sequence of actions; each one must succeed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["all"] = "all"
    actions: list[ParseAction] = _Field(default_factory=list)
    is_optional: bool = False
    property_name: str | None = None


class ConsumeAny(BaseModel):
    """Try actions in declaration order; the first full match wins."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["any"] = "any"
    actions: list[ParseAction] = _Field(default_factory=list)
    label: str = ""
    is_optional: bool = False
    property_name: str | None = None


# A parse action: one of the five consumption kinds.
ParseAction = Annotated[
    ConsumeString | ConsumePattern | ConsumeEntity | ConsumeAll | ConsumeAny,
    _Field(discriminator="kind"),
]


class Property(BaseModel):
    """A named slot on an entity, filled by one sub-action.

    Attributes:
        name: Dash-separated property name.
        owner: Name of the entity declaring the property.
        entity: Name of the entity whose value the property holds.
        is_plural: Whether the property holds a list of values.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    owner: str
    entity: str
    is_plural: bool = False


class Entity(BaseModel):
    """A grammar rule: either a concrete value type or a virtual capability."""

    model_config = ConfigDict(frozen=True)

    name: str
    is_virtual: bool = False
    supers: list[str] = _Field(default_factory=list)
    properties: list[Property] = _Field(default_factory=list)
    action: ParseAction
    type: PrimitiveKind | None = None

    @property
    def is_pattern_leaf(self) -> bool:
        """True for virtual entities that only consume a lexical pattern."""
        return self.is_virtual and isinstance(self.action, ConsumePattern)

    @property
    def has_plural_property(self) -> bool:
        return any(prop.is_plural for prop in self.properties)

    def property(self, name: str) -> Property:
        """Return the property called *name*, raising KeyError if absent."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise KeyError(f"entity {self.name!r} has no property {name!r}")


class GrammarModel(BaseModel):
    """The complete, resolved grammar handed to the generator.

    Attributes:
        entities: All entities, in declaration order.
        root: Name of the entity the generated ``parse`` starts from;
            defaults to the first entity.
    """

    model_config = ConfigDict(frozen=True)

    entities: list[Entity] = _Field(default_factory=list)
    root: str | None = None
    _entities_by_name: dict[str, Entity] = PrivateAttr(default_factory=dict)

    def model_post_init(self, context: Any) -> None:
        self._entities_by_name = {entity.name: entity for entity in self.entities}

    @model_validator(mode="after")
    def check_references(self) -> GrammarModel:
        errors = _reference_errors(self)
        if errors:
            raise ValueError("; ".join(errors))
        return self

    def entity(self, name: str) -> Entity:
        """Return the entity called *name*, raising KeyError if absent."""
        try:
            return self._entities_by_name[name]
        except KeyError:
            raise KeyError(f"unknown entity {name!r}") from None

    @property
    def root_entity(self) -> Entity:
        if self.root is not None:
            return self.entity(self.root)
        return self.entities[0]

    def implementers(self, entity: Entity) -> list[Entity]:
        """Return the concrete entities that list *entity* as a super."""
        return [e for e in self.entities if not e.is_virtual and entity.name in e.supers]


# Resolve forward references in the recursive action models.
ConsumeAll.model_rebuild()
ConsumeAny.model_rebuild()
Entity.model_rebuild()


# ################
# Implementation
# ################


def _reference_errors(model: GrammarModel) -> list[str]:
    """Collect every unresolved or duplicated name in *model*."""
    errors: list[str] = []
    names: set[str] = set()
    for entity in model.entities:
        if entity.name in names:
            errors.append(f"duplicate entity name {entity.name!r}")
        names.add(entity.name)

    if model.root is not None and model.root not in names:
        errors.append(f"root entity {model.root!r} is not defined")

    for entity in model.entities:
        for super_name in entity.supers:
            if super_name not in names:
                errors.append(f"entity {entity.name!r} extends unknown entity {super_name!r}")
        property_names: set[str] = set()
        for prop in entity.properties:
            if prop.name in property_names:
                errors.append(f"entity {entity.name!r} declares property {prop.name!r} twice")
            property_names.add(prop.name)
            if prop.owner != entity.name:
                errors.append(f"property {prop.name!r} of {entity.name!r} names owner {prop.owner!r}")
            if prop.entity not in names:
                errors.append(f"property {prop.name!r} of {entity.name!r} references unknown entity {prop.entity!r}")
        errors.extend(_action_errors(entity, entity.action, names, property_names, top_level=True))
    return errors


def _action_errors(
    entity: Entity,
    action: ConsumeString | ConsumePattern | ConsumeEntity | ConsumeAll | ConsumeAny,
    names: set[str],
    property_names: set[str],
    *,
    top_level: bool,
) -> list[str]:
    errors: list[str] = []
    if action.property_name is not None and action.property_name not in property_names:
        errors.append(f"entity {entity.name!r} binds unknown property {action.property_name!r}")
    if isinstance(action, ConsumePattern) and not top_level:
        errors.append(f"entity {entity.name!r} nests a pattern; patterns must be an entity's whole action")
    elif isinstance(action, ConsumeEntity) and action.entity not in names:
        errors.append(f"entity {entity.name!r} consumes unknown entity {action.entity!r}")
    elif isinstance(action, (ConsumeAll, ConsumeAny)):
        for child in action.actions:
            errors.extend(_action_errors(entity, child, names, property_names, top_level=False))
    return errors
