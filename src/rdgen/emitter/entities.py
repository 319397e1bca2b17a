# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emits the value types of a generated parser.

Every entity becomes one declaration:

* a virtual entity mapped to a primitive kind becomes a type alias
  (``Word = str``);
* any other virtual entity becomes a capability base class;
* a concrete entity becomes a dataclass implementing its virtual supers,
  with one field per property and a ``__str__`` for debugging output.
"""

from rdgen.emitter.naming import Naming, pascal_case
from rdgen.model.grammar import Entity, GrammarModel, PrimitiveKind, Property

# ###############
# Public Interface
# ###############

INDENT = "    "

_PRIMITIVE_TYPES: dict[PrimitiveKind, str] = {
    PrimitiveKind.TEXT: "str",
    PrimitiveKind.BOOLEAN: "bool",
}


def alias_kind(entity: Entity) -> PrimitiveKind | None:
    """Return the primitive kind a virtual entity stands for, if any.

    Pattern leaves without an explicit type are text.
    """
    if not entity.is_virtual:
        return None
    if entity.type is not None:
        return entity.type
    if entity.is_pattern_leaf:
        return PrimitiveKind.TEXT
    return None


def type_name(entity: Entity) -> str:
    """Name of the class or alias declared for *entity*."""
    return pascal_case(entity.name)


def is_boolean(prop: Property, model: GrammarModel) -> bool:
    return not prop.is_plural and alias_kind(model.entity(prop.entity)) is PrimitiveKind.BOOLEAN


def property_type(prop: Property, model: GrammarModel) -> str:
    """Annotation of the field or local that holds *prop*."""
    base = type_name(model.entity(prop.entity))
    if prop.is_plural:
        return f"list[{base}]"
    if is_boolean(prop, model):
        return base
    return f"{base} | None"


def zero_value(prop: Property, model: GrammarModel) -> str:
    """Initial value of a local slot before the entity's action runs."""
    if prop.is_plural:
        return "[]"
    if is_boolean(prop, model):
        return "False"
    return "None"


class EntityEmitter:
    """Renders entity declarations for one model."""

    def __init__(self, model: GrammarModel, naming: Naming) -> None:
        self._model = model
        self._naming = naming

    def emit_all(self) -> str:
        """Render every entity of the model.

        Entities keep their model order, except that a capability class is
        moved ahead of the first entity deriving from it.
        """
        return "\n\n\n".join("\n".join(self.emit(entity)) for entity in self.declaration_order())

    def declaration_order(self) -> list[Entity]:
        ordered: list[Entity] = []
        seen: set[str] = set()

        def visit(entity: Entity) -> None:
            if entity.name in seen:
                return
            seen.add(entity.name)
            for base in self._capabilities(entity):
                visit(base)
            ordered.append(entity)

        for entity in self._model.entities:
            visit(entity)
        return ordered

    def emit(self, entity: Entity) -> list[str]:
        """Render the declaration of a single entity as source lines."""
        kind = alias_kind(entity)
        if kind is not None:
            return [f"{type_name(entity)} = {_PRIMITIVE_TYPES[kind]}"]
        if entity.is_virtual:
            return self._emit_capability(entity)
        return self._emit_dataclass(entity)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _signature(self, entity: Entity) -> str:
        bases = [type_name(s) for s in self._capabilities(entity)]
        if not bases:
            return f"class {type_name(entity)}:"
        return f"class {type_name(entity)}({', '.join(bases)}):"

    def _capabilities(self, entity: Entity) -> list[Entity]:
        """Virtual supers that are declared as classes; other supers do not
        affect the generated hierarchy.
        """
        supers = [self._model.entity(name) for name in entity.supers]
        return [s for s in supers if s.is_virtual and alias_kind(s) is None]

    def _emit_capability(self, entity: Entity) -> list[str]:
        lines = [self._signature(entity)]
        implementers = self._model.implementers(entity)
        if implementers:
            names = ", ".join(type_name(e) for e in implementers)
            lines.append(f'{INDENT}"""Implemented by {names}."""')
        else:
            lines.append(f"{INDENT}pass")
        return lines

    def _emit_dataclass(self, entity: Entity) -> list[str]:
        lines = ["@dataclasses.dataclass", self._signature(entity)]
        for prop in entity.properties:
            lines.append(INDENT + self._field(prop))
        if entity.properties:
            lines.append("")
        lines.extend(INDENT + line for line in self._str_method(entity))
        return lines

    def _field(self, prop: Property) -> str:
        name = self._naming.member_name(prop)
        annotation = property_type(prop, self._model)
        if prop.is_plural:
            return f"{name}: {annotation} = dataclasses.field(default_factory=list)"
        return f"{name}: {annotation} = {zero_value(prop, self._model)}"

    # ------------------------------------------------------------------
    # Debug rendering
    # ------------------------------------------------------------------

    def _str_method(self, entity: Entity) -> list[str]:
        """``__str__`` rendering ``Name(prop=value,prop=[v,v])``."""
        name = type_name(entity)
        lines = ["def __str__(self) -> str:"]
        if not entity.properties:
            lines.append(f'{INDENT}return "{name}()"')
            return lines
        lines.append(f"{INDENT}fields = [")
        for prop in entity.properties:
            member = self._naming.member_name(prop)
            if prop.is_plural:
                rendered = f'"{member}=[" + ",".join(str(item) for item in self.{member}) + "]"'
            else:
                rendered = f'f"{member}={{self.{member}}}"'
            lines.append(f"{INDENT}{INDENT}{rendered},")
        lines.append(f"{INDENT}]")
        lines.append(f'{INDENT}return "{name}(" + ",".join(fields) + ")"')
        return lines
