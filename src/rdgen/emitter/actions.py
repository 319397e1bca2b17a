# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emits the parsing functions of a generated parser.

Each entity that is not a pattern leaf gets one ``parse_<entity>`` method on
the generated ``Parser`` class. The method declares one local per property,
runs the entity's action tree inside an ``entity`` attempt scope and builds
the entity's value from the locals.

A sequence inside an optional scope or an alternation option can assign
locals before a later step fails. The emitter saves those locals before the
scope and restores them when the scope fails, so the entity's value only
holds what the accepted parse produced.
"""

from collections import Counter
from typing import NamedTuple, assert_never

from rdgen.emitter.entities import INDENT, alias_kind, is_boolean, property_type, type_name, zero_value
from rdgen.emitter.extracting import extractor_name
from rdgen.emitter.naming import Naming, quote, snake_case
from rdgen.model.grammar import (
    ConsumeAll,
    ConsumeAny,
    ConsumeEntity,
    ConsumePattern,
    ConsumeString,
    Entity,
    GrammarModel,
    ParseAction,
    PrimitiveKind,
    Property,
)

# ###############
# Public Interface
# ###############

PARSER_CLASS = "Parser"

# Local receiving unbound values inside virtual dispatcher entities.
VALUE_LOCAL = "_value"


def parse_method_name(entity: Entity) -> str:
    return f"parse_{snake_case(entity.name)}"


class Slot(NamedTuple):
    """A local that an action assigns.

    Attributes:
        local: Name of the local variable.
        zero: Source of the value the local starts with.
        is_plural: Whether the local is a list that actions extend.
    """

    local: str
    zero: str
    is_plural: bool


class ActionEmitter:
    """Renders the ``Parser`` class and the module-level ``parse`` function."""

    def __init__(self, model: GrammarModel, naming: Naming, *, max_depth: int | None = None) -> None:
        self._model = model
        self._naming = naming
        self._max_depth = max_depth
        self._alternations = 0
        self._scopes = 0
        self._uses_value = False

    def emit_all(self) -> str:
        return "\n".join(self.emit_parser_class()) + "\n\n\n" + "\n".join(self.emit_parse_function())

    def emit_parser_class(self) -> list[str]:
        root = self._model.root_entity
        lines = [f"class {PARSER_CLASS}(ParserBase):"]
        if self._max_depth is not None:
            lines.append(f"{INDENT}max_depth = {self._max_depth}")
            lines.append("")
        lines.append(f"{INDENT}def parse(self, source: str) -> {type_name(root)}:")
        lines.append(f"{INDENT}{INDENT}return self.run(source, {self._step(root)})")
        for entity in self._model.entities:
            if entity.is_pattern_leaf:
                continue
            lines.append("")
            lines.extend(INDENT + line if line else line for line in self.emit_entity_parser(entity))
        return lines

    def emit_parse_function(self) -> list[str]:
        root = type_name(self._model.root_entity)
        return [
            f"def parse(source: str) -> {root}:",
            f'{INDENT}"""Parse *source* into a {root}."""',
            f"{INDENT}return {PARSER_CLASS}().parse(source)",
        ]

    def emit_entity_parser(self, entity: Entity) -> list[str]:
        """Render the ``parse_<entity>`` method of *entity* as source lines."""
        self._alternations = 0
        self._scopes = 0
        self._uses_value = False
        body = self.emit_action(entity, entity.action) or ["pass"]

        lines = [f"def {parse_method_name(entity)}(self) -> {self._return_type(entity)}:"]
        for prop in entity.properties:
            local = self._naming.local_name(prop)
            lines.append(f"{INDENT}{local}: {property_type(prop, self._model)} = {zero_value(prop, self._model)}")
        if self._uses_value:
            lines.append(f"{INDENT}{VALUE_LOCAL} = None")
        if len(lines) > 1:
            lines.append("")
        lines.append(f"{INDENT}with self.entity({quote(type_name(entity))}):")
        lines.extend(f"{INDENT}{INDENT}{line}" for line in body)
        lines.extend(INDENT + line for line in self._return(entity))
        return lines

    def emit_action(self, entity: Entity, action: ParseAction) -> list[str]:
        """Translate one action of *entity* into statements."""
        if isinstance(action, ConsumeString):
            lines = self._consume_string(entity, action)
        elif isinstance(action, ConsumePattern):
            lines = self._consume_pattern(entity, action)
        elif isinstance(action, ConsumeEntity):
            lines = self._consume_entity(entity, action)
        elif isinstance(action, ConsumeAll):
            lines = self._consume_all(entity, action)
        elif isinstance(action, ConsumeAny):
            lines = self._consume_any(entity, action)
        else:
            assert_never(action)
        return self._wrap_optional(entity, action, lines)

    # ------------------------------------------------------------------
    # Action variants
    # ------------------------------------------------------------------

    def _consume_string(self, entity: Entity, action: ConsumeString) -> list[str]:
        literal = quote(action.text)
        prop = self._bound_property(entity, action)
        if self._uses_maybe_form(entity, action):
            call = f"self.maybe_consume_literal({literal})"
            if prop is None:
                return [call]
            local = self._naming.local_name(prop)
            if is_boolean(prop, self._model):
                return [f"{local} = {call} is not None"]
            return [f"{local} = {call}"]
        call = f"self.consume_literal({literal})"
        return self._bind(entity, action, call, f"lambda: {call}")

    def _consume_pattern(self, entity: Entity, action: ConsumePattern) -> list[str]:
        call = f"self.consume_pattern(Extracting.{extractor_name(entity)})"
        return self._bind(entity, action, call, f"lambda: {call}")

    def _consume_entity(self, entity: Entity, action: ConsumeEntity) -> list[str]:
        target = self._model.entity(action.entity)
        return self._bind(entity, action, self._call(target), self._step(target))

    def _consume_all(self, entity: Entity, action: ConsumeAll) -> list[str]:
        lines: list[str] = []
        for child in action.actions:
            lines.extend(self.emit_action(entity, child))
        return lines

    def _consume_any(self, entity: Entity, action: ConsumeAny) -> list[str]:
        self._alternations += 1
        alternation = f"_alt{self._alternations}"
        label = quote(action.label or type_name(entity))
        lines = [f"with self.alternation({label}) as {alternation}:"]
        for child in action.actions:
            save, restore = self._save_slots(entity, child)
            body = self.emit_action(entity, child) or ["pass"]
            lines.append(f"{INDENT}if {alternation}.pending:")
            lines.extend(f"{INDENT}{INDENT}{line}" for line in save)
            lines.append(f"{INDENT}{INDENT}with {alternation}.option():")
            lines.extend(f"{INDENT}{INDENT}{INDENT}{line}" for line in body)
            if restore:
                lines.append(f"{INDENT}{INDENT}if {alternation}.pending:")
                lines.extend(f"{INDENT}{INDENT}{INDENT}{line}" for line in restore)
        if not action.actions:
            lines.append(f"{INDENT}pass")
        return lines

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _call(self, target: Entity) -> str:
        """Expression that consumes one *target* value.

        Pattern leaves are inlined as a direct pattern consumption.
        """
        if target.is_pattern_leaf:
            return f"self.consume_pattern(Extracting.{extractor_name(target)})"
        return f"self.{parse_method_name(target)}()"

    def _step(self, target: Entity) -> str:
        """Callable that consumes one *target* value, for ``repeat`` and ``run``."""
        if target.is_pattern_leaf:
            return f"lambda: {self._call(target)}"
        return f"self.{parse_method_name(target)}"

    def _bound_property(self, entity: Entity, action: ParseAction) -> Property | None:
        if action.property_name is None:
            return None
        return entity.property(action.property_name)

    def _uses_maybe_form(self, entity: Entity, action: ConsumeString) -> bool:
        """Optional literals use the non-raising form instead of a scope."""
        prop = self._bound_property(entity, action)
        return action.is_optional and (prop is None or not prop.is_plural)

    def _bind(self, entity: Entity, action: ParseAction, call: str, step: str) -> list[str]:
        """Store the value produced by *call* in the slot bound to *action*."""
        prop = self._bound_property(entity, action)
        if prop is None:
            if entity.is_virtual and isinstance(action, ConsumeEntity):
                self._uses_value = True
                return [f"{VALUE_LOCAL} = {call}"]
            return [call]
        local = self._naming.local_name(prop)
        if prop.is_plural:
            return [f"{local}.extend(self.repeat({step}))"]
        if is_boolean(prop, self._model):
            return [call, f"{local} = True"]
        return [f"{local} = {call}"]

    def _wrap_optional(self, entity: Entity, action: ParseAction, lines: list[str]) -> list[str]:
        if not action.is_optional or not lines:
            return lines
        if isinstance(action, ConsumeString) and self._uses_maybe_form(entity, action):
            return lines
        save, restore = self._save_slots(entity, action)
        if not restore:
            return ["with self.optional():", *(INDENT + line for line in lines)]
        attempt = f"_opt{self._scopes}"
        return [
            *save,
            f"with self.optional() as {attempt}:",
            *(INDENT + line for line in lines),
            f"if {attempt}.failed:",
            *(INDENT + line for line in restore),
        ]

    def _assigned_slots(self, entity: Entity, action: ParseAction) -> list[Slot]:
        """Every assignment *action* and its children make, in emission order."""
        if isinstance(action, (ConsumeAll, ConsumeAny)):
            return [slot for child in action.actions for slot in self._assigned_slots(entity, child)]
        prop = self._bound_property(entity, action)
        if prop is not None:
            return [Slot(self._naming.local_name(prop), zero_value(prop, self._model), prop.is_plural)]
        if entity.is_virtual and isinstance(action, ConsumeEntity):
            return [Slot(VALUE_LOCAL, "None", False)]
        return []

    def _save_slots(self, entity: Entity, action: ParseAction) -> tuple[list[str], list[str]]:
        """Statements saving the locals a failing *action* could leave behind,
        and the statements restoring them.

        Only sequences can fail after assigning; any other action assigns as
        its last step. Lists are truncated to their length before the scope.
        A scalar goes back to its zero value unless another action of the
        entity also assigns it, in which case its previous value is kept.
        """
        if not isinstance(action, ConsumeAll):
            return [], []
        inside = self._assigned_slots(entity, action)
        if not inside:
            return [], []
        self._scopes += 1
        everywhere = Counter(slot.local for slot in self._assigned_slots(entity, entity.action))
        assigned_here = Counter(slot.local for slot in inside)
        save: list[str] = []
        restore: list[str] = []
        for slot in dict.fromkeys(inside):
            if slot.is_plural:
                mark = f"_len{self._scopes}_{slot.local}"
                save.append(f"{mark} = len({slot.local})")
                restore.append(f"del {slot.local}[{mark}:]")
            elif everywhere[slot.local] > assigned_here[slot.local]:
                mark = f"_prev{self._scopes}_{slot.local}"
                save.append(f"{mark} = {slot.local}")
                restore.append(f"{slot.local} = {mark}")
            else:
                restore.append(f"{slot.local} = {slot.zero}")
        return save, restore

    def _return_type(self, entity: Entity) -> str:
        name = type_name(entity)
        if not entity.is_virtual or alias_kind(entity) is PrimitiveKind.BOOLEAN:
            return name
        return f"{name} | None"

    def _return(self, entity: Entity) -> list[str]:
        if not entity.is_virtual:
            return self._construct(entity)
        candidates = [self._naming.local_name(prop) for prop in entity.properties]
        if self._uses_value:
            candidates.append(VALUE_LOCAL)
        if not candidates:
            if alias_kind(entity) is PrimitiveKind.BOOLEAN:
                return ["return True"]
            return ["return None"]
        if len(candidates) == 1:
            return [f"return {candidates[0]}"]
        return [f"return self.produced({', '.join(candidates)})"]

    def _construct(self, entity: Entity) -> list[str]:
        name = type_name(entity)
        if not entity.properties:
            return [f"return {name}()"]
        lines = [f"return {name}("]
        for prop in entity.properties:
            lines.append(f"{INDENT}{self._naming.member_name(prop)}={self._naming.local_name(prop)},")
        lines.append(")")
        return lines
