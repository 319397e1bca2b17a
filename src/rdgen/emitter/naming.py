# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier casing and collision rules shared by all emitters.

Grammar names are dash-separated words (``function-call``). Types are
rendered in PascalCase (``FunctionCall``), members, locals and parse methods
in snake_case (``function_call``) and pattern constants in upper case
(``FUNCTION_CALL``).
"""

import json
import keyword

from rdgen.emitter.diagnostics import Diagnostics
from rdgen.model.grammar import Property

# ###############
# Public Interface
# ###############

# Property names that would shadow builtins or the parser itself as locals.
RESERVED_LOCALS: dict[str, str] = {
    "string": "text",
    "int": "number",
    "float": "floating",
    "self": "this",
}

SELF_REFERENCE_PREFIX = "next-"


def pascal_case(name: str) -> str:
    """``function-call`` -> ``FunctionCall``."""
    return "".join(segment[:1].upper() + segment[1:].lower() for segment in _segments(name))


def camel_case(name: str) -> str:
    """``function-call`` -> ``functionCall``."""
    pascal = pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def snake_case(name: str) -> str:
    """``function-call`` -> ``function_call``."""
    return "_".join(segment.lower() for segment in _segments(name))


def constant_case(name: str) -> str:
    """``function-call`` -> ``FUNCTION_CALL``."""
    return snake_case(name).upper()


def quote(text: str) -> str:
    """Render *text* as a double-quoted Python string literal."""
    return json.dumps(text, ensure_ascii=False)


def plural_suffix(prop: Property) -> str:
    """Return the suffix that turns the property name into its plural form."""
    if not prop.is_plural:
        return ""
    if prop.name.endswith("x"):
        return "es"
    return "s"


class Naming:
    """Derives member and local names for properties.

    A property named like the entity declaring it (``rule ::= "x" [rule]``)
    would collide with the generated type; it is renamed with the
    ``next-`` prefix and a warning is reported to *diagnostics*, once per
    property.
    """

    def __init__(self, diagnostics: Diagnostics) -> None:
        self._diagnostics = diagnostics
        self._warned: set[tuple[str, str]] = set()

    def property_name(self, prop: Property) -> str:
        """Return the dash-separated member name of *prop*."""
        if prop.name == prop.owner:
            key = (prop.owner, prop.name)
            if key not in self._warned:
                self._warned.add(key)
                self._diagnostics.warn(f"rewriting property name: {prop.name}")
            return SELF_REFERENCE_PREFIX + prop.name
        return prop.name + plural_suffix(prop)

    def member_name(self, prop: Property) -> str:
        return _safe_identifier(snake_case(self.property_name(prop)))

    def local_name(self, prop: Property) -> str:
        if prop.name == prop.owner:
            return _safe_identifier(snake_case(self.property_name(prop)))
        name = RESERVED_LOCALS.get(prop.name, prop.name)
        return _safe_identifier(snake_case(name + plural_suffix(prop)))


# ################
# Implementation
# ################


def _segments(name: str) -> list[str]:
    return [segment for segment in name.split("-") if segment]


def _safe_identifier(name: str) -> str:
    if keyword.iskeyword(name):
        return name + "_"
    return name
