# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emits the ``Extracting`` class holding every lexical pattern.

Each entity whose whole action is a pattern gets one precompiled constant;
call sites refer to the constant instead of repeating the pattern.
"""

from rdgen.emitter.naming import constant_case, quote
from rdgen.model.grammar import ConsumePattern, Entity, GrammarModel

# ###############
# Public Interface
# ###############

EXTRACTING_CLASS = "Extracting"


def extractor_name(entity: Entity) -> str:
    """Name of the pattern constant for *entity*."""
    return constant_case(entity.name)


def pattern_entities(model: GrammarModel) -> list[tuple[Entity, ConsumePattern]]:
    """Entities whose action is exactly a pattern, paired with that pattern, in model order."""
    return [(entity, action) for entity in model.entities if isinstance(action := entity.action, ConsumePattern)]


def emit_extracting(model: GrammarModel) -> str:
    """Render the ``Extracting`` class for *model*."""
    lines = [f"class {EXTRACTING_CLASS}:"]
    for entity, action in pattern_entities(model):
        lines.append(f"    {extractor_name(entity)} = re.compile({quote(action.pattern)})")
    if len(lines) == 1:
        lines.append("    pass")
    return "\n".join(lines)
