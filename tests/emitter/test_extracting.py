# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the pattern constants class."""

from rdgen.emitter.extracting import emit_extracting, extractor_name, pattern_entities
from rdgen.model import ConsumePattern, ConsumeString, Entity, GrammarModel


def test_extractor_name_is_constant_case() -> None:
    entity = Entity(name="string-literal", is_virtual=True, action=ConsumePattern(pattern='"([^"]*)"'))
    assert extractor_name(entity) == "STRING_LITERAL"


def test_one_constant_per_pattern_entity() -> None:
    model = GrammarModel(
        entities=[
            Entity(name="sentence", action=ConsumeString(text=".")),
            Entity(name="word", is_virtual=True, action=ConsumePattern(pattern="([a-z]+)")),
            Entity(name="number", action=ConsumePattern(pattern=r"(\d+)")),
        ]
    )
    assert [(e.name, a.pattern) for e, a in pattern_entities(model)] == [("word", "([a-z]+)"), ("number", r"(\d+)")]
    assert emit_extracting(model) == (
        "class Extracting:\n"
        '    WORD = re.compile("([a-z]+)")\n'
        '    NUMBER = re.compile("(\\\\d+)")'
    )


def test_no_patterns() -> None:
    model = GrammarModel(entities=[Entity(name="dot", action=ConsumeString(text="."))])
    assert emit_extracting(model) == "class Extracting:\n    pass"
