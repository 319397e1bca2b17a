# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for assembling the complete parser module."""

import ast
from datetime import datetime

import pytest

from rdgen.config import GeneratorConfig
from rdgen.emitter import PythonEmitter, generate
from rdgen.emitter.python import EMPTY_MODEL_TEXT
from rdgen.model import ConsumeAll, ConsumeEntity, ConsumePattern, ConsumeString, Entity, GrammarModel, Property

# ###############
# Helpers
# ###############


def _greeting_model() -> GrammarModel:
    return GrammarModel(
        entities=[
            Entity(
                name="greeting",
                properties=[Property(name="name", owner="greeting", entity="word")],
                action=ConsumeAll(
                    actions=[
                        ConsumeString(text="hello"),
                        ConsumeEntity(entity="word", property_name="name"),
                    ]
                ),
            ),
            Entity(name="word", is_virtual=True, action=ConsumePattern(pattern="([a-z]+)")),
        ]
    )


def _fixed_clock() -> datetime:
    return datetime(2026, 1, 5, 13, 4, 5)


# ###############
# Module layout
# ###############


class TestModuleLayout:
    def test_empty_model(self) -> None:
        generated = generate(GrammarModel())
        assert generated.text == EMPTY_MODEL_TEXT
        assert generated.diagnostics == []

    def test_output_is_valid_python(self) -> None:
        ast.parse(generate(_greeting_model()).text)

    def test_imports_come_first(self) -> None:
        text = generate(_greeting_model()).text
        assert text.startswith("from __future__ import annotations\n\nimport dataclasses\nimport re\n")
        assert "from rdgen.runtime import ParserBase" in text

    def test_sections_in_order(self) -> None:
        text = generate(_greeting_model()).text
        markers = [
            "class Greeting:",
            "Word = str",
            "class Parser(ParserBase):",
            "def parse(source: str)",
            "class Extracting:",
        ]
        positions = [text.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_ends_with_single_newline(self) -> None:
        text = generate(_greeting_model()).text
        assert text.endswith("\n")
        assert not text.endswith("\n\n")

    def test_generation_is_deterministic(self) -> None:
        assert generate(_greeting_model()).text == generate(_greeting_model()).text

    def test_declares_every_top_level_name(self) -> None:
        tree = ast.parse(generate(_greeting_model()).text)
        names = set()
        for node in tree.body:
            if isinstance(node, (ast.ClassDef, ast.FunctionDef)):
                names.add(node.name)
            elif isinstance(node, ast.Assign):
                names.update(target.id for target in node.targets if isinstance(target, ast.Name))
        assert names == {"Greeting", "Word", "Parser", "parse", "Extracting"}


# ###############
# Header
# ###############


class TestHeader:
    def test_no_header_by_default(self) -> None:
        assert "DO NOT EDIT" not in generate(_greeting_model()).text

    def test_header_with_one_source(self) -> None:
        config = GeneratorConfig(emit_info=True, sources=["greeting.rd"])
        text = PythonEmitter(config, clock=_fixed_clock).generate(_greeting_model()).text
        assert text.startswith(
            "# DO NOT EDIT THIS FILE\n"
            "# This file was generated using rdgen\n"
            "# on Monday, January 05, 2026 at 13:04:05\n"
            "# Source: greeting.rd\n"
            "\n"
            "from __future__ import annotations\n"
        )

    def test_header_with_several_sources(self) -> None:
        config = GeneratorConfig(emit_info=True, sources=["a.rd", "b.rd"])
        text = PythonEmitter(config, clock=_fixed_clock).generate(_greeting_model()).text
        assert "# Sources: a.rd, b.rd\n" in text

    def test_header_without_sources(self) -> None:
        config = GeneratorConfig(emit_info=True)
        text = PythonEmitter(config, clock=_fixed_clock).generate(_greeting_model()).text
        assert "# Source" not in text
        assert "# on Monday, January 05, 2026 at 13:04:05\n\nfrom __future__" in text

    def test_header_is_still_valid_python(self) -> None:
        config = GeneratorConfig(emit_info=True, sources=["g.rd"])
        ast.parse(PythonEmitter(config, clock=_fixed_clock).generate(_greeting_model()).text)


# ###############
# Namespace
# ###############


class TestNamespace:
    def test_namespace_class(self) -> None:
        text = generate(_greeting_model(), GeneratorConfig(namespace="Greetings")).text
        assert text.endswith(
            "class Greetings:\n"
            '    """Namespace of the generated Greeting parser."""\n'
            "\n"
            "    Greeting = Greeting\n"
            "    Word = Word\n"
            "    Parser = Parser\n"
            "    Extracting = Extracting\n"
            "    parse = staticmethod(parse)\n"
        )

    def test_invalid_namespace_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="not a Python identifier"):
            generate(_greeting_model(), GeneratorConfig(namespace="my-grammar"))

    @pytest.mark.parametrize("namespace", ["Greeting", "Word", "Parser", "Extracting", "ParserBase", "parse", "re"])
    def test_namespace_colliding_with_generated_name_is_rejected(self, namespace: str) -> None:
        with pytest.raises(ValueError, match="collides with a generated name"):
            generate(_greeting_model(), GeneratorConfig(namespace=namespace))

    def test_namespace_may_differ_only_in_case(self) -> None:
        text = generate(_greeting_model(), GeneratorConfig(namespace="greeting")).text
        assert "class greeting:\n" in text


# ###############
# Diagnostics
# ###############


class TestDiagnostics:
    def test_clean_model_has_no_diagnostics(self) -> None:
        assert generate(_greeting_model()).diagnostics == []

    def test_shadowing_generated_name_warns(self) -> None:
        model = GrammarModel(entities=[Entity(name="parser", action=ConsumeString(text="p"))])
        messages = [d.message for d in generate(model).diagnostics]
        assert messages == ["entity parser shadows the generated Parser"]

    def test_self_reference_warns_once(self) -> None:
        model = GrammarModel(
            entities=[
                Entity(
                    name="chain",
                    properties=[Property(name="chain", owner="chain", entity="chain")],
                    action=ConsumeAll(
                        actions=[
                            ConsumeString(text="x"),
                            ConsumeEntity(entity="chain", property_name="chain", is_optional=True),
                        ]
                    ),
                )
            ]
        )
        messages = [d.message for d in generate(model).diagnostics]
        assert messages == ["rewriting property name: chain"]
