# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for generator configuration parsing."""

from pathlib import Path

import pytest

from rdgen.config import GeneratorConfig, GeneratorConfigError, load_generator_config, parse_generator_config

# ###############
# Parsing
# ###############


class TestParseGeneratorConfig:
    def test_empty_document_yields_defaults(self) -> None:
        assert parse_generator_config("") == GeneratorConfig()

    def test_all_fields(self) -> None:
        config = parse_generator_config(
            "emit-info: true\nsources: [a.rd, b.rd]\nnamespace: Calc\nmax-depth: 64\n",
        )
        assert config == GeneratorConfig(emit_info=True, sources=["a.rd", "b.rd"], namespace="Calc", max_depth=64)

    def test_non_mapping_is_rejected(self) -> None:
        with pytest.raises(GeneratorConfigError, match="must be a YAML mapping"):
            parse_generator_config("- emit-info\n")

    def test_unknown_fields_are_rejected(self) -> None:
        with pytest.raises(GeneratorConfigError, match="unknown field\\(s\\): colour, size"):
            parse_generator_config("size: 1\ncolour: red\n")

    def test_invalid_yaml(self) -> None:
        with pytest.raises(GeneratorConfigError, match="Invalid YAML in cfg.yaml"):
            parse_generator_config("sources: [a\n", source_label="cfg.yaml")

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("emit-info: 1\n", "'emit-info' must be true or false"),
            ("sources: a.rd\n", "'sources' must be a list of strings"),
            ("sources: [1, 2]\n", "'sources' must be a list of strings"),
            ("namespace: my-grammar\n", "'namespace' must be a Python identifier"),
            ("namespace: 3\n", "'namespace' must be a Python identifier"),
            ("max-depth: 0\n", "'max-depth' must be a positive integer"),
            ("max-depth: true\n", "'max-depth' must be a positive integer"),
            ("max-depth: deep\n", "'max-depth' must be a positive integer"),
        ],
    )
    def test_wrong_types_are_rejected(self, text: str, message: str) -> None:
        with pytest.raises(GeneratorConfigError, match=message):
            parse_generator_config(text)

    def test_errors_name_the_source(self) -> None:
        with pytest.raises(GeneratorConfigError, match="^gen.yaml: "):
            parse_generator_config("emit-info: maybe\n", source_label="gen.yaml")


# ###############
# Loading
# ###############


class TestLoadGeneratorConfig:
    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rdgen.yaml"
        path.write_text("namespace: Grammar\n", encoding="utf-8")
        assert load_generator_config(path).namespace == "Grammar"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(GeneratorConfigError, match="Generator config file not found"):
            load_generator_config(tmp_path / "missing.yaml")

    def test_directory_is_not_readable(self, tmp_path: Path) -> None:
        with pytest.raises(GeneratorConfigError, match="Cannot read generator config file"):
            load_generator_config(tmp_path)
