# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the generator configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

KNOWN_KEYS = frozenset({"emit-info", "sources", "namespace", "max-depth"})


class GeneratorConfigError(Exception):
    """Raised when a generator configuration file is invalid or cannot be loaded."""


@dataclass
class GeneratorConfig:
    """Options controlling the generated module.

    Attributes:
        emit_info: Whether to start the module with a generation header.
        sources: Grammar source files listed in the header.
        namespace: Name of a class re-exporting the generated names, if any.
        max_depth: Entity nesting limit baked into the generated parser;
            ``None`` keeps the runtime default.
    """

    emit_info: bool = False
    sources: list[str] = field(default_factory=list)
    namespace: str | None = None
    max_depth: int | None = None


def load_generator_config(path: Path) -> GeneratorConfig:
    """Load and parse a generator configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A GeneratorConfig instance populated from the file.

    Raises:
        GeneratorConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise GeneratorConfigError(f"Generator config file not found: {path}") from None
    except OSError as exc:
        raise GeneratorConfigError(f"Cannot read generator config file: {exc}") from exc

    return parse_generator_config(text, source_label=str(path))


def parse_generator_config(text: str, source_label: str = "<string>") -> GeneratorConfig:
    """Parse generator config YAML text into a GeneratorConfig.

    An empty document yields the default configuration.

    Raises:
        GeneratorConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise GeneratorConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise GeneratorConfigError(f"{source_label}: generator config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in KNOWN_KEYS)
    if unknown:
        raise GeneratorConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    config = GeneratorConfig()
    if "emit-info" in data:
        config.emit_info = _require_bool(data, "emit-info", source_label)
    if "sources" in data:
        config.sources = _require_string_list(data, "sources", source_label)
    if "namespace" in data:
        config.namespace = _require_identifier(data, "namespace", source_label)
    if "max-depth" in data:
        config.max_depth = _require_positive_int(data, "max-depth", source_label)
    return config


# ################
# Implementation
# ################


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping[key]
    if not isinstance(value, bool):
        raise GeneratorConfigError(f"{source_label}: '{key}' must be true or false")
    return value


def _require_string_list(mapping: dict[str, object], key: str, source_label: str) -> list[str]:
    value = mapping[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise GeneratorConfigError(f"{source_label}: '{key}' must be a list of strings")
    return list(value)


def _require_identifier(mapping: dict[str, object], key: str, source_label: str) -> str:
    value = mapping[key]
    if not isinstance(value, str) or not value.isidentifier():
        raise GeneratorConfigError(f"{source_label}: '{key}' must be a Python identifier")
    return value


def _require_positive_int(mapping: dict[str, object], key: str, source_label: str) -> int:
    value = mapping[key]
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise GeneratorConfigError(f"{source_label}: '{key}' must be a positive integer")
    return value
