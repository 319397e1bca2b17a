# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of grammar models.

Models are exchanged as compact JSON files so that a grammar front-end can hand
its resolved output to the generator. Hand-written models may also be given as
YAML. The format is versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from rdgen.model.grammar import GrammarModel

# ###############
# Public Interface
# ###############

MODEL_FORMAT_VERSION = "1"

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def serialize(model: GrammarModel) -> str:
    """Serialize a GrammarModel to a compact JSON string."""
    return json.dumps(_model_to_dict(model), separators=(",", ":"))


def deserialize(data: str) -> GrammarModel:
    """Deserialize a GrammarModel from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`GrammarModel`.

    Raises:
        ValueError: If the format version is not recognised or the model does
            not validate (pydantic's ``ValidationError`` is a ``ValueError``).
    """
    return _model_from_dict(json.loads(data))


def write_model(model: GrammarModel, path: Path) -> None:
    """Write a model to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(model), encoding="utf-8")


def read_model(path: Path) -> GrammarModel:
    """Read a model from *path*; ``.yaml``/``.yml`` files are parsed as YAML."""
    text = path.read_text(encoding="utf-8")
    if path.suffix in YAML_SUFFIXES:
        try:
            obj = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
        return _model_from_dict(obj)
    return deserialize(text)


# ################
# Implementation
# ################


def _model_to_dict(model: GrammarModel) -> dict[str, Any]:
    d: dict[str, Any] = {"v": MODEL_FORMAT_VERSION}
    d.update(model.model_dump(mode="json", exclude_none=True))
    return d


def _model_from_dict(obj: object) -> GrammarModel:
    if not isinstance(obj, dict):
        raise ValueError("A grammar model must be a mapping")
    version = obj.get("v")
    if str(version) != MODEL_FORMAT_VERSION:
        raise ValueError(f"Unsupported model format version: {version!r}")
    body = {key: value for key, value in obj.items() if key != "v"}
    return GrammarModel.model_validate(body)
