# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Grammar model for rdgen (entities, properties and parse actions)."""

from rdgen.model.artifact import MODEL_FORMAT_VERSION, deserialize, read_model, serialize, write_model
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

__all__ = [
    # Parse actions
    "ConsumeString",
    "ConsumePattern",
    "ConsumeEntity",
    "ConsumeAll",
    "ConsumeAny",
    "ParseAction",
    # Entities
    "PrimitiveKind",
    "Property",
    "Entity",
    "GrammarModel",
    # Artifacts
    "MODEL_FORMAT_VERSION",
    "serialize",
    "deserialize",
    "write_model",
    "read_model",
]
