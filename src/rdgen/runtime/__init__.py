# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime support imported by generated parsers."""

from rdgen.runtime.errors import (
    AlternationExhausted,
    EntityParseFailed,
    LiteralMismatch,
    NestingLimitExceeded,
    ParseError,
    ParseFailed,
    PatternMismatch,
    TrailingInputError,
)
from rdgen.runtime.loader import load_parser
from rdgen.runtime.parser_base import DEFAULT_MAX_DEPTH, Alternation, Attempt, ParserBase
from rdgen.runtime.scanner import Scanner

__all__ = [
    "Scanner",
    "ParserBase",
    "Alternation",
    "Attempt",
    "DEFAULT_MAX_DEPTH",
    "load_parser",
    # Errors
    "ParseError",
    "LiteralMismatch",
    "PatternMismatch",
    "AlternationExhausted",
    "EntityParseFailed",
    "TrailingInputError",
    "ParseFailed",
    "NestingLimitExceeded",
]
