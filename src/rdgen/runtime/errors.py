# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Failures raised by the scanner and by generated parsers.

Every failure records the context snippet of the input at the point where it
originated, so aggregate failures still point at the offending text through
their ``__cause__`` chain.
"""

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Base class for all recoverable parse failures.

    Attributes:
        context: Up to 30 characters of input at the failure, newline-escaped.
    """

    def __init__(self, message: str, context: str) -> None:
        super().__init__(f"{message} at {context}")
        self.context = context


class LiteralMismatch(ParseError):
    """Raised when the input does not continue with an expected literal."""

    def __init__(self, literal: str, context: str) -> None:
        super().__init__(f"could not consume {literal!r}", context)
        self.literal = literal


class PatternMismatch(ParseError):
    """Raised when a lexical pattern does not match at the cursor."""

    def __init__(self, pattern: str, context: str) -> None:
        super().__init__(f"could not consume pattern {pattern!r}", context)
        self.pattern = pattern


class AlternationExhausted(ParseError):
    """Raised when none of the options of an alternation matched."""

    def __init__(self, label: str, context: str) -> None:
        super().__init__(f"Expected: {label}", context)
        self.label = label


class EntityParseFailed(ParseError):
    """Raised when the action tree of an entity fails as a whole."""

    def __init__(self, entity: str, context: str) -> None:
        super().__init__(f"Failed to parse {entity}", context)
        self.entity = entity


class TrailingInputError(ParseError):
    """Raised when the root entity parsed but input remains."""

    def __init__(self, context: str) -> None:
        super().__init__("Could not parse remaining data", context)


class ParseFailed(ParseError):
    """Terminal failure of a top-level parse, chained from the root failure."""

    def __init__(self, context: str) -> None:
        super().__init__("Failed to parse", context)


class NestingLimitExceeded(RecursionError):
    """Raised when entities nest deeper than the parser allows.

    It is not a :class:`ParseError`, so optional scopes and alternations
    never swallow it.
    """

    def __init__(self, entity: str, limit: int) -> None:
        super().__init__(f"Nesting deeper than {limit} entities while parsing {entity}")
        self.entity = entity
        self.limit = limit
