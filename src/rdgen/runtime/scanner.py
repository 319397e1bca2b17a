# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Cursor-based text scanner used by generated parsers.

The scanner wraps an immutable text and a cursor. Every consumption first
skips the whitespace run at the cursor, so tokens may be separated by any
amount of whitespace.
"""

import re

from rdgen.runtime.errors import LiteralMismatch, PatternMismatch

# ###############
# Public Interface
# ###############

CONTEXT_LENGTH = 30


class Scanner:
    """Consumes literals and patterns from a text, tracking a cursor.

    The cursor is exposed through :attr:`position`; combinators snapshot and
    restore it to backtrack.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._position = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def position(self) -> int:
        """Offset of the cursor from the start of the text."""
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        if not 0 <= value <= len(self._text):
            raise ValueError(f"position {value} outside of text of length {len(self._text)}")
        self._position = value

    @property
    def context(self) -> str:
        """The next characters at the cursor, for single-line diagnostics."""
        return (self.peek(CONTEXT_LENGTH) + "[...]").replace("\n", "\\n")

    @property
    def is_at_end(self) -> bool:
        """True when nothing but whitespace remains. Does not move the cursor."""
        return _WHITESPACE.match(self._text, self._position).end() == len(self._text)

    def peek(self, amount: int) -> str:
        """Return up to *amount* characters at the cursor without consuming them."""
        return self._text[self._position : self._position + max(amount, 0)]

    def skip_leading_whitespace(self) -> None:
        """Advance the cursor past the whitespace run at the cursor, if any."""
        self._position = _WHITESPACE.match(self._text, self._position).end()

    def consume_literal(self, text: str) -> str:
        """Consume *text* after any leading whitespace.

        Raises:
            LiteralMismatch: If the remaining input does not start with *text*.
        """
        self.skip_leading_whitespace()
        if not self._text.startswith(text, self._position):
            raise LiteralMismatch(text, self.context)
        self._position += len(text)
        return text

    def consume_pattern(self, pattern: re.Pattern[str] | str) -> str:
        """Match *pattern* at the cursor after any leading whitespace.

        The whole match is consumed; only the first capturing group is
        returned.

        Raises:
            PatternMismatch: If the pattern does not match at the cursor.
        """
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.skip_leading_whitespace()
        match = compiled.match(self._text, self._position)
        if match is None:
            raise PatternMismatch(compiled.pattern, self.context)
        self._position = match.end()
        return match.group(1) or ""


# ################
# Implementation
# ################

# Pattern.match anchors at the given offset, so the run never starts later.
_WHITESPACE = re.compile(r"\s*")
