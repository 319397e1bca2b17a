# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Combinators that generated recursive-descent parsers are built from.

Generated ``Parser`` classes derive from :class:`ParserBase` and express each
grammar rule with these building blocks:

* ``consume_literal`` / ``maybe_consume_literal`` / ``consume_pattern`` wrap
  the scanner;
* ``with self.entity(name):`` is the attempt scope of one rule;
* ``with self.optional():`` swallows the failure of an optional part;
* ``with self.alternation(label) as alt:`` tries options in declared order;
* ``repeat(step)`` collects zero or more successes.

Each scope that can recover from a failure restores the cursor to where it
was when the scope was entered, so a failed attempt never leaks partial
consumption. Values a failed scope assigned are discarded by the generated
code, which checks ``Attempt.failed`` and ``Alternation.pending`` after the
scope.
"""

from __future__ import annotations

import contextlib
import logging
import re
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from rdgen.runtime.errors import (
    AlternationExhausted,
    EntityParseFailed,
    LiteralMismatch,
    NestingLimitExceeded,
    ParseError,
    ParseFailed,
    TrailingInputError,
)
from rdgen.runtime.scanner import Scanner

# ###############
# Public Interface
# ###############

T = TypeVar("T")

DEFAULT_MAX_DEPTH = 256

trace_log = logging.getLogger("rdgen.trace")


class Alternation:
    """Bookkeeping for one ordered alternation.

    Attributes:
        label: Description of the expected input, used in the failure.
        pending: True until one option has matched.
        failure: The failure of the most recently rejected option.
    """

    def __init__(self, parser: ParserBase, label: str) -> None:
        self._parser = parser
        self.label = label
        self.pending = True
        self.failure: ParseError | None = None

    @contextlib.contextmanager
    def option(self) -> Iterator[None]:
        """Attempt one option; on failure rewind the cursor and carry on."""
        source = self._parser.source
        position = source.position
        try:
            yield
        except ParseError as exc:
            source.position = position
            self.failure = exc
        else:
            self.pending = False


class Attempt:
    """Outcome of an optional scope.

    Attributes:
        failed: True once the body of the scope raised a parse failure.
    """

    def __init__(self) -> None:
        self.failed = False


class ParserBase:
    """Runtime shared by every generated parser.

    Attributes:
        source: The scanner over the text currently being parsed.
        max_depth: Maximum number of nested entity scopes.
    """

    max_depth = DEFAULT_MAX_DEPTH

    def __init__(self, *, max_depth: int | None = None) -> None:
        self.source = Scanner("")
        self._depth = 0
        if max_depth is not None:
            self.max_depth = max_depth

    def run(self, source: str, rule: Callable[[], T]) -> T:
        """Parse all of *source* with *rule*.

        Raises:
            ParseFailed: If *rule* fails; chained from the rule's failure.
            TrailingInputError: If *rule* succeeds but input remains.
            NestingLimitExceeded: If entities nest deeper than ``max_depth``.
        """
        self.source = Scanner(source)
        self._depth = 0
        try:
            result = rule()
        except ParseError as exc:
            raise ParseFailed(_innermost(exc).context) from exc
        if not self.source.is_at_end:
            self.source.skip_leading_whitespace()
            raise TrailingInputError(self.source.context)
        return result

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def consume_literal(self, text: str) -> str:
        return self.source.consume_literal(text)

    def maybe_consume_literal(self, text: str) -> str | None:
        """Consume *text* if it is next; otherwise leave the cursor untouched."""
        position = self.source.position
        try:
            return self.source.consume_literal(text)
        except LiteralMismatch:
            self.source.position = position
            return None

    def consume_pattern(self, pattern: re.Pattern[str] | str) -> str:
        return self.source.consume_pattern(pattern)

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def entity(self, name: str) -> Iterator[None]:
        """Attempt scope of one entity.

        Raises:
            EntityParseFailed: If the body fails; the cursor is rewound first.
        """
        position = self.source.position
        context = self.source.context
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise NestingLimitExceeded(name, self.max_depth)
            if trace_log.isEnabledFor(logging.DEBUG):
                trace_log.debug("parse %s @ %s", name, context)
            yield
        except ParseError as exc:
            self.source.position = position
            raise EntityParseFailed(name, context) from exc
        finally:
            self._depth -= 1

    @contextlib.contextmanager
    def optional(self) -> Iterator[Attempt]:
        """Scope whose failure means "nothing produced" rather than an error.

        The yielded :class:`Attempt` records whether the body failed, so the
        caller can discard the values the body assigned before failing.
        """
        attempt = Attempt()
        position = self.source.position
        try:
            yield attempt
        except ParseError as exc:
            self.source.position = position
            attempt.failed = True
            if trace_log.isEnabledFor(logging.DEBUG):
                trace_log.debug("skipped optional part: %s", exc)

    @contextlib.contextmanager
    def alternation(self, label: str) -> Iterator[Alternation]:
        """Scope of an ordered alternation.

        Generated code guards every option with ``if alt.pending:`` so that
        only the first matching option runs.

        Raises:
            AlternationExhausted: If no option matched; chained from the
                failure of the last option tried.
        """
        context = self.source.context
        alternation = Alternation(self, label)
        yield alternation
        if alternation.pending:
            if trace_log.isEnabledFor(logging.DEBUG):
                trace_log.debug("no option of %s matched @ %s", label, context)
            raise AlternationExhausted(label, context) from alternation.failure

    def repeat(self, step: Callable[[], T]) -> list[T]:
        """Call *step* until it fails and return the values it produced.

        Zero successes yield an empty list. A step that succeeds without
        consuming input ends the repetition.
        """
        values: list[T] = []
        while True:
            position = self.source.position
            try:
                value = step()
            except ParseError:
                self.source.position = position
                return values
            values.append(value)
            if self.source.position == position:
                return values

    @staticmethod
    def produced(*values: Any) -> Any:
        """Return the first value that is not None, or None."""
        for value in values:
            if value is not None:
                return value
        return None


# ################
# Implementation
# ################


def _innermost(exc: ParseError) -> ParseError:
    """Follow the cause chain down to the deepest parse failure."""
    while isinstance(exc.__cause__, ParseError):
        exc = exc.__cause__
    return exc
