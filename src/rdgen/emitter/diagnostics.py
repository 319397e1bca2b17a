# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Non-fatal notices collected while generating a parser."""

from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal notice about the generated code.

    Attributes:
        message: Human-readable description of the notice.
    """

    message: str


@dataclass
class Diagnostics:
    """Collects diagnostics for one generation pass.

    Attributes:
        items: Diagnostics in the order they were reported.
    """

    items: list[Diagnostic] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.items.append(Diagnostic(message))

    @property
    def messages(self) -> list[str]:
        return [item.message for item in self.items]
