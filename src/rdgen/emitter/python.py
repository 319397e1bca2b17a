# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembles a complete Python parser module from a grammar model.

The module consists of, in order: an optional header, the imports, the
entity declarations, the ``Parser`` class, the module-level ``parse``
function, the ``Extracting`` pattern class and an optional namespace class.
Without the header the output depends only on the model and configuration,
so generating twice yields identical text.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from rdgen.config.generator import GeneratorConfig
from rdgen.emitter.actions import PARSER_CLASS, ActionEmitter
from rdgen.emitter.diagnostics import Diagnostic, Diagnostics
from rdgen.emitter.entities import EntityEmitter, type_name
from rdgen.emitter.extracting import EXTRACTING_CLASS, emit_extracting
from rdgen.emitter.naming import Naming
from rdgen.model.grammar import GrammarModel

# ###############
# Public Interface
# ###############

EMPTY_MODEL_TEXT = "# no entities generated\n"

IMPORTS = """\
from __future__ import annotations

import dataclasses
import re

from rdgen.runtime import ParserBase"""

# Module-level names of the generated code that entity types must not reuse.
GENERATED_NAMES = frozenset({PARSER_CLASS, EXTRACTING_CLASS, "ParserBase"})

# Other module-level names bound by the imports and the parse function.
IMPORTED_NAMES = frozenset({"annotations", "dataclasses", "re", "parse"})


@dataclass(frozen=True)
class GeneratedModule:
    """Result of one generation pass.

    Attributes:
        text: The Python source of the parser module.
        diagnostics: Non-fatal notices collected while generating.
    """

    text: str
    diagnostics: list[Diagnostic] = field(default_factory=list)


class PythonEmitter:
    """Generates Python parser modules.

    Args:
        config: Output options; defaults to :class:`GeneratorConfig` defaults.
        clock: Source of the timestamp written into the header.
    """

    def __init__(self, config: GeneratorConfig | None = None, *, clock: Callable[[], datetime] = datetime.now) -> None:
        self.config = config if config is not None else GeneratorConfig()
        self._clock = clock

    def generate(self, model: GrammarModel) -> GeneratedModule:
        """Generate the parser module for *model*."""
        if self.config.namespace is not None and not self.config.namespace.isidentifier():
            raise ValueError(f"namespace {self.config.namespace!r} is not a Python identifier")
        if not model.entities:
            return GeneratedModule(EMPTY_MODEL_TEXT)

        if self.config.namespace is not None:
            _check_namespace(model, self.config.namespace)

        diagnostics = Diagnostics()
        naming = Naming(diagnostics)
        for entity in model.entities:
            if type_name(entity) in GENERATED_NAMES:
                diagnostics.warn(f"entity {entity.name} shadows the generated {type_name(entity)}")

        sections = [
            IMPORTS,
            EntityEmitter(model, naming).emit_all(),
            ActionEmitter(model, naming, max_depth=self.config.max_depth).emit_all(),
            emit_extracting(model),
        ]
        if self.config.namespace is not None:
            sections.append(self._namespace(model, self.config.namespace))

        text = "\n\n\n".join(sections) + "\n"
        header = self._header()
        if header is not None:
            text = header + "\n\n" + text
        return GeneratedModule(text, list(diagnostics.items))

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _header(self) -> str | None:
        if not self.config.emit_info:
            return None
        now = self._clock()
        lines = [
            "# DO NOT EDIT THIS FILE",
            "# This file was generated using rdgen",
            f"# on {now.strftime('%A, %B %d, %Y')} at {now.strftime('%H:%M:%S')}",
        ]
        sources = self.config.sources
        if sources:
            label = "Sources" if len(sources) > 1 else "Source"
            lines.append(f"# {label}: {', '.join(sources)}")
        return "\n".join(lines)

    def _namespace(self, model: GrammarModel, namespace: str) -> str:
        """A class gathering every generated name under *namespace*."""
        names = [type_name(entity) for entity in model.entities]
        names += [PARSER_CLASS, EXTRACTING_CLASS]
        root = type_name(model.root_entity)
        lines = [f"class {namespace}:", f'    """Namespace of the generated {root} parser."""', ""]
        lines.extend(f"    {name} = {name}" for name in names)
        lines.append("    parse = staticmethod(parse)")
        return "\n".join(lines)


def generate(model: GrammarModel, config: GeneratorConfig | None = None) -> GeneratedModule:
    """Generate the parser module for *model* with *config*."""
    return PythonEmitter(config).generate(model)


# ################
# Implementation
# ################


def _check_namespace(model: GrammarModel, namespace: str) -> None:
    """Reject a namespace class that would rebind another generated name."""
    taken = GENERATED_NAMES | IMPORTED_NAMES | {type_name(entity) for entity in model.entities}
    if namespace in taken:
        raise ValueError(f"namespace {namespace!r} collides with a generated name")
