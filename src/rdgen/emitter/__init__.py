# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Code generation: turns a grammar model into a Python parser module."""

from rdgen.emitter.diagnostics import Diagnostic, Diagnostics
from rdgen.emitter.naming import Naming, camel_case, constant_case, pascal_case, plural_suffix, snake_case
from rdgen.emitter.python import GeneratedModule, PythonEmitter, generate

__all__ = [
    "generate",
    "PythonEmitter",
    "GeneratedModule",
    "Diagnostic",
    "Diagnostics",
    "Naming",
    "pascal_case",
    "camel_case",
    "snake_case",
    "constant_case",
    "plural_suffix",
]
