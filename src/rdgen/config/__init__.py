# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator configuration for rdgen."""

from rdgen.config.generator import (
    GeneratorConfig,
    GeneratorConfigError,
    load_generator_config,
    parse_generator_config,
)

__all__ = [
    "GeneratorConfig",
    "GeneratorConfigError",
    "load_generator_config",
    "parse_generator_config",
]
