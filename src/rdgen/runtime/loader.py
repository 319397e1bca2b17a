# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Load generated parser source as an importable module."""

import sys
import types

# ###############
# Public Interface
# ###############

DEFAULT_MODULE_NAME = "rdgen_generated"


def load_parser(source: str, module_name: str = DEFAULT_MODULE_NAME) -> types.ModuleType:
    """Execute generated *source* as the module *module_name*.

    The module is registered in ``sys.modules`` before its body runs, which
    the generated dataclasses need to resolve their annotations. A module of
    the same name loaded earlier is replaced.

    Args:
        source: Python source text produced by the generator.
        module_name: Name under which the module is registered.

    Returns:
        The executed module.
    """
    module = types.ModuleType(module_name)
    module.__file__ = f"<{module_name}>"
    sys.modules[module_name] = module
    try:
        exec(compile(source, module.__file__, "exec"), module.__dict__)
    except BaseException:
        del sys.modules[module_name]
        raise
    return module
