# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the rdgen documentation."""

project = "rdgen"
author = "rdgen Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_typehints = "description"

html_theme = "alabaster"
