#!/usr/bin/env python3
# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, example and build."""

import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

EXAMPLE_MODEL = "docs/examples/greeting.yaml"
EXAMPLE_INPUT = "docs/examples/greeting.txt"

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=rdgen", "--cov-report=term-missing"]),
    ("Example parser", ["uv", "run", "rdgen", "parse", EXAMPLE_MODEL, EXAMPLE_INPUT]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run all CI steps and report results."""
    results = [_run_step(name, cmd) for name, cmd in STEPS]
    return _print_summary(results)


# ################
# Implementation
# ################

SEPARATOR = "=" * 60


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    print(f"\n{chalk.blue(SEPARATOR)}")
    print(chalk.blue(name))
    print(chalk.blue(SEPARATOR))
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=_repo_root())
    return name, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> int:
    print(f"\n{chalk.blue(SEPARATOR)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(SEPARATOR))
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


def _repo_root() -> pathlib.Path:
    return pathlib.Path(__file__).parent.parent


if __name__ == "__main__":
    sys.exit(main())
