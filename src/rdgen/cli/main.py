# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the rdgen command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from rdgen.config.generator import GeneratorConfig, GeneratorConfigError, load_generator_config
from rdgen.emitter.python import GeneratedModule, PythonEmitter
from rdgen.model.artifact import read_model
from rdgen.runtime.errors import ParseError
from rdgen.runtime.loader import load_parser

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the rdgen CLI."""
    parser = argparse.ArgumentParser(
        prog="rdgen",
        description="rdgen - recursive-descent parser generator",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a parser module from a grammar model",
        description="Generate Python parser source from a JSON or YAML grammar model.",
    )
    generate_parser.add_argument("model", help="Path to the grammar model (.json, .yaml or .yml)")
    generate_parser.add_argument("--config", "-c", help="Path to a generator configuration file (YAML)")
    generate_parser.add_argument("--output", "-o", help="File to write the parser to (default: standard output)")
    generate_parser.add_argument("--namespace", help="Wrap the generated names in a namespace class")
    generate_parser.add_argument(
        "--emit-info",
        action="store_true",
        help="Start the generated module with a generation header",
    )

    # parse subcommand
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse an input file with a generated parser",
        description="Generate a parser from the model, parse the input file and print the result.",
    )
    parse_parser.add_argument("model", help="Path to the grammar model (.json, .yaml or .yml)")
    parse_parser.add_argument("input", help="Path to the text to parse")
    parse_parser.add_argument("--config", "-c", help="Path to a generator configuration file (YAML)")
    parse_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Trace every entity the parser attempts",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "parse":
        return _cmd_parse(args)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    config = _load_config(args.config)
    if config is None:
        return 1
    if args.namespace is not None:
        config.namespace = args.namespace
    if args.emit_info:
        config.emit_info = True

    generated = _generate(Path(args.model), config)
    if generated is None:
        return 1

    if args.output is None:
        sys.stdout.write(generated.text)
        return 0
    output = Path(args.output)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(generated.text, encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot write '{output}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote parser to '{output}'.")
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    """Handle the parse subcommand."""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = _load_config(args.config)
    if config is None:
        return 1
    generated = _generate(Path(args.model), config)
    if generated is None:
        return 1

    input_path = Path(args.input)
    try:
        text = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot read '{input_path}': {exc}", file=sys.stderr)
        return 1

    module = load_parser(generated.text)
    try:
        result = module.parse(text)
    except (ParseError, RecursionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(result)
    return 0


def _load_config(path: str | None) -> GeneratorConfig | None:
    """Load the generator configuration, reporting failures on stderr."""
    if path is None:
        return GeneratorConfig()
    try:
        return load_generator_config(Path(path))
    except GeneratorConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _generate(model_path: Path, config: GeneratorConfig) -> GeneratedModule | None:
    """Read the model and generate its parser, reporting diagnostics on stderr."""
    try:
        model = read_model(model_path)
    except FileNotFoundError:
        print(f"Error: model file '{model_path}' does not exist.", file=sys.stderr)
        return None
    except (OSError, ValueError) as exc:
        print(f"Error: invalid model '{model_path}': {exc}", file=sys.stderr)
        return None

    try:
        generated = PythonEmitter(config).generate(model)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
    for diagnostic in generated.diagnostics:
        print(f"Warning: {diagnostic.message}", file=sys.stderr)
    return generated
