"""Command-line driver: read source, compile, write the emitted program."""

from __future__ import annotations

import argparse
import logging
import sys

from .api import compile_program, compile_with_stats, dump_emission, parse_source
from .compile_types import CompileConfig
from .errors import TranspilerError
from .nodes import dump_program, load_program
from . import constants

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transpile",
        description="Lower source programs to async JavaScript",
    )
    parser.add_argument("file", nargs="?",
                        help="Source file to compile (default: stdin)")
    parser.add_argument("--from-ast", action="store_true",
                        help="Treat the input as a JSON syntax tree instead of source text")
    parser.add_argument("--ast-only", action="store_true",
                        help="Only print the syntax tree as JSON")
    parser.add_argument("--emission-only", action="store_true",
                        help="Only print the emission tree as nested lists")
    parser.add_argument("--entry-point", "-e", default=constants.DEFAULT_ENTRY_POINT,
                        help=f"Name of the generated entry point (default: {constants.DEFAULT_ENTRY_POINT})")
    parser.add_argument("--output", "-o", default=None,
                        help="Write the compiled program here instead of stdout")
    parser.add_argument("--stats", action="store_true",
                        help="Print per-stage timings to stderr")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable info logging")
    return parser


def _read_input(path: str | None) -> str:
    if not path:
        return sys.stdin.read()
    with open(path) as f:
        return f.read()


def _run(args: argparse.Namespace) -> str:
    text = _read_input(args.file)
    config = CompileConfig(entry_point=args.entry_point)

    if args.stats:
        output, stats = compile_with_stats(text, config)
        print(stats.report(), file=sys.stderr)
        return output

    program = load_program(text) if args.from_ast else parse_source(text)
    if args.ast_only:
        return dump_program(program)
    if args.emission_only:
        return dump_emission(program)
    return compile_program(program, config)


def main(argv: list[str] | None = None) -> int:
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if args.stats and (args.from_ast or args.ast_only or args.emission_only):
        arg_parser.error(
            "--stats only applies to compiling source text; "
            "drop --from-ast, --ast-only and --emission-only"
        )

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    try:
        output = _run(args)
    except TranspilerError as exc:
        logger.debug("Compilation failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w") as f:
            f.write(output + "\n")
        logger.info("Wrote %s", args.output)
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
