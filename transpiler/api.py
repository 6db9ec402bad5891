"""Composable API functions for the transpiler pipeline.

Each function corresponds to a CLI workflow (--ast-only, --emission-only, the
default compile) but is callable programmatically without argparse.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Sequence

from .compile_types import CompileConfig, CompileStats
from .emission import Group, Line, flatten, to_nested
from .lowering import lower_program
from .nodes import SyntaxNode, dump_program
from .parser import Parser

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = CompileConfig()


def parse_source(source: str) -> list[SyntaxNode]:
    """Parse source text into a Program.

    Raises:
        SourceParseError: If the source does not match the grammar.
    """
    logger.info("Parsing source (%d bytes)", len(source))
    return Parser().parse(source)


def wrap_entry_point(body: Group, config: CompileConfig = DEFAULT_CONFIG) -> str:
    """Flatten *body* inside the immediately-invoked async entry point."""
    return flatten(
        [Line(config.entry_point_open), body, Line(config.entry_point_close)],
        indent_unit=config.indent_unit,
    )


def compile_program(
    program: Sequence[SyntaxNode],
    config: CompileConfig = DEFAULT_CONFIG,
) -> str:
    """Lower an already-parsed Program and flatten it into target text.

    Raises:
        UnsupportedNodeKind: If any node has no lowering rule.
    """
    return wrap_entry_point(lower_program(program), config)


def compile_source(source: str, config: CompileConfig = DEFAULT_CONFIG) -> str:
    """Parse, lower and flatten source text.

    Args:
        source: The source code text.
        config: Output configuration (entry point name, indent unit).

    Returns:
        The emitted program text.
    """
    return compile_program(parse_source(source), config)


def compile_with_stats(
    source: str, config: CompileConfig = DEFAULT_CONFIG
) -> tuple[str, CompileStats]:
    """Compile *source* and time each pipeline stage."""
    stats = CompileStats(
        source_bytes=len(source.encode("utf-8")),
        source_lines=len(source.splitlines()),
    )
    started = time.perf_counter()

    program = parse_source(source)
    parsed = time.perf_counter()
    body = lower_program(program)
    lowered = time.perf_counter()
    output = wrap_entry_point(body, config)
    finished = time.perf_counter()

    stats.parse_time = parsed - started
    stats.lower_time = lowered - parsed
    stats.flatten_time = finished - lowered
    stats.total_time = finished - started
    stats.statement_count = len(program)
    stats.output_lines = len(output.splitlines())
    return output, stats


def dump_ast(source: str) -> str:
    """Parse *source* and return its syntax tree as wire-format JSON."""
    return dump_program(parse_source(source))


def dump_emission(program: Sequence[SyntaxNode]) -> str:
    """Lower *program* and return its emission tree as nested JSON lists."""
    return json.dumps(to_nested(lower_program(program)), indent=2)
