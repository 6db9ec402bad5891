"""Async-lowering transpiler package."""

from .api import (  # noqa: F401
    parse_source,
    compile_program,
    compile_source,
    compile_with_stats,
    dump_ast,
    dump_emission,
)
from .errors import (  # noqa: F401
    TranspilerError,
    UnsupportedNodeKind,
    SourceParseError,
    SyntaxTreeLoadError,
)
