"""Error taxonomy for the transpiler pipeline."""

from __future__ import annotations

from typing import Any


class TranspilerError(Exception):
    """Base class for every error the pipeline reports to its caller."""

    pass


class UnsupportedNodeKind(TranspilerError):
    """Raised when the lowering visitor meets a node kind it has no rule for."""

    def __init__(self, kind: str, node: Any):
        self.kind = kind
        self.node = node
        content = (
            node.model_dump_json(by_alias=True)
            if hasattr(node, "model_dump_json")
            else repr(node)
        )
        super().__init__(f"Unsupported node kind '{kind}': {content}")


class SourceParseError(TranspilerError):
    """Raised when source text cannot be turned into a syntax tree."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line else ""
        super().__init__(f"{message}{location}")


class SyntaxTreeLoadError(TranspilerError):
    """Raised when a serialized syntax tree does not match the node schema."""

    pass
