"""AsyncLowering — syntax tree → emission tree lowering.

Every function becomes an ``async`` arrow function and every call an
``await``-wrapped suspension point.  The visitor keeps no state between
calls: the only thing it holds is its dispatch table.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from .emission import EmissionNode, Group, Line, concat, join_inline
from .errors import UnsupportedNodeKind
from .nodes import (
    Arg,
    Assignment,
    BooleanLiteral,
    FunctionDef,
    Identifier,
    IntegerLiteral,
    Invocation,
    SyntaxNode,
)
from . import constants

logger = logging.getLogger(__name__)


class AsyncLowering:
    """Lowers syntax tree nodes into ``Line`` / ``Group`` emission fragments."""

    def __init__(self):
        self._DISPATCH: dict[str, Callable[..., EmissionNode]] = {
            constants.KIND_INTEGER: self._lower_integer,
            constants.KIND_BOOLEAN: self._lower_boolean,
            constants.KIND_IDENTIFIER: self._lower_identifier,
            constants.KIND_ASSIGNMENT: self._lower_assignment,
            constants.KIND_INVOCATION: self._lower_invocation,
            constants.KIND_FUNCTION: self._lower_function,
        }

    # ── entry points ─────────────────────────────────────────────

    def lower(self, node: SyntaxNode | Sequence[SyntaxNode]) -> EmissionNode:
        """Lower a single node, or a statement sequence into a ``Group``."""
        if isinstance(node, (list, tuple)):
            return self.lower_sequence(node)
        handler = self._DISPATCH.get(node.kind)
        if handler is None:
            raise UnsupportedNodeKind(node.kind, node)
        return handler(node)

    def lower_sequence(self, nodes: Sequence[SyntaxNode]) -> Group:
        """Lower sibling statements, preserving order.

        If any statement lowers to a multi-line group, single-line statements
        are wrapped into their own one-line groups so every sibling is a block
        of the same depth.
        """
        fragments = [self.lower(node) for node in nodes]
        if any(isinstance(fragment, Group) for fragment in fragments):
            fragments = [
                fragment if isinstance(fragment, Group) else Group((fragment,))
                for fragment in fragments
            ]
        return Group(tuple(fragments))

    # ── literals ─────────────────────────────────────────────────

    def _lower_integer(self, node: IntegerLiteral) -> Line:
        return Line(str(node.value))

    def _lower_boolean(self, node: BooleanLiteral) -> Line:
        return Line(constants.TRUE_LITERAL if node.value else constants.FALSE_LITERAL)

    def _lower_identifier(self, node: Identifier) -> Line:
        return Line(node.name)

    # ── bindings & calls ─────────────────────────────────────────

    def _lower_assignment(self, node: Assignment) -> EmissionNode:
        return concat(
            Line(f"{constants.DECLARATION_KEYWORD} "),
            self.lower(node.assign_to),
            Line(" = "),
            self.lower(node.assign_value),
        )

    def _lower_invocation(self, node: Invocation) -> EmissionNode:
        callee = self.lower(node.invoked_value)
        if isinstance(node.invoked_value, FunctionDef):
            callee = concat(Line("("), callee, Line(")"))
        arguments = join_inline(
            [self.lower(arg) for arg in node.args_list],
            constants.ARGUMENT_SEPARATOR,
        )
        return concat(
            Line(f"({constants.SUSPEND_KEYWORD} "),
            callee,
            Line("("),
            arguments,
            Line("))"),
        )

    # ── functions ────────────────────────────────────────────────

    def _lower_param(self, arg: Arg) -> EmissionNode:
        fragments: list[EmissionNode] = []
        for expr in arg.expressions:
            if isinstance(expr, Assignment):
                # defaulted parameter, no declaration keyword
                fragments.append(
                    concat(
                        self.lower(expr.assign_to),
                        Line(" = "),
                        self.lower(expr.assign_value),
                    )
                )
            else:
                fragments.append(self.lower(expr))
        return concat(*fragments)

    def _lower_function(self, node: FunctionDef) -> EmissionNode:
        params = join_inline(
            [self._lower_param(arg) for arg in node.arg_list],
            constants.ARGUMENT_SEPARATOR,
        )
        header = concat(
            Line(f"{constants.ASYNC_KEYWORD} ("),
            params,
            Line(f") => {constants.BLOCK_OPEN}"),
        )
        if not node.body:
            return concat(header, Line(constants.BLOCK_CLOSE))
        header_lines = header.children if isinstance(header, Group) else (header,)
        return Group(
            (
                *header_lines,
                self.lower_sequence(node.body),
                Line(constants.BLOCK_CLOSE),
            )
        )


def lower_program(program: Sequence[SyntaxNode]) -> Group:
    """Lower a whole Program into the statement group of the entry point."""
    logger.info("Lowering program with %d top-level statements", len(program))
    return AsyncLowering().lower_sequence(program)
