"""Grammar-driven parsing layer: source text → syntax tree."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)
from lark.lark import PostLex

from .errors import SourceParseError
from .nodes import (
    Arg,
    ArrayLiteral,
    Assignment,
    BooleanLiteral,
    Destructure,
    DestructuredAssignment,
    FloatLiteral,
    FunctionDef,
    Identifier,
    Import,
    IntegerLiteral,
    Invocation,
    ObjectEntry,
    ObjectLiteral,
    StringLiteral,
    SyntaxNode,
)
from . import constants

logger = logging.getLogger(__name__)

_GRAMMAR_PATH = Path(__file__).with_name(constants.GRAMMAR_FILE)


class ParserFactory(ABC):
    """Abstract factory for obtaining a grammar parser."""

    @abstractmethod
    def get_parser(self) -> Lark: ...


class LarkParserFactory(ParserFactory):
    """Concrete factory that builds an LALR parser from ``grammar.lark``."""

    def __init__(self, grammar_path: Path = _GRAMMAR_PATH):
        self._grammar_path = grammar_path

    def get_parser(self) -> Lark:
        return _build_parser(str(self._grammar_path))


class CallParenPostLex(PostLex):
    """Retypes "(" as a call paren when it directly follows an expression on the same line."""

    always_accept = ("_LPAR",)

    _EXPRESSION_END_TYPES = frozenset({"NAME", "INT", "FLOAT", "STRING"})
    _EXPRESSION_END_VALUES = frozenset({")", "}", "]", "true", "false"})

    def _ends_expression(self, token: Token) -> bool:
        return (
            token.type in self._EXPRESSION_END_TYPES
            or token.value in self._EXPRESSION_END_VALUES
        )

    def process(self, stream):
        previous = None
        for token in stream:
            if (
                token.type == "_LPAR"
                and previous is not None
                and previous.end_line == token.line
                and self._ends_expression(previous)
            ):
                token = Token.new_borrow_pos("_CALL_LPAR", token.value, token)
            previous = token
            yield token


@lru_cache(maxsize=None)
def _build_parser(grammar_path: str) -> Lark:
    logger.debug("Building LALR parser from %s", grammar_path)
    return Lark(
        Path(grammar_path).read_text(),
        parser="lalr",
        lexer="contextual",
        start="start",
        postlex=CallParenPostLex(),
    )


def _to_destructure(target: SyntaxNode) -> Destructure | None:
    """Reinterpret an array / shorthand-object literal as a destructuring pattern."""
    if isinstance(target, ArrayLiteral):
        names = target.items
    elif isinstance(target, ObjectLiteral):
        if not all(entry.key == entry.value for entry in target.entries):
            return None
        names = [entry.key for entry in target.entries]
    else:
        return None
    if not all(isinstance(name, Identifier) for name in names):
        return None
    return Destructure(identifiers=names)


def _decode_string(token) -> str:
    try:
        return json.loads(token)
    except json.JSONDecodeError as exc:
        raise SourceParseError(
            f"Invalid string literal {str(token)!r}: {exc.msg}",
            line=_position(token.line),
            column=_position(token.column),
        ) from exc


def _describe(exc: UnexpectedInput) -> str:
    if isinstance(exc, UnexpectedCharacters):
        return f"Unexpected character {exc.char!r}"
    if isinstance(exc, UnexpectedToken) and exc.token.type != "$END":
        return f"Unexpected token {str(exc.token)!r}"
    return "Unexpected end of input"


def _position(value) -> int:
    return value if isinstance(value, int) and value > 0 else 0


@v_args(inline=True)
class SyntaxTreeBuilder(Transformer):
    """Turns a lark parse tree into wire-format syntax tree nodes."""

    def start(self, *statements):
        return list(statements)

    body = start

    # ── values ──────────────────────────────────────────────────

    def integer(self, token):
        return IntegerLiteral(value=int(token))

    def float(self, token):
        return FloatLiteral(value=float(token))

    def string(self, token):
        return StringLiteral(value=_decode_string(token))

    def true(self):
        return BooleanLiteral(value=True)

    def false(self):
        return BooleanLiteral(value=False)

    def identifier(self, token):
        return Identifier(name=str(token))

    def object(self, *entries):
        return ObjectLiteral(entries=list(entries))

    def pair(self, name, value):
        return ObjectEntry(key=Identifier(name=str(name)), value=value)

    def shorthand(self, name):
        ident = Identifier(name=str(name))
        return ObjectEntry(key=ident, value=ident)

    def array(self, *items):
        return ArrayLiteral(items=list(items))

    # ── functions & calls ───────────────────────────────────────

    def function(self, params, body):
        return FunctionDef(arg_list=params, body=body)

    def params(self, *params):
        return list(params)

    def param(self, name, default=None):
        ident = Identifier(name=str(name))
        if default is None:
            return Arg(expressions=[ident])
        return Arg(expressions=[Assignment(assign_to=ident, assign_value=default)])

    def invocation(self, invoked_value, arguments):
        return Invocation(invoked_value=invoked_value, args_list=arguments)

    def arguments(self, *items):
        return list(items)

    # ── statements ──────────────────────────────────────────────

    def assignment(self, target, value):
        if isinstance(target, Identifier):
            return Assignment(assign_to=target, assign_value=value)
        pattern = _to_destructure(target)
        if pattern is None:
            raise SourceParseError(f"Invalid assignment target: {target.kind}")
        return DestructuredAssignment(assign_to=pattern, assign_value=value)

    def import_statement(self, name, path):
        return Import(
            assign_to=Identifier(name=str(name)),
            import_from=StringLiteral(value=_decode_string(path)),
        )


class Parser:
    """Thin wrapper around a parser factory."""

    def __init__(self, parser_factory: ParserFactory | None = None):
        self._factory = parser_factory or LarkParserFactory()

    def parse(self, source: str) -> list[SyntaxNode]:
        parser = self._factory.get_parser()
        try:
            tree = parser.parse(source)
        except UnexpectedInput as exc:
            raise SourceParseError(
                _describe(exc),
                line=_position(exc.line),
                column=_position(exc.column),
            ) from exc
        try:
            program = SyntaxTreeBuilder().transform(tree)
        except VisitError as exc:
            if isinstance(exc.orig_exc, SourceParseError):
                raise exc.orig_exc from exc
            raise
        logger.info("Parsed %d top-level statements", len(program))
        return program
