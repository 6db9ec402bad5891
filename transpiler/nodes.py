"""Syntax tree — closed tagged union of source-language nodes.

Every node carries a ``type`` discriminator whose value matches the parser's
wire format, so a tree serialized with ``by_alias=True`` round-trips through
:func:`load_program`.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .errors import SyntaxTreeLoadError
from . import constants

logger = logging.getLogger(__name__)


class SyntaxNode(BaseModel):
    """Common configuration: immutable, snake_case attributes, camelCase wire names."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @property
    def kind(self) -> str:
        return self.type  # type: ignore[attr-defined]


class IntegerLiteral(SyntaxNode):
    type: Literal["integer"] = constants.KIND_INTEGER
    value: int


class FloatLiteral(SyntaxNode):
    type: Literal["float"] = constants.KIND_FLOAT
    value: float


class BooleanLiteral(SyntaxNode):
    type: Literal["boolean"] = constants.KIND_BOOLEAN
    value: bool


class StringLiteral(SyntaxNode):
    type: Literal["string"] = constants.KIND_STRING
    value: str


class Identifier(SyntaxNode):
    type: Literal["identifier"] = constants.KIND_IDENTIFIER
    name: str = Field(alias="value")


class Assignment(SyntaxNode):
    """Binds ``assign_to`` to ``assign_value``."""

    type: Literal["assignment"] = constants.KIND_ASSIGNMENT
    assign_to: Node
    assign_value: Node


class Destructure(SyntaxNode):
    type: Literal["destructure"] = constants.KIND_DESTRUCTURE
    identifiers: list[Identifier] = []


class DestructuredAssignment(SyntaxNode):
    type: Literal["destructured_assignment"] = constants.KIND_DESTRUCTURED_ASSIGNMENT
    assign_to: Destructure
    assign_value: Node


class Invocation(SyntaxNode):
    type: Literal["invocation"] = constants.KIND_INVOCATION
    invoked_value: Node
    args_list: list[Node] = []


class Arg(SyntaxNode):
    """One formal parameter: an identifier, or an assignment for a default."""

    type: Literal["arg"] = constants.KIND_ARG
    expressions: list[Node] = []


class FunctionDef(SyntaxNode):
    type: Literal["function"] = constants.KIND_FUNCTION
    arg_list: list[Arg] = []
    body: list[Node] = []


class ObjectEntry(BaseModel):
    """A key/value pair of an object literal; not a node kind of its own."""

    model_config = SyntaxNode.model_config

    key: Node
    value: Node


class ObjectLiteral(SyntaxNode):
    type: Literal["object"] = constants.KIND_OBJECT
    entries: list[ObjectEntry] = []


class ArrayLiteral(SyntaxNode):
    type: Literal["array"] = constants.KIND_ARRAY
    items: list[Node] = []


class Import(SyntaxNode):
    type: Literal["import"] = constants.KIND_IMPORT
    assign_to: Identifier
    import_from: StringLiteral


Node = Annotated[
    Union[
        IntegerLiteral,
        FloatLiteral,
        BooleanLiteral,
        StringLiteral,
        Identifier,
        Assignment,
        DestructuredAssignment,
        Destructure,
        Invocation,
        FunctionDef,
        Arg,
        ObjectLiteral,
        ArrayLiteral,
        Import,
    ],
    Field(discriminator="type"),
]

for _model in (
    Assignment,
    DestructuredAssignment,
    Invocation,
    Arg,
    FunctionDef,
    ObjectEntry,
    ObjectLiteral,
    ArrayLiteral,
):
    _model.model_rebuild()

Program = list[Node]

_PROGRAM_ADAPTER = TypeAdapter(Program)


def load_program(json_text: str | bytes) -> list[SyntaxNode]:
    """Validate a wire-format JSON syntax tree into a Program.

    Raises ``SyntaxTreeLoadError`` if the document does not match the schema.
    """
    try:
        program = _PROGRAM_ADAPTER.validate_json(json_text)
    except ValidationError as exc:
        raise SyntaxTreeLoadError(f"Invalid syntax tree: {exc}") from exc
    logger.debug("Loaded syntax tree with %d top-level nodes", len(program))
    return program


def dump_program(program: list[SyntaxNode], indent: int | None = 2) -> str:
    """Serialize a Program to its wire-format JSON text."""
    return _PROGRAM_ADAPTER.dump_json(program, by_alias=True, indent=indent).decode(
        "utf-8"
    )
