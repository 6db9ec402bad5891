"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

# Syntax tree discriminators (wire-format ``type`` values)
KIND_INTEGER = "integer"
KIND_FLOAT = "float"
KIND_BOOLEAN = "boolean"
KIND_STRING = "string"
KIND_IDENTIFIER = "identifier"
KIND_ASSIGNMENT = "assignment"
KIND_DESTRUCTURED_ASSIGNMENT = "destructured_assignment"
KIND_DESTRUCTURE = "destructure"
KIND_INVOCATION = "invocation"
KIND_FUNCTION = "function"
KIND_ARG = "arg"
KIND_OBJECT = "object"
KIND_ARRAY = "array"
KIND_IMPORT = "import"

# Target-form text
DECLARATION_KEYWORD = "const"
SUSPEND_KEYWORD = "await"
ASYNC_KEYWORD = "async"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"
ARGUMENT_SEPARATOR = ", "
BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"

INDENT_UNIT = "  "

DEFAULT_ENTRY_POINT = "main"
ENTRY_POINT_OPEN_TEMPLATE = "(async function {name} () {{"
ENTRY_POINT_CLOSE = "}())"

GRAMMAR_FILE = "grammar.lark"
