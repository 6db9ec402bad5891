"""Emission tree and the flattening engine that renders it as indented text.

An emission tree is either a :class:`Line` or a :class:`Group` of emission
trees.  Groups carry no "new block" flag; :func:`flatten` infers it from the
shape of the group:

* a group whose first child is a ``Line`` opens a block one level deeper
  than the enclosing lines (e.g. a function body);
* a group whose first child is itself a ``Group`` is an inline wrapper whose
  children already carry their own block depth (e.g. a list of sibling
  statement groups), so it stays at the current depth.

Line text is never inspected while flattening.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from . import constants


@dataclass(frozen=True)
class Line:
    text: str


@dataclass(frozen=True)
class Group:
    children: tuple[EmissionNode, ...] = ()


EmissionNode = Union[Line, Group]


def flatten(
    children: Sequence[EmissionNode],
    indentation: str = "",
    indent_unit: str = constants.INDENT_UNIT,
) -> str:
    """Render *children* depth-first, left to right, one line per ``Line``."""
    rendered: list[str] = []
    for child in children:
        if isinstance(child, Line):
            rendered.append(indentation + child.text if child.text else "")
            continue
        assert isinstance(child, Group), f"Not an emission node: {child!r}"
        if not child.children:
            continue
        nested = (
            indentation
            if isinstance(child.children[0], Group)
            else indentation + indent_unit
        )
        text = flatten(child.children, nested, indent_unit)
        if text:
            rendered.append(text)
    return "\n".join(rendered)


# ── fragment splicing ───────────────────────────────────────────


def _as_block(fragment: EmissionNode) -> list[EmissionNode]:
    """Children of *fragment* viewed as a block that starts and ends with a line."""
    if isinstance(fragment, Line):
        return [fragment]
    assert isinstance(fragment, Group), f"Not an emission node: {fragment!r}"
    assert fragment.children and isinstance(
        fragment.children[0], Line
    ), "Only block groups can be spliced inline"
    return list(fragment.children)


def concat(*fragments: EmissionNode) -> EmissionNode:
    """Splice fragments inline: each fragment's first line continues the previous one's last line.

    ``concat(Line("const f = "), Group((Line("async () => {"), body, Line("}"))))``
    gives ``Group((Line("const f = async () => {"), body, Line("}")))``.
    """
    parts: list[EmissionNode] = [Line("")]
    for fragment in fragments:
        block = _as_block(fragment)
        tail = parts[-1]
        assert isinstance(tail, Line), "Cannot continue a fragment that ends in a group"
        parts[-1] = Line(tail.text + block[0].text)  # type: ignore[union-attr]
        parts.extend(block[1:])
    if len(parts) == 1:
        return parts[0]
    return Group(tuple(parts))


def join_inline(fragments: Sequence[EmissionNode], separator: str) -> EmissionNode:
    """``concat`` with *separator* between consecutive fragments."""
    pieces: list[EmissionNode] = []
    for index, fragment in enumerate(fragments):
        if index:
            pieces.append(Line(separator))
        pieces.append(fragment)
    return concat(*pieces)


def to_nested(node: EmissionNode) -> Union[str, list]:
    """Plain str / nested-list view of an emission tree, for dumps and debugging."""
    if isinstance(node, Line):
        return node.text
    return [to_nested(child) for child in node.children]
