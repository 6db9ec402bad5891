"""Tests for the emission tree: flatten (indentation inference) and inline splicing."""

from __future__ import annotations

import pytest

from transpiler.emission import Group, Line, concat, flatten, join_inline, to_nested


class TestFlatten:
    def test_empty_sequence_is_empty_text(self):
        assert flatten([]) == ""

    def test_lines_at_current_indentation(self):
        assert flatten([Line("a"), Line("b")], "  ") == "  a\n  b"

    def test_empty_group_emits_nothing(self):
        assert flatten([Line("a"), Group(), Line("b")]) == "a\nb"

    def test_group_of_lines_is_one_level_deeper(self):
        tree = [Line("header {"), Group((Line("x"), Line("y"))), Line("}")]
        assert flatten(tree) == "header {\n  x\n  y\n}"

    def test_group_of_groups_keeps_indentation(self):
        tree = [Group((Group((Line("a"),)), Group((Line("b"),))))]
        assert flatten(tree) == "  a\n  b"

    def test_nested_blocks(self):
        inner = Group((Line("f {"), Group((Line("1"),)), Line("}")))
        tree = [Line("main {"), Group((inner,)), Line("}")]
        assert flatten(tree) == "main {\n  f {\n    1\n  }\n}"

    def test_indentation_is_two_spaces_per_block_level(self):
        tree = [Group((Line("d1"), Group((Line("d2"), Group((Line("d3"),))))))]
        lines = flatten(tree).split("\n")
        assert [len(line) - len(line.lstrip(" ")) for line in lines] == [2, 4, 6]

    def test_custom_indent_unit(self):
        tree = [Line("{"), Group((Line("x"),)), Line("}")]
        assert flatten(tree, indent_unit="\t") == "{\n\tx\n}"

    def test_empty_line_has_no_trailing_spaces(self):
        assert flatten([Group((Line(""),))]) == ""
        assert flatten([Group((Line("a"), Line("")))]) == "  a\n"

    def test_non_emission_node_is_an_assertion_failure(self):
        with pytest.raises(AssertionError):
            flatten(["not a node"])  # type: ignore[list-item]


class TestConcat:
    def test_lines_merge_into_one_line(self):
        assert concat(Line("const "), Line("x"), Line(" = 1")) == Line("const x = 1")

    def test_prefix_lands_on_first_line_of_block(self):
        body = Group((Line("1"),))
        block = Group((Line("async () => {"), body, Line("}")))
        assert concat(Line("const f = "), block) == Group(
            (Line("const f = async () => {"), body, Line("}"))
        )

    def test_suffix_lands_on_last_line_of_block(self):
        body = Group((Line("1"),))
        block = Group((Line("{"), body, Line("}")))
        assert concat(block, Line(")")) == Group((Line("{"), body, Line("})")))

    def test_two_blocks_share_boundary_line(self):
        a = Group((Line("a {"), Group((Line("1"),)), Line("}")))
        b = Group((Line("b {"), Group((Line("2"),)), Line("}")))
        assert concat(a, Line(", "), b) == Group(
            (
                Line("a {"),
                Group((Line("1"),)),
                Line("}, b {"),
                Group((Line("2"),)),
                Line("}"),
            )
        )

    def test_no_fragments_is_empty_line(self):
        assert concat() == Line("")


class TestJoinInline:
    def test_separator_between_items(self):
        assert join_inline([Line("a"), Line("b"), Line("c")], ", ") == Line("a, b, c")

    def test_single_item_has_no_separator(self):
        assert join_inline([Line("a")], ", ") == Line("a")

    def test_empty(self):
        assert join_inline([], ", ") == Line("")


class TestToNested:
    def test_mirrors_structure(self):
        tree = Group((Line("a"), Group((Line("b"), Group()))))
        assert to_nested(tree) == ["a", ["b", []]]
