"""Tests for the runtime shape predicates in converter/validators.py."""

import pytest

from adfify.converter import nodes
from adfify.converter.validators import (
    is_blockquote_content,
    is_code_block,
    is_document,
    is_heading,
    is_inline_nodes,
    is_list,
    is_list_item_content,
    is_mark,
    is_media_single,
    is_table,
    is_table_cell_content,
    is_text_node,
    is_top_level_block,
)


def _para(text="x"):
    return nodes.paragraph([nodes.text(text)])


def _bullets(*items):
    return {
        "type": "bulletList",
        "content": [{"type": "listItem", "content": [_para(i)]} for i in items],
    }


class TestMarks:
    @pytest.mark.parametrize("mark_type", ["code", "strike", "em", "strong"])
    def test_simple_marks(self, mark_type):
        assert is_mark({"type": mark_type})

    def test_link_requires_href(self):
        assert is_mark({"type": "link", "attrs": {"href": "https://x.org"}})
        assert not is_mark({"type": "link"})
        assert not is_mark({"type": "link", "attrs": {"href": 3}})

    def test_unknown_mark(self):
        assert not is_mark({"type": "underline"})


class TestInline:
    def test_text_node(self):
        assert is_text_node(nodes.text("a", [{"type": "em"}]))

    def test_empty_text_payload_rejected(self):
        assert not is_text_node({"type": "text", "text": ""})

    def test_empty_marks_list_rejected(self):
        assert not is_text_node({"type": "text", "text": "a", "marks": []})

    def test_inline_sequence_allows_hard_break(self):
        assert is_inline_nodes([nodes.text("a"), nodes.hard_break(), nodes.text("b")])

    def test_empty_inline_sequence_is_valid(self):
        assert is_inline_nodes([])

    def test_block_in_inline_sequence_rejected(self):
        assert not is_inline_nodes([nodes.text("a"), nodes.rule()])

    def test_media_single_is_not_inline(self):
        assert not is_inline_nodes([nodes.media_single("https://x.org/a.png")])

    def test_non_list_rejected(self):
        assert not is_inline_nodes(nodes.text("a"))


class TestBlocks:
    def test_heading_level_bounds(self):
        assert is_heading(nodes.heading([], 6))
        assert not is_heading({"type": "heading", "content": [], "attrs": {"level": 7}})
        assert not is_heading({"type": "heading", "content": [], "attrs": {"level": True}})

    def test_code_block(self):
        assert is_code_block(nodes.code_block("x", "go"))
        assert is_code_block(nodes.code_block(""))
        assert not is_code_block({"type": "codeBlock", "content": []})
        assert not is_code_block({**nodes.code_block("x"), "attrs": {"language": ""}})

    def test_media_single_requires_absolute_url(self):
        assert is_media_single(nodes.media_single("https://x.org/a.png"))
        bad = {
            "type": "mediaSingle",
            "attrs": {"layout": "center"},
            "content": [{"type": "media", "attrs": {"type": "external", "url": "a.png"}}],
        }
        assert not is_media_single(bad)

    def test_list_requires_items(self):
        assert is_list(_bullets("a", "b"))
        assert not is_list({"type": "bulletList", "content": []})

    def test_table(self):
        row = {"type": "tableRow", "content": [{"type": "tableCell", "content": [_para()]}]}
        assert is_table({"type": "table", "content": [row]})
        empty_cell = {"type": "tableRow", "content": [{"type": "tableCell", "content": []}]}
        assert not is_table({"type": "table", "content": [empty_cell]})


class TestContentRules:
    def test_blockquote_content(self):
        assert is_blockquote_content([_para(), nodes.code_block("x")])
        assert not is_blockquote_content([])
        assert not is_blockquote_content([nodes.heading([nodes.text("h")], 1)])
        assert not is_blockquote_content([nodes.text("bare")])

    def test_list_item_first_child(self):
        assert is_list_item_content([_para(), _bullets("nested")])
        assert is_list_item_content([nodes.code_block("x")])
        assert not is_list_item_content([_bullets("nested")])
        assert not is_list_item_content([])

    def test_list_item_rejects_bare_inline(self):
        assert not is_list_item_content([nodes.text("bare", [{"type": "strong"}])])

    def test_table_cell_content(self):
        assert is_table_cell_content([_para(), nodes.rule()])
        assert is_table_cell_content([nodes.heading([nodes.text("h")], 2)])
        assert not is_table_cell_content([])
        assert not is_table_cell_content([nodes.text("bare")])

    def test_deep_validation_reaches_nested_text(self):
        broken = {"type": "paragraph", "content": [{"type": "text", "text": ""}]}
        assert not is_blockquote_content([broken])


class TestDocument:
    def test_document_round(self):
        doc = nodes.to_document([_para(), nodes.rule(), _bullets("a")])
        assert is_document(doc)

    def test_bare_text_is_not_top_level(self):
        assert not is_top_level_block(nodes.text("a"))
        assert not is_document(nodes.to_document([nodes.text("a")]))

    def test_wrong_version(self):
        assert not is_document({"version": 2, "type": "doc", "content": []})
