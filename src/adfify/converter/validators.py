"""Runtime shape predicates for ADF nodes.

The transformer filters recursion results, so a child list can hold any
mix of node kinds.  Before such a list is embedded in a parent it is
re-checked here against the parent's content rules.  The predicates are
deep: a paragraph is only valid if each inline child is valid, a list only
if each item is valid, and so on.

Content rules (a subset of the public ADF schema, restricted to the kinds
this package produces):

=============  ==============================================================
parent         allowed content
=============  ==============================================================
paragraph      inline nodes (``text``, ``hardBreak``), possibly empty
heading        inline nodes, possibly empty; ``attrs.level`` in 1-6
blockquote     >= 1 of paragraph, bulletList, orderedList, codeBlock,
               mediaSingle
listItem       >= 1 block; first is paragraph, codeBlock or mediaSingle,
               the rest paragraph, bulletList, orderedList, codeBlock or
               mediaSingle
tableHeader,   >= 1 of paragraph, heading, blockquote, bulletList,
tableCell      orderedList, codeBlock, rule, mediaSingle
=============  ==============================================================
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from adfify.utils.uri import is_absolute_uri

_SIMPLE_MARKS: frozenset[str] = frozenset({"code", "strike", "em", "strong"})

_LIST_TYPES: frozenset[str] = frozenset({"bulletList", "orderedList"})

_BLOCKQUOTE_CHILDREN: frozenset[str] = frozenset({
    "paragraph", "bulletList", "orderedList", "codeBlock", "mediaSingle",
})

_LIST_ITEM_FIRST: frozenset[str] = frozenset({"paragraph", "codeBlock", "mediaSingle"})

_LIST_ITEM_CHILDREN: frozenset[str] = frozenset({
    "paragraph", "bulletList", "orderedList", "codeBlock", "mediaSingle",
})

_TABLE_CELL_CHILDREN: frozenset[str] = frozenset({
    "paragraph", "heading", "blockquote", "bulletList", "orderedList",
    "codeBlock", "rule", "mediaSingle",
})

TOP_LEVEL_BLOCKS: frozenset[str] = frozenset({
    "paragraph", "heading", "blockquote", "bulletList", "orderedList",
    "codeBlock", "rule", "table", "mediaSingle",
})


def _is_type(value: Any, node_type: str) -> bool:
    return isinstance(value, dict) and value.get("type") == node_type


# ---------------------------------------------------------------------------
# Inline
# ---------------------------------------------------------------------------

def is_mark(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    mark_type = value.get("type")
    if not isinstance(mark_type, str):
        return False
    if mark_type in _SIMPLE_MARKS:
        return True
    if mark_type == "link":
        attrs = value.get("attrs")
        return isinstance(attrs, dict) and isinstance(attrs.get("href"), str)
    return False


def is_text_node(value: Any) -> bool:
    """A text node with a non-empty payload and, if present, non-empty marks."""
    if not _is_type(value, "text"):
        return False
    payload = value.get("text")
    if not isinstance(payload, str) or not payload:
        return False
    if "marks" in value:
        marks = value["marks"]
        if not isinstance(marks, list) or not marks:
            return False
        if not all(is_mark(mark) for mark in marks):
            return False
    return True


def is_hard_break(value: Any) -> bool:
    if not _is_type(value, "hardBreak"):
        return False
    attrs = value.get("attrs")
    return attrs is None or (isinstance(attrs, dict) and isinstance(attrs.get("text", ""), str))


def is_inline_node(value: Any) -> bool:
    return is_text_node(value) or is_hard_break(value)


def is_inline_nodes(value: Any) -> bool:
    """True for a (possibly empty) list of inline nodes."""
    return isinstance(value, list) and all(is_inline_node(node) for node in value)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def is_paragraph(value: Any) -> bool:
    return _is_type(value, "paragraph") and is_inline_nodes(value.get("content", []))


def is_heading(value: Any) -> bool:
    if not _is_type(value, "heading"):
        return False
    level = (value.get("attrs") or {}).get("level")
    if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 6:
        return False
    return is_inline_nodes(value.get("content", []))


def is_code_block(value: Any) -> bool:
    if not _is_type(value, "codeBlock"):
        return False
    content = value.get("content")
    if not isinstance(content, list) or len(content) != 1:
        return False
    inner = content[0]
    if not _is_type(inner, "text") or not isinstance(inner.get("text"), str):
        return False
    if "attrs" in value:
        language = value["attrs"].get("language") if isinstance(value["attrs"], dict) else None
        return isinstance(language, str) and bool(language)
    return True


def is_rule(value: Any) -> bool:
    return _is_type(value, "rule")


def is_media(value: Any) -> bool:
    if not _is_type(value, "media"):
        return False
    attrs = value.get("attrs")
    return (
        isinstance(attrs, dict)
        and attrs.get("type") == "external"
        and is_absolute_uri(attrs.get("url"))
    )


def is_media_single(value: Any) -> bool:
    if not _is_type(value, "mediaSingle"):
        return False
    content = value.get("content")
    return isinstance(content, list) and len(content) == 1 and is_media(content[0])


def is_blockquote_content(value: Any) -> bool:
    """A non-empty list of blocks allowed directly inside a blockquote."""
    return (
        isinstance(value, list)
        and bool(value)
        and all(_is_block_of(node, _BLOCKQUOTE_CHILDREN) for node in value)
    )


def is_blockquote(value: Any) -> bool:
    return _is_type(value, "blockquote") and is_blockquote_content(value.get("content"))


def is_list_item_content(value: Any) -> bool:
    """A non-empty block list that may sit inside a ``listItem``."""
    if not isinstance(value, list) or not value:
        return False
    if not _is_block_of(value[0], _LIST_ITEM_FIRST):
        return False
    return all(_is_block_of(node, _LIST_ITEM_CHILDREN) for node in value[1:])


def is_list_item(value: Any) -> bool:
    return _is_type(value, "listItem") and is_list_item_content(value.get("content"))


def is_list(value: Any) -> bool:
    if not isinstance(value, dict) or not isinstance(value.get("type"), str):
        return False
    if value["type"] not in _LIST_TYPES:
        return False
    content = value.get("content")
    return isinstance(content, list) and bool(content) and all(is_list_item(i) for i in content)


def is_table_cell_content(value: Any) -> bool:
    """A non-empty block list that may sit inside a table header or cell."""
    return (
        isinstance(value, list)
        and bool(value)
        and all(_is_block_of(node, _TABLE_CELL_CHILDREN) for node in value)
    )


def _is_cell(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and value.get("type") in ("tableHeader", "tableCell")
        and is_table_cell_content(value.get("content"))
    )


def is_table_row(value: Any) -> bool:
    if not _is_type(value, "tableRow"):
        return False
    content = value.get("content")
    return isinstance(content, list) and all(_is_cell(cell) for cell in content)


def is_table(value: Any) -> bool:
    if not _is_type(value, "table"):
        return False
    content = value.get("content")
    return isinstance(content, list) and bool(content) and all(is_table_row(r) for r in content)


_BLOCK_PREDICATES: dict[str, Callable[[Any], bool]] = {
    "paragraph": is_paragraph,
    "heading": is_heading,
    "blockquote": is_blockquote,
    "bulletList": is_list,
    "orderedList": is_list,
    "codeBlock": is_code_block,
    "rule": is_rule,
    "table": is_table,
    "mediaSingle": is_media_single,
}


def _is_block_of(value: Any, allowed: frozenset[str]) -> bool:
    if not isinstance(value, dict):
        return False
    node_type = value.get("type")
    if not isinstance(node_type, str) or node_type not in allowed:
        return False
    return _BLOCK_PREDICATES[node_type](value)


def is_top_level_block(value: Any) -> bool:
    """True for any block node allowed directly inside an ADF ``doc``."""
    return _is_block_of(value, TOP_LEVEL_BLOCKS)


def is_document(value: Any) -> bool:
    """Validate a full ADF ``doc`` envelope and every node inside it."""
    if not _is_type(value, "doc") or value.get("version") != 1:
        return False
    content = value.get("content")
    return isinstance(content, list) and all(is_top_level_block(node) for node in content)
