"""Structural classification of lexer tokens.

The transformer accepts values whose declared type is only nominally a
token: lexer output, hand-built dicts, or tokens from a lexer version that
grew new kinds.  :func:`is_token` is the trust boundary.  It accepts a
value only when its ``type`` names a known kind and the fields that kind
requires are present with the right Python types.  Optional fields are
type-checked when present.  Child token lists are checked to be lists;
their elements are classified when the transformer reaches them.
"""

from __future__ import annotations

from typing import Any

TOKEN_KINDS: frozenset[str] = frozenset({
    "blockquote", "br", "code", "codespan", "def", "del", "em", "escape",
    "heading", "hr", "html", "image", "link", "list", "list_item",
    "paragraph", "space", "strong", "table", "text",
})

_STR = (str,)
_LIST = (list,)
_BOOL = (bool,)
_OPT_STR = (str, type(None))

# kind -> (required fields, optional fields), each a mapping of
# field name -> accepted types.  "raw" is required on every kind.
_FIELDS: dict[str, tuple[dict[str, tuple[type, ...]], dict[str, tuple[type, ...]]]] = {
    "blockquote": ({"text": _STR, "tokens": _LIST}, {}),
    "br": ({}, {}),
    "code": ({"text": _STR}, {"lang": _OPT_STR, "codeBlockStyle": _STR, "escaped": _BOOL}),
    "codespan": ({"text": _STR}, {}),
    "def": ({"tag": _STR, "href": _STR}, {"title": _OPT_STR}),
    "del": ({"text": _STR, "tokens": _LIST}, {}),
    "em": ({"text": _STR, "tokens": _LIST}, {}),
    "escape": ({"text": _STR}, {}),
    "heading": ({"text": _STR, "tokens": _LIST}, {}),
    "hr": ({}, {}),
    "html": ({"text": _STR}, {"block": _BOOL, "pre": _BOOL}),
    "image": ({"href": _STR, "text": _STR}, {"title": _OPT_STR}),
    "link": ({"href": _STR, "text": _STR, "tokens": _LIST}, {"title": _OPT_STR}),
    "list": ({"ordered": _BOOL, "items": _LIST}, {"loose": _BOOL}),
    "list_item": (
        {"text": _STR, "tokens": _LIST},
        {"task": _BOOL, "checked": (bool, type(None)), "loose": _BOOL},
    ),
    "paragraph": ({"text": _STR, "tokens": _LIST}, {"pre": _BOOL}),
    "space": ({}, {}),
    "strong": ({"text": _STR, "tokens": _LIST}, {}),
    "table": ({"header": _LIST, "rows": _LIST}, {"align": _LIST}),
    "text": ({"text": _STR}, {"tokens": _LIST, "escaped": _BOOL}),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _has_fields(
    token: dict,
    required: dict[str, tuple[type, ...]],
    optional: dict[str, tuple[type, ...]],
) -> bool:
    for name, types in required.items():
        if name not in token or not isinstance(token[name], types):
            return False
    for name, types in optional.items():
        if name in token and not isinstance(token[name], types):
            return False
    return True


def _is_table_cell(value: Any) -> bool:
    return _has_fields(value, {"text": _STR, "tokens": _LIST}, {
        "header": _BOOL, "align": _OPT_STR,
    }) if isinstance(value, dict) else False


def is_token(value: Any) -> bool:
    """Return ``True`` if *value* structurally matches a known token kind.

    Never raises.

    Examples
    --------
    >>> is_token({"type": "hr", "raw": "---"})
    True
    >>> is_token({"type": "heading", "raw": "# x", "depth": True, "text": "x", "tokens": []})
    False
    >>> is_token({"type": "footnote", "raw": "[^1]"})
    False
    """
    if not isinstance(value, dict):
        return False
    kind = value.get("type")
    if not isinstance(kind, str) or kind not in TOKEN_KINDS:
        return False
    if not isinstance(value.get("raw"), str):
        return False

    required, optional = _FIELDS[kind]
    if not _has_fields(value, required, optional):
        return False

    if kind == "heading":
        return _is_int(value.get("depth"))
    if kind == "list":
        start = value.get("start", "")
        if start != "" and not _is_int(start):
            return False
        return all(
            isinstance(item, dict) and item.get("type") == "list_item" and is_token(item)
            for item in value["items"]
        )
    if kind == "table":
        if not all(_is_table_cell(cell) for cell in value["header"]):
            return False
        return all(
            isinstance(row, list) and all(_is_table_cell(cell) for cell in row)
            for row in value["rows"]
        )
    return True
