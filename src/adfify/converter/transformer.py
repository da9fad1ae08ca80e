"""Transform lexer tokens into ADF content nodes.

This is the recursive core of the package.  :func:`transform` maps a token
(or a list of tokens) to a list of nodes; :func:`transform_one` maps a
single token to one node or ``None``.  Every token first passes
:func:`~adfify.converter.classifier.is_token`; anything that does not
classify is dropped, as is any kind without an ADF counterpart.

Composite kinds recurse through :func:`transform` and re-validate the
result with :mod:`~adfify.converter.validators` before embedding it,
since a filtered recursion result may hold any mix of node kinds:

- blockquote  -> blockquote, if the children form blockquote content
- heading     -> heading, if the children are inline; depth clamped to 1-6
- list        -> bulletList / orderedList; invalid items are filtered
- paragraph   -> paragraph, or the lone mediaSingle it contains
- table       -> table; invalid cells are dropped with a warning

``convert_paragraph`` forces a bare ``text`` token into its own paragraph.
List items and table cells recurse with it set, because their content must
be block-level even when the source is a plain inline run.

Diagnostics go to the optional ``warnings`` list; nothing is printed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from adfify.converter import nodes
from adfify.converter.classifier import is_token
from adfify.converter.validators import (
    is_blockquote_content,
    is_inline_nodes,
    is_list_item_content,
    is_media_single,
    is_table_cell_content,
)
from adfify.models import ConversionWarning, WarningCode
from adfify.utils.uri import is_absolute_uri

_MAX_HEADING_LEVEL = 6


class _TransformContext:
    """Per-call state shared by every handler of one transform."""

    __slots__ = ("convert_paragraph", "warnings")

    def __init__(
        self,
        convert_paragraph: bool,
        warnings: list[ConversionWarning] | None,
    ) -> None:
        self.convert_paragraph = convert_paragraph
        self.warnings = warnings

    def child(self, convert_paragraph: bool = False) -> _TransformContext:
        return _TransformContext(convert_paragraph, self.warnings)

    def add_warning(self, code: str, message: str, **context: object) -> None:
        if self.warnings is not None:
            self.warnings.append(ConversionWarning(
                code=code, message=message, context=dict(context),
            ))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def transform(
    tokens: dict | list[Any],
    convert_paragraph: bool = False,
    *,
    warnings: list[ConversionWarning] | None = None,
) -> list[dict]:
    """Convert a token or list of tokens to ADF nodes.

    Parameters
    ----------
    tokens:
        One token dict, or a list of them.
    convert_paragraph:
        Wrap bare ``text`` tokens in their own paragraph.  Not propagated
        through paragraphs, headings or blockquotes.
    warnings:
        Optional list collecting :class:`ConversionWarning` diagnostics.

    Returns
    -------
    list[dict]
        One node per token that produced one, in input order.  The list is
        never longer than the input.
    """
    return _transform_many(tokens, _TransformContext(convert_paragraph, warnings))


def transform_one(
    token: Any,
    convert_paragraph: bool = False,
    *,
    warnings: list[ConversionWarning] | None = None,
) -> dict | None:
    """Convert a single token to an ADF node, or ``None`` if it is dropped."""
    return _transform_one(token, _TransformContext(convert_paragraph, warnings))


def _transform_many(tokens: dict | list[Any], ctx: _TransformContext) -> list[dict]:
    token_list = tokens if isinstance(tokens, list) else [tokens]
    produced: list[dict] = []
    for token in token_list:
        node = _transform_one(token, ctx)
        if node is not None:
            produced.append(node)
    return produced


def _transform_one(token: Any, ctx: _TransformContext) -> dict | None:
    if not is_token(token):
        return None
    handler = _TOKEN_HANDLERS.get(token["type"])
    if handler is None:
        return None
    return handler(token, ctx)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _drop(token: dict, ctx: _TransformContext) -> None:
    return None


def _blockquote(token: dict, ctx: _TransformContext) -> dict | None:
    transformed = _transform_many(token["tokens"], ctx.child())
    if is_blockquote_content(transformed):
        return {"type": "blockquote", "content": transformed}
    return None


def _code(token: dict, ctx: _TransformContext) -> dict:
    return nodes.code_block(token["text"], token.get("lang"))


def _codespan(token: dict, ctx: _TransformContext) -> dict:
    return nodes.text(token["text"], [{"type": "code"}])


def _del(token: dict, ctx: _TransformContext) -> dict:
    return nodes.text(token["text"], [{"type": "strike"}])


def _em(token: dict, ctx: _TransformContext) -> dict:
    return nodes.text(token["text"], [{"type": "em"}])


def _strong(token: dict, ctx: _TransformContext) -> dict:
    return nodes.text(token["text"], [{"type": "strong"}])


def _heading(token: dict, ctx: _TransformContext) -> dict | None:
    inlines = _transform_many(token["tokens"], ctx.child())
    if not is_inline_nodes(inlines):
        return None
    level = min(max(token["depth"], 1), _MAX_HEADING_LEVEL)
    return nodes.heading(inlines, level)


def _hr(token: dict, ctx: _TransformContext) -> dict:
    return nodes.rule()


def _html(token: dict, ctx: _TransformContext) -> dict:
    # No ADF counterpart for markup; keep the source visible as plain text.
    return nodes.text(token["text"])


def _image(token: dict, ctx: _TransformContext) -> dict | None:
    href = token["href"]
    # media() rejects relative paths; such images are dropped like any
    # other unsupported construct.
    if not is_absolute_uri(href):
        return None
    return nodes.media_single(href)


def _link(token: dict, ctx: _TransformContext) -> dict:
    title = token.get("title")
    return nodes.text(
        title if title is not None else token["text"],
        [{"type": "link", "attrs": {"href": token["href"]}}],
    )


def _list(token: dict, ctx: _TransformContext) -> dict:
    items: list[dict] = []
    for item in token["items"]:
        transformed = _transform_many(item["tokens"], ctx.child(convert_paragraph=True))
        if is_list_item_content(transformed):
            items.append({"type": "listItem", "content": transformed})
    return {
        "type": "orderedList" if token["ordered"] else "bulletList",
        "content": items,
    }


def _paragraph(token: dict, ctx: _TransformContext) -> dict | None:
    transformed = _transform_many(token["tokens"], ctx.child())
    if len(transformed) == 1 and is_media_single(transformed[0]):
        return transformed[0]
    if is_inline_nodes(transformed):
        return nodes.paragraph(transformed)
    return None


def _space(token: dict, ctx: _TransformContext) -> dict:
    return nodes.paragraph([nodes.hard_break("\n")])


def _table(token: dict, ctx: _TransformContext) -> dict:
    rows = [_table_row(token["header"], "tableHeader", ctx)]
    rows.extend(_table_row(cells, "tableCell", ctx) for cells in token["rows"])
    return {"type": "table", "content": rows}


def _table_row(cells: list[dict], cell_type: str, ctx: _TransformContext) -> dict:
    content: list[dict] = []
    for cell in cells:
        transformed = _transform_many(cell["tokens"], ctx.child(convert_paragraph=True))
        if is_table_cell_content(transformed):
            content.append({"type": cell_type, "content": transformed})
            continue
        ctx.add_warning(
            WarningCode.TABLE_CELL_BUILD_FAILED.value,
            f"tableRow, {cell_type} build failed; cell dropped from its row.",
            cell=cell,
            transformed=transformed,
        )
    return {"type": "tableRow", "content": content}


def _text(token: dict, ctx: _TransformContext) -> dict:
    if ctx.convert_paragraph:
        return nodes.paragraph([nodes.text(token["text"])])
    return nodes.text(token["raw"])


# ---------------------------------------------------------------------------
# Token handler dispatch table
# ---------------------------------------------------------------------------

_TokenHandler = Callable[[dict, _TransformContext], "dict | None"]

_TOKEN_HANDLERS: dict[str, _TokenHandler] = {
    "blockquote": _blockquote,
    "br": _drop,
    "code": _code,
    "codespan": _codespan,
    "def": _drop,
    "del": _del,
    "em": _em,
    "escape": _drop,
    "heading": _heading,
    "hr": _hr,
    "html": _html,
    "image": _image,
    "link": _link,
    "list": _list,
    "list_item": _drop,
    "paragraph": _paragraph,
    "space": _space,
    "strong": _strong,
    "table": _table,
    "text": _text,
}
