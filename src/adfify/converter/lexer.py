"""Lex Markdown into the token taxonomy consumed by the transformer.

Parsing is delegated to mistune v3 in AST mode.  Mistune's tree uses its
own names and layout (``block_quote``, ``children``, ``attrs.level`` ...),
so :class:`Lexer` re-shapes every node into a flat token dict::

    {"type": "heading", "raw": "# Title", "depth": 1, "text": "Title",
     "tokens": [{"type": "text", "raw": "Title", "text": "Title"}]}

Mapping from mistune to token kinds:

==================  ===========  ==============================================
mistune             token        notes
==================  ===========  ==============================================
heading             heading      ``depth`` from ``attrs.level``
paragraph           paragraph
block_text          text         tight list item body; keeps inline ``tokens``
block_quote         blockquote
list                list         ``items`` hold ``list_item`` tokens
list_item,          list_item    ``task``/``checked`` from the task plugin
task_list_item
block_code          code         ``lang`` is the first word of the info string
thematic_break      hr
block_html,         html
inline_html
table               table        ``header`` cells and ``rows`` of cells
text, softbreak     text         adjacent text runs are merged
linebreak           br
emphasis            em
strong              strong
strikethrough       del
codespan            codespan
link                link
image               image
blank_line          (dropped)    block separators carry no content
==================  ===========  ==============================================

Mistune does not report source offsets, so ``raw`` is rebuilt from the
parsed pieces.  It is exact for text runs and best-effort elsewhere.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import mistune

from adfify.config import DEFAULT_PLUGINS
from adfify.errors import AdfifyLexerError

# Types that are silently skipped
_SKIP_TYPES: frozenset[str] = frozenset({
    "blank_line",
})


def _plain_text(children: list[dict]) -> str:
    """Recursively extract the visible text of mistune inline children."""
    parts: list[str] = []
    for child in children:
        child_type = child.get("type", "")
        if child_type in ("softbreak", "linebreak"):
            parts.append("\n")
        elif "children" in child:
            parts.append(_plain_text(child["children"]))
        elif "raw" in child:
            parts.append(child["raw"])
    return "".join(parts)


def _quote_lines(raw: str, prefix: str) -> str:
    return "\n".join(prefix + line if line else prefix.rstrip() for line in raw.split("\n"))


class Lexer:
    """Parse Markdown with mistune and emit transformer tokens.

    Parameters
    ----------
    plugins:
        Mistune plugin names.  Defaults to :data:`adfify.config.DEFAULT_PLUGINS`.
    """

    def __init__(self, plugins: list[str] | None = None) -> None:
        self._parser = mistune.create_markdown(
            renderer="ast",
            plugins=list(DEFAULT_PLUGINS if plugins is None else plugins),
        )
        self._block_handlers: dict[str, Callable[[dict], dict | None]] = {
            "heading": self._heading,
            "paragraph": self._paragraph,
            "block_text": self._block_text,
            "block_quote": self._block_quote,
            "list": self._list,
            "block_code": self._block_code,
            "thematic_break": self._thematic_break,
            "block_html": self._html,
            "table": self._table,
        }
        self._inline_handlers: dict[str, Callable[[dict], dict | None]] = {
            "text": self._text,
            "softbreak": self._softbreak,
            "linebreak": self._linebreak,
            "emphasis": self._wrapper("em", "*"),
            "strong": self._wrapper("strong", "**"),
            "strikethrough": self._wrapper("del", "~~"),
            "codespan": self._codespan,
            "link": self._link,
            "image": self._image,
            "inline_html": self._html,
        }

    def lex(self, markdown: str) -> list[dict]:
        """Parse *markdown* and return the top-level token list.

        Raises
        ------
        AdfifyLexerError
            If mistune returns something other than an AST token list.
        """
        raw_tokens = self._parser(markdown)
        if not isinstance(raw_tokens, list):
            raise AdfifyLexerError(
                message="mistune did not return an AST token list",
                context={"result_type": type(raw_tokens).__name__},
            )
        return self._blocks(raw_tokens)

    # ── Sequences ──────────────────────────────────────────────────────

    def _blocks(self, nodes: list[dict]) -> list[dict]:
        tokens: list[dict] = []
        for node in nodes:
            node_type = node.get("type", "")
            if node_type in _SKIP_TYPES:
                continue
            handler = self._block_handlers.get(node_type)
            if handler is None:
                # Inline content can surface at block level (e.g. plugins)
                handler = self._inline_handlers.get(node_type)
            if handler is None:
                continue
            token = handler(node)
            if token is not None:
                tokens.append(token)
        return tokens

    def _inlines(self, nodes: list[dict]) -> list[dict]:
        tokens: list[dict] = []
        for node in nodes:
            handler = self._inline_handlers.get(node.get("type", ""))
            if handler is None:
                continue
            token = handler(node)
            if token is None:
                continue
            previous = tokens[-1] if tokens else None
            if (
                token["type"] == "text"
                and previous is not None
                and previous["type"] == "text"
            ):
                previous["raw"] += token["raw"]
                previous["text"] += token["text"]
            else:
                tokens.append(token)
        return tokens

    # ── Block handlers ─────────────────────────────────────────────────

    def _heading(self, node: dict) -> dict:
        children = node.get("children", [])
        depth = node.get("attrs", {}).get("level", 1)
        text = _plain_text(children)
        return {
            "type": "heading",
            "raw": f"{'#' * depth} {text}",
            "depth": depth,
            "text": text,
            "tokens": self._inlines(children),
        }

    def _paragraph(self, node: dict) -> dict:
        children = node.get("children", [])
        text = _plain_text(children)
        return {
            "type": "paragraph",
            "raw": text,
            "text": text,
            "tokens": self._inlines(children),
        }

    def _block_text(self, node: dict) -> dict:
        children = node.get("children", [])
        text = _plain_text(children)
        return {
            "type": "text",
            "raw": text,
            "text": text,
            "tokens": self._inlines(children),
        }

    def _block_quote(self, node: dict) -> dict:
        tokens = self._blocks(node.get("children", []))
        inner = "\n\n".join(token["raw"] for token in tokens)
        return {
            "type": "blockquote",
            "raw": _quote_lines(inner, "> "),
            "text": inner,
            "tokens": tokens,
        }

    def _list(self, node: dict) -> dict:
        attrs = node.get("attrs", {})
        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1) if ordered else ""
        loose = not node.get("tight", True)
        bullet = node.get("bullet", "-")

        items: list[dict] = []
        for offset, child in enumerate(node.get("children", [])):
            if child.get("type") not in ("list_item", "task_list_item"):
                continue
            marker = f"{start + offset}{bullet}" if ordered else bullet
            items.append(self._list_item(child, marker, loose))

        separator = "\n\n" if loose else "\n"
        return {
            "type": "list",
            "raw": separator.join(item["raw"] for item in items),
            "ordered": ordered,
            "start": start,
            "loose": loose,
            "items": items,
        }

    def _list_item(self, node: dict, marker: str, loose: bool) -> dict:
        tokens = self._blocks(node.get("children", []))
        task = node.get("type") == "task_list_item"
        checked = bool(node.get("attrs", {}).get("checked", False)) if task else None
        inner = "\n".join(token["raw"] for token in tokens)
        indent = " " * (len(marker) + 1)
        body = inner.replace("\n", "\n" + indent)
        if task:
            body = f"[{'x' if checked else ' '}] {body}"
        return {
            "type": "list_item",
            "raw": f"{marker} {body}",
            "task": task,
            "checked": checked,
            "loose": loose,
            "text": inner,
            "tokens": tokens,
        }

    def _block_code(self, node: dict) -> dict:
        code = node.get("raw", "")
        if code.endswith("\n"):
            code = code[:-1]
        info = (node.get("attrs") or {}).get("info") or ""
        words = info.split()
        token: dict[str, Any] = {
            "type": "code",
            "raw": f"```{info}\n{code}\n```",
            "text": code,
            "codeBlockStyle": "indented" if node.get("style") == "indent" else "fenced",
        }
        if words:
            token["lang"] = words[0]
        return token

    def _thematic_break(self, node: dict) -> dict:
        return {"type": "hr", "raw": "---"}

    def _html(self, node: dict) -> dict:
        raw = node.get("raw", "")
        return {
            "type": "html",
            "raw": raw,
            "text": raw,
            "block": node.get("type") == "block_html",
            "pre": False,
        }

    def _table(self, node: dict) -> dict:
        header: list[dict] = []
        rows: list[list[dict]] = []
        for part in node.get("children", []):
            part_type = part.get("type")
            if part_type == "table_head":
                header = [self._table_cell(cell) for cell in part.get("children", [])]
            elif part_type == "table_body":
                for row in part.get("children", []):
                    if row.get("type") == "table_row":
                        rows.append([self._table_cell(cell) for cell in row.get("children", [])])

        def row_raw(cells: list[dict]) -> str:
            return "| " + " | ".join(cell["text"] for cell in cells) + " |"

        lines = [row_raw(header), "|" + "---|" * len(header)]
        lines.extend(row_raw(row) for row in rows)
        return {
            "type": "table",
            "raw": "\n".join(lines),
            "align": [cell["align"] for cell in header],
            "header": header,
            "rows": rows,
        }

    def _table_cell(self, node: dict) -> dict:
        children = node.get("children", [])
        attrs = node.get("attrs", {})
        return {
            "text": _plain_text(children),
            "tokens": self._inlines(children),
            "header": bool(attrs.get("head", False)),
            "align": attrs.get("align"),
        }

    # ── Inline handlers ────────────────────────────────────────────────

    def _text(self, node: dict) -> dict:
        raw = node.get("raw", "")
        return {"type": "text", "raw": raw, "text": raw}

    def _softbreak(self, node: dict) -> dict:
        return {"type": "text", "raw": "\n", "text": "\n"}

    def _linebreak(self, node: dict) -> dict:
        return {"type": "br", "raw": "  \n"}

    def _wrapper(self, kind: str, delimiter: str) -> Callable[[dict], dict]:
        def handler(node: dict) -> dict:
            children = node.get("children", [])
            text = _plain_text(children)
            return {
                "type": kind,
                "raw": f"{delimiter}{text}{delimiter}",
                "text": text,
                "tokens": self._inlines(children),
            }

        return handler

    def _codespan(self, node: dict) -> dict:
        code = node.get("raw", "")
        return {"type": "codespan", "raw": f"`{code}`", "text": code}

    def _link(self, node: dict) -> dict:
        children = node.get("children", [])
        attrs = node.get("attrs", {})
        href = attrs.get("url", "")
        text = _plain_text(children)
        return {
            "type": "link",
            "raw": f"[{text}]({href})",
            "href": href,
            "title": attrs.get("title"),
            "text": text,
            "tokens": self._inlines(children),
        }

    def _image(self, node: dict) -> dict:
        attrs = node.get("attrs", {})
        href = attrs.get("url", "")
        alt = _plain_text(node.get("children", []))
        return {
            "type": "image",
            "raw": f"![{alt}]({href})",
            "href": href,
            "title": attrs.get("title"),
            "text": alt,
        }


def lex(markdown: str, plugins: list[str] | None = None) -> list[dict]:
    """Convenience wrapper: ``Lexer(plugins).lex(markdown)``."""
    return Lexer(plugins).lex(markdown)
