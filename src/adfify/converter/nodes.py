"""Constructors for leaf and simple ADF nodes.

Each builder is a pure function returning a fresh dict.  None of them
recurse or look at lexer tokens; composite nodes whose content comes from
recursion (paragraphs, lists, tables) are assembled by the transformer
after shape validation.

Shapes produced::

    {"type": "text", "text": "bold", "marks": [{"type": "strong"}]}
    {"type": "codeBlock", "content": [{"type": "text", "text": "x = 1"}],
     "attrs": {"language": "python"}}
    {"type": "mediaSingle", "attrs": {"layout": "center"},
     "content": [{"type": "media",
                  "attrs": {"type": "external", "url": "https://..."}}]}
"""

from __future__ import annotations

from typing import Literal

from adfify.errors import AdfifyInvalidUrlError
from adfify.utils.uri import is_absolute_uri

HeadingLevel = Literal[1, 2, 3, 4, 5, 6]

ADF_VERSION = 1


def text(text: str, marks: list[dict] | None = None) -> dict:
    """Build a text node, attaching *marks* only when the list is non-empty."""
    node: dict = {"type": "text", "text": text}
    if marks:
        node["marks"] = list(marks)
    return node


def code_block(text: str, language: str | None = None) -> dict:
    """Build a codeBlock holding *text* as its single text node.

    ``attrs.language`` is present iff *language* is a non-empty string.
    """
    node: dict = {"type": "codeBlock", "content": [{"type": "text", "text": text}]}
    if language:
        node["attrs"] = {"language": language}
    return node


def heading(content: list[dict], level: HeadingLevel) -> dict:
    """Build a heading node.  *level* must already be within 1-6."""
    return {"type": "heading", "content": content, "attrs": {"level": level}}


def rule() -> dict:
    """Build a horizontal rule."""
    return {"type": "rule"}


def paragraph(content: list[dict]) -> dict:
    return {"type": "paragraph", "content": content}


def hard_break(text: str = "\n") -> dict:
    return {"type": "hardBreak", "attrs": {"text": text}}


def media(url: str) -> dict:
    """Build an external media node.

    Raises
    ------
    AdfifyInvalidUrlError
        If *url* is not an absolute URI.
    """
    if not is_absolute_uri(url):
        raise AdfifyInvalidUrlError(
            message=f"media url must be an absolute URI, got {url!r}",
            context={"url": url},
        )
    return {"type": "media", "attrs": {"type": "external", "url": url}}


def media_single(url: str) -> dict:
    """Build a centered mediaSingle wrapping one external media node."""
    return {"type": "mediaSingle", "content": [media(url)], "attrs": {"layout": "center"}}


def to_document(nodes: list[dict]) -> dict:
    """Wrap top-level block *nodes* in a versioned ADF ``doc`` node."""
    return {"version": ADF_VERSION, "type": "doc", "content": list(nodes)}
