"""Markdown to ADF conversion pipeline.

Public API:

- :class:`MarkdownToAdfConverter`: configurable Markdown → ADF nodes.
- :func:`markdown_to_document`: Markdown → top-level ADF nodes, defaults.
- :class:`Lexer` / :func:`lex`: mistune-backed Markdown tokenizer.
- :func:`is_token`: structural token classifier.
- :func:`transform` / :func:`transform_one`: token → node transform.
"""

from adfify.converter.classifier import is_token
from adfify.converter.lexer import Lexer, lex
from adfify.converter.md_to_adf import MarkdownToAdfConverter, markdown_to_document
from adfify.converter.transformer import transform, transform_one

__all__ = [
    "Lexer",
    "MarkdownToAdfConverter",
    "is_token",
    "lex",
    "markdown_to_document",
    "transform",
    "transform_one",
]
