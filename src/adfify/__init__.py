"""adfify: Markdown to Atlassian Document Format (ADF) converter.

Public re-exports
-----------------

* **Conversion:** :func:`markdown_to_document`, :class:`MarkdownToAdfConverter`,
  :func:`transform`, :func:`to_document`
* **Configuration:** :class:`AdfifyConfig`
* **Errors:** Every :class:`AdfifyError` subclass and :class:`ErrorCode`
* **Models:** :class:`ConversionResult`, :class:`ConversionWarning`, :class:`WarningCode`

Usage::

    from adfify import markdown_to_document, to_document

    nodes = markdown_to_document("# Release notes\\n\\n- fixed **login**")
    payload = to_document(nodes)  # {"version": 1, "type": "doc", "content": [...]}
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from adfify.config import DEFAULT_PLUGINS, AdfifyConfig

# ── Conversion ─────────────────────────────────────────────────────────
from adfify.converter import (
    MarkdownToAdfConverter,
    markdown_to_document,
    transform,
)
from adfify.converter.nodes import to_document

# ── Errors ──────────────────────────────────────────────────────────────
from adfify.errors import (
    AdfifyError,
    AdfifyInvalidUrlError,
    AdfifyLexerError,
    AdfifyValidationError,
    ErrorCode,
)

# ── Models ──────────────────────────────────────────────────────────────
from adfify.models import ConversionResult, ConversionWarning, WarningCode

__all__ = [
    # Conversion
    "MarkdownToAdfConverter",
    "markdown_to_document",
    "transform",
    "to_document",
    # Configuration
    "AdfifyConfig",
    "DEFAULT_PLUGINS",
    # Errors
    "AdfifyError",
    "ErrorCode",
    "AdfifyValidationError",
    "AdfifyInvalidUrlError",
    "AdfifyLexerError",
    # Models
    "ConversionResult",
    "ConversionWarning",
    "WarningCode",
]
