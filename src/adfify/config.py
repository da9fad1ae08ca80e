"""Configuration for adfify.

:class:`AdfifyConfig` is a dataclass capturing every tuneable knob of the
converter.  Instances are passed to :class:`MarkdownToAdfConverter`; the
module-level :func:`markdown_to_document` uses the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_PLUGINS: list[str] = ["strikethrough", "table", "url"]
"""Mistune plugins enabled unless the caller overrides ``plugins``."""

KNOWN_PLUGINS: frozenset[str] = frozenset({
    "abbr",
    "def_list",
    "footnotes",
    "insert",
    "mark",
    "math",
    "spoiler",
    "strikethrough",
    "subscript",
    "superscript",
    "table",
    "task_lists",
    "url",
})
"""Built-in mistune plugin names accepted by ``plugins``."""


@dataclass
class AdfifyConfig:
    """Complete configuration for a Markdown-to-ADF converter.

    Parameters
    ----------
    plugins:
        Mistune plugin names enabled on the lexer.  Tokens produced by a
        plugin that has no ADF counterpart are dropped by the transformer.
    log_warnings:
        Emit every :class:`ConversionWarning` through the structured
        ``adfify.converter`` logger.
    metrics:
        Object satisfying :class:`adfify.observability.MetricsHook`.
        Defaults to a no-op hook.
    debug_dump_tokens:
        Write the lexer token stream as JSON to *stderr* on each conversion.
    debug_dump_nodes:
        Write the produced ADF nodes as JSON to *stderr*.
    """

    # ── Lexer ───────────────────────────────────────────────────────────
    plugins: list[str] = field(default_factory=lambda: list(DEFAULT_PLUGINS))

    # ── Observability ──────────────────────────────────────────────────
    log_warnings: bool = True

    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_tokens: bool = False

    debug_dump_nodes: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        unknown = sorted(set(self.plugins) - KNOWN_PLUGINS)
        if unknown:
            raise ValueError(
                f"Unknown mistune plugin(s): {', '.join(unknown)}. "
                f"Expected any of: {', '.join(sorted(KNOWN_PLUGINS))}"
            )
        if len(set(self.plugins)) != len(self.plugins):
            raise ValueError(f"plugins must not contain duplicates, got {self.plugins}")
