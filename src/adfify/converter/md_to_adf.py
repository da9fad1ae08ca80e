"""Full Markdown-to-ADF conversion pipeline.

:class:`MarkdownToAdfConverter` runs two stages:

1. **Lex**: :class:`Lexer` parses raw Markdown with mistune and reshapes
   the AST into transformer tokens.
2. **Transform**: :func:`transform` converts the top-level tokens into
   ADF block nodes, collecting :class:`ConversionWarning` diagnostics.

The result is a :class:`ConversionResult`.  :func:`markdown_to_document`
is the shortcut returning only the node list under the default config.
"""

from __future__ import annotations

import json
import sys
import time

from adfify.config import AdfifyConfig
from adfify.converter.lexer import Lexer
from adfify.converter.transformer import transform
from adfify.models import ConversionResult, ConversionWarning
from adfify.observability import NoopMetricsHook, get_logger

log = get_logger("adfify.converter")


class MarkdownToAdfConverter:
    """Convert Markdown text to ADF content nodes.

    Parameters
    ----------
    config:
        Converter configuration.  Defaults to :class:`AdfifyConfig()`.

    Examples
    --------
    >>> converter = MarkdownToAdfConverter()
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> [node["type"] for node in result.nodes]
    ['heading', 'paragraph']
    >>> result.document["type"]
    'doc'
    """

    def __init__(self, config: AdfifyConfig | None = None) -> None:
        self._config = config if config is not None else AdfifyConfig()
        self._lexer = Lexer(self._config.plugins)
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    def convert(self, markdown: str) -> ConversionResult:
        """Lex and transform *markdown*.

        Never raises for Markdown input; unsupported constructs are
        dropped and the result may be shorter than the source suggests.

        Returns
        -------
        ConversionResult
            ``nodes`` (top-level ADF blocks) and ``warnings``.
        """
        t0 = time.monotonic()
        self._metrics.increment("adfify.conversions_total")

        if markdown == "":
            self._metrics.timing("adfify.conversion_duration_ms", (time.monotonic() - t0) * 1000)
            return ConversionResult()

        tokens = self._lexer.lex(markdown)
        if self._config.debug_dump_tokens:
            print(
                "[adfify] Tokens:",
                json.dumps(tokens, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        warnings: list[ConversionWarning] = []
        nodes = transform(tokens, warnings=warnings)
        if self._config.debug_dump_nodes:
            print(
                "[adfify] ADF nodes:",
                json.dumps(nodes, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        for warning in warnings:
            self._report(warning)

        self._metrics.increment("adfify.nodes_created_total", len(nodes))
        self._metrics.timing("adfify.conversion_duration_ms", (time.monotonic() - t0) * 1000)
        return ConversionResult(nodes=nodes, warnings=warnings)

    def _report(self, warning: ConversionWarning) -> None:
        self._metrics.increment(
            "adfify.conversion_warnings_total",
            tags={"code": str(warning.code)},
        )
        if self._config.log_warnings:
            log.warning(
                warning.message,
                extra={"extra_fields": {"code": str(warning.code), **warning.context}},
            )


def markdown_to_document(markdown: str) -> list[dict]:
    """Convert *markdown* to a list of top-level ADF block nodes.

    Empty input returns ``[]`` without invoking the lexer.

    Examples
    --------
    >>> markdown_to_document("---")
    [{'type': 'rule'}]
    >>> markdown_to_document("")
    []
    """
    if markdown == "":
        return []
    return MarkdownToAdfConverter().convert(markdown).nodes
