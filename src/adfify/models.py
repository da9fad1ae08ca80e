"""Public data models for adfify.

Result and warning types returned by the converter.  Nodes and tokens
themselves are plain dicts so they serialise to JSON without adapters;
only the envelopes around them are dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class WarningCode(str, Enum):
    """Machine-readable codes for non-fatal conversion diagnostics."""

    TABLE_CELL_BUILD_FAILED = "TABLE_CELL_BUILD_FAILED"
    """A table cell's transformed content did not match the cell shape."""


@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Attributes
    ----------
    code:
        A machine-readable warning code (see :class:`WarningCode`).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Output of :meth:`MarkdownToAdfConverter.convert`.

    Attributes
    ----------
    nodes:
        Top-level ADF block nodes in document order.
    warnings:
        Diagnostics collected while transforming.
    """

    nodes: list[dict] = field(default_factory=list)
    warnings: list[ConversionWarning] = field(default_factory=list)

    @property
    def document(self) -> dict:
        """The nodes wrapped in a versioned ADF ``doc`` envelope."""
        from adfify.converter.nodes import to_document

        return to_document(self.nodes)
