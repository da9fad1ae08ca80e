"""Shared test fixtures for the adfify test suite."""

from __future__ import annotations

import pytest

from adfify.config import AdfifyConfig
from adfify.converter.lexer import Lexer
from adfify.converter.md_to_adf import MarkdownToAdfConverter


@pytest.fixture
def config() -> AdfifyConfig:
    """Default configuration with diagnostic logging disabled."""
    return AdfifyConfig(log_warnings=False)


@pytest.fixture
def converter(config: AdfifyConfig) -> MarkdownToAdfConverter:
    """Markdown-to-ADF converter using the default test config."""
    return MarkdownToAdfConverter(config)


@pytest.fixture
def lexer() -> Lexer:
    """Lexer with the default plugin set."""
    return Lexer()
