"""End-to-end tests: Markdown text -> ADF nodes via MarkdownToAdfConverter."""

import io
import json
import logging

import pytest

from adfify import markdown_to_document, to_document
from adfify.config import AdfifyConfig
from adfify.converter.md_to_adf import MarkdownToAdfConverter
from adfify.converter.validators import is_document
from adfify.models import WarningCode


def _texts(node):
    return [child["text"] for child in node["content"] if child["type"] == "text"]


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self):
        self.increments = []
        self.timings = []
        self.gauges = []

    def increment(self, name, value=1, tags=None):
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(self, name, ms, tags=None):
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(self, name, value, tags=None):
        self.gauges.append({"name": name, "value": value, "tags": tags})


# =========================================================================
# Entry point
# =========================================================================

class TestMarkdownToDocument:
    def test_empty_string(self):
        assert markdown_to_document("") == []

    def test_empty_string_does_not_lex(self, monkeypatch):
        def boom(self, markdown):
            raise AssertionError("lexer invoked")

        monkeypatch.setattr("adfify.converter.lexer.Lexer.lex", boom)
        assert markdown_to_document("") == []

    def test_heading_and_paragraph(self):
        nodes = markdown_to_document("# Title\n\nSome **bold** text.")
        assert len(nodes) == 2
        heading, para = nodes
        assert heading == {
            "type": "heading",
            "content": [{"type": "text", "text": "Title"}],
            "attrs": {"level": 1},
        }
        assert para["type"] == "paragraph"
        assert {"type": "text", "text": "bold", "marks": [{"type": "strong"}]} in para["content"]

    def test_rule(self):
        assert markdown_to_document("---") == [{"type": "rule"}]

    def test_reference_definition_only(self):
        assert markdown_to_document("[foo]: https://example.com/") == []

    def test_whitespace_only(self):
        assert markdown_to_document("\n\n   \n") == []


# =========================================================================
# Block constructs
# =========================================================================

class TestBlocks:
    def test_heading_levels(self, converter):
        for level in range(1, 7):
            node = converter.convert(f"{'#' * level} H").nodes[0]
            assert node["attrs"]["level"] == level

    def test_lone_image_becomes_media_single(self, converter):
        nodes = converter.convert("![cat](https://example.com/cat.png)").nodes
        assert nodes == [{
            "type": "mediaSingle",
            "content": [{
                "type": "media",
                "attrs": {"type": "external", "url": "https://example.com/cat.png"},
            }],
            "attrs": {"layout": "center"},
        }]

    def test_relative_image_is_not_embedded(self, converter):
        nodes = converter.convert("![cat](cat.png)").nodes
        assert nodes == [{"type": "paragraph", "content": []}]

    def test_code_block_with_language(self, converter):
        nodes = converter.convert("```python\nprint(1)\n```").nodes
        assert nodes == [{
            "type": "codeBlock",
            "content": [{"type": "text", "text": "print(1)"}],
            "attrs": {"language": "python"},
        }]

    def test_code_block_without_language(self, converter):
        node = converter.convert("```\nplain\n```").nodes[0]
        assert node["type"] == "codeBlock"
        assert "attrs" not in node

    def test_blockquote(self, converter):
        nodes = converter.convert("> quoted").nodes
        assert nodes == [{
            "type": "blockquote",
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "quoted"}]}],
        }]

    def test_bullet_list(self, converter):
        node = converter.convert("- one\n- two").nodes[0]
        assert node["type"] == "bulletList"
        assert [item["type"] for item in node["content"]] == ["listItem", "listItem"]
        assert node["content"][1]["content"] == [
            {"type": "paragraph", "content": [{"type": "text", "text": "two"}]},
        ]

    def test_ordered_list(self, converter):
        node = converter.convert("1. first\n2. second").nodes[0]
        assert node["type"] == "orderedList"
        assert len(node["content"]) == 2

    def test_nested_list(self, converter):
        node = converter.convert("- parent\n  - child").nodes[0]
        item = node["content"][0]
        assert [child["type"] for child in item["content"]] == ["paragraph", "bulletList"]

    def test_tight_list_item_flattens_inline_formatting(self, converter):
        node = converter.convert("- **bold** item").nodes[0]
        assert node["content"][0]["content"] == [
            {"type": "paragraph", "content": [{"type": "text", "text": "bold item"}]},
        ]

    def test_loose_list_keeps_inline_formatting(self, converter):
        node = converter.convert("- **bold** item\n\n- other").nodes[0]
        para = node["content"][0]["content"][0]
        assert {"type": "text", "text": "bold", "marks": [{"type": "strong"}]} in para["content"]

    def test_table(self, converter):
        result = converter.convert("| a | b |\n|---|---|\n| 1 | 2 |")
        table = result.nodes[0]
        assert table["type"] == "table"
        header, row = table["content"]
        assert [cell["type"] for cell in header["content"]] == ["tableHeader"] * 2
        assert [cell["type"] for cell in row["content"]] == ["tableCell"] * 2
        assert row["content"][0]["content"] == [
            {"type": "paragraph", "content": [{"type": "text", "text": "1"}]},
        ]
        assert result.warnings == []

    def test_table_cell_with_inline_markup_is_dropped_with_warning(self, converter):
        result = converter.convert("| a | b |\n|---|---|\n| **x** | y |")
        row = result.nodes[0]["content"][1]
        assert len(row["content"]) == 1
        assert row["content"][0]["content"][0]["content"][0]["text"] == "y"
        assert [w.code for w in result.warnings] == [WarningCode.TABLE_CELL_BUILD_FAILED]

    def test_html_block_is_plain_text(self, converter):
        node = converter.convert("<div>hi</div>").nodes[0]
        assert node["type"] == "text"
        assert node["text"].startswith("<div>hi</div>")


# =========================================================================
# Inline constructs
# =========================================================================

class TestInline:
    def _para(self, converter, markdown):
        nodes = converter.convert(markdown).nodes
        assert len(nodes) == 1
        assert nodes[0]["type"] == "paragraph"
        return nodes[0]["content"]

    def test_marks(self, converter):
        content = self._para(converter, "*a* **b** ~~c~~ `d`")
        marked = {n["text"]: n["marks"][0]["type"] for n in content if "marks" in n}
        assert marked == {"a": "em", "b": "strong", "c": "strike", "d": "code"}

    def test_link(self, converter):
        content = self._para(converter, "[site](https://example.com)")
        assert content == [{
            "type": "text",
            "text": "site",
            "marks": [{"type": "link", "attrs": {"href": "https://example.com"}}],
        }]

    def test_link_with_title_uses_title(self, converter):
        content = self._para(converter, '[site](https://example.com "Home page")')
        assert content[0]["text"] == "Home page"

    def test_soft_line_break_kept_in_text(self, converter):
        content = self._para(converter, "line one\nline two")
        assert _texts({"content": content}) == ["line one\nline two"]

    def test_hard_line_break_dropped(self, converter):
        content = self._para(converter, "a  \nb")
        assert _texts({"content": content}) == ["a", "b"]


# =========================================================================
# Result envelope, logging, metrics, debug dumps
# =========================================================================

class TestConverterResult:
    def test_document_property(self, converter):
        result = converter.convert("# T\n\n---")
        assert result.document == to_document(result.nodes)
        assert is_document(result.document)

    def test_output_is_json_serialisable(self, converter):
        markdown = "# T\n\n- a\n\n| x |\n|---|\n| y |\n\n![i](https://e.com/i.png)"
        nodes = converter.convert(markdown).nodes
        assert json.loads(json.dumps(nodes)) == nodes

    def test_deterministic(self, converter):
        markdown = "# T\n\n> q\n\n1. a\n2. b"
        assert converter.convert(markdown) == converter.convert(markdown)

    def test_default_config(self):
        assert MarkdownToAdfConverter().convert("---").nodes == [{"type": "rule"}]


class TestConverterObservability:
    TABLE = "| a |\n|---|\n| **x** |"

    def test_metrics_emitted(self):
        hook = RecordingMetricsHook()
        converter = MarkdownToAdfConverter(AdfifyConfig(metrics=hook, log_warnings=False))
        converter.convert("# a\n\n" + self.TABLE)

        names = [call["name"] for call in hook.increments]
        assert names.count("adfify.conversions_total") == 1
        created = [c for c in hook.increments if c["name"] == "adfify.nodes_created_total"]
        assert created[0]["value"] == 2
        warned = [c for c in hook.increments if c["name"] == "adfify.conversion_warnings_total"]
        assert warned[0]["tags"] == {"code": "TABLE_CELL_BUILD_FAILED"}
        assert [t["name"] for t in hook.timings] == ["adfify.conversion_duration_ms"]

    def test_metrics_for_empty_input(self):
        hook = RecordingMetricsHook()
        MarkdownToAdfConverter(AdfifyConfig(metrics=hook)).convert("")
        assert [c["name"] for c in hook.increments] == ["adfify.conversions_total"]

    def test_warning_logged_as_json(self):
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        from adfify.observability import StructuredFormatter

        handler.setFormatter(StructuredFormatter())
        logger = logging.getLogger("adfify.converter")
        logger.addHandler(handler)
        try:
            MarkdownToAdfConverter(AdfifyConfig(log_warnings=True)).convert(self.TABLE)
        finally:
            logger.removeHandler(handler)

        entry = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert entry["level"] == "WARNING"
        assert entry["code"] == "TABLE_CELL_BUILD_FAILED"
        assert entry["cell"]["text"] == "x"

    def test_logging_disabled(self):
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        logger = logging.getLogger("adfify.converter")
        logger.addHandler(handler)
        try:
            MarkdownToAdfConverter(AdfifyConfig(log_warnings=False)).convert(self.TABLE)
        finally:
            logger.removeHandler(handler)
        assert stream.getvalue() == ""

    @pytest.mark.parametrize("flag,label", [
        ("debug_dump_tokens", "[adfify] Tokens:"),
        ("debug_dump_nodes", "[adfify] ADF nodes:"),
    ])
    def test_debug_dumps(self, capsys, flag, label):
        config = AdfifyConfig(log_warnings=False, **{flag: True})
        MarkdownToAdfConverter(config).convert("# Hi")
        assert label in capsys.readouterr().err
