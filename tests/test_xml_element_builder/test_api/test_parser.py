"""Tests for the parsing API."""

import logging
from pathlib import Path

import pytest

from xml_element_builder.api import ParseResult, parse_element, parse_file, parse_string
from xml_element_builder.shared import BuilderConfig, DiagnosticSeverity, XMLNS_NAMESPACE
from xml_element_builder.tree import (
    CommentNode,
    ImproperNestingError,
    NoElementError,
    TextNode,
    UpstreamError,
)


class TestParseString:
    """Test end-to-end building from XML text."""

    def test_namespaced_document(self) -> None:
        """Test namespace scopes are resolved across a real document."""
        result = parse_string(
            '<root xmlns="urn:x" xmlns:p="urn:p">'
            '<p:item p:id="1">one</p:item>'
            '</root>'
        )

        assert result.success
        root = result.root
        assert root.namespace == "urn:x"
        assert root.default_namespace == "urn:x"
        assert root.prefixes["urn:p"] == "p"

        item = root.get_child("item", "urn:p")
        assert item.get_attribute("id", "urn:p") == "1"
        assert item.children == [TextNode("one")]
        assert item.prefixes["urn:p"] == "p"
        assert item.qualified_name == "p:item"

    def test_empty_default_declaration_clears_default(self) -> None:
        """Test xmlns="" removes the inherited default for the subtree."""
        root = parse_string(
            '<root xmlns="urn:x"><plain xmlns=""><leaf/></plain><kept/></root>'
        ).root

        plain = root.get_child("plain")
        assert plain.default_namespace is None
        assert plain.get_child("leaf").default_namespace is None
        assert root.get_child("kept", "urn:x").default_namespace == "urn:x"

    def test_prolog_comment_is_dropped(self) -> None:
        """Test content before the root does not appear in the tree."""
        result = parse_string("<!-- before --><a><!--inside--></a>")

        assert result.success
        assert result.root.children == [CommentNode("inside")]

    def test_declared_prefix_scoped_to_declaring_subtree(self) -> None:
        """Test a prefix declared on one element is absent from its siblings."""
        root = parse_string(
            '<r><e xmlns:p="urn:y"><in/></e><f/></r>'
        ).root

        e = root.get_child("e")
        assert e.prefixes["urn:y"] == "p"
        assert e.get_attribute("p", XMLNS_NAMESPACE) == "urn:y"
        assert e.get_child("in").prefixes["urn:y"] == "p"
        assert "urn:y" not in root.get_child("f").prefixes
        assert "urn:y" not in root.prefixes

    def test_config_prefixes_and_default_namespace(self) -> None:
        """Test configuration is applied before the document starts."""
        config = BuilderConfig(prefixes={"q": "urn:q"}, default_namespace="urn:d")
        root = parse_string("<a><b/></a>", config).root

        assert root.prefixes["urn:q"] == "q"
        assert root.default_namespace == "urn:d"
        assert root.get_child("b").default_namespace == "urn:d"

    def test_malformed_input_is_captured(self) -> None:
        """Test a tokenizer failure is reported, not raised."""
        result = parse_string("<a><b></a>")

        assert not result.success
        assert isinstance(result.error, UpstreamError)
        assert result.roots == []
        assert result.has_errors()
        assert result.diagnostics[0].severity == DiagnosticSeverity.ERROR

    def test_raise_for_error(self) -> None:
        result = parse_string("<a>")

        with pytest.raises(UpstreamError):
            result.raise_for_error()

    def test_performance_metrics(self) -> None:
        """Test counters are collected for a successful build."""
        result = parse_string("<a><b/><c>t</c></a>")

        assert result.performance.elements_built == 3
        assert result.performance.roots_completed == 1
        assert result.performance.events_processed == 7
        assert result.performance.processing_time_ms >= 0.0
        assert result.element_count == 3

    def test_summary(self) -> None:
        summary = parse_string("<a/>").summary()

        assert summary["success"] is True
        assert summary["error"] is None
        assert summary["root_count"] == 1
        assert summary["element_count"] == 1

    def test_correlation_id_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test API and builder log records all carry the correlation id."""
        with caplog.at_level(logging.DEBUG, logger="xml_element_builder"):
            result = parse_string("<a/>", correlation_id="doc-42")

        assert result.correlation_id == "doc-42"
        builder_records = [
            record for record in caplog.records
            if getattr(record, "component", None) == "xml_tree_builder"
        ]
        assert builder_records
        assert all(record.correlation_id == "doc-42" for record in caplog.records)


class TestParseFile:
    """Test building from files."""

    def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.xml"
        path.write_text('<?xml version="1.0"?>\n<a xmlns="urn:a"><b/></a>\n', encoding="utf-8")

        result = parse_file(path)

        assert result.success
        assert result.root.get_child("b", "urn:a") is not None

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            parse_file(tmp_path / "missing.xml")


class TestParseElement:
    """Test the strict single-element API."""

    def test_returns_root(self) -> None:
        assert parse_element("<a><b/></a>").get_child("b") is not None

    def test_raises_on_malformed_input(self) -> None:
        with pytest.raises(UpstreamError):
            parse_element("<a></b>")

    def test_raises_when_no_root_was_built(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a result without roots or error is reported as NoElementError."""
        monkeypatch.setattr(
            "xml_element_builder.api.parser.parse_string",
            lambda xml, config=None: ParseResult(),
        )

        with pytest.raises(NoElementError):
            parse_element("<a/>")


class TestParseResult:
    """Test ParseResult on its own."""

    def test_empty_result(self) -> None:
        result = ParseResult()

        assert result.success
        assert result.root is None
        assert result.element_count == 0
        assert not result.has_errors()

    def test_builder_errors_are_reraised(self) -> None:
        result = ParseResult(error=NoElementError())

        with pytest.raises(NoElementError):
            result.raise_for_error()

    def test_error_summary(self) -> None:
        result = ParseResult(error=ImproperNestingError(("a", None), ("b", None)))

        summary = result.summary()
        assert summary["success"] is False
        assert summary["error_type"] == "ImproperNestingError"
