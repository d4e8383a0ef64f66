"""Tests for builder error types."""

from xml_element_builder.tree import (
    BuilderError,
    BuilderStateError,
    ImproperNestingError,
    NoElementError,
    UpstreamError,
)


def test_all_errors_share_base_class() -> None:
    """Test every builder error derives from BuilderError."""
    for error in (
        UpstreamError(ValueError("x")),
        ImproperNestingError(),
        NoElementError(),
        BuilderStateError("x"),
    ):
        assert isinstance(error, BuilderError)


def test_improper_nesting_message_names_both_sides() -> None:
    """Test the message shows expected and found names in Clark notation."""
    error = ImproperNestingError(("a", "urn:a"), ("b", None))

    assert str(error) == "Elements not properly nested: expected end of {urn:a}a, found b"


def test_improper_nesting_message_without_open_element() -> None:
    """Test the message when nothing was open."""
    error = ImproperNestingError(None, ("a", None))

    assert "expected end of nothing" in str(error)


def test_upstream_error_keeps_original() -> None:
    """Test the wrapped failure is available and used for the message."""
    original = ValueError("bad token")
    error = UpstreamError(original)

    assert error.error is original
    assert str(error) == "bad token"
