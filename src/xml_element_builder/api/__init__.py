"""Public parsing API."""

from .parser import ParseResult, parse_element, parse_file, parse_string

__all__ = [
    "ParseResult",
    "parse_element",
    "parse_file",
    "parse_string",
]
