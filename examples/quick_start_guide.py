#!/usr/bin/env python3
"""
Quick Start Guide for the XML Element Builder.

Shows the simple parsing API, then drives the builder by hand with events
from a custom source.
"""

from xml_element_builder import BuilderConfig, XMLTreeBuilder, parse_string
from xml_element_builder.events import Characters, ElementEnd, ElementStart
from xml_element_builder.shared import XMLNS_NAMESPACE

DOCUMENT = """\
<catalog xmlns="urn:books" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <book id="123">
    <dc:title>My Book</dc:title>
    <price xmlns="">19.99</price>
  </book>
</catalog>
"""


def simple_api_example():
    """Build a tree from text and inspect namespace scopes."""
    print("Step 1: parse_string")
    print("-" * 30)

    result = parse_string(DOCUMENT)
    result.raise_for_error()

    catalog = result.root
    book = catalog.get_child("book", "urn:books")
    title = book.get_child("title", "http://purl.org/dc/elements/1.1/")
    price = book.get_child("price")

    print(f"root: {catalog.qualified_name} (default namespace {catalog.default_namespace})")
    print(f"title: {title.qualified_name} = {title.content_str()!r}")
    print(f"price default namespace: {price.default_namespace}")
    print(f"elements built: {result.performance.elements_built}")


def manual_events_example():
    """Feed events directly, as a custom tokenizer would."""
    print("\nStep 2: XMLTreeBuilder.process")
    print("-" * 30)

    builder = XMLTreeBuilder.from_config(BuilderConfig(prefixes={"ex": "urn:example"}))
    events = [
        ElementStart("note", attributes={("xmlns", None): "urn:notes"}),
        ElementStart("body", attributes={("x", XMLNS_NAMESPACE): "urn:x"}),
        Characters("Hello"),
        ElementEnd("body"),
        ElementEnd("note"),
    ]
    for event in events:
        root = builder.process(event)
        if root is not None:
            body = root.get_child("body")
            print(f"completed {root.name}, body text {body.content_str()!r}")
            print(f"body prefixes: {sorted(body.prefixes.values())}")


if __name__ == "__main__":
    simple_api_example()
    manual_events_example()
