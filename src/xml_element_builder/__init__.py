"""Namespace-aware XML element builder.

Assembles structural XML events into element trees, resolving default
namespaces and prefix bindings per scope and reporting improperly nested
markup.

Progressive API Disclosure:
- Level 1: Simple functions - parse_string(), parse_file(), parse_element()
- Level 2: Configured builder - XMLTreeBuilder with BuilderConfig
- Level 3: Custom event sources - feed XMLTreeBuilder.process() directly
"""

__version__ = "0.1.0"
__author__ = "XML Element Builder Team"

from .api import ParseResult, parse_element, parse_file, parse_string
from .shared.config import BuilderConfig
from .tree import (
    BuilderError,
    Element,
    ImproperNestingError,
    NoElementError,
    XMLTreeBuilder,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse_string",
    "parse_file",
    "parse_element",

    # Level 2: Builder and its configuration
    "XMLTreeBuilder",
    "BuilderConfig",

    # Result objects, tree and errors
    "ParseResult",
    "Element",
    "BuilderError",
    "ImproperNestingError",
    "NoElementError",
]
