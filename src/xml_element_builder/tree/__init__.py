"""Tree building engine.

Key Components:
    XMLTreeBuilder: Assembles events into element trees with namespace scoping
    Element: Namespaced element with attributes, children and a prefix snapshot
    TextNode, CDataNode, CommentNode, ProcessingInstructionNode: Leaf nodes
    BuilderError: Base of the errors raised while building
"""

from .builder import XMLTreeBuilder
from .errors import (
    BuilderError,
    BuilderStateError,
    ImproperNestingError,
    NoElementError,
    UpstreamError,
)
from .nodes import (
    CDataNode,
    CommentNode,
    Element,
    Node,
    ProcessingInstructionNode,
    TextNode,
)

__all__ = [
    "BuilderError",
    "BuilderStateError",
    "CDataNode",
    "CommentNode",
    "Element",
    "ImproperNestingError",
    "NoElementError",
    "Node",
    "ProcessingInstructionNode",
    "TextNode",
    "UpstreamError",
    "XMLTreeBuilder",
]
