"""Document tree nodes produced by the tree builder.

An ``Element`` owns its children and a snapshot of the prefix table and
default namespace that were in scope when it was started. Nodes carry no
parent references; a finished tree is handed to the caller as a plain value.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from xml_element_builder.events.types import Attributes


@dataclass(frozen=True)
class TextNode:
    """Character data."""

    content: str


@dataclass(frozen=True)
class CDataNode:
    """CDATA section content."""

    content: str


@dataclass(frozen=True)
class CommentNode:
    """Comment content."""

    content: str


@dataclass(frozen=True)
class ProcessingInstructionNode:
    """Processing instruction content (``"target data"``)."""

    content: str


@dataclass
class Element:
    """A namespaced XML element.

    ``prefixes`` maps namespace URIs to prefixes and ``default_namespace`` is
    the default namespace resolved for this element's scope. Attributes are
    keyed by ``(local_name, namespace)``.
    """

    name: str
    namespace: Optional[str] = None
    default_namespace: Optional[str] = None
    prefixes: Dict[str, str] = field(default_factory=dict)
    attributes: Attributes = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate element values."""
        if not self.name:
            raise ValueError("Element name cannot be empty")

    def matches(self, name: str, namespace: Optional[str] = None) -> bool:
        """Check whether this element has the given name and namespace."""
        return self.name == name and self.namespace == namespace

    @property
    def qualified_name(self) -> str:
        """Name with the prefix bound to its namespace, if any."""
        prefix = self.prefix_for(self.namespace)
        if prefix and self.namespace != self.default_namespace:
            return f"{prefix}:{self.name}"
        return self.name

    def prefix_for(self, namespace: Optional[str]) -> Optional[str]:
        """Look up the prefix bound to ``namespace`` in this element's scope."""
        if namespace is None:
            return None
        return self.prefixes.get(namespace)

    def get_attribute(
        self,
        name: str,
        namespace: Optional[str] = None,
        default: Optional[str] = None
    ) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get((name, namespace), default)

    def has_attribute(self, name: str, namespace: Optional[str] = None) -> bool:
        """Check whether the attribute is present."""
        return (name, namespace) in self.attributes

    def element_children(self) -> List["Element"]:
        """Child elements in document order, skipping text and other nodes."""
        return [child for child in self.children if isinstance(child, Element)]

    def get_child(self, name: str, namespace: Optional[str] = None) -> Optional["Element"]:
        """Find first direct child element with matching name and namespace."""
        for child in self.children:
            if isinstance(child, Element) and child.matches(name, namespace):
                return child
        return None

    def get_children(self, name: str, namespace: Optional[str] = None) -> List["Element"]:
        """Find all direct child elements with matching name and namespace."""
        return [
            child for child in self.children
            if isinstance(child, Element) and child.matches(name, namespace)
        ]

    def iter_elements(self) -> Iterator["Element"]:
        """Iterate over this element and all descendants in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter_elements()

    def find_all(self, name: str, namespace: Optional[str] = None) -> List["Element"]:
        """Find all descendant elements (excluding self) with matching name."""
        return [
            element for element in self.iter_elements()
            if element is not self and element.matches(name, namespace)
        ]

    def content_str(self) -> str:
        """Concatenate all character and CDATA content of the subtree."""
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, Element):
                parts.append(child.content_str())
            elif isinstance(child, (TextNode, CDataNode)):
                parts.append(child.content)
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {"name": self.name}
        if self.namespace is not None:
            result["namespace"] = self.namespace
        if self.default_namespace is not None:
            result["default_namespace"] = self.default_namespace
        if self.attributes:
            result["attributes"] = [
                {"name": name, "namespace": namespace, "value": value}
                for (name, namespace), value in self.attributes.items()
            ]
        if self.children:
            result["children"] = [_node_to_dict(child) for child in self.children]
        return result


Node = Union[Element, TextNode, CDataNode, CommentNode, ProcessingInstructionNode]

_NODE_KINDS = {
    TextNode: "text",
    CDataNode: "cdata",
    CommentNode: "comment",
    ProcessingInstructionNode: "pi",
}


def _node_to_dict(node: Node) -> Dict[str, Any]:
    if isinstance(node, Element):
        return {"element": node.to_dict()}
    return {_NODE_KINDS[type(node)]: node.content}
