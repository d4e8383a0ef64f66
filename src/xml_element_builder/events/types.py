"""Structural XML events consumed by the tree builder.

Each event kind is its own frozen dataclass; ``Event`` is their union. The
builder dispatches on the concrete type, so producers other than the bundled
lxml source only need to construct these classes.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

# (local name, namespace URI or None)
AttributeKey = Tuple[str, Optional[str]]
Attributes = Dict[AttributeKey, str]


@dataclass(frozen=True)
class ProcessingInstruction:
    """Processing instruction, ``content`` is ``"target data"``."""

    content: str


@dataclass(frozen=True)
class ElementStart:
    """Start of an element.

    ``prefix`` is a hint only; namespace resolution relies on ``namespace``
    and on the ``xmlns`` declarations present in ``attributes``.
    """

    name: str
    namespace: Optional[str] = None
    prefix: Optional[str] = None
    attributes: Attributes = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate element start values."""
        if not self.name:
            raise ValueError("Element name cannot be empty")


@dataclass(frozen=True)
class ElementEnd:
    """End of an element."""

    name: str
    namespace: Optional[str] = None
    prefix: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate element end values."""
        if not self.name:
            raise ValueError("Element name cannot be empty")


@dataclass(frozen=True)
class Characters:
    """Character data."""

    text: str


@dataclass(frozen=True)
class CData:
    """Content of a CDATA section."""

    text: str


@dataclass(frozen=True)
class Comment:
    """Content of a comment."""

    text: str


Event = Union[ProcessingInstruction, ElementStart, ElementEnd, Characters, CData, Comment]
