"""Structural XML events and the lxml-backed event source.

Key Components:
    ElementStart, ElementEnd, Characters, CData, Comment, ProcessingInstruction:
        The event kinds consumed by the tree builder
    LxmlEventSource: Incremental producer driving lxml's parser-target interface
    iter_events: Generator yielding events (or a trailing failure) for a source
"""

from .source import (
    EventSourceError,
    LxmlEventSource,
    iter_events,
    split_clark,
)
from .types import (
    AttributeKey,
    Attributes,
    CData,
    Characters,
    Comment,
    ElementEnd,
    ElementStart,
    Event,
    ProcessingInstruction,
)

__all__ = [
    "AttributeKey",
    "Attributes",
    "CData",
    "Characters",
    "Comment",
    "ElementEnd",
    "ElementStart",
    "Event",
    "EventSourceError",
    "LxmlEventSource",
    "ProcessingInstruction",
    "iter_events",
    "split_clark",
]
