"""Event source backed by lxml's parser-target interface.

lxml does the tokenizing; this module translates its target callbacks into
the builder's ``Event`` values. Namespace declarations, which lxml reports
through ``start_ns``, are folded back into ``xmlns`` attributes of the element
that declared them so the builder can resolve scopes itself.
"""

from pathlib import Path
from typing import IO, Dict, Iterator, List, Optional, Tuple, Union

from lxml import etree

from xml_element_builder.shared import XMLNS_NAMESPACE, get_logger
from xml_element_builder.shared.config import DEFAULT_CHUNK_SIZE

from .types import (
    Attributes,
    Characters,
    Comment,
    ElementEnd,
    ElementStart,
    Event,
    ProcessingInstruction,
)

SourceType = Union[str, bytes, Path, IO[str], IO[bytes]]
EventItem = Union[Event, "EventSourceError"]


class EventSourceError(Exception):
    """Tokenizer failure reported by lxml, forwarded to the builder."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    @classmethod
    def from_lxml(cls, error: etree.XMLSyntaxError) -> "EventSourceError":
        line = getattr(error, "lineno", None)
        column = getattr(error, "offset", None)
        return cls(getattr(error, "msg", None) or str(error), line, column)

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.message} (line {self.line}, column {self.column})"
        return self.message


def split_clark(tag: str) -> Tuple[str, Optional[str]]:
    """Split a ``{uri}local`` name into ``(local, uri)``."""
    if tag.startswith("{"):
        uri, _, local = tag[1:].partition("}")
        return local, uri or None
    return tag, None


class _EventCollector:
    """lxml parser target that records events in document order."""

    def __init__(self) -> None:
        self.events: List[Event] = []
        self._text: List[str] = []
        self._pending_ns: List[Tuple[str, str]] = []
        self._scopes: List[Dict[str, str]] = [{}]

    def _flush_text(self) -> None:
        if self._text:
            self.events.append(Characters("".join(self._text)))
            self._text = []

    def _prefix_hint(self, namespace: Optional[str]) -> Optional[str]:
        if namespace is None:
            return None
        return self._scopes[-1].get(namespace) or None

    def start_ns(self, prefix: Optional[str], uri: str) -> None:
        self._pending_ns.append((prefix or "", uri))

    def end_ns(self, prefix: Optional[str]) -> None:
        pass

    def start(self, tag: str, attrib: Dict[str, str]) -> None:
        self._flush_text()
        attributes: Attributes = {}
        scope = dict(self._scopes[-1])
        for prefix, uri in self._pending_ns:
            if prefix:
                attributes[(prefix, XMLNS_NAMESPACE)] = uri
                scope[uri] = prefix
            else:
                attributes[("xmlns", None)] = uri
                if uri:
                    scope[uri] = ""
        self._pending_ns = []
        for key, value in attrib.items():
            attributes[split_clark(key)] = value

        self._scopes.append(scope)
        name, namespace = split_clark(tag)
        self.events.append(
            ElementStart(name, namespace, self._prefix_hint(namespace), attributes)
        )

    def end(self, tag: str) -> None:
        self._flush_text()
        name, namespace = split_clark(tag)
        prefix = self._prefix_hint(namespace)
        if len(self._scopes) > 1:
            self._scopes.pop()
        self.events.append(ElementEnd(name, namespace, prefix))

    def data(self, data: str) -> None:
        self._text.append(data)

    def comment(self, text: str) -> None:
        self._flush_text()
        self.events.append(Comment(text))

    def pi(self, target: str, data: Optional[str] = None) -> None:
        self._flush_text()
        content = f"{target} {data}" if data else target
        self.events.append(ProcessingInstruction(content))

    def close(self) -> None:
        self._flush_text()

    def take(self) -> List[Event]:
        events, self.events = self.events, []
        return events


class LxmlEventSource:
    """Incremental event producer.

    ``feed`` and ``close`` return the events completed so far. A tokenizer
    failure is returned as a trailing ``EventSourceError`` item; after that the
    source yields nothing more.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.logger = get_logger(__name__, correlation_id, "lxml_event_source")
        self._target = _EventCollector()
        self._parser = etree.XMLParser(target=self._target, resolve_entities=False)
        self.failed = False
        self.closed = False

    def feed(self, data: Union[str, bytes]) -> List[EventItem]:
        if self.failed or self.closed:
            return []
        try:
            self._parser.feed(data)
        except etree.XMLSyntaxError as e:
            return self._fail(e)
        return list(self._target.take())

    def close(self) -> List[EventItem]:
        if self.failed or self.closed:
            return []
        self.closed = True
        try:
            self._parser.close()
        except etree.XMLSyntaxError as e:
            return self._fail(e)
        return list(self._target.take())

    def _fail(self, error: etree.XMLSyntaxError) -> List[EventItem]:
        self.failed = True
        failure = EventSourceError.from_lxml(error)
        self.logger.debug(
            "Tokenizer failure", extra={"error": str(failure)}
        )
        items: List[EventItem] = list(self._target.take())
        items.append(failure)
        return items


def _iter_chunks(source: SourceType, chunk_size: int) -> Iterator[Union[str, bytes]]:
    if isinstance(source, (str, bytes)):
        for offset in range(0, len(source), chunk_size):
            yield source[offset:offset + chunk_size]
    elif isinstance(source, Path):
        with source.open("rb") as f:
            yield from _iter_chunks(f, chunk_size)
    elif hasattr(source, "read"):
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            yield chunk
    else:
        raise TypeError(f"Unsupported event source type: {type(source).__name__}")


def iter_events(
    source: SourceType,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    correlation_id: Optional[str] = None
) -> Iterator[EventItem]:
    """Yield events for ``source``, ending early with an ``EventSourceError``.

    Args:
        source: XML as ``str``/``bytes``, a ``Path``, or a readable file object
        chunk_size: Size of the chunks handed to lxml
        correlation_id: Optional correlation ID for document tracking
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    producer = LxmlEventSource(correlation_id)
    for chunk in _iter_chunks(source, chunk_size):
        yield from producer.feed(chunk)
        if producer.failed:
            return
    yield from producer.close()
