"""Core tree building implementation.

This module implements the namespace-aware tree builder that turns a stream
of structural events into ``Element`` trees, one event at a time, checking
that start and end markers nest correctly.
"""

from typing import Dict, Iterable, Iterator, List, NoReturn, Optional, Union

from xml_element_builder.events.types import (
    CData,
    Characters,
    Comment,
    ElementEnd,
    ElementStart,
    Event,
    ProcessingInstruction,
)
from xml_element_builder.shared import (
    RESERVED_PREFIXES,
    XMLNS_NAMESPACE,
    BuilderConfig,
    get_logger,
)

from .errors import (
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

EventInput = Union[Event, BaseException]


class XMLTreeBuilder:
    """Builds ``Element`` trees from structural events.

    The builder keeps a stack of open elements, parallel stacks holding the
    default namespace and the prefix declarations of each open scope, and a
    persistent prefix table (namespace URI -> prefix). Every new element gets
    its own copy of the persistent table overlaid with the declarations in
    scope, so declarations reach descendants but never siblings.

    Feed events with ``process``. It returns ``None`` until the outermost open
    element is closed, then returns that element. Several consecutive roots
    may be built from one stream. A nesting error is terminal: the builder
    refuses further events until ``reset`` is called.

    Instances are not thread-safe; callers sharing one must serialize access.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize tree builder.

        Args:
            correlation_id: Optional correlation ID for document tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_tree_builder")

        self._prefixes: Dict[str, str] = dict(RESERVED_PREFIXES)
        self._base_default_namespace: Optional[str] = None

        # Tree building state, all three stacks always have the same depth
        self._element_stack: List[Element] = []
        self._namespace_stack: List[Optional[str]] = []
        self._declared_stack: List[Dict[str, str]] = []
        self._failed = False

        # Statistics
        self.events_processed = 0
        self.elements_built = 0
        self.roots_completed = 0

    @classmethod
    def from_config(
        cls, config: BuilderConfig, correlation_id: Optional[str] = None
    ) -> "XMLTreeBuilder":
        """Create a builder with the prefixes and default namespace of ``config``.

        ``correlation_id`` takes precedence over the one in ``config``.
        """
        builder = cls(correlation_id or config.correlation_id)
        for prefix, namespace in config.prefixes.items():
            builder.bind_prefix(prefix, namespace)
        if config.default_namespace is not None:
            builder.set_default_namespace(config.default_namespace)
        return builder

    @property
    def prefixes(self) -> Dict[str, str]:
        """Copy of the persistent prefix table (namespace URI -> prefix)."""
        return dict(self._prefixes)

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._element_stack)

    @property
    def namespace_depth(self) -> int:
        """Number of open default-namespace scopes."""
        return len(self._namespace_stack)

    @property
    def is_failed(self) -> bool:
        """Whether a nesting error has made the builder refuse further events."""
        return self._failed

    def bind_prefix(self, prefix: str, namespace: str) -> None:
        """Bind ``prefix`` to ``namespace`` for all elements created from now on."""
        self._prefixes[namespace] = prefix

    def set_default_namespace(self, namespace: str) -> None:
        """Set the default namespace that the outermost element inherits.

        Only valid before a document starts: open scopes would otherwise lose
        their nesting, so a call while elements are open is rejected. An empty
        string means no default namespace, as with ``xmlns=""``.
        """
        if self._element_stack:
            raise BuilderStateError(
                "Default namespace can only be set before a document starts"
            )
        self._base_default_namespace = namespace or None

    def reset(self) -> None:
        """Discard any partially built document and clear the failed state.

        The prefix table and default namespace configuration are kept.
        """
        self._element_stack.clear()
        self._namespace_stack.clear()
        self._declared_stack.clear()
        self._failed = False
        self.roots_completed = 0

    def process(self, event: EventInput) -> Optional[Element]:
        """Hand one event (or an upstream failure) to the builder.

        Returns:
            The root element once its end marker has been processed, else None

        Raises:
            UpstreamError: ``event`` is an exception from the event source
            ImproperNestingError: an end marker does not close the innermost
                open element
            BuilderStateError: the builder already failed on a nesting error
        """
        if isinstance(event, BaseException):
            raise UpstreamError(event) from event
        if self._failed:
            raise BuilderStateError("Builder failed earlier; call reset() first")

        self.events_processed += 1
        if isinstance(event, ElementStart):
            self._start_element(event)
        elif isinstance(event, ElementEnd):
            return self._end_element(event)
        elif isinstance(event, Characters):
            self._append(TextNode(event.text))
        elif isinstance(event, CData):
            self._append(CDataNode(event.text))
        elif isinstance(event, Comment):
            self._append(CommentNode(event.text))
        elif isinstance(event, ProcessingInstruction):
            self._append(ProcessingInstructionNode(event.content))
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")
        return None

    def _append(self, node: Node) -> None:
        # Content outside the root element is dropped
        if self._element_stack:
            self._element_stack[-1].children.append(node)

    def _start_element(self, event: ElementStart) -> None:
        element = Element(
            name=event.name,
            namespace=event.namespace,
            attributes=dict(event.attributes),
        )
        self.elements_built += 1

        if self._element_stack:
            default_namespace = self._namespace_stack[-1]
            declared = dict(self._declared_stack[-1])
        else:
            default_namespace = self._base_default_namespace
            declared = {}

        for (name, namespace), value in element.attributes.items():
            if namespace is None and name == "xmlns":
                default_namespace = value or None
            elif namespace == XMLNS_NAMESPACE:
                declared[value] = name

        # Declarations in scope override the persistent table
        element.prefixes = {**self._prefixes, **declared}
        element.default_namespace = default_namespace
        self._namespace_stack.append(default_namespace)
        self._declared_stack.append(declared)
        self._element_stack.append(element)

    def _end_element(self, event: ElementEnd) -> Optional[Element]:
        if not self._element_stack:
            self._fail(ImproperNestingError(None, (event.name, event.namespace)))

        element = self._element_stack.pop()
        self._namespace_stack.pop()
        self._declared_stack.pop()

        if not element.matches(event.name, event.namespace):
            self._fail(
                ImproperNestingError(
                    (element.name, element.namespace),
                    (event.name, event.namespace),
                )
            )

        if self._element_stack:
            self._element_stack[-1].children.append(element)
            return None

        self.roots_completed += 1
        self.logger.debug(
            "Root element completed",
            extra={"element": element.name, "roots_completed": self.roots_completed},
        )
        return element

    def _fail(self, error: ImproperNestingError) -> NoReturn:
        self._failed = True
        self.logger.debug(
            "Improper nesting detected",
            extra={"error": str(error), "depth": self.depth},
        )
        raise error

    def finish(self) -> None:
        """Check that the event stream ended on a complete document.

        Raises:
            ImproperNestingError: elements are still open
            NoElementError: no root element was ever completed
        """
        if self._element_stack:
            top = self._element_stack[-1]
            self._fail(ImproperNestingError((top.name, top.namespace), None))
        if self.roots_completed == 0:
            raise NoElementError()

    def iter_roots(self, events: Iterable[EventInput]) -> Iterator[Element]:
        """Process ``events`` lazily, yielding each root as it completes."""
        for event in events:
            root = self.process(event)
            if root is not None:
                yield root

    def build(self, events: Iterable[EventInput]) -> List[Element]:
        """Process all ``events`` and return every completed root.

        Raises:
            BuilderError: on any failure, including an unfinished document
        """
        roots = list(self.iter_roots(events))
        self.finish()
        return roots
