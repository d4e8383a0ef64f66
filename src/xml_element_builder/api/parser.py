"""Parsing API connecting the lxml event source to the tree builder.

``parse_string`` and ``parse_file`` never raise on malformed input: builder
failures are captured in the returned ``ParseResult`` together with a
diagnostic. ``parse_element`` is the strict variant and raises.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from xml_element_builder.events import iter_events
from xml_element_builder.events.source import SourceType
from xml_element_builder.shared import (
    BuilderConfig,
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    get_logger,
)
from xml_element_builder.tree import BuilderError, Element, NoElementError, XMLTreeBuilder

MS_PER_SECOND = 1000


@dataclass
class ParseResult:
    """Outcome of building one input: the roots, the error and diagnostics."""

    roots: List[Element] = field(default_factory=list)
    error: Optional[BuilderError] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def root(self) -> Optional[Element]:
        """First completed root element, if any."""
        return self.roots[0] if self.roots else None

    @property
    def element_count(self) -> int:
        return sum(1 for root in self.roots for _ in root.iter_elements())

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(d.severity == DiagnosticSeverity.ERROR for d in self.diagnostics)

    def raise_for_error(self) -> None:
        """Re-raise the captured builder error, if any."""
        if self.error is not None:
            raise self.error

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the parse result."""
        return {
            "success": self.success,
            "error": str(self.error) if self.error else None,
            "error_type": type(self.error).__name__ if self.error else None,
            "root_count": len(self.roots),
            "element_count": self.element_count,
            "diagnostic_count": len(self.diagnostics),
            "performance": self.performance.to_dict(),
        }


def _build(
    source: SourceType,
    config: Optional[BuilderConfig],
    correlation_id: Optional[str]
) -> ParseResult:
    config = config or BuilderConfig()
    correlation_id = correlation_id or config.correlation_id
    logger = get_logger(__name__, correlation_id, "parse")
    start_time = time.time()

    builder = XMLTreeBuilder.from_config(config, correlation_id)
    result = ParseResult(correlation_id=correlation_id)

    logger.info(
        "Starting tree building",
        extra={"input_type": type(source).__name__},
    )
    events = iter_events(source, config.chunk_size, correlation_id)
    try:
        for root in builder.iter_roots(events):
            result.roots.append(root)
        builder.finish()
    except BuilderError as e:
        result.error = e
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            f"Tree building failed: {e}",
            "xml_tree_builder",
            details={"error_type": type(e).__name__},
        )
        logger.warning(
            "Tree building failed",
            extra={"error_type": type(e).__name__, "error": str(e)},
        )

    result.performance = PerformanceMetrics(
        processing_time_ms=(time.time() - start_time) * MS_PER_SECOND,
        events_processed=builder.events_processed,
        elements_built=builder.elements_built,
        roots_completed=len(result.roots),
    )
    logger.info(
        "Tree building completed",
        extra={"success": result.success, "root_count": len(result.roots)},
    )
    return result


def parse_string(
    xml: Union[str, bytes],
    config: Optional[BuilderConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Build element trees from XML text.

    Examples:
        >>> result = parse_string('<root xmlns="urn:x"><item/></root>')
        >>> result.root.get_child('item', 'urn:x').default_namespace
        'urn:x'
    """
    return _build(xml, config, correlation_id)


def parse_file(
    path: Union[str, Path],
    config: Optional[BuilderConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Build element trees from an XML file.

    A missing or unreadable file raises ``OSError``; only XML problems are
    captured in the result.
    """
    return _build(Path(path), config, correlation_id)


def parse_element(xml: Union[str, bytes], config: Optional[BuilderConfig] = None) -> Element:
    """Return the first root element of ``xml``.

    Raises:
        UpstreamError: lxml rejected the input (this includes input holding
            no element at all)
        NoElementError: no root element was built
        BuilderError: any other builder failure
    """
    result = parse_string(xml, config)
    result.raise_for_error()
    if result.root is None:
        raise NoElementError()
    return result.root
