"""Shared utilities for the element builder.

This module provides configuration objects, diagnostic types, namespace
constants and logging helpers used across all layers.
"""

from .config import BuilderConfig
from .constants import (
    RESERVED_PREFIXES,
    XML_NAMESPACE,
    XMLNS_NAMESPACE,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "BuilderConfig",
    "RESERVED_PREFIXES",
    "XML_NAMESPACE",
    "XMLNS_NAMESPACE",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
]
