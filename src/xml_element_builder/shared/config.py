"""Configuration objects for the element builder and the parsing API."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constants import RESERVED_PREFIXES

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass
class BuilderConfig:
    """Pre-document configuration applied to a fresh ``XMLTreeBuilder``.

    ``prefixes`` maps a prefix to the namespace URI it should be bound to in
    the builder's persistent prefix table. ``default_namespace`` seeds the
    outermost default-namespace scope.
    """

    prefixes: Dict[str, str] = field(default_factory=dict)
    default_namespace: Optional[str] = None
    correlation_id: Optional[str] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        """Validate builder configuration."""
        reserved = {prefix: uri for uri, prefix in RESERVED_PREFIXES.items()}
        for prefix, uri in self.prefixes.items():
            if not prefix:
                raise ValueError("Prefix cannot be empty")
            if not uri:
                raise ValueError(f"Namespace for prefix '{prefix}' cannot be empty")
            if prefix in reserved and reserved[prefix] != uri:
                raise ValueError(f"Prefix '{prefix}' is reserved for {reserved[prefix]}")
        if self.default_namespace == "":
            raise ValueError("default_namespace must be a non-empty URI or None")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuilderConfig":
        """Create configuration from a plain dictionary, ignoring unknown keys."""
        return cls(
            prefixes=dict(data.get("prefixes", {})),
            default_namespace=data.get("default_namespace"),
            correlation_id=data.get("correlation_id"),
            chunk_size=data.get("chunk_size", DEFAULT_CHUNK_SIZE),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "BuilderConfig":
        """Load configuration from a JSON file."""
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prefixes": dict(self.prefixes),
            "default_namespace": self.default_namespace,
            "correlation_id": self.correlation_id,
            "chunk_size": self.chunk_size,
        }
