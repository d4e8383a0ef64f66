"""Errors raised by the tree builder."""

from typing import Optional, Tuple

QName = Tuple[str, Optional[str]]


def _format_qname(qname: Optional[QName]) -> str:
    if qname is None:
        return "nothing"
    name, namespace = qname
    return f"{{{namespace}}}{name}" if namespace else name


class BuilderError(Exception):
    """Base class for all tree building failures."""


class UpstreamError(BuilderError):
    """The event source reported a failure; the original is kept in ``error``."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(str(error))
        self.error = error


class ImproperNestingError(BuilderError):
    """An end marker did not close the innermost open element.

    ``expected`` is the innermost open element (``None`` when nothing was
    open); ``found`` is what the end marker named (``None`` when elements were
    left open at end of input).
    """

    def __init__(
        self,
        expected: Optional[QName] = None,
        found: Optional[QName] = None
    ) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            "Elements not properly nested: expected end of "
            f"{_format_qname(expected)}, found {_format_qname(found)}"
        )


class NoElementError(BuilderError):
    """The event stream ended without producing any element."""

    def __init__(self) -> None:
        super().__init__("No elements found")


class BuilderStateError(BuilderError):
    """The builder was used in a state that does not allow the operation."""
