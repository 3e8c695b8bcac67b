"""Failure records and error types.

Processing failures are values, not exceptions: a node's processing step
returns a NodeFailure wrapped in ProcessResult.error() and the node hands it
to its own error hook. Exceptions are reserved for construction-time
configuration errors and wiring mistakes, which are programmer errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from flowline.contracts.enums import ErrorKind


@dataclass(frozen=True)
class NodeFailure:
    """Structured description of one failed processing attempt.

    Fields:
        node_id: Node that failed
        kind: Logical error category
        message: Human-readable description
        path: Filesystem path involved, if any
        exception_type: Class name of the underlying exception, if any
        exception: The underlying exception (not part of repr/equality)
    """

    node_id: str
    kind: ErrorKind
    message: str
    path: str | None = None
    exception_type: str | None = None
    exception: BaseException | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_exception(
        cls,
        node_id: str,
        exc: BaseException,
        *,
        path: str | None = None,
        kind: ErrorKind | None = None,
        message: str | None = None,
    ) -> NodeFailure:
        """Build a failure record from a caught exception.

        Args:
            node_id: Node that caught the exception
            exc: The exception
            path: Filesystem path involved, if any
            kind: Error category. Defaults to PROCESSING_FAILURE; I/O call
                sites classify first via flowline.nodes.io_errors.
            message: Explicit description. Defaults to str(exc).

        Returns:
            NodeFailure carrying the exception for later inspection
        """
        return cls(
            node_id=node_id,
            kind=kind if kind is not None else ErrorKind.PROCESSING_FAILURE,
            message=message if message is not None else (str(exc) or type(exc).__name__),
            path=path,
            exception_type=type(exc).__name__,
            exception=exc,
        )


class NodeConfigError(Exception):
    """Raised when node configuration is invalid.

    Only ever raised from a node's constructor, never from message
    processing.
    """

    kind = ErrorKind.INVALID_CONFIGURATION


class PortConnectionError(Exception):
    """Raised when ports are wired in a way the propagation model forbids."""
