"""Mapping from filesystem exceptions to node failure kinds.

File nodes catch OSError (and the ValueError family that os/open raise for
malformed paths and undecodable text) at their I/O boundary and turn it into
a NodeFailure. Nothing here raises.
"""

from __future__ import annotations

import errno

from flowline.contracts import ErrorKind, NodeFailure

# errno values meaning "this string does not name a usable path"
_PATH_ERRNOS: frozenset[int] = frozenset({errno.ENAMETOOLONG, errno.EINVAL})

_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.PATH_RESOLUTION_FAILURE: "Invalid file path",
    ErrorKind.NOT_FOUND: "File not found",
    ErrorKind.PERMISSION_DENIED: "Access denied",
    ErrorKind.ALREADY_EXISTS: "File already exists",
    ErrorKind.GENERIC_IO: "I/O error",
    ErrorKind.PROCESSING_FAILURE: "Processing failed",
}


def classify_os_error(exc: BaseException) -> ErrorKind:
    """Classify an exception raised by a filesystem operation.

    Order matters: UnicodeError is a ValueError but is an I/O (decode/encode)
    failure, not a malformed path.
    """
    if isinstance(exc, UnicodeError):
        return ErrorKind.GENERIC_IO
    if isinstance(exc, FileNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return ErrorKind.PERMISSION_DENIED
    if isinstance(exc, FileExistsError):
        return ErrorKind.ALREADY_EXISTS
    if isinstance(exc, NotADirectoryError):
        return ErrorKind.PATH_RESOLUTION_FAILURE
    if isinstance(exc, ValueError):
        # e.g. "embedded null byte"
        return ErrorKind.PATH_RESOLUTION_FAILURE
    if isinstance(exc, OSError):
        if exc.errno in _PATH_ERRNOS:
            return ErrorKind.PATH_RESOLUTION_FAILURE
        return ErrorKind.GENERIC_IO
    return ErrorKind.PROCESSING_FAILURE


def failure_from_io_error(node_id: str, exc: BaseException, *, path: str, action: str) -> NodeFailure:
    """Build a classified NodeFailure for a failed file operation.

    Args:
        node_id: Node that hit the error
        exc: The caught exception
        path: Configured path the node was working on
        action: Verb phrase for the message, e.g. "reading" or "writing to"

    Returns:
        NodeFailure whose message reads like "File not found while reading data.txt: ..."
    """
    kind = classify_os_error(exc)
    detail = str(exc) or type(exc).__name__
    return NodeFailure.from_exception(
        node_id,
        exc,
        path=path,
        kind=kind,
        message=f"{_DESCRIPTIONS[kind]} while {action} {path}: {detail}",
    )
