"""Status codes, modes, and kinds used across subsystem boundaries."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Logical category of a node failure.

    Callers branch on the kind to tell "not found" apart from
    "permission denied", a malformed path, or a generic I/O failure.
    """

    INVALID_CONFIGURATION = "invalid_configuration"
    PATH_RESOLUTION_FAILURE = "path_resolution_failure"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    GENERIC_IO = "generic_io"
    # Non-I/O exception escaping a node's processing step
    PROCESSING_FAILURE = "processing_failure"


class ReadMode(StrEnum):
    """How a file reader turns file content into messages.

    Values:
        WHOLE: One message carrying the entire file text plus file metadata
        LINES: One message per line, in file order, terminators stripped
    """

    WHOLE = "whole"
    LINES = "lines"


class WriteMode(StrEnum):
    """How a file writer opens its target for each write.

    Values:
        AUTO: Append when the target exists, create it exclusively otherwise.
            Decided per write.
        APPEND: Fixed. Create if missing, always append.
        TRUNCATE: Fixed. Create if missing, overwrite on every write.
        CREATE: Strict create-only. An existing target is an error.
    """

    AUTO = "auto"
    APPEND = "append"
    TRUNCATE = "truncate"
    CREATE = "create"
