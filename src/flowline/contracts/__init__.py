"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/nodes.

Import patterns:
    from flowline.contracts import Message, ProcessResult, ErrorKind
"""

from flowline.contracts.enums import ErrorKind, ReadMode, WriteMode
from flowline.contracts.errors import NodeConfigError, NodeFailure, PortConnectionError
from flowline.contracts.message import Message
from flowline.contracts.results import ProcessResult

__all__ = [
    "ErrorKind",
    "Message",
    "NodeConfigError",
    "NodeFailure",
    "PortConnectionError",
    "ProcessResult",
    "ReadMode",
    "WriteMode",
]
