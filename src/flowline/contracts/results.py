"""Outcome of one node processing step.

IMPORTANT: status uses Literal["success", "error"], NOT an enum, matching
how results are checked throughout the node base class.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from flowline.contracts.errors import NodeFailure
from flowline.contracts.message import Message


@dataclass(frozen=True)
class ProcessResult:
    """Result of a node's processing step.

    Use the factory methods to create instances.

    - success(messages): zero or more messages to emit, in order. Zero is
      valid (filtering nodes).
    - error(failure): nothing is emitted; the failure goes to the error hook.
    """

    status: Literal["success", "error"]
    messages: tuple[Message, ...] = ()
    failure: NodeFailure | None = None

    def __post_init__(self) -> None:
        """Validate invariants - errors carry a failure and never carry output."""
        if self.status == "error" and self.failure is None:
            raise ValueError("ProcessResult with status='error' MUST provide a failure.")
        if self.status == "error" and self.messages:
            raise ValueError("ProcessResult with status='error' cannot carry output messages.")
        if self.status == "success" and self.failure is not None:
            raise ValueError("ProcessResult with status='success' cannot carry a failure.")

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @property
    def emitted(self) -> int:
        """Number of messages this result hands to emit()."""
        return len(self.messages)

    @classmethod
    def success(cls, messages: Iterable[Message] = ()) -> ProcessResult:
        """Create a successful result.

        Args:
            messages: Messages to emit, in order. May be empty.

        Returns:
            ProcessResult with status="success"
        """
        return cls(status="success", messages=tuple(messages))

    @classmethod
    def error(cls, failure: NodeFailure) -> ProcessResult:
        """Create an error result.

        Args:
            failure: What went wrong

        Returns:
            ProcessResult with status="error" and no messages
        """
        return cls(status="error", failure=failure)
