"""Message envelope flowing between nodes.

A Message pairs an application payload with a metadata mapping. Messages are
passed by reference along ports, so a single instance may reach several
consumers after a fan-out. The metadata is therefore copied on construction
and exposed read-only: a node that wants to add provenance builds a new
Message with with_metadata() instead of touching the one it received.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def _new_message_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Message:
    """Payload plus accumulated metadata.

    Attributes:
        payload: Arbitrary application value (text, structured data, or None)
        metadata: Read-only mapping of string keys to values. Never None.
        message_id: Diagnostic identifier. Not part of equality.

    Example:
        msg = Message("hello")
        tagged = msg.with_metadata(source_file="in.txt")
        assert msg.metadata == {}
        assert tagged.metadata == {"source_file": "in.txt"}
    """

    payload: Any = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    message_id: str = field(default_factory=_new_message_id, compare=False)

    # MappingProxyType is unhashable; messages are compared, never used as keys
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        source = self.metadata if self.metadata is not None else {}
        if not isinstance(source, Mapping):
            raise TypeError(f"Message metadata must be a mapping, got {type(source).__name__}")
        # Private copy so later mutation of the caller's dict cannot leak in
        object.__setattr__(self, "metadata", MappingProxyType(dict(source)))

    def with_metadata(self, /, **entries: Any) -> Message:
        """Return a new Message whose metadata adds (or overrides) entries.

        The receiver is left untouched.
        """
        return Message(self.payload, {**self.metadata, **entries})

    def with_payload(self, payload: Any) -> Message:
        """Return a new Message carrying payload and a copy of this metadata."""
        return Message(payload, self.metadata)

    def metadata_dict(self) -> dict[str, Any]:
        """Return a mutable copy of the metadata."""
        return dict(self.metadata)
