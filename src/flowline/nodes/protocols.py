"""Node protocol defining the contract every node satisfies.

A node processes an incoming message, may emit zero or more outgoing
messages, and may report a failure. Anything with these members can be
wired into a flow; BaseNode is one reusable implementation, not a
requirement.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flowline.contracts import Message, NodeFailure
    from flowline.core.ports import InPort, OutPort


@runtime_checkable
class NodeProtocol(Protocol):
    """Protocol for nodes.

    Lifecycle:
    1. __init__(node_id, config, ...) - Eager configuration validation
    2. on_message(message) - Called any number of times, never raises
    3. No teardown - resources are released inside each on_message

    Example:
        class UpperCase:
            name = "upper"

            def on_message(self, message: Message) -> None:
                self.emit(message.with_payload(str(message.payload).upper()))
    """

    name: str
    plugin_version: str

    @property
    def node_id(self) -> str: ...

    inputs: dict[str, "InPort"]
    outputs: dict[str, "OutPort"]

    def on_message(self, message: "Message") -> Any:
        """Process one incoming message. Must not raise."""
        ...

    def emit(self, message: "Message") -> None:
        """Send a message to every connected output port."""
        ...

    def handle_error(self, failure: "NodeFailure") -> None:
        """Report a failure without emitting it as data."""
        ...
