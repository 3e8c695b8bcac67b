"""Port abstractions for node-to-node transport.

Every node has input and output ports. Data flows through ports, not
through return values:
- An OutPort fans out to any number of InPorts (broadcast).
- An InPort receives from exactly one upstream OutPort.
- Ports never look inside a message; they only move it.

Propagation is synchronous call-through: OutPort.propagate() returns once
every downstream node has finished handling the message. There is no
buffering, so nothing ever blocks on a full downstream queue.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from flowline.contracts.errors import PortConnectionError

if TYPE_CHECKING:
    from flowline.contracts.message import Message
    from flowline.nodes.protocols import NodeProtocol

Receiver = Callable[["Message"], Any]


class InPort:
    """Input endpoint bound to a receiving callable.

    The receiver is normally the owning node's on_message.
    """

    def __init__(self, name: str, receiver: Receiver) -> None:
        self.name = name
        self._receiver = receiver
        self.upstream: OutPort | None = None

    @property
    def connected(self) -> bool:
        return self.upstream is not None

    def receive(self, message: Message) -> None:
        """Hand a message to the receiver."""
        self._receiver(message)

    def __repr__(self) -> str:
        upstream = self.upstream.name if self.upstream is not None else None
        return f"{type(self).__name__}(name={self.name!r}, upstream={upstream!r})"


class OutPort:
    """Output endpoint that broadcasts to its connected InPorts.

    Delivery order follows connection order, so it is deterministic for a
    fixed wiring.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._targets: list[InPort] = []

    @property
    def targets(self) -> tuple[InPort, ...]:
        """Connected InPorts, in connection order."""
        return tuple(self._targets)

    def connect(self, target: InPort) -> None:
        """Connect a downstream InPort.

        Raises:
            PortConnectionError: If target already has an upstream connection
        """
        if target.upstream is not None:
            raise PortConnectionError(
                f"InPort '{target.name}' is already connected to OutPort '{target.upstream.name}'. "
                f"An InPort receives from exactly one upstream connection."
            )
        self._targets.append(target)
        target.upstream = self

    def disconnect(self, target: InPort) -> None:
        """Disconnect a downstream InPort.

        Raises:
            PortConnectionError: If target is not connected to this port
        """
        if target.upstream is not self:
            raise PortConnectionError(f"InPort '{target.name}' is not connected to OutPort '{self.name}'")
        self._targets.remove(target)
        target.upstream = None

    def propagate(self, message: Message) -> None:
        """Deliver message to every connected InPort, in connection order."""
        # Snapshot so a receiver rewiring this port mid-delivery cannot skip targets
        for target in tuple(self._targets):
            target.receive(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, targets={[t.name for t in self._targets]!r})"


class CollectorInPort(InPort):
    """InPort that collects every received message into a list.

    Useful for testing and for driver-side taps on a node's output.
    """

    def __init__(self, name: str = "collector") -> None:
        self.messages: list[Message] = []
        super().__init__(name, self.messages.append)

    @property
    def payloads(self) -> list[Any]:
        return [m.payload for m in self.messages]

    def clear(self) -> None:
        """Clear collected messages."""
        self.messages.clear()


def connect(
    upstream: NodeProtocol,
    downstream: NodeProtocol,
    *,
    out_port: str = "out",
    in_port: str = "in",
) -> None:
    """Wire upstream's named OutPort to downstream's named InPort.

    Raises:
        KeyError: If either node has no port by that name
        PortConnectionError: If the InPort is already connected
    """
    try:
        source = upstream.outputs[out_port]
    except KeyError:
        raise KeyError(f"Node '{upstream.node_id}' has no output port '{out_port}'") from None
    try:
        target = downstream.inputs[in_port]
    except KeyError:
        raise KeyError(f"Node '{downstream.node_id}' has no input port '{in_port}'") from None
    source.connect(target)
