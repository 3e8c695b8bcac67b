# tests/core/test_ports.py
"""Tests for InPort/OutPort transport."""

from typing import Any

import pytest

from flowline.contracts import Message, PortConnectionError, ProcessResult
from flowline.core.ports import CollectorInPort, InPort, OutPort, connect
from flowline.nodes.base import InOutNode


class _Passthrough(InOutNode):
    name = "passthrough"

    def process(self, message: Message) -> ProcessResult:
        return ProcessResult.success([message])


class TestOutPortPropagation:
    """Synchronous broadcast delivery."""

    def test_propagate_delivers_to_connected_port(self) -> None:
        out = OutPort("out")
        sink = CollectorInPort()
        out.connect(sink)

        msg = Message("x")
        out.propagate(msg)

        assert sink.messages == [msg]

    def test_propagate_with_no_targets_is_noop(self) -> None:
        OutPort("out").propagate(Message("x"))

    def test_fan_out_delivers_same_message_to_all(self) -> None:
        out = OutPort("out")
        a, b, c = CollectorInPort("a"), CollectorInPort("b"), CollectorInPort("c")
        for port in (a, b, c):
            out.connect(port)

        msg = Message("x", {"k": 1})
        out.propagate(msg)

        assert a.messages[0] is msg
        assert b.messages[0] is msg
        assert c.messages[0] is msg

    def test_delivery_follows_connection_order(self) -> None:
        order: list[str] = []
        out = OutPort("out")
        for name in ("first", "second", "third"):
            out.connect(InPort(name, lambda m, n=name: order.append(n)))

        out.propagate(Message("x"))
        out.propagate(Message("y"))

        assert order == ["first", "second", "third", "first", "second", "third"]

    def test_port_does_not_touch_message(self) -> None:
        out = OutPort("out")
        sink = CollectorInPort()
        out.connect(sink)
        msg = Message({"nested": [1, 2]}, {"a": 1})

        out.propagate(msg)

        received = sink.messages[0]
        assert received.payload == {"nested": [1, 2]}
        assert received.metadata == {"a": 1}

    def test_targets_snapshot(self) -> None:
        out = OutPort("out")
        a, b = CollectorInPort("a"), CollectorInPort("b")
        out.connect(a)
        out.connect(b)

        assert out.targets == (a, b)


class TestConnections:
    """InPort single-upstream rule and disconnect."""

    def test_connect_sets_upstream(self) -> None:
        out = OutPort("out")
        sink = CollectorInPort()

        out.connect(sink)

        assert sink.upstream is out
        assert sink.connected is True

    def test_inport_accepts_only_one_upstream(self) -> None:
        sink = CollectorInPort()
        OutPort("first").connect(sink)

        with pytest.raises(PortConnectionError, match="already connected"):
            OutPort("second").connect(sink)

    def test_disconnect_stops_delivery(self) -> None:
        out = OutPort("out")
        sink = CollectorInPort()
        out.connect(sink)

        out.disconnect(sink)
        out.propagate(Message("x"))

        assert sink.messages == []
        assert sink.upstream is None

    def test_disconnect_unconnected_port_raises(self) -> None:
        with pytest.raises(PortConnectionError, match="not connected"):
            OutPort("out").disconnect(CollectorInPort())

    def test_disconnected_port_can_be_reconnected(self) -> None:
        first, second = OutPort("first"), OutPort("second")
        sink = CollectorInPort()
        first.connect(sink)
        first.disconnect(sink)

        second.connect(sink)

        assert sink.upstream is second


class TestCollectorInPort:
    """Collector helper."""

    def test_collects_payloads_and_clears(self) -> None:
        sink = CollectorInPort()
        sink.receive(Message(1))
        sink.receive(Message(2))

        assert sink.payloads == [1, 2]

        sink.clear()
        assert sink.messages == []


class TestConnectHelper:
    """connect() wires nodes by port name."""

    def test_connect_nodes_delivers_downstream(self) -> None:
        upstream = _Passthrough("up")
        downstream = _Passthrough("down")
        sink = CollectorInPort()
        connect(upstream, downstream)
        downstream.out_port.connect(sink)

        upstream.on_message(Message("x"))

        assert sink.payloads == ["x"]

    def test_unknown_output_port(self) -> None:
        with pytest.raises(KeyError, match="no output port 'missing'"):
            connect(_Passthrough("up"), _Passthrough("down"), out_port="missing")

    def test_unknown_input_port(self) -> None:
        with pytest.raises(KeyError, match="no input port 'missing'"):
            connect(_Passthrough("up"), _Passthrough("down"), in_port="missing")

    def test_receiver_return_value_is_ignored(self) -> None:
        received: list[Any] = []
        port = InPort("in", lambda m: received.append(m) or "ignored")

        port.receive(Message("x"))

        assert len(received) == 1
