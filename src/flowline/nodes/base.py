"""Base classes for node implementations.

BaseNode implements the NodeProtocol contract once so concrete nodes only
write process(). InOutNode is the single-input, single-output shape used by
transform-style nodes such as the file reader and writer.

Processing contract:

    on_message(message)
        -> process(message) returns ProcessResult
        -> success: emit() each result message, in order
        -> error:   handle_error(failure), emit nothing

process() reports expected failures by returning ProcessResult.error().
Anything it raises instead is converted to a PROCESSING_FAILURE and goes
down the same error path, so on_message never raises to the upstream port.

Concurrency:
    A node runs one on_message at a time (idle -> processing -> idle).
    Overlapping calls from several threads are allowed. BaseNode guards
    only its failure bookkeeping; subclasses that touch shared resources
    serialize them (see WriteFileNode).
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

import structlog

from flowline.contracts import Message, NodeConfigError, NodeFailure, ProcessResult
from flowline.core.logging import get_logger
from flowline.core.ports import InPort, OutPort

ErrorHandler = Callable[[NodeFailure], None]


class BaseNode(ABC):
    """Base class for all nodes.

    Subclass and implement process().

    Args:
        node_id: Externally supplied identifier. Immutable; uniqueness within
            a graph is the builder's job.
        logger: Injected structlog logger. Defaults to the subclass module's
            logger. Bound with node_id either way.
        error_handler: Optional escalation hook called with every failure
            after it has been logged (metrics, supervisors, test sinks).
    """

    name: str
    plugin_version: str = "0.0.0"

    def __init__(
        self,
        node_id: str,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        if not isinstance(node_id, str) or not node_id.strip():
            raise NodeConfigError(f"Invalid configuration for {type(self).__name__}: node_id cannot be empty")
        self._node_id = node_id
        self.inputs: dict[str, InPort] = {}
        self.outputs: dict[str, OutPort] = {}
        if logger is not None:
            self._log = logger.bind(node_id=node_id)
        else:
            self._log = get_logger(type(self).__module__, node_id=node_id)
        self._error_handler = error_handler

        # Guards failure_count and last_failure
        self._failure_lock = threading.Lock()
        self.failure_count = 0
        self.last_failure: NodeFailure | None = None

    @property
    def node_id(self) -> str:
        return self._node_id

    def add_input(self, name: str) -> InPort:
        """Create an input port delivering to on_message."""
        if name in self.inputs:
            raise ValueError(f"Node '{self.node_id}' already has an input port '{name}'")
        port = InPort(name, self.on_message)
        self.inputs[name] = port
        return port

    def add_output(self, name: str) -> OutPort:
        """Create an output port fed by emit()."""
        if name in self.outputs:
            raise ValueError(f"Node '{self.node_id}' already has an output port '{name}'")
        port = OutPort(name)
        self.outputs[name] = port
        return port

    @abstractmethod
    def process(self, message: Message) -> ProcessResult:
        """Process one message.

        Returns:
            ProcessResult.success(messages) with the messages to emit, or
            ProcessResult.error(failure) for an expected failure.
        """
        ...

    def on_message(self, message: Message) -> ProcessResult:
        """Entry point for upstream ports and drivers. Never raises.

        Returns:
            The ProcessResult, for drivers and tests that want the outcome.
        """
        try:
            result = self.process(message)
        except Exception as exc:
            result = ProcessResult.error(NodeFailure.from_exception(self.node_id, exc))

        if result.is_success:
            for out in result.messages:
                self.emit(out)
        else:
            assert result.failure is not None  # guaranteed by ProcessResult
            self.handle_error(result.failure)
        return result

    def emit(self, message: Message) -> None:
        """Send message to every output port, in port order."""
        for port in self.outputs.values():
            port.propagate(message)

    def handle_error(self, failure: NodeFailure) -> None:
        """Log and record a failure, then escalate to the error handler.

        Does not retry. The node stays usable for the next message. A failing
        error handler is logged and contained, so it cannot stop delivery to
        sibling branches upstream.
        """
        with self._failure_lock:
            self.failure_count += 1
            self.last_failure = failure
        self._log.error(
            "node.failed",
            kind=str(failure.kind),
            path=failure.path,
            error=failure.message,
            exception_type=failure.exception_type,
        )
        if self._error_handler is None:
            return
        try:
            self._error_handler(failure)
        except Exception:
            self._log.error("node.error_handler_failed", kind=str(failure.kind), exc_info=True)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(node_id={self.node_id!r})"


class InOutNode(BaseNode):
    """Node with exactly one input port ("in") and one output port ("out")."""

    def __init__(
        self,
        node_id: str,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        super().__init__(node_id, logger=logger, error_handler=error_handler)
        self.add_input("in")
        self.add_output("out")

    @property
    def in_port(self) -> InPort:
        return self.inputs["in"]

    @property
    def out_port(self) -> OutPort:
        return self.outputs["out"]
