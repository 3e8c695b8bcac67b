"""Structured logging for flowline.

Nodes never configure logging. They log through get_logger() with dotted
event names ("file.read", "file.written", "node.failed", ...) and keyword
context, and whatever hosts the flow calls configure_logging() once.

Events are routed through stdlib logging via ProcessorFormatter, so
records from plain logging.getLogger() callers share the same renderer.
Node events are reshaped so node_id, kind and path lead the rendered line.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

# Name of the root handler this module installs and replaces on reconfigure
_HANDLER_NAME = "flowline"

# Leading fields for node events, in render order
_NODE_FIELDS = ("event", "node_id", "kind", "path")

# Failure fields that only add noise when unset
_OPTIONAL_FAILURE_FIELDS = ("path", "exception_type")


def order_node_fields(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Put node identity first and drop unset failure fields.

    Only touches events carrying a node_id; foreign stdlib records pass
    through unchanged.
    """
    if "node_id" not in event_dict:
        return event_dict
    for key in _OPTIONAL_FAILURE_FIELDS:
        if key in event_dict and event_dict[key] is None:
            del event_dict[key]
    ordered = {key: event_dict.pop(key) for key in _NODE_FIELDS if key in event_dict}
    ordered.update(event_dict)
    return ordered


def _resolve_level(level: str) -> int:
    levels = logging.getLevelNamesMapping()
    try:
        return levels[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level '{level}'. Expected one of: DEBUG, INFO, WARNING, ERROR, CRITICAL") from None


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the root stdlib logger.

    Calling it again replaces the handler installed by the previous call and
    leaves other root handlers alone.

    Args:
        json_output: One JSON object per line if True, else console lines.
        level: Root log level name, case-insensitive.
        stream: Output stream. Defaults to sys.stdout at call time.

    Raises:
        ValueError: If level is not a stdlib level name.
    """
    log_level = _resolve_level(level)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        order_node_fields,
    ]

    renderer: Any
    if json_output:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # sort_keys=False keeps the node field order from order_node_fields
        renderer = [structlog.dev.ConsoleRenderer(colors=False, sort_keys=False)]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers that nodes already hold
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[ProcessorFormatter.remove_processors_meta, *renderer],
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, optionally pre-bound with context.

    Args:
        name: Logger name (typically __name__).
        **context: Initial key/value context, e.g. node_id.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name, **context)
    return logger
