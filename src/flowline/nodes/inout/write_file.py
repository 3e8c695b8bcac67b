"""File writer node.

Persists each incoming message's payload to a file, then forwards the
original message unchanged, so a flow can continue past the write.

Write modes (see WriteMode):
- auto (default): append if the target exists, otherwise create it. Decided
  per write, so the first message creates the file and every later one
  appends, across node instances too.
- append / truncate: fixed at construction (the `append` flag is shorthand
  for these two).
- create: strict create-only; an existing target fails with ALREADY_EXISTS.

Payloads are written as str(payload) (None becomes "") followed by
line_separator, which defaults to "" (no terminator added).

Missing parent directories are created at write time, inside the
processing call; failing to create them is reported like any other write
failure.
"""

import errno
import os
from typing import Any, Self

import structlog
from pydantic import model_validator

from flowline.contracts import Message, ProcessResult, WriteMode
from flowline.core.locks import PathLockRegistry, default_path_locks
from flowline.nodes.base import ErrorHandler, InOutNode
from flowline.nodes.config_base import EncodedPathConfig
from flowline.nodes.io_errors import failure_from_io_error


class WriteFileConfig(EncodedPathConfig):
    """Configuration for the file writer node.

    Exactly one of mode/append may be given. Neither means auto-detect.
    """

    mode: WriteMode | None = None
    append: bool | None = None
    line_separator: str = ""

    @model_validator(mode="after")
    def _validate_mode_flags(self) -> Self:
        if self.mode is not None and self.append is not None:
            raise ValueError("set either mode or append, not both")
        return self

    @property
    def write_mode(self) -> WriteMode:
        if self.mode is not None:
            return self.mode
        if self.append is not None:
            return WriteMode.APPEND if self.append else WriteMode.TRUNCATE
        return WriteMode.AUTO


class WriteFileNode(InOutNode):
    """Write message payloads to a file and pass the message through.

    Config options:
        path: Path to the output file (required)
        encoding: Name or codecs.CodecInfo (default: "utf-8")
        mode: "auto" (default), "append", "truncate", or "create"
        append: Fixed-mode shorthand; True = "append", False = "truncate"
        line_separator: Written after each payload (default: "")

    Writes to one path are serialized through a per-path lock, so this node
    may be driven from several threads.
    """

    name = "write_file"
    plugin_version = "1.0.0"

    def __init__(
        self,
        node_id: str,
        config: dict[str, Any],
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        error_handler: ErrorHandler | None = None,
        locks: PathLockRegistry | None = None,
    ) -> None:
        super().__init__(node_id, logger=logger, error_handler=error_handler)
        cfg = WriteFileConfig.from_dict(config)

        self._target = cfg.path
        self._path = cfg.resolved_path()
        self._encoding = cfg.encoding
        self._encoding_name = cfg.encoding_name
        self._mode = cfg.write_mode
        self._line_separator = cfg.line_separator
        self._locks = locks if locks is not None else default_path_locks

    @property
    def path(self) -> str:
        return self._target

    @property
    def encoding(self) -> str:
        """Canonical encoding name, e.g. UTF-8."""
        return self._encoding_name

    @property
    def mode(self) -> WriteMode:
        return self._mode

    @property
    def line_separator(self) -> str:
        return self._line_separator

    def process(self, message: Message) -> ProcessResult:
        """Write the payload, then hand back the original message to forward."""
        content = "" if message.payload is None else str(message.payload)
        content += self._line_separator

        try:
            # Encode up front so an unencodable payload never leaves a half-created file
            content.encode(self._encoding)
            with self._locks.lock_for(self._path):
                self._ensure_parent_directory()
                open_mode = self._open_mode()
                with open(self._path, open_mode, encoding=self._encoding, newline="") as f:
                    f.write(content)
        except (OSError, ValueError) as exc:
            return ProcessResult.error(failure_from_io_error(self.node_id, exc, path=self._target, action="writing to"))

        self._log.info(
            "file.written",
            path=self._target,
            mode=str(self._mode),
            action=_ACTIONS[open_mode],
            chars=len(content),
        )
        return ProcessResult.success([message])

    def _open_mode(self) -> str:
        """Pick the open() mode. Caller holds the path lock."""
        if self._mode == WriteMode.AUTO:
            return "a" if self._path.exists() else "x"
        return _OPEN_MODES[self._mode]

    def _ensure_parent_directory(self) -> None:
        parent = self._path.parent
        if parent.is_dir():
            return
        if parent.exists():
            raise NotADirectoryError(errno.ENOTDIR, "Parent path is not a directory", str(parent))
        os.makedirs(parent, exist_ok=True)
        self._log.info("directory.created", path=str(parent))


_OPEN_MODES: dict[WriteMode, str] = {
    WriteMode.APPEND: "a",
    WriteMode.TRUNCATE: "w",
    WriteMode.CREATE: "x",
}

_ACTIONS: dict[str, str] = {"a": "append", "w": "truncate", "x": "create"}
