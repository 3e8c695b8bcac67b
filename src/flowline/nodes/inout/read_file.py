"""File reader node.

Turns the content of a file into messages. The incoming message only
triggers the read; its payload and metadata are ignored.

Two modes:
- whole: one message whose payload is the entire file text, with
  provenance metadata (source_file, file_size, file_encoding, last_modified)
- lines: one message per line, in file order, line terminators stripped

The file is read to completion and closed before anything is emitted, so a
read that fails part-way emits nothing.
"""

import errno
import os
from typing import Any

import structlog

from flowline.contracts import Message, ProcessResult, ReadMode
from flowline.nodes.base import ErrorHandler, InOutNode
from flowline.nodes.config_base import EncodedPathConfig
from flowline.nodes.io_errors import failure_from_io_error


class ReadFileConfig(EncodedPathConfig):
    """Configuration for the file reader node.

    Inherits path and encoding validation from EncodedPathConfig.
    """

    mode: ReadMode = ReadMode.WHOLE
    include_last_modified: bool = True  # False gives the minimal metadata set
    line_metadata: bool = False  # lines mode: add source_file/line_number


class ReadFileNode(InOutNode):
    """Read a file and emit its content.

    Config options:
        path: Path to the file (required)
        encoding: Name or codecs.CodecInfo (default: "utf-8")
        mode: "whole" (default) or "lines"
        include_last_modified: Add last_modified (epoch ms) in whole mode (default: True)
        line_metadata: Add source_file and line_number in lines mode (default: False)

    Example:
        reader = ReadFileNode("reader", {"path": "in.txt"})
        reader.on_message(Message(None))  # emits Message("<file text>", {...})
    """

    name = "read_file"
    plugin_version = "1.0.0"

    def __init__(
        self,
        node_id: str,
        config: dict[str, Any],
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        super().__init__(node_id, logger=logger, error_handler=error_handler)
        cfg = ReadFileConfig.from_dict(config)

        self._source = cfg.path
        self._path = cfg.resolved_path()
        self._encoding = cfg.encoding
        self._encoding_name = cfg.encoding_name
        self._mode = cfg.mode
        self._include_last_modified = cfg.include_last_modified
        self._line_metadata = cfg.line_metadata

    @property
    def path(self) -> str:
        return self._source

    @property
    def encoding(self) -> str:
        """Canonical encoding name, e.g. UTF-8."""
        return self._encoding_name

    @property
    def mode(self) -> ReadMode:
        return self._mode

    def process(self, message: Message) -> ProcessResult:
        """Read the configured file and return the messages to emit."""
        try:
            self._check_readable()
            if self._mode == ReadMode.LINES:
                messages = self._read_lines()
            else:
                messages = [self._read_whole()]
        except (OSError, ValueError) as exc:
            # ValueError covers undecodable content and malformed paths
            return ProcessResult.error(failure_from_io_error(self.node_id, exc, path=self._source, action="reading"))

        self._log.info(
            "file.read",
            path=self._source,
            encoding=self._encoding_name,
            mode=str(self._mode),
            messages=len(messages),
        )
        return ProcessResult.success(messages)

    def _check_readable(self) -> None:
        """Check existence, then readability, before opening.

        os.stat distinguishes a missing file from a malformed path
        (ValueError / ENAMETOOLONG), which Path.exists() would hide.
        """
        try:
            os.stat(self._path)
        except FileNotFoundError:
            raise FileNotFoundError(errno.ENOENT, "File does not exist", self._source) from None
        if not os.access(self._path, os.R_OK):
            raise PermissionError(errno.EACCES, "File is not readable", self._source)

    def _read_whole(self) -> Message:
        # newline="" keeps the text byte-faithful: no \r\n translation
        with open(self._path, encoding=self._encoding, newline="") as f:
            content = f.read()
            stat = os.fstat(f.fileno())

        metadata: dict[str, Any] = {
            "source_file": self._source,
            "file_size": stat.st_size,
            "file_encoding": self._encoding_name,
        }
        if self._include_last_modified:
            metadata["last_modified"] = stat.st_mtime_ns // 1_000_000
        return Message(content, metadata)

    def _read_lines(self) -> list[Message]:
        # Universal newlines: \n, \r\n and \r all end a line
        with open(self._path, encoding=self._encoding) as f:
            lines = [line[:-1] if line.endswith("\n") else line for line in f]

        if not self._line_metadata:
            return [Message(line) for line in lines]
        return [Message(line, {"source_file": self._source, "line_number": number}) for number, line in enumerate(lines, start=1)]
