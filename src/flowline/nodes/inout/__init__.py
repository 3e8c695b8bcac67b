"""Single-input, single-output nodes."""

from flowline.nodes.inout.read_file import ReadFileConfig, ReadFileNode
from flowline.nodes.inout.write_file import WriteFileConfig, WriteFileNode

__all__ = [
    "ReadFileConfig",
    "ReadFileNode",
    "WriteFileConfig",
    "WriteFileNode",
]
