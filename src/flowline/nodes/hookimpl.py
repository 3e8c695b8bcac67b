"""Hook implementation registering the built-in node types."""

from flowline.nodes.hookspecs import hookimpl
from flowline.nodes.inout.read_file import ReadFileNode
from flowline.nodes.inout.write_file import WriteFileNode


class BuiltinNodes:
    """Built-in file I/O nodes."""

    @hookimpl
    def flowline_get_nodes(self) -> list[type]:
        return [ReadFileNode, WriteFileNode]


builtin_nodes = BuiltinNodes()
