"""Node contract, base classes, and built-in nodes.

Import patterns:
    from flowline.nodes import InOutNode, ReadFileNode, WriteFileNode
    from flowline.nodes.manager import NodeManager
"""

from flowline.nodes.base import BaseNode, InOutNode
from flowline.nodes.inout import ReadFileConfig, ReadFileNode, WriteFileConfig, WriteFileNode
from flowline.nodes.protocols import NodeProtocol

__all__ = [
    "BaseNode",
    "InOutNode",
    "NodeProtocol",
    "ReadFileConfig",
    "ReadFileNode",
    "WriteFileConfig",
    "WriteFileNode",
]
