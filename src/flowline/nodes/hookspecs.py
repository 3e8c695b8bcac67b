"""pluggy hook specifications for flowline node types.

Node packages implement these hooks to make their node classes available
to whatever builds flows from configuration.

Usage (implementing a node package):
    from flowline.nodes.hookspecs import hookimpl

    class MyNodes:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def flowline_get_nodes(self):
            return [MyNode]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from flowline.nodes.protocols import NodeProtocol

# Project name for pluggy
PROJECT_NAME = "flowline"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class FlowlineNodeSpec:
    """Hook specifications for node types."""

    @hookspec
    def flowline_get_nodes(self) -> list[type["NodeProtocol"]]:  # type: ignore[empty-body]
        """Return node classes (not instances).

        Each class must define a unique `name` class attribute.
        """
