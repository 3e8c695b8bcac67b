"""Node type registry for discovery, registration, and instantiation.

Uses pluggy for hook-based registration. The manager only knows node
*types*; wiring instances into a graph is the builder's job.
"""

from typing import Any

import pluggy

from flowline.nodes.hookspecs import PROJECT_NAME, FlowlineNodeSpec
from flowline.nodes.protocols import NodeProtocol


class NodeManager:
    """Manages node type registration and lookup.

    Usage:
        manager = NodeManager()
        manager.register_builtin_nodes()

        reader = manager.create_node("read_file", "reader", {"path": "in.txt"})
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(FlowlineNodeSpec)

        # Map name to node class for duplicate detection
        self._nodes: dict[str, type[NodeProtocol]] = {}

    def register_builtin_nodes(self) -> None:
        """Register the built-in file I/O nodes. Call once at startup."""
        from flowline.nodes.hookimpl import BuiltinNodes

        self.register(BuiltinNodes())

    def register(self, plugin: Any) -> None:
        """Register a plugin implementing flowline_get_nodes.

        Raises:
            ValueError: If it supplies a node name that is already registered.
                The plugin is unregistered again before raising.
        """
        self._pm.register(plugin)
        try:
            self._refresh_cache()
        except ValueError:
            self._pm.unregister(plugin)
            raise

    def _refresh_cache(self) -> None:
        """Rebuild the name -> class cache from all registered hooks.

        Raises:
            ValueError: If two node classes share a name
        """
        new_nodes: dict[str, type[NodeProtocol]] = {}
        for nodes in self._pm.hook.flowline_get_nodes():
            for cls in nodes:
                name = cls.name
                if name in new_nodes:
                    raise ValueError(f"Duplicate node type name: '{name}'. Already registered by {new_nodes[name].__name__}")
                new_nodes[name] = cls

        self._nodes = new_nodes

    def get_nodes(self) -> list[type[NodeProtocol]]:
        """Get all registered node classes."""
        return list(self._nodes.values())

    def get_node_by_name(self, name: str) -> type[NodeProtocol] | None:
        """Get node class by name."""
        return self._nodes.get(name)

    def create_node(self, name: str, node_id: str, config: dict[str, Any], **kwargs: Any) -> NodeProtocol:
        """Instantiate a registered node type.

        Args:
            name: Registered node type name, e.g. "read_file"
            node_id: Identifier for the new instance
            config: Node configuration dict
            **kwargs: Injected collaborators (logger, error_handler, locks, ...)

        Raises:
            ValueError: If no node type is registered under name
            NodeConfigError: If the configuration is invalid
        """
        cls = self._nodes.get(name)
        if cls is None:
            available = ", ".join(sorted(self._nodes)) or "(none)"
            raise ValueError(f"Unknown node type: '{name}'. Available: {available}")
        node: NodeProtocol = cls(node_id, config, **kwargs)  # type: ignore[call-arg]
        return node
