from __future__ import annotations

from typing import Any, Dict

from .base import FlowObject


class Container(FlowObject):
    """An entity that holds nodes, keyed by id in insertion order.

    Attributes:
        nodes: member nodes by id
    """

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__(config)
        self.nodes: Dict[str, FlowObject] = {}

    def add_node(self, node: FlowObject) -> None:
        self.nodes[node.id] = node
        node.set_parent(self)
