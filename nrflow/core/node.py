"""Placed flow nodes and the wire-graph traversal helpers."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Set

from .base import FlowObject
from .types import LINK_TYPES, SUBFLOW_INSTANCE_PREFIX, ObjectType
from .wire import Wire

if TYPE_CHECKING:
    from .flow import Subflow
    from .group import Group


class Node(FlowObject):
    """A node placed on a flow or subflow canvas.

    Attributes:
        x: horizontal position
        y: vertical position
        w: width, if the record carries one
        h: height, if the record carries one
        group_id: id of the group this node is in (from `g`)
        group: the group this node is in
        show_label: whether the node displays its label (`l`)
        input_labels: per-port input labels
        output_labels: per-port output labels
        icon: custom icon, if set
        wires: destination ids per output port, as declared by the record
        output_count: number of output ports
        inbound_wires: wires connected to this node's input
        outbound_wires: wires leaving this node's outputs
    """

    TYPE = ObjectType.NODE
    is_subflow_instance = False

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__(config)
        self.x = self._claim(config, "x")
        self.y = self._claim(config, "y")
        self.w = self._claim(config, "w")
        self.h = self._claim(config, "h")
        self.group_id: Optional[str] = self._claim(config, "g")
        self.group: Optional["Group"] = None
        self.show_label: bool = self._claim(config, "l", self._default_show_label())
        self.input_labels = self._claim(config, "inputLabels", [])
        self.output_labels = self._claim(config, "outputLabels", [])
        self.icon = self._claim(config, "icon")

        self.wires = self._claim(config, "wires", [])
        self.output_count = len(self.wires) if isinstance(self.wires, list) else 0

        self.inbound_wires: List[Wire] = []
        self.outbound_wires: List[Wire] = []

    def _default_show_label(self) -> bool:
        return self.type not in LINK_TYPES

    @property
    def is_link_node(self) -> bool:
        return self.type in LINK_TYPES

    def set_group(self, group: Optional["Group"]) -> None:
        if group is not None:
            self.group_id = group.id
            self.group = group
        else:
            self.group_id = None
            self.group = None

    def add_inbound_wire(self, wire: Wire) -> None:
        self.inbound_wires.append(wire)

    def add_outbound_wire(self, wire: Wire) -> None:
        self.outbound_wires.append(wire)

    def export(self) -> Dict[str, Any]:
        obj = super().export()
        obj["x"] = self.x
        obj["y"] = self.y
        self._emit(obj, "w", self.w)
        self._emit(obj, "h", self.h)
        self._emit(obj, "g", self.group_id)
        self._emit(obj, "l", self.show_label, self._default_show_label())

        if "wires" in self._claimed and not isinstance(self.wires, list):
            obj["wires"] = copy.deepcopy(self.wires)
        else:
            ports = self._export_ports()
            if "wires" in self._claimed or ports:
                obj["wires"] = ports

        self._emit(obj, "inputLabels", self.input_labels, [])
        self._emit(obj, "outputLabels", self.output_labels, [])
        self._emit(obj, "icon", self.icon)
        return obj

    def _export_ports(self) -> List[Any]:
        # Port lists are rebuilt from drawn wires only; link relations live in `links`.
        ports: List[Any] = [[] for _ in range(self.output_count)]
        for wire in self.outbound_wires:
            if wire.virtual:
                continue
            while len(ports) <= wire.source_port:
                ports.append([])
            ports[wire.source_port].append(wire.destination_node.id)
        # Entries that were not port lists carry no wires and are written back as read.
        for port, entry in enumerate(self.wires if isinstance(self.wires, list) else []):
            if not isinstance(entry, list):
                ports[port] = copy.deepcopy(entry)
        return ports

    # Traversal

    def previous_nodes(self, follow_virtual: bool = False) -> List["Node"]:
        """Nodes wired to this node's input."""
        return [w.source_node for w in self.inbound_wires if follow_virtual or not w.virtual]

    def next_nodes(self, follow_virtual: bool = False) -> List["Node"]:
        """Nodes wired to this node's outputs."""
        return [w.destination_node for w in self.outbound_wires if follow_virtual or not w.virtual]

    def sibling_nodes(self, follow_virtual: bool = False) -> List["Node"]:
        """Nodes wired directly to this node, previous nodes first.

        A node wired to both sides of this one appears twice.
        """
        return self.previous_nodes(follow_virtual) + self.next_nodes(follow_virtual)

    def downstream_nodes(self, follow_virtual: bool = False) -> List["Node"]:
        """All nodes reachable from this node's outputs (excluding this node)."""
        return self._reachable(lambda n: n.next_nodes(follow_virtual), include_self=False)

    def upstream_nodes(self, follow_virtual: bool = False) -> List["Node"]:
        """All nodes that can reach this node's input (excluding this node)."""
        return self._reachable(lambda n: n.previous_nodes(follow_virtual), include_self=False)

    def connected_nodes(self, follow_virtual: bool = False) -> List["Node"]:
        """Every node in this node's undirected component, this node included."""
        return self._reachable(lambda n: n.sibling_nodes(follow_virtual), include_self=True)

    def _reachable(self, neighbours: Callable[["Node"], List["Node"]], *, include_self: bool) -> List["Node"]:
        visited: Set[str] = set()
        result: List[Node] = []
        if include_self:
            stack: List[Node] = [self]
        else:
            visited.add(self.id)
            stack = neighbours(self)
        while stack:
            node = stack.pop()
            if node.id in visited:
                continue
            visited.add(node.id)
            result.append(node)
            for nxt in neighbours(node):
                if nxt.id not in visited:
                    stack.append(nxt)
        return result


class SubflowInstance(Node):
    """A placed instance of a subflow definition (type `subflow:<id>`)."""

    is_subflow_instance = True

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__(config)
        self.subflow_id: str = self.type[len(SUBFLOW_INSTANCE_PREFIX):]
        self.subflow: Optional["Subflow"] = None

    def set_subflow(self, subflow: "Subflow") -> None:
        self.subflow_id = subflow.id
        self.subflow = subflow
