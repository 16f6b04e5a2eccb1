"""Flows, subflow definitions and the implicit globals container."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from .base import FlowObject
from .config_node import ConfigNode
from .container import Container
from .group import Group
from .node import SubflowInstance
from .types import ObjectType

WalkCallback = Callable[[FlowObject], None]


class Flow(Container):
    """A flow tab and everything scoped to it.

    Attributes:
        config_nodes: config nodes scoped to this flow, by id
        groups: groups on this flow, by id
        subflows: subflow definitions owned by this container, by id
    """

    TYPE = ObjectType.FLOW

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__(config)
        self.config_nodes: Dict[str, ConfigNode] = {}
        self.groups: Dict[str, Group] = {}
        self.subflows: Dict[str, "Subflow"] = {}

    @property
    def label(self) -> Optional[str]:
        return self.config.get("label") or self.config.get("name")

    def add_config_node(self, node: ConfigNode) -> None:
        self.config_nodes[node.id] = node
        node.set_parent(self)

    def add_group(self, group: Group) -> None:
        self.groups[group.id] = group
        group.set_parent(self)

    def add_subflow(self, subflow: "Subflow") -> None:
        self.subflows[subflow.id] = subflow
        subflow.set_parent(self)

    def walk(self, callback: WalkCallback) -> None:
        """Call `callback` for this flow, then its config nodes, groups, nodes and subflows."""
        callback(self)
        self._walk_contents(callback)

    def _walk_contents(self, callback: WalkCallback) -> None:
        for config_node in self.config_nodes.values():
            callback(config_node)
        for group in self.groups.values():
            callback(group)
        for node in self.nodes.values():
            callback(node)
        for subflow in self.subflows.values():
            subflow.walk(callback)

    def export_contents(self) -> List[Dict[str, Any]]:
        """Export the records scoped to this flow (not the flow record itself)."""
        result: List[Dict[str, Any]] = []
        result.extend(n.export() for n in self.config_nodes.values())
        result.extend(g.export() for g in self.groups.values())
        result.extend(n.export() for n in self.nodes.values())
        for subflow in self.subflows.values():
            result.append(subflow.export())
            result.extend(subflow.export_contents())
        return result


class GlobalFlow(Flow):
    """Holds config nodes, groups and subflows that belong to no flow."""

    def __init__(self) -> None:
        super().__init__({})

    def walk(self, callback: WalkCallback) -> None:
        # No record of its own.
        self._walk_contents(callback)


class Subflow(Flow):
    """A subflow definition: a reusable template placed as `subflow:<id>` nodes.

    Attributes:
        instances: placed instances of this subflow, by id
        category: palette category
        in_ports: subflow input port definitions (`in`)
        out_ports: subflow output port definitions (`out`)
        env: environment variable declarations
        meta: module metadata
        color: display color
        input_labels: input port labels
        output_labels: output port labels
        icon: palette icon
    """

    TYPE = ObjectType.SUBFLOW

    # record field -> attribute
    OWN_FIELDS = {
        "category": "category",
        "in": "in_ports",
        "out": "out_ports",
        "env": "env",
        "meta": "meta",
        "color": "color",
        "inputLabels": "input_labels",
        "outputLabels": "output_labels",
        "icon": "icon",
    }

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__(config)
        self.instances: Dict[str, SubflowInstance] = {}
        for key, attr in self.OWN_FIELDS.items():
            setattr(self, attr, self._claim(config, key))

    def add_instance(self, node: SubflowInstance) -> None:
        node.set_subflow(self)
        self.instances[node.id] = node

    def export(self) -> Dict[str, Any]:
        obj = super().export()
        for key, attr in self.OWN_FIELDS.items():
            self._emit(obj, key, getattr(self, attr))
        return obj
