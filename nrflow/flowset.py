"""FlowSet - builds the object graph of a flow record array and exports it back.

Construction makes a fixed number of passes over already-classified
collections (never over the raw array again):

1. classify every record and construct its entity
2. create wires from each node's `wires` port lists
3. create virtual wires from `link in` / `link out` `links` lists
4. resolve parents, group membership, subflow instances and config node users
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Set

from .core.base import FlowObject
from .core.config_node import ConfigNode
from .core.flow import Flow, GlobalFlow, Subflow, WalkCallback
from .core.group import Group
from .core.node import Node, SubflowInstance
from .core.types import (
    FLOW_TYPE,
    GROUP_TYPE,
    LINK_IN_TYPE,
    SUBFLOW_INSTANCE_PREFIX,
    SUBFLOW_TYPE,
    ObjectType,
)
from .core.wire import Wire
from .errors import DanglingParentError, DuplicateIdError, MissingSubflowError
from .records import check_record
from .settings import ParseOptions

logger = logging.getLogger(__name__)


def _iter_strings(value: Any) -> Iterator[str]:
    """Yield every string value nested anywhere in a JSON-like structure."""
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for v in value.values():
            yield from _iter_strings(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            yield from _iter_strings(v)


class FlowSet:
    """The parsed form of a complete flow configuration.

    Attributes:
        flows: flow tabs by id
        nodes: every placed node (subflow instances included) by id
        config_nodes: every config node by id
        subflows: subflow definitions by id
        groups: every group by id
        wires: every wire, virtual wires included
        globals: container for entities that belong to no flow
    """

    def __init__(self, flow_config: Sequence[Dict[str, Any]], options: Optional[ParseOptions] = None) -> None:
        if not isinstance(flow_config, (list, tuple)):
            raise TypeError("Flow configuration must be a list of records")
        self.options = options or ParseOptions()

        for index, record in enumerate(flow_config):
            check_record(record, index)
        # Entities take ownership of (and pop fields from) their records.
        records: List[Dict[str, Any]] = copy.deepcopy(list(flow_config))

        self.flows: Dict[str, Flow] = {}
        self.nodes: Dict[str, Node] = {}
        self.config_nodes: Dict[str, ConfigNode] = {}
        self.subflows: Dict[str, Subflow] = {}
        self.groups: Dict[str, Group] = {}
        self.wires: List[Wire] = []
        self.globals = GlobalFlow()

        link_nodes: List[Node] = []

        self._classify(records, link_nodes)
        self._create_wires()
        self._create_link_wires(link_nodes)

        self._resolve(self.nodes.values())
        self._resolve(self.config_nodes.values())
        self._resolve(self.groups.values())
        self._resolve(self.subflows.values())

        logger.debug(
            f"Parsed flow set: {len(self.flows)} flows, {len(self.subflows)} subflows, "
            f"{len(self.nodes)} nodes, {len(self.config_nodes)} config nodes, "
            f"{len(self.groups)} groups, {len(self.wires)} wires"
        )

    # Pass 1

    def _classify(self, records: List[Dict[str, Any]], link_nodes: List[Node]) -> None:
        seen: Set[str] = set()
        for config in records:
            rid = config["id"]
            if rid in seen:
                if not self.options.allow_duplicate_ids:
                    raise DuplicateIdError(f"Duplicate id {rid} in flow configuration", object_id=rid)
                logger.warning(f"Duplicate id {rid}; the last record wins")
                self._forget(rid)
            seen.add(rid)

            rtype = config["type"]
            if rtype == FLOW_TYPE:
                flow = Flow(config)
                self.flows[flow.id] = flow
            elif rtype == SUBFLOW_TYPE:
                subflow = Subflow(config)
                self.subflows[subflow.id] = subflow
            elif rtype == GROUP_TYPE:
                group = Group(config)
                self.groups[group.id] = group
            elif "x" in config and "y" in config:
                if rtype.startswith(SUBFLOW_INSTANCE_PREFIX):
                    node: Node = SubflowInstance(config)
                else:
                    node = Node(config)
                self.nodes[node.id] = node
                if node.is_link_node:
                    link_nodes.append(node)
            else:
                config_node = ConfigNode(config)
                self.config_nodes[config_node.id] = config_node

        if self.options.allow_duplicate_ids:
            # A replaced link node must not contribute virtual wires.
            link_nodes[:] = [n for n in link_nodes if self.nodes.get(n.id) is n]

    def _forget(self, object_id: str) -> None:
        for collection in (self.flows, self.subflows, self.groups, self.nodes, self.config_nodes):
            collection.pop(object_id, None)

    # Pass 2

    def _create_wires(self) -> None:
        for node in self.nodes.values():
            if not isinstance(node.wires, list):
                continue
            for port, port_wires in enumerate(node.wires):
                if not isinstance(port_wires, list):
                    logger.debug(f"Ignoring malformed port {port} on node {node.id}")
                    continue
                for destination_id in port_wires:
                    destination = self.nodes.get(destination_id) if isinstance(destination_id, str) else None
                    if destination is None:
                        logger.debug(f"Dropping wire {node.id}:{port} -> unknown node {destination_id}")
                        continue
                    self._connect(Wire(node, port, destination, 0))

    # Pass 3

    def _create_link_wires(self, link_nodes: Iterable[Node]) -> None:
        created: Set[str] = set()
        for link_node in link_nodes:
            links = link_node.config.get("links") or []
            if not isinstance(links, list):
                continue
            is_link_in = link_node.type == LINK_IN_TYPE
            for remote_id in links:
                link_key = f"{remote_id}:{link_node.id}" if is_link_in else f"{link_node.id}:{remote_id}"
                if link_key in created:
                    continue
                created.add(link_key)
                remote = self.nodes.get(remote_id) if isinstance(remote_id, str) else None
                if remote is None:
                    logger.debug(f"Skipping link {link_key}: unknown node {remote_id}")
                    continue
                source, destination = (remote, link_node) if is_link_in else (link_node, remote)
                self._connect(Wire(source, 0, destination, 0, virtual=True))

    def _connect(self, wire: Wire) -> None:
        wire.source_node.add_outbound_wire(wire)
        wire.destination_node.add_inbound_wire(wire)
        self.wires.append(wire)

    # Pass 4

    def _parent_for(self, obj: FlowObject) -> Flow:
        if not obj.z:
            return self.globals
        parent = self.flows.get(obj.z) or self.subflows.get(obj.z)
        if parent is None:
            raise DanglingParentError(f"Cannot find parent {obj.z} for object {obj.id}", object_id=obj.id)
        return parent

    def _resolve(self, collection: Iterable[FlowObject]) -> None:
        for obj in list(collection):
            parent = self._parent_for(obj)
            kind = obj.TYPE
            if kind == ObjectType.NODE:
                parent.add_node(obj)
                self._add_to_group(obj)
                if obj.is_subflow_instance:  # type: ignore[attr-defined]
                    self._bind_instance(obj)  # type: ignore[arg-type]
            elif kind == ObjectType.CONFIG_NODE:
                parent.add_config_node(obj)  # type: ignore[arg-type]
            elif kind == ObjectType.GROUP:
                parent.add_group(obj)  # type: ignore[arg-type]
                self._add_to_group(obj)
            elif kind == ObjectType.SUBFLOW:
                parent.add_subflow(obj)  # type: ignore[arg-type]
            else:
                raise ValueError(f"Unexpected object kind {kind} for {obj.id}")
            self._find_config_node_references(obj)

    def _add_to_group(self, obj: FlowObject) -> None:
        group_id = getattr(obj, "group_id", None)
        if not group_id:
            return
        group = self.groups.get(group_id)
        if group is None:
            logger.debug(f"Object {obj.id} references unknown group {group_id}")
            return
        group.add_node(obj)

    def _bind_instance(self, node: SubflowInstance) -> None:
        template = self.subflows.get(node.subflow_id)
        if template is None:
            raise MissingSubflowError(
                f"Cannot find subflow definition {node.subflow_id} used by subflow instance {node.id}",
                object_id=node.id,
            )
        template.add_instance(node)

    def _find_config_node_references(self, obj: FlowObject) -> None:
        for value in _iter_strings(obj.config):
            if value == obj.id:
                continue
            config_node = self.config_nodes.get(value)
            if config_node is not None:
                config_node.add_user(obj)

    # Queries

    def get(self, object_id: str) -> Optional[FlowObject]:
        """Look up any entity by id."""
        for collection in (self.nodes, self.config_nodes, self.groups, self.flows, self.subflows):
            if object_id in collection:
                return collection[object_id]
        return None

    def export(self) -> List[Dict[str, Any]]:
        """Export the flow set as a record array that re-parses to the same graph."""
        result = self.globals.export_contents()
        for flow in self.flows.values():
            result.append(flow.export())
            result.extend(flow.export_contents())
        return result

    def walk(self, callback: WalkCallback) -> None:
        """Call `callback` once for every entity.

        Order: globals' config nodes, groups and nodes, then each subflow
        definition followed by its contents, then each flow followed by its
        config nodes, groups and nodes.
        """
        self.globals.walk(callback)
        for flow in self.flows.values():
            flow.walk(callback)


def parse_flow(flow_config: Sequence[Dict[str, Any]], options: Optional[ParseOptions] = None) -> FlowSet:
    """Parse a flow record array into a FlowSet. The input is never modified."""
    return FlowSet(flow_config, options)
