"""Compact, JSON-friendly overview of a parsed FlowSet."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .flowset import FlowSet


class FlowOverview(BaseModel):
    id: str
    label: Optional[str] = None
    nodes: int = 0
    config_nodes: int = 0
    groups: int = 0


class SubflowOverview(FlowOverview):
    instances: int = 0


class FlowSetSummary(BaseModel):
    """Counts and per-flow breakdown of a FlowSet."""

    flows: List[FlowOverview] = Field(default_factory=list)
    subflows: List[SubflowOverview] = Field(default_factory=list)
    node_count: int = 0
    config_node_count: int = 0
    group_count: int = 0
    wire_count: int = 0
    virtual_wire_count: int = 0
    global_config_nodes: List[str] = Field(default_factory=list)
    # Config nodes nothing references.
    unused_config_nodes: List[str] = Field(default_factory=list)


def summarize_flowset(flow_set: FlowSet) -> FlowSetSummary:
    virtual = sum(1 for w in flow_set.wires if w.virtual)
    return FlowSetSummary(
        flows=[
            FlowOverview(
                id=f.id,
                label=f.label,
                nodes=len(f.nodes),
                config_nodes=len(f.config_nodes),
                groups=len(f.groups),
            )
            for f in flow_set.flows.values()
        ],
        subflows=[
            SubflowOverview(
                id=s.id,
                label=s.label,
                nodes=len(s.nodes),
                config_nodes=len(s.config_nodes),
                groups=len(s.groups),
                instances=len(s.instances),
            )
            for s in flow_set.subflows.values()
        ],
        node_count=len(flow_set.nodes),
        config_node_count=len(flow_set.config_nodes),
        group_count=len(flow_set.groups),
        wire_count=len(flow_set.wires) - virtual,
        virtual_wire_count=virtual,
        global_config_nodes=list(flow_set.globals.config_nodes.keys()),
        unused_config_nodes=[cid for cid, c in flow_set.config_nodes.items() if not c.users],
    )
