"""Kind tags and well-known type names for flow records."""

from __future__ import annotations

from enum import Enum


class ObjectType(str, Enum):
    """Kind tag carried by every entity in a FlowSet."""

    NODE = "node"
    CONFIG_NODE = "config_node"
    GROUP = "group"
    FLOW = "flow"
    SUBFLOW = "subflow"


FLOW_TYPE = "tab"
SUBFLOW_TYPE = "subflow"
GROUP_TYPE = "group"
LINK_IN_TYPE = "link in"
LINK_OUT_TYPE = "link out"
SUBFLOW_INSTANCE_PREFIX = "subflow:"

LINK_TYPES = frozenset({LINK_IN_TYPE, LINK_OUT_TYPE})
