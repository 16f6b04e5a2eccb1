"""Entity classes for a parsed flow set."""

from .base import FlowObject
from .config_node import ConfigNode
from .container import Container
from .flow import Flow, GlobalFlow, Subflow
from .group import Group
from .node import Node, SubflowInstance
from .types import ObjectType
from .wire import Wire

__all__ = [
    "FlowObject",
    "Container",
    "ConfigNode",
    "Flow",
    "GlobalFlow",
    "Subflow",
    "Group",
    "Node",
    "SubflowInstance",
    "ObjectType",
    "Wire",
]
