"""nrflow - parse, traverse and re-export flow configuration record arrays."""

from .core import (
    ConfigNode,
    Flow,
    FlowObject,
    GlobalFlow,
    Group,
    Node,
    ObjectType,
    Subflow,
    SubflowInstance,
    Wire,
)
from .errors import (
    DanglingParentError,
    DuplicateIdError,
    FlowFileError,
    FlowParseError,
    InvalidRecordError,
    MissingSubflowError,
)
from .flowset import FlowSet, parse_flow
from .records import load_flow_file, save_flow_file
from .settings import ParseOptions

# Kind tags, e.g. `nrflow.types.NODE`.
types = ObjectType

__version__ = "0.1.0"

__all__ = [
    "parse_flow",
    "FlowSet",
    "ParseOptions",
    "types",
    "ObjectType",
    "FlowObject",
    "Flow",
    "GlobalFlow",
    "Subflow",
    "Group",
    "Node",
    "SubflowInstance",
    "ConfigNode",
    "Wire",
    "load_flow_file",
    "save_flow_file",
    "FlowParseError",
    "InvalidRecordError",
    "DuplicateIdError",
    "DanglingParentError",
    "MissingSubflowError",
    "FlowFileError",
]
