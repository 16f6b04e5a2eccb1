from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional

from .base import FlowObject
from .container import Container
from .types import ObjectType

logger = logging.getLogger(__name__)


class Group(Container):
    """A visual group of nodes and nested groups.

    Membership is independent of flow containment: adding a node to a group
    does not change its parent.

    Attributes:
        w: width
        h: height
        style: style properties
        info: documentation for the group
        group_id: id of the enclosing group, if any (from `g`)
        group: the enclosing group
        declared_nodes: member ids as listed by the record
    """

    TYPE = ObjectType.GROUP

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__(config)
        self.w = self._claim(config, "w")
        self.h = self._claim(config, "h")
        self.style = self._claim(config, "style")
        self.info = self._claim(config, "info")
        self.group_id: Optional[str] = self._claim(config, "g")
        self.group: Optional["Group"] = None
        self._declared = self._claim(config, "nodes", [])
        self.declared_nodes: List[str] = list(self._declared) if isinstance(self._declared, list) else []

    def set_group(self, group: Optional["Group"]) -> None:
        self.group_id = group.id if group is not None else None
        self.group = group

    def add_node(self, node: FlowObject) -> None:
        # Groups never become a member's parent.
        self.nodes[node.id] = node
        node.set_group(self)  # type: ignore[attr-defined]

    def member_ids(self) -> List[str]:
        """Member ids, in the order the record declared them, then any others."""
        ordered = [nid for nid in self.declared_nodes if nid in self.nodes]
        missing = [nid for nid in self.declared_nodes if nid not in self.nodes]
        if missing:
            logger.debug(f"Group {self.id} lists unknown members: {missing}")
        seen = set(ordered)
        ordered.extend(nid for nid in self.nodes if nid not in seen)
        return ordered

    def export(self) -> Dict[str, Any]:
        obj = super().export()
        self._emit(obj, "g", self.group_id)
        self._emit(obj, "w", self.w)
        self._emit(obj, "h", self.h)
        self._emit(obj, "style", self.style)
        self._emit(obj, "info", self.info)
        if "nodes" in self._claimed and not isinstance(self._declared, list):
            obj["nodes"] = copy.deepcopy(self._declared)
        else:
            self._emit(obj, "nodes", self.member_ids(), [])
        return obj
