from __future__ import annotations

from typing import Any, Dict

from .base import FlowObject
from .types import ObjectType


class ConfigNode(FlowObject):
    """A positionless node holding configuration shared by other entities.

    Attributes:
        users: entities whose properties reference this config node, by id
    """

    TYPE = ObjectType.CONFIG_NODE

    def __init__(self, config: Dict[str, Any]) -> None:
        super().__init__(config)
        self.users: Dict[str, FlowObject] = {}

    def add_user(self, obj: FlowObject) -> None:
        self.users[obj.id] = obj
