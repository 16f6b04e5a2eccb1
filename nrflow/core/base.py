"""Base class shared by every entity parsed from a flow record."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Dict, Optional, Set

from .types import ObjectType

if TYPE_CHECKING:
    from .container import Container


class FlowObject:
    """Common state for every entity parsed from a flow record.

    The constructor takes ownership of `config`: fields claimed by a class are
    popped from it, whatever is left becomes the free-form property bag.

    Attributes:
        id: record id, unique across the flow set
        type: record type string (e.g. `tab`, `inject`, `mqtt-broker`)
        z: id of the flow or subflow this record belongs to
        config: every record field not claimed by a more specific class
        parent: owning flow, subflow or globals container
    """

    TYPE: ObjectType

    def __init__(self, config: Dict[str, Any]) -> None:
        self._claimed: Set[str] = set()
        self.id: str = self._claim(config, "id")
        self.type: str = self._claim(config, "type")
        self.z: Optional[str] = self._claim(config, "z")
        self.parent: Optional["Container"] = None
        self.config: Dict[str, Any] = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, type={self.type!r})"

    def _claim(self, config: Dict[str, Any], key: str, default: Any = None) -> Any:
        """Pop `key` from the record, remembering whether it was present."""
        if key in config:
            self._claimed.add(key)
            return config.pop(key)
        return default

    def _emit(self, obj: Dict[str, Any], key: str, value: Any, default: Any = None) -> None:
        """Write a claimed field back unless it was absent and still holds its default."""
        if key in self._claimed or value != default:
            obj[key] = copy.deepcopy(value)

    def set_parent(self, parent: "Container") -> None:
        self.parent = parent

    def export(self) -> Dict[str, Any]:
        """Return this entity as a flat flow record."""
        obj: Dict[str, Any] = {"id": self.id, "type": self.type}
        self._emit(obj, "z", self.z)
        obj.update(copy.deepcopy(self.config))
        return obj
