"""Directed connection between two node ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import Node


@dataclass(frozen=True, eq=False)
class Wire:
    """A wire from an output port of one node to the input of another.

    Virtual wires are derived from `link out` -> `link in` relations and are
    never written back into a node's `wires` field.
    """

    source_node: "Node"
    source_port: int
    destination_node: "Node"
    destination_port: int = 0
    virtual: bool = False
