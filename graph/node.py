"""
node.py — Graph Node
====================
Identity plus optional layout coordinates.  Traversal state lives in
GraphState snapshots, never on the node, so a Node is frozen.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id    : Unique identifier within its graph.
        label : Human-readable name shown on the canvas (defaults to id).
        x, y  : Optional canvas coordinates for the renderer.
    """

    id:    str
    label: str             = ""
    x:     Optional[float] = None
    y:     Optional[float] = None

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, "label", self.id)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "label": self.label}
        if self.x is not None:
            data["x"] = self.x
        if self.y is not None:
            data["y"] = self.y
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        return cls(
            id=str(data["id"]),
            label=str(data.get("label") or data["id"]),
            x=data.get("x"),
            y=data.get("y"),
        )

    def __repr__(self) -> str:
        return f"Node({self.id!r})"
