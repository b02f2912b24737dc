"""
edge.py — Graph Edge
====================
Connects two nodes.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1.  BFS / DFS never read it, but the field keeps
    the input format compatible with weighted presets.
  - The dict form uses "from" / "to" keys, which is what callers send.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Numeric cost (default 1).
        directed : If False, traversal works in both directions.
    """

    source:   str
    target:   str
    weight:   float = 1.0
    directed: bool  = False

    @property
    def endpoints(self) -> Tuple[str, str]:
        return (self.source, self.target)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "from":     self.source,
            "to":       self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], directed: bool = False) -> "Edge":
        return cls(
            source=str(data["from"] if "from" in data else data["source"]),
            target=str(data["to"] if "to" in data else data["target"]),
            weight=float(data.get("weight", 1.0)),
            directed=bool(data.get("directed", directed)),
        )

    def __repr__(self) -> str:
        arrow = "→" if self.directed else "—"
        return f"Edge({self.source}{arrow}{self.target})"
