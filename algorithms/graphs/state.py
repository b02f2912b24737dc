"""
state.py — Traversal Snapshot
==============================
What a BFS / DFS step shows.  `frontier` is the pending-work collection
in its natural order: front-of-queue first for BFS, bottom-of-stack
first for DFS (so the next node popped is the last element).
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, NamedTuple, Optional, Tuple

from graph import Graph

logger = logging.getLogger(__name__)


class GraphInput(NamedTuple):
    graph:      Graph
    start_node: str


@dataclass(frozen=True)
class GraphState:
    kind: ClassVar[str] = "graph"

    graph:          Graph
    current_node:   Optional[str]             = None
    visited_nodes:  Tuple[str, ...]           = ()
    frontier:       Tuple[str, ...]           = ()
    exploring_edge: Optional[Tuple[str, str]] = None
    path:           Tuple[str, ...]           = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind":         self.kind,
            "graph":        self.graph.to_dict(),
            "visitedNodes": list(self.visited_nodes),
            "frontier":     list(self.frontier),
            "path":         list(self.path),
        }
        if self.current_node is not None:
            data["currentNode"] = self.current_node
        if self.exploring_edge is not None:
            data["exploringEdge"] = {"from": self.exploring_edge[0], "to": self.exploring_edge[1]}
        return data


def snapshot_graph(graph: Any) -> Graph:
    """
    Frozen private copy of the caller's graph; anything else becomes an
    empty graph.  Every GraphState of a run holds this one read-only object.
    """
    if isinstance(graph, Graph):
        return graph.copy().freeze()
    logger.warning("traversal input is not a Graph (%s); using an empty graph", type(graph).__name__)
    return Graph().freeze()
