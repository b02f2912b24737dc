"""
graph.py — Graph Container & Generator
=======================================
Input model for the traversal algorithms.

Responsibilities:
  1. Building nodes & edges                 (add / create / get)
  2. Adjacency queries                      (neighbours, adjacency)
  3. Graph-generation factory methods       (random, grid)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes stored in an insertion-ordered dict keyed by id; edges in a list.
  - A separate adjacency dict  `_adj[node_id] → [neighbour_id, …]`
    is maintained incrementally in edge-insertion order.  That order IS
    the "stored adjacency order" BFS and DFS walk, so it must never be
    sorted or deduplicated behind the caller's back.
  - An undirected edge populates both directions.
  - Step generators take a private copy() before running and freeze it,
    so snapshots never share a graph with the caller and cannot be edited
    through one another.  copy() of a frozen graph is mutable again.
"""

import math
import random
from types import MappingProxyType
from typing import Dict, List, Optional, Set, Tuple

from graph.node import Node
from graph.edge import Edge


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : [Edge, …] in insertion order
        directed   : bool – graph-level directedness
        _adj       : {node_id: [neighbour_id, …]}
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, Node]       = {}
        self.edges:    List[Edge]            = []
        self.directed: bool                  = directed
        self._adj:     Dict[str, List[str]]  = {}
        self._frozen:  bool                  = False

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self._check_mutable()
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, node_id: str, label: Optional[str] = None,
                    x: Optional[float] = None, y: Optional[float] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(id=node_id, label=label or node_id, x=x, y=y))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self._check_mutable()
        # endpoints missing from the node list are created on the fly
        for endpoint in edge.endpoints:
            if endpoint not in self.nodes:
                self.create_node(endpoint)
        self.edges.append(edge)
        self._adj[edge.source].append(edge.target)
        if not edge.directed:
            self._adj[edge.target].append(edge.source)
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1.0) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight, directed=self.directed))

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[str]:
        """Neighbour ids in stored adjacency order (empty for unknown ids)."""
        return list(self._adj.get(node_id, []))

    def adjacency(self) -> Dict[str, List[str]]:
        return {nid: list(nbrs) for nid, nbrs in self._adj.items()}

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def copy(self) -> "Graph":
        g = Graph(directed=self.directed)
        for node in self.nodes.values():
            g.add_node(node)
        for edge in self.edges:
            g.add_edge(edge)
        return g

    def freeze(self) -> "Graph":
        """Make this graph read-only in place and return it."""
        if not self._frozen:
            self.nodes   = MappingProxyType(self.nodes)
            self.edges   = tuple(self.edges)
            self._adj    = MappingProxyType({nid: tuple(nbrs) for nid, nbrs in self._adj.items()})
            self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise TypeError("graph is frozen; copy() it to make changes")

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=bool(data.get("directed", False)))
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            g.add_edge(Edge.from_dict(ed, directed=g.directed))
        return g

    # ==================================================================
    # GENERATORS: factory class-methods
    # ==================================================================

    # ---------- Random Graph ----------
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 10,
        edge_probability: float = 0.3,
        directed: bool = False,
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph.
        Each possible edge is included with probability `edge_probability`.
        The same seed always yields the same graph, edge order included.
        """
        rng = random.Random(seed)
        g = cls(directed=directed)

        # place nodes on a circle so the renderer has something sensible
        ids = []
        radius = min(canvas_w, canvas_h) * 0.35
        for i in range(num_nodes):
            angle = 2 * math.pi * i / max(num_nodes, 1)
            nid = str(i)
            g.create_node(
                nid,
                x=round(canvas_w / 2 + radius * math.cos(angle), 1),
                y=round(canvas_h / 2 + radius * math.sin(angle), 1),
            )
            ids.append(nid)

        for i in range(num_nodes):
            for j in (range(i + 1, num_nodes) if not directed else range(num_nodes)):
                if i == j:
                    continue
                if rng.random() < edge_probability:
                    g.create_edge(ids[i], ids[j])

        return g

    # ---------- Grid Graph ----------
    @classmethod
    def generate_grid(
        cls,
        rows: int = 3,
        cols: int = 3,
        directed: bool = False,
        spacing: float = 100,
        padding: float = 50,
    ) -> "Graph":
        """
        2-D grid graph with node ids "r,c".
        Horizontal edges are added before vertical ones, row by row.
        """
        g = cls(directed=directed)

        def nid(r, c):
            return f"{r},{c}"

        for r in range(rows):
            for c in range(cols):
                g.create_node(nid(r, c), x=padding + c * spacing, y=padding + r * spacing)

        for r in range(rows):
            for c in range(cols - 1):
                g.create_edge(nid(r, c), nid(r, c + 1))
        for c in range(cols):
            for r in range(rows - 1):
                g.create_edge(nid(r, c), nid(r + 1, c))

        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D
            0 → 1,2,3           → alternate arrow syntax
            # comment lines and blank lines are ignored
        """
        g = cls(directed=directed)
        seen_edges: Set = set()

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                # a bare token declares an isolated node
                parts = [line, ""]

            src = parts[0].strip()
            if not g.has_node(src):
                g.create_node(src)

            for token in parts[1].replace(",", " ").split():
                tgt = token
                key: Tuple = (src, tgt) if directed else tuple(sorted((src, tgt)))
                if key in seen_edges:
                    continue
                seen_edges.add(key)
                g.create_edge(src, tgt)

        return g

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"

