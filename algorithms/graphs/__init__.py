"""
graphs/
-------
    from algorithms.graphs import bfs, GraphInput
    steps = list(bfs.bfs(graph, "A"))
"""

from algorithms.graphs.state import GraphInput, GraphState
from algorithms.graphs import bfs, dfs

__all__ = [
    "GraphInput",
    "GraphState",
    "bfs",
    "dfs",
]
