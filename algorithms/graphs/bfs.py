"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS traversal.  Yields a Step at every meaningful event:
  1. Start node placed in the queue
  2. Dequeue an unvisited node  →  VISIT it (already-visited nodes are
     dropped silently)
  3. Each neighbour neither visited nor queued  →  DISCOVER + enqueue
  4. Final step  →  the full traversal order

Neighbours are examined in the graph's stored adjacency order, so the
queue (FIFO) order is the visiting order.
"""

import logging
from collections import deque
from typing import Iterator, List

from graph import Graph
from algorithms.step import Step, StepBuilder
from algorithms.graphs.state import GraphInput, GraphState, snapshot_graph

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(graph: Graph, start_node: str) -> Iterator[Step]:
    """
    Yields Step snapshots for every event during BFS execution.

    Args:
        graph      : The graph to traverse.  A private copy is taken.
        start_node : Node id to start from.

    Yields:
        Step[GraphState] – one per event (enqueue start, visit, discover, done).
    """

    g       = snapshot_graph(graph)
    sb      = StepBuilder()
    visited: List[str] = []
    seen    = set()
    queue   = deque()

    # --- initialisation step ---
    yield sb.build(
        GraphState(graph=g),
        f"Starting BFS from node {start_node}",
        reason="BFS explores nodes level by level, starting from the source node",
        pseudocode_line=0,
    )

    if not g.has_node(start_node):
        yield sb.build(
            GraphState(graph=g),
            f"Start node {start_node} is not in the graph - nothing to traverse",
            reason="A traversal needs a start node that exists in the graph",
            pseudocode_line=4,
            label="Complete",
        )
        return

    queue.append(start_node)
    yield sb.build(
        GraphState(graph=g, current_node=start_node, frontier=tuple(queue)),
        f"Added {start_node} to the queue",
        reason="We begin by adding the start node to our exploration queue",
        pseudocode_line=1,
        highlight_nodes=(start_node,),
    )

    # --- main loop ---
    while queue:
        current = queue.popleft()
        if current in seen:
            continue

        seen.add(current)
        visited.append(current)
        yield sb.build(
            GraphState(
                graph=g,
                current_node=current,
                visited_nodes=tuple(visited),
                frontier=tuple(queue),
                path=tuple(visited),
            ),
            f"Visiting node {current}",
            reason="We mark this node as visited and add it to our traversal path",
            pseudocode_line=2,
            highlight_nodes=(current,),
            visited_node=current,
        )

        for nbr in g.neighbours(current):
            if nbr in seen or nbr in queue:
                continue
            queue.append(nbr)
            yield sb.build(
                GraphState(
                    graph=g,
                    current_node=current,
                    visited_nodes=tuple(visited),
                    frontier=tuple(queue),
                    exploring_edge=(current, nbr),
                    path=tuple(visited),
                ),
                f"Discovered node {nbr} from {current}, added to queue",
                reason="We add unvisited neighbors to the queue for future exploration",
                pseudocode_line=3,
                highlight_nodes=(current, nbr),
            )

    # --- done ---
    yield sb.build(
        GraphState(graph=g, visited_nodes=tuple(visited), path=tuple(visited)),
        f"BFS complete! Traversal order: {' → '.join(visited)}",
        reason="All reachable nodes have been visited in breadth-first order",
        pseudocode_line=4,
        highlight_nodes=tuple(visited),
        label="Complete",
    )
    logger.debug("bfs from %s: visited=%d steps=%d", start_node, len(visited), sb.next_index)


# ---------------------------------------------------------------------------
# Verification pair
# ---------------------------------------------------------------------------
def reference(inp: GraphInput) -> List[str]:
    graph, start = inp
    if not isinstance(graph, Graph) or not graph.has_node(start):
        return []
    adj = graph.adjacency()
    order: List[str] = []
    queue = deque([start])
    while queue:
        node = queue.popleft()
        if node in order:
            continue
        order.append(node)
        for nbr in adj.get(node, []):
            if nbr not in order and nbr not in queue:
                queue.append(nbr)
    return order


def compare(final: GraphState, expected: List[str]) -> bool:
    return list(final.path) == list(expected)
