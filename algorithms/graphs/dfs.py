"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a Step at:
  1. Push start node onto stack
  2. Pop an already-visited node  →  explicit SKIP step
  3. Pop an unvisited node  →  VISIT
  4. Push each unvisited neighbour  →  DISCOVER
  5. Stack empty  →  traversal order

Neighbours are pushed in REVERSE adjacency order so they pop in
adjacency order, giving the intuitive left-to-right visiting order.
A node may sit in the stack more than once ("mark on pop"), which is
why the skip step exists.
"""

import logging
from typing import Iterator, List

from graph import Graph
from algorithms.step import Step, StepBuilder
from algorithms.graphs.state import GraphInput, GraphState, snapshot_graph

logger = logging.getLogger(__name__)


def dfs(graph: Graph, start_node: str) -> Iterator[Step]:
    """
    Iterative DFS traversal.

    Args:
        graph      : The graph to traverse.  A private copy is taken.
        start_node : Node id to start from.
    """

    g       = snapshot_graph(graph)
    sb      = StepBuilder()
    visited: List[str] = []
    seen    = set()
    stack:  List[str] = []

    # --- init step ---
    yield sb.build(
        GraphState(graph=g),
        f"Starting DFS from node {start_node}",
        reason="DFS explores as deep as possible before backtracking",
        pseudocode_line=0,
    )

    if not g.has_node(start_node):
        yield sb.build(
            GraphState(graph=g),
            f"Start node {start_node} is not in the graph - nothing to traverse",
            reason="A traversal needs a start node that exists in the graph",
            pseudocode_line=5,
            label="Complete",
        )
        return

    stack.append(start_node)
    yield sb.build(
        GraphState(graph=g, current_node=start_node, frontier=tuple(stack)),
        f"Pushed {start_node} onto the stack",
        reason="We begin by pushing the start node onto our exploration stack",
        pseudocode_line=1,
        highlight_nodes=(start_node,),
    )

    # --- main loop ---
    while stack:
        current = stack.pop()

        # already visited (can happen because we mark-on-pop)
        if current in seen:
            yield sb.build(
                GraphState(
                    graph=g,
                    current_node=current,
                    visited_nodes=tuple(visited),
                    frontier=tuple(stack),
                    path=tuple(visited),
                ),
                f"Node {current} already visited, skipping",
                reason="We skip nodes that have already been explored",
                pseudocode_line=2,
                highlight_nodes=(current,),
            )
            continue

        seen.add(current)
        visited.append(current)
        yield sb.build(
            GraphState(
                graph=g,
                current_node=current,
                visited_nodes=tuple(visited),
                frontier=tuple(stack),
                path=tuple(visited),
            ),
            f"Visiting node {current}",
            reason="We mark this node as visited and add it to our traversal path",
            pseudocode_line=3,
            highlight_nodes=(current,),
            visited_node=current,
        )

        for nbr in reversed(g.neighbours(current)):
            if nbr in seen:
                continue
            stack.append(nbr)
            yield sb.build(
                GraphState(
                    graph=g,
                    current_node=current,
                    visited_nodes=tuple(visited),
                    frontier=tuple(stack),
                    exploring_edge=(current, nbr),
                    path=tuple(visited),
                ),
                f"Discovered node {nbr} from {current}, pushed to stack",
                reason="We push unvisited neighbors onto the stack for deep exploration",
                pseudocode_line=4,
                highlight_nodes=(current, nbr),
            )

    # --- done ---
    yield sb.build(
        GraphState(graph=g, visited_nodes=tuple(visited), path=tuple(visited)),
        f"DFS complete! Traversal order: {' → '.join(visited)}",
        reason="All reachable nodes have been visited in depth-first order",
        pseudocode_line=5,
        highlight_nodes=tuple(visited),
        label="Complete",
    )
    logger.debug("dfs from %s: visited=%d steps=%d", start_node, len(visited), sb.next_index)


# ---------------------------------------------------------------------------
# Verification pair
# ---------------------------------------------------------------------------
def reference(inp: GraphInput) -> List[str]:
    graph, start = inp
    if not isinstance(graph, Graph) or not graph.has_node(start):
        return []
    adj = graph.adjacency()
    order: List[str] = []
    stack = [start]
    while stack:
        node = stack.pop()
        if node in order:
            continue
        order.append(node)
        stack.extend(n for n in reversed(adj.get(node, [])) if n not in order)
    return order


def compare(final: GraphState, expected: List[str]) -> bool:
    return list(final.path) == list(expected)
