"""
graph/
-----
Input model for the traversal algorithms.  Public API:

    from graph import Graph, Node, Edge
    from graph import get_preset, preset_names
"""

from graph.node    import Node
from graph.edge    import Edge
from graph.graph   import Graph
from graph.presets import get_preset, preset_names

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "get_preset",
    "preset_names",
]
