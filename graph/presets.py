"""
presets.py — Ready-made Example Graphs
=======================================
Small undirected graphs the UI offers as one-click inputs.  Each preset
is stored as plain data and materialised on demand, so callers always
get a fresh Graph they are free to modify.
"""

from typing import Dict, List

from graph.graph import Graph


def _edges(*pairs: str) -> List[dict]:
    return [{"from": p[0], "to": p[1]} for p in pairs]


_PRESET_DATA: Dict[str, dict] = {
    "simple-path": {
        "directed": False,
        "nodes": [
            {"id": "A", "x": 50,  "y": 150},
            {"id": "B", "x": 150, "y": 100},
            {"id": "C", "x": 150, "y": 200},
            {"id": "D", "x": 250, "y": 150},
        ],
        "edges": _edges("AB", "AC", "BD", "CD"),
    },
    "cycle": {
        "directed": False,
        "nodes": [
            {"id": "A", "x": 150, "y": 50},
            {"id": "B", "x": 250, "y": 150},
            {"id": "C", "x": 150, "y": 250},
            {"id": "D", "x": 50,  "y": 150},
        ],
        "edges": _edges("AB", "BC", "CD", "DA"),
    },
    "tree": {
        "directed": False,
        "nodes": [
            {"id": "A", "x": 150, "y": 50},
            {"id": "B", "x": 100, "y": 150},
            {"id": "C", "x": 200, "y": 150},
            {"id": "D", "x": 50,  "y": 250},
            {"id": "E", "x": 150, "y": 250},
            {"id": "F", "x": 250, "y": 250},
        ],
        "edges": _edges("AB", "AC", "BD", "BE", "CF"),
    },
}


def preset_names() -> List[str]:
    return list(_PRESET_DATA) + ["grid"]


def get_preset(name: str) -> Graph:
    """Return a fresh Graph for the named preset.  Raises KeyError if unknown."""
    if name == "grid":
        return Graph.generate_grid(rows=3, cols=3)
    return Graph.from_dict(_PRESET_DATA[name])
