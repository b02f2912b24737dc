"""
inputs.py — Request Payload → Algorithm Input
==============================================
The step generators accept Python objects (lists, Graph, Process).
Callers speaking JSON send plain data; these parsers bridge the two and
are the only place in the package that rejects input (InputError).

Accepted payloads:

    array      [5, 3, 8]              or  "5, 3, 8"
    graph      {"graph": {nodes, edges, directed} | "tree" | "A: B C\\nB: D",
                "startNode": "A"}
    processes  {"processes": [{"id": "P1", "arrivalTime": 0, "burstTime": 4}, …],
                "timeQuantum": 2}
"""

from numbers import Real
from typing import Any, List, Optional

from graph import Graph, get_preset, preset_names
from algorithms.errors import InputError
from algorithms.graphs.state import GraphInput
from algorithms.scheduling.state import Process, SchedulingInput, is_finite_number


def parse_array(payload: Any) -> List[Real]:
    if isinstance(payload, dict):
        payload = payload.get("array", payload.get("input"))
    if isinstance(payload, str):
        tokens = [t for t in payload.replace(",", " ").split() if t]
        try:
            return [_number(t) for t in tokens]
        except ValueError:
            raise InputError(f"Array must contain only numbers: {payload!r}") from None
    if not isinstance(payload, list):
        raise InputError("Array input must be a list of numbers")
    for value in payload:
        if not isinstance(value, Real) or isinstance(value, bool):
            raise InputError(f"Array must contain only numbers, got {value!r}")
    return list(payload)


def parse_graph(payload: Any) -> GraphInput:
    if not isinstance(payload, dict):
        raise InputError("Graph input must be an object with 'graph' and 'startNode'")

    raw = payload.get("graph", "tree")
    if not isinstance(raw, (dict, str)):
        raise InputError("'graph' must be an object, a preset name, or adjacency-list text")
    directed = bool(payload.get("directed", False))
    try:
        if isinstance(raw, dict):
            graph = Graph.from_dict(raw)
        elif raw in preset_names():
            graph = get_preset(raw)
        else:
            graph = Graph.from_adjacency_list(raw, directed=directed)
    except (KeyError, TypeError, ValueError) as e:
        raise InputError(f"Malformed graph: {e}") from e

    start: Optional[str] = payload.get("startNode", payload.get("start_node"))
    if start is None:
        ids = graph.node_ids()
        if not ids:
            raise InputError("Graph has no nodes")
        start = ids[0]
    return GraphInput(graph=graph, start_node=str(start))


def parse_processes(payload: Any, needs_quantum: bool = False) -> SchedulingInput:
    if isinstance(payload, list):
        payload = {"processes": payload}
    if not isinstance(payload, dict):
        raise InputError("Scheduling input must be an object with 'processes'")

    raw = payload.get("processes")
    if not isinstance(raw, list):
        raise InputError("'processes' must be a list")
    try:
        processes = tuple(Process.from_dict(p) for p in raw)
    except (KeyError, TypeError) as e:
        raise InputError(f"Malformed process entry: {e}") from e

    for p in processes:
        for name, value in (("arrivalTime", p.arrival_time), ("burstTime", p.burst_time)):
            if not is_finite_number(value):
                raise InputError(f"{p.id}: {name} must be a finite number")

    quantum = payload.get("timeQuantum", payload.get("time_quantum"))
    if needs_quantum:
        if quantum is None:
            raise InputError("Round Robin needs a 'timeQuantum'")
        if not is_finite_number(quantum) or quantum <= 0:
            raise InputError("'timeQuantum' must be a positive finite number")
    return SchedulingInput(processes=processes, time_quantum=quantum)


def _number(token: str) -> Real:
    try:
        return int(token)
    except ValueError:
        return float(token)
