"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, build_registry

REGISTRY is a read-only mapping:
    {
        "bubble-sort": AlgorithmDescriptor(id, name, category_id, …),
        …
    }

AlgorithmDescriptor is a frozen dataclass.  The engine and the HTTP
layer both consume it, so adding a new algorithm is: write the
generator + its reference/compare pair, add one entry to
build_registry().  Callers that want their own registry (tests, a
trimmed-down UI) call build_registry() and pass the result around
instead of touching module state.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterator, List, Mapping, Optional

from graph import Graph, get_preset
from algorithms.errors import UnknownAlgorithmError
from algorithms.step import Step
from algorithms import inputs
from algorithms.graphs.state import GraphInput
from algorithms.scheduling.state import SchedulingInput

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.sorting    import bubble_sort    as _bubble
from algorithms.sorting    import insertion_sort as _insertion
from algorithms.graphs     import bfs            as _bfs
from algorithms.graphs     import dfs            as _dfs
from algorithms.scheduling import round_robin    as _rr
from algorithms.scheduling import sjf            as _sjf


# ---------------------------------------------------------------------------
# AlgorithmDescriptor: metadata card + contract for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgorithmDescriptor:
    id:               str                                  # registry key, e.g. "bfs"
    name:             str                                  # human label, e.g. "Breadth-First Search"
    category_id:      str                                  # "sorting" | "graph" | "os"
    input_schema:     str                                  # "array" | "graph" | "processes"
    default_input:    Any
    steps_fn:         Callable[[Any], Iterator[Step]]      # input → step generator
    reference_fn:     Callable[[Any], Any]                 # input → expected result
    compare_fn:       Callable[[Any, Any], bool]           # (final state, expected) → match?
    parse_fn:         Callable[[Any], Any]                 # JSON payload → input
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""

    def generate_steps(self, algorithm_input: Any = None) -> List[Step]:
        """Unroll the algorithm on `algorithm_input` (default input if None)."""
        if algorithm_input is None:
            algorithm_input = self.default_input
        return list(self.steps_fn(algorithm_input))

    def reference_implementation(self, algorithm_input: Any) -> Any:
        return self.reference_fn(algorithm_input)

    def compare_result(self, final_state: Any, reference_result: Any) -> bool:
        return self.compare_fn(final_state, reference_result)

    def parse_input(self, payload: Any) -> Any:
        """Turn request data into generator input.  Raises InputError."""
        return self.parse_fn(payload)

    def summary(self) -> dict:
        return {
            "id":              self.id,
            "name":            self.name,
            "categoryId":      self.category_id,
            "inputSchema":     self.input_schema,
            "tags":            list(self.tags),
            "complexityTime":  self.complexity_time,
            "complexitySpace": self.complexity_space,
            "description":     self.description,
        }


# ---------------------------------------------------------------------------
# Input adapters: one descriptor input in, generator arguments out.
# Anything malformed degrades to "nothing to do" rather than raising.
# ---------------------------------------------------------------------------
def _traversal(fn) -> Callable[[Any], Iterator[Step]]:
    def run(inp: Any) -> Iterator[Step]:
        if isinstance(inp, tuple) and len(inp) == 2:
            return fn(inp[0], inp[1])
        return fn(Graph(), "")
    return run


def _schedule(fn, with_quantum: bool) -> Callable[[Any], Iterator[Step]]:
    def run(inp: Any) -> Iterator[Step]:
        if not (isinstance(inp, tuple) and len(inp) == 2):
            inp = SchedulingInput(processes=(), time_quantum=None)
        if with_quantum:
            return fn(inp[0], inp[1])
        return fn(inp[0])
    return run


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
def build_registry() -> Mapping[str, AlgorithmDescriptor]:
    """Construct a fresh read-only id → descriptor mapping."""
    descriptors = [
        AlgorithmDescriptor(
            id="bubble-sort", name="Bubble Sort", category_id="sorting", input_schema="array",
            default_input=tuple(_bubble.DEFAULT_INPUT),
            steps_fn=_bubble.bubble_sort, reference_fn=_bubble.reference, compare_fn=_bubble.compare,
            parse_fn=inputs.parse_array,
            tags=["comparison", "stable", "in-place"],
            complexity_time="O(n²)", complexity_space="O(1)",
            description="Repeatedly swaps adjacent out-of-order pairs. Stops early on a swap-free pass.",
        ),
        AlgorithmDescriptor(
            id="insertion-sort", name="Insertion Sort", category_id="sorting", input_schema="array",
            default_input=tuple(_insertion.DEFAULT_INPUT),
            steps_fn=_insertion.insertion_sort, reference_fn=_insertion.reference,
            compare_fn=_insertion.compare, parse_fn=inputs.parse_array,
            tags=["comparison", "stable", "in-place"],
            complexity_time="O(n²)", complexity_space="O(1)",
            description="Grows a sorted prefix by shifting larger elements right and inserting the key.",
        ),
        AlgorithmDescriptor(
            id="bfs", name="Breadth-First Search", category_id="graph", input_schema="graph",
            default_input=GraphInput(graph=get_preset("tree"), start_node="A"),
            steps_fn=_traversal(_bfs.bfs), reference_fn=_bfs.reference, compare_fn=_bfs.compare,
            parse_fn=inputs.parse_graph,
            tags=["unweighted", "traversal", "queue"],
            complexity_time="O(V + E)", complexity_space="O(V)",
            description="Explores layer-by-layer using a FIFO queue.",
        ),
        AlgorithmDescriptor(
            id="dfs", name="Depth-First Search", category_id="graph", input_schema="graph",
            default_input=GraphInput(graph=get_preset("tree"), start_node="A"),
            steps_fn=_traversal(_dfs.dfs), reference_fn=_dfs.reference, compare_fn=_dfs.compare,
            parse_fn=inputs.parse_graph,
            tags=["unweighted", "traversal", "stack"],
            complexity_time="O(V + E)", complexity_space="O(V)",
            description="Dives deep before backtracking, using an explicit stack.",
        ),
        AlgorithmDescriptor(
            id="round-robin", name="Round Robin Scheduling", category_id="os", input_schema="processes",
            default_input=_rr.DEFAULT_INPUT,
            steps_fn=_schedule(_rr.round_robin, with_quantum=True), reference_fn=_rr.reference,
            compare_fn=_rr.compare,
            parse_fn=lambda payload: inputs.parse_processes(payload, needs_quantum=True),
            tags=["preemptive", "fair"],
            complexity_time="O(total burst / quantum · n)", complexity_space="O(n)",
            description="Each ready process gets at most one time quantum before going to the back of the queue.",
        ),
        AlgorithmDescriptor(
            id="sjf", name="Shortest Job First (SJF)", category_id="os", input_schema="processes",
            default_input=_sjf.DEFAULT_INPUT,
            steps_fn=_schedule(_sjf.sjf, with_quantum=False), reference_fn=_sjf.reference,
            compare_fn=_sjf.compare, parse_fn=inputs.parse_processes,
            tags=["non-preemptive", "optimal-average-wait"],
            complexity_time="O(n²)", complexity_space="O(n)",
            description="Runs the ready process with the smallest burst time to completion.",
        ),
    ]
    return MappingProxyType({d.id: d for d in descriptors})


REGISTRY: Mapping[str, AlgorithmDescriptor] = build_registry()


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str, registry: Mapping[str, AlgorithmDescriptor] = REGISTRY) -> Optional[AlgorithmDescriptor]:
    """Return the descriptor by id, or None."""
    return registry.get(key)


def require_algorithm(key: str, registry: Mapping[str, AlgorithmDescriptor] = REGISTRY) -> AlgorithmDescriptor:
    """Return the descriptor by id, or raise UnknownAlgorithmError."""
    info = registry.get(key)
    if info is None:
        raise UnknownAlgorithmError(key)
    return info


def list_algorithms(registry: Mapping[str, AlgorithmDescriptor] = REGISTRY) -> List[AlgorithmDescriptor]:
    """Return all registered algorithms in insertion order."""
    return list(registry.values())


def algorithms_by_category(category_id: str,
                           registry: Mapping[str, AlgorithmDescriptor] = REGISTRY) -> List[AlgorithmDescriptor]:
    return [a for a in registry.values() if a.category_id == category_id]


__all__ = [
    "AlgorithmDescriptor",
    "REGISTRY",
    "build_registry",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "algorithms_by_category",
]
