"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • The category-specific state (array, graph traversal, schedule)
    • A plain-English description of what happened
    • An optional "why" (Learning Mode reads this)
    • Which line of pseudocode is executing right now
    • Running counters and highlight hints (metadata)

Design decisions:
  - Step, StepMetadata and every State class are frozen dataclasses
    whose collections are tuples.  A Step is a SNAPSHOT: the algorithm
    generator is the only writer, the controller / renderer are pure
    readers, and no later step can reach back into an earlier one.
  - Indices are handed out by StepBuilder, never by the algorithms,
    so a run is always numbered 0..N-1 without gaps.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

State = TypeVar("State")


@dataclass(frozen=True)
class StepMetadata:
    """
    Attributes:
        comparisons       : Running comparison count (sorting).
        swaps             : Running swap / shift count (sorting).
        highlight_indices : Array indices the renderer should emphasise.
        highlight_nodes   : Graph node ids the renderer should emphasise.
        visited_node      : Node visited on this step, if any.
        label             : Short phase label, e.g. "Pass 2", "Preemption".
    """

    comparisons:       Optional[int]        = None
    swaps:             Optional[int]        = None
    highlight_indices: Tuple[int, ...]      = ()
    highlight_nodes:   Tuple[str, ...]      = ()
    visited_node:      Optional[str]        = None
    label:             Optional[str]        = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.comparisons is not None:
            data["comparisons"] = self.comparisons
        if self.swaps is not None:
            data["swaps"] = self.swaps
        if self.highlight_indices:
            data["highlightIndices"] = list(self.highlight_indices)
        if self.highlight_nodes:
            data["highlightNodes"] = list(self.highlight_nodes)
        if self.visited_node is not None:
            data["visitedNodeId"] = self.visited_node
        if self.label is not None:
            data["label"] = self.label
        return data


@dataclass(frozen=True)
class Step(Generic[State]):
    """
    Attributes:
        index           : 0-based position of this step in the run.
        state           : Category-specific snapshot (SortingState, GraphState, SchedulingState).
        description     : What happened on this step.
        reason          : Why it happened (Learning Mode).
        pseudocode_line : Line to highlight in the caller-owned pseudocode text.
        metadata        : Counters and highlight hints.
    """

    index:           int
    state:           State
    description:     str
    reason:          Optional[str]  = None
    pseudocode_line: Optional[int]  = None
    metadata:        StepMetadata   = field(default_factory=StepMetadata)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "index":       self.index,
            "state":       self.state.to_dict(),
            "description": self.description,
        }
        if self.reason is not None:
            data["reason"] = self.reason
        if self.pseudocode_line is not None:
            data["pseudocodeLine"] = self.pseudocode_line
        data["metadata"] = self.metadata.to_dict()
        return data


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Hands out contiguous step indices for one run.

    Usage inside an algorithm generator:
        sb = StepBuilder()
        yield sb.build(
            SortingState(array=tuple(arr)),
            "Starting Bubble Sort",
            pseudocode_line=0,
            comparisons=0,
        )
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self.next_index: int = 0

    def build(
        self,
        state: Any,
        description: str,
        reason: Optional[str] = None,
        pseudocode_line: Optional[int] = None,
        **metadata: Any,
    ) -> Step:
        for key in ("highlight_indices", "highlight_nodes"):
            if key in metadata:
                metadata[key] = tuple(metadata[key])
        step = Step(
            index=self.next_index,
            state=state,
            description=description,
            reason=reason,
            pseudocode_line=pseudocode_line,
            metadata=StepMetadata(**metadata),
        )
        self.next_index += 1
        return step


def final_state(steps: List[Step]) -> Any:
    """State of the terminal step (the completed computation)."""
    return steps[-1].state
