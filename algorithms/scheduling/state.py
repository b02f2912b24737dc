"""
state.py — Scheduling Snapshot & Metrics
=========================================
Process model, Gantt entries, the per-step SchedulingState, and the
waiting / turnaround arithmetic shared by Round-Robin and SJF.

Metrics are derived from the Gantt chart alone:
    completion  = end of the process's last slice
    turnaround  = completion - arrival
    waiting     = turnaround - burst
"""

import logging
import math
from dataclasses import dataclass, field, replace
from numbers import Real
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Process:
    """
    Attributes:
        id             : Process name, e.g. "P1".
        arrival_time   : When the process enters the system (>= 0).
        burst_time     : CPU time it needs (> 0).
        priority       : Carried through for display; unused by RR / SJF.
        remaining_time : CPU time still owed at the moment of the snapshot.
    """

    id:             str
    arrival_time:   Real
    burst_time:     Real
    priority:       Optional[int]  = None
    remaining_time: Optional[Real] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id":          self.id,
            "arrivalTime": self.arrival_time,
            "burstTime":   self.burst_time,
        }
        if self.priority is not None:
            data["priority"] = self.priority
        if self.remaining_time is not None:
            data["remainingTime"] = self.remaining_time
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Process":
        """Accepts camelCase (arrivalTime) or snake_case (arrival_time) keys."""
        return cls(
            id=str(data["id"]),
            arrival_time=data["arrivalTime"] if "arrivalTime" in data else data["arrival_time"],
            burst_time=data["burstTime"] if "burstTime" in data else data["burst_time"],
            priority=data.get("priority"),
        )


class GanttEntry(NamedTuple):
    process_id: str
    start:      Real
    end:        Real

    def to_dict(self) -> Dict[str, Any]:
        return {"processId": self.process_id, "startTime": self.start, "endTime": self.end}


class SchedulingInput(NamedTuple):
    processes:    Sequence[Process]
    time_quantum: Optional[Real] = None


class ScheduleSummary(NamedTuple):
    """What a scheduling reference implementation returns."""
    gantt_chart: List[GanttEntry]
    completed:   List[str]


def _frozen(mapping: Optional[Dict[str, Real]] = None) -> Mapping[str, Real]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class SchedulingState:
    kind: ClassVar[str] = "scheduling"

    current_time:            Real
    ready_queue:             Tuple[str, ...]         = ()
    executing_process:       Optional[str]           = None
    completed_processes:     Tuple[str, ...]         = ()
    gantt_chart:             Tuple[GanttEntry, ...]  = ()
    processes:               Tuple[Process, ...]     = ()
    waiting_times:           Mapping[str, Real]      = field(default_factory=_frozen)
    turnaround_times:        Mapping[str, Real]      = field(default_factory=_frozen)
    completion_times:        Mapping[str, Real]      = field(default_factory=_frozen)
    average_waiting_time:    Optional[float]         = None
    average_turnaround_time: Optional[float]         = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind":               self.kind,
            "currentTime":        self.current_time,
            "readyQueue":         list(self.ready_queue),
            "executingProcess":   self.executing_process,
            "completedProcesses": list(self.completed_processes),
            "ganttChart":         [e.to_dict() for e in self.gantt_chart],
            "processes":          [p.to_dict() for p in self.processes],
            "waitingTimes":       dict(self.waiting_times),
            "turnaroundTimes":    dict(self.turnaround_times),
            "completionTimes":    dict(self.completion_times),
        }
        if self.average_waiting_time is not None:
            data["averageWaitingTime"] = self.average_waiting_time
            data["averageTurnaroundTime"] = self.average_turnaround_time
        return data


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ScheduleMetrics:
    average_waiting_time:    float
    average_turnaround_time: float
    waiting_times:           Mapping[str, Real]
    turnaround_times:        Mapping[str, Real]
    completion_times:        Mapping[str, Real]


def calculate_metrics(processes: Sequence[Process], gantt_chart: Iterable[GanttEntry]) -> ScheduleMetrics:
    gantt = list(gantt_chart)
    waiting: Dict[str, Real] = {}
    turnaround: Dict[str, Real] = {}
    completion: Dict[str, Real] = {}

    for p in processes:
        ends = [e.end for e in gantt if e.process_id == p.id]
        completion[p.id] = max(ends) if ends else 0
        turnaround[p.id] = completion[p.id] - p.arrival_time
        waiting[p.id] = turnaround[p.id] - p.burst_time

    count = len(processes)
    return ScheduleMetrics(
        average_waiting_time=sum(waiting.values()) / count if count else 0.0,
        average_turnaround_time=sum(turnaround.values()) / count if count else 0.0,
        waiting_times=_frozen(waiting),
        turnaround_times=_frozen(turnaround),
        completion_times=_frozen(completion),
    )


# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------
def coerce_processes(raw: Any) -> Tuple[Process, ...]:
    """
    Keep only well-formed processes: finite arrival >= 0, finite
    burst > 0, unique id.  Everything else is dropped with a warning.
    """
    if not isinstance(raw, (list, tuple)):
        if raw is not None:
            logger.warning("process list is not a list (%s); treating as empty", type(raw).__name__)
        return ()

    kept: List[Process] = []
    ids = set()
    for item in raw:
        if not isinstance(item, Process):
            logger.warning("dropping process %r: not a Process", item)
            continue
        if not is_finite_number(item.arrival_time) or item.arrival_time < 0:
            logger.warning("dropping process %s: invalid arrival time %r", item.id, item.arrival_time)
            continue
        if not is_finite_number(item.burst_time) or item.burst_time <= 0:
            logger.warning("dropping process %s: invalid burst time %r", item.id, item.burst_time)
            continue
        if item.id in ids:
            logger.warning("dropping process %s: duplicate id", item.id)
            continue
        ids.add(item.id)
        kept.append(replace(item, remaining_time=None))
    return tuple(kept)


def valid_quantum(quantum: Any) -> bool:
    return is_finite_number(quantum) and quantum > 0


def snapshot_processes(processes: Sequence[Process], remaining: Mapping[str, Real]) -> Tuple[Process, ...]:
    return tuple(replace(p, remaining_time=remaining[p.id]) for p in processes)


def is_finite_number(value: Any) -> bool:
    """A real number that is not a bool, NaN or infinite."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)
