"""
scheduling/
-----------
    from algorithms.scheduling import round_robin, Process
    steps = list(round_robin.round_robin(processes, time_quantum=2))
"""

from algorithms.scheduling.state import (
    GanttEntry,
    Process,
    ScheduleMetrics,
    ScheduleSummary,
    SchedulingInput,
    SchedulingState,
    calculate_metrics,
)
from algorithms.scheduling import round_robin, sjf

__all__ = [
    "GanttEntry",
    "Process",
    "ScheduleMetrics",
    "ScheduleSummary",
    "SchedulingInput",
    "SchedulingState",
    "calculate_metrics",
    "round_robin",
    "sjf",
]
