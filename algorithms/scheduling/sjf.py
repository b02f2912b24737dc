"""
sjf.py — Shortest-Job-First CPU Scheduling
===========================================
Non-preemptive: once picked, a process runs to completion in one slice.
Among ready processes the smallest burst time wins; on a tie the one
that has been in the ready queue longest (first occurrence) wins.
"""

import logging
from typing import Iterator, List, Optional, Sequence

from algorithms.step import Step, StepBuilder
from algorithms.scheduling.state import (
    GanttEntry,
    Process,
    ScheduleSummary,
    SchedulingInput,
    SchedulingState,
    calculate_metrics,
    coerce_processes,
    snapshot_processes,
)

logger = logging.getLogger(__name__)

DEFAULT_INPUT = SchedulingInput(
    processes=(
        Process("P1", arrival_time=0, burst_time=6),
        Process("P2", arrival_time=1, burst_time=2),
        Process("P3", arrival_time=2, burst_time=8),
        Process("P4", arrival_time=3, burst_time=3),
    ),
)


def sjf(processes: Sequence[Process]) -> Iterator[Step]:
    """Yields Step snapshots for a non-preemptive SJF schedule."""

    procs      = coerce_processes(processes)
    by_id      = {p.id: p for p in procs}
    sb         = StepBuilder()
    remaining  = {p.id: p.burst_time for p in procs}
    ready: List[str]        = []
    gantt: List[GanttEntry] = []
    completed: List[str]    = []
    now        = 0

    def state(executing: Optional[str] = None) -> SchedulingState:
        return SchedulingState(
            current_time=now,
            ready_queue=tuple(ready),
            executing_process=executing,
            completed_processes=tuple(completed),
            gantt_chart=tuple(gantt),
            processes=snapshot_processes(procs, remaining),
        )

    yield sb.build(
        state(),
        "Starting Shortest Job First (SJF) scheduling",
        reason="SJF selects the process with the shortest burst time from the ready queue",
        pseudocode_line=0,
        label="Initialization",
    )

    # --- main loop ---
    while len(completed) < len(procs):
        arrivals = [
            p.id for p in procs
            if p.arrival_time <= now and remaining[p.id] > 0 and p.id not in ready
        ]
        ready.extend(arrivals)
        if arrivals:
            yield sb.build(
                state(),
                f"Processes {', '.join(arrivals)} arrived and added to ready queue",
                reason="New processes that have arrived are added to the ready queue",
                pseudocode_line=1,
            )

        if not ready:
            upcoming = min(
                (p for p in procs if p.arrival_time > now and remaining[p.id] > 0),
                key=lambda p: p.arrival_time,
            )
            now = upcoming.arrival_time
            ready.append(upcoming.id)
            yield sb.build(
                state(),
                f"CPU idle until time {now}. Process {upcoming.id} arrives",
                reason="No processes are ready, CPU waits for next arrival",
                pseudocode_line=2,
                label="Idle",
            )
            continue

        # min() keeps the first of equal keys, so ties go to the earliest queued
        pid = min(ready, key=lambda q: by_id[q].burst_time)
        ready.remove(pid)
        burst = by_id[pid].burst_time
        yield sb.build(
            state(executing=pid),
            f"Select {pid} (burst: {burst}ms) - shortest job in ready queue",
            reason="SJF selects the process with minimum burst time for execution",
            pseudocode_line=3,
            label="Process Selection",
        )

        start = now
        now = start + burst
        remaining[pid] = 0
        gantt.append(GanttEntry(pid, start, now))
        completed.append(pid)
        yield sb.build(
            state(),
            f"Execute {pid} from time {start} to {now} - completed",
            reason="Process runs to completion without preemption",
            pseudocode_line=4,
            label="Execution Complete",
        )

    # --- done ---
    metrics = calculate_metrics(procs, gantt)
    yield sb.build(
        SchedulingState(
            current_time=now,
            completed_processes=tuple(completed),
            gantt_chart=tuple(gantt),
            processes=snapshot_processes(procs, remaining),
            waiting_times=metrics.waiting_times,
            turnaround_times=metrics.turnaround_times,
            completion_times=metrics.completion_times,
            average_waiting_time=metrics.average_waiting_time,
            average_turnaround_time=metrics.average_turnaround_time,
        ),
        (
            f"All processes completed. Avg waiting time: {metrics.average_waiting_time:.2f}ms, "
            f"Avg turnaround time: {metrics.average_turnaround_time:.2f}ms"
        ),
        reason="SJF minimizes average waiting time by executing shorter jobs first",
        pseudocode_line=5,
        label="Complete",
    )
    logger.debug("sjf: processes=%d steps=%d", len(procs), sb.next_index)


# ---------------------------------------------------------------------------
# Verification pair
# ---------------------------------------------------------------------------
def reference(inp: SchedulingInput) -> ScheduleSummary:
    """Classic textbook SJF: repeatedly run the shortest arrived job."""
    jobs = list(coerce_processes(inp.processes))
    waiting: List[Process] = []
    gantt: List[GanttEntry] = []
    done: List[str] = []
    clock = 0

    while jobs or waiting:
        waiting.extend(j for j in jobs if j.arrival_time <= clock)
        jobs = [j for j in jobs if j.arrival_time > clock]
        if not waiting:
            clock = min(j.arrival_time for j in jobs)
            continue
        best = waiting[0]
        for job in waiting[1:]:
            if job.burst_time < best.burst_time:
                best = job
        waiting.remove(best)
        gantt.append(GanttEntry(best.id, clock, clock + best.burst_time))
        clock += best.burst_time
        done.append(best.id)

    return ScheduleSummary(gantt_chart=gantt, completed=done)


def compare(final: SchedulingState, expected: ScheduleSummary) -> bool:
    return (
        len(final.completed_processes) == len(expected.completed)
        and len(final.gantt_chart) == len(expected.gantt_chart)
    )
