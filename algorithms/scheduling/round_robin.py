"""
round_robin.py — Round-Robin CPU Scheduling
============================================
Preemptive.  The ready queue is FIFO; each process runs for at most one
time quantum, then goes to the back of the queue behind anything that
arrived while it was running.

Yields a Step at:
  1. Initialisation, then the time-0 arrivals (if any)
  2. CPU idle  →  jump to the next arrival time, admit everyone arriving then
  3. Dequeue the head  →  SELECTION
  4. Run min(quantum, remaining)  →  EXECUTION (one Gantt slice)
  5. COMPLETION, or PREEMPTION back to the tail
  6. Final step  →  per-process and average waiting / turnaround time
"""

import logging
from collections import deque
from typing import Dict, Iterator, List, Optional, Sequence

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
    valid_quantum,
)

logger = logging.getLogger(__name__)

DEFAULT_INPUT = SchedulingInput(
    processes=(
        Process("P1", arrival_time=0, burst_time=4),
        Process("P2", arrival_time=1, burst_time=3),
        Process("P3", arrival_time=2, burst_time=1),
        Process("P4", arrival_time=3, burst_time=2),
    ),
    time_quantum=2,
)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def round_robin(processes: Sequence[Process], time_quantum) -> Iterator[Step]:
    """
    Yields Step snapshots for a Round-Robin schedule.

    Args:
        processes    : Processes to schedule.  Malformed entries are dropped.
        time_quantum : Maximum slice length; must be > 0.
    """

    procs      = coerce_processes(processes)
    sb         = StepBuilder()
    remaining  = {p.id: p.burst_time for p in procs}
    ready      = deque()
    admitted   = set()
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

    def admit(arrivals: List[Process]) -> List[str]:
        ids = [p.id for p in arrivals]
        ready.extend(ids)
        admitted.update(ids)
        return ids

    yield sb.build(
        state(),
        f"Starting Round Robin scheduling with time quantum {time_quantum}",
        reason="We begin by initializing the scheduling algorithm with all processes",
        pseudocode_line=0,
        label="Initialization",
    )

    if not valid_quantum(time_quantum):
        logger.warning("round robin: invalid time quantum %r; nothing to schedule", time_quantum)
        procs = ()

    arrived = admit([p for p in procs if p.arrival_time <= now])
    if arrived:
        yield sb.build(
            state(),
            f"Processes {', '.join(arrived)} arrive at time 0 and enter ready queue",
            reason="Processes with arrival time 0 are immediately added to the ready queue",
            pseudocode_line=1,
        )

    # --- main loop ---
    while len(completed) < len(procs):
        if not ready:
            pending = [p for p in procs if p.id not in admitted]
            now = max(now, min(p.arrival_time for p in pending))
            arrived = admit(sorted((p for p in pending if p.arrival_time <= now), key=lambda p: p.arrival_time))
            yield sb.build(
                state(),
                f"CPU idle until time {now}. Process {', '.join(arrived)} arrives",
                reason="No processes are ready, so we advance to the next arrival time",
                pseudocode_line=2,
                label="Idle",
            )
            continue

        pid = ready.popleft()
        yield sb.build(
            state(executing=pid),
            f"Dequeue {pid} from ready queue (remaining: {remaining[pid]}ms)",
            reason="Round Robin selects the first process in the ready queue",
            pseudocode_line=3,
            label="Process Selection",
        )

        run   = min(time_quantum, remaining[pid])
        start = now
        now   = start + run
        remaining[pid] -= run
        gantt.append(GanttEntry(pid, start, now))

        yield sb.build(
            state(executing=pid),
            f"Execute {pid} from time {start} to {now} ({run}ms)",
            reason=(
                f"Process executes for {run}ms "
                f"(time quantum: {time_quantum}, remaining: {remaining[pid]}ms)"
            ),
            pseudocode_line=4,
            label="Execution",
        )

        # arrivals during the slice queue up ahead of a preempted process
        admit(sorted(
            (p for p in procs if p.id not in admitted and p.arrival_time <= now),
            key=lambda p: p.arrival_time,
        ))

        if remaining[pid] == 0:
            completed.append(pid)
            yield sb.build(
                state(),
                f"{pid} completed at time {now}",
                reason="Process has finished all its burst time",
                pseudocode_line=5,
                label="Completion",
            )
        else:
            ready.append(pid)
            yield sb.build(
                state(),
                f"{pid} preempted, moved to end of ready queue (remaining: {remaining[pid]}ms)",
                reason="Time quantum expired, process returns to ready queue for fairness",
                pseudocode_line=6,
                label="Preemption",
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
        reason="Scheduling complete. Round Robin provides fair CPU time distribution",
        pseudocode_line=7,
        label="Complete",
    )
    logger.debug("round robin: processes=%d slices=%d steps=%d", len(procs), len(gantt), sb.next_index)


# ---------------------------------------------------------------------------
# Verification pair
# ---------------------------------------------------------------------------
def reference(inp: SchedulingInput) -> ScheduleSummary:
    """Independent event-driven simulation of the same policy."""
    quantum = inp.time_quantum
    procs = list(coerce_processes(inp.processes)) if valid_quantum(quantum) else []
    # stable sort: equal arrivals keep input order
    pending = sorted(procs, key=lambda p: p.arrival_time)
    left: Dict[str, float] = {p.id: p.burst_time for p in procs}
    queue = deque()
    gantt: List[GanttEntry] = []
    done: List[str] = []
    clock = 0
    i = 0

    while len(done) < len(procs):
        while i < len(pending) and pending[i].arrival_time <= clock:
            queue.append(pending[i].id)
            i += 1
        if not queue:
            clock = pending[i].arrival_time
            continue

        pid = queue.popleft()
        slice_len = min(quantum, left[pid])
        gantt.append(GanttEntry(pid, clock, clock + slice_len))
        clock += slice_len
        left[pid] -= slice_len

        while i < len(pending) and pending[i].arrival_time <= clock:
            queue.append(pending[i].id)
            i += 1
        if left[pid]:
            queue.append(pid)
        else:
            done.append(pid)

    return ScheduleSummary(gantt_chart=gantt, completed=done)


def compare(final: SchedulingState, expected: ScheduleSummary) -> bool:
    return (
        len(final.completed_processes) == len(expected.completed)
        and len(final.gantt_chart) == len(expected.gantt_chart)
    )
