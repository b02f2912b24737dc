import pytest

from algorithms.scheduling import GanttEntry, Process, SchedulingInput, calculate_metrics, round_robin, sjf


def gantt(steps):
    return [(e.process_id, e.start, e.end) for e in steps[-1].state.gantt_chart]


def procs(*specs):
    return tuple(Process(pid, arrival_time=a, burst_time=b) for pid, a, b in specs)


SAMPLE = procs(("P1", 0, 4), ("P2", 1, 3), ("P3", 2, 1), ("P4", 3, 2))

PROCESS_SETS = [
    SAMPLE,
    procs(("P1", 0, 6), ("P2", 1, 2), ("P3", 2, 8), ("P4", 3, 3)),
    procs(("A", 5, 2), ("B", 5, 1), ("C", 20, 3)),
    procs(("A", 0, 1)),
    procs(("A", 2, 3), ("B", 0, 7), ("C", 2, 2), ("D", 9, 4)),
]


# ---------------------------------------------------------------------------
# Round Robin
# ---------------------------------------------------------------------------
def test_round_robin_sample_schedule():
    steps = list(round_robin.round_robin(SAMPLE, 2))
    assert gantt(steps) == [
        ("P1", 0, 2), ("P2", 2, 4), ("P3", 4, 5), ("P1", 5, 7), ("P4", 7, 9), ("P2", 9, 10),
    ]
    final = steps[-1].state
    assert final.completed_processes == ("P3", "P1", "P4", "P2")
    assert final.average_waiting_time == pytest.approx(3.75)
    assert final.average_turnaround_time == pytest.approx(6.25)


def test_round_robin_metrics_agree_with_gantt():
    final = list(round_robin.round_robin(SAMPLE, 2))[-1].state
    # recompute independently from the Gantt slices
    completion = {}
    for entry in final.gantt_chart:
        completion[entry.process_id] = max(completion.get(entry.process_id, 0), entry.end)
    for p in SAMPLE:
        assert final.turnaround_times[p.id] == completion[p.id] - p.arrival_time
        assert final.waiting_times[p.id] == completion[p.id] - p.arrival_time - p.burst_time


def test_round_robin_waiting_and_turnaround_are_distinct_maps():
    final = list(round_robin.round_robin(SAMPLE, 2))[-1].state
    assert dict(final.waiting_times) != dict(final.turnaround_times)


@pytest.mark.parametrize("processes", PROCESS_SETS)
@pytest.mark.parametrize("quantum", [1, 2, 3, 10])
def test_round_robin_matches_reference(processes, quantum):
    inp = SchedulingInput(processes, quantum)
    steps = list(round_robin.round_robin(processes, quantum))
    expected = round_robin.reference(inp)
    assert round_robin.compare(steps[-1].state, expected)
    assert steps[-1].state.gantt_chart == tuple(expected.gantt_chart)
    assert [s.index for s in steps] == list(range(len(steps)))


def test_round_robin_admits_everyone_arriving_after_idle():
    steps = list(round_robin.round_robin(procs(("A", 5, 2), ("B", 5, 1)), 2))
    idle = next(s for s in steps if s.metadata.label == "Idle")
    assert idle.state.current_time == 5
    assert idle.state.ready_queue == ("A", "B")
    assert gantt(steps) == [("A", 5, 7), ("B", 7, 8)]


@pytest.mark.parametrize("quantum", [0, -2, None, "2", True, float("inf"), float("nan")])
def test_round_robin_invalid_quantum_gives_minimal_run(quantum):
    steps = list(round_robin.round_robin(SAMPLE, quantum))
    assert len(steps) == 2
    assert steps[-1].state.gantt_chart == ()


def test_round_robin_timeline_is_non_decreasing():
    steps = list(round_robin.round_robin(SAMPLE, 2))
    times = [s.state.current_time for s in steps]
    assert times == sorted(times)


# ---------------------------------------------------------------------------
# SJF
# ---------------------------------------------------------------------------
def test_sjf_default_schedule():
    steps = list(sjf.sjf(PROCESS_SETS[1]))
    assert gantt(steps) == [("P1", 0, 6), ("P2", 6, 8), ("P4", 8, 11), ("P3", 11, 19)]
    final = steps[-1].state
    assert final.average_waiting_time == pytest.approx(4.75)
    assert final.average_turnaround_time == pytest.approx(9.5)


@pytest.mark.parametrize("processes", PROCESS_SETS)
def test_sjf_matches_reference(processes):
    steps = list(sjf.sjf(processes))
    expected = sjf.reference(SchedulingInput(processes))
    assert sjf.compare(steps[-1].state, expected)
    assert steps[-1].state.gantt_chart == tuple(expected.gantt_chart)


def test_sjf_is_non_preemptive():
    steps = list(sjf.sjf(procs(("Long", 0, 10), ("Short", 1, 1))))
    assert gantt(steps) == [("Long", 0, 10), ("Short", 10, 11)]


def test_sjf_ties_go_to_earliest_queued():
    steps = list(sjf.sjf(procs(("A", 0, 1), ("B", 1, 3), ("C", 1, 3))))
    assert [pid for pid, _, _ in gantt(steps)] == ["A", "B", "C"]


def test_sjf_idle_gap_jumps_to_next_arrival():
    steps = list(sjf.sjf(procs(("A", 4, 2))))
    idle = next(s for s in steps if s.metadata.label == "Idle")
    assert idle.state.current_time == 4
    assert gantt(steps) == [("A", 4, 6)]


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("run", [lambda p: sjf.sjf(p), lambda p: round_robin.round_robin(p, 2)])
def test_malformed_processes_are_dropped(run):
    raw = [
        Process("ok", arrival_time=0, burst_time=2),
        Process("neg", arrival_time=-1, burst_time=2),
        Process("zero", arrival_time=0, burst_time=0),
        Process("text", arrival_time="0", burst_time=2),
        Process("endless", arrival_time=0, burst_time=float("inf")),
        Process("nan-arrival", arrival_time=float("nan"), burst_time=3),
        Process("nan-burst", arrival_time=0, burst_time=float("nan")),
        Process("late", arrival_time=float("inf"), burst_time=1),
        Process("ok", arrival_time=1, burst_time=1),
        {"id": "dict", "arrivalTime": 0, "burstTime": 1},
    ]
    steps = list(run(raw))
    assert [p.id for p in steps[-1].state.processes] == ["ok"]
    assert steps[-1].state.completed_processes == ("ok",)


@pytest.mark.parametrize("run", [lambda p: sjf.sjf(p), lambda p: round_robin.round_robin(p, 2)])
def test_empty_process_list_gives_two_steps(run):
    steps = list(run([]))
    assert len(steps) == 2
    assert steps[-1].state.average_waiting_time == 0.0


def test_snapshots_track_remaining_time():
    steps = list(round_robin.round_robin(SAMPLE, 2))
    first_exec = next(s for s in steps if s.metadata.label == "Execution")
    p1 = next(p for p in first_exec.state.processes if p.id == "P1")
    assert p1.remaining_time == 2
    assert all(p.remaining_time == 0 for p in steps[-1].state.processes)


def test_calculate_metrics_for_missing_slices():
    metrics = calculate_metrics(procs(("A", 0, 2)), [])
    assert metrics.completion_times["A"] == 0


def test_calculate_metrics_simple():
    metrics = calculate_metrics(procs(("A", 0, 2), ("B", 1, 1)), [GanttEntry("A", 0, 2), GanttEntry("B", 2, 3)])
    assert dict(metrics.waiting_times) == {"A": 0, "B": 1}
    assert dict(metrics.turnaround_times) == {"A": 2, "B": 2}
    assert metrics.average_waiting_time == 0.5


def test_scheduling_state_maps_are_read_only():
    final = list(sjf.sjf(SAMPLE))[-1].state
    with pytest.raises(TypeError):
        final.waiting_times["P1"] = 99
