import pytest

from algorithms import AlgorithmDescriptor, REGISTRY, build_registry
from algorithms.errors import VerificationError
from algorithms.graphs import GraphInput
from algorithms.scheduling import Process, SchedulingInput
from engine import assert_verified, verify, verify_registry
from graph import Graph

EXTRA_INPUTS = {
    "bubble-sort": [[], [1], [3, 3, 3], [9, -2, 4.5, 0, 9]],
    "insertion-sort": [[], [1], [5, 4, 3, 2, 1], [2, 2, 1, 1]],
    "bfs": [GraphInput(Graph.generate_grid(4, 4), "0,0"), GraphInput(Graph(), "A")],
    "dfs": [GraphInput(Graph.generate_random(10, 0.25, seed=11), "0")],
    "round-robin": [
        SchedulingInput((Process("A", 3, 5), Process("B", 3, 2), Process("C", 12, 1)), 3),
        SchedulingInput((), 1),
    ],
    "sjf": [SchedulingInput((Process("A", 0, 3), Process("B", 0, 1), Process("C", 10, 2)))],
}


def test_every_default_input_verifies():
    results = verify_registry()
    assert len(results) == len(REGISTRY)
    assert all(r.passed for r in results), [r.algorithm_id for r in results if not r.passed]


def test_extra_inputs_verify():
    results = verify_registry(REGISTRY, EXTRA_INPUTS)
    assert len(results) == len(REGISTRY) + sum(len(v) for v in EXTRA_INPUTS.values())
    assert all(r.passed for r in results)


def test_result_is_json_friendly():
    data = verify(REGISTRY["round-robin"]).to_dict()
    assert data["passed"] is True
    assert data["input"]["time_quantum"] == 2
    assert data["expected"]["gantt_chart"][0] == {"processId": "P1", "startTime": 0, "endTime": 2}
    assert data["finalState"]["kind"] == "scheduling"


def broken_descriptor():
    good = build_registry()["bubble-sort"]
    return AlgorithmDescriptor(
        id="broken-sort",
        name="Broken",
        category_id="sorting",
        input_schema="array",
        default_input=(3, 1, 2),
        steps_fn=good.steps_fn,
        reference_fn=lambda values: list(reversed(sorted(values))),
        compare_fn=good.compare_fn,
        parse_fn=good.parse_fn,
    )


def test_mismatch_is_reported():
    result = verify(broken_descriptor())
    assert not result.passed
    assert result.expected == [3, 2, 1]


def test_assert_verified_names_algorithm_and_input():
    with pytest.raises(VerificationError) as excinfo:
        assert_verified(broken_descriptor())
    assert excinfo.value.algorithm_id == "broken-sort"
    assert "broken-sort" in str(excinfo.value)
    assert "(3, 1, 2)" in str(excinfo.value)
