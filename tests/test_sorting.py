import random

import pytest
from dataclasses import FrozenInstanceError

from algorithms.sorting import bubble_sort, insertion_sort
from algorithms.sorting.bubble_sort import reference as bubble_reference
from algorithms.sorting.insertion_sort import reference as insertion_reference

rng = random.Random(7)

ARRAYS = [
    [],
    [42],
    [1, 2, 3, 4, 5],
    [5, 4, 3, 2, 1],
    [3, 1, 3, 2, 1, 3],
    [64, 34, 25, 12, 22, 11, 90],
    [2.5, -1, 0, 7.25],
    [rng.randint(-50, 50) for _ in range(15)],
]

GENERATORS = [
    (bubble_sort.bubble_sort, bubble_reference),
    (insertion_sort.insertion_sort, insertion_reference),
]


@pytest.mark.parametrize("generate,reference", GENERATORS)
@pytest.mark.parametrize("values", ARRAYS)
def test_final_array_matches_reference_and_sorted(generate, reference, values):
    steps = list(generate(values))
    assert list(steps[-1].state.array) == reference(values) == sorted(values)
    assert steps[-1].state.sorted == tuple(range(len(values)))


@pytest.mark.parametrize("generate,reference", GENERATORS)
@pytest.mark.parametrize("values", ARRAYS)
def test_indices_are_contiguous(generate, reference, values):
    steps = list(generate(values))
    assert [s.index for s in steps] == list(range(len(steps)))
    assert len(steps) >= 2


@pytest.mark.parametrize("generate,reference", GENERATORS)
def test_input_is_not_mutated(generate, reference):
    values = [3, 2, 1]
    list(generate(values))
    assert values == [3, 2, 1]


@pytest.mark.parametrize("generate,reference", GENERATORS)
@pytest.mark.parametrize("bad", [None, "312", [1, "a", 3], [True, False], {"a": 1}])
def test_malformed_input_is_treated_as_empty(generate, reference, bad):
    steps = list(generate(bad))
    assert len(steps) == 2
    assert steps[-1].state.array == ()


def test_steps_are_frozen():
    step = next(bubble_sort.bubble_sort([2, 1]))
    with pytest.raises(FrozenInstanceError):
        step.description = "changed"
    with pytest.raises(FrozenInstanceError):
        step.state.array = (1,)


# ---------------------------------------------------------------------------
# Bubble sort specifics
# ---------------------------------------------------------------------------
def test_bubble_sorted_input_terminates_early_after_one_pass():
    steps = list(bubble_sort.bubble_sort([1, 2, 3]))
    labels = [s.metadata.label for s in steps]
    assert labels.count("Early termination") == 1
    assert [s for s in labels if s and s.startswith("Pass")] == ["Pass 1"]
    assert len(steps) == 6
    assert steps[-1].metadata.comparisons == 2
    assert steps[-1].metadata.swaps == 0


def test_bubble_early_termination_marks_every_index_sorted():
    steps = list(bubble_sort.bubble_sort([1, 2, 3, 4]))
    early = next(s for s in steps if s.metadata.label == "Early termination")
    assert early.state.sorted == (0, 1, 2, 3)


def test_bubble_sorted_tail_grows_one_per_pass():
    steps = list(bubble_sort.bubble_sort([4, 3, 2, 1]))
    pass_starts = [s for s in steps if s.metadata.label and s.metadata.label.startswith("Pass")]
    assert [s.state.sorted for s in pass_starts] == [(), (3,), (2, 3)]


def test_bubble_swap_step_shows_array_before_swap():
    steps = list(bubble_sort.bubble_sort([2, 1]))
    swap = next(s for s in steps if s.state.swapping is not None)
    after = steps[swap.index + 1]
    assert swap.state.array == (2, 1)
    assert after.state.array == (1, 2)


def test_bubble_counters_never_decrease():
    steps = list(bubble_sort.bubble_sort([5, 1, 4, 2, 8]))
    comparisons = [s.metadata.comparisons for s in steps]
    assert comparisons == sorted(comparisons)


# ---------------------------------------------------------------------------
# Insertion sort specifics
# ---------------------------------------------------------------------------
def test_insertion_first_element_starts_sorted():
    first = next(insertion_sort.insertion_sort([3, 1, 2]))
    assert first.state.sorted == (0,)


def test_insertion_insert_step_grows_prefix():
    steps = list(insertion_sort.insertion_sort([3, 1, 2]))
    inserts = [s for s in steps if s.pseudocode_line == 4]
    assert [s.state.sorted for s in inserts] == [(0, 1), (0, 1, 2)]
    assert [s.state.array for s in inserts] == [(1, 3, 2), (1, 2, 3)]


def test_insertion_already_sorted_needs_one_comparison_per_key():
    steps = list(insertion_sort.insertion_sort([1, 2, 3, 4]))
    assert steps[-1].metadata.comparisons == 3
    assert steps[-1].metadata.swaps == 0
