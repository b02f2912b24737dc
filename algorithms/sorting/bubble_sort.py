"""
bubble_sort.py — Bubble Sort
=============================
Generator-based Bubble Sort.  Yields a Step at every meaningful event:
  1. A new pass starts
  2. Two adjacent elements are compared
  3. They are about to be swapped, then the array after the swap
  4. A pass made no swaps  →  early termination, no further passes
  5. Final step  →  every index sorted, with comparison / swap totals

The `sorted` indices during pass i are the last i positions: each
completed pass has bubbled one maximum into place.
"""

import logging
from typing import Iterator, List, Sequence, Tuple

from algorithms.step import Step, StepBuilder
from algorithms.sorting.state import Number, SortingState, coerce_array, format_array

logger = logging.getLogger(__name__)

DEFAULT_INPUT: List[int] = [64, 34, 25, 12, 22, 11, 90]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bubble_sort(values: Sequence[Number]) -> Iterator[Step]:
    """
    Yields Step snapshots for every event during Bubble Sort.

    Args:
        values : The numbers to sort.  Never modified.

    Yields:
        Step[SortingState] – initial, per-pass, per-comparison, per-swap, final.
    """

    sb          = StepBuilder()
    array       = list(coerce_array(values))
    n           = len(array)
    comparisons = 0
    swaps       = 0

    yield sb.build(
        SortingState(array=tuple(array)),
        "Starting Bubble Sort with the initial array",
        reason="We begin by examining the unsorted array",
        pseudocode_line=0,
        comparisons=0,
        swaps=0,
    )

    for i in range(n - 1):
        swapped = False
        done = _settled_tail(n, i)

        yield sb.build(
            SortingState(array=tuple(array), sorted=done),
            f"Pass {i + 1}: Starting new pass through the array",
            reason="Each pass will bubble the largest unsorted element to its final position",
            pseudocode_line=1,
            comparisons=comparisons,
            swaps=swaps,
            label=f"Pass {i + 1}",
        )

        for j in range(n - i - 1):
            comparisons += 1
            yield sb.build(
                SortingState(array=tuple(array), comparing=(j, j + 1), sorted=done),
                f"Comparing elements at indices {j} and {j + 1}: {array[j]} and {array[j + 1]}",
                reason="We compare adjacent elements to determine if they need to be swapped",
                pseudocode_line=2,
                comparisons=comparisons,
                swaps=swaps,
                highlight_indices=(j, j + 1),
            )

            if array[j] > array[j + 1]:
                swaps += 1
                yield sb.build(
                    SortingState(array=tuple(array), swapping=(j, j + 1), sorted=done),
                    f"Swapping {array[j]} and {array[j + 1]} because {array[j]} > {array[j + 1]}",
                    reason="The larger element needs to move towards the end of the array",
                    pseudocode_line=3,
                    comparisons=comparisons,
                    swaps=swaps,
                    highlight_indices=(j, j + 1),
                )

                array[j], array[j + 1] = array[j + 1], array[j]
                swapped = True

                yield sb.build(
                    SortingState(array=tuple(array), sorted=done),
                    f"Swapped: array is now {format_array(array)}",
                    reason="The elements are now in correct relative order",
                    pseudocode_line=3,
                    comparisons=comparisons,
                    swaps=swaps,
                )

        if not swapped:
            # a swap-free pass proves every element is already in place
            yield sb.build(
                SortingState(array=tuple(array), sorted=tuple(range(n))),
                "No swaps in this pass - array is already sorted!",
                reason="When no swaps occur, all elements are in their correct positions",
                pseudocode_line=4,
                comparisons=comparisons,
                swaps=swaps,
                label="Early termination",
            )
            break

    yield sb.build(
        SortingState(array=tuple(array), sorted=tuple(range(n))),
        f"Sorting complete! Final array: {format_array(array)}",
        reason="All elements have been moved to their correct positions",
        pseudocode_line=5,
        comparisons=comparisons,
        swaps=swaps,
        label="Complete",
    )
    logger.debug("bubble sort: n=%d comparisons=%d swaps=%d steps=%d", n, comparisons, swaps, sb.next_index)


# ---------------------------------------------------------------------------
# Verification pair
# ---------------------------------------------------------------------------
def reference(values: Sequence[Number]) -> List[Number]:
    arr = list(coerce_array(values))
    for i in range(len(arr) - 1):
        for j in range(len(arr) - i - 1):
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
    return arr


def compare(final: SortingState, expected: Sequence[Number]) -> bool:
    return list(final.array) == list(expected)


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def _settled_tail(n: int, completed_passes: int) -> Tuple[int, ...]:
    return tuple(range(n - completed_passes, n))
