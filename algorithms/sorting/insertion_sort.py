"""
insertion_sort.py — Insertion Sort
===================================
Generator-based Insertion Sort.  For each i in 1..n-1:
  1. Select the key at index i
  2. While the element on its left is larger: compare, then shift it right
  3. If the scan stopped on a smaller-or-equal element: one more compare
  4. Insert the key  →  indices 0..i are now sorted
"""

import logging
from typing import Iterator, List, Sequence, Tuple

from algorithms.step import Step, StepBuilder
from algorithms.sorting.state import Number, SortingState, coerce_array, format_array

logger = logging.getLogger(__name__)

DEFAULT_INPUT: List[int] = [64, 34, 25, 12, 22, 11, 90]


def insertion_sort(values: Sequence[Number]) -> Iterator[Step]:
    """Yields Step snapshots for every select / compare / shift / insert."""

    sb          = StepBuilder()
    array       = list(coerce_array(values))
    n           = len(array)
    comparisons = 0
    shifts      = 0

    yield sb.build(
        SortingState(array=tuple(array), sorted=_prefix(min(n, 1))),
        "Starting Insertion Sort - first element is considered sorted",
        reason="A single element is always sorted by itself",
        pseudocode_line=0,
        comparisons=0,
        swaps=0,
    )

    for i in range(1, n):
        key = array[i]
        j = i - 1
        done = _prefix(i)

        yield sb.build(
            SortingState(array=tuple(array), inserting=i, sorted=done),
            f"Selecting element at index {i}: {key}",
            reason="We need to insert this element into its correct position in the sorted portion",
            pseudocode_line=1,
            comparisons=comparisons,
            swaps=shifts,
            highlight_indices=(i,),
            label=f"Inserting {key}",
        )

        while j >= 0 and array[j] > key:
            comparisons += 1
            yield sb.build(
                SortingState(array=tuple(array), comparing=(j, i), sorted=done),
                f"Comparing {array[j]} with {key}: {array[j]} > {key}, need to shift",
                reason="Elements greater than the key must be shifted right to make room",
                pseudocode_line=2,
                comparisons=comparisons,
                swaps=shifts,
                highlight_indices=(j, i),
            )

            shifts += 1
            array[j + 1] = array[j]

            yield sb.build(
                SortingState(array=tuple(array), sorted=done),
                f"Shifted {array[j]} to the right",
                reason="Making space for the key element",
                pseudocode_line=3,
                comparisons=comparisons,
                swaps=shifts,
            )
            j -= 1

        if j >= 0:
            comparisons += 1
            yield sb.build(
                SortingState(array=tuple(array), comparing=(j, i), sorted=done),
                f"Comparing {array[j]} with {key}: {array[j]} ≤ {key}, found correct position",
                reason="We've found where the key should be inserted",
                pseudocode_line=2,
                comparisons=comparisons,
                swaps=shifts,
                highlight_indices=(j, i),
            )

        array[j + 1] = key

        yield sb.build(
            SortingState(array=tuple(array), sorted=_prefix(i + 1)),
            f"Inserted {key} at position {j + 1}",
            reason="The key is now in its correct position among the sorted elements",
            pseudocode_line=4,
            comparisons=comparisons,
            swaps=shifts,
            highlight_indices=(j + 1,),
        )

    yield sb.build(
        SortingState(array=tuple(array), sorted=_prefix(n)),
        f"Sorting complete! Final array: {format_array(array)}",
        reason="All elements have been inserted into their correct positions",
        pseudocode_line=5,
        comparisons=comparisons,
        swaps=shifts,
        label="Complete",
    )
    logger.debug("insertion sort: n=%d comparisons=%d shifts=%d steps=%d", n, comparisons, shifts, sb.next_index)


# ---------------------------------------------------------------------------
# Verification pair
# ---------------------------------------------------------------------------
def reference(values: Sequence[Number]) -> List[Number]:
    arr = list(coerce_array(values))
    for i in range(1, len(arr)):
        key = arr[i]
        j = i - 1
        while j >= 0 and arr[j] > key:
            arr[j + 1] = arr[j]
            j -= 1
        arr[j + 1] = key
    return arr


def compare(final: SortingState, expected: Sequence[Number]) -> bool:
    return list(final.array) == list(expected)


def _prefix(length: int) -> Tuple[int, ...]:
    return tuple(range(length))
