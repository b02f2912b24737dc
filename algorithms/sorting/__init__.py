"""
sorting/
--------
One module per algorithm; each has a generator named after it plus a
reference / compare pair.

    from algorithms.sorting import bubble_sort
    steps = list(bubble_sort.bubble_sort([5, 1, 4]))
"""

from algorithms.sorting.state import SortingState, coerce_array
from algorithms.sorting import bubble_sort, insertion_sort

__all__ = [
    "SortingState",
    "coerce_array",
    "bubble_sort",
    "insertion_sort",
]
