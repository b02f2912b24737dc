"""
state.py — Sorting Snapshot
============================
What a sorting step shows: the array as it is right now plus which
indices are being compared, swapped, inserted, or already final.
"""

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Number = Real


@dataclass(frozen=True)
class SortingState:
    kind: ClassVar[str] = "sorting"

    array:     Tuple[Number, ...]
    comparing: Optional[Tuple[int, int]] = None
    swapping:  Optional[Tuple[int, int]] = None
    inserting: Optional[int]             = None
    sorted:    Tuple[int, ...]           = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind, "array": list(self.array), "sorted": list(self.sorted)}
        if self.comparing is not None:
            data["comparing"] = list(self.comparing)
        if self.swapping is not None:
            data["swapping"] = list(self.swapping)
        if self.inserting is not None:
            data["inserting"] = self.inserting
        return data


def coerce_array(values: Any) -> Tuple[Number, ...]:
    """
    Input normalisation shared by the sorting generators.

    Anything that is not a sequence of real numbers is treated as the
    empty array, so a generator always has something it can sort.
    """
    if not isinstance(values, (list, tuple)):
        if values is not None:
            logger.warning("sorting input is not a list (%s); treating as empty", type(values).__name__)
        return ()
    if not all(isinstance(v, Real) and not isinstance(v, bool) for v in values):
        logger.warning("sorting input contains non-numeric values; treating as empty")
        return ()
    return tuple(values)


def format_array(values: Sequence[Number]) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"
