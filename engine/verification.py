"""
verification.py — Run Recorder & Correctness Check
===================================================
Runs an algorithm to completion, then checks the final Step against the
algorithm's own reference implementation.

Usage:
    result = verify(get_algorithm("bubble-sort"), [5, 1, 4])
    result.passed                    # True
    assert_verified(descriptor, inp) # raises VerificationError on mismatch
    verify_registry()                # every default input, plus extras

The result is plain data so the CLI can log it and the web app can
return it as JSON.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from algorithms import REGISTRY, AlgorithmDescriptor
from algorithms.errors import VerificationError

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------
@dataclass
class VerificationResult:
    algorithm_id:    str   = ""
    algorithm_input: Any   = None
    total_steps:     int   = 0
    final_state:     Any   = None
    expected:        Any   = None
    passed:          bool  = False
    wall_time_ms:    float = 0.0     # generate + reference + compare

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithmId": self.algorithm_id,
            "input":       to_jsonable(self.algorithm_input),
            "totalSteps":  self.total_steps,
            "finalState":  to_jsonable(self.final_state),
            "expected":    to_jsonable(self.expected),
            "passed":      self.passed,
            "wallTimeMs":  round(self.wall_time_ms, 3),
        }


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------
def verify(descriptor: AlgorithmDescriptor, algorithm_input: Any = None) -> VerificationResult:
    if algorithm_input is None:
        algorithm_input = descriptor.default_input

    t0 = time.perf_counter()
    steps = descriptor.generate_steps(algorithm_input)
    final = steps[-1].state if steps else None
    expected = descriptor.reference_implementation(algorithm_input)
    passed = final is not None and descriptor.compare_result(final, expected)
    elapsed = (time.perf_counter() - t0) * 1000

    result = VerificationResult(
        algorithm_id=descriptor.id,
        algorithm_input=algorithm_input,
        total_steps=len(steps),
        final_state=final,
        expected=expected,
        passed=bool(passed),
        wall_time_ms=elapsed,
    )
    if result.passed:
        log.debug("%s: OK (%d steps, %.2fms)", descriptor.id, len(steps), elapsed)
    else:
        log.error("%s: final state does not match reference for input %r", descriptor.id, algorithm_input)
    return result


def assert_verified(descriptor: AlgorithmDescriptor, algorithm_input: Any = None) -> VerificationResult:
    result = verify(descriptor, algorithm_input)
    if not result.passed:
        raise VerificationError(result.algorithm_id, result.algorithm_input, result.final_state, result.expected)
    return result


def verify_registry(
    registry: Mapping[str, AlgorithmDescriptor] = REGISTRY,
    extra_inputs: Optional[Mapping[str, Iterable[Any]]] = None,
) -> List[VerificationResult]:
    """Verify each algorithm on its default input, then on any extra inputs given for its id."""
    extra_inputs = extra_inputs or {}
    results: List[VerificationResult] = []
    for key, descriptor in registry.items():
        results.append(verify(descriptor))
        for inp in extra_inputs.get(key, ()):
            results.append(verify(descriptor, inp))
    failed = sum(1 for r in results if not r.passed)
    log.info("Verified %d runs across %d algorithms, %d failed", len(results), len(registry), failed)
    return results


# ---------------------------------------------------------------------------
# JSON helper
# ---------------------------------------------------------------------------
def to_jsonable(value: Any) -> Any:
    """States, inputs and reference results → plain JSON-friendly data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if hasattr(value, "_asdict"):
        return {k: to_jsonable(v) for k, v in value._asdict().items()}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value
