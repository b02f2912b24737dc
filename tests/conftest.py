import pytest

from algorithms import build_registry
from algorithms.step import Step
from engine import ManualScheduler
from graph import Graph


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def tree_graph():
    """A-B, A-C, B-D, B-E, C-F."""
    g = Graph()
    for a, b in [("A", "B"), ("A", "C"), ("B", "D"), ("B", "E"), ("C", "F")]:
        g.create_edge(a, b)
    return g


@pytest.fixture
def four_steps():
    return [Step(index=i, state={"value": i + 1}, description=f"Step {i + 1}") for i in range(4)]


class Recorder:
    """Collects controller notifications."""

    def __init__(self):
        self.changes = []
        self.completions = 0

    def on_step_change(self, index, total):
        self.changes.append((index, total))

    def on_complete(self):
        self.completions += 1


@pytest.fixture
def recorder():
    return Recorder()
