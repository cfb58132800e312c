import os

# Widgets and timers need a QApplication, run it headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from beliefgraph.model.states import ReasoningState


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def make_states(counts, strength=0.5):
    """One state per entry of counts, with unique labels per state."""
    return [
        ReasoningState(
            belief_strength=strength,
            active_neurons=tuple(f"N{j}" for j in range(k)),
            update_label=f"Step {i}",
        )
        for i, k in enumerate(counts)
    ]


@pytest.fixture
def states_232():
    return make_states([2, 3, 2])
