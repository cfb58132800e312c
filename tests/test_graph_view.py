"""
Graph View Tests
================
Headless smoke tests of the plot widget and the main window wiring.
"""
import os

import pytest
from PySide6.QtGui import QCloseEvent

from beliefgraph.config import SAMPLES_PATH
from beliefgraph.model.states import AnalysisResult, ConsistencyStatus, EvidencePair
from beliefgraph.simulation.lifecycle import LifecycleManager
from beliefgraph.view.graph_view import GraphView
from beliefgraph.view.main_window import MainWindow


@pytest.fixture
def manager(qapp):
    m = LifecycleManager()
    yield m
    m.shutdown()


@pytest.fixture
def view(qapp, manager):
    v = GraphView()
    v.attach(manager)
    return v


class TestGraphView:

    def test_draws_on_tick(self, view, manager, states_232):
        manager.set_states(states_232)
        manager.advance_frame()

        frame = view.last_frame
        assert len(frame.ids) == 7
        assert frame.segments.shape == (24, 2)

    def test_cleared_on_empty_input(self, view, manager, states_232):
        manager.set_states(states_232)
        manager.advance_frame()
        manager.set_states([])
        assert view.last_frame.is_empty

    def test_tooltip_shows_label(self, view, manager, states_232):
        manager.set_states(states_232)
        manager.advance_frame()
        assert view._tooltip(x=0.0, y=0.0, data="N1-1") == "N1"

    def test_drag_signals_reach_the_simulation(self, view, manager, states_232):
        manager.set_states(states_232)
        sim = manager.simulation

        view.node_item.drag_started.emit("N0-0", (10.0, 20.0))
        assert sim.node("N0-0").pin == (10.0, 20.0)
        assert sim.temperature_target == pytest.approx(0.3)

        view.node_item.drag_moved.emit("N0-0", (30.0, 40.0))
        assert sim.node("N0-0").pin == (30.0, 40.0)

        view.node_item.drag_finished.emit("N0-0")
        assert sim.node("N0-0").pin is None
        assert sim.temperature_target == 0.0


class TestMainWindow:

    def test_load_sample(self, qapp):
        window = MainWindow()
        window.on_load_sample()

        assert window.lifecycle.simulation is not None
        assert window.list_steps.count() == 5
        window.closeEvent(QCloseEvent())
        assert window.lifecycle.simulation is None
        assert not window.lifecycle.timer.isActive()

    def test_load_bundled_trace(self, qapp):
        window = MainWindow()
        assert window.load_file(os.path.join(SAMPLES_PATH, "sample_trace.json"))

        assert window.result.status == ConsistencyStatus.CONSISTENT
        assert "sample_trace.json" in window.windowTitle()
        window.close()

    def test_clear(self, qapp):
        window = MainWindow()
        window.on_load_sample()
        window.on_clear()
        assert window.lifecycle.simulation is None
        assert window.list_steps.count() == 0
        window.close()

    def test_evidence_text_is_shown_literally(self, qapp):
        window = MainWindow()
        evidence = EvidencePair(excerpt="age < 30 and <b>bold</b>", claim_id="c<1>", analysis="x < y & z")
        window.set_result(AnalysisResult(evidence=(evidence,)))

        text = window.txt_evidence.toPlainText()
        assert "Claim ID: c<1>" in text
        assert "age < 30 and <b>bold</b>" in text
        assert "x < y & z" in text
        window.close()
