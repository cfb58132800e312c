"""
Main Application Window
=======================
The primary GUI container: menu bar, analysis summary and the belief graph.

Why is this file needed?
------------------------
1. Layout: It organizes the verdict/rationale panel next to the visualizer.
2. Routing: It connects global actions (File -> Open, Load Sample, ...) to
   the IO layer and to the simulation lifecycle.
3. Teardown: Closing the window stops the frame timer.
"""
import html
import logging
import os
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog, QGroupBox, QLabel, QListWidget, QMainWindow, QMessageBox,
    QSplitter, QTextBrowser, QVBoxLayout, QWidget
)

from beliefgraph.config import SAMPLES_PATH
from beliefgraph.model.io import IOManager
from beliefgraph.model.states import AnalysisResult, ConsistencyStatus, StateFormatError, sample_states
from beliefgraph.simulation.lifecycle import LifecycleManager
from beliefgraph.view.graph_view import GraphView

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "BeliefGraph"

_VERDICT_TEXT = {
    ConsistencyStatus.CONSISTENT: ("CONSISTENT (1)", "#34d399"),
    ConsistencyStatus.CONTRADICT: ("CONTRADICT (0)", "#fb7185"),
    ConsistencyStatus.PENDING: ("No verdict", "#94a3b8"),
}


class MainWindow(QMainWindow):
    def __init__(self, lifecycle: Optional[LifecycleManager] = None) -> None:
        super().__init__()
        self.lifecycle = lifecycle or LifecycleManager(parent=self)
        self.result: AnalysisResult = AnalysisResult()
        self.filepath: Optional[str] = None

        self.update_window_title()
        self.resize(1200, 600)

        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Analysis summary ---
        summary = QWidget()
        summary_layout = QVBoxLayout(summary)

        grp_verdict = QGroupBox("Consistency Judgment")
        l_verdict = QVBoxLayout(grp_verdict)
        self.lbl_verdict = QLabel()
        self.lbl_verdict.setAlignment(Qt.AlignCenter)
        l_verdict.addWidget(self.lbl_verdict)
        summary_layout.addWidget(grp_verdict)

        grp_rationale = QGroupBox("Causal Reasoning Rationale")
        l_rationale = QVBoxLayout(grp_rationale)
        self.txt_rationale = QTextBrowser()
        l_rationale.addWidget(self.txt_rationale)
        summary_layout.addWidget(grp_rationale)

        grp_steps = QGroupBox("Belief State Progression")
        l_steps = QVBoxLayout(grp_steps)
        self.list_steps = QListWidget()
        l_steps.addWidget(self.list_steps)
        summary_layout.addWidget(grp_steps)

        splitter.addWidget(summary)

        # --- RIGHT SIDE: Visualizer ---
        visual = QWidget()
        visual_layout = QVBoxLayout(visual)
        title = QLabel("<b>BDH Causal Neuron Activity (Simulation)</b>")
        visual_layout.addWidget(title)
        self.graph_view = GraphView()
        self.graph_view.attach(self.lifecycle)
        visual_layout.addWidget(self.graph_view)

        grp_evidence = QGroupBox("Evidence Dossier")
        l_evidence = QVBoxLayout(grp_evidence)
        self.txt_evidence = QTextBrowser()
        l_evidence.addWidget(self.txt_evidence)
        visual_layout.addWidget(grp_evidence)

        splitter.addWidget(visual)
        splitter.setSizes([350, 850])

        self._create_actions()
        self._create_menus()

        self.refresh_summary()

    def _create_actions(self) -> None:
        self.act_open = QAction("Open Trace...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_save_as = QAction("Save Trace As...", self)
        self.act_save_as.setShortcut("Ctrl+Shift+S")
        self.act_save_as.triggered.connect(self.on_file_save_as)

        self.act_sample = QAction("Load Sample", self)
        self.act_sample.triggered.connect(self.on_load_sample)

        self.act_clear = QAction("Clear", self)
        self.act_clear.triggered.connect(self.on_clear)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        self.act_restart = QAction("Restart Layout", self)
        self.act_restart.setShortcut("Ctrl+R")
        self.act_restart.triggered.connect(self.lifecycle.restart)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_save_as)
        file_menu.addSeparator()
        file_menu.addAction(self.act_sample)
        file_menu.addAction(self.act_clear)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_restart)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        filename = os.path.basename(self.filepath) if self.filepath else "Untitled"
        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{filename}]")

    def set_result(self, result: AnalysisResult, filepath: Optional[str] = None) -> None:
        """Show an analysis result and (re)start the visualization of its states."""
        self.result = result
        self.filepath = filepath
        self.update_window_title()
        self.refresh_summary()
        self.lifecycle.set_states(result.internal_states)

    def refresh_summary(self) -> None:
        text, color = _VERDICT_TEXT[self.result.status]
        self.lbl_verdict.setText(f"<span style='font-size:20pt; font-weight:bold; color:{color}'>{text}</span>")
        self.txt_rationale.setPlainText(self.result.rationale)

        self.list_steps.clear()
        for i, state in enumerate(self.result.internal_states):
            label = state.update_label or f"Step {i + 1}"
            self.list_steps.addItem(f"{label}  ({state.belief_strength:.2f})")

        self.txt_evidence.clear()
        for ev in self.result.evidence:
            # fields come from the loaded file, never markup
            self.txt_evidence.append(f"<b>Claim ID: {html.escape(ev.claim_id)}</b>")
            self.txt_evidence.append(f"<i>\"{html.escape(ev.excerpt)}\"</i>")
            self.txt_evidence.append(f"{html.escape(ev.analysis)}<br>")

    # --- FILE SLOTS ---

    def load_file(self, fname: str) -> bool:
        try:
            result = IOManager.load(fname)
        except (OSError, StateFormatError) as e:
            logger.error(f"Could not open trace '{fname}': {e}")
            QMessageBox.critical(self, "Error", f"Could not open file:\n{e}")
            return False
        self.set_result(result, filepath=fname)
        return True

    def on_file_open(self) -> None:
        start_dir = SAMPLES_PATH if os.path.isdir(SAMPLES_PATH) else ""
        fname, _ = QFileDialog.getOpenFileName(self, "Open Trace", start_dir, "JSON Files (*.json)")
        if fname:
            self.load_file(fname)

    def on_file_save_as(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(self, "Save Trace", "", "JSON Files (*.json)")
        if not fname:
            return
        if not fname.endswith(".json"):
            fname += ".json"
        try:
            IOManager.save(self.result, fname)
        except OSError as e:
            logger.error(f"Could not save trace '{fname}': {e}")
            QMessageBox.critical(self, "Error", f"Could not save file:\n{e}")
            return
        self.filepath = fname
        self.update_window_title()

    def on_load_sample(self) -> None:
        self.set_result(AnalysisResult(internal_states=tuple(sample_states())))

    def on_clear(self) -> None:
        self.set_result(AnalysisResult())

    def closeEvent(self, event: QCloseEvent, /) -> None:
        """Stop the simulation before the window goes away."""
        self.lifecycle.shutdown()
        event.accept()
