"""
Simulation Lifecycle
====================
Owns the currently active ForceSimulation and the frame timer that drives it.

Why is this file needed?
------------------------
1. Single instance: Only one simulation may draw on the surface. Replacing
   the state sequence always stops the previous instance before a new one is
   created.
2. No leaked loops: The frame timer is owned here and stopped synchronously,
   both on rebuild and on view teardown.
3. Signals: Views subscribe to ``ticked`` / ``cleared`` instead of polling.

Classes:
    LifecycleManager: QObject creating, ticking and destroying simulations.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6.QtCore import QObject, QTimer, Signal

from beliefgraph.config import CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, FRAME_INTERVAL_MS, SimulationConfig
from beliefgraph.model.graph import build_graph
from beliefgraph.model.states import ReasoningState
from beliefgraph.simulation.engine import ForceSimulation
from beliefgraph.simulation.interaction import InteractionController

logger = logging.getLogger(__name__)


class LifecycleManager(QObject):
    # Emitted after every tick with the active simulation
    ticked = Signal(object)
    # Emitted when the surface must be blanked (empty input or teardown)
    cleared = Signal()
    # Emitted when a new simulation (or None) becomes active
    simulation_changed = Signal(object)

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        interval_ms: int = FRAME_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or SimulationConfig()
        self.interaction = InteractionController()

        self._simulation: Optional[ForceSimulation] = None
        self._states: tuple[ReasoningState, ...] = ()
        self._canvas_size: tuple[float, float] = (DEFAULT_CANVAS_WIDTH, CANVAS_HEIGHT)

        # Frame timer
        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self.advance_frame)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def simulation(self) -> Optional[ForceSimulation]:
        return self._simulation

    @property
    def states(self) -> tuple[ReasoningState, ...]:
        return self._states

    def is_active(self) -> bool:
        return self._simulation is not None and self.timer.isActive()

    def set_canvas_size(self, width: float, height: float = CANVAS_HEIGHT) -> None:
        self._canvas_size = (float(width), float(height))
        if self._simulation is not None:
            self._simulation.set_canvas_size(width, height)

    def set_states(self, states: Sequence[ReasoningState]) -> None:
        """
        Replace the input sequence.

        The previous simulation is stopped first. An empty sequence leaves no
        active simulation and clears the surface.
        """
        self._stop_active()
        self._states = tuple(states)

        if not self._states:
            logger.info("Empty state sequence, nothing to simulate.")
            self.cleared.emit()
            self.simulation_changed.emit(None)
            return

        graph = build_graph(self._states, max_links=self.config.max_links)
        width, height = self._canvas_size
        self._simulation = ForceSimulation(graph, width=width, height=height, config=self.config)
        self.interaction.attach(self._simulation)

        self.simulation_changed.emit(self._simulation)
        self.timer.start()
        logger.info(f"Started simulation for {len(self._states)} states.")

    def restart(self) -> None:
        """Rebuild from the current states (fresh layout, temperature 1.0)."""
        self.set_states(self._states)

    def shutdown(self) -> None:
        """Stop everything. Must be called when the owning view is torn down."""
        self._stop_active()
        self._states = ()
        self.cleared.emit()

    def advance_frame(self) -> None:
        """One frame: tick the active simulation, then notify the views."""
        sim = self._simulation
        if sim is None:
            # Timer outlived its simulation, should not happen
            self.timer.stop()
            return
        sim.tick()
        self.ticked.emit(sim)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _stop_active(self) -> None:
        self.timer.stop()
        if self._simulation is not None:
            self._simulation.stop()
            self._simulation = None
        self.interaction.attach(None)
