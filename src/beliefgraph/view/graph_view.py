"""
Belief Graph Widget (PyQtGraph)
===============================
The visible surface of the render loop.

Why is this file needed?
------------------------
1. Drawing: On every simulation tick it draws the current frame, links as
   plain lines beneath nodes coloured by belief strength.
2. Gestures: Mouse drags on a node are translated into the three-call
   contract of the InteractionController (start / move / end).
3. Surface size: The width follows the widget, the height is fixed
   (CANVAS_HEIGHT). Resizes are forwarded to the lifecycle manager so the
   centering force targets the real centre.

Classes:
    NodeScatterItem: Scatter item emitting drag signals with node ids.
    GraphView: QWidget holding the plot and the colour legend.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import pyqtgraph as pg
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QResizeEvent
from PySide6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from beliefgraph.config import (
    BACKGROUND_COLOR, CANVAS_HEIGHT, LINK_COLOR, LINK_OPACITY, LINK_WIDTH, NODE_RADIUS
)
from beliefgraph.view.colors import DivergingColorScale
from beliefgraph.view.render import RenderFrame, build_frame

if TYPE_CHECKING:
    from beliefgraph.simulation.engine import ForceSimulation
    from beliefgraph.simulation.lifecycle import LifecycleManager

logger = logging.getLogger(__name__)


class NodeScatterItem(pg.ScatterPlotItem):
    """Scatter plot whose spots can be dragged. Spot data holds the node id."""

    drag_started = Signal(str, object)  # (node_id, (x, y))
    drag_moved = Signal(str, object)
    drag_finished = Signal(str)

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._dragged_id: Optional[str] = None

    def mouseDragEvent(self, ev) -> None:
        if ev.button() != Qt.MouseButton.LeftButton:
            ev.ignore()
            return

        if ev.isStart():
            spots = self.pointsAt(ev.buttonDownPos())
            if len(spots) == 0:
                ev.ignore()
                return
            self._dragged_id = str(spots[0].data())
            start = ev.buttonDownPos()
            self.drag_started.emit(self._dragged_id, (start.x(), start.y()))
        elif self._dragged_id is None:
            ev.ignore()
            return

        if ev.isFinish():
            self.drag_finished.emit(self._dragged_id)
            self._dragged_id = None
        else:
            pos = ev.pos()
            self.drag_moved.emit(self._dragged_id, (pos.x(), pos.y()))
        ev.accept()


class GraphView(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.color_scale = DivergingColorScale()
        self.lifecycle: Optional[LifecycleManager] = None

        self._labels: dict[str, str] = {}
        self._brushes: list[pg.QtGui.QBrush] = []
        self._brushes_for: Optional[ForceSimulation] = None
        self.last_frame: RenderFrame = RenderFrame()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # --- Plot surface ---
        self.plot_widget = pg.PlotWidget(background=BACKGROUND_COLOR)
        self.plot_widget.setFixedHeight(int(CANVAS_HEIGHT))
        self.plot_widget.hideAxis('bottom')
        self.plot_widget.hideAxis('left')
        self.plot_widget.setMenuEnabled(False)
        self.plot_widget.hideButtons()

        view_box = self.plot_widget.getViewBox()
        view_box.setMouseEnabled(x=False, y=False)
        view_box.invertY(True)  # canvas coordinates, y grows downwards
        view_box.disableAutoRange()

        link_color = pg.mkColor(LINK_COLOR)
        link_color.setAlphaF(LINK_OPACITY)
        self.link_item = pg.PlotCurveItem(pen=pg.mkPen(link_color, width=LINK_WIDTH), connect='pairs')
        self.link_item.setZValue(0)

        self.node_item = NodeScatterItem(
            size=2 * NODE_RADIUS,
            pxMode=True,
            pen=pg.mkPen('#0f172a', width=1),
            hoverable=True,
            tip=self._tooltip,
        )
        self.node_item.setZValue(1)

        self.plot_widget.addItem(self.link_item)
        self.plot_widget.addItem(self.node_item)
        layout.addWidget(self.plot_widget)

        # --- Legend ---
        legend = QHBoxLayout()
        legend.addWidget(QLabel("Contradiction (Red)"))
        legend.addStretch()
        legend.addWidget(QLabel("Belief State Progression"))
        legend.addStretch()
        legend.addWidget(QLabel("Consistency (Green)"))
        layout.addLayout(legend)

        self._apply_range()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def attach(self, lifecycle: LifecycleManager) -> None:
        """Subscribe to a lifecycle manager and route drags to its controller."""
        self.lifecycle = lifecycle
        lifecycle.ticked.connect(self.draw)
        lifecycle.cleared.connect(self.clear)

        interaction = lifecycle.interaction
        self.node_item.drag_started.connect(interaction.drag_start)
        self.node_item.drag_moved.connect(interaction.drag_move)
        self.node_item.drag_finished.connect(interaction.drag_end)

        lifecycle.set_canvas_size(self.canvas_width())

    def canvas_width(self) -> float:
        return float(max(1, self.plot_widget.width()))

    def draw(self, simulation: Optional[ForceSimulation]) -> None:
        frame = build_frame(simulation, self.color_scale)
        self.last_frame = frame
        if frame.is_empty:
            self.clear()
            return

        if simulation is not self._brushes_for:
            self._brushes = [pg.mkBrush(*(int(c) for c in rgba)) for rgba in frame.colors]
            self._labels = dict(zip(frame.ids, frame.labels))
            self._brushes_for = simulation

        self.link_item.setData(x=frame.segments[:, 0], y=frame.segments[:, 1], connect='pairs')
        self.node_item.setData(pos=frame.positions, data=frame.ids, brush=self._brushes)

    def clear(self) -> None:
        self.node_item.clear()
        self.link_item.setData(x=[], y=[])
        self._labels = {}
        self._brushes = []
        self._brushes_for = None
        self.last_frame = RenderFrame()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _tooltip(self, x: float, y: float, data: object) -> str:
        return self._labels.get(str(data), str(data))

    def _apply_range(self) -> None:
        self.plot_widget.setRange(xRange=(0, self.canvas_width()), yRange=(0, CANVAS_HEIGHT), padding=0)

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._apply_range()
        if self.lifecycle is not None:
            self.lifecycle.set_canvas_size(self.canvas_width())
