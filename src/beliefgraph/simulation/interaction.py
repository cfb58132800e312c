"""
Interaction Controller
Translates drag gestures on a node into pin constraints on the simulation.

The controller knows nothing about the pointer API. A view calls the three
methods below with a node id and a position in simulation coordinates.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from beliefgraph.model.graph import Node
    from beliefgraph.simulation.engine import ForceSimulation

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class InteractionController:
    def __init__(self, simulation: Optional[ForceSimulation] = None) -> None:
        self.simulation = simulation

    def attach(self, simulation: Optional[ForceSimulation]) -> None:
        """Route later gestures to another simulation (None detaches)."""
        self.simulation = simulation

    def drag_start(self, node_id: str, pos: Point) -> None:
        node = self._lookup(node_id)
        if node is None or not _is_finite(node_id, pos):
            return
        node.pin = (float(pos[0]), float(pos[1]))
        self.simulation.reheat()
        logger.debug(f"Drag start on {node_id} at {node.pin}")

    def drag_move(self, node_id: str, pos: Point) -> None:
        node = self._lookup(node_id)
        if node is None or not _is_finite(node_id, pos):
            return
        node.pin = (float(pos[0]), float(pos[1]))

    def drag_end(self, node_id: str) -> None:
        node = self._lookup(node_id)
        if node is None:
            return
        node.pin = None
        self.simulation.release()
        logger.debug(f"Drag end on {node_id}")

    def _lookup(self, node_id: str) -> Optional[Node]:
        # Gestures may outlive the simulation they started on (rebuild mid-drag)
        if self.simulation is None or not self.simulation.running:
            logger.debug(f"Ignoring gesture on {node_id}: no active simulation.")
            return None
        node = self.simulation.node(node_id)
        if node is None:
            logger.debug(f"Ignoring gesture on unknown node {node_id}.")
        return node


def _is_finite(node_id: str, pos: Point) -> bool:
    if math.isfinite(pos[0]) and math.isfinite(pos[1]):
        return True
    logger.debug(f"Ignoring non-finite drag position {pos} on {node_id}.")
    return False
