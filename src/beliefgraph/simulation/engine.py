"""
Force Simulation Engine
=======================
Iterative force-directed layout of a layered belief graph.

Why is this file needed?
------------------------
The graph builder only produces topology. This module turns it into positions
by integrating three forces every tick:

1. Link springs pulling connected nodes toward ``link_distance``.
2. All-pairs repulsion with inverse-square falloff (``charge_strength``).
3. Centering of the centre of mass on the canvas centre.

Forces are scaled by the *temperature* (simulated annealing). Temperature
starts at 1.0 and decays geometrically toward its target; a drag gesture
raises the target ("reheat") so the layout becomes lively again.

The engine does not schedule itself. Ticks are driven by the lifecycle
manager's frame timer; ``stop()`` makes every later ``tick()`` a no-op.

Classes:
    ForceSimulation: One simulation instance owning one graph snapshot.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple, TYPE_CHECKING

import numpy as np

from beliefgraph.config import CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, SimulationConfig
from beliefgraph.model.graph import Graph, Node

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Golden angle, used for the initial spiral placement
_GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))
_INITIAL_RADIUS = 10.0


class ForceSimulation:
    """
    A single simulation instance.

    Nodes are the ``Node`` objects of the graph snapshot and are mutated in
    place, so renderers and the interaction controller observe and edit the
    same objects.
    """

    def __init__(
        self,
        graph: Graph,
        width: float = DEFAULT_CANVAS_WIDTH,
        height: float = CANVAS_HEIGHT,
        config: Optional[SimulationConfig] = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.graph = graph
        self.nodes: List[Node] = graph.node_list()
        self.links = graph.links

        self.width = float(width)
        self.height = float(height)

        self.temperature: float = self.config.initial_temperature
        self.temperature_target: float = 0.0
        self.running: bool = True
        self.tick_count: int = 0

        self._index = {node.id: i for i, node in enumerate(self.nodes)}
        self._rng = np.random.default_rng(self.config.seed)

        self._link_source, self._link_target = self._resolve_links()
        self._link_strength, self._link_bias = self._link_coefficients()

        self._seed_positions()
        logger.info(f"Simulation created: {len(self.nodes)} nodes, {len(self._link_source)} links.")

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    @property
    def settled(self) -> bool:
        return self.temperature < self.config.temperature_min

    def node(self, node_id: str) -> Optional[Node]:
        """Return the node with the given id, or None if it is not part of this simulation."""
        i = self._index.get(node_id)
        return None if i is None else self.nodes[i]

    def set_canvas_size(self, width: float, height: float = CANVAS_HEIGHT) -> None:
        """Move the centering target after the drawing surface was resized."""
        self.width = float(width)
        self.height = float(height)

    def reheat(self, target: Optional[float] = None) -> None:
        """Raise the temperature floor so cooling stops short of zero."""
        if target is None:
            target = self.config.reheat_target
        self.temperature_target = min(max(float(target), 0.0), 1.0)

    def release(self) -> None:
        """Drop the temperature floor back to zero, cooling resumes."""
        self.temperature_target = 0.0

    def stop(self) -> None:
        """Halt the simulation. Safe to call repeatedly."""
        if not self.running:
            return
        self.running = False
        logger.info(f"Simulation stopped after {self.tick_count} ticks.")

    def tick(self) -> None:
        """
        Advance the simulation by one step.

        Applies all forces at the current temperature, integrates velocities
        into positions, then decays the temperature toward its target.
        """
        if not self.running:
            return
        if self.nodes:
            self._step()
        self._cool()
        self.tick_count += 1

    # ------------------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------------------

    def _resolve_links(self) -> Tuple[npt.NDArray[np.int_], npt.NDArray[np.int_]]:
        sources: List[int] = []
        targets: List[int] = []
        for link in self.links:
            s = self._index.get(link.source_id)
            t = self._index.get(link.target_id)
            if s is None or t is None:
                logger.debug(f"Dropping link with unknown endpoint: {link}")
                continue
            sources.append(s)
            targets.append(t)
        return np.asarray(sources, dtype=np.int_), np.asarray(targets, dtype=np.int_)

    def _link_coefficients(self) -> Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Spring stiffness and displacement split per link.

        Stiffness is ``1 / min(degree)`` so hubs are not torn apart. The bias
        moves the lower-degree endpoint more than the higher-degree one.
        """
        n = len(self.nodes)
        degree = np.bincount(self._link_source, minlength=n) + np.bincount(self._link_target, minlength=n)
        if self._link_source.size == 0:
            empty = np.zeros(0, dtype=np.float64)
            return empty, empty

        deg_s = degree[self._link_source].astype(np.float64)
        deg_t = degree[self._link_target].astype(np.float64)
        strength = 1.0 / np.minimum(deg_s, deg_t)
        bias = deg_s / (deg_s + deg_t)
        return strength, bias

    def _seed_positions(self) -> None:
        """Place nodes on a phyllotaxis spiral around the canvas centre."""
        cx, cy = self.center
        for i, node in enumerate(self.nodes):
            radius = _INITIAL_RADIUS * math.sqrt(0.5 + i)
            angle = i * _GOLDEN_ANGLE
            node.x = cx + radius * math.cos(angle)
            node.y = cy + radius * math.sin(angle)
            node.vx = 0.0
            node.vy = 0.0

    # ------------------------------------------------------------------------------
    # Tick internals
    # ------------------------------------------------------------------------------

    def _step(self) -> None:
        cfg = self.config
        alpha = self.temperature

        pos = np.array([(n.x, n.y) for n in self.nodes], dtype=np.float64)
        vel = np.array([(n.vx, n.vy) for n in self.nodes], dtype=np.float64)

        # state corrupted from outside (or by a previous tick) never enters the forces
        center = np.broadcast_to(np.array(self.center), pos.shape)
        self._guard_non_finite(pos, vel, center)
        previous = pos.copy()

        self._apply_link_force(pos, vel, alpha)
        self._apply_repulsion(pos, vel, alpha)
        self._apply_centering(pos)

        # integrate
        vel *= 1.0 - cfg.velocity_decay
        speed = np.hypot(vel[:, 0], vel[:, 1])
        too_fast = speed > cfg.max_speed
        if np.any(too_fast):
            vel[too_fast] *= (cfg.max_speed / speed[too_fast])[:, None]
        pos += vel

        self._guard_non_finite(pos, vel, previous)

        for i, node in enumerate(self.nodes):
            if node.pin is not None:
                px, py = float(node.pin[0]), float(node.pin[1])
                if not (math.isfinite(px) and math.isfinite(py)):
                    # a pin set from outside the controller may be unusable
                    px, py = float(pos[i, 0]), float(pos[i, 1])
                node.x, node.y = px, py
                node.vx = node.vy = 0.0
            else:
                node.x, node.y = float(pos[i, 0]), float(pos[i, 1])
                node.vx, node.vy = float(vel[i, 0]), float(vel[i, 1])

    def _apply_link_force(self, pos: npt.NDArray[np.float64], vel: npt.NDArray[np.float64], alpha: float) -> None:
        if self._link_source.size == 0:
            return
        s, t = self._link_source, self._link_target

        # predicted positions, as the springs act on where nodes are heading
        delta = (pos[t] + vel[t]) - (pos[s] + vel[s])
        coincident = ~np.any(delta, axis=1)
        if np.any(coincident):
            delta[coincident] = self._jiggle((int(coincident.sum()), 2))

        dist = np.hypot(delta[:, 0], delta[:, 1])
        stretch = (dist - self.config.link_distance) / dist * alpha * self._link_strength
        delta *= stretch[:, None]

        np.add.at(vel, t, -delta * self._link_bias[:, None])
        np.add.at(vel, s, delta * (1.0 - self._link_bias)[:, None])

    def _apply_repulsion(self, pos: npt.NDArray[np.float64], vel: npt.NDArray[np.float64], alpha: float) -> None:
        n = pos.shape[0]
        if n < 2:
            return

        # diff[i, j] points from node i to node j
        diff = pos[None, :, :] - pos[:, None, :]
        d2 = np.einsum("ijk,ijk->ij", diff, diff)

        coincident = d2 == 0.0
        np.fill_diagonal(coincident, False)
        if np.any(coincident):
            diff[coincident] = self._jiggle((int(coincident.sum()), 2))
            d2 = np.einsum("ijk,ijk->ij", diff, diff)

        d2 = np.maximum(d2, self.config.min_distance_sq)
        np.fill_diagonal(d2, np.inf)

        weight = self.config.charge_strength * alpha / d2
        vel += np.einsum("ijk,ij->ik", diff, weight)

    def _apply_centering(self, pos: npt.NDArray[np.float64]) -> None:
        cx, cy = self.center
        finite = np.all(np.isfinite(pos), axis=1)
        if not np.any(finite):
            return
        mean = pos[finite].mean(axis=0)
        pos -= mean - np.array([cx, cy])

    def _guard_non_finite(
        self,
        pos: npt.NDArray[np.float64],
        vel: npt.NDArray[np.float64],
        fallback: npt.NDArray[np.float64],
    ) -> None:
        """Zero non-finite velocities, restore non-finite positions from ``fallback``."""
        bad_vel = ~np.all(np.isfinite(vel), axis=1)
        bad_pos = ~np.all(np.isfinite(pos), axis=1)
        if not (np.any(bad_vel) or np.any(bad_pos)):
            return

        logger.warning(
            f"Non-finite state on tick {self.tick_count}: "
            f"{int(bad_pos.sum())} positions, {int(bad_vel.sum())} velocities reset."
        )
        vel[bad_vel] = 0.0
        pos[bad_pos] = fallback[bad_pos]

    def _jiggle(self, shape: Tuple[int, int]) -> npt.NDArray[np.float64]:
        return (self._rng.random(shape) - 0.5) * 1e-6

    def _cool(self) -> None:
        t = self.temperature
        t += (self.temperature_target - t) * self.config.temperature_decay
        self.temperature = min(max(t, 0.0), 1.0)
