"""
Frame extraction for the render loop.

``build_frame`` is a pure read of the simulation state: it copies positions,
colours and link segments into numpy arrays that a widget can draw. It never
writes to nodes or links.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

import numpy as np

from beliefgraph.view.colors import DivergingColorScale

if TYPE_CHECKING:
    import numpy.typing as npt
    from beliefgraph.simulation.engine import ForceSimulation


@dataclass
class RenderFrame:
    ids: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    positions: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros((0, 2)))
    colors: npt.NDArray[np.uint8] = field(default_factory=lambda: np.zeros((0, 4), dtype=np.uint8))
    # (2 * L, 2) array, consecutive rows are the endpoints of one link
    segments: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros((0, 2)))

    @property
    def is_empty(self) -> bool:
        return not self.ids


def build_frame(simulation: Optional[ForceSimulation], color_scale: DivergingColorScale) -> RenderFrame:
    if simulation is None or not simulation.nodes:
        return RenderFrame()

    nodes = simulation.nodes
    positions = np.array([(n.x, n.y) for n in nodes], dtype=np.float64)
    values = np.array([n.value for n in nodes], dtype=np.float64)

    index = {n.id: i for i, n in enumerate(nodes)}
    endpoints = [
        (index[link.source_id], index[link.target_id])
        for link in simulation.links
        if link.source_id in index and link.target_id in index
    ]
    if endpoints:
        segments = positions[np.asarray(endpoints, dtype=np.int_).reshape(-1)]
    else:
        segments = np.zeros((0, 2))

    return RenderFrame(
        ids=[n.id for n in nodes],
        labels=[n.label for n in nodes],
        positions=positions,
        colors=color_scale.rgba_array(values),
        segments=segments,
    )
