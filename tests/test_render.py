"""
Render Frame Tests
==================
Frame extraction is a read-only copy of the simulation state.
"""
import copy

import numpy as np

from beliefgraph.model.graph import build_graph
from beliefgraph.simulation.engine import ForceSimulation
from beliefgraph.view.colors import DivergingColorScale
from beliefgraph.view.render import build_frame


def snapshot(sim):
    return [copy.copy(vars(n)) for n in sim.nodes], list(sim.links)


class TestBuildFrame:

    def test_no_simulation_gives_empty_frame(self):
        frame = build_frame(None, DivergingColorScale())
        assert frame.is_empty
        assert frame.segments.shape == (0, 2)

    def test_frame_matches_simulation(self, states_232):
        sim = ForceSimulation(build_graph(states_232))
        for _ in range(3):
            sim.tick()
        frame = build_frame(sim, DivergingColorScale())

        assert frame.ids == [n.id for n in sim.nodes]
        assert frame.positions.shape == (7, 2)
        assert frame.colors.shape == (7, 4)
        # two endpoints per link
        assert frame.segments.shape == (2 * 12, 2)

        node = sim.node(frame.ids[3])
        assert np.array_equal(frame.positions[3], [node.x, node.y])

    def test_segments_follow_link_endpoints(self, states_232):
        sim = ForceSimulation(build_graph(states_232))
        frame = build_frame(sim, DivergingColorScale())
        link = sim.links[0]
        source, target = sim.node(link.source_id), sim.node(link.target_id)
        assert np.array_equal(frame.segments[0], [source.x, source.y])
        assert np.array_equal(frame.segments[1], [target.x, target.y])

    def test_rendering_does_not_mutate(self, states_232):
        sim = ForceSimulation(build_graph(states_232))
        sim.node("N0-0").pin = (1.0, 2.0)
        before = snapshot(sim)
        build_frame(sim, DivergingColorScale())
        assert snapshot(sim) == before
