"""
Graph Builder Tests
===================
Layer construction, complete bipartite linking and duplicate tolerance.
"""
import pytest

from beliefgraph.model.graph import build_graph, node_id
from beliefgraph.model.states import ReasoningState

from conftest import make_states


class TestBuildGraph:

    def test_node_count_and_ids(self, states_232):
        graph = build_graph(states_232)

        assert len(graph.nodes) == 2 + 3 + 2
        assert "N0-0" in graph.nodes
        assert "N2-1" in graph.nodes
        assert "N1-2" in graph.nodes
        for nid, node in graph.nodes.items():
            assert nid == f"{node.label}-{node.step_index}"

    def test_link_count_is_sum_of_adjacent_products(self, states_232):
        graph = build_graph(states_232)
        assert len(graph.links) == 2 * 3 + 3 * 2

    @pytest.mark.parametrize("counts", [[1], [4, 1], [3, 3, 3, 3], [5, 0, 2]])
    def test_link_count_general(self, counts):
        graph = build_graph(make_states(counts))
        expected = sum(a * b for a, b in zip(counts, counts[1:]))
        assert len(graph.links) == expected

    def test_links_only_join_adjacent_layers(self, states_232):
        graph = build_graph(states_232)
        for link in graph.links:
            source = graph.nodes[link.source_id]
            target = graph.nodes[link.target_id]
            assert target.step_index == source.step_index + 1

    def test_empty_input(self):
        graph = build_graph([])
        assert graph.is_empty()
        assert graph.links == []

    def test_value_copies_belief_strength(self):
        states = [
            ReasoningState(0.2, ("A",)),
            ReasoningState(0.9, ("B", "C")),
        ]
        graph = build_graph(states)
        assert graph.nodes["A-0"].value == 0.2
        assert graph.nodes["B-1"].value == 0.9
        assert graph.nodes["C-1"].value == 0.9

    def test_duplicate_labels_overwrite_without_error(self):
        states = [
            ReasoningState(0.5, ("A", "A", "B")),
            ReasoningState(0.5, ("C",)),
        ]
        graph = build_graph(states)

        assert set(graph.nodes) == {"A-0", "B-0", "C-1"}
        # one link per combination, duplicates included
        assert len(graph.links) == 3

    def test_same_label_in_different_layers_gives_distinct_nodes(self):
        states = [ReasoningState(0.5, ("A",)), ReasoningState(0.5, ("A",))]
        graph = build_graph(states)
        assert set(graph.nodes) == {"A-0", "A-1"}

    def test_rebuild_is_idempotent(self, states_232):
        first = build_graph(states_232)
        second = build_graph(states_232)

        assert set(first.nodes) == set(second.nodes)
        assert len(first.links) == len(second.links)
        assert first.links == second.links
        # fresh node objects every rebuild
        assert first.nodes["N0-0"] is not second.nodes["N0-0"]

    def test_link_cap(self, states_232):
        graph = build_graph(states_232, max_links=5)
        assert len(graph.links) == 5
        assert len(graph.nodes) == 7

    def test_layers(self, states_232):
        layers = build_graph(states_232).layers()
        assert sorted(layers) == [0, 1, 2]
        assert [len(layers[i]) for i in range(3)] == [2, 3, 2]

    def test_node_id_format(self):
        assert node_id("N-12", 3) == "N-12-3"
