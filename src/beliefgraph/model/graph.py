"""
Graph Builder
=============
Pure transform from a sequence of ReasoningStates into the node/link graph
that the force simulation lays out.

Every state becomes a layer of nodes (one per active neuron). Consecutive
layers are connected by a complete bipartite set of links: every active cause
may propagate to every next active effect.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from beliefgraph.model.states import ReasoningState

logger = logging.getLogger(__name__)


def node_id(label: str, step_index: int) -> str:
    return f"{label}-{step_index}"


@dataclass(eq=False)
class Node:
    """
    One active neuron at one reasoning step.

    Position and velocity are mutated in place by the simulation, ``pin`` by
    the interaction controller. Identity is scoped to one simulation.
    """
    id: str
    step_index: int
    label: str
    value: float

    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    pin: Optional[Tuple[float, float]] = None

    @property
    def is_pinned(self) -> bool:
        return self.pin is not None


@dataclass(frozen=True)
class Link:
    source_id: str
    target_id: str


@dataclass
class Graph:
    nodes: Dict[str, Node] = field(default_factory=dict)
    links: List[Link] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    def is_empty(self) -> bool:
        return not self.nodes

    def node_list(self) -> List[Node]:
        return list(self.nodes.values())

    def layers(self) -> Dict[int, List[Node]]:
        """Nodes grouped by step index."""
        grouped: Dict[int, List[Node]] = {}
        for node in self.nodes.values():
            grouped.setdefault(node.step_index, []).append(node)
        return grouped


def _layer_links(states: Sequence[ReasoningState]) -> Iterator[Link]:
    for i in range(len(states) - 1):
        for source in states[i].active_neurons:
            for target in states[i + 1].active_neurons:
                yield Link(node_id(source, i), node_id(target, i + 1))


def build_graph(states: Sequence[ReasoningState], max_links: Optional[int] = None) -> Graph:
    """
    Build the layered graph for a state sequence.

    Args:
        states: Ordered reasoning states, one layer each.
        max_links: Optional cap on the number of generated links.

    Returns:
        Graph with nodes keyed by id. A repeated label within one state maps
        to the same id, the later node replaces the earlier one.
    """
    graph = Graph()
    if not states:
        return graph

    for i, state in enumerate(states):
        for label in state.active_neurons:
            nid = node_id(label, i)
            graph.nodes[nid] = Node(id=nid, step_index=i, label=label, value=state.belief_strength)

    for link in _layer_links(states):
        if max_links is not None and len(graph.links) >= max_links:
            logger.warning(f"Link cap of {max_links} reached, remaining layer links dropped.")
            break
        graph.links.append(link)

    logger.debug(f"Built graph: {len(graph.nodes)} nodes, {len(graph.links)} links, {len(states)} layers.")
    return graph
