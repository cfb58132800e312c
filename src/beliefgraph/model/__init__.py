from beliefgraph.model.states import AnalysisResult, ConsistencyStatus, EvidencePair, ReasoningState, StateFormatError
from beliefgraph.model.graph import Graph, Link, Node, build_graph

__all__ = [
    "AnalysisResult",
    "ConsistencyStatus",
    "EvidencePair",
    "ReasoningState",
    "StateFormatError",
    "Graph",
    "Link",
    "Node",
    "build_graph",
]
