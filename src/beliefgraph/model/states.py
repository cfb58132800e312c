"""
Reasoning States (Input Data Model)
===================================
This module defines the records handed to the visualizer by the external
analysis collaborator.

Why is this file needed?
------------------------
1. Immutability: A ReasoningState is given data. The visualizer never edits
   it, it only derives graphs from it.
2. Wire names: The analyzer speaks camelCase JSON (``beliefStrength``,
   ``activeNeurons``, ``updateLabel``). The conversion lives here so the rest
   of the code only sees snake_case attributes.

Classes:
    ReasoningState: One reasoning step (belief strength + active neurons).
    ConsistencyStatus: Verdict of the analysis.
    EvidencePair: One quoted excerpt supporting the verdict.
    AnalysisResult: Verdict, rationale, evidence and the state sequence.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Sequence, Tuple

logger = logging.getLogger(__name__)


class StateFormatError(ValueError):
    """Raised when a state record or analysis document is malformed."""


class ConsistencyStatus(IntEnum):
    CONSISTENT = 1
    CONTRADICT = 0
    PENDING = -1


@dataclass(frozen=True)
class ReasoningState:
    """
    A single step of the reasoning trace.

    ``update_label`` is purely descriptive and is not consumed by the layout.
    """
    belief_strength: float
    active_neurons: Tuple[str, ...] = ()
    update_label: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ReasoningState:
        if not isinstance(data, Mapping):
            raise StateFormatError(f"Expected a JSON object for a state, got {type(data).__name__}.")

        if "beliefStrength" not in data:
            raise StateFormatError("State is missing 'beliefStrength'.")
        try:
            strength = float(data["beliefStrength"])
        except (TypeError, ValueError) as e:
            raise StateFormatError(f"Invalid 'beliefStrength': {data['beliefStrength']!r}") from e

        if not math.isfinite(strength):
            raise StateFormatError(f"Non-finite 'beliefStrength': {strength!r}")
        if not 0.0 <= strength <= 1.0:
            logger.warning(f"beliefStrength {strength} outside [0, 1], clamping.")
            strength = min(max(strength, 0.0), 1.0)

        neurons = data.get("activeNeurons", [])
        if isinstance(neurons, str) or not isinstance(neurons, Sequence):
            raise StateFormatError(f"'activeNeurons' must be a list of labels, got {neurons!r}")

        # 'lastUpdate' is the name used by older analyzer versions
        label = data.get("updateLabel", data.get("lastUpdate", ""))

        return cls(
            belief_strength=strength,
            active_neurons=tuple(str(n) for n in neurons),
            update_label=str(label),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "beliefStrength": self.belief_strength,
            "activeNeurons": list(self.active_neurons),
            "updateLabel": self.update_label,
        }


@dataclass(frozen=True)
class EvidencePair:
    excerpt: str
    claim_id: str
    analysis: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EvidencePair:
        if not isinstance(data, Mapping):
            raise StateFormatError(f"Expected a JSON object for evidence, got {type(data).__name__}.")
        return cls(
            excerpt=str(data.get("excerpt", "")),
            claim_id=str(data.get("claimId", "")),
            analysis=str(data.get("analysis", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"excerpt": self.excerpt, "claimId": self.claim_id, "analysis": self.analysis}


@dataclass(frozen=True)
class AnalysisResult:
    """Output of the external analysis collaborator."""
    status: ConsistencyStatus = ConsistencyStatus.PENDING
    rationale: str = ""
    evidence: Tuple[EvidencePair, ...] = ()
    internal_states: Tuple[ReasoningState, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisResult:
        if not isinstance(data, Mapping):
            raise StateFormatError(f"Expected a JSON object for the analysis, got {type(data).__name__}.")

        raw_status = data.get("status", ConsistencyStatus.PENDING)
        try:
            status = ConsistencyStatus(int(raw_status))
        except (TypeError, ValueError) as e:
            raise StateFormatError(f"Invalid 'status': {raw_status!r}") from e

        states = data.get("internalStates", [])
        evidence = data.get("evidence", [])
        if not isinstance(states, list) or not isinstance(evidence, list):
            raise StateFormatError("'internalStates' and 'evidence' must be lists.")

        return cls(
            status=status,
            rationale=str(data.get("rationale", "")),
            evidence=tuple(EvidencePair.from_dict(e) for e in evidence),
            internal_states=tuple(ReasoningState.from_dict(s) for s in states),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": int(self.status),
            "rationale": self.rationale,
            "evidence": [e.to_dict() for e in self.evidence],
            "internalStates": [s.to_dict() for s in self.internal_states],
        }


def sample_states() -> List[ReasoningState]:
    """
    Fixed five-step trace used by the 'Load Sample' action.

    Deterministic on purpose, so a demo run always lays out the same graph.
    """
    strengths = [0.52, 0.61, 0.38, 0.74, 0.86]
    neurons = [
        ("N-12", "STATE-0"),
        ("N-47", "N-12", "STATE-1"),
        ("N-88", "STATE-2"),
        ("N-47", "N-03", "STATE-3"),
        ("N-91", "STATE-4"),
    ]
    return [
        ReasoningState(
            belief_strength=strength,
            active_neurons=labels,
            update_label=f"Processed Chunk {i + 1}",
        )
        for i, (strength, labels) in enumerate(zip(strengths, neurons))
    ]
