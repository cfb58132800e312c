"""
Input/Output Manager (JSON)
Handles reading and writing reasoning traces to .json files.

Two document shapes are accepted when loading:
    - a bare list of state objects: ``[{"beliefStrength": ...}, ...]``
    - a full analysis result: ``{"status": 1, "rationale": ..., "internalStates": [...]}``
"""
import json
import logging
from typing import Any, List, Sequence

from beliefgraph.model.states import AnalysisResult, ReasoningState, StateFormatError

logger = logging.getLogger(__name__)


class IOManager:

    @staticmethod
    def parse_document(document: Any) -> AnalysisResult:
        """Convert already decoded JSON into an AnalysisResult."""
        if isinstance(document, list):
            states = tuple(ReasoningState.from_dict(s) for s in document)
            return AnalysisResult(internal_states=states)
        if isinstance(document, dict):
            return AnalysisResult.from_dict(document)
        raise StateFormatError(
            f"Expected a list of states or an analysis object, got {type(document).__name__}."
        )

    @staticmethod
    def loads(text: str) -> AnalysisResult:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise StateFormatError(f"Invalid JSON: {e}") from e
        return IOManager.parse_document(document)

    @staticmethod
    def load(filepath: str) -> AnalysisResult:
        logger.info(f"Loading reasoning trace from: {filepath}")
        with open(filepath, "r", encoding="utf-8") as f:
            text = f.read()
        result = IOManager.loads(text)
        logger.info(f"Loaded {len(result.internal_states)} reasoning states.")
        return result

    @staticmethod
    def save(result: AnalysisResult, filepath: str) -> None:
        logger.info(f"Saving reasoning trace to: {filepath}")
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)

    @staticmethod
    def dump_states(states: Sequence[ReasoningState]) -> str:
        """Serialize a bare state sequence (the list shape)."""
        payload: List[dict] = [s.to_dict() for s in states]
        return json.dumps(payload, indent=2, ensure_ascii=False)
