"""
State IO Tests
==============
Parsing of analyzer documents, both shapes, and malformed input.
"""
import json

import pytest

from beliefgraph.model.io import IOManager
from beliefgraph.model.states import (
    AnalysisResult, ConsistencyStatus, ReasoningState, StateFormatError, sample_states
)


class TestReasoningState:

    def test_from_wire_names(self):
        state = ReasoningState.from_dict(
            {"beliefStrength": 0.7, "activeNeurons": ["N-1", "STATE-0"], "updateLabel": "Chunk 1"}
        )
        assert state.belief_strength == 0.7
        assert state.active_neurons == ("N-1", "STATE-0")
        assert state.update_label == "Chunk 1"

    def test_last_update_alias(self):
        state = ReasoningState.from_dict({"beliefStrength": 0.1, "activeNeurons": [], "lastUpdate": "old"})
        assert state.update_label == "old"

    def test_strength_is_clamped(self):
        assert ReasoningState.from_dict({"beliefStrength": 1.4}).belief_strength == 1.0
        assert ReasoningState.from_dict({"beliefStrength": -0.2}).belief_strength == 0.0

    @pytest.mark.parametrize("data", [
        {},
        {"beliefStrength": "high"},
        {"beliefStrength": float("nan")},
        {"beliefStrength": 0.5, "activeNeurons": "N-1"},
        ["not", "an", "object"],
    ])
    def test_malformed_state(self, data):
        with pytest.raises(StateFormatError):
            ReasoningState.from_dict(data)


class TestIOManager:

    def test_bare_list(self):
        result = IOManager.loads(json.dumps([{"beliefStrength": 0.5, "activeNeurons": ["A"]}]))
        assert result.status == ConsistencyStatus.PENDING
        assert len(result.internal_states) == 1

    def test_analysis_document(self):
        doc = {
            "status": 0,
            "rationale": "contradiction in chapter 3",
            "evidence": [{"excerpt": "quote", "claimId": "c1", "analysis": "why"}],
            "internalStates": [{"beliefStrength": 0.2, "activeNeurons": ["A", "B"]}],
        }
        result = IOManager.loads(json.dumps(doc))
        assert result.status == ConsistencyStatus.CONTRADICT
        assert result.evidence[0].claim_id == "c1"
        assert result.internal_states[0].active_neurons == ("A", "B")

    @pytest.mark.parametrize("text", ["{not json", "42", '{"status": "maybe"}', '{"internalStates": {}}'])
    def test_malformed_documents(self, text):
        with pytest.raises(StateFormatError):
            IOManager.loads(text)

    def test_save_and_load_file(self, tmp_path):
        original = AnalysisResult(
            status=ConsistencyStatus.CONSISTENT,
            rationale="fits",
            internal_states=tuple(sample_states()),
        )
        path = tmp_path / "trace.json"
        IOManager.save(original, str(path))

        assert IOManager.load(str(path)) == original

    def test_dump_states_is_bare_list(self):
        text = IOManager.dump_states(sample_states())
        assert isinstance(json.loads(text), list)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            IOManager.load(str(tmp_path / "nope.json"))

    def test_bundled_sample_trace_loads(self):
        from beliefgraph.config import SAMPLES_PATH
        import os
        result = IOManager.load(os.path.join(SAMPLES_PATH, "sample_trace.json"))
        assert len(result.internal_states) == 5
