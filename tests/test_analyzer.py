"""
Unit tests for the model-backed analyzer and result model.
"""
import json
from dataclasses import FrozenInstanceError
from unittest.mock import Mock

import pytest

from message_agent.analyzer import AnalysisResult, ModelBackedAnalyzer, SYSTEM_PROMPT
from message_agent.analyzer.model import build_user_prompt
from message_agent.analyzer.models import clamp_score, normalize_risk_level


class TestPromptConstruction:
    """Tests for user prompt construction."""

    def test_prompt_includes_message(self):
        """Test that the prompt carries the message."""
        prompt = build_user_prompt("Need a quote for 50 seats")

        assert prompt.startswith("Message to analyze:\nNeed a quote for 50 seats\n")
        assert prompt.endswith("Provide a complete business intelligence analysis.")

    def test_prompt_includes_metadata(self):
        """Test sender and context lines are added when given."""
        prompt = build_user_prompt("Hi", sender_info="ana@acme.com", context="Renewal")

        assert "Sender Information: ana@acme.com" in prompt
        assert "Business Context: Renewal" in prompt

    def test_prompt_omits_missing_metadata(self):
        """Test absent metadata leaves no empty labels."""
        prompt = build_user_prompt("Hi")

        assert "Sender Information" not in prompt
        assert "Business Context" not in prompt

    def test_system_prompt_requests_schema(self):
        """Test the system prompt names every wire field."""
        for name in ("riskLevel", "reason", "businessImpact", "recommendedAction",
                     "suggestedReply", "leadQualityScore", "businessInsight"):
            assert name in SYSTEM_PROMPT


class TestModelBackedAnalyzer:
    """Tests for ModelBackedAnalyzer (completion mocked)."""

    def test_completion_called_with_prompts(self):
        """Test the completion callable gets system and user prompts."""
        complete = Mock(return_value='{"riskLevel": "Safe"}')
        analyzer = ModelBackedAnalyzer("mock", complete)

        analyzer.analyze("Hello", "bob@x.com")

        system, user = complete.call_args.args
        assert system == SYSTEM_PROMPT
        assert "Sender Information: bob@x.com" in user

    def test_prose_output_parsed(self):
        """Test labelled prose is parsed when the model ignores JSON."""
        analyzer = ModelBackedAnalyzer(
            "mock", lambda s, u: "Risk Level: Suspicious\nReason: odd request"
        )

        result = analyzer.analyze("Hello")

        assert result.risk_level == "Suspicious"
        assert result.reason == "odd request"

    def test_empty_output_raises(self):
        """Test blank output is reported to the caller."""
        analyzer = ModelBackedAnalyzer("mock", lambda s, u: "")

        with pytest.raises(ValueError, match="Empty output"):
            analyzer.analyze("Hello")

    def test_transport_errors_propagate(self):
        """Test completion exceptions are not swallowed."""
        analyzer = ModelBackedAnalyzer("mock", Mock(side_effect=TimeoutError("slow")))

        with pytest.raises(TimeoutError):
            analyzer.analyze("Hello")


class TestAnalysisResult:
    """Tests for the AnalysisResult model."""

    @pytest.fixture
    def result(self):
        return AnalysisResult(
            risk_level="Safe",
            reason="r",
            business_impact="i",
            recommended_action="a",
            business_insight="b",
        )

    def test_wire_shape(self, result):
        """Test to_dict uses the JSON field names and omits an unset reply."""
        assert result.to_dict() == {
            "riskLevel": "Safe",
            "reason": "r",
            "businessImpact": "i",
            "recommendedAction": "a",
            "leadQualityScore": 0,
            "businessInsight": "b",
        }

    def test_reply_included_when_set(self):
        """Test suggestedReply appears when present."""
        result = AnalysisResult("Safe", "r", "i", "a", "b", suggested_reply="Hi")

        assert json.loads(result.to_json())["suggestedReply"] == "Hi"

    def test_from_dict(self, result):
        """Test building a result from the wire shape."""
        assert AnalysisResult.from_dict(result.to_dict()) == result

    def test_immutable(self, result):
        """Test results cannot be modified."""
        with pytest.raises(FrozenInstanceError):
            result.reason = "changed"

    def test_invariants_enforced(self):
        """Test risk level and score are normalized on construction."""
        result = AnalysisResult("safe", "r", "i", "a", "b", lead_quality_score=42)

        assert result.risk_level == "Safe"
        assert result.lead_quality_score == 10

    def test_is_lead(self, result):
        """Test only positive scores count as leads."""
        assert result.is_lead is False
        assert AnalysisResult("Safe", "r", "i", "a", "b", lead_quality_score=3).is_lead


class TestNormalization:
    """Tests for risk level and score normalization helpers."""

    @pytest.mark.parametrize("value,expected", [
        ("Safe", "Safe"),
        ("  SUSPICIOUS ", "Suspicious"),
        ("High   Risk Fraud", "High Risk Fraud"),
        ("fraud", "Unknown"),
        (None, "Unknown"),
        (3, "Unknown"),
    ])
    def test_normalize_risk_level(self, value, expected):
        assert normalize_risk_level(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (5, 5),
        (11, 10),
        (-1, 0),
        ("8", 8),
        ("9.5", 9),
        (None, 0),
        (True, 0),
        ("", 0),
    ])
    def test_clamp_score(self, value, expected):
        assert clamp_score(value) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
