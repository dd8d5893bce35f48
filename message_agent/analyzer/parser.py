"""
Model response parser.

Turns free-form model output into an AnalysisResult in two stages:
- embedded JSON object (the format the prompt asks for)
- "Label: value" lines, for models that answer in prose anyway

Never raises. Whatever cannot be recovered is filled with placeholder text.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from .models import AnalysisResult, UNKNOWN

logger = logging.getLogger(__name__)


DEFAULT_REASON = "No reason provided"
DEFAULT_IMPACT = "No impact assessment provided"
DEFAULT_ACTION = "No action recommended"
DEFAULT_INSIGHT = "No insight provided"

# Largest {...} block; good enough for single-object outputs
JSON_BLOCK = re.compile(r"\{[\s\S]*\}")

# Checked in order against each stripped line
LABELS = [
    ("risk_level", re.compile(r"^Risk Level:", re.IGNORECASE)),
    ("reason", re.compile(r"^Reason:", re.IGNORECASE)),
    ("business_impact", re.compile(r"^Business Impact:", re.IGNORECASE)),
    ("recommended_action", re.compile(r"^Recommended Action:", re.IGNORECASE)),
    # "Suggested Reply:", "Suggested Reply (Neutral):", or without a colon only
    # the bare label and an optional "(tone)" suffix
    ("suggested_reply", re.compile(
        r"^Suggested Reply(?:[^:]*:|(?:\s*\([^)]*\))?)", re.IGNORECASE
    )),
    ("lead_quality_score", re.compile(r"^Lead Quality Score", re.IGNORECASE)),
    ("business_insight", re.compile(r"^Business Insight:", re.IGNORECASE)),
]

# At most 4 digits are kept; the score is clamped to 10 anyway
FIRST_INTEGER = re.compile(r"(\d{1,4})\d*")


class ResponseParser:
    """Normalizes raw model output into an AnalysisResult."""

    def parse(self, text: str) -> AnalysisResult:
        """Parse model output, preferring embedded JSON over labelled lines."""
        result = self.parse_json(text)
        if result is not None:
            return result
        return self.parse_labels(text)

    # ----------------------------
    # Stage 1: JSON
    # ----------------------------

    def parse_json(self, text: str) -> Optional[AnalysisResult]:
        """Extract and map the embedded JSON object, or None if there isn't a usable one."""
        match = JSON_BLOCK.search(text or "")
        if not match:
            return None

        candidate = match.group(0)
        try:
            data = self._load_object(candidate)
        except ValueError as e:
            logger.warning("JSON parsing failed, falling back to label scan: %s", e)
            return None

        return AnalysisResult(
            risk_level=data.get("riskLevel") or UNKNOWN,
            reason=self._text(data.get("reason")) or DEFAULT_REASON,
            business_impact=self._text(data.get("businessImpact")) or DEFAULT_IMPACT,
            recommended_action=self._text(data.get("recommendedAction")) or DEFAULT_ACTION,
            suggested_reply=self._text(data.get("suggestedReply")) or None,
            lead_quality_score=data.get("leadQualityScore") or 0,
            business_insight=self._text(data.get("businessInsight")) or DEFAULT_INSIGHT,
        )

    def _load_object(self, candidate: str) -> Dict[str, Any]:
        try:
            data = json.loads(candidate)
        except (json.JSONDecodeError, RecursionError):
            # Retry once with the usual model formatting slips repaired
            try:
                data = json.loads(self._sanitize_common_json_issues(candidate))
            except (json.JSONDecodeError, RecursionError) as e:
                raise ValueError(f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return data

    @staticmethod
    def _sanitize_common_json_issues(s: str) -> str:
        """
        Minimal, safe sanitization.
        Avoid dangerous transforms like replacing all apostrophes globally.
        """
        s = s.lstrip("\ufeff")
        s = s.replace("“", '"').replace("”", '"').replace("’", "'")
        # Trailing commas before } or ]
        s = re.sub(r",\s*([}\]])", r"\1", s)
        return s

    @staticmethod
    def _text(value: Any) -> str:
        """Render a decoded JSON value as text; lists become one item per line."""
        if value is None or value is False:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            return "\n".join(str(item) for item in value)
        return str(value)

    # ----------------------------
    # Stage 2: labelled lines
    # ----------------------------

    def parse_labels(self, text: str) -> AnalysisResult:
        """Scan "Label: value" lines. Lines before the first label are dropped."""
        fields: Dict[str, Any] = {
            "risk_level": UNKNOWN,
            "reason": "",
            "business_impact": "",
            "recommended_action": "",
            "business_insight": "",
            "suggested_reply": None,
            "lead_quality_score": None,
        }
        current = None

        for line in (text or "").split("\n"):
            line = line.strip()
            if not line:
                continue

            label = self._match_label(line)
            if label:
                current, pattern = label
                if current == "lead_quality_score":
                    score = FIRST_INTEGER.search(line)
                    if score:
                        fields[current] = int(score.group(1))
                    continue
                value = pattern.sub("", line, count=1).strip()
                if current == "suggested_reply":
                    fields[current] = value or None
                else:
                    fields[current] = value
                continue

            if current is None or current == "lead_quality_score":
                continue
            if current == "suggested_reply":
                fields[current] = self._join(fields[current], line, "\n")
            else:
                fields[current] = self._join(fields[current], line, " ")

        return AnalysisResult(
            risk_level=fields["risk_level"],
            reason=fields["reason"] or DEFAULT_REASON,
            business_impact=fields["business_impact"] or DEFAULT_IMPACT,
            recommended_action=fields["recommended_action"] or DEFAULT_ACTION,
            suggested_reply=fields["suggested_reply"],
            lead_quality_score=fields["lead_quality_score"] or 0,
            business_insight=fields["business_insight"] or DEFAULT_INSIGHT,
        )

    @staticmethod
    def _match_label(line: str):
        for name, pattern in LABELS:
            if pattern.match(line):
                return name, pattern
        return None

    @staticmethod
    def _join(current: Optional[str], line: str, sep: str) -> str:
        return f"{current}{sep}{line}" if current else line
