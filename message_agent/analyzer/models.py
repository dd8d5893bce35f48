"""Analysis result models."""

import json
from dataclasses import dataclass
from typing import Any, Optional

SAFE = "Safe"
SUSPICIOUS = "Suspicious"
HIGH_RISK_FRAUD = "High Risk Fraud"
UNKNOWN = "Unknown"

RISK_LEVELS = (SAFE, SUSPICIOUS, HIGH_RISK_FRAUD, UNKNOWN)

MIN_SCORE = 0
MAX_SCORE = 10

# Wire name -> attribute name
FIELD_NAMES = {
    "riskLevel": "risk_level",
    "reason": "reason",
    "businessImpact": "business_impact",
    "recommendedAction": "recommended_action",
    "suggestedReply": "suggested_reply",
    "leadQualityScore": "lead_quality_score",
    "businessInsight": "business_insight",
}


def normalize_risk_level(value: Any) -> str:
    """Map any spelling of a known risk level to its canonical form, else Unknown."""
    if not isinstance(value, str):
        return UNKNOWN
    wanted = " ".join(value.split()).lower()
    for level in RISK_LEVELS:
        if level.lower() == wanted:
            return level
    return UNKNOWN


def clamp_score(value: Any) -> int:
    """Coerce a lead score to an int in [0, 10]."""
    if isinstance(value, bool):
        return MIN_SCORE
    try:
        if isinstance(value, str):
            value = float(value.strip())
        score = int(value)
    except (TypeError, ValueError, OverflowError):
        return MIN_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, score))


@dataclass(frozen=True)
class AnalysisResult:
    """Result of analyzing a single business message."""
    risk_level: str
    reason: str
    business_impact: str
    recommended_action: str
    business_insight: str
    suggested_reply: Optional[str] = None
    lead_quality_score: int = 0  # 0 = not a scored lead

    def __post_init__(self):
        # Frozen, so go through object.__setattr__ to normalize in place
        object.__setattr__(self, "risk_level", normalize_risk_level(self.risk_level))
        object.__setattr__(self, "lead_quality_score", clamp_score(self.lead_quality_score))

    @property
    def is_lead(self) -> bool:
        return self.lead_quality_score > 0

    def to_dict(self) -> dict:
        """Convert to the JSON response shape (camelCase field names)."""
        data = {}
        for wire_name, attr in FIELD_NAMES.items():
            value = getattr(self, attr)
            if wire_name == "suggestedReply" and value is None:
                continue
            data[wire_name] = value
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        """Build a result from a wire-shaped mapping (no defaults applied)."""
        kwargs = {attr: data[wire] for wire, attr in FIELD_NAMES.items() if wire in data}
        return cls(**kwargs)
