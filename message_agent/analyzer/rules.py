"""
Rule-based fallback analyzer.

Used when no model-backed analyzer is available. Classifies a message by
keyword and pattern matching, then picks each narrative field from an
ordered rule table (first matching predicate wins).
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..config.models import KeywordConfig
from .models import AnalysisResult, SAFE, SUSPICIOUS, HIGH_RISK_FRAUD, MAX_SCORE


URL_PATTERN = re.compile(r"https?://")
URGENCY_PATTERN = re.compile(r"urgent|immediately|asap|right now|act now", re.IGNORECASE)
SENSITIVE_INFO_PATTERN = re.compile(
    r"password|account|credit card|ssn|social security", re.IGNORECASE
)

BASE_LEAD_SCORE = 5
LONG_MESSAGE_CHARS = 200


@dataclass(frozen=True)
class MessageSignals:
    """Lexical signals detected in a message."""
    is_fraud: bool = False
    is_sales: bool = False
    is_complaint: bool = False
    has_url: bool = False
    has_urgency: bool = False
    requests_info: bool = False

    @classmethod
    def detect(cls, message: str, keywords: KeywordConfig) -> "MessageSignals":
        lowered = message.lower()
        return cls(
            is_fraud=any(kw.lower() in lowered for kw in keywords.fraud),
            is_sales=any(kw.lower() in lowered for kw in keywords.sales),
            is_complaint=any(kw.lower() in lowered for kw in keywords.complaint),
            has_url=bool(URL_PATTERN.search(message)),
            has_urgency=bool(URGENCY_PATTERN.search(message)),
            requests_info=bool(SENSITIVE_INFO_PATTERN.search(message)),
        )


# (signals, risk_level) -> bool
Predicate = Callable[[MessageSignals, str], bool]


def _always(signals: MessageSignals, risk: str) -> bool:
    return True


RISK_RULES: List[Tuple[Callable[[MessageSignals], bool], str, str]] = [
    (
        lambda s: (s.is_fraud or (s.has_urgency and s.requests_info)) and s.has_url,
        HIGH_RISK_FRAUD,
        "Message contains multiple fraud indicators: urgency pressure, requests for "
        "sensitive information, and external links. Pattern consistent with phishing "
        "or social engineering attacks.",
    ),
    (
        lambda s: s.has_urgency or s.requests_info or (s.has_url and s.is_fraud),
        SUSPICIOUS,
        "Message contains potential risk indicators such as urgency language, requests "
        "for information, or suspicious links. Requires careful verification before "
        "responding.",
    ),
]

SAFE_REASON = (
    "Message appears to be a normal business communication with no obvious risk indicators."
)

IMPACT_RULES: List[Tuple[Predicate, str]] = [
    (
        lambda s, risk: risk == HIGH_RISK_FRAUD,
        "High risk of financial loss, data breach, or security compromise. Could lead to "
        "unauthorized access to systems, financial accounts, or sensitive business "
        "information.",
    ),
    (
        lambda s, risk: risk == SUSPICIOUS,
        "Moderate risk of security incident or fraud. Could potentially lead to data "
        "exposure or financial loss if not properly verified.",
    ),
    (
        lambda s, risk: s.is_complaint,
        "Customer satisfaction and reputation risk. Requires prompt attention to prevent "
        "escalation and negative reviews.",
    ),
    (
        lambda s, risk: s.is_sales,
        "Potential revenue opportunity. Timely response could lead to new business.",
    ),
    (_always, "Minimal risk to business operations."),
]

ACTION_RULES: List[Tuple[Predicate, str]] = [
    (
        lambda s, risk: risk == HIGH_RISK_FRAUD,
        "DO NOT RESPOND. Do not click any links. Report to IT security team immediately. "
        "Block sender and mark as spam.",
    ),
    (
        lambda s, risk: risk == SUSPICIOUS,
        "Verify sender identity through separate communication channel before responding. "
        "Do not click links or provide information. Consult security team if uncertain.",
    ),
    (
        lambda s, risk: s.is_complaint,
        "Respond within 24 hours. Acknowledge issue, apologize, and offer resolution. "
        "Escalate to customer service manager if needed.",
    ),
    (
        lambda s, risk: s.is_sales,
        "Follow up within 24-48 hours. Qualify lead by understanding needs, budget, and "
        "timeline. Schedule discovery call if appropriate.",
    ),
    (
        _always,
        "Respond professionally within 1-2 business days. Address inquiry directly and "
        "provide requested information.",
    ),
]

SALES_REPLY = """Thank you for your interest in our services. I'd be happy to discuss how we can help meet your needs.

Could you provide more details about:
- Your specific requirements
- Timeline for implementation
- Budget considerations

I'm available for a brief call this week to explore further. Please let me know your availability.

Best regards"""

APOLOGY_REPLY = """Thank you for bringing this to our attention. I sincerely apologize for any inconvenience you've experienced.

We take these matters seriously and would like to resolve this as quickly as possible. Could you please provide additional details so we can investigate and address your concerns?

I'm personally committed to ensuring we find a satisfactory resolution.

Best regards"""

GENERIC_REPLY = """Thank you for reaching out.

[Address the specific inquiry or request here]

Please let me know if you need any additional information.

Best regards"""

# No match -> no suggested reply
REPLY_RULES: List[Tuple[Predicate, str]] = [
    (lambda s, risk: risk == SAFE and s.is_sales, SALES_REPLY),
    (lambda s, risk: s.is_complaint, APOLOGY_REPLY),
    (lambda s, risk: risk == SAFE, GENERIC_REPLY),
]

# Sales insight is formatted with the lead score
INSIGHT_RULES: List[Tuple[Predicate, str]] = [
    (
        lambda s, risk: s.is_sales,
        "This appears to be a sales opportunity. Lead quality: {score}/10. Priority "
        "response recommended to maximize conversion potential.",
    ),
    (
        lambda s, risk: s.is_complaint,
        "Customer retention risk. Immediate empathetic response required. This is an "
        "opportunity to demonstrate excellent customer service and prevent negative "
        "publicity.",
    ),
    (
        lambda s, risk: risk == HIGH_RISK_FRAUD,
        "Security threat detected. This message follows common fraud patterns. Employee "
        "training on security awareness is recommended to prevent future incidents.",
    ),
    (
        lambda s, risk: risk == SUSPICIOUS,
        "Exercise caution. Verify authenticity before engagement. Implement sender "
        "verification protocols for similar messages.",
    ),
    (
        _always,
        "Standard business communication. Respond professionally and maintain service "
        "level standards for response time.",
    ),
]


def first_match(rules: List[Tuple[Predicate, str]], signals: MessageSignals, risk: str) -> Optional[str]:
    """Return the outcome of the first rule whose predicate holds."""
    for predicate, outcome in rules:
        if predicate(signals, risk):
            return outcome
    return None


def classify_risk(signals: MessageSignals) -> Tuple[str, str]:
    """Return (risk_level, reason)."""
    for predicate, level, reason in RISK_RULES:
        if predicate(signals):
            return level, reason
    return SAFE, SAFE_REASON


def score_lead(message: str, signals: MessageSignals, risk: str) -> int:
    """Heuristic 0-10 lead score; only safe sales inquiries are scored."""
    if not (signals.is_sales and risk == SAFE):
        return 0

    lowered = message.lower()
    score = BASE_LEAD_SCORE
    if "budget" in lowered:
        score += 2
    if "timeline" in lowered or "when" in lowered:
        score += 1
    if "demo" in lowered or "meeting" in lowered:
        score += 1
    if len(message) > LONG_MESSAGE_CHARS:
        score += 1
    return min(score, MAX_SCORE)


class RuleBasedAnalyzer:
    """Deterministic keyword/pattern analyzer."""

    name = "rule-based"

    def __init__(self, keywords: Optional[KeywordConfig] = None):
        self.keywords = keywords or KeywordConfig()

    def analyze(
        self,
        message: str,
        sender_info: Optional[str] = None,
        context: Optional[str] = None,
    ) -> AnalysisResult:
        """Analyze a message. sender_info and context are accepted but not scored."""
        message = message or ""
        signals = MessageSignals.detect(message, self.keywords)
        risk, reason = classify_risk(signals)
        score = score_lead(message, signals, risk)

        return AnalysisResult(
            risk_level=risk,
            reason=reason,
            business_impact=first_match(IMPACT_RULES, signals, risk),
            recommended_action=first_match(ACTION_RULES, signals, risk),
            suggested_reply=first_match(REPLY_RULES, signals, risk),
            lead_quality_score=score,
            business_insight=first_match(INSIGHT_RULES, signals, risk).format(score=score),
        )
