"""
Model-backed analyzer.

Builds the business-intelligence prompt, hands it to a completion callable
supplied by the host application, and parses whatever text comes back.
This module does no network I/O itself.
"""

from typing import Callable, Optional

from .models import AnalysisResult
from .parser import ResponseParser


# (system_prompt, user_prompt) -> raw model text
CompletionFn = Callable[[str, str], str]


SYSTEM_PROMPT = """You are an Advanced Business Intelligence AI Agent built for professional and enterprise use.

Your core objectives are to make business communication safer, faster, and smarter.

Your responsibilities include:

1. Message & Intent Analysis
- Analyze incoming business messages, emails, chats, leads, and inquiries.
- Identify the true intent: inquiry, sales lead, complaint, support request, negotiation, or risk.

2. Risk & Fraud Detection
- Detect fraud, scam, phishing, fake payments, impersonation, social engineering, or manipulation.
- Identify urgency pressure, authority misuse, emotional triggers, suspicious links, or abnormal requests.
- Classify risk level as:
  - Safe
  - Suspicious
  - High Risk Fraud

3. Business Impact Evaluation
- Explain how the message could impact business:
  - Financial loss
  - Reputation damage
  - Data/security risk
  - Operational disruption

4. Smart Response & Automation Support
- Suggest a professional, safe, business-appropriate reply.

5. Sales & Lead Intelligence (if applicable)
- Detect whether the message is a sales lead.
- Rate lead quality from 1-10 based on clarity, intent, budget signals, and seriousness.
- Suggest next business action: follow-up, qualification call, ignore, or escalate to sales team.

6. Decision Support
- Clearly state what the business should do next.

7. Tone & Rules
- Maintain a professional, confident, and concise business tone.
- Never assume facts not present in the message.
- Base all judgments strictly on observable message patterns.

Output strictly in JSON format with these exact fields:
{
  "riskLevel": "Safe | Suspicious | High Risk Fraud",
  "reason": "Detailed explanation of risk assessment",
  "businessImpact": "Explanation of potential business impact",
  "recommendedAction": "Clear action steps for the business",
  "suggestedReply": "Professional response suggestion (if applicable)",
  "leadQualityScore": number from 1-10 (only if this is a sales lead, otherwise 0),
  "businessInsight": "Strategic insight or key takeaway"
}"""


def build_user_prompt(
    message: str,
    sender_info: Optional[str] = None,
    context: Optional[str] = None,
) -> str:
    """Build the per-message prompt."""
    lines = ["Message to analyze:", message, ""]
    if sender_info:
        lines.append(f"Sender Information: {sender_info}")
    if context:
        lines.append(f"Business Context: {context}")
    lines.extend(["", "Provide a complete business intelligence analysis."])
    return "\n".join(lines)


class ModelBackedAnalyzer:
    """Analyzer that delegates to a language model through `complete`."""

    def __init__(
        self,
        name: str,
        complete: CompletionFn,
        system_prompt: str = SYSTEM_PROMPT,
        parser: Optional[ResponseParser] = None,
    ):
        self.name = name
        self.complete = complete
        self.system_prompt = system_prompt
        self.parser = parser or ResponseParser()

    def analyze(
        self,
        message: str,
        sender_info: Optional[str] = None,
        context: Optional[str] = None,
    ) -> AnalysisResult:
        """Analyze a message with the model. Transport errors propagate."""
        user_prompt = build_user_prompt(message, sender_info, context)
        raw = (self.complete(self.system_prompt, user_prompt) or "").strip()
        if not raw:
            raise ValueError(f"Empty output from {self.name}")
        return self.parser.parse(raw)
