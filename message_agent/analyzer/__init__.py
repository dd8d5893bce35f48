"""Business Message Analyzer - Analyzer package."""

from .model import ModelBackedAnalyzer, SYSTEM_PROMPT
from .models import AnalysisResult, RISK_LEVELS, SAFE, SUSPICIOUS, HIGH_RISK_FRAUD, UNKNOWN
from .parser import ResponseParser
from .rules import RuleBasedAnalyzer, MessageSignals

__all__ = [
    "AnalysisResult",
    "ModelBackedAnalyzer",
    "MessageSignals",
    "ResponseParser",
    "RuleBasedAnalyzer",
    "SYSTEM_PROMPT",
    "RISK_LEVELS",
    "SAFE",
    "SUSPICIOUS",
    "HIGH_RISK_FRAUD",
    "UNKNOWN",
]
