"""Business Message Analyzer - risk, impact and reply suggestions for inbound messages."""

__version__ = "0.1.0"

# Re-export main components for convenience
from .config import load_config, Config, KeywordConfig
from .analyzer import (
    AnalysisResult,
    ModelBackedAnalyzer,
    ResponseParser,
    RuleBasedAnalyzer,
)
from .router import Dispatcher, DispatchDecision
from .logger import AnalysisLogger, get_stats

__all__ = [
    "load_config",
    "Config",
    "KeywordConfig",
    "AnalysisResult",
    "ModelBackedAnalyzer",
    "ResponseParser",
    "RuleBasedAnalyzer",
    "Dispatcher",
    "DispatchDecision",
    "AnalysisLogger",
    "get_stats",
]
