"""Analyzer dispatch engine."""

import logging
from typing import Optional

from ..analyzer import AnalysisResult, RuleBasedAnalyzer
from .models import DispatchDecision

logger = logging.getLogger(__name__)


class Dispatcher:
    """Tries analyzers in priority order, then falls back to rules."""

    def __init__(self, analyzers: Optional[list] = None, fallback=None):
        self.analyzers = list(analyzers or [])
        self.fallback = fallback or RuleBasedAnalyzer()

    def decide(
        self,
        message: str,
        sender_info: Optional[str] = None,
        context: Optional[str] = None,
    ) -> DispatchDecision:
        """Analyze a message with the first analyzer that succeeds."""
        if not message or not message.strip():
            raise ValueError("Message is required")

        errors = []
        for analyzer in self.analyzers:
            name = getattr(analyzer, "name", type(analyzer).__name__)
            try:
                result = analyzer.analyze(message, sender_info, context)
            except Exception as e:
                logger.warning("%s failed, trying next analyzer: %s", name, e)
                errors.append(f"{name}: {e}")
                continue
            return DispatchDecision(
                result=result,
                analyzer=name,
                used_fallback=False,
                errors=errors,
            )

        fallback_name = getattr(self.fallback, "name", type(self.fallback).__name__)
        if self.analyzers:
            logger.info("All analyzers failed, using %s", fallback_name)
        result = self.fallback.analyze(message, sender_info, context)
        logger.debug(
            "%s -> %s (lead score %d)",
            fallback_name, result.risk_level, result.lead_quality_score,
        )
        return DispatchDecision(
            result=result,
            analyzer=fallback_name,
            used_fallback=True,
            errors=errors,
        )

    def analyze(
        self,
        message: str,
        sender_info: Optional[str] = None,
        context: Optional[str] = None,
    ) -> AnalysisResult:
        return self.decide(message, sender_info, context).result
