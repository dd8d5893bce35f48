"""Router models - dispatch decisions."""

from dataclasses import dataclass, field

from ..analyzer.models import AnalysisResult


@dataclass
class DispatchDecision:
    """Which analyzer produced a result, and what failed on the way."""
    result: AnalysisResult
    analyzer: str
    used_fallback: bool
    errors: list[str] = field(default_factory=list)

    @property
    def source(self) -> str:
        """Return where the result came from."""
        if self.used_fallback and self.errors:
            return f"Fallback: {self.analyzer} ({len(self.errors)} analyzer(s) failed)"
        if self.used_fallback:
            return f"Fallback: {self.analyzer}"
        return f"Model: {self.analyzer}"
