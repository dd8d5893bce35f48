"""
Analysis Logger - audit trail for the Business Message Analyzer.
Appends one JSON line per analyzed message: input preview, which analyzer
answered, and the result in its wire shape.
"""

import json
import logging
from dataclasses import dataclass, asdict, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from .analyzer.models import RISK_LEVELS, clamp_score

log = logging.getLogger(__name__)

LOG_PREFIX = "analysis_log_"


@dataclass
class AnalysisLogEntry:
    """A single analysis log entry."""
    timestamp: str
    message_preview: str  # First 500 chars
    sender_info: Optional[str]
    context: Optional[str]

    analyzer: str
    used_fallback: bool
    result: dict  # AnalysisResult.to_dict()

    processing_time_ms: int = 0
    errors: list = field(default_factory=list)


class AnalysisLogger:
    """Session-based JSONL logger for analyses."""

    def __init__(self, log_dir: str = "logs", session_id: str = None):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.session_id = session_id or datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self.log_file = self.log_dir / f"{LOG_PREFIX}{self.session_id}.jsonl"

    def log_analysis(
        self,
        message: str,
        decision,
        sender_info: str = None,
        context: str = None,
        processing_time_ms: int = 0,
    ) -> AnalysisLogEntry:
        """Log a DispatchDecision for a message."""
        entry = AnalysisLogEntry(
            timestamp=datetime.now().isoformat(),
            message_preview=message[:500] if message else "",
            sender_info=sender_info,
            context=context,
            analyzer=decision.analyzer,
            used_fallback=decision.used_fallback,
            result=decision.result.to_dict(),
            processing_time_ms=processing_time_ms,
            errors=list(decision.errors),
        )

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(asdict(entry), ensure_ascii=False) + "\n")

        return entry


def read_entries(log_dir: str = "logs") -> list:
    """Read every entry from every session file, oldest session first."""
    entries = []
    for path in sorted(Path(log_dir).glob(f"{LOG_PREFIX}*.jsonl")):
        with open(path, encoding="utf-8") as f:
            for lineno, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    log.warning("Skipping unreadable line %d in %s", lineno, path)
    return entries


def get_stats(log_dir: str = "logs") -> dict:
    """Aggregate analysis statistics across all sessions."""
    entries = read_entries(log_dir)

    stats = {
        "total": len(entries),
        "fallback": 0,
        "errors": 0,
        "by_risk": {level: 0 for level in RISK_LEVELS},
        "leads": 0,
        "avg_lead_score": 0.0,
    }

    score_sum = 0
    for entry in entries:
        if entry.get("used_fallback"):
            stats["fallback"] += 1
        if entry.get("errors"):
            stats["errors"] += 1

        result = entry.get("result") or {}
        risk = result.get("riskLevel")
        if risk in stats["by_risk"]:
            stats["by_risk"][risk] += 1

        score = clamp_score(result.get("leadQualityScore"))
        if score > 0:
            stats["leads"] += 1
            score_sum += score

    if stats["leads"]:
        stats["avg_lead_score"] = round(score_sum / stats["leads"], 2)

    return stats
