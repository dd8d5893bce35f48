"""Configuration models."""

from dataclasses import dataclass, field

DEFAULT_FRAUD_KEYWORDS = [
    "urgent", "wire", "bank account", "password", "verify",
    "suspended", "click here", "act now", "limited time",
]
DEFAULT_SALES_KEYWORDS = [
    "interested", "quote", "pricing", "demo", "meeting",
    "budget", "looking for", "need",
]
DEFAULT_COMPLAINT_KEYWORDS = [
    "disappointed", "unhappy", "refund", "complaint",
    "terrible", "awful", "never again",
]


@dataclass(frozen=True)
class KeywordConfig:
    """Keyword sets used by the rule-based analyzer (matched case-insensitively)."""
    fraud: tuple = tuple(DEFAULT_FRAUD_KEYWORDS)
    sales: tuple = tuple(DEFAULT_SALES_KEYWORDS)
    complaint: tuple = tuple(DEFAULT_COMPLAINT_KEYWORDS)


@dataclass
class Config:
    """Main configuration container."""
    keywords: KeywordConfig = field(default_factory=KeywordConfig)
    log_level: str = "WARNING"
    log_dir: str = "logs"
