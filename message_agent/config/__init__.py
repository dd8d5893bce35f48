"""Business Message Analyzer - Configuration package."""

from .loader import load_config
from .models import Config, KeywordConfig

__all__ = ["load_config", "Config", "KeywordConfig"]
