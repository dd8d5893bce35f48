"""Configuration loader."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .models import Config, KeywordConfig


def _keyword_list(config_path: Path, name: str, value, default: tuple) -> tuple:
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(kw, str) for kw in value):
        raise ValueError(f"{config_path}: keywords.{name} must be a list of strings")
    return tuple(kw.strip() for kw in value if kw.strip())


def load_config(config_path: str = "config.yaml") -> Config:
    """Load configuration from YAML file and environment."""
    load_dotenv()

    log_level = os.getenv("LOG_LEVEL", "WARNING")
    log_dir = os.getenv("ANALYSIS_LOG_DIR", "logs")
    keywords = KeywordConfig()

    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_config = yaml.safe_load(f) or {}

        if not isinstance(yaml_config, dict):
            raise ValueError(f"{config_file}: expected a mapping at the top level")

        log_level = yaml_config.get("log_level", log_level)
        log_dir = yaml_config.get("log_dir", log_dir)

        kw_data = yaml_config.get("keywords") or {}
        if not isinstance(kw_data, dict):
            raise ValueError(f"{config_file}: keywords must be a mapping")
        keywords = KeywordConfig(
            fraud=_keyword_list(config_file, "fraud", kw_data.get("fraud"), keywords.fraud),
            sales=_keyword_list(config_file, "sales", kw_data.get("sales"), keywords.sales),
            complaint=_keyword_list(
                config_file, "complaint", kw_data.get("complaint"), keywords.complaint
            ),
        )

    return Config(
        keywords=keywords,
        log_level=str(log_level).upper(),
        log_dir=str(log_dir),
    )
