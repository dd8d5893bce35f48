"""
Unit tests for configuration loading.
"""
import pytest

from message_agent.config import load_config, KeywordConfig
from message_agent.config.models import DEFAULT_SALES_KEYWORDS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and .env files."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ANALYSIS_LOG_DIR", raising=False)
    monkeypatch.chdir(tmp_path)


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return str(path)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test defaults when no config file exists."""
        config = load_config(str(tmp_path / "absent.yaml"))

        assert config.keywords == KeywordConfig()
        assert config.log_level == "WARNING"
        assert config.log_dir == "logs"

    def test_environment_overrides(self, tmp_path, monkeypatch):
        """Test LOG_LEVEL and ANALYSIS_LOG_DIR are read from the environment."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("ANALYSIS_LOG_DIR", "/var/log/analyses")

        config = load_config(str(tmp_path / "absent.yaml"))

        assert config.log_level == "DEBUG"
        assert config.log_dir == "/var/log/analyses"

    def test_yaml_values(self, tmp_path):
        """Test values from the YAML file."""
        path = write_config(tmp_path, "log_level: info\nlog_dir: audit\n")

        config = load_config(path)

        assert config.log_level == "INFO"
        assert config.log_dir == "audit"

    def test_keyword_override(self, tmp_path):
        """Test a keyword set can be replaced while others keep defaults."""
        path = write_config(tmp_path, "keywords:\n  fraud:\n    - gift card\n    - ' crypto '\n")

        config = load_config(path)

        assert config.keywords.fraud == ("gift card", "crypto")
        assert config.keywords.sales == tuple(DEFAULT_SALES_KEYWORDS)

    def test_empty_file(self, tmp_path):
        """Test an empty YAML file behaves like no file."""
        path = write_config(tmp_path, "")

        assert load_config(path).keywords == KeywordConfig()

    def test_invalid_keywords(self, tmp_path):
        """Test a non-list keyword set is rejected."""
        path = write_config(tmp_path, "keywords:\n  sales: pricing\n")

        with pytest.raises(ValueError, match="keywords.sales"):
            load_config(path)

    def test_non_mapping_file(self, tmp_path):
        """Test a YAML list at the top level is rejected."""
        path = write_config(tmp_path, "- a\n- b\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(path)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
