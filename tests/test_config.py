"""Tests for hostmetrics.config: Settings defaults and env override."""

from __future__ import annotations


class TestSettings:
    def test_default_values(self):
        from hostmetrics.config import Settings
        s = Settings()
        assert s.app_name == "Host Metrics"
        assert s.debug is False
        assert s.api_path == "/metrics"
        assert s.interval_ms == 1000
        assert s.bootstrap_retry_seconds == 1.0
        assert s.host == "0.0.0.0"
        assert s.port == 8000
        assert s.log_level == "info"

    def test_env_prefix(self):
        from hostmetrics.config import Settings
        assert Settings.model_config["env_prefix"] == "HOSTMETRICS_"

    def test_env_override(self, monkeypatch):
        from hostmetrics.config import Settings
        monkeypatch.setenv("HOSTMETRICS_API_PATH", "/stats")
        monkeypatch.setenv("HOSTMETRICS_INTERVAL_MS", "250")
        s = Settings()
        assert s.api_path == "/stats"
        assert s.interval_ms == 250

