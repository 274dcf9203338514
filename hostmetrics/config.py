from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "Host Metrics"
    debug: bool = False

    # --- listener ---
    api_path: str = "/metrics"
    interval_ms: int = 1000  # milliseconds between background samples
    bootstrap_retry_seconds: float = 1.0

    # --- server ---
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    model_config = {"env_file": ".env", "env_prefix": "HOSTMETRICS_"}


settings = Settings()
