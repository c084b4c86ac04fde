# iotworkbench/core/config.py
"""
Central configuration for the IoT Workbench orchestration core.

Environment variables (prefix ``IOTWORKBENCH_``) override defaults.
"""
from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(
        env_prefix="IOTWORKBENCH_",
        env_file=".env",
        extra="ignore",
    )

    app_env: str = "dev"
    log_level: str = "INFO"
    log_json: bool = Field(default=True, description="Emit JSON log records")

    # Prefix of workbench keys inside the .code-workspace settings
    settings_namespace: str = "IoTWorkbench"

    # Project template catalogs (glob patterns, later files override)
    templates_config_paths: list[str] = Field(
        default_factory=lambda: [str(RESOURCES_DIR / "templates.yaml")]
    )


settings = Settings()
