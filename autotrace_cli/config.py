"""
Module 05 - CLI Configuration

Configuration management for the Autotrace CLI.
Supports environment variables and JSON configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from autotrace.config.runtime import LimitsConfig, RuntimeConfig


# Environment variable prefix
ENV_PREFIX = "AUTOTRACE_"

LIMIT_KEYS = ("max_leaves", "max_payload_bytes", "max_request_bytes")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Resource limits (None = unbounded)
    limits: LimitsConfig = field(default_factory=LimitsConfig)

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    def to_runtime_config(self) -> RuntimeConfig:
        """Engine configuration carrying this CLI's limits."""
        return RuntimeConfig(limits=LimitsConfig(
            max_leaves=self.limits.max_leaves,
            max_payload_bytes=self.limits.max_payload_bytes,
            max_request_bytes=self.limits.max_request_bytes,
        ))

    def to_dict(self) -> dict[str, Any]:
        return {
            "log_level": self.log_level,
            "log_file": self.log_file,
            "limits": {key: getattr(self.limits, key) for key in LIMIT_KEYS},
        }


def _env_limit(key: str) -> int | None:
    raw = os.getenv(f"{ENV_PREFIX}{key.upper()}")
    return int(raw) if raw else None


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig()

    config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    config.limits = LimitsConfig(**{key: _env_limit(key) for key in LIMIT_KEYS})

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must hold a JSON object: {path}")

    config = CLIConfig()
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    limits_data = data.get("limits") or {}
    config.limits = LimitsConfig(**{key: limits_data.get(key) for key in LIMIT_KEYS})

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "autotrace.json",
            Path.cwd() / ".autotrace.json",
            Path.home() / ".config" / "autotrace" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    env_config = load_config_from_env()

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = env_config.log_level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env_config.log_file
    for key in LIMIT_KEYS:
        if os.getenv(f"{ENV_PREFIX}{key.upper()}"):
            setattr(config.limits, key, getattr(env_config.limits, key))

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "log_level": "WARNING",
  "log_file": null,
  "limits": {
    "max_leaves": null,
    "max_payload_bytes": null,
    "max_request_bytes": null
  }
}
"""
