"""
Runtime Configuration

Central configuration for the engine's resource limits and the HTTP service.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "AUTOTRACE_"


@dataclass
class LimitsConfig:
    """
    Optional resource bounds. None means unbounded, which is the reference
    behavior; a configured bound is enforced by rejecting the request, never
    by truncating it.
    """
    max_leaves: Optional[int] = None
    max_payload_bytes: Optional[int] = None
    max_request_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("max_leaves", "max_payload_bytes", "max_request_bytes"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass
class ServiceConfig:
    """Configuration for the HTTP service."""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (a .env file is loaded first)
    - YAML file
    - Programmatic construction
    """
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Read configuration overrides from environment variables.

        Supported variables:
        - AUTOTRACE_MAX_LEAVES: maximum leaf count per merkle-root request
        - AUTOTRACE_MAX_PAYLOAD_BYTES: maximum UTF-8 size of one payload
        - AUTOTRACE_MAX_REQUEST_BYTES: maximum size of a raw request document
        - AUTOTRACE_API_HOST / AUTOTRACE_API_PORT: HTTP bind address
        - AUTOTRACE_LOG_LEVEL: log level for the HTTP service
        """
        overrides: dict[str, Any] = {}

        for key in ("max_leaves", "max_payload_bytes", "max_request_bytes"):
            raw = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if raw:
                overrides.setdefault("limits", {})[key] = int(raw)

        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("service", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            overrides.setdefault("service", {})["port"] = int(os.getenv(f"{ENV_PREFIX}API_PORT", "8000"))
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("service", {})["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        limits_data = data.get("limits") or {}
        service_data = data.get("service") or {}

        return cls(
            limits=LimitsConfig(**limits_data),
            service=ServiceConfig(**service_data),
            extra=data.get("extra") or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """Return a copy with environment variable overrides applied."""
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        # replace() runs __post_init__ on the overridden limits
        return RuntimeConfig(
            limits=replace(self.limits, **overrides.get("limits", {})),
            service=replace(self.service, **overrides.get("service", {})),
            extra=copy.deepcopy(self.extra),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "limits": {
                "max_leaves": self.limits.max_leaves,
                "max_payload_bytes": self.limits.max_payload_bytes,
                "max_request_bytes": self.limits.max_request_bytes,
            },
            "service": {
                "host": self.service.host,
                "port": self.service.port,
                "log_level": self.service.log_level,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env on next get)."""
    global _default_config
    _default_config = config
