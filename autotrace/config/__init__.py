"""
Runtime Configuration Module

Provides configuration loading and management for the Autotrace engine.
"""

from .runtime import (
    LimitsConfig,
    RuntimeConfig,
    ServiceConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LimitsConfig",
    "RuntimeConfig",
    "ServiceConfig",
    "get_default_config",
    "set_default_config",
]
