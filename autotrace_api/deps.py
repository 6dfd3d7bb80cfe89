"""
Module 06 - API Dependencies

Shared objects injected into route handlers.
"""

from __future__ import annotations

from functools import lru_cache

from autotrace.config.runtime import RuntimeConfig, get_default_config
from autotrace.dispatcher import OperationDispatcher


def get_runtime_config() -> RuntimeConfig:
    """Runtime configuration (environment, overridable in tests)."""
    return get_default_config()


@lru_cache(maxsize=1)
def _cached_dispatcher() -> OperationDispatcher:
    return OperationDispatcher(get_runtime_config())


def get_dispatcher() -> OperationDispatcher:
    """
    The dispatcher serving all digest routes.

    It is stateless, so a single instance is shared across requests.
    """
    return _cached_dispatcher()


def reset_dispatcher() -> None:
    """Drop the cached dispatcher so the next request re-reads configuration."""
    _cached_dispatcher.cache_clear()
