"""API route handlers."""

from autotrace_api.routes import digest, health, proofs

__all__ = ["digest", "health", "proofs"]
