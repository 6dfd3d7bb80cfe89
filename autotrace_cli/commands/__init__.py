"""
CLI command modules.
"""

from autotrace_cli.commands import digest, proof

__all__ = ["digest", "proof"]
