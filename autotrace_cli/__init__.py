"""
Module 05 - Autotrace CLI

Command-line interface for the Autotrace engine.

Usage:
    python -m autotrace_cli run < request.json
    python -m autotrace_cli hash "abc"
    python -m autotrace_cli merkle-root a b c
    python -m autotrace_cli prove --index 1 a b c
    python -m autotrace_cli verify-proof proof.json
"""

__version__ = "0.1.0"
