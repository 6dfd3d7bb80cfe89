"""
Module 06 - Minimal API (FastAPI)

HTTP boundary for the Autotrace engine:
- POST /digest - Execute a request document
- POST /hash, POST /merkle-root - Variant-specific shortcuts
- POST /merkle-proof, POST /merkle-proof/verify - Inclusion proofs
- GET /health - Health check

Usage:
    uvicorn autotrace_api.app:app --reload
"""

__version__ = "0.1.0"
