"""
Autotrace content-addressing engine.

SHA-256 digests of byte payloads and Merkle roots over ordered payload
sets, plus the dispatcher that serves the two request shapes:

    { "op": "hash", "payload": "<text>" }
    { "op": "merkle-root", "leaves": ["<text>", ...] }
"""

from autotrace.crypto.hashing import digest, sha256, to_hex
from autotrace.dispatcher import OperationDispatcher, decode_request, dispatch, handle
from autotrace.merkle.merkle_tree import EMPTY_TREE_ROOT, merkle_root

__version__ = "0.1.0"

__all__ = [
    "EMPTY_TREE_ROOT",
    "OperationDispatcher",
    "decode_request",
    "digest",
    "dispatch",
    "handle",
    "merkle_root",
    "sha256",
    "to_hex",
]
