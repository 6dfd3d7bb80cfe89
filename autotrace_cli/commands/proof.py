"""
Module 05 - CLI Proof Commands

Generate and verify Merkle inclusion proofs.

Usage:
    autotrace prove --index 2 a b c > proof.json
    autotrace verify-proof proof.json [--payload c] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from autotrace.crypto.hashing import hash_text, to_hex
from autotrace.merkle.merkle_proofs import MerkleProver, MerkleVerifier, proof_to_document
from autotrace.schemas.errors import MalformedRequestException
from autotrace.schemas.proof import MerkleProofDocument
from autotrace_cli.commands.digest import dispatcher_for


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def prove_cmd(args: Namespace) -> int:
    """Print a JSON inclusion proof for the leaf at --index."""
    if not args.leaves:
        print("Error: at least one leaf is required", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    payloads = dispatcher_for(args).leaf_payloads(args.leaves)
    try:
        proof = MerkleProver.prove_payload(payloads, args.index)
    except IndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    document = proof_to_document(proof)
    print(json.dumps(document.model_dump(), indent=2))
    return EXIT_SUCCESS


def load_proof_document(proof_path: str) -> MerkleProofDocument:
    """
    Load a proof document from a file or stdin ("-").

    Raises:
        MalformedRequestException: If the document is not a valid proof
    """
    if proof_path == "-":
        raw = sys.stdin.buffer.read()
    else:
        raw = Path(proof_path).read_bytes()

    try:
        return MerkleProofDocument.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedRequestException(
            "Malformed proof document",
            details={"errors": [err["msg"] for err in e.errors(include_url=False)]},
        ) from e


def verify_proof_cmd(args: Namespace) -> int:
    """
    Verify a JSON proof document.

    With --payload, the proof's leaf must also be the digest of that text.

    Returns:
        0 when valid, 2 when invalid
    """
    document = load_proof_document(args.proof_path)
    logger.info(f"Verifying proof for leaf index {document.index}")

    ok = MerkleVerifier.verify_document(document)
    leaf_ok = True
    if args.payload is not None:
        leaf_ok = to_hex(hash_text(args.payload)) == document.leaf.lower()
        ok = ok and leaf_ok

    if args.json:
        print(json.dumps({
            "ok": ok,
            "index": document.index,
            "root": document.root.lower(),
            "leaf_matches_payload": leaf_ok if args.payload is not None else None,
        }, indent=2))
    else:
        print("valid" if ok else "invalid")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
