"""
Module 03 - Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

Canonical Commitment Rules:
1. Leaf hashing: sha256(payload)
2. Parent hashing: sha256(left || right)
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: 32 zero bytes (EMPTY_TREE_ROOT)
5. Single leaf: root = leaf digest

Usage:
    from autotrace.merkle import merkle_root, build_merkle_proof, verify_merkle_proof
    from autotrace.crypto import sha256, to_hex

    root = merkle_root([b"a", b"b", b"c"])
    print(to_hex(root))

    leaves = [sha256(p) for p in (b"a", b"b", b"c")]
    proof = build_merkle_proof(leaves, index=2)
    assert verify_merkle_proof(proof)
"""
from .merkle_tree import (
    EMPTY_TREE_ROOT,
    MerkleProof,
    merkle_parent,
    build_merkle_root,
    merkle_root,
    tree_levels,
    build_merkle_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    proof_path,
    proof_to_document,
    proof_from_document,
    verify_proof_path,
)


__all__ = [
    # Core types
    "MerkleProof",
    "EMPTY_TREE_ROOT",
    # Core functions
    "merkle_parent",
    "build_merkle_root",
    "merkle_root",
    "tree_levels",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Wire form
    "proof_path",
    "proof_to_document",
    "proof_from_document",
    "verify_proof_path",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
