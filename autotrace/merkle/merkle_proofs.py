"""
Module 03 - Merkle Proofs Convenience Wrappers
Class-based interfaces and the hex wire form of inclusion proofs.

This module provides:
- MerkleProver: Generate proofs and roots from digests, payloads or objects
- MerkleVerifier: Verify proofs
- proof_to_document / proof_from_document: MerkleProof <-> MerkleProofDocument
- verify_proof_path: Verify a hex leaf against a hex root via an L/R path
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, Union

from pydantic import ValidationError

from autotrace.crypto.hashing import DIGEST_SIZE, from_hex, hash_canonical, sha256, to_hex
from autotrace.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    merkle_parent,
    merkle_root,
    verify_merkle_proof,
)
from autotrace.schemas.errors import MerkleVerificationException
from autotrace.schemas.proof import MerkleProofDocument, ProofStep


StepLike = Union[ProofStep, Mapping[str, Any]]


def proof_path(proof: MerkleProof) -> list[ProofStep]:
    """
    Express the siblings of a proof as L/R steps, bottom-up.

    "R" means the sibling is the right child (current || sibling),
    "L" means it is the left child (sibling || current).
    """
    steps: list[ProofStep] = []
    current_index = proof.index
    for sibling in proof.siblings:
        pos = "R" if current_index % 2 == 0 else "L"
        steps.append(ProofStep(pos=pos, hash=to_hex(sibling)))
        current_index //= 2
    return steps


def proof_to_document(proof: MerkleProof) -> MerkleProofDocument:
    """Convert a MerkleProof to its hex wire form."""
    return MerkleProofDocument(
        leaf=to_hex(proof.leaf),
        index=proof.index,
        root=to_hex(proof.root),
        path=proof_path(proof),
    )


def _decode_digest(value: str, what: str) -> bytes:
    try:
        decoded = from_hex(value)
    except ValueError as e:
        raise MerkleVerificationException(
            f"Invalid {what} digest: {e}",
            details={"field": what},
        ) from e
    if len(decoded) != DIGEST_SIZE:
        raise MerkleVerificationException(
            f"Invalid {what} digest: expected {DIGEST_SIZE} bytes, got {len(decoded)}",
            details={"field": what, "length": len(decoded)},
        )
    return decoded


def proof_from_document(document: MerkleProofDocument) -> MerkleProof:
    """
    Rebuild a MerkleProof from its wire form.

    Raises:
        MerkleVerificationException: If a digest is not 32 bytes of valid hex
    """
    return MerkleProof(
        leaf=_decode_digest(document.leaf, "leaf"),
        index=document.index,
        siblings=[_decode_digest(step.hash, "sibling") for step in document.path],
        root=_decode_digest(document.root, "root"),
    )


def verify_proof_path(leaf_hex: str, path: Iterable[StepLike], root_hex: str) -> bool:
    """
    Verify a leaf digest against a root using an explicit L/R path.

    Hex comparison is case-insensitive. Steps may be ProofStep models or
    plain mappings with "pos" and "hash" keys.

    Raises:
        MerkleVerificationException: If a step or digest is malformed
    """
    current = _decode_digest(leaf_hex, "leaf")
    expected_root = _decode_digest(root_hex, "root")

    for i, raw_step in enumerate(path):
        if isinstance(raw_step, ProofStep):
            step = raw_step
        else:
            try:
                step = ProofStep.model_validate(raw_step)
            except ValidationError as e:
                raise MerkleVerificationException(
                    f"Malformed proof step at position {i}",
                    details={"step": i, "errors": e.errors(include_url=False)},
                ) from e
        sibling = _decode_digest(step.hash, "sibling")
        if step.pos == "L":
            current = merkle_parent(sibling, current)
        else:
            current = merkle_parent(current, sibling)

    return current == expected_root


class MerkleProver:
    """
    Convenience class for generating Merkle proofs and roots.

    Example:
        >>> leaves = [sha256(b"a"), sha256(b"b"), sha256(b"c")]
        >>> proof = MerkleProver.prove(leaves, index=1)
        >>> proof.leaf == leaves[1]
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int) -> MerkleProof:
        """Proof for a leaf digest. Raises IndexError / ValueError like build_merkle_proof."""
        return build_merkle_proof(leaves, index)

    @staticmethod
    def prove_payload(payloads: Sequence[bytes], index: int) -> MerkleProof:
        """Proof for a raw payload; payloads are digested into Level 0 first."""
        leaves = [sha256(p) for p in payloads]
        return build_merkle_proof(leaves, index)

    @staticmethod
    def prove_object(objects: Sequence[Any], index: int) -> MerkleProof:
        """Proof for a structured object, hashed via canonical JSON."""
        leaves = [hash_canonical(obj) for obj in objects]
        return build_merkle_proof(leaves, index)

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        return build_merkle_root(leaves)

    @staticmethod
    def compute_root_from_payloads(payloads: Sequence[bytes]) -> bytes:
        return merkle_root(payloads)

    @staticmethod
    def compute_root_from_objects(objects: Sequence[Any]) -> bytes:
        leaves = [hash_canonical(obj) for obj in objects]
        return build_merkle_root(leaves)


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(leaves, index=1)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_document(document: MerkleProofDocument) -> bool:
        """
        Verify a proof in wire form.

        Both the index parity and the explicit L/R path must agree with the
        claimed root.
        """
        proof = proof_from_document(document)
        if not verify_merkle_proof(proof):
            return False
        return verify_proof_path(document.leaf, document.path, document.root)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        index: int,
        siblings: list[bytes],
        root: bytes,
    ) -> bool:
        """Verify a leaf digest from raw proof components."""
        proof = MerkleProof(
            leaf=leaf,
            index=index,
            siblings=siblings,
            root=root,
        )
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_payload_in_root(
        payload: bytes,
        index: int,
        siblings: list[bytes],
        root: bytes,
    ) -> bool:
        """Verify a raw payload; it is digested to produce the leaf."""
        return MerkleVerifier.verify_leaf_in_root(sha256(payload), index, siblings, root)

    @staticmethod
    def verify_object_in_root(
        obj: Any,
        index: int,
        siblings: list[bytes],
        root: bytes,
    ) -> bool:
        """Verify a structured object; it is canonically hashed to produce the leaf."""
        leaf = hash_canonical(obj)
        return MerkleVerifier.verify_leaf_in_root(leaf, index, siblings, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
    "proof_path",
    "proof_to_document",
    "proof_from_document",
    "verify_proof_path",
]
