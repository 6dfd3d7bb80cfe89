"""
Module 03 - Merkle Tree Implementation
Deterministic Merkle root construction, proof generation, and verification.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(payload)
2. Parent hashing: parent = sha256(left || right), left first
3. Padding rule: an unpaired last node at any level is paired with itself
   (duplicated), never promoted unchanged
4. Empty leaves: the root is EMPTY_TREE_ROOT, 32 zero bytes, returned as a
   fixed sentinel rather than computed
5. Single leaf: root = leaf digest (no self-pairing at the top)

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
- Each level is built into a fresh list; the previous level is never mutated
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from autotrace.crypto.hashing import DIGEST_SIZE, sha256


# Empty tree sentinel: 32 zero bytes (not the digest of anything)
EMPTY_TREE_ROOT: bytes = bytes(DIGEST_SIZE)


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf digest being proven
        index: The 0-based index of the leaf in the original leaf list
        siblings: Sibling digests from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent digest of two child nodes: sha256(left || right).

    Not commutative: merkle_parent(a, b) != merkle_parent(b, a) for a != b.
    """
    return sha256(left + right)


def _next_level(level: Sequence[bytes]) -> list[bytes]:
    """Combine one level pairwise, pairing an odd trailing node with itself."""
    count = len(level)
    next_level: list[bytes] = []
    for i in range(0, count, 2):
        left = level[i]
        right = level[i + 1] if i + 1 < count else left
        next_level.append(merkle_parent(left, right))
    return next_level


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf digests (Level 0).

    Padding Rule: duplicate the last node at each level if odd.
    Example: [a, b, c] -> [parent(a,b), parent(c,c)] -> root

    Args:
        leaves: Sequence of leaf digests. Order matters and is preserved.

    Returns:
        32-byte Merkle root (EMPTY_TREE_ROOT for no leaves)

    Example:
        >>> leaves = [sha256(b"a"), sha256(b"b"), sha256(b"c")]
        >>> len(build_merkle_root(leaves))
        32
    """
    if len(leaves) == 0:
        return EMPTY_TREE_ROOT

    current_level: list[bytes] = list(leaves)
    while len(current_level) > 1:
        current_level = _next_level(current_level)

    return current_level[0]


def merkle_root(payloads: Sequence[bytes]) -> bytes:
    """
    Compute the Merkle root of an ordered set of raw payloads.

    Each payload is digested independently to form Level 0, then the
    levels are reduced pairwise until one digest remains.

    Args:
        payloads: Ordered raw byte payloads (may be empty)

    Returns:
        32-byte Merkle root
    """
    if len(payloads) == 0:
        return EMPTY_TREE_ROOT
    return build_merkle_root([sha256(p) for p in payloads])


def tree_levels(payloads: Sequence[bytes]) -> list[list[bytes]]:
    """
    Return every level of the tree, Level 0 first and the root level last.

    An empty payload list yields a single level holding EMPTY_TREE_ROOT.
    """
    if len(payloads) == 0:
        return [[EMPTY_TREE_ROOT]]

    levels: list[list[bytes]] = [[sha256(p) for p in payloads]]
    while len(levels[-1]) > 1:
        levels.append(_next_level(levels[-1]))
    return levels


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf digest at the given index.

    At each level the sibling is the node at (index XOR 1); when that falls
    past the end of an odd level the sibling is the node itself, matching
    the padding rule.

    Raises:
        IndexError: If index is out of range
        ValueError: If leaves is empty
    """
    if len(leaves) == 0:
        raise ValueError("Cannot generate proof for empty leaf list")

    if index < 0 or index >= len(leaves):
        raise IndexError(
            f"Leaf index {index} out of range for {len(leaves)} leaves"
        )

    siblings: list[bytes] = []
    current_level: list[bytes] = list(leaves)
    current_index = index

    while len(current_level) > 1:
        sibling_index = current_index ^ 1
        if sibling_index >= len(current_level):
            sibling_index = current_index
        siblings.append(current_level[sibling_index])

        current_level = _next_level(current_level)
        current_index //= 2

    return MerkleProof(
        leaf=leaves[index],
        index=index,
        siblings=siblings,
        root=current_level[0],
    )


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof by recomputing the root from leaf and siblings.

    An even running index means the current node is a left child.
    """
    current_hash = proof.leaf
    current_index = proof.index

    for sibling in proof.siblings:
        if current_index % 2 == 0:
            current_hash = merkle_parent(current_hash, sibling)
        else:
            current_hash = merkle_parent(sibling, current_hash)
        current_index //= 2

    return current_hash == proof.root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels from leaves to root, inclusive.

    0 for an empty tree, otherwise ceil(log2(n)) + 1.
    """
    if num_leaves <= 0:
        return 0
    return (num_leaves - 1).bit_length() + 1


__all__ = [
    "EMPTY_TREE_ROOT",
    "MerkleProof",
    "merkle_parent",
    "build_merkle_root",
    "merkle_root",
    "tree_levels",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
