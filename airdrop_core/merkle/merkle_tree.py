"""
Merkle Tree Implementation
Sorted-pair Merkle tree construction, proof generation, and verification.

This module provides:
- Leaf hashing for entitlement records
- Level-by-level tree construction with the odd-node carry rule
- Merkle proof generation for any leaf index
- Merkle proof verification

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(utf8(address) + utf8(amount))
   - Raw string concatenation, no delimiter, no hex decoding
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - Children are ordered by byte comparison, not by tree position
   - Implemented once in airdrop_core.crypto.hashing.sort_pair()
3. Odd rule: an unpaired last node is carried up unchanged (no duplication)
4. Empty leaves: rejected with EmptyInputError
5. Single leaf: root = leaf, proof = []

Ordering Notes:
- The functions here use leaves in the order given
- MerkleCommitment sorts leaves ascending before calling them, which makes
  the root independent of record order
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from airdrop_core.crypto.hashing import (
    DIGEST_SIZE,
    hash_pair,
    keccak256,
    to_hex,
)
from airdrop_core.schemas.entitlement import leaf_preimage
from airdrop_core.schemas.errors import EmptyInputError


logger = logging.getLogger(__name__)

Levels = tuple[tuple[bytes, ...], ...]


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Because parents are hashed with the sorted-pair rule the siblings carry
    no left/right flags; ``index`` is kept for bookkeeping only and does not
    take part in verification.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        index: 0-based position of the leaf in the (sorted) leaf level
        siblings: Sibling hashes from leaf to root, carry-up levels omitted
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: tuple[bytes, ...]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        object.__setattr__(self, "siblings", tuple(self.siblings))

    def hex_siblings(self, prefix: bool = True) -> list[str]:
        """Siblings as hex strings, leaf to root."""
        return [to_hex(s, prefix=prefix) for s in self.siblings]

    def to_dict(self, prefix: bool = True) -> dict[str, object]:
        return {
            "leaf": to_hex(self.leaf, prefix=prefix),
            "index": self.index,
            "siblings": self.hex_siblings(prefix=prefix),
            "root": to_hex(self.root, prefix=prefix),
        }


def hash_leaf(address: str, amount: str) -> bytes:
    """
    Compute the leaf hash of an (address, amount) entitlement.

    Args:
        address: Recipient address, hashed verbatim
        amount: Amount as a base-10 integer string, hashed verbatim

    Returns:
        keccak256((address + amount).encode("utf-8"))
    """
    return keccak256(leaf_preimage(address, amount))


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Order-independent: merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_pair(left, right)


def build_levels(leaves: Sequence[bytes]) -> Levels:
    """
    Build every level of the tree, leaves first, root last.

    Algorithm:
    1. Level 0 is the leaves in the given order
    2. Pair adjacent nodes left to right and hash each pair
    3. If a level has an odd count, carry its last node up unchanged
    4. Repeat until a single node (the root) remains

    Example: [a, b, c] -> [parent(a, b), c] -> [parent(parent(a, b), c)]

    Args:
        leaves: Sequence of 32-byte leaf hashes

    Returns:
        Tuple of levels; levels[0] are the leaves, levels[-1] == (root,)

    Raises:
        EmptyInputError: If leaves is empty
    """
    if len(leaves) == 0:
        raise EmptyInputError("Cannot build a Merkle tree from an empty leaf list")

    current_level: tuple[bytes, ...] = tuple(leaves)
    levels: list[tuple[bytes, ...]] = [current_level]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level) - 1, 2):
            next_level.append(merkle_parent(current_level[i], current_level[i + 1]))

        # Odd node carried up as-is
        if len(current_level) % 2 == 1:
            next_level.append(current_level[-1])

        current_level = tuple(next_level)
        levels.append(current_level)

    logger.debug(f"Built Merkle tree: {len(leaves)} leaves, {len(levels)} levels")
    return tuple(levels)


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Args:
        leaves: Sequence of leaf hashes, used in the given order

    Returns:
        32-byte Merkle root (the leaf itself for a single leaf)

    Raises:
        EmptyInputError: If leaves is empty
    """
    return build_levels(leaves)[-1][0]


def proof_path(levels: Levels, index: int) -> list[bytes]:
    """
    Collect sibling hashes for the leaf at ``index`` from prebuilt levels.

    At each level the sibling is ``index ^ 1``. When that position does not
    exist the node was carried up and nothing is emitted for the level.
    """
    siblings: list[bytes] = []
    current_index = index

    for level in levels[:-1]:
        sibling_index = current_index ^ 1
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        current_index //= 2

    return siblings


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Args:
        leaves: Sequence of leaf hashes
        index: 0-based index of the leaf to prove

    Returns:
        MerkleProof with leaf, index, siblings (leaf to root), and root

    Raises:
        EmptyInputError: If leaves is empty
        IndexError: If index is out of range
    """
    if len(leaves) == 0:
        raise EmptyInputError("Cannot generate proof for empty leaf list")

    if index < 0 or index >= len(leaves):
        raise IndexError(
            f"Leaf index {index} out of range for {len(leaves)} leaves"
        )

    levels = build_levels(leaves)
    return MerkleProof(
        leaf=levels[0][index],
        index=index,
        siblings=tuple(proof_path(levels, index)),
        root=levels[-1][0],
    )


def fold_proof(leaf: bytes, siblings: Iterable[bytes]) -> bytes:
    """Recompute a root by folding siblings into ``leaf`` with the sorted-pair rule."""
    current_hash = leaf
    for sibling in siblings:
        current_hash = merkle_parent(current_hash, sibling)
    return current_hash


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof.

    Folds the siblings into the leaf and compares the result with the
    claimed root. Never raises: any malformed component is a failed proof.

    Args:
        proof: MerkleProof to verify

    Returns:
        True if the proof is valid, False otherwise
    """
    try:
        if len(proof.leaf) != DIGEST_SIZE or len(proof.root) != DIGEST_SIZE:
            return False
        for sibling in proof.siblings:
            if not isinstance(sibling, bytes) or len(sibling) != DIGEST_SIZE:
                return False
        return fold_proof(proof.leaf, proof.siblings) == proof.root
    except (TypeError, AttributeError):
        return False


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with given number of leaves.

    Depth counts levels from leaves to root inclusive. With the carry rule
    each level holds ceil(n / 2) nodes: 1 leaf -> 1, 2 -> 2, 3 -> 3, 5 -> 4.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "Levels",
    "MerkleProof",
    "hash_leaf",
    "merkle_parent",
    "build_levels",
    "build_merkle_root",
    "proof_path",
    "build_merkle_proof",
    "fold_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
