"""
Merkle Tree and Commitments
Sorted-pair Merkle commitment over airdrop entitlements.

This package provides:
- MerkleCommitment: Tree over (address, amount) records with root and proofs
- verify_entitlement: Stateless proof check that never raises
- MerkleProof: Dataclass representing a Merkle inclusion proof
- Low-level level/root/proof functions over raw leaf hashes

Canonical Commitment Rules:
1. Leaf hashing: keccak256(utf8(address) + utf8(amount))
2. Leaf order: ascending by digest bytes
3. Parent hashing: keccak256(min(a, b) + max(a, b))
4. Odd node: carried up to the next level unchanged
5. Single leaf: root = leaf

Usage:
    from airdrop_core.merkle import MerkleCommitment, verify_entitlement

    tree = MerkleCommitment(records)
    root = tree.hex_root
    proof = tree.get_hex_proof({"address": "addr1", "amount": "100"})

    assert verify_entitlement(root, proof, {"address": "addr1", "amount": "100"})
"""
from .merkle_tree import (
    MerkleProof,
    hash_leaf,
    merkle_parent,
    build_levels,
    build_merkle_root,
    build_merkle_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .commitment import (
    MerkleCommitment,
    hash_record,
    verify_entitlement,
)

from .merkle_proofs import (
    EntitlementProver,
    EntitlementVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "MerkleCommitment",
    # Core functions
    "hash_leaf",
    "hash_record",
    "merkle_parent",
    "build_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "verify_entitlement",
    "compute_tree_depth",
    # Convenience classes
    "EntitlementProver",
    "EntitlementVerifier",
]
