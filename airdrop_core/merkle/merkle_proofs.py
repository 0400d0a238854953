"""
Merkle Proofs Convenience Wrappers
Thin wrappers around the commitment and tree functions for a cleaner API.

This module provides class-based interfaces:
- EntitlementProver: Build roots and proofs from entitlement records
- EntitlementVerifier: Verify proofs

These are convenience wrappers around merkle_tree.py and commitment.py.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from airdrop_core.merkle.commitment import (
    DigestLike,
    MerkleCommitment,
    RecordLike,
    verify_entitlement,
)
from airdrop_core.merkle.merkle_tree import MerkleProof, verify_merkle_proof
from airdrop_core.schemas.entitlement import EntitlementRecord


class EntitlementProver:
    """
    Convenience class for generating entitlement proofs.

    Each call builds a fresh commitment; hold on to a MerkleCommitment
    when proving many records from the same snapshot.

    Example:
        >>> records = [("addr1", "100"), ("addr2", "50")]
        >>> proof = EntitlementProver.prove(records, ("addr1", "100"))
        >>> EntitlementVerifier.verify(proof)
        True
    """

    @staticmethod
    def prove(records: Iterable[RecordLike], record: RecordLike) -> MerkleProof:
        """
        Generate a proof for one record of a snapshot.

        Raises:
            EmptyInputError: If records is empty
            NotFoundError: If record is not part of records
        """
        return MerkleCommitment(records).build_proof(record)

    @staticmethod
    def prove_all(
        records: Iterable[RecordLike],
    ) -> list[tuple[EntitlementRecord, MerkleProof]]:
        """Proofs for every record, in input order."""
        commitment = MerkleCommitment(records)
        return [(r, commitment.build_proof(r)) for r in commitment.records]

    @staticmethod
    def compute_root(records: Iterable[RecordLike]) -> bytes:
        """32-byte Merkle root of a snapshot."""
        return MerkleCommitment(records).root


class EntitlementVerifier:
    """
    Convenience class for verifying entitlement proofs.

    All methods return booleans and never raise.
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        """Verify a self-contained MerkleProof."""
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_record_in_root(
        record: RecordLike,
        siblings: Sequence[DigestLike],
        root: DigestLike,
    ) -> bool:
        """
        Verify a record is included in a Merkle root.

        Args:
            record: The claimed entitlement
            siblings: Proof elements, leaf to root (bytes or hex)
            root: The claimed Merkle root (bytes or hex)
        """
        return verify_entitlement(root, siblings, record)


__all__ = [
    "EntitlementProver",
    "EntitlementVerifier",
]
