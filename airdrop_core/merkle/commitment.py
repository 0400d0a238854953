"""
Merkle Commitment over Entitlement Records

Builds the airdrop commitment from a snapshot of (address, amount) records
and answers proof queries against it.

Construction canonicalizes the leaf order (ascending by digest bytes), so the
root depends only on the multiset of records, never on the order the caller
supplied them in. The tree is built once and never mutated; concurrent
readers need no locking.

Error policy:
- Construction with no records raises EmptyInputError
- Proof lookup for an absent record raises NotFoundError
- verify_entitlement() never raises; malformed input is simply not a valid proof
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Any, Iterable, Sequence, Union

from airdrop_core.crypto.hashing import DIGEST_SIZE, digest_from_hex, to_hex
from airdrop_core.merkle.merkle_tree import (
    Levels,
    MerkleProof,
    build_levels,
    fold_proof,
    hash_leaf,
    proof_path,
)
from airdrop_core.schemas.entitlement import EntitlementRecord, coerce_record
from airdrop_core.schemas.errors import AirdropException, EmptyInputError, NotFoundError


logger = logging.getLogger(__name__)

RecordLike = Union[EntitlementRecord, Mapping[str, Any], tuple[str, Any]]
DigestLike = Union[bytes, bytearray, str]


def hash_record(record: RecordLike) -> bytes:
    """Leaf hash of a single entitlement record."""
    entry = coerce_record(record)
    return hash_leaf(entry.address, entry.amount)


class MerkleCommitment:
    """
    Sorted-pair Merkle tree over entitlement records.

    Example:
        >>> tree = MerkleCommitment([
        ...     {"address": "addr1", "amount": "100"},
        ...     {"address": "addr2", "amount": "50"},
        ... ])
        >>> proof = tree.get_proof({"address": "addr1", "amount": "100"})
        >>> verify_entitlement(tree.root, proof, {"address": "addr1", "amount": "100"})
        True
    """

    def __init__(self, records: Iterable[RecordLike]) -> None:
        entries = tuple(coerce_record(r) for r in records)
        if not entries:
            raise EmptyInputError()

        duplicates = [a for a, n in Counter(e.address for e in entries).items() if n > 1]
        if duplicates:
            logger.warning(
                f"{len(duplicates)} address(es) appear more than once; "
                f"each occurrence becomes its own leaf"
            )

        self._records = entries
        self._levels: Levels = build_levels(sorted(hash_record(e) for e in entries))

        # First occurrence wins for duplicated leaves
        self._positions: dict[bytes, int] = {}
        for index, leaf in enumerate(self._levels[0]):
            self._positions.setdefault(leaf, index)

        logger.debug(
            f"Merkle commitment built: {len(entries)} records, "
            f"depth {len(self._levels)}, root {self.hex_root}"
        )

    # -------------------------------------------------------------------------
    # Tree shape
    # -------------------------------------------------------------------------

    @property
    def root(self) -> bytes:
        """32-byte Merkle root."""
        return self._levels[-1][0]

    @property
    def hex_root(self) -> str:
        """Root as a 0x-prefixed lowercase hex string (66 chars)."""
        return to_hex(self.root)

    @property
    def records(self) -> tuple[EntitlementRecord, ...]:
        """Records in the order they were supplied."""
        return self._records

    @property
    def leaves(self) -> tuple[bytes, ...]:
        """Leaf hashes in canonical (ascending) order."""
        return self._levels[0]

    @property
    def levels(self) -> Levels:
        return self._levels

    @property
    def depth(self) -> int:
        """Number of levels, leaves and root included."""
        return len(self._levels)

    def __len__(self) -> int:
        return len(self._levels[0])

    def __contains__(self, record: object) -> bool:
        try:
            return hash_record(record) in self._positions  # type: ignore[arg-type]
        except AirdropException:
            return False

    def __repr__(self) -> str:
        return f"MerkleCommitment(leaves={len(self)}, root={self.hex_root!r})"

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def leaf_index(self, record: RecordLike) -> int:
        """
        Position of the record's leaf in the canonical leaf order.

        Raises:
            NotFoundError: If the record's leaf is not in the tree
        """
        entry = coerce_record(record)
        leaf = hash_leaf(entry.address, entry.amount)
        index = self._positions.get(leaf)
        if index is None:
            raise NotFoundError(
                f"No leaf for address {entry.address!r} with amount {entry.amount}",
                address=entry.address,
                amount=entry.amount,
            )
        return index

    def get_proof(self, record: RecordLike) -> list[bytes]:
        """
        Sibling digests proving the record's inclusion, leaf to root.

        Levels where the node was carried up contribute nothing.

        Raises:
            NotFoundError: If the record's leaf is not in the tree
        """
        return proof_path(self._levels, self.leaf_index(record))

    def get_hex_proof(self, record: RecordLike, prefix: bool = True) -> list[str]:
        """Same as get_proof(), hex encoded."""
        return [to_hex(s, prefix=prefix) for s in self.get_proof(record)]

    def build_proof(self, record: RecordLike) -> MerkleProof:
        """Full MerkleProof (leaf, index, siblings, root) for the record."""
        index = self.leaf_index(record)
        return MerkleProof(
            leaf=self._levels[0][index],
            index=index,
            siblings=tuple(proof_path(self._levels, index)),
            root=self.root,
        )

    def verify(self, proof: Union[Sequence[DigestLike], MerkleProof], record: RecordLike) -> bool:
        """Verify a proof for the record against this tree's root."""
        return verify_entitlement(self.root, proof, record)


def _as_digest(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        if len(value) != DIGEST_SIZE:
            raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(value)}")
        return bytes(value)
    if isinstance(value, str):
        return digest_from_hex(value)
    raise TypeError(f"Expected bytes or hex string, got {type(value).__name__}")


def verify_entitlement(
    root: DigestLike,
    proof: Union[Sequence[DigestLike], MerkleProof],
    record: RecordLike,
) -> bool:
    """
    Check that ``record`` is committed to by ``root``.

    Recomputes the record's leaf, folds every proof element into it in order
    with the sorted-pair rule, and compares the result with ``root``.

    Roots and proof elements may be raw 32-byte digests or hex strings with or
    without a 0x prefix. This function never raises: a malformed root, proof
    element or record makes it return False.

    Args:
        root: Expected Merkle root
        proof: Sibling digests, leaf to root (or a MerkleProof)
        record: The claimed entitlement

    Returns:
        True if the proof reconstructs ``root`` for ``record``
    """
    try:
        if isinstance(proof, MerkleProof):
            proof = proof.siblings
        if isinstance(proof, (str, bytes, bytearray)):
            raise TypeError("Proof must be a sequence of digests, not a single value")
        expected_root = _as_digest(root)
        siblings = [_as_digest(p) for p in proof]
        leaf = hash_record(record)
    except (TypeError, ValueError, AirdropException) as e:
        logger.debug(f"Rejecting malformed proof input: {e}")
        return False

    return fold_proof(leaf, siblings) == expected_root


__all__ = [
    "RecordLike",
    "DigestLike",
    "hash_record",
    "MerkleCommitment",
    "verify_entitlement",
]
