"""
Claims Manifest

The distributable artifact of an airdrop round: the Merkle root plus, for
every entitlement, the proof its owner submits when claiming.

Claims are listed in the order of the input records. Proof hex is stored
with the 0x prefix; verification also accepts bare hex.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from airdrop_core.crypto.hashing import to_hex
from airdrop_core.merkle.commitment import MerkleCommitment, RecordLike, verify_entitlement
from airdrop_core.schemas.entitlement import AMOUNT_PATTERN, total_amount
from airdrop_core.schemas.errors import AirdropError, ErrorCodes


logger = logging.getLogger(__name__)

MANIFEST_VERSION = "1.0"

# 0x followed by 64 hex chars = 32 bytes
HEX_HASH_PATTERN = re.compile(r"0x[0-9a-fA-F]{64}")


def validate_hex_hash(value: str, field_name: str) -> str:
    """Validate that a value is a 32-byte hex hash with 0x prefix."""
    if not HEX_HASH_PATTERN.fullmatch(value):
        raise ValueError(
            f"{field_name} must be a 32-byte hex string with 0x prefix "
            f"(64 hex chars), got: {value[:20]}"
        )
    return value.lower()


class AirdropClaim(BaseModel):
    """One claimable entitlement together with its inclusion proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., min_length=1)
    amount: str = Field(..., description="Base-10 integer string, as committed")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, leaf to root")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: str) -> str:
        if not AMOUNT_PATTERN.fullmatch(v):
            raise ValueError(f"amount must be a base-10 integer string, got {v!r}")
        return v

    @field_validator("proof")
    @classmethod
    def validate_proof(cls, v: list[str]) -> list[str]:
        return [validate_hex_hash(p, "proof element") for p in v]


class ClaimsManifest(BaseModel):
    """
    Merkle root and per-account proofs for one airdrop round.

    The manifest is self-checking: verify_claim() and verify_all() recompute
    each claim's path against merkle_root.
    """

    model_config = ConfigDict(extra="forbid")

    manifest_version: str = Field(default=MANIFEST_VERSION)
    merkle_root: str = Field(..., description="0x-prefixed Merkle root")
    leaf_count: int = Field(..., ge=1)
    total_amount: str = Field(..., description="Sum of all claim amounts")
    claims: list[AirdropClaim] = Field(default_factory=list)

    @field_validator("merkle_root")
    @classmethod
    def validate_merkle_root(cls, v: str) -> str:
        return validate_hex_hash(v, "merkle_root")

    @field_validator("total_amount")
    @classmethod
    def validate_total_amount(cls, v: str) -> str:
        if not AMOUNT_PATTERN.fullmatch(v):
            raise ValueError(f"total_amount must be a base-10 integer string, got {v!r}")
        return v

    @model_validator(mode="after")
    def check_counts(self) -> "ClaimsManifest":
        """leaf_count and total_amount must describe the listed claims."""
        if self.leaf_count != len(self.claims):
            raise ValueError(
                f"leaf_count is {self.leaf_count} but {len(self.claims)} claims are listed"
            )
        claimed = sum(int(c.amount) for c in self.claims)
        if int(self.total_amount) != claimed:
            raise ValueError(
                f"total_amount is {self.total_amount} but claims sum to {claimed}"
            )
        return self

    def find_claims(self, address: str) -> list[AirdropClaim]:
        """All claims for an address (duplicates are possible)."""
        return [c for c in self.claims if c.address == address]

    def verify_claim(self, claim: AirdropClaim) -> bool:
        """Check one claim against the manifest root. Never raises."""
        return verify_entitlement(
            self.merkle_root,
            claim.proof,
            {"address": claim.address, "amount": claim.amount},
        )

    def verify_all(self) -> list[AirdropError]:
        """
        Verify every claim against merkle_root.

        Returns one MERKLE_PROOF_INVALID error per failing claim, plus a
        ROOT_MISMATCH error when the listed claims do not rebuild merkle_root.
        """
        errors: list[AirdropError] = []
        for position, claim in enumerate(self.claims):
            if not self.verify_claim(claim):
                errors.append(AirdropError(
                    code=ErrorCodes.MERKLE_PROOF_INVALID,
                    message=f"Proof for {claim.address!r} does not reach the manifest root",
                    details={"position": position, "address": claim.address, "amount": claim.amount},
                ))

        if self.claims:
            rebuilt = MerkleCommitment(
                {"address": c.address, "amount": c.amount} for c in self.claims
            ).hex_root
            if rebuilt != self.merkle_root.lower():
                errors.append(AirdropError(
                    code=ErrorCodes.ROOT_MISMATCH,
                    message="Claims do not rebuild the manifest root",
                    details={"merkle_root": self.merkle_root, "rebuilt_root": rebuilt},
                ))

        if errors:
            logger.warning(f"Manifest check found {len(errors)} error(s) over {len(self.claims)} claims")
        return errors


def build_claims_manifest(records: Iterable[RecordLike]) -> ClaimsManifest:
    """
    Build the commitment for ``records`` and a claim (with proof) per record.

    Raises:
        EmptyInputError: If records is empty
        InvalidEntitlementException: If a record is malformed
    """
    commitment = MerkleCommitment(records)
    claims = [
        AirdropClaim(
            address=record.address,
            amount=record.amount,
            proof=commitment.get_hex_proof(record),
        )
        for record in commitment.records
    ]
    manifest = ClaimsManifest(
        merkle_root=to_hex(commitment.root),
        leaf_count=len(commitment),
        total_amount=str(total_amount(commitment.records)),
        claims=claims,
    )
    logger.info(
        f"Claims manifest built: {manifest.leaf_count} claims, root {manifest.merkle_root}"
    )
    return manifest


def save_claims_manifest(manifest: ClaimsManifest, path: str | Path, indent: int = 2) -> Path:
    """Write the manifest as JSON; parent directories are created."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(manifest.model_dump_json(indent=indent) + "\n", encoding="utf-8")
    logger.info(f"Claims manifest written to {path}")
    return path


def load_claims_manifest(path: str | Path) -> ClaimsManifest:
    """Read and validate a manifest written by save_claims_manifest()."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Claims manifest not found: {path}")
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    return ClaimsManifest.model_validate(data)


__all__ = [
    "MANIFEST_VERSION",
    "AirdropClaim",
    "ClaimsManifest",
    "build_claims_manifest",
    "save_claims_manifest",
    "load_claims_manifest",
]
