"""
CLI Verify Command

Check an entitlement against a Merkle root, offline.

The root and proof come from the command line, or from a claims manifest:
    airdrop verify --root 0x.. --address ADDR --amount N --proof 0x.. --proof 0x..
    airdrop verify --claims claims.json --address ADDR --amount N

With --claims and no --proof, the proofs listed in the manifest for the
address are tried.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from airdrop_core.claims import load_claims_manifest
from airdrop_core.crypto.hashing import digest_from_hex
from airdrop_core.merkle import verify_entitlement
from airdrop_core.schemas import AirdropError, ErrorCodes


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of a verification for CLI output."""
    address: str = ""
    amount: str = ""
    merkle_root: str = ""
    proof: list[str] = field(default_factory=list)
    valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _candidate_proofs(args: Namespace) -> tuple[str, list[list[str]]]:
    """Resolve (root, proofs to try) from the arguments."""
    root = args.root
    proofs: list[list[str]] = []

    if args.claims:
        manifest = load_claims_manifest(Path(args.claims))
        root = root or manifest.merkle_root
        if args.proof is None:
            proofs = [c.proof for c in manifest.find_claims(args.address) if c.amount == args.amount]

    if args.proof is not None:
        proofs = [list(args.proof)]

    return root, proofs


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if the entitlement is proven, EXIT_VERIFICATION_FAILED if
        not, EXIT_RUNTIME_ERROR when inputs are missing, unreadable or the
        root is not a 32-byte hex digest
    """
    try:
        root, proofs = _candidate_proofs(args)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not root:
        print("Error: a root is required (--root or --claims)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        digest_from_hex(root)
    except ValueError as e:
        error = AirdropError(
            code=ErrorCodes.INVALID_HEX,
            message=f"Malformed Merkle root: {e}",
            details={"root": root},
        )
        print(f"Error [{error.code}]: {error.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    record = {"address": args.address, "amount": args.amount}
    summary = VerifySummary(address=args.address, amount=args.amount, merkle_root=root)

    if not proofs:
        logger.info(f"No proof available for {args.address}")
        proofs = [[]]

    for proof in proofs:
        if verify_entitlement(root, proof, record):
            summary.valid = True
            summary.proof = proof
            break

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        status = "VALID" if summary.valid else "INVALID"
        print(f"{status}: {args.address} amount {args.amount} under root {root}")

    return EXIT_SUCCESS if summary.valid else EXIT_VERIFICATION_FAILED
