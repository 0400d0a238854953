"""
CLI Prove Command

Print the inclusion proof of one entitlement.

Usage:
    airdrop prove records.json --address ADDR --amount N [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from airdrop_core.config import RuntimeConfig
from airdrop_core.merkle import MerkleCommitment
from airdrop_core.schemas import AirdropException, NotFoundError

from airdrop_cli.commands.build import load_records_file


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def prove_cmd(args: Namespace) -> int:
    """Execute the prove command."""
    config: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig()
    record = {"address": args.address, "amount": args.amount}

    try:
        commitment = MerkleCommitment(load_records_file(Path(args.records)))
        proof = commitment.get_hex_proof(record, prefix=config.output.hex_prefix)
    except NotFoundError as e:
        logger.info(f"No entitlement for {args.address}: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (AirdropException, FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = commitment.hex_root if config.output.hex_prefix else commitment.hex_root[2:]

    if args.json:
        print(json.dumps({
            "address": args.address,
            "amount": args.amount,
            "merkle_root": root,
            "proof": proof,
        }, indent=2))
    else:
        print(f"merkle_root: {root}")
        print("proof:")
        for element in proof:
            print(f"  {element}")

    return EXIT_SUCCESS
