"""
CLI Snapshot Command

Aggregate exported delegation listings into a records file.

Usage:
    airdrop snapshot delegations/ --out records.json [--min-amount N]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from airdrop_core.config import RuntimeConfig
from airdrop_core.schemas import AirdropException
from airdrop_core.snapshot import build_snapshot


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def snapshot_cmd(args: Namespace) -> int:
    """Execute the snapshot command."""
    config: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig()
    min_amount = args.min_amount if args.min_amount is not None else config.snapshot.min_amount

    try:
        records = build_snapshot(Path(args.source), min_amount=min_amount)
    except (AirdropException, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    payload = [{"address": r.address, "amount": r.amount} for r in records]
    out_path = Path(args.out)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(payload, indent=config.output.indent) + "\n", encoding="utf-8")
    except OSError as e:
        print(f"Error: failed to write {out_path}: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    total = sum(r.amount_value for r in records)
    logger.info(f"Snapshot written to {out_path}")
    print(f"records: {len(records)}")
    print(f"total_amount: {total}")
    print(f"written to: {out_path}")
    return EXIT_SUCCESS
