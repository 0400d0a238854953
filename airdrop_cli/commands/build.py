"""
CLI Build Command

Build the Merkle commitment for a records file and write the claims manifest.

Usage:
    airdrop build records.json [--out claims.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from airdrop_core.claims import build_claims_manifest, save_claims_manifest
from airdrop_core.config import RuntimeConfig
from airdrop_core.schemas import AirdropException, EntitlementRecord, parse_records


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a build for CLI output."""
    records_path: str = ""
    output_path: str | None = None
    merkle_root: str = ""
    leaf_count: int = 0
    total_amount: str = "0"
    success: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["error"] is None:
            del d["error"]
        if d["output_path"] is None:
            del d["output_path"]
        return d


def load_records_file(path: Path) -> list[EntitlementRecord]:
    """
    Load entitlement records from JSON.

    The file holds either a list of {"address", "amount"} objects or an
    object mapping address -> amount.
    """
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    records = parse_records(data)
    logger.info(f"Loaded {len(records)} records from {path}")
    return records


def format_hex(value: str, config: RuntimeConfig) -> str:
    """Apply the configured hex prefix policy to a 0x-prefixed string."""
    if config.output.hex_prefix:
        return value
    return value[2:] if value.startswith("0x") else value


def print_summary_human(summary: BuildSummary) -> None:
    """Print summary in human-readable format."""
    if summary.success:
        print(f"merkle_root: {summary.merkle_root}")
        print(f"leaf_count: {summary.leaf_count}")
        print(f"total_amount: {summary.total_amount}")
        if summary.output_path:
            print(f"claims written to: {summary.output_path}")
    else:
        print("Failed to build commitment", file=sys.stderr)
        if summary.error:
            print(f"Error: {summary.error}", file=sys.stderr)


def print_summary_json(summary: BuildSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig()
    records_path = Path(args.records)
    summary = BuildSummary(records_path=str(records_path))
    printer = print_summary_json if args.json else print_summary_human

    try:
        records = load_records_file(records_path)
        manifest = build_claims_manifest(records)
    except (AirdropException, FileNotFoundError, json.JSONDecodeError) as e:
        summary.error = str(e)
        printer(summary)
        return EXIT_RUNTIME_ERROR

    summary.merkle_root = format_hex(manifest.merkle_root, config)
    summary.leaf_count = manifest.leaf_count
    summary.total_amount = manifest.total_amount

    if args.out:
        try:
            saved = save_claims_manifest(manifest, args.out, indent=config.output.indent)
        except OSError as e:
            summary.error = f"Failed to write claims manifest: {e}"
            printer(summary)
            return EXIT_RUNTIME_ERROR
        summary.output_path = str(saved)

    summary.success = True
    printer(summary)
    return EXIT_SUCCESS
