"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m airdrop_cli build <records.json> [--out PATH] [--json]
    python -m airdrop_cli prove <records.json> --address A --amount N [--json]
    python -m airdrop_cli verify (--root R | --claims PATH) --address A --amount N [--proof P ...] [--json]
    python -m airdrop_cli snapshot <delegations.json|dir> --out PATH [--min-amount N]
    python -m airdrop_cli config --show

Environment Variables:
    AIRDROP_LOG_LEVEL           Log level (default: INFO)
    AIRDROP_LOG_FILE            Also write logs to this file
    AIRDROP_HEX_PREFIX          Emit 0x-prefixed hex (default: true)
    AIRDROP_INDENT              JSON indent for written files (default: 2)
    AIRDROP_MIN_AMOUNT          Minimum aggregated balance kept by snapshot (default: 0)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from airdrop_cli import __version__
from airdrop_cli.commands import build, prove, verify, snapshot
from airdrop_core.config import RuntimeConfig
from airdrop_core.schemas import ConfigException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

DEFAULT_CONFIG_PATHS = [
    Path.cwd() / "airdrop.yaml",
    Path.cwd() / ".airdrop.yaml",
    Path.home() / ".config" / "airdrop" / "config.yaml",
]


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from a YAML file and/or the environment.

    Environment variables override file settings. Without an explicit path
    the first existing default location is used.
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                config = RuntimeConfig.from_yaml(default_path)
                break

    return config.with_env_overrides()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Airdrop Merkle commitment CLI - build roots, produce and verify claim proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./airdrop.yaml or ~/.config/airdrop/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build the Merkle root and claims manifest for a records file",
    )
    build_parser.add_argument(
        "records",
        type=str,
        help="JSON file: list of {address, amount} or object address -> amount",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the claims manifest (root + proofs) to this path",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Print the inclusion proof for one entitlement",
    )
    prove_parser.add_argument("records", type=str, help="Records JSON file")
    prove_parser.add_argument("--address", type=str, required=True, help="Account address")
    prove_parser.add_argument("--amount", type=str, required=True, help="Entitled amount")
    prove_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an entitlement against a Merkle root",
    )
    verify_parser.add_argument("--root", type=str, default=None, help="Merkle root (hex)")
    verify_parser.add_argument(
        "--claims",
        type=str,
        default=None,
        help="Claims manifest supplying the root and, if --proof is absent, the proof",
    )
    verify_parser.add_argument("--address", type=str, required=True, help="Account address")
    verify_parser.add_argument("--amount", type=str, required=True, help="Claimed amount")
    verify_parser.add_argument(
        "--proof",
        type=str,
        action="append",
        default=None,
        help="Proof element (hex); repeat in leaf-to-root order",
    )
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- snapshot command ---
    snapshot_parser = subparsers.add_parser(
        "snapshot",
        help="Aggregate delegation listings into a records file",
    )
    snapshot_parser.add_argument(
        "source",
        type=str,
        help="Delegations JSON file, or a directory of them (one per validator)",
    )
    snapshot_parser.add_argument("--out", "-o", type=str, required=True, help="Records output path")
    snapshot_parser.add_argument(
        "--min-amount",
        type=int,
        default=None,
        help="Drop delegators whose total is below this (default: from config)",
    )
    snapshot_parser.set_defaults(func=snapshot.snapshot_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show effective configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: airdrop config --show")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_runtime_config(args.config)
    except (FileNotFoundError, ConfigException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.logging.level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
