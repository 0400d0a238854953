"""
CLI command modules.
"""

from airdrop_cli.commands import build, prove, verify, snapshot

__all__ = ["build", "prove", "verify", "snapshot"]
