"""
Delegation Snapshot Aggregation

Turns staking delegation listings into airdrop entitlements: every
delegator's balances are summed across all validators, and each delegator
with a positive total becomes one EntitlementRecord.

Input is whatever was exported from a staking API ahead of time (one JSON
document per validator, or one combined document). Fetching that data is
not done here.

Accepted entry shapes:
- LCD style:  {"delegation": {"delegator_address", "validator_address", "shares"},
               "balance": {"denom", "amount"}}
- Flat:       {"delegator_address", "validator_address", "amount"}
A document may be a list of entries or an object with a "result" list.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from airdrop_core.schemas.entitlement import AMOUNT_PATTERN, EntitlementRecord
from airdrop_core.schemas.errors import SnapshotParseError


logger = logging.getLogger(__name__)


class DelegationEntry(BaseModel):
    """A single delegator -> validator balance."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    delegator_address: str = Field(..., min_length=1)
    validator_address: str = Field(default="")
    amount: int = Field(..., ge=0, description="Delegated balance in base units")

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, v: Any) -> Any:
        """Balances arrive as integer strings; reject decimals and signs."""
        if isinstance(v, str):
            if not AMOUNT_PATTERN.fullmatch(v):
                raise ValueError(f"balance amount must be an integer string, got {v!r}")
            return int(v)
        return v


def _entry_fields(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, Mapping):
        raise TypeError(f"delegation entry must be an object, got {type(raw).__name__}")

    if "delegation" in raw:
        delegation = raw.get("delegation") or {}
        balance = raw.get("balance") or {}
        if not isinstance(delegation, Mapping) or not isinstance(balance, Mapping):
            raise TypeError("'delegation' and 'balance' must be objects")
        return {
            "delegator_address": delegation.get("delegator_address"),
            "validator_address": delegation.get("validator_address") or "",
            "amount": balance.get("amount"),
        }

    return {
        "delegator_address": raw.get("delegator_address"),
        "validator_address": raw.get("validator_address") or "",
        "amount": raw.get("amount"),
    }


def parse_delegations(payload: Any, source: str | None = None) -> list[DelegationEntry]:
    """
    Parse one delegation document into entries.

    Args:
        payload: Decoded JSON (list of entries, or object with a "result" list)
        source: Where the payload came from, for error reporting

    Raises:
        SnapshotParseError: If the document or any entry is malformed
    """
    if isinstance(payload, Mapping):
        if "result" not in payload:
            raise SnapshotParseError(
                "Delegation document has no 'result' list", source=source
            )
        payload = payload["result"]

    if not isinstance(payload, list):
        raise SnapshotParseError(
            f"Delegation document must be a list, got {type(payload).__name__}",
            source=source,
        )

    entries: list[DelegationEntry] = []
    for position, raw in enumerate(payload):
        try:
            entries.append(DelegationEntry.model_validate(_entry_fields(raw)))
        except (TypeError, ValidationError) as e:
            raise SnapshotParseError(
                f"Malformed delegation entry at position {position}: {e}",
                source=source,
                details={"position": position},
            ) from e

    return entries


def aggregate_delegations(entries: Iterable[DelegationEntry]) -> dict[str, int]:
    """Sum balances per delegator across all validators."""
    snapshot: dict[str, int] = {}
    for entry in entries:
        snapshot[entry.delegator_address] = snapshot.get(entry.delegator_address, 0) + entry.amount
    return snapshot


def snapshot_to_records(
    snapshot: Mapping[str, int],
    min_amount: int = 0,
) -> list[EntitlementRecord]:
    """
    Convert a delegator -> total map into entitlement records.

    Records are sorted by address. Delegators whose total is zero or below
    ``min_amount`` are left out.
    """
    records: list[EntitlementRecord] = []
    dropped = 0
    for address in sorted(snapshot):
        total = snapshot[address]
        if total <= 0 or total < min_amount:
            dropped += 1
            continue
        records.append(EntitlementRecord(address=address, amount=str(total)))

    if dropped:
        logger.info(f"Dropped {dropped} delegator(s) below minimum amount {min_amount}")
    return records


def load_delegations_file(path: str | Path) -> list[DelegationEntry]:
    """
    Load delegation entries from a JSON file, or from every *.json file in a
    directory (files read in name order).

    Raises:
        FileNotFoundError: If the path does not exist
        SnapshotParseError: If a file is not valid JSON or holds malformed entries
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Delegation source not found: {path}")

    files = sorted(path.glob("*.json")) if path.is_dir() else [path]
    if not files:
        logger.warning(f"No *.json files found in {path}")

    entries: list[DelegationEntry] = []
    for file in files:
        try:
            payload = json.loads(file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SnapshotParseError(f"Invalid JSON: {e}", source=str(file)) from e
        file_entries = parse_delegations(payload, source=str(file))
        logger.debug(f"Loaded {len(file_entries)} delegations from {file}")
        entries.extend(file_entries)

    return entries


def build_snapshot(path: str | Path, min_amount: int = 0) -> list[EntitlementRecord]:
    """Load, aggregate and convert delegations in one step."""
    entries = load_delegations_file(path)
    snapshot = aggregate_delegations(entries)
    logger.info(f"Snapshot: {len(entries)} delegations from {len(snapshot)} delegators")
    return snapshot_to_records(snapshot, min_amount=min_amount)


__all__ = [
    "DelegationEntry",
    "parse_delegations",
    "aggregate_delegations",
    "snapshot_to_records",
    "load_delegations_file",
    "build_snapshot",
]
