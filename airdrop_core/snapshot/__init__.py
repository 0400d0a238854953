"""
Snapshot aggregation: delegation listings -> entitlement records.
"""
from .aggregate import (
    DelegationEntry,
    parse_delegations,
    aggregate_delegations,
    snapshot_to_records,
    load_delegations_file,
    build_snapshot,
)

__all__ = [
    "DelegationEntry",
    "parse_delegations",
    "aggregate_delegations",
    "snapshot_to_records",
    "load_delegations_file",
    "build_snapshot",
]
