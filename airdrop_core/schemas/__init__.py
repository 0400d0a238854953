"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
Entitlement records and the error taxonomy live here.
"""

# Entitlement records
from .entitlement import (
    AMOUNT_PATTERN,
    EntitlementRecord,
    coerce_record,
    leaf_preimage,
    parse_records,
    total_amount,
)

# Error models and exceptions
from .errors import (
    AirdropError,
    AirdropException,
    ConfigException,
    EmptyInputError,
    ErrorCodes,
    InvalidEntitlementException,
    NotFoundError,
    SnapshotParseError,
)

__all__ = [
    # Entitlements
    "AMOUNT_PATTERN",
    "EntitlementRecord",
    "coerce_record",
    "leaf_preimage",
    "parse_records",
    "total_amount",
    # Errors
    "AirdropError",
    "AirdropException",
    "ConfigException",
    "EmptyInputError",
    "ErrorCodes",
    "InvalidEntitlementException",
    "NotFoundError",
    "SnapshotParseError",
]
