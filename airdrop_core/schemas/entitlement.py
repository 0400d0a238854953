"""
Schemas
File: entitlement.py

Purpose: Entitlement record schema, the input unit of the Merkle commitment.
One record is one claimable (address, amount) allocation.
"""

import re
from collections.abc import Mapping
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidEntitlementException

# Non-negative base-10 integer; leading zeros allowed, no sign, no exponent.
# Match with fullmatch().
AMOUNT_PATTERN = re.compile(r"[0-9]+")


def leaf_preimage(address: str, amount: str) -> bytes:
    """Bytes hashed into the leaf of an (address, amount) entitlement."""
    return (address + amount).encode("utf-8")


class EntitlementRecord(BaseModel):
    """
    A single (address, amount) entitlement.

    Both fields are hashed exactly as given: the leaf is
    keccak256(address + amount) over the UTF-8 bytes, so "0100" and "100"
    are different entitlements.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="Recipient account address", min_length=1)
    amount: str = Field(..., description="Claimable amount as a base-10 integer string")

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_int_amount(cls, v: Any) -> Any:
        """Accept Python ints and render them in base 10."""
        if isinstance(v, bool):
            raise ValueError("amount must be an integer string, not a boolean")
        if isinstance(v, int):
            if v < 0:
                raise ValueError(f"amount must be non-negative, got {v}")
            return str(v)
        return v

    @field_validator("amount")
    @classmethod
    def validate_amount_digits(cls, v: str) -> str:
        """Ensure amount is a non-negative base-10 integer string."""
        if not AMOUNT_PATTERN.fullmatch(v):
            raise ValueError(
                f"amount must be a non-negative base-10 integer string, got {v!r}"
            )
        return v

    @property
    def leaf_preimage(self) -> bytes:
        """Bytes hashed into this record's leaf."""
        return leaf_preimage(self.address, self.amount)

    @property
    def amount_value(self) -> int:
        """Amount as an integer."""
        return int(self.amount)


def coerce_record(obj: Any) -> EntitlementRecord:
    """
    Build an EntitlementRecord from a record, a mapping, or an (address, amount) pair.

    Raises:
        InvalidEntitlementException: If the input does not describe a valid record
    """
    if isinstance(obj, EntitlementRecord):
        return obj

    try:
        if isinstance(obj, Mapping):
            return EntitlementRecord.model_validate(dict(obj))
        if isinstance(obj, (tuple, list)) and len(obj) == 2:
            return EntitlementRecord(address=obj[0], amount=obj[1])
    except ValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(p) for p in first.get("loc", ()))
        raise InvalidEntitlementException(
            f"Invalid entitlement record: {first.get('msg')}",
            field_path=field_path or None,
            details={"input": repr(obj)[:200]},
        ) from e

    raise InvalidEntitlementException(
        f"Cannot interpret {type(obj).__name__} as an entitlement record",
        details={"input": repr(obj)[:200]},
    )


def parse_records(data: Any) -> list[EntitlementRecord]:
    """
    Parse the records document used by the CLI.

    Accepts either a list of {"address", "amount"} objects (order preserved)
    or a mapping of address -> amount.
    """
    if isinstance(data, Mapping):
        items: Iterable[Any] = data.items()
    elif isinstance(data, list):
        items = data
    else:
        raise InvalidEntitlementException(
            f"Records must be a list or an object, got {type(data).__name__}"
        )
    return [coerce_record(item) for item in items]


def total_amount(records: Iterable[EntitlementRecord]) -> int:
    """Sum of all record amounts."""
    return sum(record.amount_value for record in records)
