"""
Test fixtures package for the airdrop commitment tests.

- common.py: reference records, reference digests and factories

Usage:
    from fixtures.common import make_records, ROOT_TWO
"""

from .common import (
    make_records,
    make_lcd_delegation,
    write_json,
)

__all__ = [
    "make_records",
    "make_lcd_delegation",
    "write_json",
]
