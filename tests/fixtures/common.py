"""
Common test fixtures shared by all modules.

Provides factory functions and reference vectors for:
- Entitlement records
- Delegation listings (LCD shape)
- JSON files on disk

Reference digests were computed independently of this code base with a
separate Keccak-256 implementation.
"""

import json
from pathlib import Path
from typing import Any

from airdrop_core.schemas.entitlement import EntitlementRecord


# =============================================================================
# Reference Records
# =============================================================================

TWO_RECORDS = [
    {"address": "addr1", "amount": "100"},
    {"address": "addr2", "amount": "50"},
]

THREE_RECORDS = TWO_RECORDS + [
    {"address": "addr3", "amount": "25"},
]

FIVE_RECORDS = THREE_RECORDS + [
    {"address": "addr4", "amount": "75"},
    {"address": "addr5", "amount": "10"},
]


# =============================================================================
# Reference Digests (keccak256)
# =============================================================================

LEAF_ADDR1_100 = "0xfa57121d31ffcb89270345d07e1a739b68fa1e14c6915fe7588901b9c8ad5360"
LEAF_ADDR2_50 = "0xf1170464935c842f8e8de74e7215ebc5f398d81355fe045d680df6b2dc7ff7a6"
LEAF_ADDR3_25 = "0x809ed40376f3da1df3fcdd6948e363d37f3e5ebaff1edb947d1f465bd1cfee97"
LEAF_ADDR4_75 = "0x2b3fbb33398187cec7303f2a8a605365322c3f92d41f6fc67716851162b0df8d"
LEAF_ADDR5_10 = "0x6de42f982d451753617d55715fe0cdfc755077a6ee2409c26f21e655caa4d1b9"
LEAF_ADDR1_999 = "0x0124b1d070cf328fef2caccef8093a48ed3db440c625961a66cd0d4563d258c5"
LEAF_ADDR1_0100 = "0xd9e4d368574d899738bda8a3f43793efadaa4630f07bfa68fe746a0d69f7f563"

# parent(addr3, addr2) in the three-record tree
NODE_ADDR3_ADDR2 = "0xc4649eb4478dfa43d525d7e83fc42bf66211fc1913f0baf6744ab975e7dff199"
# parent(addr4, addr5) in the five-record tree
NODE_ADDR4_ADDR5 = "0xc440d8a52871b3b8132b15061bbe9006ab77fcc25bf03f7e1921e6afd2d454da"
# parent(NODE_ADDR4_ADDR5, NODE_ADDR3_ADDR2)
NODE_FIVE_LEVEL2 = "0x762951cf20508e262038e30d61daf31488da156a8d3df21d20af98302aef3654"

ROOT_TWO = "0x2fd0f865d297bee66be8abbd549e9f490b25c3455c2f5594c195b1ab92dda9a6"
ROOT_THREE = "0x9c4208c20cbb8f1ddbbd421af23b996234f83ba61d37a247a1e7fff1179ee2f1"
ROOT_FIVE = "0x51d67caabff8ba4a88e9635156ec039905eba9075a8a53142e003eb9721d4863"

KECCAK_EMPTY = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
KECCAK_HELLO = "1c8aff950685c2ed4bc3174f3472287b56d9517b9c948127319a09a7a36deac8"


# =============================================================================
# Factories
# =============================================================================

def make_records(count: int, base_amount: int = 1000) -> list[EntitlementRecord]:
    """
    Create ``count`` distinct records.

    Args:
        count: Number of records
        base_amount: Amount of the first record; each next one adds 7

    Returns:
        List of EntitlementRecord in creation order
    """
    return [
        EntitlementRecord(address=f"terra1account{i:04d}", amount=str(base_amount + 7 * i))
        for i in range(count)
    ]


def make_lcd_delegation(
    delegator: str,
    validator: str,
    amount: str,
    denom: str = "uluna",
) -> dict[str, Any]:
    """Create one delegation entry in LCD response shape."""
    return {
        "delegation": {
            "delegator_address": delegator,
            "validator_address": validator,
            "shares": f"{amount}.000000000000000000",
        },
        "balance": {
            "denom": denom,
            "amount": amount,
        },
    }


def write_json(path: Path, obj: Any) -> Path:
    """Write ``obj`` as JSON to ``path`` and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")
    return path
