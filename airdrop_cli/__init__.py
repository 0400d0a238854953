"""
Airdrop CLI

Command-line interface for the airdrop Merkle commitment.

Usage:
    python -m airdrop_cli build records.json --out claims.json
    python -m airdrop_cli prove records.json --address ADDR --amount N
    python -m airdrop_cli verify --claims claims.json --address ADDR --amount N
    python -m airdrop_cli snapshot delegations/ --out records.json
    python -m airdrop_cli config --show
"""

__version__ = "0.1.0"
