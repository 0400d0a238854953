"""
Claims manifests: the root and per-account proofs handed out for an airdrop round.
"""
from .manifest import (
    MANIFEST_VERSION,
    AirdropClaim,
    ClaimsManifest,
    build_claims_manifest,
    save_claims_manifest,
    load_claims_manifest,
)

__all__ = [
    "MANIFEST_VERSION",
    "AirdropClaim",
    "ClaimsManifest",
    "build_claims_manifest",
    "save_claims_manifest",
    "load_claims_manifest",
]
