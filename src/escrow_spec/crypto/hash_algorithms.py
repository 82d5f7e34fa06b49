"""Hash helpers: BLAKE3 for identities and digests, SHA-256 for derived addresses."""

from __future__ import annotations

import hashlib

from blake3 import blake3


def blake3_hash(data: bytes) -> bytes:
    return blake3(data).digest()


def sha256_hash(*parts: bytes) -> bytes:
    hasher = hashlib.sha256()
    for part in parts:
        hasher.update(part)
    return hasher.digest()
