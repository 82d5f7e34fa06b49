"""Canonical state digest over an account list (v1)."""
from __future__ import annotations

from typing import Any

from blake3 import blake3


def _hex_to_bytes(value: str | None) -> bytes:
    if value is None:
        return b""
    if not isinstance(value, str):
        raise TypeError("hex value must be string")
    v = value[2:] if value.startswith(("0x", "0X")) else value
    if v == "":
        return b""
    return bytes.fromhex(v)


def _u64_be(value: int) -> bytes:
    if value < 0:
        raise ValueError("u64 must be non-negative")
    return int(value).to_bytes(8, "big", signed=False)


def compute_state_digest(accounts: list[dict[str, Any]]) -> str:
    """Compute state digest v1 from exported accounts.

    Accounts are hashed in the order given (the order is part of the
    instruction's meaning) with BLAKE3-256.
    """
    buf = bytearray()
    buf += _u64_be(len(accounts))
    for acc in accounts:
        key = _hex_to_bytes(acc.get("key", ""))
        if len(key) != 32:
            raise ValueError(f"key must be 32 bytes, got {len(key)}")
        owner = _hex_to_bytes(acc.get("owner", ""))
        if len(owner) != 32:
            raise ValueError(f"owner must be 32 bytes, got {len(owner)}")
        buf += key
        buf += owner
        flags = (1 if acc.get("is_signer") else 0) | (2 if acc.get("is_writable") else 0)
        flags |= 4 if acc.get("executable") else 0
        buf += bytes([flags])
        buf += _u64_be(int(acc.get("lamports", 0)))
        data = _hex_to_bytes(acc.get("data", ""))
        buf += _u64_be(len(data))
        buf += data

    return blake3(buf).hexdigest()
