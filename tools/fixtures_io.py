"""Helpers to serialize/deserialize instruction fixtures for the escrow spec."""

from __future__ import annotations

from typing import Any

from escrow_spec.test_accounts import NAMES
from escrow_spec.types import AccountRef


def _hex_to_bytes(v: str) -> bytes:
    return bytes.fromhex(v)


def _bytes_to_hex(v: bytes) -> str:
    return bytes(v).hex()


def account_to_json(account: AccountRef) -> dict[str, Any]:
    out: dict[str, Any] = {
        "key": _bytes_to_hex(account.key),
        "is_signer": account.is_signer,
        "is_writable": account.is_writable,
        "owner": _bytes_to_hex(account.owner),
        "lamports": account.lamports,
        "data": _bytes_to_hex(account.data),
    }
    if account.executable:
        out["executable"] = True
    label = NAMES.get(bytes(account.key))
    if label is not None:
        out["label"] = label
    return out


def account_from_json(data: dict[str, Any]) -> AccountRef:
    return AccountRef(
        key=_hex_to_bytes(data["key"]),
        is_signer=data.get("is_signer", False),
        is_writable=data.get("is_writable", False),
        owner=_hex_to_bytes(data.get("owner", "00" * 32)),
        lamports=data.get("lamports", 0),
        data=bytearray(_hex_to_bytes(data.get("data", ""))),
        executable=data.get("executable", False),
    )


def accounts_to_json(accounts: list[AccountRef]) -> list[dict[str, Any]]:
    return [account_to_json(a) for a in accounts]


def accounts_from_json(data: list[dict[str, Any]]) -> list[AccountRef]:
    return [account_from_json(a) for a in data]
