"""Core types for the escrow Python spec.

Accounts are modeled the way the runtime hands them to a program: an ordered
list of references carrying the key, signer/writable flags, the owning
program, the lamport balance and a mutable data buffer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

Pubkey = bytes


@dataclass
class AccountRef:
    key: Pubkey
    is_signer: bool = False
    is_writable: bool = False
    owner: Pubkey = bytes(32)
    lamports: int = 0
    data: bytearray = field(default_factory=bytearray)
    executable: bool = False

    def data_len(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class AccountMeta:
    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def writable(cls, pubkey: Pubkey, is_signer: bool = False) -> "AccountMeta":
        return cls(pubkey, is_signer, True)

    @classmethod
    def readonly(cls, pubkey: Pubkey, is_signer: bool = False) -> "AccountMeta":
        return cls(pubkey, is_signer, False)


@dataclass
class Instruction:
    program_id: Pubkey
    accounts: List[AccountMeta]
    data: bytes
