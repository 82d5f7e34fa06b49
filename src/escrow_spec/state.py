"""Persisted escrow record and its fixed-width layout.

Layout (105 bytes, little-endian)::

    [0]       is_initialized                               u8 (1 = initialized)
    [1..33]   initializer_pubkey                           32 bytes
    [33..65]  temp_token_account_pubkey                    32 bytes
    [65..97]  initializer_token_to_receive_account_pubkey  32 bytes
    [97..105] expected_amount                              u64
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import ESCROW_RECORD_LEN, PUBKEY_LEN, U64_MAX
from .encoding import Reader, Writer, expect_exact_len
from .errors import ErrorCode, SpecError


@dataclass
class EscrowRecord:
    is_initialized: bool = False
    initializer_pubkey: bytes = bytes(PUBKEY_LEN)
    temp_token_account_pubkey: bytes = bytes(PUBKEY_LEN)
    initializer_token_to_receive_account_pubkey: bytes = bytes(PUBKEY_LEN)
    expected_amount: int = 0

    LEN = ESCROW_RECORD_LEN

    def pack(self) -> bytes:
        if not 0 <= self.expected_amount <= U64_MAX:
            raise SpecError(ErrorCode.INVALID_ARGUMENT, "expected_amount must fit u64")
        w = Writer()
        w.write_bool(self.is_initialized)
        w.write_pubkey(self.initializer_pubkey)
        w.write_pubkey(self.temp_token_account_pubkey)
        w.write_pubkey(self.initializer_token_to_receive_account_pubkey)
        w.write_u64(self.expected_amount)
        return w.to_bytes()

    def pack_into(self, dst: bytearray) -> None:
        expect_exact_len("escrow record", dst, self.LEN)
        dst[:] = self.pack()

    @classmethod
    def unpack_unchecked(cls, data: bytes) -> "EscrowRecord":
        """Decode without requiring an initialized record.

        Zeroed or garbage storage decodes to a usable value; only a flag byte
        of exactly 1 counts as initialized.
        """
        expect_exact_len("escrow record", data, cls.LEN)
        r = Reader(data)
        return cls(
            is_initialized=r.read_u8() == 1,
            initializer_pubkey=r.read_pubkey(),
            temp_token_account_pubkey=r.read_pubkey(),
            initializer_token_to_receive_account_pubkey=r.read_pubkey(),
            expected_amount=r.read_u64(),
        )

    @classmethod
    def unpack(cls, data: bytes) -> "EscrowRecord":
        record = cls.unpack_unchecked(data)
        if not record.is_initialized:
            raise SpecError(ErrorCode.UNINITIALIZED_ACCOUNT, "escrow record not initialized")
        return record
