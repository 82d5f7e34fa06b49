"""Rent oracle: decides whether an account balance is exempt from rent collection."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import (
    ACCOUNT_STORAGE_OVERHEAD,
    DEFAULT_BURN_PERCENT,
    DEFAULT_EXEMPTION_THRESHOLD,
    DEFAULT_LAMPORTS_PER_BYTE_YEAR,
    RENT_SYSVAR_DATA_LEN,
    RENT_SYSVAR_ID,
)
from .encoding import Reader, Writer
from .errors import ErrorCode, SpecError
from .types import AccountRef


@dataclass(frozen=True)
class Rent:
    lamports_per_byte_year: int = DEFAULT_LAMPORTS_PER_BYTE_YEAR
    exemption_threshold: float = DEFAULT_EXEMPTION_THRESHOLD
    burn_percent: int = DEFAULT_BURN_PERCENT

    def __post_init__(self) -> None:
        if not math.isfinite(self.exemption_threshold) or self.exemption_threshold < 0:
            raise SpecError(
                ErrorCode.INVALID_ARGUMENT,
                f"invalid rent exemption threshold {self.exemption_threshold!r}",
            )

    def minimum_balance(self, data_len: int) -> int:
        """Lamports an account of ``data_len`` bytes must hold to be exempt."""
        bytes_total = ACCOUNT_STORAGE_OVERHEAD + data_len
        return int(bytes_total * self.lamports_per_byte_year * self.exemption_threshold)

    def is_exempt(self, balance: int, data_len: int) -> bool:
        return balance >= self.minimum_balance(data_len)

    def to_account_data(self) -> bytes:
        w = Writer()
        w.write_u64(self.lamports_per_byte_year)
        w.write_f64(self.exemption_threshold)
        w.write_u8(self.burn_percent)
        return w.to_bytes()

    @classmethod
    def from_account_data(cls, data: bytes) -> "Rent":
        if len(data) < RENT_SYSVAR_DATA_LEN:
            raise SpecError(ErrorCode.INVALID_ARGUMENT, "rent sysvar data too short")
        r = Reader(data, error_code=ErrorCode.INVALID_ARGUMENT)
        return cls(
            lamports_per_byte_year=r.read_u64(),
            exemption_threshold=r.read_f64(),
            burn_percent=r.read_u8(),
        )

    @classmethod
    def from_account(cls, account: AccountRef) -> "Rent":
        if account.key != RENT_SYSVAR_ID:
            raise SpecError(ErrorCode.INVALID_ARGUMENT, "account is not the rent sysvar")
        return cls.from_account_data(bytes(account.data))


def rent_sysvar_account(rent: Rent | None = None) -> AccountRef:
    """Account reference carrying the given (or default) rent parameters."""
    rent = rent or Rent()
    return AccountRef(
        key=RENT_SYSVAR_ID,
        data=bytearray(rent.to_account_data()),
        lamports=1,
    )
