"""Fixed-width little-endian codec helpers shared by instructions and records."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Optional

from .config import PUBKEY_LEN
from .errors import ErrorCode, SpecError


@dataclass
class Writer:
    buf: bytearray = field(default_factory=bytearray)

    def write_u8(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(1, "little", signed=False))

    def write_u32(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(4, "little", signed=False))

    def write_u64(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(8, "little", signed=False))

    def write_f64(self, v: float) -> None:
        self.buf.extend(struct.pack("<d", v))

    def write_bytes(self, b: bytes) -> None:
        self.buf.extend(b)

    def write_bool(self, v: bool) -> None:
        self.write_u8(1 if v else 0)

    def write_pubkey(self, value: bytes) -> None:
        _expect_len("public_key", value, PUBKEY_LEN)
        self.write_bytes(value)

    def write_coption_pubkey(self, value: Optional[bytes]) -> None:
        # COption<Pubkey>: u32 tag + 32 bytes, zero-filled when absent
        if value is None:
            self.write_u32(0)
            self.write_bytes(bytes(PUBKEY_LEN))
            return
        self.write_u32(1)
        self.write_pubkey(value)

    def write_coption_u64(self, value: Optional[int]) -> None:
        self.write_u32(0 if value is None else 1)
        self.write_u64(0 if value is None else value)

    def to_bytes(self) -> bytes:
        return bytes(self.buf)


class Reader:
    """Cursor over a byte buffer. Short reads raise ``error_code``."""

    def __init__(self, data: bytes, error_code: ErrorCode = ErrorCode.INVALID_ACCOUNT_DATA):
        self.data = bytes(data)
        self.pos = 0
        self.error_code = error_code

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def read_bytes(self, n: int) -> bytes:
        if self.remaining() < n:
            raise SpecError(self.error_code, f"need {n} bytes at offset {self.pos}")
        out = self.data[self.pos : self.pos + n]
        self.pos += n
        return out

    def read_u8(self) -> int:
        return self.read_bytes(1)[0]

    def read_u32(self) -> int:
        return int.from_bytes(self.read_bytes(4), "little")

    def read_u64(self) -> int:
        return int.from_bytes(self.read_bytes(8), "little")

    def read_f64(self) -> float:
        return struct.unpack("<d", self.read_bytes(8))[0]

    def read_pubkey(self) -> bytes:
        return self.read_bytes(PUBKEY_LEN)

    def read_coption_pubkey(self) -> Optional[bytes]:
        tag = self.read_u32()
        key = self.read_pubkey()
        if tag == 0:
            return None
        if tag == 1:
            return key
        raise SpecError(self.error_code, f"invalid COption tag {tag}")

    def read_coption_u64(self) -> Optional[int]:
        tag = self.read_u32()
        value = self.read_u64()
        if tag == 0:
            return None
        if tag == 1:
            return value
        raise SpecError(self.error_code, f"invalid COption tag {tag}")


def _expect_len(name: str, value: bytes, size: int) -> None:
    if len(value) != size:
        raise SpecError(ErrorCode.INVALID_ARGUMENT, f"{name} must be {size} bytes")


def expect_exact_len(name: str, data: bytes, size: int) -> None:
    if len(data) != size:
        raise SpecError(
            ErrorCode.INVALID_ACCOUNT_DATA,
            f"{name} must be {size} bytes, got {len(data)}",
        )
