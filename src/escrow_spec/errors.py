"""Escrow spec error codes and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ErrorCategory(IntEnum):
    DECODE = 0x01
    AUTHORIZATION = 0x02
    RESOURCE = 0x03
    STATE = 0x04
    EXTERNAL = 0x05
    INTERNAL = 0xFF


class ErrorCode(IntEnum):
    # Decode
    INVALID_INSTRUCTION = 0x0100
    INVALID_ACCOUNT_DATA = 0x0101
    INVALID_ARGUMENT = 0x0102
    INVALID_SEEDS = 0x0103

    # Authorization
    MISSING_SIGNATURE = 0x0200
    WRONG_CUSTODY_SERVICE = 0x0201
    ACCOUNT_NOT_WRITABLE = 0x0202
    WRONG_ACCOUNT_OWNER = 0x0203

    # Resource
    NOT_RENT_EXEMPT = 0x0300
    MISSING_ACCOUNT = 0x0301

    # State
    ALREADY_INITIALIZED = 0x0400
    UNINITIALIZED_ACCOUNT = 0x0401

    # External calls
    DELEGATION_FAILED = 0x0500

    # Internal
    INTERNAL_ERROR = 0xFF00

    @property
    def category(self) -> ErrorCategory:
        return ErrorCategory(self.value >> 8)


@dataclass(frozen=True)
class SpecError(Exception):
    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.name}({self.code:#06x}): {self.message}"


# Allow Python's Exception machinery to set __traceback__/__context__/__cause__
# while keeping dataclass fields frozen (Python 3.13 contextlib compat).
_EXCEPTION_ATTRS = frozenset(("__traceback__", "__context__", "__cause__"))
_frozen_setattr = SpecError.__setattr__


def _spec_error_setattr(self: SpecError, name: str, value: object) -> None:
    if name in _EXCEPTION_ATTRS:
        object.__setattr__(self, name, value)
    else:
        _frozen_setattr(self, name, value)


SpecError.__setattr__ = _spec_error_setattr  # type: ignore[method-assign]


def err(code: ErrorCode, message: str) -> SpecError:
    return SpecError(code=code, message=message)
