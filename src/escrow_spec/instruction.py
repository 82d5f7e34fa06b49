"""Escrow instruction set: decoding, encoding and client-side builders.

Wire layout::

    [0]     tag     u8   (0 = InitEscrow)
    [1..9]  amount  u64  little-endian (InitEscrow only)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .config import INIT_ESCROW_TAG, RENT_SYSVAR_ID, TOKEN_PROGRAM_ID, U64_MAX
from .encoding import Reader, Writer
from .errors import ErrorCode, SpecError
from .types import AccountMeta, Instruction, Pubkey


@dataclass(frozen=True)
class InitEscrow:
    """Start the trade: record the terms and hand the holding account to the program.

    Accounts expected:

    0. ``[signer]`` the initializer
    1. ``[writable]`` temporary token account holding the deposited asset
    2. ``[]`` initializer's token account for the token they will receive
    3. ``[writable]`` escrow record storage
    4. ``[]`` rent sysvar
    5. ``[]`` token program
    """

    amount: int

    TAG = INIT_ESCROW_TAG

    def pack(self) -> bytes:
        if not 0 <= self.amount <= U64_MAX:
            raise SpecError(ErrorCode.INVALID_ARGUMENT, "amount must fit u64")
        w = Writer()
        w.write_u8(self.TAG)
        w.write_u64(self.amount)
        return w.to_bytes()


EscrowInstruction = Union[InitEscrow]


def unpack(data: bytes) -> EscrowInstruction:
    """Decode instruction data into one of the known variants."""
    if not data:
        raise SpecError(ErrorCode.INVALID_INSTRUCTION, "empty instruction data")
    r = Reader(data, error_code=ErrorCode.INVALID_INSTRUCTION)
    tag = r.read_u8()
    if tag == InitEscrow.TAG:
        return InitEscrow(amount=r.read_u64())
    raise SpecError(ErrorCode.INVALID_INSTRUCTION, f"unknown instruction tag {tag}")


def pack(instruction: EscrowInstruction) -> bytes:
    return instruction.pack()


def init_escrow(
    program_id: Pubkey,
    initializer: Pubkey,
    temp_token_account: Pubkey,
    token_to_receive_account: Pubkey,
    escrow_account: Pubkey,
    amount: int,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build an InitEscrow instruction with accounts in processor order."""
    return Instruction(
        program_id=program_id,
        accounts=[
            AccountMeta.readonly(initializer, is_signer=True),
            AccountMeta.writable(temp_token_account),
            AccountMeta.readonly(token_to_receive_account),
            AccountMeta.writable(escrow_account),
            AccountMeta.readonly(RENT_SYSVAR_ID),
            AccountMeta.readonly(token_program_id),
        ],
        data=InitEscrow(amount).pack(),
    )
