"""Escrow program processor: instruction dispatch and InitEscrow."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import ESCROW_SEED, INIT_ESCROW_ACCOUNT_COUNT
from .crypto.derived_address import find_program_address
from .custody import CustodyService, TokenCustodyService
from .errors import ErrorCode, SpecError
from .instruction import InitEscrow, unpack
from .rent import Rent
from .state import EscrowRecord
from .types import AccountRef, Pubkey

logger = logging.getLogger(__name__)


def escrow_authority(program_id: Pubkey) -> tuple[Pubkey, int]:
    """Authority the holding account is handed to. Recomputed, never stored."""
    return find_program_address([ESCROW_SEED], program_id)


def _reject(code: ErrorCode, message: str) -> SpecError:
    logger.debug("InitEscrow rejected: %s", message)
    return SpecError(code, message)


class Processor:
    @staticmethod
    def process(
        program_id: Pubkey,
        accounts: Sequence[AccountRef],
        instruction_data: bytes,
        custody: Optional[CustodyService] = None,
    ) -> None:
        instruction = unpack(instruction_data)
        custody = custody if custody is not None else TokenCustodyService()

        if isinstance(instruction, InitEscrow):
            logger.info("Instruction: InitEscrow")
            return Processor.process_init_escrow(accounts, instruction.amount, program_id, custody)

        raise SpecError(ErrorCode.INVALID_INSTRUCTION, f"unhandled instruction {instruction!r}")

    @staticmethod
    def process_init_escrow(
        accounts: Sequence[AccountRef],
        amount: int,
        program_id: Pubkey,
        custody: CustodyService,
    ) -> None:
        if len(accounts) < INIT_ESCROW_ACCOUNT_COUNT:
            raise _reject(
                ErrorCode.MISSING_ACCOUNT,
                f"expected {INIT_ESCROW_ACCOUNT_COUNT} accounts, got {len(accounts)}",
            )
        (
            initializer,
            temp_token_account,
            token_to_receive_account,
            escrow_account,
            rent_account,
            token_program,
        ) = accounts[:INIT_ESCROW_ACCOUNT_COUNT]

        if not initializer.is_signer:
            raise _reject(ErrorCode.MISSING_SIGNATURE, "initializer must sign")

        # The receiving account must belong to the service that will settle the swap.
        if token_to_receive_account.owner != custody.program_id:
            raise _reject(
                ErrorCode.WRONG_CUSTODY_SERVICE,
                "receiving account is not owned by the custody service",
            )

        rent = Rent.from_account(rent_account)
        if not rent.is_exempt(escrow_account.lamports, escrow_account.data_len()):
            raise _reject(ErrorCode.NOT_RENT_EXEMPT, "escrow account is not rent exempt")

        escrow_info = EscrowRecord.unpack_unchecked(bytes(escrow_account.data))
        if escrow_info.is_initialized:
            raise _reject(ErrorCode.ALREADY_INITIALIZED, "escrow account already initialized")

        if token_program.key != custody.program_id:
            raise _reject(
                ErrorCode.WRONG_CUSTODY_SERVICE,
                "custody service reference does not match the custody program",
            )

        # The runtime only lets a program write data it owns, through a writable reference.
        if not escrow_account.is_writable:
            raise _reject(ErrorCode.ACCOUNT_NOT_WRITABLE, "escrow account is not writable")
        if escrow_account.owner != program_id:
            raise _reject(ErrorCode.WRONG_ACCOUNT_OWNER, "escrow account is not owned by the program")

        escrow_info.is_initialized = True
        escrow_info.initializer_pubkey = initializer.key
        escrow_info.temp_token_account_pubkey = temp_token_account.key
        escrow_info.initializer_token_to_receive_account_pubkey = token_to_receive_account.key
        escrow_info.expected_amount = amount
        packed = escrow_info.pack()

        pda, _bump_seed = escrow_authority(program_id)

        # Record is written only once the custody handoff has succeeded.
        logger.info("Calling the custody service to transfer holding account ownership")
        try:
            custody.change_authority(
                temp_token_account,
                pda,
                initializer,
                [initializer],
            )
        except SpecError as exc:
            if exc.code == ErrorCode.DELEGATION_FAILED:
                raise
            raise SpecError(ErrorCode.DELEGATION_FAILED, exc.message) from exc
        except Exception as exc:
            raise SpecError(ErrorCode.DELEGATION_FAILED, f"custody call failed: {exc!r}") from exc

        escrow_account.data[:] = packed
