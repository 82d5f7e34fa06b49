"""Asset custody service boundary and an in-memory token program model.

The escrow program never moves tokens itself. It asks the custody service
(the token program) to hand ownership of the holding account to the
program-derived authority. ``TokenCustodyService`` models the part of the SPL
token program that call touches: the token account layout and SetAuthority
with the AccountOwner authority type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Protocol, Sequence

from .config import PUBKEY_LEN, TOKEN_ACCOUNT_LEN, TOKEN_PROGRAM_ID, TOKEN_SET_AUTHORITY_TAG
from .encoding import Reader, Writer, expect_exact_len
from .errors import ErrorCode, SpecError
from .types import AccountRef, Pubkey

logger = logging.getLogger(__name__)


class AuthorityType(IntEnum):
    MINT_TOKENS = 0
    FREEZE_ACCOUNT = 1
    ACCOUNT_OWNER = 2
    CLOSE_ACCOUNT = 3


class AccountState(IntEnum):
    UNINITIALIZED = 0
    INITIALIZED = 1
    FROZEN = 2


class CustodyService(Protocol):
    program_id: Pubkey

    def change_authority(
        self,
        target: AccountRef,
        new_authority: Pubkey,
        current_authority: AccountRef,
        signers: Sequence[AccountRef],
    ) -> None:
        ...


def set_authority_data(
    new_authority: Optional[Pubkey],
    authority_type: AuthorityType = AuthorityType.ACCOUNT_OWNER,
) -> bytes:
    """Encode the token program's SetAuthority instruction data."""
    w = Writer()
    w.write_u8(TOKEN_SET_AUTHORITY_TAG)
    w.write_u8(authority_type)
    if new_authority is None:
        w.write_u8(0)
    else:
        w.write_u8(1)
        w.write_pubkey(new_authority)
    return w.to_bytes()


@dataclass
class TokenAccount:
    mint: Pubkey
    owner: Pubkey
    amount: int = 0
    delegate: Optional[Pubkey] = None
    state: AccountState = AccountState.INITIALIZED
    is_native: Optional[int] = None
    delegated_amount: int = 0
    close_authority: Optional[Pubkey] = None

    def pack(self) -> bytes:
        w = Writer()
        w.write_pubkey(self.mint)
        w.write_pubkey(self.owner)
        w.write_u64(self.amount)
        w.write_coption_pubkey(self.delegate)
        w.write_u8(self.state)
        w.write_coption_u64(self.is_native)
        w.write_u64(self.delegated_amount)
        w.write_coption_pubkey(self.close_authority)
        return w.to_bytes()

    @classmethod
    def unpack(cls, data: bytes) -> "TokenAccount":
        expect_exact_len("token account", data, TOKEN_ACCOUNT_LEN)
        r = Reader(data)
        mint = r.read_pubkey()
        owner = r.read_pubkey()
        amount = r.read_u64()
        delegate = r.read_coption_pubkey()
        raw_state = r.read_u8()
        try:
            state = AccountState(raw_state)
        except ValueError:
            raise SpecError(ErrorCode.INVALID_ACCOUNT_DATA, f"invalid token account state {raw_state}")
        return cls(
            mint=mint,
            owner=owner,
            amount=amount,
            delegate=delegate,
            state=state,
            is_native=r.read_coption_u64(),
            delegated_amount=r.read_u64(),
            close_authority=r.read_coption_pubkey(),
        )


@dataclass
class AuthorityChange:
    target: Pubkey
    new_authority: Pubkey
    current_authority: Pubkey
    signers: List[Pubkey]
    data: bytes


def _delegation_failed(message: str) -> SpecError:
    return SpecError(ErrorCode.DELEGATION_FAILED, message)


@dataclass
class TokenCustodyService:
    """Token program model. Validates fully before mutating the target."""

    program_id: Pubkey = TOKEN_PROGRAM_ID
    calls: List[AuthorityChange] = field(default_factory=list)

    def change_authority(
        self,
        target: AccountRef,
        new_authority: Pubkey,
        current_authority: AccountRef,
        signers: Sequence[AccountRef],
    ) -> None:
        data = set_authority_data(new_authority)
        self.calls.append(
            AuthorityChange(
                target=target.key,
                new_authority=new_authority,
                current_authority=current_authority.key,
                signers=[s.key for s in signers],
                data=data,
            )
        )
        if len(new_authority) != PUBKEY_LEN:
            raise _delegation_failed("new authority must be 32 bytes")
        if target.owner != self.program_id:
            raise _delegation_failed("target account is not owned by the token program")
        if not target.is_writable:
            raise _delegation_failed("target account is not writable")
        try:
            account = TokenAccount.unpack(bytes(target.data))
        except SpecError as exc:
            raise _delegation_failed(f"target is not a token account: {exc.message}") from exc
        if account.state == AccountState.UNINITIALIZED:
            raise _delegation_failed("token account is uninitialized")
        if account.state == AccountState.FROZEN:
            raise _delegation_failed("token account is frozen")
        if account.owner != current_authority.key:
            raise _delegation_failed("owner does not match current authority")
        if not any(s.key == current_authority.key and s.is_signer for s in signers):
            raise _delegation_failed("current authority did not sign")

        account.owner = new_authority
        account.delegate = None
        account.delegated_amount = 0
        if account.is_native is not None:
            account.close_authority = None
        target.data[:] = account.pack()
        logger.debug("token account %s owner set to %s", target.key.hex(), new_authority.hex())


def token_account_ref(
    key: Pubkey,
    mint: Pubkey,
    owner: Pubkey,
    amount: int = 0,
    lamports: int = 2_039_280,
    state: AccountState = AccountState.INITIALIZED,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> AccountRef:
    """Account reference for a token account owned by the token program."""
    account = TokenAccount(mint=mint, owner=owner, amount=amount, state=state)
    return AccountRef(
        key=key,
        is_writable=True,
        owner=program_id,
        lamports=lamports,
        data=bytearray(account.pack()),
    )
