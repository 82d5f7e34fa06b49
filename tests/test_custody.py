"""Token custody service model specs."""

from __future__ import annotations

import pytest

from escrow_spec.config import TOKEN_ACCOUNT_LEN, TOKEN_PROGRAM_ID
from escrow_spec.custody import (
    AccountState,
    AuthorityType,
    TokenAccount,
    TokenCustodyService,
    set_authority_data,
    token_account_ref,
)
from escrow_spec.errors import ErrorCode, SpecError
from escrow_spec.test_accounts import ALICE, ALICE_TEMP_X, BOB, FOREIGN_PROGRAM, MINT_X
from escrow_spec.types import AccountRef

NEW_AUTHORITY = bytes([9]) * 32


def _alice(is_signer: bool = True) -> AccountRef:
    return AccountRef(key=ALICE, is_signer=is_signer)


def _holding(**kwargs) -> AccountRef:
    return token_account_ref(ALICE_TEMP_X, MINT_X, owner=ALICE, amount=500, **kwargs)


def _expect_failure(target: AccountRef, signer: AccountRef) -> SpecError:
    service = TokenCustodyService()
    before = bytes(target.data)
    with pytest.raises(SpecError) as exc_info:
        service.change_authority(target, NEW_AUTHORITY, signer, [signer])
    assert bytes(target.data) == before
    assert exc_info.value.code == ErrorCode.DELEGATION_FAILED
    return exc_info.value


def test_set_authority_data_layout() -> None:
    assert set_authority_data(NEW_AUTHORITY) == bytes([6, 2, 1]) + NEW_AUTHORITY
    assert set_authority_data(None, AuthorityType.CLOSE_ACCOUNT) == bytes([6, 3, 0])


def test_token_account_layout() -> None:
    account = TokenAccount(mint=MINT_X, owner=ALICE, amount=500, delegate=BOB, delegated_amount=10)
    data = account.pack()
    assert len(data) == TOKEN_ACCOUNT_LEN
    assert data[32:64] == ALICE
    assert TokenAccount.unpack(data) == account


def test_token_account_rejects_bad_state() -> None:
    data = bytearray(TokenAccount(mint=MINT_X, owner=ALICE).pack())
    data[108] = 9
    with pytest.raises(SpecError) as exc_info:
        TokenAccount.unpack(bytes(data))
    assert exc_info.value.code == ErrorCode.INVALID_ACCOUNT_DATA


def test_change_authority_success() -> None:
    service = TokenCustodyService()
    target = token_account_ref(ALICE_TEMP_X, MINT_X, owner=ALICE, amount=500)
    account = TokenAccount.unpack(bytes(target.data))
    account.delegate = BOB
    account.delegated_amount = 100
    target.data[:] = account.pack()

    service.change_authority(target, NEW_AUTHORITY, _alice(), [_alice()])

    updated = TokenAccount.unpack(bytes(target.data))
    assert updated.owner == NEW_AUTHORITY
    assert updated.delegate is None
    assert updated.delegated_amount == 0
    assert updated.amount == 500
    assert len(service.calls) == 1
    assert service.calls[0].data == set_authority_data(NEW_AUTHORITY)


def test_change_authority_requires_signature() -> None:
    err = _expect_failure(_holding(), _alice(is_signer=False))
    assert "sign" in err.message


def test_change_authority_owner_mismatch() -> None:
    target = token_account_ref(ALICE_TEMP_X, MINT_X, owner=BOB)
    _expect_failure(target, _alice())


def test_change_authority_frozen() -> None:
    _expect_failure(_holding(state=AccountState.FROZEN), _alice())


def test_change_authority_uninitialized() -> None:
    _expect_failure(_holding(state=AccountState.UNINITIALIZED), _alice())


def test_change_authority_foreign_owner_program() -> None:
    _expect_failure(_holding(program_id=FOREIGN_PROGRAM), _alice())


def test_change_authority_not_a_token_account() -> None:
    target = AccountRef(key=ALICE_TEMP_X, is_writable=True, owner=TOKEN_PROGRAM_ID, data=bytearray(12))
    _expect_failure(target, _alice())


def test_change_authority_readonly_target() -> None:
    target = _holding()
    target.is_writable = False
    _expect_failure(target, _alice())
