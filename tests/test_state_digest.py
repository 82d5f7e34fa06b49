"""State digest specs."""

from __future__ import annotations

import pytest

from escrow_spec.config import TOKEN_PROGRAM_ID
from escrow_spec.state_digest import compute_state_digest
from escrow_spec.test_accounts import ALICE, BOB
from escrow_spec.types import AccountRef
from tools.fixtures_io import accounts_from_json, accounts_to_json


def _accounts() -> list[AccountRef]:
    return [
        AccountRef(key=ALICE, is_signer=True, lamports=5),
        AccountRef(key=BOB, is_writable=True, owner=TOKEN_PROGRAM_ID, data=bytearray(b"\x01\x02")),
    ]


def test_digest_is_stable() -> None:
    exported = accounts_to_json(_accounts())
    digest = compute_state_digest(exported)
    assert digest == compute_state_digest(accounts_to_json(accounts_from_json(exported)))
    assert len(digest) == 64


def test_digest_tracks_data_and_order() -> None:
    base = compute_state_digest(accounts_to_json(_accounts()))

    changed = _accounts()
    changed[1].data[0] = 0xFF
    assert compute_state_digest(accounts_to_json(changed)) != base

    assert compute_state_digest(accounts_to_json(list(reversed(_accounts())))) != base

    flagged = _accounts()
    flagged[0].is_signer = False
    assert compute_state_digest(accounts_to_json(flagged)) != base


def test_digest_rejects_bad_key() -> None:
    with pytest.raises(ValueError):
        compute_state_digest([{"key": "abcd", "owner": "00" * 32}])
