"""Error taxonomy specs."""

from __future__ import annotations

from escrow_spec.errors import ErrorCategory, ErrorCode, SpecError, err


def test_error_categories() -> None:
    assert ErrorCode.INVALID_INSTRUCTION.category == ErrorCategory.DECODE
    assert ErrorCode.MISSING_SIGNATURE.category == ErrorCategory.AUTHORIZATION
    assert ErrorCode.NOT_RENT_EXEMPT.category == ErrorCategory.RESOURCE
    assert ErrorCode.ALREADY_INITIALIZED.category == ErrorCategory.STATE
    assert ErrorCode.DELEGATION_FAILED.category == ErrorCategory.EXTERNAL


def test_error_codes_are_distinct() -> None:
    codes = [c.value for c in ErrorCode]
    assert len(codes) == len(set(codes))


def test_spec_error_str() -> None:
    e = err(ErrorCode.NOT_RENT_EXEMPT, "escrow account is not rent exempt")
    assert isinstance(e, SpecError)
    assert str(e) == "NOT_RENT_EXEMPT(0x0300): escrow account is not rent exempt"


def test_spec_error_can_be_chained() -> None:
    try:
        try:
            raise err(ErrorCode.INTERNAL_ERROR, "inner")
        except SpecError as inner:
            raise err(ErrorCode.DELEGATION_FAILED, "outer") from inner
    except SpecError as outer:
        assert outer.__cause__ is not None
        assert outer.code == ErrorCode.DELEGATION_FAILED


def test_every_code_has_a_category() -> None:
    for code in ErrorCode:
        assert isinstance(code.category, ErrorCategory)
    assert {code.category for code in ErrorCode} == set(ErrorCategory)
