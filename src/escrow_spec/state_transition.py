"""State transition entrypoint for the escrow Python spec."""

from __future__ import annotations

from copy import deepcopy
from typing import List, Optional, Sequence

from .custody import CustodyService
from .errors import SpecError
from .processor import Processor
from .types import AccountRef, Pubkey


class TransitionResult:
    """Thin wrapper for process results."""

    def __init__(self, ok: bool, error: Optional[SpecError] = None):
        self.ok = ok
        self.error = error

    @classmethod
    def success(cls) -> "TransitionResult":
        return cls(True, None)

    @classmethod
    def failure(cls, error: SpecError) -> "TransitionResult":
        return cls(False, error)

    def __repr__(self) -> str:
        if self.ok:
            return "TransitionResult(ok=True)"
        return f"TransitionResult(ok=False, error={self.error})"


def apply_instruction(
    program_id: Pubkey,
    accounts: Sequence[AccountRef],
    instruction_data: bytes,
    custody: Optional[CustodyService] = None,
) -> tuple[List[AccountRef], TransitionResult]:
    """Run one instruction with all-or-nothing semantics.

    The processor works on a copy of the accounts. On failure the caller's
    accounts are returned as they were; on success the updated copy is.
    """
    working = deepcopy(list(accounts))
    try:
        Processor.process(program_id, working, instruction_data, custody)
    except SpecError as exc:
        return list(accounts), TransitionResult.failure(exc)
    return working, TransitionResult.success()
