"""Program-derived addresses.

A derived address is a SHA-256 image of the seeds and the program id that is
deliberately *not* a valid Ed25519 point, so no private key can sign for it.
Only the program that owns the derivation can authorize on its behalf.
"""

from __future__ import annotations

from typing import Sequence

from ..config import MAX_SEED_LEN, MAX_SEEDS, PDA_MARKER, PUBKEY_LEN
from ..errors import ErrorCode, SpecError
from .hash_algorithms import sha256_hash

# Curve25519 field prime and twisted Edwards constant d = -121665/121666.
_P = 2**255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P


def is_on_curve(point: bytes) -> bool:
    """Whether ``point`` decompresses to a point on the Ed25519 curve."""
    if len(point) != PUBKEY_LEN:
        return False
    y = (int.from_bytes(point, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    if u == 0:
        return True
    if v == 0:
        return False
    x2 = u * pow(v, _P - 2, _P) % _P
    return pow(x2, (_P - 1) // 2, _P) == 1


def _check_seeds(seeds: Sequence[bytes]) -> None:
    if len(seeds) > MAX_SEEDS:
        raise SpecError(ErrorCode.INVALID_SEEDS, f"at most {MAX_SEEDS} seeds allowed")
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise SpecError(ErrorCode.INVALID_SEEDS, f"seed longer than {MAX_SEED_LEN} bytes")


def create_program_address(seeds: Sequence[bytes], program_id: bytes) -> bytes:
    _check_seeds(seeds)
    candidate = sha256_hash(*seeds, program_id, PDA_MARKER)
    if is_on_curve(candidate):
        raise SpecError(ErrorCode.INVALID_SEEDS, "derived address lies on the ed25519 curve")
    return candidate


def find_program_address(seeds: Sequence[bytes], program_id: bytes) -> tuple[bytes, int]:
    """Return the first off-curve address and its bump, searching 255 downwards."""
    # The bump is appended as one more seed.
    _check_seeds([*seeds, b"\x00"])
    for bump in range(255, -1, -1):
        candidate = sha256_hash(*seeds, bytes([bump]), program_id, PDA_MARKER)
        if not is_on_curve(candidate):
            return candidate, bump
    raise SpecError(ErrorCode.INVALID_SEEDS, "unable to find a viable bump seed")
