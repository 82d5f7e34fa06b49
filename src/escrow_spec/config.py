"""Escrow spec configuration constants.

Keep this file aligned with the on-chain program constants and the SPL token
program / rent sysvar layouts it depends on.
"""

# Well-known identities (32-byte public keys)
TOKEN_PROGRAM_ID = bytes.fromhex(
    "06ddf6e1d765a193d9cbe146ceeb79ac1cb485ed5f5b37913a8cf5857eff00a9"
)  # TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA
RENT_SYSVAR_ID = bytes.fromhex(
    "06a7d517192c5c51218cc94c3d4af17f58daee089ba1fd44e3dbd98a00000000"
)  # SysvarRent111111111111111111111111111111111
SYSTEM_PROGRAM_ID = bytes(32)

PUBKEY_LEN = 32

# Program-derived authority
ESCROW_SEED = b"escrow"
PDA_MARKER = b"ProgramDerivedAddress"
MAX_SEEDS = 16
MAX_SEED_LEN = 32

# Escrow record layout: is_initialized(1) + 3 pubkeys(96) + expected_amount(8)
ESCROW_RECORD_LEN = 1 + PUBKEY_LEN * 3 + 8

# Instruction layout
INIT_ESCROW_TAG = 0
INIT_ESCROW_ACCOUNT_COUNT = 6

# Rent
ACCOUNT_STORAGE_OVERHEAD = 128
DEFAULT_LAMPORTS_PER_BYTE_YEAR = 3480
DEFAULT_EXEMPTION_THRESHOLD = 2.0
DEFAULT_BURN_PERCENT = 50
RENT_SYSVAR_DATA_LEN = 8 + 8 + 1

# Token account layout (SPL token v3)
TOKEN_ACCOUNT_LEN = 165
TOKEN_SET_AUTHORITY_TAG = 6
U64_MAX = (1 << 64) - 1
