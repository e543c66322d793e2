__all__ = (
    "ADDRESS_LENGTH",
    "CURRENCY_ID_LENGTH",
    "DISCRIMINANT_DEX_SHARE",
    "DISCRIMINANT_SINGLE",
    "DISCRIMINANT_INDEX",
    "ERC20_PLACEHOLDER_MARKER",
    "MAX_UINT8",
    "MAX_UINT32",
    "MIN_UINT8",
    "MIN_UINT32",
    "RESERVED_OFFSET",
    "SLOT_LENGTH",
)

import typing


def _min_uint(_: int) -> int:
    return 0


def _max_uint(bits: int) -> int:
    return typing.cast("int", 2**bits - 1)


MIN_UINT8 = _min_uint(8)
MAX_UINT8 = _max_uint(8)

MIN_UINT32 = _min_uint(32)
MAX_UINT32 = _max_uint(32)

# Numeric currency ids below this value belong to native tokens, ids at or above it are assigned to
# registered ERC-20 contracts
RESERVED_OFFSET = 0x2000_0000

SLOT_LENGTH = 32
ADDRESS_LENGTH = 20
CURRENCY_ID_LENGTH = 4

# Byte layout of the 32-byte slot: [0..11) reserved, [11] discriminant, [12..32) payload
DISCRIMINANT_INDEX = 11
DISCRIMINANT_SINGLE = 0
DISCRIMINANT_DEX_SHARE = 1

# Leading byte of the synthetic address rebuilt for an ERC-20 leg of a decoded dex share
ERC20_PLACEHOLDER_MARKER = 0x20
