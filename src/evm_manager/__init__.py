from .checksum_cache import get_checksum_address
from .config import settings
from .version import __version__

# isort: split

from .erc20 import (
    Erc20Info,
    Erc20Metadata,
    Erc20MetadataProvider,
    Erc20Registry,
    Web3Erc20MetadataProvider,
)
from .logging import logger
from .mapping import EvmCurrencyIdMapping
from .tokens import TOKEN_TABLE, TokenInfo
from .types import CurrencyId, DexShare, DexShareLeg, Erc20, Token, TokenSymbol

__all__ = (
    "TOKEN_TABLE",
    "CurrencyId",
    "DexShare",
    "DexShareLeg",
    "Erc20",
    "Erc20Info",
    "Erc20Metadata",
    "Erc20MetadataProvider",
    "Erc20Registry",
    "EvmCurrencyIdMapping",
    "Token",
    "TokenInfo",
    "TokenSymbol",
    "Web3Erc20MetadataProvider",
    "__version__",
    "cli",
    "constants",
    "erc20",
    "exceptions",
    "functions",
    "get_checksum_address",
    "logger",
    "mapping",
    "settings",
    "tokens",
    "types",
    "validation",
)
