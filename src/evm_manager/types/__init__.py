from .aliases import ChainId, CurrencyIdNumber, Decimals, Slot
from .currency import CurrencyId, DexShare, DexShareLeg, Erc20, Token, TokenSymbol

__all__ = (
    "ChainId",
    "CurrencyId",
    "CurrencyIdNumber",
    "Decimals",
    "DexShare",
    "DexShareLeg",
    "Erc20",
    "Slot",
    "Token",
    "TokenSymbol",
)
