"""
Static catalog of the native multi-currency tokens.

The table is fixed at import and exposed read-only. Every id is unique and strictly below
`RESERVED_OFFSET`, which keeps the native id space disjoint from the ids assigned to registered
ERC-20 contracts.
"""

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType

from evm_manager.constants import RESERVED_OFFSET
from evm_manager.types.aliases import CurrencyIdNumber, Decimals
from evm_manager.types.currency import TokenSymbol


@dataclasses.dataclass(slots=True, frozen=True)
class TokenInfo:
    symbol: TokenSymbol
    currency_id: CurrencyIdNumber
    decimals: Decimals
    name: str


def _build_table(*entries: TokenInfo) -> Mapping[TokenSymbol, TokenInfo]:
    table: dict[TokenSymbol, TokenInfo] = {}
    seen_ids: set[CurrencyIdNumber] = set()
    for entry in entries:
        assert entry.symbol not in table, f"duplicate symbol {entry.symbol}"
        assert entry.currency_id not in seen_ids, f"duplicate id {entry.currency_id}"
        assert 0 <= entry.currency_id < RESERVED_OFFSET
        table[entry.symbol] = entry
        seen_ids.add(entry.currency_id)
    return MappingProxyType(table)


TOKEN_TABLE: Mapping[TokenSymbol, TokenInfo] = _build_table(
    TokenInfo(symbol=TokenSymbol.ACA, currency_id=0, decimals=12, name="Acala"),
    TokenInfo(symbol=TokenSymbol.AUSD, currency_id=1, decimals=12, name="Acala Dollar"),
    TokenInfo(symbol=TokenSymbol.DOT, currency_id=2, decimals=10, name="Polkadot"),
    TokenInfo(symbol=TokenSymbol.LDOT, currency_id=3, decimals=10, name="Liquid DOT"),
    TokenInfo(symbol=TokenSymbol.RENBTC, currency_id=20, decimals=8, name="Ren Protocol BTC"),
    TokenInfo(symbol=TokenSymbol.KAR, currency_id=128, decimals=12, name="Karura"),
    TokenInfo(symbol=TokenSymbol.KUSD, currency_id=129, decimals=12, name="Karura Dollar"),
    TokenInfo(symbol=TokenSymbol.KSM, currency_id=130, decimals=12, name="Kusama"),
    TokenInfo(symbol=TokenSymbol.LKSM, currency_id=131, decimals=12, name="Liquid KSM"),
    TokenInfo(symbol=TokenSymbol.CASH, currency_id=140, decimals=8, name="Cash"),
)

_SYMBOLS_BY_ID: Mapping[CurrencyIdNumber, TokenSymbol] = MappingProxyType(
    {info.currency_id: symbol for symbol, info in TOKEN_TABLE.items()}
)


def get_token_info(symbol: TokenSymbol) -> TokenInfo:
    return TOKEN_TABLE[symbol]


def get_token_id(symbol: TokenSymbol) -> CurrencyIdNumber:
    return TOKEN_TABLE[symbol].currency_id


def get_token_symbol(currency_id: CurrencyIdNumber) -> TokenSymbol | None:
    """
    Reverse lookup of a native token id. Ids at or above `RESERVED_OFFSET` never match.
    """

    if currency_id >= RESERVED_OFFSET:
        return None
    return _SYMBOLS_BY_ID.get(currency_id)


def get_token_decimals(symbol: TokenSymbol) -> Decimals:
    return TOKEN_TABLE[symbol].decimals


def get_token_name(symbol: TokenSymbol) -> str:
    return TOKEN_TABLE[symbol].name
