import dataclasses
import enum

from eth_typing import ChecksumAddress

from evm_manager.checksum_cache import get_checksum_address
from evm_manager.exceptions import EvmManagerTypeError, EvmManagerValueError


class TokenSymbol(enum.Enum):
    """
    Symbols of the native multi-currency tokens. Ids, decimals and names are held by the token table
    in `evm_manager.tokens`.
    """

    ACA = "ACA"
    AUSD = "AUSD"
    DOT = "DOT"
    LDOT = "LDOT"
    RENBTC = "RENBTC"
    KAR = "KAR"
    KUSD = "KUSD"
    KSM = "KSM"
    LKSM = "LKSM"
    CASH = "CASH"


@dataclasses.dataclass(slots=True, frozen=True)
class Token:
    """
    A native token, identified by its symbol.
    """

    symbol: TokenSymbol

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, TokenSymbol):
            try:
                symbol = TokenSymbol(self.symbol)
            except ValueError:
                raise EvmManagerValueError(message=f"Unknown token symbol {self.symbol!r}") from None
            object.__setattr__(self, "symbol", symbol)

    def __str__(self) -> str:
        return self.symbol.value


@dataclasses.dataclass(slots=True, frozen=True)
class Erc20:
    """
    An externally deployed ERC-20 contract, identified by its address.
    """

    address: ChecksumAddress

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", get_checksum_address(self.address))

    def __str__(self) -> str:
        return self.address


type DexShareLeg = Token | Erc20


@dataclasses.dataclass(slots=True, frozen=True)
class DexShare:
    """
    The share token of a trading pair. Each leg is a `Token` or an `Erc20`, never another
    `DexShare`.
    """

    left: DexShareLeg
    right: DexShareLeg

    def __post_init__(self) -> None:
        for leg in (self.left, self.right):
            if not isinstance(leg, (Token, Erc20)):
                raise EvmManagerTypeError(
                    message=f"A dex share leg must be a Token or Erc20, not {type(leg).__name__}"
                )

    def __str__(self) -> str:
        return f"{self.left}/{self.right}"


type CurrencyId = Token | Erc20 | DexShare
