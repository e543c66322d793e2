from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from evm_manager.checksum_cache import get_checksum_address
from evm_manager.constants import (
    CURRENCY_ID_LENGTH,
    DISCRIMINANT_DEX_SHARE,
    DISCRIMINANT_INDEX,
    DISCRIMINANT_SINGLE,
    RESERVED_OFFSET,
    SLOT_LENGTH,
)
from evm_manager.erc20.registry import Erc20Registry
from evm_manager.functions import (
    currency_id_from_bytes,
    currency_id_from_placeholder,
    currency_id_to_bytes,
    erc20_placeholder_address,
)
from evm_manager.tokens import get_token_decimals, get_token_id, get_token_name, get_token_symbol
from evm_manager.types.aliases import CurrencyIdNumber, Decimals, Slot
from evm_manager.types.currency import CurrencyId, DexShare, DexShareLeg, Erc20, Token

_PAYLOAD_START = DISCRIMINANT_INDEX + 1
_LEFT_LEG = slice(_PAYLOAD_START, _PAYLOAD_START + CURRENCY_ID_LENGTH)
_RIGHT_LEG = slice(_PAYLOAD_START + CURRENCY_ID_LENGTH, _PAYLOAD_START + 2 * CURRENCY_ID_LENGTH)


class EvmCurrencyIdMapping:
    """
    Converts currency ids to and from the address-shaped values used inside the EVM.

    The 32-byte slot layout is:

        bytes [0, 11)   reserved, always zero
        byte  11        discriminant: 0 for a single currency, 1 for a dex share
        bytes [12, 32)  payload

    A `Token` stores its 4-byte id at the start of the payload and an `Erc20` stores its full
    address. A `DexShare` stores the 4-byte ids of its two legs, which means an `Erc20` leg must be
    registered to be encoded, and decodes to a placeholder address built from its id.

    The mapping holds no state of its own. Registry lookups are reads against `registry`.
    """

    def __init__(self, registry: Erc20Registry) -> None:
        self.registry = registry

    def _decode_leg(self, currency_id: CurrencyIdNumber) -> DexShareLeg | None:
        if currency_id < RESERVED_OFFSET:
            if (symbol := get_token_symbol(currency_id)) is None:
                return None
            return Token(symbol)
        return Erc20(erc20_placeholder_address(currency_id))

    def resolve_placeholder(self, currency: Erc20) -> Erc20 | None:
        """
        Get the registered contract that a placeholder address from a decoded dex share stands
        for. Returns None if the address is not a placeholder or its id is not registered.

        Placeholders are never resolved implicitly: lookups and encoding treat them as
        unregistered addresses.
        """

        if (currency_id := currency_id_from_placeholder(currency.address)) is None:
            return None
        if (address := self.registry.get_address(currency_id)) is None:
            return None
        return Erc20(address)

    def get_currency_id_number(self, currency: CurrencyId) -> CurrencyIdNumber | None:
        """
        Get the 32-bit id of a native token or registered ERC-20 contract.
        """

        match currency:
            case Token(symbol):
                return get_token_id(symbol)
            case Erc20(address):
                if (entry := self.registry.get(address)) is None:
                    return None
                return entry.currency_id
            case DexShare():
                return None

    def encode_currency_id(self, currency: CurrencyId) -> Slot | None:
        """
        Encode a currency id into its 32-byte slot. Returns None if the currency is a dex share
        with an unregistered ERC-20 leg.
        """

        slot = bytearray(SLOT_LENGTH)

        match currency:
            case Token(symbol):
                slot[DISCRIMINANT_INDEX] = DISCRIMINANT_SINGLE
                slot[_LEFT_LEG] = currency_id_to_bytes(get_token_id(symbol))
            case Erc20(address):
                slot[DISCRIMINANT_INDEX] = DISCRIMINANT_SINGLE
                slot[_PAYLOAD_START:] = HexBytes(address)
            case DexShare(left, right):
                left_id = self.get_currency_id_number(left)
                right_id = self.get_currency_id_number(right)
                if left_id is None or right_id is None:
                    return None
                slot[DISCRIMINANT_INDEX] = DISCRIMINANT_DEX_SHARE
                slot[_LEFT_LEG] = currency_id_to_bytes(left_id)
                slot[_RIGHT_LEG] = currency_id_to_bytes(right_id)

        return bytes(slot)

    def decode_currency_id(self, slot: Slot | str) -> CurrencyId | None:
        """
        Decode a 32-byte slot. Malformed input returns None.

        For a single currency, a payload whose last 16 bytes are zero is read as a 4-byte currency
        id instead of an address. A real contract address ending in 16 zero bytes is therefore
        decoded as a token id, or as `None` if no native token has that id. An id at or above
        `RESERVED_OFFSET` is resolved to the address registered under it, and an unregistered id
        falls back to the raw payload.
        """

        try:
            data = HexBytes(slot)
        except (TypeError, ValueError):
            return None

        if len(data) != SLOT_LENGTH or any(data[:DISCRIMINANT_INDEX]):
            return None

        match data[DISCRIMINANT_INDEX]:
            case 0:  # DISCRIMINANT_SINGLE
                if not any(data[_RIGHT_LEG.start :]):
                    currency_id = currency_id_from_bytes(data[_LEFT_LEG])
                    if currency_id < RESERVED_OFFSET:
                        if (symbol := get_token_symbol(currency_id)) is None:
                            return None
                        return Token(symbol)
                    if (address := self.registry.get_address(currency_id)) is not None:
                        return Erc20(address)
                return Erc20(get_checksum_address(bytes(data[_PAYLOAD_START:])))
            case 1:  # DISCRIMINANT_DEX_SHARE
                if any(data[_RIGHT_LEG.stop :]):
                    return None
                left = self._decode_leg(currency_id_from_bytes(data[_LEFT_LEG]))
                right = self._decode_leg(currency_id_from_bytes(data[_RIGHT_LEG]))
                if left is None or right is None:
                    return None
                return DexShare(left, right)
            case _:
                return None

    def get_evm_address(self, currency: CurrencyId | CurrencyIdNumber) -> ChecksumAddress | None:
        """
        Get the deployed address of a registered ERC-20 contract, given either its currency id or
        its numeric id. Native tokens and dex shares have no address.
        """

        match currency:
            case int():
                return self.registry.get_address(currency)
            case Erc20(address):
                if (entry := self.registry.get(address)) is None:
                    return None
                return entry.address
            case Token() | DexShare():
                return None

    def decimals(self, currency: CurrencyId) -> Decimals | None:
        match currency:
            case Token(symbol):
                return get_token_decimals(symbol)
            case Erc20(address):
                if (entry := self.registry.get(address)) is None:
                    return None
                return entry.decimals
            case DexShare():
                return None

    def name(self, currency: CurrencyId) -> str | None:
        match currency:
            case Token(symbol):
                return get_token_name(symbol)
            case Erc20(address):
                if (entry := self.registry.get(address)) is None:
                    return None
                return entry.name
            case DexShare(left, right):
                left_name = self.name(left)
                right_name = self.name(right)
                if left_name is None or right_name is None:
                    return None
                return f"LP {left_name} - {right_name}"

    def symbol(self, currency: CurrencyId) -> str | None:
        match currency:
            case Token(symbol):
                return symbol.value
            case Erc20(address):
                if (entry := self.registry.get(address)) is None:
                    return None
                return entry.symbol
            case DexShare(left, right):
                left_symbol = self.symbol(left)
                right_symbol = self.symbol(right)
                if left_symbol is None or right_symbol is None:
                    return None
                return f"LP_{left_symbol}_{right_symbol}"


__all__ = (
    "EvmCurrencyIdMapping",
)
