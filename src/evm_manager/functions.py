from collections.abc import Sequence
from typing import Any

import eth_abi.abi
from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak
from hexbytes import HexBytes
from web3 import Web3
from web3.types import BlockIdentifier, TxParams

from evm_manager.checksum_cache import get_checksum_address
from evm_manager.constants import (
    ADDRESS_LENGTH,
    CURRENCY_ID_LENGTH,
    ERC20_PLACEHOLDER_MARKER,
    MAX_UINT32,
    RESERVED_OFFSET,
)
from evm_manager.exceptions import EvmManagerValueError
from evm_manager.types.aliases import CurrencyIdNumber


def encode_function_calldata(
    function_prototype: str, function_arguments: Sequence[Any] | None
) -> bytes:
    """
    Encode the calldata to execute a call to the given function prototype, with ordered arguments.
    The resulting bytes array will include the 4-byte function selector, followed by the
    ABI-encoded arguments.
    """

    if function_arguments is None:
        function_arguments = ()

    return keccak(text=function_prototype)[:4] + eth_abi.abi.encode(
        types=extract_argument_types_from_function_prototype(function_prototype),
        args=function_arguments,
    )


def extract_argument_types_from_function_prototype(function_prototype: str) -> list[str]:
    """
    Extract the argument types from the function prototype.

    e.g. the argument types for the prototype 'function(address,uint256)' are ['address','uint256']
    """

    if function_args := function_prototype[
        function_prototype.find("(") + 1 : function_prototype.find(")") :
    ]:
        return function_args.split(",")

    return []


def raw_call(
    w3: Web3,
    address: ChecksumAddress,
    calldata: bytes,
    block_identifier: BlockIdentifier | None = None,
) -> HexBytes:
    """
    Perform an eth_call at the given address and return the undecoded response.
    """

    return HexBytes(
        w3.eth.call(
            TxParams(
                to=address,
                data=calldata,
            ),
            block_identifier,
        )
    )


def currency_id_to_bytes(currency_id: CurrencyIdNumber) -> bytes:
    """
    Encode a numeric currency id as 4 big-endian bytes.
    """

    if not 0 <= currency_id <= MAX_UINT32:
        raise EvmManagerValueError(message=f"Currency id {currency_id} does not fit in 32 bits")
    return currency_id.to_bytes(CURRENCY_ID_LENGTH, "big")


def currency_id_from_bytes(data: bytes) -> CurrencyIdNumber:
    if len(data) != CURRENCY_ID_LENGTH:
        raise EvmManagerValueError(message=f"Expected {CURRENCY_ID_LENGTH} bytes, got {len(data)}")
    return int.from_bytes(data, "big")


def erc20_placeholder_address(currency_id: CurrencyIdNumber) -> ChecksumAddress:
    """
    Build the synthetic address standing in for a registered ERC-20 contract whose real address
    could not be carried, i.e. a leg of a dex share slot.

    The placeholder is a marker byte, 15 zero bytes, then the 4 low bytes of
    `currency_id - RESERVED_OFFSET`. It is stable for a given id but is generally not the
    contract's deployed address.
    """

    if not RESERVED_OFFSET <= currency_id <= MAX_UINT32:
        raise EvmManagerValueError(
            message=f"Currency id {currency_id} is outside the ERC-20 id range"
        )

    return get_checksum_address(
        bytes([ERC20_PLACEHOLDER_MARKER])
        + bytes(ADDRESS_LENGTH - 1 - CURRENCY_ID_LENGTH)
        + currency_id_to_bytes(currency_id - RESERVED_OFFSET)
    )


def currency_id_from_placeholder(address: str | bytes) -> CurrencyIdNumber | None:
    """
    Recover the currency id carried by a placeholder address, or None if the address does not have
    the placeholder shape.
    """

    address_bytes = HexBytes(get_checksum_address(address))
    if address_bytes[0] != ERC20_PLACEHOLDER_MARKER or any(
        address_bytes[1 : ADDRESS_LENGTH - CURRENCY_ID_LENGTH]
    ):
        return None

    currency_id = RESERVED_OFFSET + currency_id_from_bytes(
        address_bytes[ADDRESS_LENGTH - CURRENCY_ID_LENGTH :]
    )
    if currency_id > MAX_UINT32:
        return None
    return currency_id
