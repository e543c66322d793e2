from typing import Protocol, cast

import eth_abi.abi
import pydantic
from eth_abi.exceptions import DecodingError
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import Web3Exception

from evm_manager.checksum_cache import get_checksum_address
from evm_manager.exceptions import InvalidErc20Contract
from evm_manager.functions import encode_function_calldata, raw_call
from evm_manager.logging import logger
from evm_manager.validation.evm_values import ValidatedUint8


class Erc20Metadata(pydantic.BaseModel, frozen=True):
    name: str
    symbol: str
    decimals: ValidatedUint8


class Erc20MetadataProvider(Protocol):
    """
    Reads the metadata of an ERC-20 contract from the execution environment.

    Implementations raise `InvalidErc20Contract` if the address does not host a conforming
    contract.
    """

    def fetch(self, address: str) -> Erc20Metadata: ...


def _decode_string(result: HexBytes) -> str:
    # Some early tokens (e.g. MKR) return bytes32 instead of string
    try:
        (value,) = eth_abi.abi.decode(types=["string"], data=result)
        return cast("str", value)
    except DecodingError:
        (value,) = eth_abi.abi.decode(types=["bytes32"], data=result)
        return cast("bytes", value).decode("utf-8", errors="ignore").strip("\x00")


class Web3Erc20MetadataProvider:
    """
    Reads `name()`, `symbol()` and `decimals()` from a contract through a Web3 connection.
    """

    def __init__(self, w3: Web3) -> None:
        self.w3 = w3

    def _call_string(self, address: str, func_prototypes: tuple[str, ...]) -> str:
        error: Exception | None = None
        for func_prototype in func_prototypes:
            try:
                return _decode_string(
                    raw_call(
                        w3=self.w3,
                        address=get_checksum_address(address),
                        calldata=encode_function_calldata(
                            function_prototype=func_prototype,
                            function_arguments=None,
                        ),
                    )
                )
            except (Web3Exception, DecodingError) as exc:
                logger.debug(f"{func_prototype} failed at {address}: {exc}")
                error = exc
                continue

        raise InvalidErc20Contract(
            address=address,
            reason=f"could not read {' or '.join(func_prototypes)}: {error}",
        )

    def _call_decimals(self, address: str) -> int:
        error: Exception | None = None
        for func_prototype in ("decimals()", "DECIMALS()"):
            try:
                (decimals,) = eth_abi.abi.decode(
                    types=["uint256"],
                    data=raw_call(
                        w3=self.w3,
                        address=get_checksum_address(address),
                        calldata=encode_function_calldata(
                            function_prototype=func_prototype,
                            function_arguments=None,
                        ),
                    ),
                )
                return cast("int", decimals)
            except (Web3Exception, DecodingError) as exc:
                logger.debug(f"{func_prototype} failed at {address}: {exc}")
                error = exc
                continue

        raise InvalidErc20Contract(address=address, reason=f"could not read decimals(): {error}")

    def fetch(self, address: str) -> Erc20Metadata:
        address = get_checksum_address(address)

        try:
            code = self.w3.eth.get_code(address)
        except Web3Exception as exc:
            raise InvalidErc20Contract(address=address, reason=str(exc)) from exc
        if not code:
            raise InvalidErc20Contract(address=address, reason="no contract deployed")

        name = self._call_string(address, ("name()", "NAME()"))
        symbol = self._call_string(address, ("symbol()", "SYMBOL()"))
        decimals = self._call_decimals(address)

        try:
            return Erc20Metadata(name=name, symbol=symbol, decimals=decimals)
        except pydantic.ValidationError as exc:
            raise InvalidErc20Contract(
                address=address, reason=f"decimals {decimals} is not a uint8"
            ) from exc
