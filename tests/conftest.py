import logging

import pytest

from evm_manager.checksum_cache import get_checksum_address
from evm_manager.erc20.metadata import Erc20Metadata
from evm_manager.erc20.registry import Erc20Registry
from evm_manager.exceptions import InvalidErc20Contract
from evm_manager.logging import logger
from evm_manager.mapping import EvmCurrencyIdMapping

WETH_ADDRESS = get_checksum_address("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2")
WBTC_ADDRESS = get_checksum_address("0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599")
DAI_ADDRESS = get_checksum_address("0x6B175474E89094C44Da98b954EedeAC495271d0F")
FAKE_WETH_ADDRESS = get_checksum_address("0x1111111111111111111111111111111111111111")


class FakeMetadataProvider:
    """
    Serves ERC-20 metadata from a dictionary and records every address queried.
    """

    def __init__(self, contracts: dict[str, Erc20Metadata]) -> None:
        self.contracts = {
            get_checksum_address(address): metadata for address, metadata in contracts.items()
        }
        self.queries: list[str] = []

    def fetch(self, address: str) -> Erc20Metadata:
        self.queries.append(address)
        try:
            return self.contracts[get_checksum_address(address)]
        except KeyError:
            raise InvalidErc20Contract(address=address, reason="no contract deployed") from None


@pytest.fixture(scope="session", autouse=True)
def _set_evm_manager_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def metadata_provider() -> FakeMetadataProvider:
    return FakeMetadataProvider(
        {
            WETH_ADDRESS: Erc20Metadata(name="Wrapped Ether", symbol="WETH", decimals=18),
            WBTC_ADDRESS: Erc20Metadata(name="Wrapped BTC", symbol="WBTC", decimals=8),
            DAI_ADDRESS: Erc20Metadata(name="Dai Stablecoin", symbol="DAI", decimals=18),
            # Claims the same symbol as the real WETH contract
            FAKE_WETH_ADDRESS: Erc20Metadata(name="Wrapped Ether", symbol="WETH", decimals=18),
        }
    )


@pytest.fixture
def registry(metadata_provider: FakeMetadataProvider) -> Erc20Registry:
    return Erc20Registry(metadata_provider, chain_id=1)


@pytest.fixture
def mapping(registry: Erc20Registry) -> EvmCurrencyIdMapping:
    return EvmCurrencyIdMapping(registry)
