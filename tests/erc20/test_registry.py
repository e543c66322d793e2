import logging
import threading

import pytest

from evm_manager.checksum_cache import get_checksum_address
from evm_manager.constants import RESERVED_OFFSET
from evm_manager.erc20.metadata import Erc20Metadata
from evm_manager.erc20.registry import Erc20Info, Erc20Registry
from evm_manager.exceptions import (
    CurrencyIdExisted,
    EvmManagerValueError,
    InvalidErc20Contract,
    RegistryError,
)
from evm_manager.logging import logger

WETH_ADDRESS = get_checksum_address("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2")
WBTC_ADDRESS = get_checksum_address("0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599")
DAI_ADDRESS = get_checksum_address("0x6B175474E89094C44Da98b954EedeAC495271d0F")
FAKE_WETH_ADDRESS = get_checksum_address("0x1111111111111111111111111111111111111111")
NOT_A_CONTRACT_ADDRESS = get_checksum_address("0x0000000000000000000000000000000000000001")


def test_register_assigns_sequential_ids(registry: Erc20Registry):
    assert registry.chain_id == 1
    assert len(registry) == 0
    assert registry.next_currency_id == RESERVED_OFFSET + 1

    weth = registry.register(WETH_ADDRESS)
    assert weth == Erc20Info(
        address=WETH_ADDRESS,
        currency_id=RESERVED_OFFSET + 1,
        decimals=18,
        name="Wrapped Ether",
        symbol="WETH",
    )

    wbtc = registry.register(WBTC_ADDRESS)
    assert wbtc.currency_id == RESERVED_OFFSET + 2
    assert wbtc.decimals == 8

    assert len(registry) == 2
    assert registry.next_currency_id == RESERVED_OFFSET + 3
    assert list(registry) == [weth, wbtc]


def test_register_normalizes_address(registry: Erc20Registry):
    weth = registry.register(WETH_ADDRESS.lower())
    assert weth.address == WETH_ADDRESS
    assert WETH_ADDRESS in registry
    assert WETH_ADDRESS.lower() in registry


def test_repeated_registration_is_idempotent(registry: Erc20Registry, metadata_provider):
    first = registry.register(WETH_ADDRESS)
    assert metadata_provider.queries == [WETH_ADDRESS]

    second = registry.register(WETH_ADDRESS)
    assert second is first
    assert len(registry) == 1
    assert registry.next_currency_id == RESERVED_OFFSET + 2
    assert registry.get_currency_id(WETH_ADDRESS) == RESERVED_OFFSET + 1
    assert registry.get_decimals(WETH_ADDRESS) == 18

    # The contract is not queried a second time
    assert metadata_provider.queries == [WETH_ADDRESS]


def test_colliding_label_is_rejected(registry: Erc20Registry):
    registry.register(WETH_ADDRESS)

    with pytest.raises(CurrencyIdExisted) as exc_info:
        registry.register(FAKE_WETH_ADDRESS)

    assert exc_info.value.address == FAKE_WETH_ADDRESS
    assert exc_info.value.existing_address == WETH_ADDRESS
    assert exc_info.value.label == "WETH"
    assert isinstance(exc_info.value, RegistryError)

    assert len(registry) == 1
    assert FAKE_WETH_ADDRESS not in registry
    assert registry.get_currency_id(FAKE_WETH_ADDRESS) is None
    assert registry.next_currency_id == RESERVED_OFFSET + 2

    # A failed registration does not consume an id
    assert registry.register(DAI_ADDRESS).currency_id == RESERVED_OFFSET + 2


def test_invalid_contract_is_not_registered(registry: Erc20Registry):
    with pytest.raises(InvalidErc20Contract):
        registry.register(NOT_A_CONTRACT_ADDRESS)

    assert len(registry) == 0
    assert NOT_A_CONTRACT_ADDRESS not in registry
    assert registry.next_currency_id == RESERVED_OFFSET + 1


def test_register_without_provider():
    registry = Erc20Registry()
    with pytest.raises(InvalidErc20Contract, match="no metadata provider"):
        registry.register(WETH_ADDRESS)
    assert len(registry) == 0


def test_lookups(registry: Erc20Registry):
    weth = registry.register(WETH_ADDRESS)
    dai = registry.register(DAI_ADDRESS)

    assert registry.get(WETH_ADDRESS) is weth
    assert registry.get(WBTC_ADDRESS) is None

    assert registry.get_address(weth.currency_id) == WETH_ADDRESS
    assert registry.get_address(dai.currency_id) == DAI_ADDRESS
    assert registry.get_address(RESERVED_OFFSET + 3) is None
    assert registry.get_address(RESERVED_OFFSET) is None

    # Native token ids are never resolved by the registry
    assert registry.get_address(0) is None
    assert registry.get_by_currency_id(1) is None

    assert registry.get_currency_id(DAI_ADDRESS) == dai.currency_id
    assert registry.get_currency_id(WBTC_ADDRESS) is None

    assert registry.get_decimals(DAI_ADDRESS) == 18
    assert registry.get_decimals(WBTC_ADDRESS) is None


def test_contains_with_bad_values(registry: Erc20Registry):
    assert "not an address" not in registry
    assert 1 not in registry
    assert None not in registry


def test_lookup_with_bad_address(registry: Erc20Registry):
    registry.register(WETH_ADDRESS)

    for bad_address in ("0x1234", "not an address", ""):
        assert registry.get(bad_address) is None
        assert registry.get_currency_id(bad_address) is None
        assert registry.get_decimals(bad_address) is None

    # Registration still rejects a malformed address
    with pytest.raises(EvmManagerValueError):
        registry.register("0x1234")


def test_address_id_mapping_is_a_bijection(registry: Erc20Registry):
    for address in (WETH_ADDRESS, WBTC_ADDRESS, DAI_ADDRESS):
        registry.register(address)

    ids = [entry.currency_id for entry in registry]
    assert len(set(ids)) == len(ids)
    for entry in registry:
        assert entry.currency_id >= RESERVED_OFFSET
        assert registry.get_address(entry.currency_id) == entry.address
        assert registry.get_currency_id(entry.address) == entry.currency_id


def test_concurrent_registration_commits_once():
    barrier = threading.Barrier(8)

    class SlowProvider:
        def fetch(self, address: str) -> Erc20Metadata:
            # Hold every thread inside the metadata query so that all of them see the address as
            # unregistered before any of them commits
            barrier.wait(timeout=5)
            return Erc20Metadata(name="Wrapped Ether", symbol="WETH", decimals=18)

    registry = Erc20Registry(SlowProvider())
    results: list[Erc20Info] = []

    def register() -> None:
        results.append(registry.register(WETH_ADDRESS))

    threads = [threading.Thread(target=register) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry) == 1
    assert registry.next_currency_id == RESERVED_OFFSET + 2
    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_registration_log_names_chain(registry: Erc20Registry):
    records: list[logging.LogRecord] = []

    class ListHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    handler = ListHandler()
    logger.addHandler(handler)
    try:
        registry.register(WETH_ADDRESS)
        registry.register(WETH_ADDRESS)
    finally:
        logger.removeHandler(handler)

    messages = [record.getMessage() for record in records]
    assert len(messages) == 2
    assert all(message.startswith("[chain 1]") for message in messages)
