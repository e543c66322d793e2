import dataclasses
from collections.abc import Iterator
from threading import Lock

from eth_typing import ChecksumAddress

from evm_manager.checksum_cache import get_checksum_address
from evm_manager.constants import RESERVED_OFFSET
from evm_manager.erc20.metadata import Erc20MetadataProvider
from evm_manager.exceptions import CurrencyIdExisted, EvmManagerValueError, InvalidErc20Contract
from evm_manager.logging import logger
from evm_manager.types.aliases import ChainId, CurrencyIdNumber, Decimals


@dataclasses.dataclass(slots=True, frozen=True)
class Erc20Info:
    address: ChecksumAddress
    currency_id: CurrencyIdNumber
    decimals: Decimals
    name: str
    symbol: str


class Erc20Registry:
    """
    An append-only table of registered ERC-20 contracts.

    Each contract receives a numeric currency id equal to `RESERVED_OFFSET` plus its registration
    sequence number, starting at 1. Entries are never modified or removed, and ids are never reused,
    because they are embedded in encoded dex share slots indefinitely.
    """

    def __init__(
        self,
        metadata_provider: Erc20MetadataProvider | None = None,
        *,
        chain_id: ChainId | None = None,
    ) -> None:
        self._metadata_provider = metadata_provider
        self._chain_id = chain_id
        self._lock = Lock()

        # insertion order matches registration order
        self._by_address: dict[ChecksumAddress, Erc20Info] = {}
        self._by_currency_id: dict[CurrencyIdNumber, Erc20Info] = {}
        self._by_label: dict[str, ChecksumAddress] = {}
        self._sequence = 0

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(chain_id={self._chain_id}, entries={len(self)})"

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, (str, bytes)):
            return False
        return self.get(address) is not None

    def __iter__(self) -> Iterator[Erc20Info]:
        return iter(list(self._by_address.values()))

    def __len__(self) -> int:
        return len(self._by_address)

    @property
    def chain_id(self) -> ChainId | None:
        return self._chain_id

    @property
    def next_currency_id(self) -> CurrencyIdNumber:
        return RESERVED_OFFSET + self._sequence + 1

    def register(self, address: str) -> Erc20Info:
        """
        Register the ERC-20 contract at `address` and return its entry.

        Registering an address that is already known returns the existing entry without querying
        the contract. Raises `InvalidErc20Contract` if the metadata cannot be read, and
        `CurrencyIdExisted` if a different contract already holds the same symbol. No state is
        changed when an exception is raised.
        """

        address = get_checksum_address(address)

        if (existing := self._by_address.get(address)) is not None:
            logger.debug(
                f"[chain {self._chain_id}] {address} is already registered as "
                f"{existing.currency_id:#010x}"
            )
            return existing

        if self._metadata_provider is None:
            raise InvalidErc20Contract(address=address, reason="no metadata provider is set")
        metadata = self._metadata_provider.fetch(address)
        label = metadata.symbol

        with self._lock:
            # Another caller may have committed this address while the metadata was being fetched
            if (existing := self._by_address.get(address)) is not None:
                return existing

            if (
                existing_address := self._by_label.get(label)
            ) is not None and existing_address != address:
                logger.debug(
                    f"[chain {self._chain_id}] Rejected {address}: '{label}' belongs to "
                    f"{existing_address}"
                )
                raise CurrencyIdExisted(
                    address=address,
                    existing_address=existing_address,
                    label=label,
                )

            entry = Erc20Info(
                address=address,
                currency_id=RESERVED_OFFSET + self._sequence + 1,
                decimals=metadata.decimals,
                name=metadata.name,
                symbol=metadata.symbol,
            )
            self._by_address[address] = entry
            self._by_currency_id[entry.currency_id] = entry
            self._by_label[label] = address
            self._sequence += 1

        logger.info(
            f"[chain {self._chain_id}] Registered {entry.symbol} ({entry.name}) at {address} as "
            f"{entry.currency_id:#010x}"
        )
        return entry

    def get(self, address: str) -> Erc20Info | None:
        """
        Get the entry for an address. A malformed address is never registered, so it returns None.
        """

        try:
            return self._by_address.get(get_checksum_address(address))
        except EvmManagerValueError:
            return None

    def get_by_currency_id(self, currency_id: CurrencyIdNumber) -> Erc20Info | None:
        if currency_id < RESERVED_OFFSET:
            return None
        return self._by_currency_id.get(currency_id)

    def get_address(self, currency_id: CurrencyIdNumber) -> ChecksumAddress | None:
        if (entry := self.get_by_currency_id(currency_id)) is None:
            return None
        return entry.address

    def get_currency_id(self, address: str) -> CurrencyIdNumber | None:
        if (entry := self.get(address)) is None:
            return None
        return entry.currency_id

    def get_decimals(self, address: str) -> Decimals | None:
        if (entry := self.get(address)) is None:
            return None
        return entry.decimals
