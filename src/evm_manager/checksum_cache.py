import functools

from cchecksum import to_checksum_address
from eth_typing import ChecksumAddress, HexAddress

from evm_manager.exceptions import EvmManagerValueError


@functools.lru_cache(maxsize=1024)
def get_checksum_address(address: HexAddress | str | bytes) -> ChecksumAddress:
    """
    Normalize a 20-byte address given as a hex string or raw bytes to its EIP-55 checksummed form.
    """

    try:
        return to_checksum_address(address)
    except (ValueError, TypeError) as exc:
        raise EvmManagerValueError(message=f"Invalid address: {address!r}") from exc
