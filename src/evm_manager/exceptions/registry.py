from typing import Any

from evm_manager.exceptions.base import EvmManagerError

"""
Exceptions defined here are raised by the ERC-20 registry and its metadata providers.
"""


class RegistryError(EvmManagerError):
    """
    Exception raised inside registries.
    """


class CurrencyIdExisted(RegistryError):
    """
    Raised when a contract's identity label is already claimed by a different registered address.
    """

    def __init__(self, address: str, existing_address: str, label: str) -> None:
        self.address = address
        self.existing_address = existing_address
        self.label = label
        super().__init__(
            message=f"Currency '{label}' is already registered to {existing_address}, "
            f"cannot register {address}"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.address, self.existing_address, self.label)


class InvalidErc20Contract(RegistryError):
    """
    Raised when the metadata of an ERC-20 contract could not be retrieved or is malformed.
    """

    def __init__(self, address: str, reason: str | None = None) -> None:
        self.address = address
        self.reason = reason
        super().__init__(
            message=f"Invalid ERC-20 contract at {address}: {reason}"
            if reason
            else f"Invalid ERC-20 contract at {address}"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.address, self.reason)
