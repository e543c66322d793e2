from evm_manager.exceptions.base import EvmManagerError, EvmManagerTypeError, EvmManagerValueError
from evm_manager.exceptions.registry import CurrencyIdExisted, InvalidErc20Contract, RegistryError

from . import registry

__all__ = (
    "CurrencyIdExisted",
    "EvmManagerError",
    "EvmManagerTypeError",
    "EvmManagerValueError",
    "InvalidErc20Contract",
    "RegistryError",
    "registry",
)
