from .metadata import Erc20Metadata, Erc20MetadataProvider, Web3Erc20MetadataProvider
from .registry import Erc20Info, Erc20Registry

__all__ = (
    "Erc20Info",
    "Erc20Metadata",
    "Erc20MetadataProvider",
    "Erc20Registry",
    "Web3Erc20MetadataProvider",
)
