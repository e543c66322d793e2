from pathlib import Path

from pydantic import HttpUrl, WebsocketUrl
from web3 import HTTPProvider, IPCProvider, LegacyWebSocketProvider, Web3

from evm_manager.config import CONFIG_FILE, settings
from evm_manager.exceptions import EvmManagerValueError
from evm_manager.types.aliases import ChainId


def get_web3_from_config(*, chain_id: ChainId | None = None) -> Web3:
    if chain_id is None:
        chain_id = settings.default_chain_id
    if chain_id is None:
        raise EvmManagerValueError(
            message=f"No chain ID was given and no default_chain_id is set in {CONFIG_FILE}"
        )

    match endpoint := settings.get_rpc(chain_id):
        case HttpUrl():
            w3 = Web3(HTTPProvider(str(endpoint)))
        case WebsocketUrl():
            w3 = Web3(LegacyWebSocketProvider(str(endpoint)))
        case Path():
            w3 = Web3(IPCProvider(str(endpoint)))
        case None:
            raise EvmManagerValueError(
                message=f"Chain ID {chain_id} does not have an RPC defined in config file "
                f"{CONFIG_FILE}"
            )

    if w3.eth.chain_id != chain_id:
        raise EvmManagerValueError(
            message=f"The chain ID ({w3.eth.chain_id}) at endpoint {endpoint} does not match "
            f"the chain ID ({chain_id}) defined in the config file."
        )

    return w3
