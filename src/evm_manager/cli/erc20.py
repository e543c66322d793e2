import click

from evm_manager.cli import cli
from evm_manager.cli.utils import get_web3_from_config
from evm_manager.erc20.metadata import Web3Erc20MetadataProvider
from evm_manager.exceptions import EvmManagerError


@cli.group()
def erc20() -> None:
    """
    ERC-20 contract commands
    """


@erc20.command("metadata")
@click.argument("address")
@click.option(
    "--chain-id",
    type=int,
    default=None,
    help="Chain ID of the RPC to query. Uses default_chain_id from the config file if omitted.",
)
def erc20_metadata(address: str, chain_id: int | None) -> None:
    """
    Read the name, symbol and decimals of an ERC-20 contract through the configured RPC.
    """

    try:
        metadata = Web3Erc20MetadataProvider(get_web3_from_config(chain_id=chain_id)).fetch(address)
    except EvmManagerError as exc:
        click.echo(exc.message, err=True)
        raise click.exceptions.Exit(1) from None

    click.echo(f"name: {metadata.name}")
    click.echo(f"symbol: {metadata.symbol}")
    click.echo(f"decimals: {metadata.decimals}")
