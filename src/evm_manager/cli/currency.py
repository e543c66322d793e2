import click
from hexbytes import HexBytes

from evm_manager.cli import cli
from evm_manager.erc20.registry import Erc20Registry
from evm_manager.exceptions import EvmManagerError
from evm_manager.mapping import EvmCurrencyIdMapping
from evm_manager.tokens import TOKEN_TABLE
from evm_manager.types.currency import CurrencyId, DexShare, DexShareLeg, Erc20, Token


def _offline_mapping() -> EvmCurrencyIdMapping:
    # Without a node there are no registered contracts, so dex shares can only hold native tokens
    return EvmCurrencyIdMapping(Erc20Registry())


def _parse_leg(value: str) -> DexShareLeg:
    if value.startswith("0x"):
        return Erc20(value)
    return Token(value.upper())


def _describe(currency: CurrencyId) -> str:
    match currency:
        case Token(symbol):
            return f"Token {symbol.value}"
        case Erc20(address):
            return f"Erc20 {address}"
        case DexShare(left, right):
            return f"DexShare {left} / {right}"


def _echo_slot(currency: CurrencyId) -> None:
    if (slot := _offline_mapping().encode_currency_id(currency)) is None:
        click.echo(f"{currency} cannot be encoded without a registry entry.", err=True)
        raise click.exceptions.Exit(1)
    click.echo(HexBytes(slot).to_0x_hex())


@cli.group()
def token() -> None:
    """
    Native token commands
    """


@token.command("list")
def token_list() -> None:
    """
    Display the native token table.
    """

    for info in TOKEN_TABLE.values():
        click.echo(
            f"{info.symbol.value:<8} id={info.currency_id:#010x} decimals={info.decimals:<3} "
            f"{info.name}"
        )


@cli.group()
def currency() -> None:
    """
    Currency id encoding commands
    """


@currency.group()
def encode() -> None:
    """
    Encode a currency id into its 32-byte slot
    """


@encode.command("token")
@click.argument("symbol")
def encode_token(symbol: str) -> None:
    """
    Encode a native token by symbol.
    """

    try:
        currency_id = Token(symbol.upper())
    except EvmManagerError as exc:
        raise click.BadParameter(str(exc), param_hint="SYMBOL") from None

    _echo_slot(currency_id)


@encode.command("erc20")
@click.argument("address")
def encode_erc20(address: str) -> None:
    """
    Encode an ERC-20 contract by address.
    """

    try:
        currency_id = Erc20(address)
    except EvmManagerError as exc:
        raise click.BadParameter(str(exc), param_hint="ADDRESS") from None

    _echo_slot(currency_id)


@encode.command("dex-share")
@click.argument("left")
@click.argument("right")
def encode_dex_share(left: str, right: str) -> None:
    """
    Encode a dex share. Each leg is a native token symbol or a 0x-prefixed contract address.
    """

    try:
        currency_id = DexShare(_parse_leg(left), _parse_leg(right))
    except EvmManagerError as exc:
        raise click.BadParameter(str(exc)) from None

    _echo_slot(currency_id)


@currency.command("decode")
@click.argument("slot")
def decode(slot: str) -> None:
    """
    Decode a hex-encoded 32-byte slot.
    """

    if (currency_id := _offline_mapping().decode_currency_id(slot)) is None:
        click.echo(f"{slot} is not a valid currency id slot.", err=True)
        raise click.exceptions.Exit(1)
    click.echo(_describe(currency_id))
