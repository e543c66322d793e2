import click


@click.group()
@click.version_option()
def cli() -> None: ...


from . import config, currency, erc20  # noqa: F401, E402
