import click
import tomlkit
from pydantic import TypeAdapter

from evm_manager.cli import cli
from evm_manager.config import CONFIG_FILE, config_to_dict, save_config_to_file, settings


@cli.group()
def config() -> None:
    """
    Configuration commands
    """


@config.command("show")
@click.option(
    "--json",
    "output_format",
    flag_value="json",
    type=str,
    help="Show configuration in JSON format",
)
@click.option(
    "--toml",
    "output_format",
    flag_value="toml",
    type=str,
    help="Show configuration in TOML format (default)",
    default=True,
)
def config_show(output_format: str) -> None:
    """
    Display the current configuration in JSON or TOML (default) format.
    """

    match output_format:
        case "json":
            click.echo(
                TypeAdapter(dict).dump_json(
                    config_to_dict(settings),
                    indent=2,
                ),
            )
        case "toml":
            click.echo(
                tomlkit.dumps(
                    config_to_dict(settings),
                ),
            )
        case _:
            ...


@config.command("init")
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite an existing configuration file",
)
def config_init(*, force: bool) -> None:
    """
    Write the current configuration to the configuration file.
    """

    if CONFIG_FILE.exists() and not force:
        click.echo(f"A configuration file already exists at {CONFIG_FILE}.")
        raise click.exceptions.Exit(1)

    save_config_to_file(settings, config_path=CONFIG_FILE)
    click.echo(f"Created a configuration file at {CONFIG_FILE}.")
