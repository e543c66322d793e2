import tomllib
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import HttpUrl, WebsocketUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from evm_manager.logging import logger
from evm_manager.types.aliases import ChainId

CONFIG_DIR = Path.home() / ".config" / "evm_manager"
CONFIG_FILE = CONFIG_DIR / "config.toml"


class Settings(BaseSettings):
    model_config = SettingsConfigDict()

    # Scalar options come first so they are written above the [rpc] table
    default_chain_id: ChainId | None = None
    rpc: dict[
        ChainId,
        HttpUrl | WebsocketUrl | Path,
    ] = {}

    @field_validator("rpc", mode="after")
    def validate_paths(
        cls,  # noqa: N805
        rpc_dict: dict[ChainId, HttpUrl | WebsocketUrl | Path],
    ) -> dict[ChainId, HttpUrl | WebsocketUrl | Path]:
        """
        Validate the endpoints.

        This will convert all file paths to an absolute reference, leaving HTTP and WS URLs as-is.
        """

        return {
            chain_id: endpoint.expanduser().absolute() if isinstance(endpoint, Path) else endpoint
            for chain_id, endpoint in rpc_dict.items()
        }

    def get_rpc(self, chain_id: ChainId | None = None) -> HttpUrl | WebsocketUrl | Path | None:
        """
        Get the endpoint for a chain, falling back to the default chain if none is given.
        """

        if chain_id is None:
            chain_id = self.default_chain_id
        if chain_id is None:
            return None
        return self.rpc.get(chain_id)


def config_to_dict(config: Settings) -> dict[str, Any]:
    """
    Dump the settings to plain values that both JSON and TOML can represent. TOML tables require
    string keys and have no null value, so chain IDs are stringified and unset options are dropped.
    """

    return {
        key: {str(k): v for k, v in value.items()} if isinstance(value, dict) else value
        for key, value in config.model_dump(mode="json").items()
        if value is not None
    }


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    if not config_path.parent.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created a configuration directory at {config_path.parent}.")

    config_path.write_text(
        tomlkit.dumps(
            config_to_dict(config),
        ),
    )


if CONFIG_FILE.exists():
    settings = load_config_from_file(CONFIG_FILE)
else:
    settings = Settings()
