import tomllib
from pathlib import Path
from typing import Literal

import tomlkit
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clamm.checksum_cache import get_checksum_address
from clamm.logging import logger

CONFIG_DIR = Path.home() / ".config" / "clamm"
CONFIG_FILE = CONFIG_DIR / "config.toml"

type LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class RouteSearchSettings(BaseModel):
    max_num_results: int = Field(default=3, ge=1)
    max_hops: int = Field(default=3, ge=1)


class DeploymentSettings(BaseModel):
    """
    The pool factory and init code hash used to derive deterministic pool addresses.
    """

    factory_address: ChecksumAddress = get_checksum_address(
        "0x1F98431c8aD98523631AE4a59f267346ea31F984"
    )
    pool_init_hash: str = "0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54"

    @field_validator("factory_address", mode="before")
    def validate_factory_address(
        cls,  # noqa: N805
        address: str,
    ) -> ChecksumAddress:
        return get_checksum_address(address)

    @field_validator("pool_init_hash", mode="after")
    def validate_pool_init_hash(
        cls,  # noqa: N805
        init_hash: str,
    ) -> str:
        if len(HexBytes(init_hash)) != 32:  # noqa: PLR2004
            msg = f"Pool init hash {init_hash} is not 32 bytes."
            raise ValueError(msg)
        return HexBytes(init_hash).to_0x_hex()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CLAMM_",
        env_nested_delimiter="__",
    )

    log_level: LogLevel = "INFO"
    math_cache_size: int = Field(default=1024, ge=0)
    route_search: RouteSearchSettings = RouteSearchSettings()
    deployment: DeploymentSettings = DeploymentSettings()


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(),
        ),
    )
    logger.info(f"Saved configuration to {config_path}.")


if CONFIG_FILE.exists():
    settings = load_config_from_file(CONFIG_FILE)
    logger.debug(f"Loaded configuration from {CONFIG_FILE}.")
else:
    settings = Settings()

logger.setLevel(settings.log_level)
