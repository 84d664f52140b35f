import os
from pathlib import Path
from typing import Any, Literal

from platformdirs import PlatformDirs
from pydantic import BaseModel, SecretStr, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    PyprojectTomlConfigSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_dirs = PlatformDirs("taskchain", "taskchain")
LOG_LEVELS = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class LogConfig(BaseModel):
    """
    Configuration for logging
    """

    model_config = SettingsConfigDict(validate_default=True)

    level: LOG_LEVELS = "INFO"
    """
    Severity of log messages to process.
    """
    level_file: LOG_LEVELS | None = None
    """
    Severity for file-based logging. If unset, use ``level``
    """
    level_stdout: LOG_LEVELS | None = None
    """
    Severity for stream-based logging. If unset, use ``level``
    """
    dir: Path | Literal[False] = Path(_dirs.user_log_dir)
    """
    Directory where logs are stored.
    """
    file_n: int = 5
    """
    Number of log files to rotate through
    """
    file_size: int = 2**22  # roughly 4MB
    """
    Maximum size of log files (bytes)
    """
    width: int | None = None
    """
    Explicitly set width of rich stdout logs, leave as None for auto detection.
    """

    @field_validator("level", "level_file", "level_stdout", mode="before")
    @classmethod
    def uppercase_levels(cls, value: str | None = None) -> str | None:
        """
        Ensure log level strings are uppercased
        """
        if value is not None:
            value = value.upper()
        return value

    @field_validator("dir", mode="after")
    def create_dir(cls, value: Path | Literal[False]) -> Path | Literal[False]:
        if value is False:
            return value
        value.mkdir(parents=True, exist_ok=True)
        return value


class LedgerConfig(BaseModel):
    """
    Connection to the node, the signing identity, and the task contract.

    ``rpc_url``, ``private_key`` and ``contract_address`` are required to build a
    :class:`~taskchain.ledger.gateway.TaskGateway` , but are optional here so that
    the rest of the config can load without secrets present.
    """

    rpc_url: str | None = None
    """
    HTTP(S) endpoint of the ledger node
    """
    private_key: SecretStr | None = None
    """
    Hex-encoded key of the signing account
    """
    contract_address: str | None = None
    """
    Address of the deployed task contract
    """
    abi_path: Path = Path("credentials") / "TaskContract.json"
    """
    Contract interface descriptor, a json file shaped like ``{"abi": [...]}`` .
    Relative paths resolve against the working directory.
    """
    chain_id: int | None = None
    """
    Chain id to sign transactions for. If ``None`` , ask the node.
    """
    gas_price_gwei: float | None = None
    """
    Fixed legacy gas price. If ``None`` , let the node fill in fees.
    """
    receipt_timeout: float = 120
    """
    Seconds to wait for a transaction receipt before the transport gives up
    """
    poa_chain_ids: list[int] = [137, 80001]
    """
    Chains that need the proof-of-authority extra-data middleware
    """

    def missing(self) -> list[str]:
        """Names of required settings that are unset or blank"""
        missing = []
        if not (self.rpc_url or "").strip():
            missing.append("rpc_url")
        if self.private_key is None or not self.private_key.get_secret_value().strip():
            missing.append("private_key")
        if not (self.contract_address or "").strip():
            missing.append("contract_address")
        return missing


class AdvisorConfig(BaseModel):
    """
    OpenAI-compatible endpoint used to produce productivity advice for new tasks
    """

    api_key: SecretStr | None = None
    base_url: str | None = None
    """
    If ``None`` , use the SDK default (api.openai.com)
    """
    model: str = "gpt-4o-mini"
    timeout: float = 30
    max_tokens: int = 300


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="taskchain_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
        yaml_file="taskchain_config.yaml",
        pyproject_toml_table_header=("tool", "taskchain", "config"),
        validate_default=True,
    )

    logs: LogConfig = LogConfig()
    ledger: LedgerConfig = LedgerConfig()
    advisor: AdvisorConfig = AdvisorConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Read config settings from, in order of priority from high to low, where
        high priorities override lower priorities:

        * in the arguments passed to the class constructor (not user configurable)
        * in environment variables like ``export TASKCHAIN_LEDGER__RPC_URL=http://...``
        * in a ``.env`` file in the working directory
        * in the un-prefixed ``RPC_URL`` , ``PRIVATE_KEY`` and ``CONTRACT_ADDRESS``
          environment variables or ``.env`` entries, see :class:`.LegacyLedgerSettingsSource`
        * in a ``taskchain_config.yaml`` file in the working directory
        * in the ``tool.taskchain.config`` table in a ``pyproject.toml`` file
          in the working directory
        * the default values in the :class:`.Config` model
        """

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            LegacyLedgerSettingsSource(settings_cls, dotenv_settings),
            YamlConfigSettingsSource(settings_cls),
            PyprojectTomlConfigSettingsSource(settings_cls),
        )


class LegacyLedgerSettingsSource(PydanticBaseSettingsSource):
    """
    ``RPC_URL`` , ``PRIVATE_KEY`` and ``CONTRACT_ADDRESS`` from the environment or the
    ``.env`` file, for deployments that predate the ``TASKCHAIN_LEDGER__`` names.

    The environment wins over the ``.env`` file.
    """

    names = {
        "rpc_url": "RPC_URL",
        "private_key": "PRIVATE_KEY",
        "contract_address": "CONTRACT_ADDRESS",
    }

    def __init__(
        self, settings_cls: type[BaseSettings], dotenv_settings: PydanticBaseSettingsSource
    ):
        super().__init__(settings_cls)
        # keys are lowercased unless the settings are case sensitive
        self.dotenv_vars = {
            key.upper(): value
            for key, value in getattr(dotenv_settings, "env_vars", {}).items()
            if value
        }

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        # only the nested ledger fields are read, see __call__
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        ledger = {}
        for key, name in self.names.items():
            value = os.environ.get(name) or self.dotenv_vars.get(name)
            if value:
                ledger[key] = value
        return {"ledger": ledger} if ledger else {}


config = Config()
