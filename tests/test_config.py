from pathlib import Path

import pytest

from taskchain.config import Config, LedgerConfig


def test_config(tmp_path):
    """
    Config should be able to make directories and set sensible defaults
    """
    config = Config(logs={"dir": tmp_path / "log"})
    assert config.logs.dir.exists()
    assert config.ledger.abi_path == Path("credentials") / "TaskContract.json"
    assert config.ledger.receipt_timeout == 120
    assert config.ledger.missing() == ["rpc_url", "private_key", "contract_address"]


def test_set_config(set_config):
    """We should be able to set parameters from all available modalities"""
    set_config(
        {
            "ledger": {"rpc_url": "http://node:8545", "chain_id": 137},
            "logs": {"file_n": 7},
        }
    )

    config = Config()
    assert config.ledger.rpc_url == "http://node:8545"
    assert config.ledger.chain_id == 137
    assert config.logs.file_n == 7


def test_config_from_environment(tmp_path, set_env):
    """
    Setting environmental variables should set the config, including recursive models
    """
    override_logdir = Path(tmp_path) / "fancylogdir"

    set_env(
        {
            "logs": {"dir": str(override_logdir), "level": "error"},
            "ledger": {"private_key": "0xabc"},
        }
    )

    config = Config()
    assert config.logs.dir == override_logdir
    assert config.logs.level == "error".upper()
    assert config.ledger.private_key.get_secret_value() == "0xabc"


def test_config_from_dotenv(tmp_path):
    """
    dotenv files should also set config
    """
    dotenv = tmp_path / ".env"
    with open(dotenv, "w") as denvfile:
        denvfile.write("TASKCHAIN_LEDGER__CONTRACT_ADDRESS=0x5FbDB2315678afecb367f032d93F642f64180aa3")

    config = Config(_env_file=dotenv, _env_file_encoding="utf-8")
    assert config.ledger.contract_address == "0x5FbDB2315678afecb367f032d93F642f64180aa3"


def test_config_sources_overrides(set_env, set_dotenv, set_pyproject, set_local_yaml):
    """Test that the different config sources are overridden in the correct order"""
    set_pyproject({"ledger": {"receipt_timeout": 2}})
    assert Config().ledger.receipt_timeout == 2
    set_local_yaml({"ledger": {"receipt_timeout": 3}})
    assert Config().ledger.receipt_timeout == 3
    set_dotenv({"ledger": {"receipt_timeout": 4}})
    assert Config().ledger.receipt_timeout == 4
    set_env({"ledger": {"receipt_timeout": 5}})
    assert Config().ledger.receipt_timeout == 5
    assert Config(**{"ledger": {"receipt_timeout": 6}}).ledger.receipt_timeout == 6


def test_legacy_ledger_env(monkeypatch):
    """
    Un-prefixed RPC_URL, PRIVATE_KEY and CONTRACT_ADDRESS fill in unset ledger settings
    """
    monkeypatch.setenv("RPC_URL", "http://legacy:8545")
    monkeypatch.setenv("PRIVATE_KEY", "0xdef")
    monkeypatch.setenv("CONTRACT_ADDRESS", "0x5FbDB2315678afecb367f032d93F642f64180aa3")

    config = Config()
    assert config.ledger.rpc_url == "http://legacy:8545"
    assert config.ledger.private_key.get_secret_value() == "0xdef"
    assert config.ledger.missing() == []


def test_legacy_ledger_env_lower_priority(monkeypatch, set_env):
    """
    Prefixed settings win over the un-prefixed names
    """
    monkeypatch.setenv("RPC_URL", "http://legacy:8545")
    set_env({"ledger": {"rpc_url": "http://prefixed:8545"}})

    config = Config()
    assert config.ledger.rpc_url == "http://prefixed:8545"


@pytest.mark.parametrize("value", ["", "   "])
def test_missing_blank_values(value):
    """
    Blank strings count as missing
    """
    ledger = LedgerConfig(rpc_url=value, private_key=value, contract_address=value)
    assert "rpc_url" in ledger.missing()
    assert "contract_address" in ledger.missing()


def test_legacy_ledger_dotenv(tmp_path):
    """
    Un-prefixed names in a .env file fill in the ledger settings too
    """
    dotenv = tmp_path / ".env"
    with open(dotenv, "w") as denvfile:
        denvfile.write(
            "RPC_URL=http://legacy:8545\n"
            "PRIVATE_KEY=0xdef\n"
            "CONTRACT_ADDRESS=0x5FbDB2315678afecb367f032d93F642f64180aa3\n"
        )

    config = Config(_env_file=dotenv, _env_file_encoding="utf-8")
    assert config.ledger.rpc_url == "http://legacy:8545"
    assert config.ledger.private_key.get_secret_value() == "0xdef"
    assert config.ledger.contract_address == "0x5FbDB2315678afecb367f032d93F642f64180aa3"
    assert config.ledger.missing() == []


def test_legacy_ledger_dotenv_priority(tmp_path, monkeypatch):
    """
    In a .env file the prefixed names win, and the environment wins over the file
    """
    dotenv = tmp_path / ".env"
    with open(dotenv, "w") as denvfile:
        denvfile.write(
            "RPC_URL=http://legacy:8545\n"
            "TASKCHAIN_LEDGER__RPC_URL=http://prefixed:8545\n"
            "PRIVATE_KEY=0xdef\n"
        )
    monkeypatch.setenv("PRIVATE_KEY", "0xabc")

    config = Config(_env_file=dotenv, _env_file_encoding="utf-8")
    assert config.ledger.rpc_url == "http://prefixed:8545"
    assert config.ledger.private_key.get_secret_value() == "0xabc"
