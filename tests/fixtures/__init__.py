from .config import (
    set_config,
    set_dotenv,
    set_env,
    set_local_yaml,
    set_pyproject,
    tmp_cwd,
)
from .ledger import advisor, events, gateway, ledger
from .meta import monkeypatch_session
from .paths import CONTRACT_JSON, DATA_DIR

__all__ = [
    "CONTRACT_JSON",
    "DATA_DIR",
    "advisor",
    "events",
    "gateway",
    "ledger",
    "monkeypatch_session",
    "set_config",
    "set_dotenv",
    "set_env",
    "set_local_yaml",
    "set_pyproject",
    "tmp_cwd",
]
