"""
Loading the task contract's interface descriptor
"""

import json
from pathlib import Path

from taskchain.exceptions import AbiLoadError

REQUIRED_FUNCTIONS = (
    "createTask",
    "completeTask",
    "getTask",
    "getAllTasks",
    "getTaskCount",
    "editTask",
    "deleteTask",
)
"""Contract functions the gateway calls"""


def load_abi(path: Path | str) -> list[dict]:
    """
    Read the ``abi`` list from a compiled contract descriptor like ``{"abi": [...]}`` ,
    as written by hardhat/truffle.

    Raises:
        :class:`.AbiLoadError` if the file is missing, is not json, has no ``abi`` list,
        or the abi lacks one of :data:`.REQUIRED_FUNCTIONS`
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            contract_json = json.load(f)
    except OSError as e:
        raise AbiLoadError(f"Could not read contract descriptor at {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise AbiLoadError(f"Contract descriptor at {path} is not valid json: {e}") from e

    if not isinstance(contract_json, dict) or not isinstance(contract_json.get("abi"), list):
        raise AbiLoadError(f"Contract descriptor at {path} has no 'abi' list")

    abi = contract_json["abi"]
    functions = {
        entry.get("name") for entry in abi if isinstance(entry, dict) and entry.get("type") == "function"
    }
    missing = [name for name in REQUIRED_FUNCTIONS if name not in functions]
    if missing:
        raise AbiLoadError(f"Contract abi at {path} is missing functions: {', '.join(missing)}")
    return abi
