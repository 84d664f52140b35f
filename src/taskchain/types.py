from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field
from web3.types import TxReceipt

TRANSACTION_FAILED = "Transaction failed"
"""Error tag paired with the receipt of a transaction the ledger included but rejected"""

TASK_FIELDS = (
    "id",
    "title",
    "description",
    "completed",
    "priority",
    "progress",
    "owner",
    "aiAdvice",
    "deadline",
)
"""Field order of the contract's task struct"""

DECIMAL_FIELDS = ("id", "priority", "progress")
"""Integer struct fields that are handed to callers as decimal strings"""

TaskId: TypeAlias = int | str
"""Ids are accepted as ints or decimal strings, the contract encoder handles both"""


class Task(BaseModel):
    """
    A task record as handed to callers.

    Integer fields from the ledger become decimal strings so that large values
    survive json and javascript consumers, ``deadline`` is passed through as-is
    since its unit is defined by the contract.

    Serialize with ``model_dump(by_alias=True)`` to get the ``aiAdvice`` key.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    description: str
    completed: bool
    priority: str
    progress: str
    owner: str
    ai_advice: str = Field(alias="aiAdvice")
    deadline: Any

    @classmethod
    def from_raw(cls, raw: Any) -> Task:
        """
        Normalize a task struct returned by the contract.

        Accepts a mapping, a decoded struct with attribute access (eg. a named tuple),
        or a plain sequence in :data:`.TASK_FIELDS` order.
        """
        values = _raw_fields(raw)
        for key in DECIMAL_FIELDS:
            values[key] = str(values[key])
        return cls(**values)


def _raw_fields(raw: Any) -> dict[str, Any]:
    if isinstance(raw, Mapping):
        return {key: raw[key] for key in TASK_FIELDS}
    elif all(hasattr(raw, key) for key in TASK_FIELDS):
        return {key: getattr(raw, key) for key in TASK_FIELDS}
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        if len(raw) != len(TASK_FIELDS):
            raise ValueError(
                f"Expected a task struct with {len(TASK_FIELDS)} fields, got {len(raw)}"
            )
        return dict(zip(TASK_FIELDS, raw))
    else:
        raise TypeError(f"Cannot read a task from {type(raw).__name__}")


class AdviceRequest(BaseModel):
    """Task fields sent to the advisory service when a task is created"""

    title: str
    description: str
    priority: int | str
    progress: int | str
    deadline: Any


@dataclass(frozen=True)
class TxFailure:
    """
    A transaction that was included in a block but reported a non-success status.

    Returned rather than raised so that callers can tell "never happened"
    (an exception) apart from "happened, but the contract rejected it".
    """

    receipt: TxReceipt
    error: str = TRANSACTION_FAILED

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "receipt": self.receipt}


TxResult: TypeAlias = TxReceipt | TxFailure
"""Outcome of a mutating gateway call: the receipt on success, else a :class:`.TxFailure`"""
