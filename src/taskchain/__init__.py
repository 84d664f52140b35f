from taskchain.config import config as cfg
from taskchain.logging import init_logger
from taskchain.ledger import TaskGateway
from taskchain.types import AdviceRequest, Task, TxFailure, TxResult

__all__ = [
    "AdviceRequest",
    "Task",
    "TaskGateway",
    "TxFailure",
    "TxResult",
    "cfg",
    "init_logger",
]
