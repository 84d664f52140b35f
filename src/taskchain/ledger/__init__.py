"""
Task contract integration

Quick Start:
    >>> from taskchain.ledger import TaskGateway
    >>>
    >>> # reads TASKCHAIN_LEDGER__RPC_URL, TASKCHAIN_LEDGER__PRIVATE_KEY,
    >>> # TASKCHAIN_LEDGER__CONTRACT_ADDRESS (or RPC_URL, PRIVATE_KEY, CONTRACT_ADDRESS)
    >>> gateway = TaskGateway.from_config()
    >>>
    >>> receipt = await gateway.create_task("Buy milk", "2%", 1, 0, 1735689600)
    >>> tasks = await gateway.get_all_tasks()
"""

from taskchain.ledger.abi import REQUIRED_FUNCTIONS, load_abi
from taskchain.ledger.gateway import TaskGateway

__all__ = ["REQUIRED_FUNCTIONS", "TaskGateway", "load_abi"]
