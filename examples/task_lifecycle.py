#!/usr/bin/env python
"""
Task lifecycle against a local hardhat node

Start a node and deploy the task contract:

    npx hardhat node
    npx hardhat run scripts/deploy.js --network localhost

then point taskchain at it (``.env`` works too):

    export TASKCHAIN_LEDGER__RPC_URL=http://127.0.0.1:8545
    export TASKCHAIN_LEDGER__PRIVATE_KEY=0xac09...ff80
    export TASKCHAIN_LEDGER__CONTRACT_ADDRESS=0x5FbDB2315678afecb367f032d93F642f64180aa3
    export TASKCHAIN_ADVISOR__API_KEY=sk-...

and run this script.
"""

import asyncio

from taskchain import TaskGateway, TxFailure, init_logger

logger = init_logger("examples.lifecycle")


async def main() -> None:
    gateway = TaskGateway.from_config()

    result = await gateway.create_task(
        "Write quarterly report", "Numbers from finance, draft by Friday", 2, 0, "2025-03-28"
    )
    if isinstance(result, TxFailure):
        logger.error("Contract rejected the new task: %s", result.receipt)
        return

    task = (await gateway.get_all_tasks())[-1]
    logger.info("Created task %s, advice: %s", task.id, task.ai_advice)

    await gateway.edit_task(
        task.id, task.title, task.description, task.priority, 60, task.ai_advice, task.deadline
    )
    await gateway.complete_task(task.id)

    done = await gateway.get_task(task.id)
    logger.info("Task %s completed=%s progress=%s", done.id, done.completed, done.progress)
    logger.info("%d tasks on chain", await gateway.get_all_task_count())


if __name__ == "__main__":
    asyncio.run(main())
