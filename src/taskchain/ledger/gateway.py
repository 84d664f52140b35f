"""
Task contract gateway

Exposes create/complete/get/list/count/edit/delete operations over the task
contract, each one a single call or transaction that is awaited until the
ledger confirms it.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.middleware import ExtraDataToPOAMiddleware

from taskchain.config import LedgerConfig, config
from taskchain.exceptions import ConfigMissingError
from taskchain.ledger.abi import load_abi
from taskchain.logging import init_logger
from taskchain.types import AdviceRequest, Task, TaskId, TxFailure, TxResult

if TYPE_CHECKING:
    from eth_account.signers.local import LocalAccount
    from web3.contract import AsyncContract
    from web3.contract.async_contract import AsyncContractFunction

    from taskchain.advice import Advisor

logger = init_logger("ledger.gateway")


class TaskGateway:
    """
    Client for the task contract, holding one node connection and one signing account.

    Mutating calls (create/complete/edit/delete) return the transaction receipt when
    the ledger reports success, or a :class:`.TxFailure` pairing ``"Transaction failed"``
    with the receipt when the transaction was included with a non-success status.
    Transport and execution errors (network failure, rejected or reverted transactions)
    are logged and re-raised unchanged.

    Transactions from one account are nonce-ordered, and nothing here serializes
    concurrent mutating calls: callers that issue them concurrently must queue them.
    Reads may run concurrently with anything.

    Example:
        >>> gateway = TaskGateway.from_config()
        >>> receipt = await gateway.create_task("Buy milk", "2%", 1, 0, 1735689600)
        >>> task = await gateway.get_task(3)
        >>> task.priority
        '2'
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        contract: AsyncContract,
        account: LocalAccount,
        advisor: Advisor | None = None,
        chain_id: int | None = None,
        gas_price_gwei: float | None = None,
        receipt_timeout: float = 120,
    ):
        self.w3 = w3
        self.contract = contract
        self.account = account
        self.chain_id = chain_id
        self.gas_price_gwei = gas_price_gwei
        self.receipt_timeout = receipt_timeout
        self._advisor = advisor

    @classmethod
    def from_config(
        cls, ledger: LedgerConfig | None = None, advisor: Advisor | None = None
    ) -> TaskGateway:
        """
        Connect to the node and load the contract described by a :class:`.LedgerConfig`
        (the global config if ``None`` ).

        Raises:
            :class:`.ConfigMissingError` if the node url, private key, or contract address
                are unset
            :class:`.AbiLoadError` if the contract descriptor can't be loaded
        """
        if ledger is None:
            ledger = config.ledger

        missing = ledger.missing()
        if missing:
            raise ConfigMissingError(missing, section="ledger")

        abi = load_abi(ledger.abi_path)

        logger.info("Connecting to network... %s", ledger.rpc_url)
        w3 = AsyncWeb3(AsyncHTTPProvider(ledger.rpc_url))
        if ledger.chain_id is not None and ledger.chain_id in ledger.poa_chain_ids:
            w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

        account = Account.from_key(ledger.private_key.get_secret_value())
        contract = w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(ledger.contract_address),
            abi=abi,
            decode_tuples=True,
        )
        logger.info("Connected to network: %s", ledger.rpc_url)

        return cls(
            w3=w3,
            contract=contract,
            account=account,
            advisor=advisor,
            chain_id=ledger.chain_id,
            gas_price_gwei=ledger.gas_price_gwei,
            receipt_timeout=ledger.receipt_timeout,
        )

    @property
    def address(self) -> str:
        """Address of the signing account, the ``owner`` of tasks it creates"""
        return self.account.address

    @property
    def advisor(self) -> Advisor:
        """
        The advisory service used by :meth:`.create_task` .
        If none was given, an :class:`.OpenAIAdvisor` is built from the global config
        on first use, so read-only use doesn't need advisor credentials.
        """
        if self._advisor is None:
            from taskchain.advice import OpenAIAdvisor

            self._advisor = OpenAIAdvisor.from_config()
        return self._advisor

    async def create_task(
        self,
        title: str,
        description: str,
        priority: int | str,
        progress: int | str,
        deadline: Any,
    ) -> TxResult:
        """
        Ask the advisor for productivity advice, then submit a ``createTask`` transaction
        carrying it. If the advisor fails, nothing is submitted.

        ``priority`` and ``progress`` may be decimal strings, as returned by :meth:`.get_task` .
        """
        with self._logged("createTask"):
            logger.info(
                "Creating task... %s %s %s %s %s", title, description, priority, progress, deadline
            )
            ai_advice = await self.advisor.get_productivity_advice(
                AdviceRequest(
                    title=title,
                    description=description,
                    priority=priority,
                    progress=progress,
                    deadline=deadline,
                )
            )
            return await self._submit(
                self.contract.functions.createTask(
                    title, description, int(priority), int(progress), ai_advice, deadline
                )
            )

    async def complete_task(self, task_id: TaskId) -> TxResult:
        with self._logged("completeTask"):
            return await self._submit(self.contract.functions.completeTask(int(task_id)))

    async def get_task(self, task_id: TaskId) -> Task:
        with self._logged("getTask"):
            raw = await self.contract.functions.getTask(int(task_id)).call()
            return Task.from_raw(raw)

    async def get_all_tasks(self) -> list[Task]:
        """All tasks, in the order the contract returns them"""
        with self._logged("getAllTasks"):
            raw_tasks = await self.contract.functions.getAllTasks().call()
            return [Task.from_raw(raw) for raw in raw_tasks]

    async def get_all_task_count(self) -> int:
        with self._logged("getAllTaskCount"):
            task_count = await self.contract.functions.getTaskCount().call()
            logger.info("Task count: %s", task_count)
            return int(task_count)

    async def edit_task(
        self,
        task_id: TaskId,
        title: str,
        description: str,
        priority: int | str,
        progress: int | str,
        ai_advice: str,
        deadline: Any,
    ) -> TxResult:
        """
        Overwrite every field of a task. ``ai_advice`` is stored as given,
        the advisor is not consulted again. Integer fields may be decimal strings,
        so a record from :meth:`.get_task` can be passed back in.
        """
        with self._logged("editTask"):
            return await self._submit(
                self.contract.functions.editTask(
                    int(task_id),
                    title,
                    description,
                    int(priority),
                    int(progress),
                    ai_advice,
                    deadline,
                )
            )

    async def delete_task(self, task_id: TaskId) -> TxResult:
        with self._logged("deleteTask"):
            return await self._submit(self.contract.functions.deleteTask(int(task_id)))

    # names as exposed by the contract
    createTask = create_task
    completeTask = complete_task
    getTask = get_task
    getAllTasks = get_all_tasks
    getAllTaskCount = get_all_task_count
    editTask = edit_task
    deleteTask = delete_task

    async def _submit(self, function: AsyncContractFunction) -> TxResult:
        """Sign and send a transaction, then wait for its receipt"""
        params: dict[str, Any] = {
            "from": self.address,
            "nonce": await self.w3.eth.get_transaction_count(self.address, "pending"),
            "chainId": await self._get_chain_id(),
        }
        if self.gas_price_gwei is not None:
            params["gasPrice"] = self.w3.to_wei(self.gas_price_gwei, "gwei")

        tx = await function.build_transaction(params)
        signed = self.account.sign_transaction(tx)
        tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info("Transaction submitted: %s", AsyncWeb3.to_hex(tx_hash))

        receipt = await self.w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self.receipt_timeout
        )

        if receipt["status"] == 1:
            logger.info(
                "Transaction confirmed: %s", AsyncWeb3.to_hex(receipt["transactionHash"])
            )
            return receipt
        else:
            logger.error("Transaction failed: %s", receipt)
            return TxFailure(receipt=receipt)

    async def _get_chain_id(self) -> int:
        if self.chain_id is None:
            self.chain_id = await self.w3.eth.chain_id
        return self.chain_id

    @contextmanager
    def _logged(self, operation: str) -> Iterator[None]:
        try:
            yield
        except Exception:
            logger.exception("Error in %s (account %s)", operation, self.address)
            raise
