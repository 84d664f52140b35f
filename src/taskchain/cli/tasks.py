import asyncio
import json
import sys
from collections.abc import Coroutine
from typing import Any

import click
from rich.console import Console
from web3 import Web3

from taskchain.exceptions import ConfigError
from taskchain.ledger.gateway import TaskGateway
from taskchain.types import Task, TxFailure, TxResult

_console = Console(file=sys.stderr)


def _gateway(ctx: click.Context) -> TaskGateway:
    """Gateway passed in as the context object, else one built from the global config"""
    if isinstance(ctx.obj, TaskGateway):
        return ctx.obj
    try:
        ctx.obj = TaskGateway.from_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    return ctx.obj


def _run(coro: Coroutine) -> Any:
    with _console.status("Waiting for the ledger..."):
        return asyncio.run(coro)


def _echo_task(task: Task) -> None:
    click.echo(json.dumps(task.model_dump(by_alias=True, mode="json")))


def _echo_result(result: TxResult) -> None:
    if isinstance(result, TxFailure):
        click.echo(
            json.dumps({"error": result.error, "receipt": json.loads(Web3.to_json(result.receipt))})
        )
        sys.exit(1)
    click.echo(Web3.to_json(result))


@click.command("create")
@click.argument("title")
@click.option("--description", "-d", default="", help="Longer description of the task")
@click.option("--priority", "-p", type=click.INT, default=0)
@click.option("--progress", type=click.IntRange(0, 100), default=0, help="Percent complete")
@click.option("--deadline", required=True, help="Deadline, sent to the contract as given")
@click.pass_context
def create(
    ctx: click.Context,
    title: str,
    description: str = "",
    priority: int = 0,
    progress: int = 0,
    deadline: str = "",
) -> None:
    """Create a task, with advice from the advisory service"""
    gateway = _gateway(ctx)
    result = _run(gateway.create_task(title, description, priority, progress, deadline))
    _echo_result(result)


@click.command("complete")
@click.argument("task_id", type=click.INT)
@click.pass_context
def complete(ctx: click.Context, task_id: int) -> None:
    """Mark a task as completed"""
    _echo_result(_run(_gateway(ctx).complete_task(task_id)))


@click.command("get")
@click.argument("task_id", type=click.INT)
@click.pass_context
def get(ctx: click.Context, task_id: int) -> None:
    """Print one task as json"""
    _echo_task(_run(_gateway(ctx).get_task(task_id)))


@click.command("list")
@click.option(
    "--output-format",
    "-of",
    type=click.Choice(("json", "jsonl")),
    default="json",
    help="""json outputs all tasks as a single array,
              jsonl emits one task per line.
              """,
)
@click.pass_context
def list_tasks(ctx: click.Context, output_format: str = "json") -> None:
    """Print every task"""
    tasks = _run(_gateway(ctx).get_all_tasks())
    if output_format == "jsonl":
        for task in tasks:
            _echo_task(task)
    else:
        click.echo(json.dumps([task.model_dump(by_alias=True, mode="json") for task in tasks]))


@click.command("count")
@click.pass_context
def count(ctx: click.Context) -> None:
    """Print the number of tasks"""
    click.echo(_run(_gateway(ctx).get_all_task_count()))


@click.command("edit")
@click.argument("task_id", type=click.INT)
@click.option("--title", required=True)
@click.option("--description", "-d", required=True)
@click.option("--priority", "-p", type=click.INT, required=True)
@click.option("--progress", type=click.IntRange(0, 100), required=True)
@click.option("--advice", required=True, help="Advice text to store, not regenerated")
@click.option("--deadline", required=True)
@click.pass_context
def edit(
    ctx: click.Context,
    task_id: int,
    title: str,
    description: str,
    priority: int,
    progress: int,
    advice: str,
    deadline: str,
) -> None:
    """Overwrite every field of a task"""
    result = _run(
        _gateway(ctx).edit_task(task_id, title, description, priority, progress, advice, deadline)
    )
    _echo_result(result)


@click.command("delete")
@click.argument("task_id", type=click.INT)
@click.pass_context
def delete(ctx: click.Context, task_id: int) -> None:
    """Delete a task"""
    _echo_result(_run(_gateway(ctx).delete_task(task_id)))
