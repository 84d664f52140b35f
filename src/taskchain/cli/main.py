try:
    import click
except ImportError as e:
    raise ImportError(
        "CLI Dependencies not installed! Install taskchain with the optional [cli] dependency group"
    ) from e


from taskchain.cli.tasks import complete, count, create, delete, edit, get, list_tasks


@click.group("taskchain")
def main() -> None:
    """
    Manage tasks stored in the task contract
    """


main.add_command(create)
main.add_command(complete)
main.add_command(get)
main.add_command(list_tasks)
main.add_command(count)
main.add_command(edit)
main.add_command(delete)
