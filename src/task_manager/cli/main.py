# src/task_manager/cli/main.py

"""
CLI entrypoint.

Loads settings once, configures logging, builds AppState and dispatches to
the add / list / complete commands. Store errors are reported on stderr
with exit code 1.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from .. import __version__
from ..core.state import AppState
from ..errors import TaskStoreError
from ..tasks.task_api import add_from_input, build_filter, parse_due_date
from ..tasks.task_models import Priority, TaskStatus
from .bootstrap import configure_logging, create_initial_state, load_settings
from .render import format_summary, format_task

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

PRIORITY_CHOICE = click.Choice([p.value for p in Priority], case_sensitive=False)
STATUS_CHOICE = click.Choice([s.value for s in TaskStatus], case_sensitive=False)


def _reports_errors(func: F) -> F:
    """Turn store errors into a stderr message and exit code 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except TaskStoreError as exc:
            logger.debug("Command %s failed.", func.__name__, exc_info=True)
            click.secho(f"Error: {exc}", fg="red", err=True)
            raise SystemExit(1) from exc

    return wrapper  # type: ignore[return-value]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--file",
    "tasks_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Tasks JSON file (overrides TASKS_FILE).",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs on stderr.")
@click.version_option(__version__, prog_name="task-manager")
@click.pass_context
def cli(ctx: click.Context, tasks_file: Path | None, verbose: bool) -> None:
    """A simple command-line interface for managing tasks."""
    settings = load_settings(tasks_file=tasks_file)
    configure_logging(settings, verbose=verbose)
    ctx.obj = create_initial_state(settings=settings)


def _prompt_for_task(
    description: str | None, priority: str, due: str | None
) -> tuple[str, str, str | None] | None:
    description = click.prompt("Description", default=description or None, type=str)
    priority = click.prompt("Priority", default=priority, type=PRIORITY_CHOICE)
    due_default = due or ""
    while True:
        due = click.prompt(
            "Due date (YYYY-MM-DD, blank for none)",
            default=due_default,
            show_default=bool(due_default),
        )
        try:
            parse_due_date(due)
            break
        except TaskStoreError as exc:
            click.secho(str(exc), fg="yellow", err=True)
            due_default = ""
    if not click.confirm(f"Add {description!r}?", default=True):
        return None
    return description, priority, due or None


@cli.command("add")
@click.argument("description", required=False)
@click.option("-p", "--priority", type=PRIORITY_CHOICE, default=None, help="low, medium or high.")
@click.option("-d", "--due", default=None, metavar="YYYY-MM-DD", help="Optional due date.")
@click.option("-i", "--interactive", is_flag=True, help="Prompt for the task fields.")
@click.pass_obj
@_reports_errors
def add_cmd(
    state: AppState,
    description: str | None,
    priority: str | None,
    due: str | None,
    interactive: bool,
) -> None:
    """Add a new task."""
    if interactive:
        answers = _prompt_for_task(
            description, priority or state.settings.default_priority.value, due
        )
        if answers is None:
            click.echo("Cancelled.")
            return
        description, priority, due = answers

    task = add_from_input(
        state.task_store,
        description=description or "",
        priority=priority,
        due=due,
        default_priority=state.settings.default_priority,
    )
    click.echo(f"Task added: {format_task(task)}")


@cli.command("list")
@click.option("-s", "--status", type=STATUS_CHOICE, default=None, help="pending or completed.")
@click.option("-p", "--priority", type=PRIORITY_CHOICE, default=None, help="low, medium or high.")
@click.option("-a", "--all", "include_all", is_flag=True, help="Include completed tasks.")
@click.pass_obj
@_reports_errors
def list_cmd(
    state: AppState, status: str | None, priority: str | None, include_all: bool
) -> None:
    """List tasks (pending only unless --status or --all is given)."""
    task_filter = build_filter(status=status, priority=priority, include_all=include_all)
    tasks = state.task_store.list_tasks(task_filter)
    if not tasks:
        click.echo("No tasks.")
        return
    for task in tasks:
        click.echo(format_task(task))
    click.echo(format_summary(tasks))


@cli.command("complete")
@click.argument("task_id", type=int)
@click.pass_obj
@_reports_errors
def complete_cmd(state: AppState, task_id: int) -> None:
    """Mark a task as completed."""
    result = state.task_store.complete_task(task_id)
    if not result.changed:
        click.echo(f"Task {task_id} was already completed.")
        return
    click.echo(f"Task completed: {format_task(result.task)}")


def main() -> None:
    cli(prog_name="task-manager")


if __name__ == "__main__":
    main()
