"""Typer-based CLI for review-helper."""

import logging
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ReviewHelperSettings
from .context import ProjectContext
from .engine import ReviewEngine, ShowDestination, run_review
from .errors import ReviewHelperError
from .models.project import Author

app = typer.Typer(
    name="review-helper",
    help="A helper tool for reviewing course task submissions",
    add_completion=False,
)

console = Console()

CONFIG_OPTION_HELP = "Path to config of the author and the tasks (default: REVIEW_HELPER_CONFIG env or ./config.json)"
PROJECT_OPTION_HELP = "Project directory with tasks/, notes/ and reviews/ (default: REVIEW_HELPER_PROJECT_DIR env or .)"


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]", highlight=False)
    raise typer.Exit(code=1)


def _load_context(config_path: str | None, project_dir: str | None) -> ProjectContext:
    settings = ReviewHelperSettings.from_env(config_path, project_dir)
    try:
        return ProjectContext.load(settings)
    except (ReviewHelperError, OSError) as e:
        _fail(f"Can't load context: {e}")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable debug logging",
    ),
):
    """Jot notes while reading code, then assemble them into a review."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def init(
    author: str = typer.Option(..., "--author", "-a", help="Author name and surname"),
    contacts: str = typer.Option(
        ...,
        "--contacts",
        "-c",
        help="Contacts of the author (Telegram for example)",
    ),
    config_path: str = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    project_dir: str = typer.Option(None, "--project-dir", "-p", help=PROJECT_OPTION_HELP),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config",
    ),
):
    """Initialize a project directory and a config with no tasks."""
    settings = ReviewHelperSettings.from_env(config_path, project_dir)
    try:
        context = ProjectContext.init_project(
            Author(name=author, contacts=contacts),
            settings,
            force=force,
        )
    except (ReviewHelperError, OSError) as e:
        _fail(str(e))

    console.print(f"[green]+[/green] Project initialized at {context.paths.root}")
    console.print(f"[dim]Config: {context.config_path}[/dim]")


@app.command()
def add(
    task: str = typer.Option(..., "--task", "-t", help="Name of the new task"),
    code_file_name: str = typer.Option(
        ...,
        "--code-file-name",
        "-c",
        help="Name of file with code to review",
    ),
    config_path: str = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    project_dir: str = typer.Option(None, "--project-dir", "-p", help=PROJECT_OPTION_HELP),
):
    """Add a new task to the project."""
    context = _load_context(config_path, project_dir)
    try:
        new_task = context.add_task(task, code_file_name)
        context.dump_state()
    except (ReviewHelperError, OSError) as e:
        _fail(f"Can't add task: {e}")

    console.print("[green]Successfully add[/green]")
    console.print(f"[dim]Put the code to review into {new_task.code_file_path}[/dim]")


@app.command()
def review(
    task: str = typer.Option(..., "--task", "-t", help="Task to review (from task list)"),
    show_file_name: str = typer.Option(
        None,
        "--show-file-name",
        "-s",
        help="Write `show` output to this file in the task directory instead of the console",
    ),
    config_path: str = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    project_dir: str = typer.Option(None, "--project-dir", "-p", help=PROJECT_OPTION_HELP),
):
    """Start the review of a task.

    Commands, one per line:
    new [optional] <text>, add [optional] [reference <first> <second>] <number>,
    show, drop, complete.
    """
    context = _load_context(config_path, project_dir)
    if show_file_name:
        show = ShowDestination.to_file(context.paths.show_file(task, show_file_name))
    else:
        show = ShowDestination.console()

    try:
        context.check_task(task)
        engine = ReviewEngine(context, task, show=show)
    except (ReviewHelperError, OSError) as e:
        _fail(f"Can't start review: {e}")

    console.print(f"Start review with task: {task}", markup=False, highlight=False)
    run_review(engine)
    if not engine.is_finished():
        _fail("Input closed before the review was completed")


@app.command()
def notes(
    task: str = typer.Option(..., "--task", "-t", help="Task whose bank notes to list"),
    config_path: str = typer.Option(None, "--config", help=CONFIG_OPTION_HELP),
    project_dir: str = typer.Option(None, "--project-dir", "-p", help=PROJECT_OPTION_HELP),
):
    """List the bank notes recorded for a task."""
    context = _load_context(config_path, project_dir)
    try:
        bank = context.open_task(task).bank
    except (ReviewHelperError, OSError) as e:
        _fail(str(e))

    if bank.is_empty():
        console.print(f"[yellow]No notes for task {escape(task)}[/yellow]")
        return

    table = Table(title=f"Notes: {escape(task)}")
    table.add_column("Kind", style="cyan")
    table.add_column("#", style="magenta", justify="right")
    table.add_column("Text")
    for num, note in enumerate(bank.necessary):
        table.add_row("necessary", str(num), escape(note.render()))
    for num, note in enumerate(bank.optional):
        table.add_row("optional", str(num), escape(note.render()))
    console.print(table)


if __name__ == "__main__":
    app()
