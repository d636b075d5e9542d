# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from bugbite import time
from bugbite.engine import ledger, settings, undo
from bugbite.repository.id_map import ID_MAP_REPO
from bugbite.terminal import configuration, habit, shop, task
from bugbite.terminal.custom_typer import OrderedAliasedTyperGroup
from bugbite.terminal.session import get_engine
from bugbite.view.header import set_show_header
from bugbite.view.stats import all_months_view, monthly_stats_view, smash_log_view
from bugbite.view.status import status_view

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="bugbite - smash your tasks and habits before the bugs take over",
    no_args_is_help=True,
)
app.add_typer(task.app, name="task, t")
app.add_typer(habit.app, name="habit, h")
app.add_typer(shop.app, name="shop, sh")
app.add_typer(configuration.app, name="config, c")

console = Console()


@app.command("status, st")
def status() -> None:
    status_view(get_engine().document)


@app.command("stats, ss")
def stats(
    month: Annotated[
        Optional[str], typer.Argument(help="YYYY-MM, defaults to this month")
    ] = None,
    all_months: Annotated[
        bool, typer.Option("--all", "-a", help="totals for every month")
    ] = False,
) -> None:
    engine = get_engine()
    document = engine.document
    if all_months:
        all_months_view(document)
        return

    if month is None:
        month = time.month_key(engine.now())
    monthly_stats_view(document, month, ledger.get_monthly_stats(document, month))


@app.command("log, l")
def log(
    limit: Annotated[int, typer.Option("--limit", "-n", min=1, max=200)] = 20,
) -> None:
    """Show the most recent smashes."""
    smash_log_view(get_engine().document, limit)


@app.command("undo, u")
def undo_command() -> None:
    """Revert the last unlock, completion, smash or miss."""
    engine = get_engine()
    snapshot = engine.document["undo"]
    if snapshot is None:
        console.print("[yellow]nothing to undo[/yellow]")
        raise typer.Exit(1)

    expired = undo.is_expired(snapshot["timestamp"], engine.now(), engine.undo_window)
    document = undo.undo_last_action(engine)
    if expired:
        console.print("[yellow]undo window has passed[/yellow]")
        raise typer.Exit(1)

    console.print(f"undid {snapshot['action']} of '{snapshot['prior_entity']['title']}'")
    status_view(document)


@app.command("restore, r")
def restore() -> None:
    """Bring back the last deleted task or habit."""
    engine = get_engine()
    record = engine.document["recently_deleted"]
    if record is None:
        console.print("[yellow]nothing to restore[/yellow]")
        raise typer.Exit(1)

    document = undo.undo_delete(engine)
    collection = document[undo.collection_key(record["entity_type"])]  # type: ignore[literal-required]
    if any(entity["id"] == record["entity"]["id"] for entity in collection):
        console.print(f"restored '{record['entity']['title']}'")
    else:
        console.print("[yellow]restore window has passed[/yellow]")
        raise typer.Exit(1)


@app.command("sound")
def sound() -> None:
    """Toggle the terminal bell on smashes."""
    document = settings.toggle_sound(get_engine())
    console.print(f"sound {'on' if document['settings']['sound_on'] else 'off'}")


@app.command("reset")
def reset(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete all tasks, habits, coins and history."""
    if not yes:
        confirm = typer.confirm("Are you sure you want to continue?")
        if not confirm:
            raise typer.Exit(0)
    document = settings.reset_all_data(get_engine())
    status_view(document)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
    clear_ids: Annotated[
        bool,
        typer.Option(
            "--clear-ids/--no-clear-ids",
            help="Clear ID map",
        ),
    ] = False,
) -> None:
    """
    bugbite - smash your tasks and habits before the bugs take over

    Global options that apply to all commands.
    """
    if no_header:
        set_show_header(False)
    if clear_ids:
        ID_MAP_REPO.clear_on_view = True


def run() -> None:
    app()
