# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from bugbite.engine import entity_store, scheduler
from bugbite.repository.id_map import ID_MAP_REPO
from bugbite.model.entity_type import EntityType
from bugbite.terminal.custom_typer import AliasedTyperGroup
from bugbite.terminal.parse import parse_date, resolve_id, resolve_ids
from bugbite.terminal.session import get_engine
from bugbite.terminal.validate import (
    validate_difficulty,
    validate_interval,
    validate_times_per_day,
)
from bugbite.time import date_to_display_str
from bugbite.view.habit import habits_view, single_habit_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    difficulty: Annotated[
        str,
        typer.Option(
            "--difficulty",
            "-d",
            callback=validate_difficulty,
            help="valid input: easy, medium, hard, boss",
        ),
    ] = "easy",
    interval: Annotated[
        str,
        typer.Option(
            "--interval",
            "-iv",
            callback=validate_interval,
            help="valid input: daily, weekly, monthly",
        ),
    ] = "daily",
    times_per_day: Annotated[
        int,
        typer.Option(
            "--times", "-x", callback=validate_times_per_day, help="valid input: 1-10"
        ),
    ] = 1,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-no")] = None,
    checklist: Annotated[
        Optional[list[str]],
        typer.Option("--item", "-i", help="checklist item (repeatable)"),
    ] = None,
) -> None:
    engine = get_engine()
    before = {habit["id"] for habit in engine.document["habits"]}

    document = entity_store.add_habit(
        engine,
        title,
        difficulty,
        interval_type=interval,
        times_per_day=times_per_day,
        start_date=start,
        note=note,
        checklist=checklist,
    )
    new_habits = [habit for habit in document["habits"] if habit["id"] not in before]
    if len(new_habits) == 0:
        raise typer.BadParameter("Title cannot be blank")
    single_habit_view(document, new_habits[0])


@app.command("list, ls")
def list_habits() -> None:
    ID_MAP_REPO.clear_ids_on_view()
    engine = get_engine()
    scheduler.spawn_due_habits(engine)
    habits_view(engine.document, entity_store.list_habits(engine))


@app.command("show, s", no_args_is_help=True)
def show(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("habits", id):
        habit = entity_store.get_habit(engine, real_id)
        if habit is not None:
            single_habit_view(engine.document, habit)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    difficulty: Annotated[
        Optional[str],
        typer.Option(
            "--difficulty",
            "-d",
            callback=validate_difficulty,
            help="valid input: easy, medium, hard, boss",
        ),
    ] = None,
    interval: Annotated[
        Optional[str],
        typer.Option(
            "--interval",
            "-iv",
            callback=validate_interval,
            help="valid input: daily, weekly, monthly",
        ),
    ] = None,
    times_per_day: Annotated[
        Optional[int],
        typer.Option(
            "--times", "-x", callback=validate_times_per_day, help="valid input: 1-10"
        ),
    ] = None,
    next_due: Annotated[
        Optional[pendulum.Date],
        typer.Option("--next-due", "-nd", parser=parse_date, help=DATE_HELP),
    ] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-no")] = None,
    checklist: Annotated[
        Optional[list[str]],
        typer.Option("--item", "-i", help="replace the checklist (repeatable)"),
    ] = None,
    remove_note: Annotated[bool, typer.Option("--remove-note", "-rno")] = False,
    remove_checklist: Annotated[
        bool, typer.Option("--remove-checklist", "-ri")
    ] = False,
) -> None:
    engine = get_engine()
    for real_id in resolve_ids("habits", id):
        document = entity_store.update_habit(
            engine,
            real_id,
            title=title,
            difficulty=difficulty,
            interval_type=interval,
            times_per_day=times_per_day,
            next_due_date=next_due,
            note=note,
            checklist=checklist,
            remove_note=remove_note,
            remove_checklist=remove_checklist,
        )
        habit = scheduler.find_habit(document, real_id)
        if habit is not None:
            single_habit_view(document, habit)


@app.command("spawn, sp")
def spawn(
    today: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-dt", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Turn every habit that is due into a bug."""
    ID_MAP_REPO.clear_ids_on_view()
    engine = get_engine()
    document = scheduler.spawn_due_habits(engine, today)
    habits_view(
        document,
        [
            habit
            for habit in entity_store.list_habits(engine)
            if habit["active_bug_state"] is not None
        ],
    )


@app.command("done, dn", no_args_is_help=True)
def done(id: str) -> None:
    """Complete one of today's occurrences."""
    engine = get_engine()
    for real_id in resolve_ids("habits", id):
        habit = entity_store.get_habit(engine, real_id)
        if habit is None:
            continue
        if habit["remaining_today"] <= 0:
            console.print(f"[yellow]'{habit['title']}' has nothing left today[/yellow]")
            continue
        document = scheduler.complete_habit_occurrence(engine, real_id)
        updated = scheduler.find_habit(document, real_id)
        if updated is not None:
            single_habit_view(document, updated)


@app.command("smash, x", no_args_is_help=True)
def smash(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("habits", id):
        habit = entity_store.get_habit(engine, real_id)
        if habit is None:
            continue
        if habit["active_bug_state"] != "unlocked":
            console.print(f"[yellow]'{habit['title']}' is not unlocked[/yellow]")
            continue
        coins_before = engine.document["coins"]
        document = scheduler.smash_habit(engine, real_id)
        smashed = scheduler.find_habit(document, real_id)
        next_due = (
            date_to_display_str(smashed["next_due_date"]) if smashed is not None else ""
        )
        console.print(
            f"💥 smashed '{habit['title']}' +{document['coins'] - coins_before} coins, "
            f"next due {next_due}"
        )


@app.command("fail, f", no_args_is_help=True)
def fail(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("habits", id):
        habit = entity_store.get_habit(engine, real_id)
        if habit is None:
            continue
        if habit["active_bug_state"] is None:
            console.print(f"[yellow]'{habit['title']}' is not due[/yellow]")
            continue
        infestation_before = engine.document["infestation"]
        document = entity_store.fail_item(engine, EntityType.HABIT, real_id)
        console.print(
            f"🐛 missed '{habit['title']}', infestation "
            f"{infestation_before} -> {document['infestation']}"
        )


@app.command("check, c", no_args_is_help=True)
def check(
    id: str,
    item: Annotated[int, typer.Argument(help="checklist item number", min=1)],
) -> None:
    engine = get_engine()
    real_id = resolve_id("habits", id)
    habit = entity_store.get_habit(engine, real_id)
    if habit is None:
        return
    if habit["checklist"] is None or item > len(habit["checklist"]):
        raise typer.BadParameter(f"Habit has no checklist item {item}")

    document = entity_store.toggle_checklist_item(
        engine, EntityType.HABIT, real_id, habit["checklist"][item - 1]["id"]
    )
    updated = scheduler.find_habit(document, real_id)
    if updated is not None:
        single_habit_view(document, updated)


@app.command("delete, d", no_args_is_help=True)
def delete(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("habits", id):
        habit = entity_store.get_habit(engine, real_id)
        if habit is None:
            continue
        entity_store.delete_habit(engine, real_id)
        console.print(f"deleted '{habit['title']}' (bugbite restore to bring it back)")
