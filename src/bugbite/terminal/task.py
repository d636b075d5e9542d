# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from bugbite.engine import entity_store
from bugbite.repository.id_map import ID_MAP_REPO
from bugbite.model.entity_type import EntityType
from bugbite.terminal.custom_typer import AliasedTyperGroup
from bugbite.terminal.parse import resolve_id, resolve_ids
from bugbite.terminal.session import get_engine
from bugbite.terminal.validate import validate_difficulty
from bugbite.view.task import single_task_view, tasks_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()


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
    count: Annotated[
        int,
        typer.Option(
            "--count", "-n", help="create N numbered copies (1-10)", min=1, max=10
        ),
    ] = 1,
    note: Annotated[Optional[str], typer.Option("--note", "-no")] = None,
    checklist: Annotated[
        Optional[list[str]],
        typer.Option("--item", "-i", help="checklist item (repeatable)"),
    ] = None,
) -> None:
    engine = get_engine()
    before = {task["id"] for task in engine.document["tasks"]}

    document = entity_store.add_task(
        engine, title, difficulty, count=count, note=note, checklist=checklist
    )

    new_tasks = [task for task in document["tasks"] if task["id"] not in before]
    if len(new_tasks) == 0:
        raise typer.BadParameter("Title cannot be blank")
    tasks_view(document, new_tasks)


@app.command("list, ls")
def list_tasks(
    hide_smashed: Annotated[
        bool, typer.Option("--hide-smashed", "-hs", help="only show open tasks")
    ] = False,
) -> None:
    ID_MAP_REPO.clear_ids_on_view()
    engine = get_engine()

    tasks = entity_store.list_tasks(engine)
    if hide_smashed:
        tasks = [task for task in tasks if task["status"] != "smashed"]
    tasks_view(engine.document, tasks)


@app.command("show, s", no_args_is_help=True)
def show(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("tasks", id):
        task = entity_store.get_task(engine, real_id)
        if task is not None:
            single_task_view(engine.document, task)


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
    for real_id in resolve_ids("tasks", id):
        document = entity_store.update_task(
            engine,
            real_id,
            title=title,
            difficulty=difficulty,
            note=note,
            checklist=checklist,
            remove_note=remove_note,
            remove_checklist=remove_checklist,
        )
        task = entity_store.find_task(document, real_id)
        if task is not None:
            single_task_view(document, task)


@app.command("unlock, u", no_args_is_help=True)
def unlock(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("tasks", id):
        task = entity_store.get_task(engine, real_id)
        if task is None:
            continue
        if task["status"] != "locked":
            console.print(f"[yellow]'{task['title']}' is already {task['status']}[/yellow]")
            continue
        document = entity_store.unlock_task(engine, real_id)
        unlocked = entity_store.find_task(document, real_id)
        if unlocked is not None:
            single_task_view(document, unlocked)


@app.command("smash, x", no_args_is_help=True)
def smash(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("tasks", id):
        task = entity_store.get_task(engine, real_id)
        if task is None:
            continue
        if task["status"] != "unlocked":
            console.print(f"[yellow]'{task['title']}' is {task['status']}, not unlocked[/yellow]")
            continue
        coins_before = engine.document["coins"]
        document = entity_store.smash_task(engine, real_id)
        console.print(f"💥 smashed '{task['title']}' +{document['coins'] - coins_before} coins")


@app.command("fail, f", no_args_is_help=True)
def fail(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("tasks", id):
        task = entity_store.get_task(engine, real_id)
        if task is None:
            continue
        if task["status"] == "smashed":
            console.print(f"[yellow]'{task['title']}' is already smashed[/yellow]")
            continue
        infestation_before = engine.document["infestation"]
        document = entity_store.fail_item(engine, EntityType.TASK, real_id)
        console.print(
            f"🐛 missed '{task['title']}', infestation "
            f"{infestation_before} -> {document['infestation']}"
        )


@app.command("check, c", no_args_is_help=True)
def check(
    id: str,
    item: Annotated[int, typer.Argument(help="checklist item number", min=1)],
) -> None:
    engine = get_engine()
    real_id = resolve_id("tasks", id)
    task = entity_store.get_task(engine, real_id)
    if task is None:
        return
    if task["checklist"] is None or item > len(task["checklist"]):
        raise typer.BadParameter(f"Task has no checklist item {item}")

    document = entity_store.toggle_checklist_item(
        engine, EntityType.TASK, real_id, task["checklist"][item - 1]["id"]
    )
    updated = entity_store.find_task(document, real_id)
    if updated is not None:
        single_task_view(document, updated)


@app.command("delete, d", no_args_is_help=True)
def delete(id: str) -> None:
    engine = get_engine()
    for real_id in resolve_ids("tasks", id):
        task = entity_store.get_task(engine, real_id)
        if task is None:
            continue
        entity_store.delete_task(engine, real_id)
        console.print(f"deleted '{task['title']}' (bugbite restore to bring it back)")
