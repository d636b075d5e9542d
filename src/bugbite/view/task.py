# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from bugbite.color import SMASHED_COLOR
from bugbite.model.document import Document
from bugbite.model.task import Task
from bugbite.repository.id_map import ID_MAP_REPO
from bugbite.time import datetime_to_display_str
from bugbite.view.header import header
from bugbite.view.util import (
    entity_age,
    format_checklist_progress,
    format_difficulty,
    task_state,
)


def tasks_view(
    document: Document,
    tasks: list[Task],
    columns: list[str] = [
        "id",
        "state",
        "age",
        "difficulty",
        "checklist",
        "title",
    ],
) -> None:
    header(document, "tasks")

    tasks_table = Table(box=box.SIMPLE)
    for column in columns:
        tasks_table.add_column(column)

    for task in tasks:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(ID_MAP_REPO.associate_id("tasks", task["id"]))
            elif column == "state":
                column_value = task_state(task)
            elif column == "age":
                column_value = entity_age(task["created_at"])
            elif column == "difficulty":
                column_value = format_difficulty(task["difficulty"])
            elif column == "checklist":
                column_value = format_checklist_progress(task["checklist"])
            elif column == "note":
                column_value = task["note"] or ""
            elif column == "title":
                column_value = task["title"]

            if task["status"] == "smashed":
                column_value = f"[{SMASHED_COLOR}]{column_value}[/{SMASHED_COLOR}]"
            row.append(column_value)
        tasks_table.add_row(*row)

    console = Console()
    console.print(tasks_table)


def single_task_view(document: Document, task: Task) -> None:
    header(document, "task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row("id", str(ID_MAP_REPO.associate_id("tasks", task["id"])))
    task_table.add_row("title", task["title"])
    task_table.add_row("difficulty", format_difficulty(task["difficulty"]))
    task_table.add_row("status", f"{task_state(task)} {task['status']}")
    task_table.add_row("created", datetime_to_display_str(task["created_at"]))
    task_table.add_row("note", task["note"] or "")

    console = Console()
    console.print(task_table)
    if task["checklist"]:
        checklist_view(task["checklist"])


def checklist_view(checklist: list) -> None:
    checklist_table = Table(box=box.SIMPLE)
    checklist_table.add_column("#")
    checklist_table.add_column("done")
    checklist_table.add_column("item")
    for index, item in enumerate(checklist, start=1):
        checklist_table.add_row(str(index), "x" if item["done"] else " ", item["text"])

    console = Console()
    console.print(checklist_table)
