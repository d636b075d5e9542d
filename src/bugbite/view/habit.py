# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from bugbite.model.document import Document
from bugbite.model.habit import Habit
from bugbite.repository.id_map import ID_MAP_REPO
from bugbite.time import date_to_display_str, date_to_display_str_optional
from bugbite.view.header import header
from bugbite.view.task import checklist_view
from bugbite.view.util import (
    format_checklist_progress,
    format_difficulty,
    habit_state,
)


def habits_view(document: Document, habits: list[Habit]) -> None:
    header(document, "habits")

    habits_table = Table(box=box.SIMPLE)
    habits_table.add_column("id")
    habits_table.add_column("state")
    habits_table.add_column("next due")
    habits_table.add_column("interval")
    habits_table.add_column("difficulty")
    habits_table.add_column("checklist")
    habits_table.add_column("title")

    for habit in habits:
        habits_table.add_row(
            str(ID_MAP_REPO.associate_id("habits", habit["id"])),
            habit_state(habit),
            date_to_display_str(habit["next_due_date"]),
            f"{habit['interval_type']} x{habit['times_per_day']}",
            format_difficulty(habit["difficulty"]),
            format_checklist_progress(habit["checklist"]),
            habit["title"],
        )

    console = Console()
    console.print(habits_table)


def single_habit_view(document: Document, habit: Habit) -> None:
    header(document, "habit")

    habit_table = Table(box=box.SIMPLE)
    habit_table.add_column("property")
    habit_table.add_column("value")

    habit_table.add_row("id", str(ID_MAP_REPO.associate_id("habits", habit["id"])))
    habit_table.add_row("title", habit["title"])
    habit_table.add_row("difficulty", format_difficulty(habit["difficulty"]))
    habit_table.add_row("interval", habit["interval_type"])
    habit_table.add_row("times per day", str(habit["times_per_day"]))
    habit_table.add_row("state", habit_state(habit))
    habit_table.add_row("next due", date_to_display_str(habit["next_due_date"]))
    habit_table.add_row(
        "last spawned", date_to_display_str_optional(habit["last_spawn_date"]) or ""
    )
    habit_table.add_row("note", habit["note"] or "")

    console = Console()
    console.print(habit_table)
    if habit["checklist"]:
        checklist_view(habit["checklist"])
