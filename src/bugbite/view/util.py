# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from bugbite.color import get_difficulty_color
from bugbite.model.checklist import ChecklistItem
from bugbite.model.habit import Habit
from bugbite.model.task import Task

TASK_STATUS_SYMBOLS = {
    "locked": "🔒",
    "unlocked": "🐛",
    "smashed": "💥",
}


def task_state(task: Task) -> str:
    return TASK_STATUS_SYMBOLS.get(task["status"], " ")


def habit_state(habit: Habit) -> str:
    if habit["active_bug_state"] is None:
        return "not due"
    if habit["active_bug_state"] == "locked":
        return f"locked ({habit['remaining_today']} left)"
    return "unlocked"


def format_difficulty(difficulty: str) -> str:
    color = get_difficulty_color(difficulty)
    return f"[{color}]{difficulty.capitalize()}[/{color}]"


def format_checklist_progress(checklist: Optional[list[ChecklistItem]]) -> str:
    if not checklist:
        return ""
    done = len([item for item in checklist if item["done"]])
    return f"{done}/{len(checklist)}"


def entity_age(created_at: pendulum.DateTime) -> str:
    now = pendulum.now()
    return now.diff_for_humans(created_at, absolute=True)
