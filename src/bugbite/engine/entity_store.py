# SPDX-License-Identifier: MIT

import logging
from typing import Iterable, Optional, Union

import pendulum

from bugbite.engine import ledger, scheduler, undo
from bugbite.engine.context import EngineContext
from bugbite.model.checklist import ChecklistItem
from bugbite.model.difficulty import is_difficulty
from bugbite.model.document import Document
from bugbite.model.entity_id import EntityId
from bugbite.model.entity_type import EntityType
from bugbite.model.habit import (
    INTERVAL_TYPES,
    MAX_TIMES_PER_DAY,
    MIN_TIMES_PER_DAY,
    Habit,
)
from bugbite.model.task import Task
from bugbite.template.checklist import clone_checklist
from bugbite.template.habit import get_habit_template
from bugbite.template.task import get_task_template

logger = logging.getLogger(__name__)

MIN_TASK_COUNT = 1
MAX_TASK_COUNT = 10

type ChecklistInput = Iterable[Union[ChecklistItem, str]]


def clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


def find_task(document: Document, id: EntityId) -> Optional[Task]:
    for task in document["tasks"]:
        if task["id"] == id:
            return task
    return None


def find_entity(
    document: Document, entity_type: str, id: EntityId
) -> Optional[Union[Task, Habit]]:
    if entity_type == EntityType.HABIT:
        return scheduler.find_habit(document, id)
    if entity_type == EntityType.TASK:
        return find_task(document, id)
    return None


def get_task(ctx: EngineContext, id: EntityId) -> Optional[Task]:
    return find_task(ctx.document, id)


def get_habit(ctx: EngineContext, id: EntityId) -> Optional[Habit]:
    return scheduler.find_habit(ctx.document, id)


def list_tasks(ctx: EngineContext) -> list[Task]:
    return ctx.document["tasks"]


def list_habits(ctx: EngineContext) -> list[Habit]:
    """Habits ordered by their next due date, soonest first."""
    return sorted(ctx.document["habits"], key=lambda habit: habit["next_due_date"])


def __clean_note(note: Optional[str]) -> Optional[str]:
    if note is None:
        return None
    note = note.strip()
    return note if note else None


def __clean_checklist(
    checklist: Optional[ChecklistInput],
) -> Optional[list[ChecklistItem]]:
    if checklist is None:
        return None
    cloned = clone_checklist(checklist)
    return cloned if cloned else None


def add_task(
    ctx: EngineContext,
    title: str,
    difficulty: str,
    count: int = 1,
    note: Optional[str] = None,
    checklist: Optional[ChecklistInput] = None,
) -> Document:
    """
    Create one or more locked tasks at the head of the task list.

    With `count` > 1 (clamped to 1..10) each title gets a "(i/N)" suffix and
    each task gets its own copy of the checklist with fresh item ids.
    """
    title = title.strip()
    if not title or not is_difficulty(difficulty):
        logger.debug("rejected task %r with difficulty %r", title, difficulty)
        return ctx.document

    count = clamp(count, MIN_TASK_COUNT, MAX_TASK_COUNT)
    checklist_items = list(checklist) if checklist is not None else None

    with ctx.lock:
        draft = ctx.draft()
        now = ctx.now()
        new_tasks: list[Task] = []
        for index in range(1, count + 1):
            task = get_task_template(now)
            task["title"] = f"{title} ({index}/{count})" if count > 1 else title
            task["difficulty"] = difficulty
            task["note"] = __clean_note(note)
            task["checklist"] = __clean_checklist(checklist_items)
            new_tasks.append(task)

        draft["tasks"] = new_tasks + draft["tasks"]
        undo.clear_undo(ctx, draft)
        logger.info("added %d task(s): %s", count, title)
        return ctx.commit(draft)


def update_task(
    ctx: EngineContext,
    id: EntityId,
    title: Optional[str] = None,
    difficulty: Optional[str] = None,
    note: Optional[str] = None,
    checklist: Optional[ChecklistInput] = None,
    remove_note: bool = False,
    remove_checklist: bool = False,
) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        task = find_task(draft, id)
        if task is None:
            logger.debug("no task %s to update", id)
            return ctx.document

        if title is not None and title.strip():
            task["title"] = title.strip()
        if difficulty is not None and is_difficulty(difficulty):
            task["difficulty"] = difficulty
        if note is not None:
            task["note"] = __clean_note(note)
        if checklist is not None:
            task["checklist"] = __clean_checklist(checklist)

        if remove_note:
            task["note"] = None
        if remove_checklist:
            task["checklist"] = None

        undo.clear_undo(ctx, draft)
        return ctx.commit(draft)


def delete_task(ctx: EngineContext, id: EntityId) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        task = find_task(draft, id)
        if task is None:
            logger.debug("no task %s to delete", id)
            return ctx.document

        draft["tasks"].remove(task)
        undo.record_deleted(ctx, draft, EntityType.TASK, task)
        undo.clear_undo(ctx, draft)
        logger.info("deleted task %s", id)
        return ctx.commit(draft)


def unlock_task(ctx: EngineContext, id: EntityId) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        task = find_task(draft, id)
        if task is None or task["status"] != "locked":
            logger.debug("task %s cannot be unlocked", id)
            return ctx.document

        undo.record_snapshot(ctx, draft, EntityType.TASK, task, "unlock")
        task["status"] = "unlocked"
        logger.info("task %s unlocked", id)
        return ctx.commit(draft)


def smash_task(ctx: EngineContext, id: EntityId) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        task = find_task(draft, id)
        if task is None or task["status"] != "unlocked":
            logger.debug("task %s is not ready to smash", id)
            return ctx.document

        undo.record_snapshot(ctx, draft, EntityType.TASK, task, "smash")
        task["status"] = "smashed"
        ledger.credit_smash(draft, task, ctx.now())
        document = ctx.commit(draft)

    logger.info("task %s smashed", id)
    ledger.notify_smashed(ctx, ledger.last_smash(document))
    return document


def fail_item(ctx: EngineContext, entity_type: str, id: EntityId) -> Document:
    """
    Record a miss for a task or habit.

    A task can be failed until it is smashed and stays as it is. A habit can
    only be failed while its bug is active; the bug is cleared and the habit
    moves on to its next due date.
    """
    with ctx.lock:
        draft = ctx.draft()
        entity = find_entity(draft, entity_type, id)
        if entity is None:
            logger.debug("no %s %s to fail", entity_type, id)
            return ctx.document

        if entity_type == EntityType.TASK:
            task: Task = entity  # type: ignore[assignment]
            if task["status"] == "smashed":
                logger.debug("task %s already smashed", id)
                return ctx.document
            undo.record_snapshot(ctx, draft, entity_type, task, "fail")
        else:
            habit: Habit = entity  # type: ignore[assignment]
            if habit["active_bug_state"] is None:
                logger.debug("habit %s is not due", id)
                return ctx.document
            undo.record_snapshot(ctx, draft, entity_type, habit, "fail")
            scheduler.reset_active_bug(habit, ctx.today())

        ledger.penalize_fail(draft, entity, ctx.now())
        return ctx.commit(draft)


def toggle_checklist_item(
    ctx: EngineContext, entity_type: str, id: EntityId, item_id: EntityId
) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        entity = find_entity(draft, entity_type, id)
        if entity is None or entity["checklist"] is None:
            return ctx.document

        for item in entity["checklist"]:
            if item["id"] == item_id:
                item["done"] = not item["done"]
                break
        else:
            logger.debug("no checklist item %s on %s %s", item_id, entity_type, id)
            return ctx.document

        undo.clear_undo(ctx, draft)
        return ctx.commit(draft)


def add_habit(
    ctx: EngineContext,
    title: str,
    difficulty: str,
    interval_type: str = "daily",
    times_per_day: int = 1,
    start_date: Optional[pendulum.Date] = None,
    note: Optional[str] = None,
    checklist: Optional[ChecklistInput] = None,
) -> Document:
    """Create a habit, first due on `start_date` (today when omitted)."""
    title = title.strip()
    if (
        not title
        or not is_difficulty(difficulty)
        or interval_type not in INTERVAL_TYPES
    ):
        logger.debug(
            "rejected habit %r (%r, %r)", title, difficulty, interval_type
        )
        return ctx.document

    with ctx.lock:
        draft = ctx.draft()
        habit = get_habit_template(
            ctx.now(), start_date if start_date is not None else ctx.today()
        )
        habit["title"] = title
        habit["difficulty"] = difficulty
        habit["interval_type"] = interval_type  # type: ignore[typeddict-item]
        habit["times_per_day"] = clamp(
            times_per_day, MIN_TIMES_PER_DAY, MAX_TIMES_PER_DAY
        )
        habit["note"] = __clean_note(note)
        habit["checklist"] = __clean_checklist(checklist)

        draft["habits"].insert(0, habit)
        undo.clear_undo(ctx, draft)
        logger.info("added %s habit: %s", interval_type, title)
        return ctx.commit(draft)


def update_habit(
    ctx: EngineContext,
    id: EntityId,
    title: Optional[str] = None,
    difficulty: Optional[str] = None,
    interval_type: Optional[str] = None,
    times_per_day: Optional[int] = None,
    next_due_date: Optional[pendulum.Date] = None,
    note: Optional[str] = None,
    checklist: Optional[ChecklistInput] = None,
    remove_note: bool = False,
    remove_checklist: bool = False,
) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        habit = scheduler.find_habit(draft, id)
        if habit is None:
            logger.debug("no habit %s to update", id)
            return ctx.document

        if title is not None and title.strip():
            habit["title"] = title.strip()
        if difficulty is not None and is_difficulty(difficulty):
            habit["difficulty"] = difficulty
        if interval_type is not None and interval_type in INTERVAL_TYPES:
            habit["interval_type"] = interval_type  # type: ignore[typeddict-item]
        if times_per_day is not None:
            habit["times_per_day"] = clamp(
                times_per_day, MIN_TIMES_PER_DAY, MAX_TIMES_PER_DAY
            )
            # A bug already spawned today never needs more than the new target
            habit["remaining_today"] = min(
                habit["remaining_today"], habit["times_per_day"]
            )
        if next_due_date is not None:
            habit["next_due_date"] = next_due_date
        if note is not None:
            habit["note"] = __clean_note(note)
        if checklist is not None:
            habit["checklist"] = __clean_checklist(checklist)

        if remove_note:
            habit["note"] = None
        if remove_checklist:
            habit["checklist"] = None

        undo.clear_undo(ctx, draft)
        return ctx.commit(draft)


def delete_habit(ctx: EngineContext, id: EntityId) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        habit = scheduler.find_habit(draft, id)
        if habit is None:
            logger.debug("no habit %s to delete", id)
            return ctx.document

        draft["habits"].remove(habit)
        undo.record_deleted(ctx, draft, EntityType.HABIT, habit)
        undo.clear_undo(ctx, draft)
        logger.info("deleted habit %s", id)
        return ctx.commit(draft)
