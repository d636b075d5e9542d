# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from bugbite.engine import ledger, undo
from bugbite.engine.context import EngineContext
from bugbite.model.document import Document
from bugbite.model.entity_id import EntityId
from bugbite.model.entity_type import EntityType
from bugbite.model.habit import Habit

logger = logging.getLogger(__name__)


def find_habit(document: Document, id: EntityId) -> Optional[Habit]:
    for habit in document["habits"]:
        if habit["id"] == id:
            return habit
    return None


def next_due_date_after(due: pendulum.Date, interval_type: str) -> pendulum.Date:
    """
    Advance a due date by one interval.

    Monthly keeps the day of month, clamped to the last day of shorter
    months (Jan 31 -> Feb 28/29).
    """
    if interval_type == "weekly":
        return due.add(weeks=1)
    if interval_type == "monthly":
        return due.add(months=1)
    return due.add(days=1)


def advance_due_date(habit: Habit, today: pendulum.Date) -> None:
    next_due = next_due_date_after(habit["next_due_date"], habit["interval_type"])
    # An overdue habit skips the periods it missed instead of stacking them
    while next_due <= today:
        next_due = next_due_date_after(next_due, habit["interval_type"])
    habit["next_due_date"] = next_due


def is_due(habit: Habit, today: pendulum.Date) -> bool:
    return habit["next_due_date"] <= today and habit["last_spawn_date"] != today


def reset_active_bug(habit: Habit, today: pendulum.Date) -> None:
    habit["remaining_today"] = 0
    habit["active_bug_state"] = None
    reference = today
    if habit["last_spawn_date"] is not None and habit["last_spawn_date"] > today:
        reference = habit["last_spawn_date"]
    advance_due_date(habit, reference)


def spawn_due_habits(
    ctx: EngineContext, today: Optional[pendulum.Date] = None
) -> Document:
    """
    Turn every habit due on or before `today` into a locked bug.

    Safe to call repeatedly: a habit spawns at most once per day.
    """
    if today is None:
        today = ctx.today()

    with ctx.lock:
        draft = ctx.draft()
        spawned = 0
        for habit in draft["habits"]:
            if not is_due(habit, today):
                continue
            habit["remaining_today"] = habit["times_per_day"]
            habit["last_spawn_date"] = today
            habit["active_bug_state"] = "locked"
            spawned += 1

        if spawned == 0:
            return ctx.document

        logger.info("spawned %d habit bugs for %s", spawned, today)
        return ctx.commit(draft)


def complete_habit_occurrence(ctx: EngineContext, id: EntityId) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        habit = find_habit(draft, id)
        if habit is None or habit["remaining_today"] <= 0:
            logger.debug("habit %s has no occurrence left to complete", id)
            return ctx.document

        undo.record_snapshot(ctx, draft, EntityType.HABIT, habit, "complete")
        habit["remaining_today"] -= 1
        if habit["remaining_today"] == 0:
            habit["active_bug_state"] = "unlocked"
            logger.info("habit %s unlocked", id)
        return ctx.commit(draft)


def smash_habit(ctx: EngineContext, id: EntityId) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        habit = find_habit(draft, id)
        if habit is None or habit["active_bug_state"] != "unlocked":
            logger.debug("habit %s is not ready to smash", id)
            return ctx.document

        undo.record_snapshot(ctx, draft, EntityType.HABIT, habit, "smash")
        ledger.credit_smash(draft, habit, ctx.now())
        reset_active_bug(habit, ctx.today())
        document = ctx.commit(draft)

    logger.info("habit %s smashed, next due %s", id, habit["next_due_date"])
    ledger.notify_smashed(ctx, ledger.last_smash(document))
    return document
