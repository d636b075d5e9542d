# SPDX-License-Identifier: MIT

from bugbite.migrate.registry import RawDocument, migration
from bugbite.model.document import MAX_INFESTATION

EPOCH_ISO = "1970-01-01T00:00:00+00:00"


@migration(3)
def migrate(raw: RawDocument) -> None:
    """
    Back-fill fields introduced after the first releases.
    """
    raw.setdefault("tasks", [])
    raw.setdefault("habits", [])
    raw.setdefault("coins", 0)
    raw.setdefault("infestation", 0)
    raw.setdefault("monthly_stats", {})
    raw.setdefault("smash_log", [])
    raw.setdefault("undo", None)
    raw.setdefault("recently_deleted", None)
    raw.setdefault("overrun", False)
    raw.setdefault("warning", None)

    settings = raw.get("settings")
    if not isinstance(settings, dict):
        settings = {}
        raw["settings"] = settings
    settings.setdefault("sound_on", True)

    raw["coins"] = max(0, int(raw["coins"] or 0))
    raw["infestation"] = min(MAX_INFESTATION, max(0, int(raw["infestation"] or 0)))

    for task in raw["tasks"]:
        task.setdefault("created_at", EPOCH_ISO)
        task.setdefault("note", None)
        task.setdefault("checklist", None)
        task.setdefault("status", "locked")
        task.setdefault("difficulty", "easy")

    for habit in raw["habits"]:
        habit.setdefault("created_at", EPOCH_ISO)
        habit.setdefault("note", None)
        habit.setdefault("checklist", None)
        habit.setdefault("difficulty", "easy")
        habit.setdefault("interval_type", "daily")
        habit.setdefault("times_per_day", 1)
        habit.setdefault("remaining_today", 0)
        habit.setdefault("last_spawn_date", None)
        habit.setdefault("active_bug_state", None)
        # Early habits were due on the day they were created
        habit.setdefault("next_due_date", habit.get("created_at"))

    for stats in raw["monthly_stats"].values():
        stats.setdefault("smashed_count", 0)
        stats.setdefault("missed_count", 0)
        stats.setdefault("smashed_items", [])
        stats.setdefault("missed_items", [])
