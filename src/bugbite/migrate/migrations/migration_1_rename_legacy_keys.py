# SPDX-License-Identifier: MIT

import logging
from typing import Any

from bugbite.migrate.registry import RawDocument, migration

logger = logging.getLogger(__name__)

DOCUMENT_KEYS = {
    "todos": "tasks",
    "recurrent": "habits",
    "monthlyStats": "monthly_stats",
    "smashLog": "smash_log",
    "recentlyDeleted": "recently_deleted",
}

ENTITY_KEYS = {
    "createdAtISO": "created_at",
    "createdAt": "created_at",
    "intervalType": "interval_type",
    "cadence": "interval_type",
    "nextDueDate": "next_due_date",
    "timesPerDay": "times_per_day",
    "remainingToday": "remaining_today",
    "lastSpawnDate": "last_spawn_date",
    "activeBugState": "active_bug_state",
}

STATS_KEYS = {
    "smashedCount": "smashed_count",
    "missedCount": "missed_count",
    "smashedItems": "smashed_items",
    "missedItems": "missed_items",
}


def _rename(record: dict[str, Any], mapping: dict[str, str]) -> None:
    for old_key, new_key in mapping.items():
        if old_key in record:
            value = record.pop(old_key)
            record.setdefault(new_key, value)


@migration(1)
def migrate(raw: RawDocument) -> None:
    """
    Rename the camelCase keys of blobs written by the mobile app.

    The app persists its store wrapped as `{"state": {...}, "version": 0}`;
    the wrapped keys are lifted to the top level first.
    """
    envelope = raw.pop("state", None)
    if isinstance(envelope, dict):
        raw.update(envelope)

    _rename(raw, DOCUMENT_KEYS)

    for task in raw.get("tasks") or []:
        _rename(task, ENTITY_KEYS)
        task.setdefault("entity_type", "task")

    for habit in raw.get("habits") or []:
        _rename(habit, ENTITY_KEYS)
        habit.setdefault("entity_type", "habit")
        if habit.get("interval_type") == "biweekly":
            logger.warning(
                "habit %s used the retired biweekly interval, converted to weekly",
                habit.get("id"),
            )
            habit["interval_type"] = "weekly"

    for stats in (raw.get("monthly_stats") or {}).values():
        _rename(stats, STATS_KEYS)

    settings = raw.get("settings")
    if isinstance(settings, dict) and "soundOn" in settings:
        settings.setdefault("sound_on", settings.pop("soundOn"))
