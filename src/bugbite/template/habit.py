# SPDX-License-Identifier: MIT

import pendulum

from bugbite.model.entity_id import generate_entity_id
from bugbite.model.entity_type import EntityType
from bugbite.model.habit import Habit


def get_habit_template(now: pendulum.DateTime, first_due: pendulum.Date) -> Habit:
    return {
        "id": generate_entity_id(),
        "entity_type": EntityType.HABIT,
        "title": "",
        "difficulty": "easy",
        "interval_type": "daily",
        "next_due_date": first_due,
        "times_per_day": 1,
        "remaining_today": 0,
        "last_spawn_date": None,
        "active_bug_state": None,
        "created_at": now,
        "note": None,
        "checklist": None,
    }
