# SPDX-License-Identifier: MIT

import pendulum

from bugbite.model.entity_id import generate_entity_id
from bugbite.model.entity_type import EntityType
from bugbite.model.task import Task


def get_task_template(now: pendulum.DateTime) -> Task:
    return {
        "id": generate_entity_id(),
        "entity_type": EntityType.TASK,
        "title": "",
        "difficulty": "easy",
        "status": "locked",
        "created_at": now,
        "note": None,
        "checklist": None,
    }
