# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from bugbite.model.checklist import ChecklistItem
from bugbite.model.entity_id import EntityId

TaskStatus = Literal["locked", "unlocked", "smashed"]


class Task(TypedDict):
    id: EntityId
    entity_type: str  # "task"
    title: str
    difficulty: str
    status: TaskStatus
    created_at: pendulum.DateTime
    note: Optional[str]
    checklist: Optional[list[ChecklistItem]]
