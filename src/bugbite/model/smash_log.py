# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from bugbite.model.entity_id import EntityId


class SmashLogEntry(TypedDict):
    entity_type: str
    id: EntityId
    title: str
    difficulty: str
    coins: int
    at: pendulum.DateTime
