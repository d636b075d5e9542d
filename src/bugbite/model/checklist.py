# SPDX-License-Identifier: MIT

from typing import TypedDict

from bugbite.model.entity_id import EntityId


class ChecklistItem(TypedDict):
    id: EntityId
    text: str
    done: bool
