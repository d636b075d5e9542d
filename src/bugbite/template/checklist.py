# SPDX-License-Identifier: MIT

from typing import Iterable

from bugbite.model.checklist import ChecklistItem
from bugbite.model.entity_id import generate_entity_id


def get_checklist_item_template(text: str) -> ChecklistItem:
    return {"id": generate_entity_id(), "text": text, "done": False}


def clone_checklist(
    items: Iterable[ChecklistItem | str],
) -> list[ChecklistItem]:
    """
    Copy checklist items giving each one a fresh id.

    Plain strings are accepted so callers can pass item texts directly.
    Items with blank text are dropped.
    """
    cloned: list[ChecklistItem] = []
    for item in items:
        if isinstance(item, str):
            text, done = item, False
        else:
            text, done = item["text"], item["done"]
        text = text.strip()
        if not text:
            continue
        cloned_item = get_checklist_item_template(text)
        cloned_item["done"] = done
        cloned.append(cloned_item)
    return cloned
