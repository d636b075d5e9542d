# SPDX-License-Identifier: MIT

from bugbite.migrate import registry
from bugbite.model.document import Document


def get_document_template() -> Document:
    return {
        "version": registry.get_latest_version(),
        "tasks": [],
        "habits": [],
        "coins": 0,
        "infestation": 0,
        "overrun": False,
        "warning": None,
        "monthly_stats": {},
        "smash_log": [],
        "settings": {"sound_on": True},
        "undo": None,
        "recently_deleted": None,
    }
