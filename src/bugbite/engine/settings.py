# SPDX-License-Identifier: MIT

import logging

from bugbite.engine import undo
from bugbite.engine.context import EngineContext
from bugbite.model.document import Document
from bugbite.template.document import get_document_template

logger = logging.getLogger(__name__)


def toggle_sound(ctx: EngineContext) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        draft["settings"]["sound_on"] = not draft["settings"]["sound_on"]
        return ctx.commit(draft)


def reset_all_data(ctx: EngineContext) -> Document:
    """Wipe tasks, habits, coins, infestation and history. Settings survive."""
    with ctx.lock:
        settings = ctx.document["settings"]
        ctx.cancel_expiry(undo.UNDO_SLOT)
        ctx.cancel_expiry(undo.DELETED_SLOT)
        fresh = get_document_template()
        fresh["settings"] = settings
        logger.warning("all data reset")
        return ctx.commit(fresh)
