# SPDX-License-Identifier: MIT

from typing import Optional

from bugbite import configuration
from bugbite.engine.context import EngineContext
from bugbite.repository.configuration import CONFIGURATION_REPO
from bugbite.repository.document import YamlDocumentRepository
from bugbite.terminal.sfx import TerminalFeedback

_engine: Optional[EngineContext] = None


def get_engine() -> EngineContext:
    """The engine for this invocation, loaded from the data directory on first use."""
    global _engine

    if _engine is None:
        config = CONFIGURATION_REPO.get_config()
        engine = EngineContext(
            YamlDocumentRepository(configuration.DATA_DOCUMENT_PATH),
            feedback=TerminalFeedback(
                lambda: engine.document["settings"]["sound_on"]
            ),
            undo_window_seconds=config["undo_window_seconds"],
        )
        engine.load()
        _engine = engine
    return _engine


def reset_engine() -> None:
    global _engine
    _engine = None
