# SPDX-License-Identifier: MIT

import logging
import threading
from copy import deepcopy
from typing import Callable, Optional

import pendulum
from yaml import YAMLError

from bugbite.engine.infestation import refresh_infestation_flags
from bugbite.engine.ports import (
    Cancellable,
    Clock,
    DocumentStore,
    Feedback,
    SilentFeedback,
    SystemClock,
    ThreadingTimer,
    Timer,
)
from bugbite.model.document import Document
from bugbite.template.document import get_document_template

logger = logging.getLogger(__name__)

type Subscriber = Callable[[Document], None]

DEFAULT_UNDO_WINDOW_SECONDS = 10


class EngineContext:
    """
    Holds the one document every engine operation reads and replaces.

    Operations take a draft (a deep copy), mutate it, and hand it back to
    `commit`, which swaps the whole document in a single step, persists it
    and notifies subscribers.
    """

    def __init__(
        self,
        store: DocumentStore,
        clock: Optional[Clock] = None,
        timer: Optional[Timer] = None,
        feedback: Optional[Feedback] = None,
        undo_window_seconds: float = DEFAULT_UNDO_WINDOW_SECONDS,
    ) -> None:
        self.store = store
        self.clock: Clock = clock if clock is not None else SystemClock()
        self.timer: Timer = timer if timer is not None else ThreadingTimer()
        self.feedback: Feedback = feedback if feedback is not None else SilentFeedback()
        self.undo_window = pendulum.duration(seconds=undo_window_seconds)
        self.lock = threading.RLock()
        self._document: Document = get_document_template()
        self._subscribers: list[Subscriber] = []
        self._expiry_handles: dict[str, Cancellable] = {}

    @property
    def document(self) -> Document:
        with self.lock:
            return deepcopy(self._document)

    def draft(self) -> Document:
        return self.document

    def load(self) -> Document:
        """Rehydrate from the store, replacing the in-memory document."""
        try:
            loaded = self.store.load()
        except (OSError, YAMLError):
            logger.exception("failed to load document, starting fresh")
            loaded = None

        document = loaded if loaded is not None else get_document_template()
        refresh_infestation_flags(document)

        with self.lock:
            self._document = document
        logger.debug(
            "loaded document: %d tasks, %d habits",
            len(document["tasks"]),
            len(document["habits"]),
        )
        return self.document

    def commit(self, draft: Document, persist: bool = True) -> Document:
        with self.lock:
            refresh_infestation_flags(draft)
            self._document = draft
            snapshot = deepcopy(draft)

        if persist:
            self.__persist(snapshot)
        self.__notify(snapshot)
        return deepcopy(snapshot)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def now(self) -> pendulum.DateTime:
        return self.clock.now()

    def today(self) -> pendulum.Date:
        return self.clock.today()

    def schedule_expiry(self, slot: str, callback: Callable[[], None]) -> None:
        """(Re)arm the timer that proactively clears an undo slot."""
        self.cancel_expiry(slot)
        self._expiry_handles[slot] = self.timer.call_later(
            self.undo_window.total_seconds(), callback
        )

    def cancel_expiry(self, slot: str) -> None:
        handle = self._expiry_handles.pop(slot, None)
        if handle is not None:
            handle.cancel()

    def __persist(self, document: Document) -> None:
        try:
            self.store.save(document)
        except (OSError, YAMLError):
            # In-memory state stays authoritative until the next good write
            logger.exception("failed to persist document")

    def __notify(self, document: Document) -> None:
        for subscriber in list(self._subscribers):
            subscriber(deepcopy(document))

