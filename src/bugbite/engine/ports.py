# SPDX-License-Identifier: MIT

"""
Collaborators the engine depends on.

The engine only talks to these Protocols, so storage, time and the
sound/haptic side channel can be swapped out (tests inject fakes).
"""

import threading
from typing import Callable, Optional, Protocol

import pendulum

from bugbite import time
from bugbite.model.document import Document


class Clock(Protocol):
    def now(self) -> pendulum.DateTime: ...
    def today(self) -> pendulum.Date: ...


class DocumentStore(Protocol):
    """Save/load port for the single persisted blob."""

    def load(self) -> Optional[Document]: ...
    def save(self, document: Document) -> None: ...


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Timer(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class Feedback(Protocol):
    """Sound/haptic collaborator, fired after a successful commit."""

    def smashed(self, entity_type: str, difficulty: str, coins: int) -> None: ...
    def poisoned(self, size: str) -> None: ...


class SystemClock:
    def now(self) -> pendulum.DateTime:
        return time.now_local()

    def today(self) -> pendulum.Date:
        return time.today_local()


class ThreadingTimer:
    """Best-effort deferred callbacks on daemon threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class SilentFeedback:
    def smashed(self, entity_type: str, difficulty: str, coins: int) -> None:
        pass

    def poisoned(self, size: str) -> None:
        pass
