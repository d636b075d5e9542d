# SPDX-License-Identifier: MIT
# tests/conftest.py

from __future__ import annotations

from typing import Callable, Optional

import pytest

from bugbite.engine.context import EngineContext
from bugbite.model.document import Document
from bugbite.template.document import get_document_template

from .fakes import FakeClock, ManualTimer, MemoryDocumentStore, RecordingFeedback

type EngineFactory = Callable[..., EngineContext]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture()
def feedback() -> RecordingFeedback:
    return RecordingFeedback()


@pytest.fixture()
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture()
def make_engine(
    clock: FakeClock, timer: ManualTimer, feedback: RecordingFeedback
) -> EngineFactory:
    """
    Build a loaded engine on top of an optional seed document.

    Everything time-related is driven by the shared fake clock and timer.
    """

    def factory(
        document: Optional[Document] = None,
        store: Optional[MemoryDocumentStore] = None,
    ) -> EngineContext:
        if store is None:
            store = MemoryDocumentStore(document)
        ctx = EngineContext(store, clock=clock, timer=timer, feedback=feedback)
        ctx.load()
        return ctx

    return factory


@pytest.fixture()
def ctx(make_engine: EngineFactory, store: MemoryDocumentStore) -> EngineContext:
    return make_engine(store=store)


@pytest.fixture()
def seed() -> Document:
    """A fresh document for tests that need to start from a given balance."""
    return get_document_template()
