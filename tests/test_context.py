# SPDX-License-Identifier: MIT
# tests/test_context.py

from __future__ import annotations

import logging

import pytest

from bugbite.engine import entity_store, settings
from bugbite.engine.context import EngineContext
from bugbite.model.document import Document

from .conftest import EngineFactory
from .fakes import MemoryDocumentStore


def test_load_without_saved_document_starts_fresh(ctx: EngineContext) -> None:
    document = ctx.document

    assert document["tasks"] == []
    assert document["habits"] == []
    assert document["coins"] == 0
    assert document["settings"]["sound_on"] is True


def test_load_recomputes_flags(make_engine: EngineFactory, seed: Document) -> None:
    seed["infestation"] = 8
    seed["overrun"] = True

    document = make_engine(seed).document

    assert document["overrun"] is False
    assert document["warning"] == "swarm"


def test_commits_are_persisted(ctx: EngineContext, store: MemoryDocumentStore) -> None:
    entity_store.add_task(ctx, "Saved", "easy")

    assert store.saves == 1
    assert store.document is not None
    assert store.document["tasks"][0]["title"] == "Saved"


def test_failed_save_keeps_memory_state(
    make_engine: EngineFactory, caplog: pytest.LogCaptureFixture
) -> None:
    ctx = make_engine(store=MemoryDocumentStore(fail_saves=True))

    with caplog.at_level(logging.ERROR, logger="bugbite"):
        document = entity_store.add_task(ctx, "Unsaved", "easy")

    assert document["tasks"][0]["title"] == "Unsaved"
    assert ctx.document["tasks"][0]["title"] == "Unsaved"
    assert "failed to persist document" in caplog.text


def test_subscribers_see_each_commit(ctx: EngineContext) -> None:
    seen: list[Document] = []
    unsubscribe = ctx.subscribe(seen.append)

    entity_store.add_task(ctx, "One", "easy")
    seen[0]["tasks"].clear()
    unsubscribe()
    entity_store.add_task(ctx, "Two", "easy")

    assert len(seen) == 1
    assert len(ctx.document["tasks"]) == 2


def test_noops_do_not_notify(ctx: EngineContext, store: MemoryDocumentStore) -> None:
    seen: list[Document] = []
    ctx.subscribe(seen.append)

    entity_store.unlock_task(ctx, "missing")

    assert seen == []
    assert store.saves == 0


def test_toggle_sound(ctx: EngineContext) -> None:
    assert settings.toggle_sound(ctx)["settings"]["sound_on"] is False
    assert settings.toggle_sound(ctx)["settings"]["sound_on"] is True
