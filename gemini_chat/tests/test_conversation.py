from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from gemini_chat.domain.conversation import ConversationSnapshot
from gemini_chat.domain.models import Message, new_message
from gemini_chat.infrastructure.storage.memory_store import InMemoryConversationStore


def test_models_exist():
    now = datetime.now(timezone.utc)
    m = Message(id="m1", role="user", content="hi", created_at=now)
    assert m.role == "user"
    with pytest.raises(FrozenInstanceError):
        m.content = "changed"
    snap = ConversationSnapshot(messages=(m,), busy=False)
    assert snap.messages[0].id == "m1"


def test_new_message_ids_are_distinct():
    user = new_message("user", "Hello")
    reply = new_message("assistant", "Hi there!")
    assert user.id != reply.id
    assert user.created_at.tzinfo is not None


def test_store_starts_empty_and_idle():
    store = InMemoryConversationStore()
    assert store.messages == ()
    assert store.busy is False
    assert store.snapshot() == ConversationSnapshot(messages=(), busy=False)


def test_store_append_preserves_order():
    store = InMemoryConversationStore()
    first = new_message("user", "a")
    second = new_message("assistant", "b")
    store.append(first)
    store.append(second)
    assert [m.id for m in store.messages] == [first.id, second.id]
    # reads are stable
    assert store.messages == store.messages
    assert store.snapshot().messages == store.messages


def test_store_messages_is_a_copy():
    store = InMemoryConversationStore()
    store.append(new_message("user", "a"))
    before = store.messages
    store.append(new_message("assistant", "b"))
    assert len(before) == 1
    assert len(store.messages) == 2


def test_subscribers_receive_snapshots():
    store = InMemoryConversationStore()
    seen = []
    store.subscribe(seen.append)
    msg = new_message("user", "a")
    store.append(msg)
    store.set_busy(True)
    store.set_busy(False)
    assert [s.busy for s in seen] == [False, True, False]
    assert seen[0].messages == (msg,)


def test_unsubscribe_stops_notifications():
    store = InMemoryConversationStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.set_busy(True)
    unsubscribe()
    unsubscribe()
    store.set_busy(False)
    assert len(seen) == 1


def test_failing_subscriber_does_not_break_mutation():
    store = InMemoryConversationStore()
    seen = []

    def broken(_snap):
        raise RuntimeError("render failed")

    store.subscribe(broken)
    store.subscribe(seen.append)
    store.append(new_message("user", "a"))
    assert len(store.messages) == 1
    assert len(seen) == 1
