import re
from datetime import datetime, timezone

from gemini_chat.domain.conversation import ConversationSnapshot
from gemini_chat.domain.models import Message
from gemini_chat.gui import view_model as vm


NOW = datetime(2025, 10, 19, 14, 5, 9, tzinfo=timezone.utc)


def make_message(mid, role, content):
    return Message(id=mid, role=role, content=content, created_at=NOW)


def test_sender_labels():
    assert vm.sender_label("user") == "Você"
    assert vm.sender_label("assistant") == "IA"


def test_format_timestamp_is_time_of_day():
    text = vm.format_timestamp(NOW)
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", text)
    assert text.endswith(":09")


def test_render_empty_state():
    lines = vm.render_lines(ConversationSnapshot(messages=(), busy=False))
    assert lines == [("empty", vm.EMPTY_STATE_TEXT)]


def test_render_messages_in_order():
    snap = ConversationSnapshot(
        messages=(make_message("m1", "user", "Hello"), make_message("m2", "assistant", "Hi there!")),
        busy=False,
    )
    lines = vm.render_lines(snap)
    assert [tag for tag, _ in lines] == ["user_header", "user", "assistant_header", "assistant"]
    assert lines[0][1].startswith("Você")
    assert lines[1][1] == "Hello"
    assert lines[2][1].startswith("IA")
    assert lines[3][1] == "Hi there!"


def test_render_typing_indicator_while_busy():
    snap = ConversationSnapshot(messages=(make_message("m1", "user", "Hello"),), busy=True)
    assert vm.render_lines(snap)[-1] == ("typing", vm.TYPING_TEXT)


def test_can_submit():
    assert vm.can_submit("Hello", busy=False)
    assert not vm.can_submit("   ", busy=False)
    assert not vm.can_submit("Hello", busy=True)


def test_status_text_follows_busy_state():
    assert vm.status_text(False) == vm.READY_TEXT
    assert vm.status_text(True) == vm.SENDING_TEXT
    assert vm.READY_TEXT != vm.SENDING_TEXT
