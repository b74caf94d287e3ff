"""聊天窗口的渲染规则，不依赖 tkinter，便于单独测试。"""

from datetime import datetime
from typing import List, Tuple

from gemini_chat.domain.conversation import ConversationSnapshot


WINDOW_TITLE = "Chat com IA"
EMPTY_STATE_TEXT = "Comece uma conversa com a IA!"
TYPING_TEXT = "IA está digitando..."
READY_TEXT = "Pronto"
SENDING_TEXT = "Enviando mensagem..."
SEND_LABEL = "Enviar"

SENDER_LABELS = {"user": "Você", "assistant": "IA"}

# (tag, text)；tag 与 ChatWindow 中配置的文本框 tag 对应
Line = Tuple[str, str]


def sender_label(role: str) -> str:
    return SENDER_LABELS.get(role, role)


def format_timestamp(dt: datetime) -> str:
    """本地时间，格式 HH:MM:SS。"""

    return dt.astimezone().strftime("%H:%M:%S")


def render_lines(snapshot: ConversationSnapshot) -> List[Line]:
    """将快照逐条映射为对话区的文本行。"""

    if not snapshot.messages:
        lines: List[Line] = [("empty", EMPTY_STATE_TEXT)]
    else:
        lines = []
        for message in snapshot.messages:
            header = f"{sender_label(message.role)}  {format_timestamp(message.created_at)}"
            lines.append((f"{message.role}_header", header))
            lines.append((message.role, message.content))
    if snapshot.busy:
        lines.append(("typing", TYPING_TEXT))
    return lines


def status_text(busy: bool) -> str:
    return SENDING_TEXT if busy else READY_TEXT


def can_submit(text: str, busy: bool) -> bool:
    return bool(text.strip()) and not busy
