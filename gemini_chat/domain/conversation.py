from dataclasses import dataclass
from typing import Callable, Protocol, Tuple

from .models import Message


@dataclass(frozen=True)
class ConversationSnapshot:
    """某一时刻的会话状态：有序消息列表与忙碌标志。"""

    messages: Tuple[Message, ...]
    busy: bool


Subscriber = Callable[[ConversationSnapshot], None]


class ConversationStore(Protocol):
    @property
    def messages(self) -> Tuple[Message, ...]:
        ...

    @property
    def busy(self) -> bool:
        ...

    def snapshot(self) -> ConversationSnapshot:
        ...

    def append(self, message: Message) -> None:
        ...

    def set_busy(self, busy: bool) -> None:
        ...

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        ...
