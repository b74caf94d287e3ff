from typing import Callable, List, Tuple

from gemini_chat.domain.conversation import ConversationSnapshot, ConversationStore, Subscriber
from gemini_chat.domain.models import Message
from gemini_chat.infrastructure.logging.logger import logger


class InMemoryConversationStore(ConversationStore):
    """进程内会话存储：只追加的消息列表 + 忙碌标志。

    每次变更后向所有订阅者发布新的 ConversationSnapshot。
    订阅者抛出的异常只记录日志，不影响变更本身，也不影响其他订阅者。
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []
        self._busy = False
        self._subscribers: List[Subscriber] = []

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def busy(self) -> bool:
        return self._busy

    def snapshot(self) -> ConversationSnapshot:
        return ConversationSnapshot(messages=tuple(self._messages), busy=self._busy)

    def append(self, message: Message) -> None:
        self._messages.append(message)
        self._publish()

    def set_busy(self, busy: bool) -> None:
        self._busy = bool(busy)
        self._publish()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> None:
        snap = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snap)
            except Exception:
                logger.exception(
                    "Subscriber failed",
                    extra={"extra": {"subscriber": getattr(callback, "__qualname__", repr(callback))}},
                )
