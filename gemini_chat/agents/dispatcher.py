"""消息分发核心模块。

实现一次完整的“发送-接收”交换：校验输入、写入用户消息、标记忙碌、
调用网关、写入唯一一条回复并清除忙碌标志。
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import uuid4
import time
import logging

from gemini_chat.domain.conversation import ConversationStore
from gemini_chat.domain.models import Message, new_message
from gemini_chat.providers.base import ReplyGateway
from gemini_chat.infrastructure.logging.logger import logger


FALLBACK_REPLY = "Desculpe, ocorreu um erro ao processar sua mensagem."


@dataclass
class DispatcherConfig:
    fallback_reply: str = FALLBACK_REPLY
    reject_when_busy: bool = True  # 忙碌时拒绝新的 send（单飞保护）


class MessageDispatcher:
    """状态机：Idle → Pending → Idle。

    每次通过校验的 send 都会在会话中追加一条用户消息和恰好一条助手消息
    （真实回复或固定的错误提示）。网关异常不会向调用方传播。
    """

    def __init__(
        self,
        store: ConversationStore,
        gateway: ReplyGateway,
        config: Optional[DispatcherConfig] = None,
    ):
        self._store = store
        self._gateway = gateway
        self._config = config or DispatcherConfig()

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def busy(self) -> bool:
        return self._store.busy

    async def send(self, user_text: str) -> Optional[Message]:
        """发送一条用户消息并等待回复。

        Args:
            user_text: 用户输入；去除首尾空白后为空则不做任何事。

        Returns:
            追加到会话中的助手消息；输入为空或忙碌被拒绝时返回 None。
        """
        text = (user_text or "").strip()
        if not text:
            return None

        log_ctx: Dict[str, Any] = {
            "trace_id": f"tr-{uuid4().hex}",
            "provider": getattr(self._gateway, "name", "unknown"),
        }
        if self._config.reject_when_busy and self._store.busy:
            self._log(logging.WARNING, "Rejected send while busy", log_ctx)
            return None

        start_time = time.time()
        user_msg = new_message("user", text)
        self._store.append(user_msg)
        self._store.set_busy(True)
        self._log(logging.INFO, "Stored user message", log_ctx, message_id=user_msg.id, length=len(text))

        assistant_msg: Optional[Message] = None
        try:
            try:
                self._log(logging.INFO, "Calling gateway", log_ctx)
                reply = await self._gateway.generate_reply(text)
            except Exception as e:
                self._log(
                    logging.ERROR,
                    "Gateway failed",
                    log_ctx,
                    error_type=type(e).__name__,
                    error=str(e)[:500],
                    code=getattr(e, "code", None),
                )
                reply = self._config.fallback_reply
            assistant_msg = new_message("assistant", reply)
            self._store.append(assistant_msg)
            self._log(logging.INFO, "Stored assistant message", log_ctx, message_id=assistant_msg.id)
        finally:
            self._store.set_busy(False)
            self._log(
                logging.INFO,
                "Completed dispatch",
                log_ctx,
                elapsed_seconds=round(time.time() - start_time, 2),
                user_message_id=user_msg.id,
                assistant_message_id=assistant_msg.id if assistant_msg else None,
            )
        return assistant_msg

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
