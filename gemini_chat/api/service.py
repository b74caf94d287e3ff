"""对外 API 服务模块。

提供简化的函数接口供上层应用（GUI、脚本）调用。
"""

import asyncio
from typing import Any, Dict, List, Optional

from gemini_chat.agents.dispatcher import MessageDispatcher
from gemini_chat.domain.conversation import ConversationStore
from gemini_chat.domain.models import Message
from gemini_chat.infrastructure.storage.memory_store import InMemoryConversationStore
from gemini_chat.providers import create_provider


_store: Optional[ConversationStore] = None
_dispatcher: Optional[MessageDispatcher] = None


def get_default_store() -> ConversationStore:
    """获取进程内默认的会话存储（单例）。"""
    global _store
    if _store is None:
        _store = InMemoryConversationStore()
    return _store


def get_default_dispatcher() -> MessageDispatcher:
    """获取默认的 MessageDispatcher 实例（单例）。

    Raises:
        StartupConfigError: 未配置 Gemini API Key。
    """
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = MessageDispatcher(store=get_default_store(), gateway=create_provider())
    return _dispatcher


def message_to_dict(message: Message) -> Dict[str, Any]:
    return {
        "id": message.id,
        "role": message.role,
        "content": message.content,
        "created_at": message.created_at.isoformat(),
    }


def send_message(user_input: str) -> Optional[Dict[str, Any]]:
    """同步发送一条消息（在当前线程内运行事件循环）。

    供没有事件循环的调用方使用，例如 GUI 的工作线程。

    Args:
        user_input: 用户输入内容

    Returns:
        助手消息的字典视图；输入为空或正在忙碌时返回 None。
    """
    dispatcher = get_default_dispatcher()
    reply = asyncio.run(dispatcher.send(user_input))
    return message_to_dict(reply) if reply else None


def get_messages() -> List[Dict[str, Any]]:
    """获取当前会话的所有消息。"""
    return [message_to_dict(m) for m in get_default_store().messages]
