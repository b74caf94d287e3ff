"""Gemini Chat 顶层包。

该包提供单窗口 AI 聊天客户端的核心实现，
包括配置加载、领域模型、会话存储、Gemini 网关适配、
消息分发以及 tkinter 界面。
"""

from gemini_chat.agents.dispatcher import FALLBACK_REPLY, MessageDispatcher

__all__ = ["FALLBACK_REPLY", "MessageDispatcher"]
