"""LLM Provider 集成层。

该包下的模块负责：
- 定义网关抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供具体实现 (gemini_client)。
"""

from typing import Optional

from gemini_chat.config.settings import settings
from gemini_chat.providers.base import ReplyGateway
from gemini_chat.providers.gemini_client import GeminiClient
from gemini_chat.providers.registry import get_provider_config


def create_provider(name: Optional[str] = None) -> ReplyGateway:
    """根据名称创建 Provider 实例，默认取配置中的 provider。"""

    provider_name = (name or getattr(settings, "default_provider", "gemini")).lower()
    get_provider_config(provider_name)  # 未知名称抛出 KeyError
    return GeminiClient(settings)
