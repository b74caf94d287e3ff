"""Provider 抽象接口。

Dispatcher 不直接依赖具体厂商的 HTTP API，而是依赖此协议：

- 每个厂商实现一个 ReplyGateway（如 GeminiClient）。
- 负责：把用户文本发给远端模型，返回一段完整的回复文本；
  任何失败都以 BackendError 抛出。
"""

from typing import Protocol


class ReplyGateway(Protocol):
    """生成式语言模型网关协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - generate_reply(text): 单次异步调用，文本进、文本出。
    """

    name: str

    async def generate_reply(self, text: str) -> str:
        ...
