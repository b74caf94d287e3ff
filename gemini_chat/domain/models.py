"""对话消息数据模型。

Message 是会话中唯一的数据单元，创建后不可变：

- id: 会话内唯一标识（纳秒时间戳 + 进程内递增序号）。
- role: "user" 或 "assistant"。
- content: 纯文本内容，核心逻辑从不解析。
- created_at: 创建时间（UTC），仅用于展示。
"""

import itertools
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal


# 消息角色：用户或 AI 助手
Role = Literal["user", "assistant"]

# 同一时钟刻度内创建的多条消息依靠序号区分
_sequence = itertools.count(1)


@dataclass(frozen=True)
class Message:
    """一条会话消息。"""

    id: str
    role: Role
    content: str
    created_at: datetime


def new_message_id() -> str:
    return f"m-{time.time_ns()}-{next(_sequence)}"


def new_message(role: Role, content: str) -> Message:
    """以当前时间和新 id 构造一条消息。"""

    return Message(
        id=new_message_id(),
        role=role,
        content=content,
        created_at=datetime.now(timezone.utc),
    )
