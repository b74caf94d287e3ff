"""领域层模型与协议。

包含：
- models: 不可变的 Message 模型与构造函数。
- conversation: 会话快照 ConversationSnapshot 与 ConversationStore 协议。
- exceptions: 业务异常类型定义。
"""
