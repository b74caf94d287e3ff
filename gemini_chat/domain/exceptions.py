"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
便于在入口层或 UI 层做统一捕获与用户提示。

系统只有两类错误：
- StartupConfigError: 启动期配置缺失（例如没有 API Key），致命且不可恢复。
- BackendError: 后端单次调用的任何失败，由 Dispatcher 就地转换为固定回复。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 status_code、provider 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class StartupConfigError(BusinessError):
    """启动配置错误，例如缺少 Gemini API Key。应用无法在此状态下启动。"""


class BackendError(BusinessError):
    """后端调用失败（网络、鉴权、配额、响应格式等），不区分子类型。"""
