"""evtrack 异常体系

校验失败、活跃事件不存在、存储失败三类错误，
由 gateway 分别映射为 400 / 404 / 500。
"""


class EventTrackError(Exception):
    """evtrack 基础异常"""


class EventValidationError(EventTrackError):
    """请求参数校验失败（type 格式、分页参数越界等）

    在请求边界处理，直接返回客户端，不重试。
    """

    def __init__(self, field: str, message: str) -> None:
        """
        Args:
            field: 出错的参数名
            message: 面向调用方的可读错误描述
        """
        super().__init__(message)
        self.field = field
        self.message = message


class ActiveEventNotFoundError(EventTrackError):
    """指定类型不存在活跃事件（finish 时触发）"""

    def __init__(self, event_type: str) -> None:
        super().__init__(f"No active event of type '{event_type}'")
        self.event_type = event_type


class StorageError(EventTrackError):
    """底层存储失败（连接、超时、数据形状异常等）

    核心层不重试，原样向上传递。
    """

    def __init__(
        self,
        message: str,
        original_error: BaseException | None = None,
    ) -> None:
        """
        Args:
            message: 错误描述
            original_error: 原始异常
        """
        super().__init__(message)
        self.original_error = original_error


class ActiveEventConflictError(StorageError):
    """同类型活跃事件唯一约束冲突

    并发 start 时后写入者触发，由服务层回查已存在的活跃事件。
    """

    def __init__(
        self,
        event_type: str,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(
            f"Active event of type '{event_type}' already exists",
            original_error,
        )
        self.event_type = event_type


class StorageTimeoutError(StorageError):
    """存储调用超时"""

    def __init__(
        self,
        timeout_s: float,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(f"Storage call timed out after {timeout_s}s", original_error)
        self.timeout_s = timeout_s
