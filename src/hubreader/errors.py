"""业务异常定义.

每类异常带有对应的 HTTP 状态码，由 main 中的异常处理器统一转换为
``{"error": message}`` 响应。
"""


class ReaderError(Exception):
    """业务异常基类."""

    status_code = 500
    default_message = "服务器内部错误"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ReaderError):
    """输入缺失或格式错误."""

    status_code = 400
    default_message = "请求参数无效"


class UnauthorizedError(ReaderError):
    """未登录或会话无效."""

    status_code = 401
    default_message = "未授权访问"


class NotFoundError(ReaderError):
    """找不到调用者可访问的订阅、Feed 或文章."""

    status_code = 404
    default_message = "资源不存在"


class ConflictError(ReaderError):
    """唯一性冲突."""

    status_code = 400
    default_message = "资源已存在"


class AlreadySubscribedError(ConflictError):
    """重复订阅."""

    default_message = "已订阅该 RSS 源"


class EmailTakenError(ConflictError):
    """邮箱已注册."""

    default_message = "该邮箱已被注册"


class FetchError(ReaderError):
    """聚合服务不可达或返回了无法解析的内容."""

    status_code = 400
    default_message = "无法解析 RSS 源"
