# trans_canvas/core/exceptions.py
"""
本模块定义了 Trans-Canvas 项目中所有自定义的、语义化的异常类型。

排版查找未命中不属于异常：解析函数返回空结果，由调用方记录警告后降级处理。
"""


class TransCanvasError(Exception):
    """
    所有 Trans-Canvas 自定义异常的通用基类。
    捕获此异常可以处理所有源自本项目的预期错误。
    """


class ConfigurationError(TransCanvasError):
    """
    表示配置或设置项无效时发生的错误。
    例如，未知的翻译服务名称，或缺少引擎所需的 API 密钥。此类错误不会重试。
    """


class TransportError(TransCanvasError):
    """
    表示与外部服务交互时发生的错误。
    例如，非 2xx 响应、无法解析的响应体，或消息桥返回的失败响应。
    """


class CorrelationTimeout(TransportError):
    """在超时时间内没有收到与请求 ID 匹配的消息桥响应。"""


class DispatchError(TransCanvasError):
    """由调度器包装后重新抛出的服务调用错误，消息中附带上下文标签。"""


class RunFailedError(TransCanvasError):
    """
    一次翻译或样式检查运行失败时，向调用方抛出的聚合错误。
    原始错误可通过 `__cause__` 获取。
    """

    def __init__(self, message: str, run_id: str | None = None):
        super().__init__(message)
        self.run_id = run_id
