"""
本核心包定义了 Trans-Canvas 系统中最基础、最稳定的构建块。

这里包含了系统的核心数据类型、外部协作方的接口协议和自定义异常。
所有其他模块都依赖于此核心包，但本包不依赖于项目中的任何其他模块。
"""

from .exceptions import (
    ConfigurationError,
    CorrelationTimeout,
    DispatchError,
    RunFailedError,
    TransCanvasError,
    TransportError,
)
from .interfaces import BridgeTransport, HostTree, SettingsStore
from .types import (
    AutoStylelintMode,
    DeviceClass,
    DisplayMode,
    EngineBatchItemResult,
    EngineError,
    EngineSuccess,
    FontName,
    Language,
    ProcessUnit,
    ProviderKind,
    RunReport,
    RunState,
    StyleRecord,
)

__all__ = [
    # from exceptions.py
    "TransCanvasError",
    "ConfigurationError",
    "TransportError",
    "CorrelationTimeout",
    "DispatchError",
    "RunFailedError",
    # from interfaces.py
    "HostTree",
    "SettingsStore",
    "BridgeTransport",
    # from types.py
    "Language",
    "DeviceClass",
    "DisplayMode",
    "AutoStylelintMode",
    "ProviderKind",
    "RunState",
    "FontName",
    "StyleRecord",
    "EngineSuccess",
    "EngineError",
    "EngineBatchItemResult",
    "ProcessUnit",
    "RunReport",
]
