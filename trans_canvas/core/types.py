# trans_canvas/core/types.py
"""
本模块定义了 Trans-Canvas 系统的核心数据类型。
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    """插件支持的两种语言。"""

    EN = "en"
    ZH = "zh"

    @property
    def counterpart(self) -> Language:
        """双语模型下的另一种语言，即翻译时的源语言。"""
        return Language.ZH if self is Language.EN else Language.EN


class DeviceClass(str, Enum):
    """排版规范区分的设备类型。"""

    PC = "pc"
    MOBILE = "mobile"


class DisplayMode(str, Enum):
    """翻译结果的展示方式：替换原节点，或在复制出的节点上写入。"""

    REPLACE = "replace"
    DUPLICATE = "duplicate"


class AutoStylelintMode(str, Enum):
    """翻译后是否自动执行样式检查。"""

    ON = "on"
    OFF = "off"


class ProviderKind(str, Enum):
    """三种可互换的翻译服务。"""

    BULK = "bulk"
    FREE = "free"
    SIGNED = "signed"

    @classmethod
    def _missing_(cls, value: object) -> ProviderKind | None:
        # 兼容旧版插件存储的服务名称
        aliases = {
            "googlebasic": cls.BULK,
            "googlefree": cls.FREE,
            "baidu": cls.SIGNED,
        }
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return aliases.get(normalized)


class RunState(str, Enum):
    """协调器在一次运行中的状态。"""

    IDLE = "idle"
    COLLECTING_UNITS = "collecting_units"
    DISPATCHING = "dispatching"
    APPLYING_RESULTS = "applying_results"
    FAILED = "failed"


class FontName(BaseModel):
    """字体族与字重名称，例如 ("PingFang SC", "Semibold")。"""

    model_config = ConfigDict(frozen=True)

    family: str
    style: str


class StyleRecord(BaseModel):
    """排版规范表中的一行，加载后不可修改。"""

    model_config = ConfigDict(frozen=True)

    name: str
    font: FontName
    font_size: float
    line_height: float
    language: Language
    device_class: DeviceClass
    style_key: str

    @property
    def match_key(self) -> tuple[str, float, float, Language, DeviceClass]:
        """参与匹配的五个字段；字体族不参与比较。"""
        return (
            self.font.style,
            self.font_size,
            self.line_height,
            self.language,
            self.device_class,
        )


class EngineSuccess(BaseModel):
    """代表从翻译引擎成功返回的单条翻译结果。"""

    translated_text: str


class EngineError(BaseModel):
    """代表单条翻译的失败结果。"""

    error_message: str


EngineBatchItemResult = EngineSuccess | EngineError


class ProcessUnit(BaseModel):
    """
    一次运行中的处理单元：一个文本节点，以及针对它做出的翻译和样式检查决定。

    `node_ref` 是宿主树中的不透明句柄，只在本次运行内有效。
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    node_ref: Any = Field(repr=False)
    node_id: str
    role_hint: str = ""
    source_text: str
    target_language: Language
    needs_translation: bool
    needs_style_check: bool
    translation_provider: ProviderKind | None = None
    translated_text: str | None = None
    style_key: str | None = None


class RunReport(BaseModel):
    """一次成功完成的运行的汇总结果。"""

    run_id: str
    state: RunState
    target_language: Language
    provider: ProviderKind | None = None
    unit_count: int = 0
    translated_count: int = 0
    style_checked_count: int = 0
    font_misses: list[str] = Field(default_factory=list)
    style_misses: list[str] = Field(default_factory=list)
