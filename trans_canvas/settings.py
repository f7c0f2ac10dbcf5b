# trans_canvas/settings.py
"""
本模块定义了跨会话保存的用户设置：键名、类型化默认值、快照，以及两种存储实现。

设置值在存储边界处被解析为枚举；未知的取值会以 `ConfigurationError` 拒绝。
每次运行开始时读取一次快照，运行期间不再读取存储。
"""

import json
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from trans_canvas.core.exceptions import ConfigurationError
from trans_canvas.core.interfaces import SettingsStore
from trans_canvas.core.types import (
    AutoStylelintMode,
    DisplayMode,
    Language,
    ProviderKind,
)

logger = structlog.get_logger(__name__)


class SettingKey(str, Enum):
    """设置项在存储中的键名。"""

    TARGET_LANGUAGE = "targetLanguage"
    DISPLAY_MODE = "displayMode"
    AUTO_STYLELINT_MODE = "autoStylelintMode"
    TRANSLATION_PROVIDER = "translationProvider"
    IS_FIRST_OPEN = "isFirstOpen"


SETTING_DEFAULTS: dict[SettingKey, Any] = {
    SettingKey.TARGET_LANGUAGE: Language.EN,
    SettingKey.DISPLAY_MODE: DisplayMode.DUPLICATE,
    SettingKey.AUTO_STYLELINT_MODE: AutoStylelintMode.ON,
    SettingKey.TRANSLATION_PROVIDER: ProviderKind.BULK,
    SettingKey.IS_FIRST_OPEN: True,
}

_ENUM_TYPES: dict[SettingKey, type[Enum]] = {
    SettingKey.TARGET_LANGUAGE: Language,
    SettingKey.DISPLAY_MODE: DisplayMode,
    SettingKey.AUTO_STYLELINT_MODE: AutoStylelintMode,
    SettingKey.TRANSLATION_PROVIDER: ProviderKind,
}

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def parse_setting_key(key: "SettingKey | str") -> SettingKey:
    try:
        return SettingKey(key)
    except ValueError as e:
        raise ConfigurationError(f"未知的设置项: '{key}'") from e


def parse_setting_value(key: SettingKey, value: Any) -> Any:
    """
    把原始值解析为设置项对应的类型。

    Raises:
        ConfigurationError: 取值不属于该设置项允许的范围。

    """
    if key is SettingKey.IS_FIRST_OPEN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS:
            return True
        if isinstance(value, str) and value.strip().lower() in _FALSE_STRINGS:
            return False
        raise ConfigurationError(f"设置项 '{key.value}' 需要布尔值，收到: {value!r}")

    enum_type = _ENUM_TYPES[key]
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str) and enum_type is not ProviderKind:
        value = value.strip().lower()
    try:
        return enum_type(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigurationError(
            f"设置项 '{key.value}' 的取值 {value!r} 无效，可选值: {allowed}"
        ) from e


def _to_storable(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def read_setting(store: SettingsStore, key: "SettingKey | str") -> Any:
    """读取一个设置项；未设置时返回类型化的默认值。"""
    setting_key = parse_setting_key(key)
    raw = store.read(setting_key.value)
    if raw is None:
        return SETTING_DEFAULTS[setting_key]
    return parse_setting_value(setting_key, raw)


def write_setting(store: SettingsStore, key: "SettingKey | str", value: Any) -> Any:
    """校验并写入一个设置项，返回解析后的值。"""
    setting_key = parse_setting_key(key)
    parsed = parse_setting_value(setting_key, value)
    store.write(setting_key.value, _to_storable(parsed))
    logger.info("设置项已更新。", key=setting_key.value, value=_to_storable(parsed))
    return parsed


class SettingsSnapshot(BaseModel):
    """一次运行开始时读取的设置快照，运行期间不可修改。"""

    model_config = ConfigDict(frozen=True)

    target_language: Language = Language.EN
    display_mode: DisplayMode = DisplayMode.DUPLICATE
    auto_stylelint_mode: AutoStylelintMode = AutoStylelintMode.ON
    translation_provider: ProviderKind = ProviderKind.BULK
    is_first_open: bool = True

    @classmethod
    def from_store(cls, store: SettingsStore) -> "SettingsSnapshot":
        return cls(
            target_language=read_setting(store, SettingKey.TARGET_LANGUAGE),
            display_mode=read_setting(store, SettingKey.DISPLAY_MODE),
            auto_stylelint_mode=read_setting(store, SettingKey.AUTO_STYLELINT_MODE),
            translation_provider=read_setting(store, SettingKey.TRANSLATION_PROVIDER),
            is_first_open=read_setting(store, SettingKey.IS_FIRST_OPEN),
        )


class InMemorySettingsStore:
    """进程内的设置存储，主要用于测试。"""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def read(self, key: str) -> Any:
        return self._data.get(key)

    def write(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileSettingsStore:
    """以 JSON 文件保存的设置存储。每次访问都重新读取文件，写入是原子的。"""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"设置文件 '{self.path}' 不是有效的 JSON。") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"设置文件 '{self.path}' 的顶层必须是对象。")
        return data

    def read(self, key: str) -> Any:
        return self._load().get(key)

    def write(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
