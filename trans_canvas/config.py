# trans_canvas/config.py

from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trans_canvas.core.types import DeviceClass
from trans_canvas.engines.bulk import BulkEngineConfig
from trans_canvas.engines.free import FreeEngineConfig
from trans_canvas.engines.signed import SignedEngineConfig
from trans_canvas.polisher import PolisherConfig


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: Literal["json", "console"] = "console"


class DispatchConfig(BaseModel):
    translation_interval: float = Field(
        default=0.1, description="翻译调用的最小间隔（秒），即每秒 10 次", ge=0
    )
    polish_interval: float = Field(
        default=6.0, description="润色调用的最小间隔（秒），即每分钟 10 次", ge=0
    )
    bridge_timeout: float = Field(default=15.0, gt=0)
    run_timeout: float = Field(default=120.0, gt=0)

    @model_validator(mode="after")
    def check_timeout_consistency(self) -> "DispatchConfig":
        if self.run_timeout < self.bridge_timeout:
            raise ValueError("run_timeout 必须大于或等于 bridge_timeout")
        return self


class TransCanvasConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TC_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    device_class: DeviceClass = DeviceClass.PC
    duplicate_offset: float = Field(
        default=60.0, description="复制模式下副本与原节点之间的水平间距"
    )

    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    bulk: BulkEngineConfig = Field(default_factory=BulkEngineConfig)
    free: FreeEngineConfig = Field(default_factory=FreeEngineConfig)
    signed: SignedEngineConfig = Field(default_factory=SignedEngineConfig)
    polish: PolisherConfig = Field(default_factory=PolisherConfig)
