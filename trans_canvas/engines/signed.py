# trans_canvas/engines/signed.py
"""
提供一个使用百度通用翻译 API 的签名请求引擎。

请求不直接发出，而是经由 `MessageBridge` 发送并按消息 ID 等待响应。
签名规则: sign = md5(appid + q + salt + secret)，salt 为毫秒时间戳。
"""

import hashlib
import time
from typing import Any
from urllib.parse import urlencode

import structlog
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from trans_canvas.bridge import MessageBridge
from trans_canvas.core.exceptions import ConfigurationError, TransportError
from trans_canvas.core.types import Language, ProviderKind
from trans_canvas.engines.base import BaseEngineConfig, BaseTranslationEngine

logger = structlog.get_logger(__name__)


class SignedEngineConfig(BaseSettings, BaseEngineConfig):
    """签名请求引擎的配置模型。"""

    model_config = SettingsConfigDict(
        env_prefix="TC_SIGNED_", env_file=".env", extra="ignore"
    )
    app_id: str | None = None
    secret: SecretStr | None = None
    endpoint: str = "https://api.fanyi.baidu.com/api/trans/vip/translate"


def build_sign(app_id: str, query: str, salt: str, secret: str) -> str:
    """计算请求签名。"""
    return hashlib.md5(f"{app_id}{query}{salt}{secret}".encode()).hexdigest()


class SignedEngine(BaseTranslationEngine[SignedEngineConfig]):
    """把整批文本以换行拼接、经消息桥发出一次签名请求的翻译引擎。"""

    CONFIG_MODEL = SignedEngineConfig
    KIND = ProviderKind.SIGNED
    SUPPORTS_BATCH = True

    def __init__(self, config: SignedEngineConfig, bridge: MessageBridge | None):
        super().__init__(config)
        if not config.app_id or not config.secret:
            raise ConfigurationError(
                "签名翻译引擎配置错误: 缺少 TC_SIGNED_APP_ID 或 TC_SIGNED_SECRET。"
            )
        if bridge is None:
            raise ConfigurationError("签名翻译引擎需要一个消息桥实例。")
        self.bridge = bridge

    def build_url(
        self, query: str, target_lang: Language, source_lang: Language, salt: str
    ) -> str:
        assert self.config.app_id is not None and self.config.secret is not None
        params = {
            "q": query,
            "from": source_lang.value,
            "to": target_lang.value,
            "appid": self.config.app_id,
            "salt": salt,
            "sign": build_sign(
                self.config.app_id, query, salt, self.config.secret.get_secret_value()
            ),
        }
        return f"{self.config.endpoint}?{urlencode(params)}"

    async def atranslate_batch(
        self, texts: list[str], target_lang: Language, source_lang: Language
    ) -> list[str]:
        query = "\n".join(texts)
        salt = str(int(time.time() * 1000))
        url = self.build_url(query, target_lang, source_lang, salt)

        body: Any = await self.bridge.request(url, method="GET", data_type="json")

        if not isinstance(body, dict):
            raise TransportError("签名翻译响应格式无法解析。")
        if "error_code" in body:
            raise TransportError(
                f"签名翻译服务返回错误: {body.get('error_code')} "
                f"{body.get('error_msg', '')}".strip()
            )
        results = body.get("trans_result")
        if not isinstance(results, list):
            raise TransportError("签名翻译响应缺少 trans_result 字段。")
        logger.debug("签名翻译完成。", count=len(results))
        return [str(item.get("dst", "")) for item in results if isinstance(item, dict)]
