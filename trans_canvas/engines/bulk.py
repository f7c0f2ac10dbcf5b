# trans_canvas/engines/bulk.py
"""提供一个使用 Google Cloud Translation v2 REST 接口的批量翻译引擎。"""

from typing import Any

import httpx
import structlog
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from trans_canvas.core.exceptions import ConfigurationError, TransportError
from trans_canvas.core.types import Language, ProviderKind
from trans_canvas.engines.base import (
    BaseEngineConfig,
    BaseTranslationEngine,
    build_timeout,
)

logger = structlog.get_logger(__name__)


class BulkEngineConfig(BaseSettings, BaseEngineConfig):
    """批量翻译引擎的配置模型。"""

    model_config = SettingsConfigDict(
        env_prefix="TC_BULK_", env_file=".env", extra="ignore"
    )
    api_key: SecretStr | None = None
    endpoint: str = "https://translation.googleapis.com/language/translate/v2"
    health_check_timeout: float = Field(default=5.0, gt=0)


class BulkEngine(BaseTranslationEngine[BulkEngineConfig]):
    """整批文本只发出一次 POST 请求的翻译引擎。"""

    CONFIG_MODEL = BulkEngineConfig
    KIND = ProviderKind.BULK
    SUPPORTS_BATCH = True

    def __init__(
        self, config: BulkEngineConfig, client: httpx.AsyncClient | None = None
    ):
        super().__init__(config)
        if not config.api_key:
            raise ConfigurationError("批量翻译引擎配置错误: 缺少 API 密钥 (TC_BULK_API_KEY)。")
        self._api_key = config.api_key.get_secret_value()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=build_timeout(config))

    async def close(self) -> None:
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()
        await super().close()

    async def atranslate_batch(
        self, texts: list[str], target_lang: Language, source_lang: Language
    ) -> list[str]:
        payload = {
            "q": texts,
            "target": target_lang.value,
            "source": source_lang.value,
        }
        try:
            response = await self.client.post(
                self.config.endpoint, params={"key": self._api_key}, json=payload
            )
            response.raise_for_status()
            body: Any = response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"批量翻译请求失败: HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(f"批量翻译请求失败: {e}") from e

        try:
            translations = body["data"]["translations"]
        except (KeyError, TypeError) as e:
            raise TransportError("批量翻译响应缺少 data.translations 字段。") from e
        if not isinstance(translations, list):
            raise TransportError("批量翻译响应的 translations 不是列表。")

        # 缺失的条目按空字符串处理，返回条数不足时补齐
        results = [
            str(item.get("translatedText", "")) if isinstance(item, dict) else ""
            for item in translations
        ]
        if len(results) < len(texts):
            logger.warning(
                "批量翻译返回的条目少于请求条数，缺失部分按空字符串处理。",
                expected=len(texts),
                received=len(results),
            )
            results.extend([""] * (len(texts) - len(results)))
        return results

    async def check_accessible(self) -> bool:
        """发送一次探测请求，判断服务当前是否可用。"""
        try:
            response = await self.client.get(
                self.config.endpoint,
                params={"key": self._api_key, "q": "test", "target": "zh"},
                timeout=self.config.health_check_timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("批量翻译服务不可达。", error=str(e))
            return False
        accessible = response.is_success
        logger.info("批量翻译服务健康检查完成。", accessible=accessible)
        return accessible
