# trans_canvas/engines/free.py
"""提供一个使用 Google 免费网页接口、逐条请求的翻译引擎。"""

from typing import Any

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

from trans_canvas.core.exceptions import TransportError
from trans_canvas.core.types import Language, ProviderKind
from trans_canvas.engines.base import (
    BaseEngineConfig,
    BaseTranslationEngine,
    build_timeout,
)


class FreeEngineConfig(BaseSettings, BaseEngineConfig):
    """免费翻译引擎的配置模型。"""

    model_config = SettingsConfigDict(
        env_prefix="TC_FREE_", env_file=".env", extra="ignore"
    )
    endpoint: str = "https://translate.googleapis.com/translate_a/single"
    client_name: str = "gtx"


class FreeEngine(BaseTranslationEngine[FreeEngineConfig]):
    """每条文本单独发出一次 GET 请求的翻译引擎。"""

    CONFIG_MODEL = FreeEngineConfig
    KIND = ProviderKind.FREE

    def __init__(
        self, config: FreeEngineConfig, client: httpx.AsyncClient | None = None
    ):
        super().__init__(config)
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=build_timeout(config))

    async def close(self) -> None:
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()
        await super().close()

    async def atranslate_one(
        self, text: str, target_lang: Language, source_lang: Language
    ) -> str:
        params = {
            "client": self.config.client_name,
            "dt": "t",
            "sl": source_lang.value,
            "tl": target_lang.value,
            "q": text,
        }
        try:
            response = await self.client.get(self.config.endpoint, params=params)
            response.raise_for_status()
            body: Any = response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"免费翻译请求失败: HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(f"免费翻译请求失败: {e}") from e

        try:
            segments = body[0]
            return "".join(str(segment[0] or "") for segment in segments if segment)
        except (IndexError, KeyError, TypeError) as e:
            raise TransportError("免费翻译响应格式无法解析。") from e
