# trans_canvas/polisher.py
"""
提供基于 Coze 对话接口的文本润色服务。

一次润色分三步：创建对话，轮询对话状态直到完成，再读取消息列表中的第一条回复。
所有调用经由润色器自己的调度器发出，与翻译调度器的间隔相互独立。
"""

import asyncio
import time
from typing import Any

import httpx
import structlog
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from trans_canvas.core.exceptions import ConfigurationError, TransportError
from trans_canvas.core.types import Language
from trans_canvas.dispatcher import Dispatcher

logger = structlog.get_logger(__name__)

PROMPT_PREFIXES: dict[Language, str] = {
    Language.ZH: "润色以下文本: ",
    Language.EN: "Polish following content: ",
}


class PolisherConfig(BaseSettings):
    """润色服务的配置模型。"""

    model_config = SettingsConfigDict(
        env_prefix="TC_POLISH_", env_file=".env", extra="ignore"
    )
    api_token: SecretStr | None = None
    bot_id: str | None = None
    user_id: str = "001"
    base_url: str = "https://api.coze.com/v3"
    poll_interval: float = Field(default=1.0, gt=0)
    poll_timeout: float = Field(default=15.0, gt=0)
    timeout_total: float = Field(default=30.0, gt=0)
    timeout_connect: float = Field(default=5.0, gt=0)


class Polisher:
    """文本润色服务客户端。"""

    def __init__(
        self,
        config: PolisherConfig,
        min_interval: float = 6.0,
        client: httpx.AsyncClient | None = None,
    ):
        if not config.api_token or not config.bot_id:
            raise ConfigurationError(
                "润色服务配置错误: 缺少 TC_POLISH_API_TOKEN 或 TC_POLISH_BOT_ID。"
            )
        self.config = config
        self.dispatcher = Dispatcher(min_interval, label="polish")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_total, connect=config.timeout_connect)
        )

    async def close(self) -> None:
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()

    @property
    def _headers(self) -> dict[str, str]:
        assert self.config.api_token is not None
        return {
            "Authorization": f"Bearer {self.config.api_token.get_secret_value()}",
            "Content-Type": "application/json",
        }

    async def polish(self, content: str, target_language: Language) -> str:
        """
        润色一段文本。

        Raises:
            ValueError: 内容为空。
            DispatchError: 润色服务调用失败，原始错误保存在 `__cause__` 中。

        """
        if not content:
            raise ValueError("Content and target language must be provided")
        return await self.dispatcher.dispatch(
            self._polish_call, content, target_language
        )

    async def _polish_call(
        self, content: str, target_lang: Language, source_lang: Language
    ) -> str:
        prompt = f"{PROMPT_PREFIXES[target_lang]}{content}"
        conversation_id, chat_id = await self._create_chat(prompt)
        await self._wait_until_completed(conversation_id, chat_id)
        return await self._fetch_reply(conversation_id, chat_id)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.config.base_url}{path}"
        try:
            response = await self.client.request(
                method, url, headers=self._headers, **kwargs
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"润色服务请求失败: HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(f"润色服务请求失败: {e}") from e

    async def _create_chat(self, prompt: str) -> tuple[str, str]:
        body = {
            "bot_id": self.config.bot_id,
            "user_id": self.config.user_id,
            "stream": False,
            "auto_save_history": True,
            "additional_messages": [
                {"role": "user", "content": prompt, "content_type": "text"}
            ],
        }
        data = await self._request("POST", "/chat", json=body)
        try:
            return str(data["data"]["conversation_id"]), str(data["data"]["id"])
        except (KeyError, TypeError) as e:
            raise TransportError("润色服务创建对话的响应格式无法解析。") from e

    async def _wait_until_completed(self, conversation_id: str, chat_id: str) -> None:
        params = {"conversation_id": conversation_id, "chat_id": chat_id}
        deadline = time.monotonic() + self.config.poll_timeout
        while True:
            data = await self._request("GET", "/chat/retrieve", params=params)
            status = (data.get("data") or {}).get("status") if isinstance(data, dict) else None
            if status == "completed":
                return
            if time.monotonic() >= deadline:
                raise TransportError(
                    f"润色服务在 {self.config.poll_timeout} 秒内未完成对话。"
                )
            logger.debug("等待润色对话完成。", chat_id=chat_id, status=status)
            await asyncio.sleep(self.config.poll_interval)

    async def _fetch_reply(self, conversation_id: str, chat_id: str) -> str:
        params = {"conversation_id": conversation_id, "chat_id": chat_id}
        data = await self._request("GET", "/chat/message/list", params=params)
        try:
            return str(data["data"][0]["content"])
        except (KeyError, IndexError, TypeError) as e:
            raise TransportError("润色服务消息列表为空或格式无法解析。") from e
