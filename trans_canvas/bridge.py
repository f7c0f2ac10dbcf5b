# trans_canvas/bridge.py
"""
本模块实现了异步消息桥：按随机消息 ID 关联请求与响应。

`MessageBridge.request` 为每个请求登记一个 Future，经传输端发出后等待匹配的响应；
完成或超时后都会从待决表中移除。迟到的或未知 ID 的响应会被忽略。
"""

import asyncio
import uuid
from typing import Any

import httpx
import structlog
from pydantic import BaseModel

from trans_canvas.core.exceptions import CorrelationTimeout, TransportError
from trans_canvas.core.interfaces import BridgeTransport

logger = structlog.get_logger(__name__)


class BridgeRequest(BaseModel):
    """经消息桥发出的一次请求。"""

    message_id: str
    url: str
    method: str = "GET"
    data_type: str = "json"


class BridgeResponse(BaseModel):
    """消息桥回送的响应，通过 `message_id` 与请求关联。"""

    message_id: str
    is_successful: bool
    data: Any = None
    error_message: str | None = None


class MessageBridge:
    """基于 Future 的请求/响应关联器，内置超时。"""

    def __init__(self, transport: BridgeTransport, timeout: float = 15.0):
        self.transport = transport
        self.timeout = timeout
        self._pending: dict[str, asyncio.Future[Any]] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def request(
        self, url: str, method: str = "GET", data_type: str = "json"
    ) -> Any:
        """
        发送请求并等待匹配的响应数据。

        Raises:
            TransportError: 对端返回了失败响应。
            CorrelationTimeout: 超时时间内没有收到匹配的响应。

        """
        message_id = uuid.uuid4().hex
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending[message_id] = future
        request = BridgeRequest(
            message_id=message_id, url=url, method=method, data_type=data_type
        )
        try:
            await self.transport.send(request, self.deliver)
            return await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.warning(
                "消息桥等待响应超时。", message_id=message_id, timeout=self.timeout
            )
            raise CorrelationTimeout(
                f"消息 {message_id} 在 {self.timeout} 秒内没有收到响应"
            ) from e
        finally:
            self._pending.pop(message_id, None)

    def deliver(self, response: BridgeResponse) -> bool:
        """
        将响应交付给等待中的请求。

        Returns:
            是否找到了仍在等待的请求。未知或迟到的响应返回 False。

        """
        future = self._pending.get(response.message_id)
        if future is None or future.done():
            logger.debug("忽略未知或迟到的消息桥响应。", message_id=response.message_id)
            return False
        if response.is_successful:
            future.set_result(response.data)
        else:
            future.set_exception(
                TransportError(response.error_message or "消息桥请求失败")
            )
        return True


class HttpBridgeTransport:
    """使用 httpx 在后台任务中执行请求的消息桥传输端。"""

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 10.0):
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._owns_client = client is None
        self._active_tasks: set[asyncio.Task[None]] = set()

    async def send(self, request: BridgeRequest, reply: Any) -> None:
        task = asyncio.create_task(self._perform(request, reply))
        self._active_tasks.add(task)
        task.add_done_callback(self._active_tasks.discard)

    async def _perform(self, request: BridgeRequest, reply: Any) -> None:
        try:
            response = await self._client.request(request.method, request.url)
            response.raise_for_status()
            data: Any = response.json() if request.data_type == "json" else response.text
        except Exception as e:
            # 任何失败都要回复，否则调用方只能等到超时
            logger.warning("消息桥 HTTP 请求失败。", url=request.url, error=str(e))
            reply(
                BridgeResponse(
                    message_id=request.message_id,
                    is_successful=False,
                    error_message=str(e),
                )
            )
            return
        reply(
            BridgeResponse(
                message_id=request.message_id, is_successful=True, data=data
            )
        )

    async def close(self) -> None:
        """取消仍在执行的请求，并关闭自有的 HTTP 客户端。"""
        if self._active_tasks:
            for task in list(self._active_tasks):
                task.cancel()
            await asyncio.gather(*self._active_tasks, return_exceptions=True)
        if self._owns_client:
            await self._client.aclose()
