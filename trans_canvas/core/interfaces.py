# trans_canvas/core/interfaces.py
"""
本模块使用 typing.Protocol 定义了核心组件依赖的外部协作方接口。

宿主树、设置存储和消息桥传输都由核心之外的代码实现；
核心只通过这些方法访问它们，并且不持有节点身份超过一次运行。
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from trans_canvas.core.types import FontName

if TYPE_CHECKING:
    from trans_canvas.bridge import BridgeRequest, BridgeResponse


class HostTree(Protocol):
    """宿主场景树的最小接口。节点句柄 (NodeRef) 对核心是不透明的。"""

    def get_selection(self) -> Sequence[Any]: ...
    def get_node_id(self, ref: Any) -> str: ...
    def get_name(self, ref: Any) -> str: ...
    def set_name(self, ref: Any, name: str) -> None: ...
    def is_text_node(self, ref: Any) -> bool: ...
    def get_children(self, ref: Any) -> Sequence[Any]: ...
    def get_characters(self, ref: Any) -> str: ...
    def get_font(self, ref: Any) -> FontName | None: ...
    def get_font_size(self, ref: Any) -> float | None: ...
    def get_line_height(self, ref: Any) -> float | None: ...
    def get_bounds(self, ref: Any) -> tuple[float, float, float]: ...
    def set_text(self, ref: Any, text: str) -> None: ...
    def set_font(self, ref: Any, font: FontName) -> None: ...
    def clone(self, ref: Any) -> Any: ...
    def set_position(self, ref: Any, x: float, y: float) -> None: ...


class SettingsStore(Protocol):
    """跨会话保存的简单键值存储。"""

    def read(self, key: str) -> Any: ...
    def write(self, key: str, value: Any) -> None: ...


class BridgeTransport(Protocol):
    """消息桥的传输端：发送请求，并在稍后通过 `reply` 回送响应。"""

    async def send(
        self,
        request: BridgeRequest,
        reply: Callable[[BridgeResponse], bool],
    ) -> None: ...
