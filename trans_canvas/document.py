# trans_canvas/document.py
"""
本模块提供一个内存中的、可从 JSON 加载的宿主场景树实现。

`DocumentTree` 满足 `HostTree` 协议，节点句柄就是 `SceneNode` 对象本身。
它让处理引擎可以脱离设计工具独立运行，例如在命令行中处理导出的文档。
"""

import json
import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from trans_canvas.core.types import FontName

NodeType = Literal["TEXT", "FRAME", "GROUP", "COMPONENT", "INSTANCE"]


class SceneNode(BaseModel):
    """场景树中的一个节点。只有 TEXT 节点携带文本和排版属性。"""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    name: str = ""
    type: NodeType = "FRAME"
    characters: str = ""
    # 同一文本节点内可能混用多种字体；第一段字体作为节点字体
    fonts: list[FontName] = Field(default_factory=list)
    font_size: float | None = None
    line_height: float | None = None
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    children: list["SceneNode"] = Field(default_factory=list)


class Document(BaseModel):
    """一个文档：顶层节点列表，以及当前选中的节点 ID。"""

    nodes: list[SceneNode] = Field(default_factory=list)
    selection: list[str] = Field(default_factory=list)


class DocumentTree:
    """`HostTree` 协议的内存实现。"""

    def __init__(self, document: Document | None = None):
        self.document = document or Document()

    @classmethod
    def from_json(cls, raw: str) -> "DocumentTree":
        return cls(Document.model_validate_json(raw))

    @classmethod
    def load(cls, path: Path | str) -> "DocumentTree":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def to_json(self) -> str:
        return self.document.model_dump_json(indent=2, exclude_none=True)

    def dump(self, path: Path | str) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")

    def iter_nodes(self) -> list[SceneNode]:
        """按文档顺序（深度优先）列出所有节点。"""
        result: list[SceneNode] = []
        stack = list(reversed(self.document.nodes))
        while stack:
            node = stack.pop()
            result.append(node)
            stack.extend(reversed(node.children))
        return result

    def find(self, node_id: str) -> SceneNode | None:
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    def select(self, node_ids: Sequence[str]) -> None:
        self.document.selection = list(node_ids)

    def _find_siblings(self, ref: SceneNode) -> list[SceneNode] | None:
        if any(node is ref for node in self.document.nodes):
            return self.document.nodes
        for node in self.iter_nodes():
            if any(child is ref for child in node.children):
                return node.children
        return None

    # --- HostTree 协议 ---

    def get_selection(self) -> Sequence[SceneNode]:
        selected = []
        for node_id in self.document.selection:
            node = self.find(node_id)
            if node is not None:
                selected.append(node)
        return selected

    def get_node_id(self, ref: SceneNode) -> str:
        return ref.id

    def get_name(self, ref: SceneNode) -> str:
        return ref.name

    def set_name(self, ref: SceneNode, name: str) -> None:
        ref.name = name

    def is_text_node(self, ref: SceneNode) -> bool:
        return ref.type == "TEXT"

    def get_children(self, ref: SceneNode) -> Sequence[SceneNode]:
        return list(ref.children)

    def get_characters(self, ref: SceneNode) -> str:
        return ref.characters

    def get_font(self, ref: SceneNode) -> FontName | None:
        return ref.fonts[0] if ref.fonts else None

    def get_font_size(self, ref: SceneNode) -> float | None:
        return ref.font_size

    def get_line_height(self, ref: SceneNode) -> float | None:
        return ref.line_height

    def get_bounds(self, ref: SceneNode) -> tuple[float, float, float]:
        return ref.x, ref.y, ref.width

    def set_text(self, ref: SceneNode, text: str) -> None:
        # 混用字体的节点先统一为第一段字体再写入文本
        if len(ref.fonts) > 1:
            ref.fonts = ref.fonts[:1]
        ref.characters = text

    def set_font(self, ref: SceneNode, font: FontName) -> None:
        ref.fonts = [font]

    def clone(self, ref: SceneNode) -> SceneNode:
        """深拷贝节点（含子树，全部使用新 ID），并作为下一个兄弟节点插入。"""
        copy = ref.model_copy(deep=True)
        self._assign_fresh_ids(copy)
        siblings = self._find_siblings(ref)
        if siblings is None:
            self.document.nodes.append(copy)
        else:
            index = next(i for i, node in enumerate(siblings) if node is ref)
            siblings.insert(index + 1, copy)
        return copy

    def set_position(self, ref: SceneNode, x: float, y: float) -> None:
        ref.x = x
        ref.y = y

    @staticmethod
    def _assign_fresh_ids(node: SceneNode) -> None:
        node.id = uuid.uuid4().hex[:12]
        for child in node.children:
            DocumentTree._assign_fresh_ids(child)


def build_document(data: dict[str, Any]) -> DocumentTree:
    """从普通字典构造文档，便于测试和脚本使用。"""
    return DocumentTree(Document.model_validate(data))
