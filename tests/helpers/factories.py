# tests/helpers/factories.py
"""
提供用于创建一致、可预测的测试数据的工厂函数和测试替身。
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from trans_canvas.core.types import FontName, Language, ProviderKind
from trans_canvas.document import Document, DocumentTree, SceneNode
from trans_canvas.engines.base import BaseTranslationEngine

PINGFANG_SEMIBOLD = FontName(family="PingFang SC", style="Semibold")
PINGFANG_REGULAR = FontName(family="PingFang SC", style="Regular")
SF_PRO_SEMIBOLD = FontName(family="SF Pro Text", style="Semibold")
SF_PRO_REGULAR = FontName(family="SF Pro Text", style="Regular")


def text_node(
    node_id: str,
    characters: str,
    *,
    name: str = "",
    font: FontName | None = PINGFANG_SEMIBOLD,
    font_size: float | None = 24,
    line_height: float | None = 36,
) -> SceneNode:
    """创建一个带排版属性的文本节点。"""
    return SceneNode(
        id=node_id,
        name=name or f"text-{node_id}",
        type="TEXT",
        characters=characters,
        fonts=[font] if font else [],
        font_size=font_size,
        line_height=line_height,
    )


def frame_node(
    node_id: str,
    children: list[SceneNode],
    *,
    name: str = "",
    x: float = 0.0,
    y: float = 0.0,
    width: float = 100.0,
) -> SceneNode:
    return SceneNode(
        id=node_id,
        name=name or f"frame-{node_id}",
        type="FRAME",
        x=x,
        y=y,
        width=width,
        children=children,
    )


def create_sample_tree(select: list[str] | None = None) -> DocumentTree:
    """
    创建一个标准的示例文档::

        frame-1 (x=10, width=200)
          ├── t1 "你好世界" (Dialog-title)
          ├── group-1
          │     └── t2 "Hello"
          └── t3 "按钮" (14/22 Regular)
        empty-frame (没有子节点)
    """
    nodes = [
        frame_node(
            "frame-1",
            [
                text_node("t1", "你好世界", name="Dialog-title"),
                frame_node("group-1", [text_node("t2", "Hello")]),
                text_node(
                    "t3",
                    "按钮",
                    font=PINGFANG_REGULAR,
                    font_size=14,
                    line_height=22,
                ),
            ],
            x=10,
            y=20,
            width=200,
        ),
        frame_node("empty-frame", []),
    ]
    return DocumentTree(
        Document(nodes=nodes, selection=select if select is not None else ["frame-1"])
    )


class StubEngineConfig(BaseModel):
    translations: dict[str, str] = {}
    failures: list[str] = []


class StubEngine(BaseTranslationEngine[StubEngineConfig]):
    """按预设映射翻译的逐条引擎；未知文本返回带前缀的原文。"""

    CONFIG_MODEL = StubEngineConfig
    KIND = ProviderKind.FREE

    def __init__(self, config: StubEngineConfig | None = None):
        super().__init__(config or StubEngineConfig())
        self.calls: list[tuple[str, Language, Language]] = []
        self.closed = False

    async def atranslate_one(
        self, text: str, target_lang: Language, source_lang: Language
    ) -> str:
        self.calls.append((text, target_lang, source_lang))
        if text in self.config.failures:
            raise RuntimeError(f"boom: {text}")
        return self.config.translations.get(text, f"[{target_lang.value}] {text}")

    async def close(self) -> None:
        self.closed = True
        await super().close()


def stub_engine_factory(engine: StubEngine) -> Any:
    """返回一个总是交出同一个 StubEngine 的工厂，并记录调用参数。"""
    calls: list[tuple[Any, ...]] = []

    def factory(kind: ProviderKind, config: Any, **kwargs: Any) -> StubEngine:
        calls.append((kind, config, kwargs))
        return engine

    factory.calls = calls  # type: ignore[attr-defined]
    return factory
