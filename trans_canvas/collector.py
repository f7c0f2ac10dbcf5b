# trans_canvas/collector.py
"""本模块负责把选中的节点子树展开为扁平的处理单元列表。"""

from collections.abc import Iterable
from typing import Any

import structlog

from trans_canvas.core.interfaces import HostTree
from trans_canvas.core.types import Language, ProcessUnit, ProviderKind
from trans_canvas.gate import needs_translation as text_needs_translation

logger = structlog.get_logger(__name__)


def collect_process_units(
    host: HostTree,
    roots: Iterable[Any],
    needs_translation: bool,
    needs_style_check: bool,
    target_language: Language,
    provider: ProviderKind | None = None,
) -> list[ProcessUnit]:
    """
    按文档顺序深度优先遍历各个根节点，为每个文本节点生成一个处理单元。

    非文本节点递归进入其子节点；没有子节点的非文本节点被跳过。
    单元的 `needs_translation` 同时取决于调用方标志和翻译判定函数。
    """
    units: list[ProcessUnit] = []

    def visit(ref: Any) -> None:
        if host.is_text_node(ref):
            text = host.get_characters(ref)
            units.append(
                ProcessUnit(
                    node_ref=ref,
                    node_id=host.get_node_id(ref),
                    role_hint=host.get_name(ref),
                    source_text=text,
                    target_language=target_language,
                    needs_translation=(
                        needs_translation
                        and text_needs_translation(text, target_language)
                    ),
                    needs_style_check=needs_style_check,
                    translation_provider=provider if needs_translation else None,
                )
            )
            return
        for child in host.get_children(ref):
            visit(child)

    for root in roots:
        visit(root)

    logger.debug(
        "处理单元收集完成。",
        unit_count=len(units),
        to_translate=sum(1 for unit in units if unit.needs_translation),
    )
    return units
