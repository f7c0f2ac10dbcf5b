# tests/unit/test_gate.py
"""针对 `trans_canvas.gate` 模块的单元测试。"""

import pytest

from trans_canvas.core.types import Language
from trans_canvas.gate import needs_polishing, needs_translation


@pytest.mark.parametrize(
    "content, target, expected",
    [
        ("你好", Language.EN, True),
        ("Hello 世界", Language.EN, True),
        ("Hello", Language.EN, False),
        ("2022/02/02", Language.EN, False),
        ("Hello", Language.ZH, True),
        ("你好", Language.ZH, False),
        ("123 ¥", Language.ZH, False),
        ("", Language.EN, False),
    ],
)
def test_needs_translation(content: str, target: Language, expected: bool) -> None:
    assert needs_translation(content, target) is expected


@pytest.mark.parametrize(
    "content, expected",
    [
        ("", False),
        ("Hello", False),
        ("你好", False),
        ("Hello world, this is a test", True),
        ("你好，世界，这是一个测试", True),
        ("Hello 你好 world", False),
        ("Hello 你好世界 world", True),
    ],
)
def test_needs_polishing(content: str, expected: bool) -> None:
    assert needs_polishing(content) is expected
