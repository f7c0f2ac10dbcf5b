# tests/unit/test_typography.py
"""针对 `trans_canvas.typography` 模块的单元测试。"""

from collections import Counter

import pytest

from tests.helpers.factories import (
    PINGFANG_REGULAR,
    PINGFANG_SEMIBOLD,
    SF_PRO_SEMIBOLD,
)
from trans_canvas.core.types import DeviceClass, FontName, Language
from trans_canvas.typography import (
    STYLE_TABLE,
    find_style_record,
    resolve_font,
    resolve_style_key,
)


@pytest.mark.parametrize(
    "font, size, line_height, language, device, expected",
    [
        (PINGFANG_SEMIBOLD, 24, 36, Language.ZH, DeviceClass.PC, "84b11a3514fcc6331fd7b22faaf6b0e1e479a60c"),
        (PINGFANG_REGULAR, 12, 20, Language.EN, DeviceClass.PC, "2d7121c34523ead5779a21d8ccdfb215b5c10ac3"),
        # 字体族不参与匹配
        (SF_PRO_SEMIBOLD, 30, 46, Language.ZH, DeviceClass.PC, "baace18851d4410b290e76e4030a6c43894015b7"),
        (PINGFANG_REGULAR, 16, 24, Language.ZH, DeviceClass.MOBILE, "a18a512f0c97944421691f6764efd4345d417fc6"),
        (FontName(family="PingFang SC", style="Medium"), 14, 22, Language.EN, DeviceClass.PC, "effac6f1285c0efcbcdfd9fac1295bc4fbcf82bb"),
    ],
)
def test_resolve_style_key_hits(
    font: FontName,
    size: float,
    line_height: float,
    language: Language,
    device: DeviceClass,
    expected: str,
) -> None:
    assert resolve_style_key(font, size, line_height, language, device) == expected


@pytest.mark.parametrize(
    "font, size, line_height, language, device",
    [
        # 移动端没有 18/28 的中文样式，不会回退到 PC
        (PINGFANG_REGULAR, 18, 28, Language.ZH, DeviceClass.MOBILE),
        (FontName(family="", style=""), 0, 0, Language.EN, DeviceClass.PC),
        (FontName(family="NonExistent", style="NonExistent"), 16, 24, Language.EN, DeviceClass.MOBILE),
        (None, 16, 24, Language.EN, DeviceClass.PC),
        (PINGFANG_REGULAR, 16, None, Language.EN, DeviceClass.PC),
        (PINGFANG_REGULAR, -16, 24, Language.EN, DeviceClass.PC),
        (PINGFANG_REGULAR, 16, 24, "fr", DeviceClass.PC),
        (PINGFANG_REGULAR, 16, 24, Language.EN, "tablet"),
    ],
)
def test_resolve_style_key_misses_return_empty_string(
    font: FontName | None,
    size: float | None,
    line_height: float | None,
    language: object,
    device: object,
) -> None:
    assert resolve_style_key(font, size, line_height, language, device) == ""  # type: ignore[arg-type]
    assert resolve_font(font, size, line_height, language, device) is None  # type: ignore[arg-type]


def test_string_language_and_device_are_accepted() -> None:
    key = resolve_style_key(PINGFANG_SEMIBOLD, 24, 36, "zh", "pc")
    assert key == "84b11a3514fcc6331fd7b22faaf6b0e1e479a60c"


def test_resolve_font_returns_canonical_font_of_target_language() -> None:
    """中文字体的节点翻译成英文后，应映射到英文行的规范字体。"""
    font = resolve_font(PINGFANG_SEMIBOLD, 24, 36, Language.EN, DeviceClass.PC)
    assert font == FontName(family="SF Pro Text", style="Semibold")


def test_table_row_counts() -> None:
    counts = Counter((r.device_class, r.language) for r in STYLE_TABLE)
    assert counts[(DeviceClass.PC, Language.ZH)] == 12
    assert counts[(DeviceClass.PC, Language.EN)] == 12
    assert counts[(DeviceClass.MOBILE, Language.ZH)] == 13
    assert counts[(DeviceClass.MOBILE, Language.EN)] == 13


def test_match_keys_are_unique() -> None:
    keys = [record.match_key for record in STYLE_TABLE]
    assert len(keys) == len(set(keys))


def test_style_keys_are_unique_sha1_like() -> None:
    style_keys = [record.style_key for record in STYLE_TABLE]
    assert len(style_keys) == len(set(style_keys))
    assert all(len(key) == 40 for key in style_keys)


def test_every_row_can_be_found_by_its_own_attributes() -> None:
    for record in STYLE_TABLE:
        found = find_style_record(
            record.font,
            record.font_size,
            record.line_height,
            record.language,
            record.device_class,
        )
        assert found == record
