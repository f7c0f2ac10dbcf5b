# trans_canvas/typography.py
"""
本模块包含设计规范的排版表，以及根据字体、字号、行高、语言和设备类型
查找样式键与规范字体的解析函数。

匹配只比较字重名称、字号、行高、语言和设备类型五个字段，且必须完全相等；
不做模糊匹配，也不跨语言或跨设备替换。查找是“尽力而为”的标注：
任何无效输入都返回空结果而不是抛出异常。
"""

from __future__ import annotations

from typing import Any

import structlog

from trans_canvas.core.types import DeviceClass, FontName, Language, StyleRecord

logger = structlog.get_logger(__name__)

_PINGFANG = "PingFang SC"
_SF_PRO = "SF Pro Text"

# (名称, 字体族, 字重, 字号, 行高, 语言, 设备, 样式键)
_TABLE_ROWS: tuple[tuple[str, str, str, float, float, Language, DeviceClass, str], ...] = (
    ("特大标题_PC_ZH", _PINGFANG, "Semibold", 30, 46, Language.ZH, DeviceClass.PC, "baace18851d4410b290e76e4030a6c43894015b7"),
    ("一级标题_PC_ZH", _PINGFANG, "Semibold", 24, 36, Language.ZH, DeviceClass.PC, "84b11a3514fcc6331fd7b22faaf6b0e1e479a60c"),
    ("二级标题_PC_ZH", _PINGFANG, "Medium", 20, 30, Language.ZH, DeviceClass.PC, "815d93ed9bfd4457154e8938482e258c29ef97dd"),
    ("三级标题_PC_ZH", _PINGFANG, "Medium", 18, 28, Language.ZH, DeviceClass.PC, "357161d8af91a6c343195f3a85e437bd1ae7428a"),
    ("四级标题_PC_ZH", _PINGFANG, "Medium", 16, 24, Language.ZH, DeviceClass.PC, "dc094b69f79fb32793a63a94ebfa0bee11c680ee"),
    ("五级标题_PC_ZH", _PINGFANG, "Regular", 16, 24, Language.ZH, DeviceClass.PC, "b969aea446b6cdb04d9a22f74016d84804bd04ea"),
    ("辅助标题_PC_ZH", _PINGFANG, "Medium", 14, 22, Language.ZH, DeviceClass.PC, "633417d53d1f6aaf5a25836c3dfbb7865cc26901"),
    ("正文_PC_ZH", _PINGFANG, "Regular", 14, 22, Language.ZH, DeviceClass.PC, "a619584c8b84081754e0d0548cc02918bb2608ae"),
    ("正文辅助_PC_ZH", _PINGFANG, "Regular", 12, 20, Language.ZH, DeviceClass.PC, "800d06fe6c96efcf63c147c3908ac723663ef12a"),
    ("辅助_PC_ZH", _PINGFANG, "Medium", 12, 20, Language.ZH, DeviceClass.PC, "08d5d98e3b3457af595d34e5701aa5f15b7d6bdf"),
    ("小辅助_PC_ZH", _PINGFANG, "Medium", 10, 16, Language.ZH, DeviceClass.PC, "a468d88d9821a71292ff1248f343718729f385ee"),
    ("最小辅助_PC_ZH", _PINGFANG, "Regular", 10, 16, Language.ZH, DeviceClass.PC, "3e7b95748455839143dce3a39f2c08ce24cca648"),

    ("Title-0_PC_EN", _SF_PRO, "Semibold", 30, 46, Language.EN, DeviceClass.PC, "c94c00e250f2f32a1e99b8a4fb5f847d980c93f3"),
    ("Title-1_PC_EN", _SF_PRO, "Semibold", 24, 36, Language.EN, DeviceClass.PC, "493f65cc7355e1dfdb902d3ae2bb21931d898e9c"),
    ("Title-2_PC_EN", _SF_PRO, "Medium", 20, 30, Language.EN, DeviceClass.PC, "c272b336db56ff1ee5e67415b197fcdce26bf8e5"),
    ("Title-3_PC_EN", _SF_PRO, "Medium", 18, 28, Language.EN, DeviceClass.PC, "f5ec4aa020fa8adcd2dd3d3422d75a0f40b9a602"),
    ("Title-4_PC_EN", _SF_PRO, "Medium", 16, 24, Language.EN, DeviceClass.PC, "fef0d8335452173953a6fe8309175fddb989c0d1"),
    ("Title-5_PC_EN", _SF_PRO, "Regular", 16, 24, Language.EN, DeviceClass.PC, "2fb9fc4d80b17fbe299d8fad71ade84f0c8853ca"),
    ("Headline_PC_EN", _SF_PRO, "Medium", 14, 22, Language.EN, DeviceClass.PC, "effac6f1285c0efcbcdfd9fac1295bc4fbcf82bb"),
    ("Body-0_PC_EN", _SF_PRO, "Regular", 14, 22, Language.EN, DeviceClass.PC, "bd0fe524af75554cb26f336c6916c3100be75f2d"),
    ("Body-2_PC_EN", _SF_PRO, "Regular", 12, 20, Language.EN, DeviceClass.PC, "2d7121c34523ead5779a21d8ccdfb215b5c10ac3"),
    ("Caption-0_PC_EN", _SF_PRO, "Medium", 12, 20, Language.EN, DeviceClass.PC, "3008f7356e60db42a85d8bcaf3be8674d36dc88e"),
    ("Caption-1_PC_EN", _SF_PRO, "Medium", 10, 16, Language.EN, DeviceClass.PC, "74933d4d09d0c53610005529b169ce645707cb85"),
    ("Caption-3_PC_EN", _SF_PRO, "Regular", 10, 16, Language.EN, DeviceClass.PC, "3aa3ee2538536526e5083d46e57a82552dadde45"),

    ("特大标题-0_Mobile_ZH", _PINGFANG, "Semibold", 26, 40, Language.ZH, DeviceClass.MOBILE, "f153b4fdf50677c79e07bd3530a42c54441049b2"),
    ("一级标题_Mobile_ZH", _PINGFANG, "Semibold", 24, 36, Language.ZH, DeviceClass.MOBILE, "9ce249b5c7bfadde65c7352a06027589f2456ac5"),
    ("二级标题_Mobile_ZH", _PINGFANG, "Medium", 20, 30, Language.ZH, DeviceClass.MOBILE, "8a6546c5ff33b92f0fa7e4d77d3c15e2965f0531"),
    ("三级标题_Mobile_ZH", _PINGFANG, "Medium", 17, 26, Language.ZH, DeviceClass.MOBILE, "26f3c1cf6108f8877f9bc366afe9679ca3171402"),
    ("四级标题_Mobile_ZH", _PINGFANG, "Regular", 17, 26, Language.ZH, DeviceClass.MOBILE, "34c5748b0a417539a6f823bacd0b3811d001d505"),
    ("辅助标题_Mobile_ZH", _PINGFANG, "Medium", 16, 24, Language.ZH, DeviceClass.MOBILE, "addf9e38fdc0939b4f1b6eed62273878e58119d6"),
    ("正文_Mobile_ZH", _PINGFANG, "Regular", 16, 24, Language.ZH, DeviceClass.MOBILE, "a18a512f0c97944421691f6764efd4345d417fc6"),
    ("正文大辅助_Mobile_ZH", _PINGFANG, "Medium", 14, 22, Language.ZH, DeviceClass.MOBILE, "ea03cc6a6e05ef1fee95779d53a5be1df8258b37"),
    ("正文辅助_Mobile_ZH", _PINGFANG, "Regular", 14, 22, Language.ZH, DeviceClass.MOBILE, "67d7fe3b961232098eea36d351d395aaa691a9eb"),
    ("辅助_Mobile_ZH", _PINGFANG, "Medium", 12, 20, Language.ZH, DeviceClass.MOBILE, "336fc9d0dae54fdfccdd2e3120b61b80da815e3a"),
    ("小辅助_Mobile_ZH", _PINGFANG, "Regular", 12, 20, Language.ZH, DeviceClass.MOBILE, "839429252dacd1cda2ef4c9ed8cb5d1b26c16480"),
    ("次小辅助_Mobile_ZH", _PINGFANG, "Medium", 10, 16, Language.ZH, DeviceClass.MOBILE, "739d6a80237c673794a7a90e83c3218ea1915f0a"),
    ("最小辅助_Mobile_ZH", _PINGFANG, "Regular", 10, 16, Language.ZH, DeviceClass.MOBILE, "a1b3294ec95bdb06f55ca9abbfe62f699a6b1f44"),

    ("Title-0_Mobile_EN", _SF_PRO, "Semibold", 26, 40, Language.EN, DeviceClass.MOBILE, "eda380179c68f96c0731cf362eb923ad13b2ca73"),
    ("Title-1_Mobile_EN", _SF_PRO, "Semibold", 24, 36, Language.EN, DeviceClass.MOBILE, "9ae457259718e71a80d0a4668b83523cd29163e1"),
    ("Title-2_Mobile_EN", _SF_PRO, "Medium", 20, 30, Language.EN, DeviceClass.MOBILE, "1611eaa6df3cb6c9327d9725d0d2cc51ad52fd7a"),
    ("Title-3_Mobile_EN", _SF_PRO, "Medium", 17, 26, Language.EN, DeviceClass.MOBILE, "5763f3c5b9edba982586554e533ab1da03c54d4f"),
    ("Title-4_Mobile_EN", _SF_PRO, "Regular", 17, 26, Language.EN, DeviceClass.MOBILE, "2372fe6023fdd3d90810b615a0b3b8bf0f4522b6"),
    ("Headline_Mobile_EN", _SF_PRO, "Medium", 16, 24, Language.EN, DeviceClass.MOBILE, "421c19631f990150c2a67f6ef250d894d7883f57"),
    ("Body-0_Mobile_EN", _SF_PRO, "Regular", 16, 24, Language.EN, DeviceClass.MOBILE, "7b3e6e2a112344f4c9df622c3b074b579076d4ec"),
    ("Body-1_Mobile_EN", _SF_PRO, "Medium", 14, 22, Language.EN, DeviceClass.MOBILE, "036d8bc9d371ea10c901ddbb0e31fc663a2a119b"),
    ("Body-2_Mobile_EN", _SF_PRO, "Regular", 14, 22, Language.EN, DeviceClass.MOBILE, "330fe08996401272f4eedaa3ae6d40b2124d98ee"),
    ("Caption-0_Mobile_EN", _SF_PRO, "Medium", 12, 20, Language.EN, DeviceClass.MOBILE, "89101c98c1679dc429e55b76cca794fe5d7efa30"),
    ("Caption-1_Mobile_EN", _SF_PRO, "Regular", 12, 20, Language.EN, DeviceClass.MOBILE, "a0cbea28dc1f1a9978910d3312a289087883a6a1"),
    ("Caption-2_Mobile_EN", _SF_PRO, "Medium", 10, 16, Language.EN, DeviceClass.MOBILE, "bd8f949cf3d693a949bae0f5cbb7d57b91461c13"),
    ("Caption-3_Mobile_EN", _SF_PRO, "Regular", 10, 16, Language.EN, DeviceClass.MOBILE, "8c1ee07fd1c8cfac51946eeac84ed18e61e7cb19"),
)

STYLE_TABLE: tuple[StyleRecord, ...] = tuple(
    StyleRecord(
        name=name,
        font=FontName(family=family, style=style),
        font_size=size,
        line_height=line_height,
        language=language,
        device_class=device_class,
        style_key=style_key,
    )
    for name, family, style, size, line_height, language, device_class, style_key in _TABLE_ROWS
)

_STYLE_INDEX: dict[tuple[str, float, float, Language, DeviceClass], StyleRecord] = {}
for _record in STYLE_TABLE:
    # 与线性扫描语义一致：重复键时保留表中靠前的一行
    _STYLE_INDEX.setdefault(_record.match_key, _record)


def _coerce_enum(enum_cls: Any, value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        return None


def find_style_record(
    font: FontName | None,
    font_size: float | None,
    line_height: float | None,
    language: Language | str | None,
    device_class: DeviceClass | str | None,
) -> StyleRecord | None:
    """在排版表中查找完全匹配的一行，找不到或参数无效时返回 None。"""
    if font is None or not font.style:
        return None
    if not font_size or font_size <= 0 or not line_height or line_height <= 0:
        return None
    lang = _coerce_enum(Language, language)
    device = _coerce_enum(DeviceClass, device_class)
    if lang is None or device is None:
        return None
    return _STYLE_INDEX.get((font.style, font_size, line_height, lang, device))


def resolve_style_key(
    font: FontName | None,
    font_size: float | None,
    line_height: float | None,
    language: Language | str | None,
    device_class: DeviceClass | str | None,
) -> str:
    """返回匹配行的样式键；未命中时返回空字符串。"""
    record = find_style_record(font, font_size, line_height, language, device_class)
    return record.style_key if record else ""


def resolve_font(
    font: FontName | None,
    font_size: float | None,
    line_height: float | None,
    language: Language | str | None,
    device_class: DeviceClass | str | None,
) -> FontName | None:
    """返回目标语言与设备下的规范字体；未命中时返回 None。"""
    record = find_style_record(font, font_size, line_height, language, device_class)
    if record is None:
        logger.debug(
            "排版表中没有匹配的样式。",
            font=font,
            font_size=font_size,
            line_height=line_height,
            language=language,
            device_class=device_class,
        )
        return None
    return record.font
