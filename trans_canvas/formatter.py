# trans_canvas/formatter.py
"""
本模块提供翻译结果写回前的本地化文本后处理。

英文目标语言依次执行：日期改写、星期缩写、月份缩写、标题大小写；
随后对所有目标语言执行货币符号替换。所有函数都是纯函数。
"""

import re

from trans_canvas.core.types import Language

_MONTHS_FULL = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS_FULL = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
_MONTHS_ABBR = tuple(month[:3] for month in _MONTHS_FULL)

_DATE_PATTERN = re.compile(r"(\d{4})/(\d{2})/(\d{2})")
# 不区分大小写，标题大小写之后再次格式化时结果不变
_WEEKDAY_PATTERN = re.compile(
    r"\b(" + "|".join(_WEEKDAYS_FULL) + r"), "
    r"(" + "|".join(_MONTHS_FULL + _MONTHS_ABBR) + r") (\d{1,2})\b",
    re.IGNORECASE,
)
_MONTH_PATTERN = re.compile(
    r"\b(" + "|".join(_MONTHS_FULL) + r") (\d{1,2})", re.IGNORECASE
)

TITLE_ROLES: frozenset[str] = frozenset(
    {
        "ForcedCapitalization",
        "我是标题",
        "二级标题",
        "Tab-title",
        "_Avatar-title",
        "Dialog-title",
        "Button-text",
        "Menu__brand-name",
        "MenuItem-label",
        "TabPane-text-selected",
        "TabPane-text",
        "Menu-title",
        "标题文本",
        "ModalView_title",
    }
)
FORCED_CAPITALIZATION_SUFFIX = "_fc"

SKIP_WORDS: frozenset[str] = frozenset(
    {
        "and",
        "or",
        "but",
        "the",
        "a",
        "an",
        "in",
        "on",
        "at",
        "for",
        "to",
        "with",
        "by",
        "of",
        "as",
        "is",
        "are",
        "was",
        "were",
    }
)

_CURRENCY_RULES: dict[Language, tuple[tuple[str, str], ...]] = {
    Language.EN: (("¥", "$"), ("CNY", "USD")),
    Language.ZH: (("$", "¥"), ("USD", "CNY")),
}


def is_title_role(role_hint: str | None) -> bool:
    """节点名称是否表示标题类文本。"""
    if not role_hint:
        return False
    return role_hint in TITLE_ROLES or role_hint.endswith(FORCED_CAPITALIZATION_SUFFIX)


def _rewrite_date(match: re.Match[str]) -> str:
    year, month, day = match.groups()
    month_index = int(month)
    if not 1 <= month_index <= 12:
        return match.group(0)
    return f"{_MONTHS_ABBR[month_index - 1]} {int(day)}, {year}"


def _abbreviate_weekday(match: re.Match[str]) -> str:
    weekday, month, day = match.groups()
    return f"{weekday[:3]}, {month} {day}"


def _abbreviate_month(match: re.Match[str]) -> str:
    month, day = match.groups()
    return f"{month[:3]} {day}"


def _capitalize_word(word: str) -> str:
    # 只改首字母，保留其余字符原样
    return word[:1].upper() + word[1:]


def to_title_case(content: str) -> str:
    """按空格分词后首字母大写，停用词（首词除外）保持原样。"""
    words = content.split(" ")
    return " ".join(
        word if index > 0 and word.lower() in SKIP_WORDS else _capitalize_word(word)
        for index, word in enumerate(words)
    )


def replace_currency(content: str, target_language: Language) -> str:
    for source, target in _CURRENCY_RULES.get(target_language, ()):
        content = content.replace(source, target)
    return content


def format_content(
    content: str, target_language: Language, role_hint: str | None = None
) -> str:
    """
    对译文执行目标语言的格式化规则。

    Args:
        content: 待处理的文本。
        target_language: 目标语言。
        role_hint: 节点名称，用于判断是否需要标题大小写。

    Returns:
        处理后的文本。空字符串原样返回。

    """
    if not content:
        return ""

    if target_language is Language.EN:
        content = _DATE_PATTERN.sub(_rewrite_date, content)
        content = _WEEKDAY_PATTERN.sub(_abbreviate_weekday, content)
        content = _MONTH_PATTERN.sub(_abbreviate_month, content)
        if is_title_role(role_hint):
            content = to_title_case(content)

    return replace_currency(content, target_language)
