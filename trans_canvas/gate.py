# trans_canvas/gate.py
"""本模块提供判断文本是否需要翻译或润色的纯函数。"""

import re

from trans_canvas.core.types import Language

_CJK_PATTERN = re.compile(r"[\u4e00-\u9fff]")
_LATIN_PATTERN = re.compile(r"[a-zA-Z]")

_ENGLISH_WORD_PATTERN = re.compile(r"\b[a-zA-Z]+\b", re.ASCII)
_CJK_CHAR_PATTERN = re.compile(r"[\u4e00-\u9fa5]")

POLISH_MIN_TOKENS = 5


def needs_translation(content: str, target_language: Language) -> bool:
    """
    文本中是否仍含有“非目标语言”的字符。

    目标为英文时检测中日韩统一表意文字，其他目标语言检测 ASCII 拉丁字母。
    """
    if not content:
        return False
    if target_language is Language.EN:
        return _CJK_PATTERN.search(content) is not None
    return _LATIN_PATTERN.search(content) is not None


def needs_polishing(content: str) -> bool:
    """英文单词数与汉字数之和超过阈值时才值得润色。"""
    if not content:
        return False
    english_words = len(_ENGLISH_WORD_PATTERN.findall(content))
    cjk_chars = len(_CJK_CHAR_PATTERN.findall(content))
    return english_words + cjk_chars > POLISH_MIN_TOKENS
