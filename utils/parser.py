"""
骰子表達式解析器

語法（忽略任意空白）:
    roll      := number ('d' | 'D') number (modifier)? (label)?
    modifier  := ('+' | '-') number
    number    := 1-4 個數字
    label     := 剩下的文字
"""

import string
from typing import Optional

from models.types import RollSettings
from utils.logger import get_logger

MAX_DIGITS = 4


class RollParseError(ValueError):
    """骰子表達式錯誤的基底類別，fragment 為使用者輸入的片段"""
    template = "Invalid roll format: {}"

    def __init__(self, fragment: str):
        self.fragment = fragment
        super().__init__(self.template.format(fragment))


class InvalidFormat(RollParseError):
    """無法辨識的格式"""


class TooBig(RollParseError):
    """數字超過 4 位"""
    template = "Number too big, at most 4 digits allowed: {}"


class CannotBeZero(RollParseError):
    """骰子數量或面數為零"""
    template = "Number of dices and dice sides cannot be zero: {}"


class _RollParser:
    def __init__(self, text: str):
        self.text = text
        self.fragment = text.strip()
        self.pos = 0

    def peek(self) -> str:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def skip_whitespace(self):
        while self.peek() and self.peek().isspace():
            self.pos += 1

    def number(self) -> int:
        # 數字之間允許空白，例如 "9 9 9 9"
        digits = ""
        while True:
            mark = self.pos
            self.skip_whitespace()
            ch = self.peek()
            if not ch or ch not in string.digits:
                self.pos = mark
                break
            digits += ch
            self.pos += 1
            if len(digits) > MAX_DIGITS:
                raise TooBig(self.fragment)

        if not digits:
            raise InvalidFormat(self.fragment)
        return int(digits)

    def separator(self):
        self.skip_whitespace()
        if self.peek() not in ("d", "D"):
            raise InvalidFormat(self.fragment)
        self.pos += 1

    def modifier(self) -> Optional[int]:
        mark = self.pos
        self.skip_whitespace()
        sign = self.peek()
        if sign not in ("+", "-"):
            self.pos = mark
            return None
        self.pos += 1
        value = self.number()
        if value == 0:
            return None
        return -value if sign == "-" else value

    def label(self) -> Optional[str]:
        rest = self.text[self.pos:].strip()
        self.pos = len(self.text)
        return rest or None

    def parse(self) -> RollSettings:
        number = self.number()
        self.separator()
        sides = self.number()
        modifier = self.modifier()
        label = self.label()

        if number == 0 or sides == 0:
            raise CannotBeZero(self.fragment)

        return RollSettings(number=number, sides=sides, modifier=modifier, label=label)


def parse_roll(text: str) -> RollSettings:
    """
    解析骰子表達式，比如 "2d6+3 Fire damage"

    失敗時拋出 RollParseError 的子類別。
    """
    logger = get_logger()
    logger.debug(f"Parsing input {text!r}")
    try:
        settings = _RollParser(text).parse()
    except RollParseError as e:
        logger.warning(f"無法解析骰子表達式 {text!r}: {e}")
        raise
    logger.debug(f"Parsed {text!r} as {settings!r}")
    return settings
