from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class RollSettings:
    """骰子配置"""
    number: int
    sides: int
    modifier: Optional[int] = None
    label: Optional[str] = None

    @classmethod
    def from_str(cls, text: str) -> "RollSettings":
        """從文字解析骰子配置"""
        from utils.parser import parse_roll
        return parse_roll(text)

    def format_modifier(self) -> str:
        if self.modifier is None:
            return ""
        if self.modifier > 0:
            return f" + {self.modifier}"
        return f" - {-self.modifier}"

    def format_parameters(self) -> str:
        return f"{self.number}d{self.sides}{self.format_modifier()}"

    def __str__(self) -> str:
        return self.format_parameters()

    def to_dict(self, with_label: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "number": self.number,
            "sides": self.sides,
            "modifier": self.modifier,
        }
        if with_label:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RollSettings":
        return cls(
            number=int(data["number"]),
            sides=int(data["sides"]),
            modifier=data.get("modifier"),
            label=data.get("label"),
        )


@dataclass(frozen=True)
class Roll:
    """骰子結果

    結果之間只按 total 比較大小，相等判斷仍比較全部欄位。
    """
    rolls: Tuple[int, ...]
    total: int
    settings: RollSettings

    def __lt__(self, other: "Roll") -> bool:
        return self.total < other.total

    def __le__(self, other: "Roll") -> bool:
        return self.total <= other.total

    def __gt__(self, other: "Roll") -> bool:
        return self.total > other.total

    def __ge__(self, other: "Roll") -> bool:
        return self.total >= other.total

    def to_dict(self, with_label: bool = True) -> Dict[str, Any]:
        return {
            "rolls": list(self.rolls),
            "total": self.total,
            "settings": self.settings.to_dict(with_label=with_label),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Roll":
        return cls(
            rolls=tuple(int(r) for r in data["rolls"]),
            total=int(data["total"]),
            settings=RollSettings.from_dict(data["settings"]),
        )


class RollType(Enum):
    """擲骰模式"""
    STRAIGHT = "straight"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class RollResults:
    """一次擲骰請求的完整結果（一次或兩次嘗試）"""
    roll_type: RollType
    try_one: Roll
    try_two: Optional[Roll]
    settings: RollSettings

    def __post_init__(self):
        if self.roll_type is RollType.STRAIGHT and self.try_two is not None:
            raise ValueError("Straight rolls have exactly one attempt")
        if self.roll_type is not RollType.STRAIGHT and self.try_two is None:
            raise ValueError(f"{self.roll_type} rolls need two attempts")

    def results_index(self) -> int:
        """被採用的嘗試編號（1 或 2），平手時取第一次"""
        if self.roll_type is RollType.ADVANTAGE:
            return 2 if self.try_two > self.try_one else 1
        if self.roll_type is RollType.DISADVANTAGE:
            return 2 if self.try_two < self.try_one else 1
        return 1

    def result(self) -> Roll:
        """被採用的結果"""
        return self.try_two if self.results_index() == 2 else self.try_one

    def attempts(self) -> Tuple[Roll, ...]:
        if self.try_two is None:
            return (self.try_one,)
        return (self.try_one, self.try_two)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roll_type": self.roll_type.value,
            "try_one": self.try_one.to_dict(),
            "try_two": self.try_two.to_dict() if self.try_two else None,
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RollResults":
        try_two = data.get("try_two")
        return cls(
            roll_type=RollType(data["roll_type"]),
            try_one=Roll.from_dict(data["try_one"]),
            try_two=Roll.from_dict(try_two) if try_two else None,
            settings=RollSettings.from_dict(data["settings"]),
        )
