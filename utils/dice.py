import random
from typing import Optional

from models.types import Roll, RollResults, RollSettings, RollType


def roll_single_dice(sides: int, rng: Optional[random.Random] = None) -> int:
    """擲單個骰子"""
    return (rng or random).randint(1, sides)


def roll_dice(settings: RollSettings, rng: Optional[random.Random] = None) -> Roll:
    """擲骰子並返回結果，骰子順序即擲出順序"""
    rolls = tuple(roll_single_dice(settings.sides, rng) for _ in range(settings.number))

    total = sum(rolls)
    if settings.modifier is not None:
        total += settings.modifier

    return Roll(rolls=rolls, total=total, settings=settings)


def roll_session(settings: RollSettings, roll_type: RollType,
                 rng: Optional[random.Random] = None) -> RollResults:
    """
    按模式擲骰：普通擲一次，優勢/劣勢各自獨立擲兩次
    """
    try_one = roll_dice(settings, rng)
    try_two = None
    if roll_type is not RollType.STRAIGHT:
        try_two = roll_dice(settings, rng)

    return RollResults(
        roll_type=roll_type,
        try_one=try_one,
        try_two=try_two,
        settings=settings,
    )
