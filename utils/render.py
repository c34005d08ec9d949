"""
擲骰結果的顯示與資料輸出

顯示文字受聊天平台的訊息長度限制，骰子列表會按 DisplayConfig 截斷；
資料輸出（record）則永遠完整。
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from models.types import Roll, RollResults

ELLIPSIS = "..."
ATTEMPT_NAMES = ("one", "two")


@dataclass(frozen=True)
class DisplayConfig:
    """顯示長度上限（字元）"""
    single_truncate: int = 4000  # 只有一次嘗試
    double_truncate: int = 2000  # 兩次嘗試時，每次各自的上限


@dataclass(frozen=True)
class Markup:
    """強調標記，{} 為被包住的文字"""
    bold: str
    strike: str
    underline: str


HTML_MARKUP = Markup(bold="<b>{}</b>", strike="<s>{}</s>", underline="<u>{}</u>")
DISCORD_MARKUP = Markup(bold="**{}**", strike="~~{}~~", underline="__{}__")
PLAIN_MARKUP = Markup(bold="{}", strike="{}", underline="{}")


@dataclass(frozen=True)
class RenderedRoll:
    text: str
    record: Optional[Dict[str, Any]] = None


def format_results(roll: Roll) -> str:
    return " + ".join(str(r) for r in roll.rolls)


def truncate(text: str, limit: Optional[int]) -> str:
    if limit is not None and len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def format_roll(roll: Roll, limit: Optional[int] = None) -> str:
    """格式化單次嘗試，例如 "(3 + 5) + 2" """
    results = truncate(format_results(roll), limit)
    return f"({results}){roll.settings.format_modifier()}"


def format_final(total: int, markup: Markup) -> str:
    return f"Your final roll is: 🎲 {markup.bold.format(total)} 🎲"


def format_roll_results(results: RollResults, display: Optional[DisplayConfig] = None,
                        markup: Markup = HTML_MARKUP) -> str:
    """格式化整個擲骰請求的顯示文字"""
    display = display or DisplayConfig()
    settings = results.settings

    if results.try_two is None:
        lines = [
            f"Parameters: {settings}",
            f"Roll: {format_roll(results.try_one, display.single_truncate)}",
        ]
    else:
        index = results.results_index()
        lines = [f"Parameters: {settings} with {markup.underline.format(results.roll_type)}"]
        for number, (name, roll) in enumerate(zip(ATTEMPT_NAMES, results.attempts()), start=1):
            line = f"Attempt {name}: {format_roll(roll, display.double_truncate)}"
            if number != index:
                line = markup.strike.format(line)
            lines.append(line)

    lines.append(format_final(results.result().total, markup))
    return "\n".join(lines)


def fit_display(results: RollResults, limit: int, display: Optional[DisplayConfig] = None,
                markup: Markup = HTML_MARKUP) -> DisplayConfig:
    """
    縮小截斷上限，讓整段顯示文字不超過 limit 個字元

    以上限 0 渲染一次即可得到固定部分的長度（每次嘗試的 "..." 已包含在內）。
    """
    display = display or DisplayConfig()
    bare = format_roll_results(results, DisplayConfig(single_truncate=0, double_truncate=0), markup)
    room = max(limit - len(bare), 0)
    return DisplayConfig(
        single_truncate=min(display.single_truncate, room),
        double_truncate=min(display.double_truncate, room // 2),
    )


def roll_record(results: RollResults, view: str = "session") -> Dict[str, Any]:
    """
    可序列化的結果

    view="legacy" 只輸出採用的那次結果（rolls/total/settings，無 label），
    view="session" 輸出整個請求。
    """
    if view == "legacy":
        return results.result().to_dict(with_label=False)
    if view == "session":
        return results.to_dict()
    raise ValueError(f"Unknown record view: {view}")


def dump_record(record: Dict[str, Any]) -> str:
    return json.dumps(record, ensure_ascii=False, indent=2)


def render_roll(results: RollResults, display: Optional[DisplayConfig] = None,
                markup: Markup = HTML_MARKUP, with_record: bool = False,
                view: str = "session") -> RenderedRoll:
    """顯示文字，加上（可選的）資料輸出"""
    text = format_roll_results(results, display, markup)
    record = roll_record(results, view) if with_record else None
    return RenderedRoll(text=text, record=record)
