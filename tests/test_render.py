"""Unit tests for roll display and data output."""

import re

import pytest

from models.types import Roll, RollResults, RollSettings, RollType
from utils.render import (
    DISCORD_MARKUP,
    PLAIN_MARKUP,
    DisplayConfig,
    fit_display,
    format_results,
    render_roll,
    roll_record,
)


def straight(settings: RollSettings, *rolls: int) -> RollResults:
    roll = Roll(rolls=rolls, total=sum(rolls) + (settings.modifier or 0), settings=settings)
    return RollResults(RollType.STRAIGHT, roll, None, settings)


def paired(roll_type: RollType, settings: RollSettings, one, two) -> RollResults:
    modifier = settings.modifier or 0
    return RollResults(
        roll_type,
        Roll(rolls=tuple(one), total=sum(one) + modifier, settings=settings),
        Roll(rolls=tuple(two), total=sum(two) + modifier, settings=settings),
        settings,
    )


def inner(line: str) -> str:
    return re.search(r"\((.*)\)", line).group(1)


class TestDisplay:
    def test_straight(self) -> None:
        results = straight(RollSettings(number=2, sides=6, modifier=3), 2, 5)
        assert render_roll(results).text == (
            "Parameters: 2d6 + 3\n"
            "Roll: (2 + 5) + 3\n"
            "Your final roll is: 🎲 <b>10</b> 🎲"
        )

    def test_negative_modifier(self) -> None:
        results = straight(RollSettings(number=1, sides=20, modifier=-2), 7)
        text = render_roll(results).text
        assert "Parameters: 1d20 - 2" in text
        assert "Roll: (7) - 2" in text
        assert "<b>5</b>" in text

    def test_no_modifier(self) -> None:
        text = render_roll(straight(RollSettings(number=1, sides=20), 11)).text
        assert text.splitlines()[1] == "Roll: (11)"

    def test_advantage(self) -> None:
        results = paired(RollType.ADVANTAGE, RollSettings(number=1, sides=20, modifier=1), [4], [12])
        assert render_roll(results).text == (
            "Parameters: 1d20 + 1 with <u>Advantage</u>\n"
            "<s>Attempt one: (4) + 1</s>\n"
            "Attempt two: (12) + 1\n"
            "Your final roll is: 🎲 <b>13</b> 🎲"
        )

    def test_disadvantage_discord_markup(self) -> None:
        results = paired(RollType.DISADVANTAGE, RollSettings(number=2, sides=6), [1, 2], [6, 6])
        assert render_roll(results, markup=DISCORD_MARKUP).text == (
            "Parameters: 2d6 with __Disadvantage__\n"
            "Attempt one: (1 + 2)\n"
            "~~Attempt two: (6 + 6)~~\n"
            "Your final roll is: 🎲 **3** 🎲"
        )

    def test_tie_strikes_second_attempt(self) -> None:
        results = paired(RollType.ADVANTAGE, RollSettings(number=2, sides=10), [4, 6], [7, 3])
        lines = render_roll(results).text.splitlines()
        assert lines[1] == "Attempt one: (4 + 6)"
        assert lines[2] == "<s>Attempt two: (7 + 3)</s>"

    def test_plain_markup(self) -> None:
        text = render_roll(straight(RollSettings(number=1, sides=4), 3), markup=PLAIN_MARKUP).text
        assert text.splitlines()[-1] == "Your final roll is: 🎲 3 🎲"


class TestTruncation:
    def test_single_attempt_budget(self) -> None:
        results = straight(RollSettings(number=2000, sides=9), *([9] * 2000))
        joined = format_results(results.try_one)
        assert len(joined) > 4000

        line = render_roll(results).text.splitlines()[1]
        assert inner(line) == joined[:4000] + "..."
        assert len(inner(line)) == 4003

    def test_dual_attempt_budget(self) -> None:
        settings = RollSettings(number=1000, sides=9, modifier=2)
        results = paired(RollType.DISADVANTAGE, settings, [9] * 1000, [8] * 1000)
        lines = render_roll(results).text.splitlines()
        for line, roll in zip(lines[1:3], results.attempts()):
            assert len(inner(line)) == 2003
            assert inner(line) == format_results(roll)[:2000] + "..."
            assert line.endswith(") + 2") or line.endswith(") + 2</s>")

    def test_short_results_untouched(self) -> None:
        line = render_roll(straight(RollSettings(number=3, sides=6), 1, 2, 3)).text.splitlines()[1]
        assert "..." not in line

    def test_exact_budget_untouched(self) -> None:
        results = straight(RollSettings(number=3, sides=6), 1, 2, 3)
        line = render_roll(results, DisplayConfig(single_truncate=9)).text.splitlines()[1]
        assert line == "Roll: (1 + 2 + 3)"

    def test_custom_budget(self) -> None:
        results = straight(RollSettings(number=3, sides=6), 1, 2, 3)
        line = render_roll(results, DisplayConfig(single_truncate=5)).text.splitlines()[1]
        assert line == "Roll: (1 + 2...)"


class TestFitDisplay:
    @pytest.mark.parametrize("roll_type", [RollType.ADVANTAGE, RollType.DISADVANTAGE])
    def test_two_attempts_fit_limit(self, roll_type: RollType) -> None:
        settings = RollSettings(number=9999, sides=9999, modifier=9999)
        results = paired(roll_type, settings, [9999] * 9999, [1000] * 9999)
        display = fit_display(results, 4096, DisplayConfig(), DISCORD_MARKUP)

        assert display.double_truncate < 2000
        text = render_roll(results, display, DISCORD_MARKUP).text
        assert len(text) <= 4096
        assert len(render_roll(results, DisplayConfig(), DISCORD_MARKUP).text) > 4096

    def test_single_attempt_fits_limit(self) -> None:
        results = straight(RollSettings(number=9999, sides=9999, modifier=-9999), *([9999] * 9999))
        display = fit_display(results, 4096, DisplayConfig(), DISCORD_MARKUP)
        assert len(render_roll(results, display, DISCORD_MARKUP).text) <= 4096

    def test_smaller_budgets_are_kept(self) -> None:
        results = straight(RollSettings(number=3, sides=6), 1, 2, 3)
        assert fit_display(results, 4096, DisplayConfig(10, 5)) == DisplayConfig(10, 5)


class TestRecord:
    def test_record_only_when_asked(self) -> None:
        results = straight(RollSettings(number=1, sides=20), 4)
        assert render_roll(results).record is None
        assert render_roll(results, with_record=True).record == results.to_dict()

    def test_legacy_view_is_the_winning_roll(self) -> None:
        settings = RollSettings(number=1, sides=20, modifier=1, label="Stealth")
        results = paired(RollType.ADVANTAGE, settings, [4], [12])
        assert roll_record(results, view="legacy") == {
            "rolls": [12],
            "total": 13,
            "settings": {"number": 1, "sides": 20, "modifier": 1},
        }

    def test_session_view(self) -> None:
        settings = RollSettings(number=1, sides=20, label="Stealth")
        record = roll_record(paired(RollType.ADVANTAGE, settings, [4], [12]))
        assert record["roll_type"] == "advantage"
        assert record["try_one"]["rolls"] == [4]
        assert record["try_two"]["total"] == 12
        assert record["settings"]["label"] == "Stealth"

    def test_record_is_never_truncated(self) -> None:
        results = straight(RollSettings(number=2000, sides=9), *([9] * 2000))
        record = render_roll(results, DisplayConfig(single_truncate=10), with_record=True).record
        assert len(record["try_one"]["rolls"]) == 2000

    def test_unknown_view(self) -> None:
        with pytest.raises(ValueError):
            roll_record(straight(RollSettings(number=1, sides=4), 1), view="full")
