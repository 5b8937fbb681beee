"""Complementary home menu suggestions from the day's school lunch."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from .models import MEAL_BREAKFAST, MEAL_DINNER, HomeMenuSuggestion, calendar_day

if TYPE_CHECKING:
    from .store import BaseMenuStore

logger = logging.getLogger(__name__)

# Indicator substrings looked for in the school lunch main dish
FISH = "魚"
MEAT = "肉"
CURRY = "カレー"
CHICKEN = "鶏"
PORK = "豚"


@dataclass(frozen=True)
class SuggestionRule:
    """One row of a rule table. ``indicator=None`` always matches."""

    indicator: str | None
    main_dish: str
    side_dishes: tuple[str, ...]
    reason: str
    soup: str = ""

    def matches(self, school_main_dish: str) -> bool:
        return self.indicator is None or self.indicator in school_main_dish

    def apply(self, suggestion: HomeMenuSuggestion) -> None:
        suggestion.main_dish = self.main_dish
        suggestion.side_dishes = list(self.side_dishes)
        suggestion.soup = self.soup
        suggestion.reason = self.reason


# Checked top to bottom, first match wins. A dish containing several
# indicators (e.g. 魚肉ソーセージ) resolves to the earliest row.
BREAKFAST_RULES: tuple[SuggestionRule, ...] = (
    SuggestionRule(
        FISH,
        "卵焼き",
        ("のり", "みそ汁"),
        "昼食で魚を摂取するため、朝食ではタンパク質として卵を提案",
    ),
    SuggestionRule(
        MEAT,
        "焼き魚（アジ）",
        ("野菜サラダ", "みそ汁"),
        "昼食で肉類を摂取するため、朝食では魚でバランスを取る",
    ),
    SuggestionRule(
        CURRY,
        "納豆",
        ("野菜炒め", "みそ汁"),
        "昼食が重めのカレーのため、朝食は軽めの和食で消化を助ける",
    ),
    SuggestionRule(
        None,
        "焼き鮭",
        ("おひたし", "みそ汁"),
        "栄養バランスを考慮した和食中心の朝食",
    ),
)

DINNER_RULES: tuple[SuggestionRule, ...] = (
    SuggestionRule(
        CHICKEN,
        "魚の煮付け",
        ("野菜の天ぷら", "白米"),
        "昼食で鶏肉を摂取したため、夕食では魚でタンパク質の種類を変える",
        soup="すまし汁",
    ),
    SuggestionRule(
        FISH,
        "豚しゃぶしゃぶ",
        ("温野菜", "白米"),
        "昼食で魚を摂取したため、夕食では豚肉でタンパク質の種類を変える",
        soup="みそ汁",
    ),
    SuggestionRule(
        PORK,
        "鯖の塩焼き",
        ("筑前煮", "白米"),
        "昼食で豚肉を摂取したため、夕食では魚でバランスを取る",
        soup="わかめスープ",
    ),
    SuggestionRule(
        CURRY,
        "鶏の唐揚げ",
        ("キャベツサラダ", "白米"),
        "昼食がスパイシーなカレーのため、夕食は優しい味付けの料理で胃を休める",
        soup="みそ汁",
    ),
    SuggestionRule(
        None,
        "牛肉炒め",
        ("もやし炒め", "白米"),
        "栄養バランスを考慮したボリュームのある夕食",
        soup="中華スープ",
    ),
)

DEFAULT_RULES: dict[str, tuple[SuggestionRule, ...]] = {
    MEAL_BREAKFAST: BREAKFAST_RULES,
    MEAL_DINNER: DINNER_RULES,
}


def match_rule(
    rules: Sequence[SuggestionRule], school_main_dish: str
) -> SuggestionRule | None:
    """Return the first rule whose indicator appears in the main dish."""
    for rule in rules:
        if rule.matches(school_main_dish):
            return rule
    return None


class SuggestionEngine:
    """Suggest a breakfast or dinner that offsets the day's school lunch."""

    def __init__(
        self,
        store: BaseMenuStore,
        rules: dict[str, Sequence[SuggestionRule]] | None = None,
    ) -> None:
        self._store = store
        self._rules = dict(DEFAULT_RULES if rules is None else rules)

    def suggest(self, day: date, meal_type: str) -> HomeMenuSuggestion:
        """Build a suggestion for ``day`` and ``meal_type``.

        Meal types without a rule table are not rejected: the suggestion
        comes back with only date, meal type and lunch reference filled.

        Raises:
            MenuNotFoundError: If no school lunch is stored for the day.
        """
        day = calendar_day(day)
        school_lunch = self._store.lookup(day)

        suggestion = HomeMenuSuggestion(
            date=day,
            meal_type=meal_type,
            school_lunch_ref=school_lunch.main_dish,
        )

        rules = self._rules.get(meal_type)
        if rules is None:
            logger.debug("ルールのない食事タイプです: %r", meal_type)
            return suggestion

        rule = match_rule(rules, school_lunch.main_dish)
        if rule is not None:
            logger.debug(
                "%s: %s → %s (キーワード: %s)",
                meal_type,
                school_lunch.main_dish,
                rule.main_dish,
                rule.indicator or "既定",
            )
            rule.apply(suggestion)
        return suggestion
