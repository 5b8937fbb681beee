"""Home menu catalog: the dishes suggestions are drawn from."""

from __future__ import annotations

from .models import (
    CATEGORY_DAIRY,
    CATEGORY_FRUITS,
    CATEGORY_GRAINS,
    CATEGORY_PROTEIN,
    CATEGORY_VEGETABLES,
    FOOD_CATEGORIES,
    FoodItem,
)

HOME_MENU_CATALOG: dict[str, list[FoodItem]] = {
    CATEGORY_PROTEIN: [
        FoodItem("焼き鮭", CATEGORY_PROTEIN),
        FoodItem("焼き魚（アジ）", CATEGORY_PROTEIN, season=("夏",)),
        FoodItem("卵焼き", CATEGORY_PROTEIN),
        FoodItem("納豆", CATEGORY_PROTEIN),
        FoodItem("豚しゃぶしゃぶ", CATEGORY_PROTEIN),
        FoodItem("鶏の唐揚げ", CATEGORY_PROTEIN),
        FoodItem("魚の煮付け", CATEGORY_PROTEIN),
        FoodItem("鯖の塩焼き", CATEGORY_PROTEIN, season=("秋", "冬")),
        FoodItem("牛肉炒め", CATEGORY_PROTEIN),
    ],
    CATEGORY_VEGETABLES: [
        FoodItem("野菜サラダ", CATEGORY_VEGETABLES, japanese=False),
        FoodItem("おひたし", CATEGORY_VEGETABLES),
        FoodItem("野菜炒め", CATEGORY_VEGETABLES),
        FoodItem("野菜の天ぷら", CATEGORY_VEGETABLES),
        FoodItem("温野菜", CATEGORY_VEGETABLES),
        FoodItem("筑前煮", CATEGORY_VEGETABLES, season=("冬",)),
        FoodItem("キャベツサラダ", CATEGORY_VEGETABLES, japanese=False),
        FoodItem("もやし炒め", CATEGORY_VEGETABLES),
        FoodItem("のり", CATEGORY_VEGETABLES),
    ],
    CATEGORY_GRAINS: [
        FoodItem("白米", CATEGORY_GRAINS),
        FoodItem("玄米", CATEGORY_GRAINS),
        FoodItem("パン", CATEGORY_GRAINS, japanese=False),
    ],
    CATEGORY_DAIRY: [
        FoodItem("ヨーグルト", CATEGORY_DAIRY, japanese=False),
        FoodItem("牛乳", CATEGORY_DAIRY, japanese=False),
        FoodItem("チーズ", CATEGORY_DAIRY, japanese=False),
    ],
    CATEGORY_FRUITS: [
        FoodItem("みかん", CATEGORY_FRUITS, season=("冬",)),
        FoodItem("りんご", CATEGORY_FRUITS, season=("秋", "冬")),
        FoodItem("いちご", CATEGORY_FRUITS, season=("春",)),
        FoodItem("バナナ", CATEGORY_FRUITS, japanese=False),
    ],
}


def items_in_category(category: str) -> list[FoodItem]:
    """Return the catalog entries for one category.

    Raises:
        ValueError: If the category is unknown.
    """
    if category not in FOOD_CATEGORIES:
        raise ValueError(
            f"不明なカテゴリ: {category!r}  "
            f"({' / '.join(FOOD_CATEGORIES)} から選択してください)"
        )
    return list(HOME_MENU_CATALOG.get(category, []))


def find_food_item(name: str) -> FoodItem | None:
    """Look up a dish by exact name across all categories."""
    for items in HOME_MENU_CATALOG.values():
        for item in items:
            if item.name == name:
                return item
    return None


def all_food_items() -> list[FoodItem]:
    return [item for items in HOME_MENU_CATALOG.values() for item in items]
