"""Turn extracted raw text into SchoolLunchMenu records."""

from __future__ import annotations

import json
import math
from typing import Any

from .errors import FormatNotImplementedError, MalformedDataError
from .models import (
    KIND_JSON,
    ZERO_TIME,
    ExtractedMenuData,
    Nutrition,
    SchoolLunchMenu,
    parse_rfc3339,
)

_NUTRITION_INT_FIELDS = ("calories", "vegetables_servings")
_NUTRITION_FLOAT_FIELDS = ("protein_g", "carbs_g", "fat_g", "fiber_g", "sodium_mg")


class MenuParser:
    """Parse ExtractedMenuData by its ``format`` metadata tag.

    Only JSON is structured enough to parse today. The parser checks shape
    and types but not meaning: empty dish names or negative calories pass.
    """

    def parse(self, data: ExtractedMenuData) -> list[SchoolLunchMenu]:
        """Parse extracted data into menus.

        Raises:
            MalformedDataError: If a JSON payload cannot be decoded.
            FormatNotImplementedError: For any non-JSON format.
        """
        fmt = data.metadata.get("format", "")
        if fmt == KIND_JSON:
            return parse_json_menus(data.raw_text)
        raise FormatNotImplementedError(
            f"{fmt or '(不明)'} 形式の献立解析はまだ実装されていません",
            kind=fmt,
        )


def parse_json_menus(text: str) -> list[SchoolLunchMenu]:
    """Decode a JSON array of menu objects.

    ``null`` decodes to an empty list. Unknown keys are ignored and missing
    keys take their zero values.

    Raises:
        MalformedDataError: On invalid JSON or a field of the wrong type.
    """
    # JSONDecodeError is a ValueError; oversized integers raise a plain
    # ValueError and deep nesting a RecursionError.
    try:
        raw = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise MalformedDataError(f"JSONの解析に失敗しました: {e}") from e

    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedDataError(
            f"JSONの解析に失敗しました: 配列が必要ですが {_json_type(raw)} でした"
        )
    menus: list[SchoolLunchMenu] = []
    for i, item in enumerate(raw):
        try:
            menus.append(menu_from_dict(item))
        except MalformedDataError as e:
            raise MalformedDataError(f"JSONの解析に失敗しました: [{i}] {e}") from e
    return menus


def menu_from_dict(item: Any) -> SchoolLunchMenu:
    """Build one SchoolLunchMenu from its wire-format dict."""
    if item is None:
        item = {}
    if not isinstance(item, dict):
        raise MalformedDataError(
            f"オブジェクトが必要ですが {_json_type(item)} でした"
        )

    date_value = item.get("date")
    if date_value is None:
        menu_date = ZERO_TIME
    elif isinstance(date_value, str):
        try:
            menu_date = parse_rfc3339(date_value)
        except ValueError as e:
            raise MalformedDataError(f"date: 日付を解釈できません: {date_value!r}") from e
    else:
        raise MalformedDataError(_type_message("date", "文字列", date_value))

    side_dishes = item.get("side_dishes")
    if side_dishes is None:
        side_dishes = []
    elif not isinstance(side_dishes, list) or not all(
        isinstance(s, str) for s in side_dishes
    ):
        raise MalformedDataError(_type_message("side_dishes", "文字列の配列", side_dishes))

    return SchoolLunchMenu(
        date=menu_date,
        main_dish=_optional_str(item, "main_dish"),
        side_dishes=list(side_dishes),
        soup=_optional_str(item, "soup"),
        dessert=_optional_str(item, "dessert"),
        nutrition=_nutrition_from_dict(item.get("nutrition")),
    )


def _nutrition_from_dict(raw: Any) -> Nutrition:
    if raw is None:
        return Nutrition()
    if not isinstance(raw, dict):
        raise MalformedDataError(_type_message("nutrition", "オブジェクト", raw))

    values: dict[str, int | float] = {}
    for key in _NUTRITION_INT_FIELDS:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            raise MalformedDataError(_type_message(f"nutrition.{key}", "整数", value))
        values[key] = value
    for key in _NUTRITION_FLOAT_FIELDS:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedDataError(_type_message(f"nutrition.{key}", "数値", value))
        value = float(value)
        if not math.isfinite(value):
            raise MalformedDataError(f"nutrition.{key}: 有限の数値が必要です ({value})")
        values[key] = value
    return Nutrition(**values)


def _optional_str(item: dict, key: str) -> str:
    value = item.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedDataError(_type_message(key, "文字列", value))
    return value


def _type_message(key: str, expected: str, value: Any) -> str:
    return f"{key}: {expected}が必要ですが {_json_type(value)} でした"


def _json_type(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "null"
