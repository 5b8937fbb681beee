"""Data models for school lunch menus, home menu suggestions and documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

# Document kinds
KIND_JSON = "json"
KIND_PDF_TEXT = "pdf_text"  # Text-extractable PDF
KIND_PDF_IMAGE = "pdf_image"  # Scanned PDF, needs OCR
KIND_IMAGE = "image"  # Photographed menu, needs OCR

DOCUMENT_KINDS = (KIND_JSON, KIND_PDF_TEXT, KIND_PDF_IMAGE, KIND_IMAGE)

# DocumentSource lifecycle
STATUS_PENDING = "pending"
STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_ERROR = "error"
DOCUMENT_STATUSES = (STATUS_PENDING, STATUS_PROCESSING, STATUS_COMPLETED, STATUS_ERROR)

MEAL_BREAKFAST = "breakfast"
MEAL_DINNER = "dinner"

MEAL_TYPES = [
    (MEAL_BREAKFAST, "朝食"),
    (MEAL_DINNER, "夕食"),
]

# Food catalog categories
CATEGORY_PROTEIN = "protein"
CATEGORY_VEGETABLES = "vegetables"
CATEGORY_GRAINS = "grains"
CATEGORY_DAIRY = "dairy"
CATEGORY_FRUITS = "fruits"

FOOD_CATEGORIES = (
    CATEGORY_PROTEIN,
    CATEGORY_VEGETABLES,
    CATEGORY_GRAINS,
    CATEGORY_DAIRY,
    CATEGORY_FRUITS,
)

# Go-style zero time, used when a record carries no date
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def format_rfc3339(value: datetime | date, timespec: str = "auto") -> str:
    """Format a datetime (or a bare date, as UTC midnight) as RFC 3339.

    ``timespec`` is passed to ``isoformat``; "microseconds" gives fixed-width
    text that sorts chronologically within one offset.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat(timespec=timespec)
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


# fromisoformat on 3.10 only takes 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"(?<=:\d\d)\.(\d+)")


def _pad_fraction(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 timestamp. Naive values are taken as UTC.

    Raises:
        ValueError: If the text is not a valid timestamp.
    """
    cleaned = text.strip()
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"
    cleaned = _FRACTION_RE.sub(_pad_fraction, cleaned, count=1)
    parsed = datetime.fromisoformat(cleaned)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def calendar_day(value: datetime | date) -> date:
    """Truncate a datetime to its calendar day (in its own offset)."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass
class Nutrition:
    calories: int = 0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sodium_mg: float = 0.0
    vegetables_servings: int = 0

    def to_dict(self) -> dict:
        return {
            "calories": self.calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
            "fiber_g": self.fiber_g,
            "sodium_mg": self.sodium_mg,
            "vegetables_servings": self.vegetables_servings,
        }


@dataclass
class SchoolLunchMenu:
    """One day's school lunch. At most one per calendar day in a store."""

    date: datetime
    main_dish: str
    side_dishes: list[str] = field(default_factory=list)
    soup: str = ""
    dessert: str = ""
    nutrition: Nutrition = field(default_factory=Nutrition)

    @property
    def day(self) -> date:
        return calendar_day(self.date)

    def to_dict(self) -> dict:
        """Wire format shared with seed files (soup/dessert omitted when empty)."""
        data: dict = {
            "date": format_rfc3339(self.date),
            "main_dish": self.main_dish,
            "side_dishes": list(self.side_dishes),
        }
        if self.soup:
            data["soup"] = self.soup
        if self.dessert:
            data["dessert"] = self.dessert
        data["nutrition"] = self.nutrition.to_dict()
        return data

    def display(self) -> str:
        """Format the menu for terminal display."""
        lines = [f"📅 {self.day.strftime('%Y年%m月%d日')}"]
        lines.append(f"  🍽  メイン: {self.main_dish}")
        lines.append(f"  🥬 副菜: {', '.join(self.side_dishes)}")
        if self.soup:
            lines.append(f"  🍲 汁物: {self.soup}")
        if self.dessert:
            lines.append(f"  🍮 デザート: {self.dessert}")
        if self.nutrition.calories:
            lines.append(f"  🔥 {self.nutrition.calories}kcal")
        return "\n".join(lines)


@dataclass
class HomeMenuSuggestion:
    """A breakfast or dinner suggestion derived from one school lunch."""

    date: date
    meal_type: str  # "breakfast" | "dinner"
    school_lunch_ref: str  # main dish of the school lunch that drove the rule
    main_dish: str = ""
    side_dishes: list[str] = field(default_factory=list)
    soup: str = ""
    reason: str = ""

    def to_dict(self) -> dict:
        data: dict = {
            "date": format_rfc3339(self.date),
            "meal_type": self.meal_type,
            "main_dish": self.main_dish,
            "side_dishes": list(self.side_dishes),
        }
        if self.soup:
            data["soup"] = self.soup
        data["reason"] = self.reason
        data["school_lunch_ref"] = self.school_lunch_ref
        return data

    def display(self) -> str:
        """Format the suggestion for terminal display."""
        meal_type_ja = dict(MEAL_TYPES).get(self.meal_type, self.meal_type)
        lines = [f"📅 {calendar_day(self.date).isoformat()} の{meal_type_ja}提案"]
        lines.append(f"🏫 給食のメイン: {self.school_lunch_ref}")
        lines.append("")
        if not self.main_dish:
            lines.append("  提案できる献立がありません")
            return "\n".join(lines)
        lines.append(f"  【主菜】{self.main_dish}")
        for i, side in enumerate(self.side_dishes, 1):
            lines.append(f"  【副菜{i}】{side}")
        if self.soup:
            lines.append(f"  【汁物】{self.soup}")
        lines.append("")
        lines.append(f"  💡 {self.reason}")
        return "\n".join(lines)


@dataclass
class DocumentSource:
    """Audit record for one ingestion attempt."""

    id: str
    type: str  # one of DOCUMENT_KINDS, "" until detected
    original_name: str
    uploaded_at: datetime
    processed_at: datetime | None = None
    status: str = STATUS_PENDING
    error_message: str = ""
    menus_imported: int = 0

    def to_dict(self) -> dict:
        data: dict = {
            "id": self.id,
            "type": self.type,
            "original_name": self.original_name,
            "uploaded_at": format_rfc3339(self.uploaded_at),
        }
        if self.processed_at is not None:
            data["processed_at"] = format_rfc3339(self.processed_at)
        data["status"] = self.status
        if self.error_message:
            data["error_message"] = self.error_message
        data["menus_imported"] = self.menus_imported
        return data


@dataclass
class ExtractedMenuData:
    """Raw text pulled out of a document, before parsing."""

    source_id: str
    raw_text: str
    extracted_at: datetime
    confidence: float  # 0.0〜1.0
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FoodItem:
    """A dish in the home menu catalog."""

    name: str
    category: str  # protein, vegetables, grains, dairy, fruits
    japanese: bool = True
    season: tuple[str, ...] = ()
    nutrition: Nutrition | None = None
