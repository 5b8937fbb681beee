"""School lunch menu advisor: ingest lunch menus, suggest home meals."""

from .config import AdvisorConfig, DatabaseConfig, DataConfig, LoggingConfig, load_config
from .dispatcher import ExtractionDispatcher
from .errors import (
    DocumentIOError,
    DocumentProcessingError,
    FormatNotImplementedError,
    MalformedDataError,
    MenuAdvisorError,
    MenuNotFoundError,
    UnsupportedTypeError,
)
from .models import (
    DocumentSource,
    ExtractedMenuData,
    FoodItem,
    HomeMenuSuggestion,
    Nutrition,
    SchoolLunchMenu,
)
from .parser import MenuParser, parse_json_menus
from .pipeline import DocumentProcessor
from .service import MenuAdvisorService
from .store import BaseMenuStore, MenuStore, create_store
from .suggestion import SuggestionEngine, SuggestionRule

__all__ = [
    "MenuAdvisorService",
    "DocumentProcessor",
    "ExtractionDispatcher",
    "MenuParser",
    "parse_json_menus",
    "SuggestionEngine",
    "SuggestionRule",
    "BaseMenuStore",
    "MenuStore",
    "create_store",
    "SchoolLunchMenu",
    "HomeMenuSuggestion",
    "Nutrition",
    "DocumentSource",
    "ExtractedMenuData",
    "FoodItem",
    "MenuAdvisorError",
    "UnsupportedTypeError",
    "FormatNotImplementedError",
    "MalformedDataError",
    "MenuNotFoundError",
    "DocumentIOError",
    "DocumentProcessingError",
    "AdvisorConfig",
    "DataConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "load_config",
]
