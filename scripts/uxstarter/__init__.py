"""UX Starter: recommendation decks from UX audit workbooks."""

from .cli import run_cli
from .commands import (
    MENU_ITEMS,
    create_deck_from_recommendations,
    ensure_configuration,
    filter_recommendations,
    finish_deck,
    load_configuration,
)
from .config import AuditConfig, PropertyStore, read_configuration_sheet, validate_properties
from .errors import ConfigValidationError, UxStarterError
from .filtering import filter_and_sort_recommendations
from .recommendations import (
    Recommendation,
    append_insight_slides,
    apply_custom_style,
    create_recommendation_slide,
    parse_fields_and_create_slide,
    parse_row,
    retrieve_client_image,
)

__all__ = [
    "AuditConfig",
    "ConfigValidationError",
    "MENU_ITEMS",
    "PropertyStore",
    "Recommendation",
    "UxStarterError",
    "append_insight_slides",
    "apply_custom_style",
    "create_deck_from_recommendations",
    "create_recommendation_slide",
    "ensure_configuration",
    "filter_and_sort_recommendations",
    "filter_recommendations",
    "finish_deck",
    "load_configuration",
    "parse_fields_and_create_slide",
    "parse_row",
    "read_configuration_sheet",
    "retrieve_client_image",
    "run_cli",
    "validate_properties",
]
