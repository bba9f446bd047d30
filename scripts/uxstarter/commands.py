"""The three menu actions: load configuration, filter, filter and generate."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import CONFIG_SHEET_NAME, AuditConfig, PropertyStore, read_configuration_sheet, validate_properties
from .deck import PptxDeck
from .filtering import filter_and_sort_recommendations
from .recommendations import apply_custom_style, parse_fields_and_create_slide
from .storage import find_folder
from .workbook import AuditWorkbook

MENU_NAME = "UX Starter"
MENU_ITEMS = [
    {"name": "Load configuration", "command": "load-config"},
    {"name": "Filter criteria only", "command": "filter"},
    {"name": "Filter criteria and generate deck", "command": "generate"},
]


def load_configuration(workbook: AuditWorkbook) -> AuditConfig:
    """Read the configuration sheet into the workbook's document properties."""
    properties = read_configuration_sheet(workbook.rows(CONFIG_SHEET_NAME))
    config = validate_properties(properties, base_dir=workbook.directory)
    PropertyStore(workbook.properties_path).save(properties)
    print(f"✅ Loaded {len(properties)} properties from '{CONFIG_SHEET_NAME}'")
    return config


def ensure_configuration(workbook: AuditWorkbook) -> AuditConfig:
    store = PropertyStore(workbook.properties_path)
    if not store.exists():
        return load_configuration(workbook)
    return validate_properties(store.load(), base_dir=workbook.directory)


def filter_recommendations(workbook: AuditWorkbook, config: AuditConfig) -> int:
    """Write the failing criteria, sorted by severity, to the recommendations sheet."""
    rows = filter_and_sort_recommendations(workbook.rows(config.audit_sheet_name), config)
    workbook.write_rows(config.recommendations_sheet_name, rows)
    workbook.save()
    count = max(0, len(rows) - 1)
    print(f"✅ {count} criteria written to '{config.recommendations_sheet_name}'")
    return count


def create_deck_from_recommendations(
    workbook: AuditWorkbook,
    config: AuditConfig,
    output_path: Path,
    *,
    drive_root: Optional[Path] = None,
    keep_template_slides: bool = True,
) -> Path:
    filter_recommendations(workbook, config)

    deck = PptxDeck.from_template(
        config.resolve_document(config.template_deck_id),
        keep_template_slides=keep_template_slides,
        base_dir=workbook.directory,
    )
    insight_deck = PptxDeck.open(config.resolve_document(config.insights_deck_id), base_dir=workbook.directory)
    layout = deck.find_layout(config.recommendation_layout)
    folder = find_folder(Path(drive_root) if drive_root else workbook.directory, config.images_folder_name)

    rows = workbook.rows(config.recommendations_sheet_name)[1:]
    for row in rows:
        parse_fields_and_create_slide(deck, insight_deck, layout, row, folder, config, workbook)

    saved = deck.save(output_path)
    finish_deck(saved, config, base_dir=workbook.directory)
    print(f"✅ PPTX saved to {saved} ({len(rows)} recommendations)")
    return saved


def finish_deck(deck_path: Path, config: AuditConfig, *, base_dir: Optional[Path] = None) -> Path:
    """Reopen the generated deck and append the closing slide."""
    deck = PptxDeck.open(deck_path, base_dir=base_dir)
    insight_deck = PptxDeck.open(config.resolve_document(config.insights_deck_id), base_dir=base_dir)
    apply_custom_style(deck, insight_deck, config)
    return deck.save(deck_path)
