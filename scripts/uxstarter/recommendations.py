"""Turn audit rows into recommendation slides.

Each recommendation row becomes one slide built from the configured layout:
the criteria name goes into the title placeholder, the pages it applies to
into the subtitle, and the problem and solution statements into the body. The
best-practice mockup and the client screenshot are placed over the
``best-practice`` and ``client-mockup`` anchor shapes. Insight slides listed
on the row are copied in after it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Sequence

from .backend import (
    BEST_PRACTICE_SHAPE,
    CLIENT_MOCKUP_SHAPE,
    PLACEHOLDER_BODY,
    PLACEHOLDER_SUBTITLE,
    PLACEHOLDER_TITLE,
    Deck,
    Folder,
    ImageSource,
    Notifier,
    Slide,
)
from .config import AuditConfig
from .errors import WARNING_MULTIPLE_IMAGES, WARNING_NO_IMAGES

IMAGE_MIME_TYPE = "image"
APPLIES_PREFIX = "Applies for: "


@dataclass(frozen=True)
class Recommendation:
    criteria_id: str
    criteria: str
    applicable: str
    description: str
    image_mockup: str
    insights: List[str] = field(default_factory=list)


def _cell(row: Sequence[str], index: int) -> str:
    # Offsets are not bounds-checked against the row; a bad offset yields blank text.
    if 0 <= index < len(row):
        value = row[index]
        return "" if value is None else str(value)
    return ""


def split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_row(row: Sequence[str], config: AuditConfig) -> Recommendation:
    """Extract the recommendation fields from a row using the configured offsets."""
    image_mockup = _cell(row, config.image_mockup_index)
    return Recommendation(
        criteria_id=_cell(row, config.criteria_id_index).strip(),
        criteria=_cell(row, config.criteria_name_index),
        applicable=APPLIES_PREFIX + ",".join(_cell(row, config.applies_index).split(",")),
        description=_cell(row, config.problem_statement_index) + "\n" + _cell(row, config.solution_statement_index),
        image_mockup=config.default_image_mockup if image_mockup == "" else image_mockup,
        insights=split_list(_cell(row, config.insights_index)),
    )


def retrieve_client_image(folder: Folder, criteria_id: str, config: AuditConfig, notifier: Notifier) -> ImageSource:
    """Find the client screenshot named after ``criteria_id``.

    The first matching image wins. When nothing matches the default mockup is
    returned instead, as it is for a blank id; both that case and an
    ambiguous match raise a toast.
    """
    if not criteria_id.strip():
        notifier.toast(WARNING_NO_IMAGES + criteria_id)
        return config.default_image_mockup

    files = iter(folder.search_files(criteria_id, IMAGE_MIME_TYPE))
    found = next(files, None)

    if found is None:
        notifier.toast(WARNING_NO_IMAGES + criteria_id)
        return config.default_image_mockup

    if next(files, None) is not None:
        notifier.toast(WARNING_MULTIPLE_IMAGES + criteria_id)

    return found


def create_recommendation_slide(
    deck: Deck,
    layout: Any,
    criteria: str,
    applicable: str,
    description: str,
    image_mockup: ImageSource,
    client_image: ImageSource,
) -> Slide:
    slide = deck.create_slide(layout)

    slide.set_placeholder_text(PLACEHOLDER_TITLE, criteria)
    slide.set_placeholder_text(PLACEHOLDER_SUBTITLE, applicable)
    slide.set_placeholder_text(PLACEHOLDER_BODY, description)

    base_bounds = slide.shape_bounds(BEST_PRACTICE_SHAPE)
    client_bounds = slide.shape_bounds(CLIENT_MOCKUP_SHAPE)

    slide.insert_image(image_mockup, base_bounds)
    slide.insert_image(client_image, client_bounds)
    return slide


def append_insight_slides(deck: Deck, insight_deck: Deck, insight_ids: Sequence[str]) -> List[Slide]:
    """Copy the listed insight slides, in order and unlinked, to the end of ``deck``."""
    appended = []
    for insight_id in insight_ids:
        source = insight_deck.get_slide_by_id(insight_id.strip())
        appended.append(deck.append_slide_copy(source))
    return appended


def parse_fields_and_create_slide(
    deck: Deck,
    insight_deck: Deck,
    layout: Any,
    row: Sequence[str],
    folder: Folder,
    config: AuditConfig,
    notifier: Notifier,
) -> Recommendation:
    recommendation = parse_row(row, config)
    client_image = retrieve_client_image(folder, recommendation.criteria_id, config, notifier)

    create_recommendation_slide(
        deck,
        layout,
        recommendation.criteria,
        recommendation.applicable,
        recommendation.description,
        recommendation.image_mockup,
        client_image,
    )
    if recommendation.insights:
        append_insight_slides(deck, insight_deck, recommendation.insights)
    return recommendation


def apply_custom_style(deck: Deck, insight_deck: Deck, config: AuditConfig) -> Slide:
    """Close the deck with the end slide from the insights deck."""
    end_slide = insight_deck.get_slide_by_id(config.end_slide_id.strip())
    return deck.append_slide_copy(end_slide)
