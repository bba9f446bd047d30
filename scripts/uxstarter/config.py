"""Document properties: loading, validation and persistence."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .errors import ConfigValidationError

CONFIG_SHEET_NAME = "Configuration"

ROW_KEYS = (
    "RECOMMENDATIONS_CRITERIA_ID_ROW",
    "RECOMMENDATIONS_CRITERIA_NAME_ROW",
    "RECOMMENDATIONS_APPLIES_ROW",
    "RECOMMENDATIONS_PROBLEM_STATEMENT_ROW",
    "RECOMMENDATIONS_SOLUTION_STATEMENT_ROW",
    "RECOMMENDATIONS_IMAGE_MOCKUP_ROW",
    "RECOMMENDATIONS_INSIGHTS_ROW",
    "RECOMMENDATIONS_SEVERITY_ROW",
)

TEXT_KEYS = (
    "DEFAULT_IMAGE_MOCKUP",
    "TEMPLATE_DECK_ID",
    "RECOMMENDATION_LAYOUT",
    "INSIGHTS_DECK_ID",
    "END_SLIDE_ID",
    "IMAGES_FOLDER_NAME",
    "AUDIT_SHEET_NAME",
    "RECOMMENDATIONS_SHEET_NAME",
)

PROPERTY_KEYS = ROW_KEYS + TEXT_KEYS
NUM_PROPERTIES = 16


@dataclass(frozen=True)
class AuditConfig:
    """Validated document properties. Column indices are 0-based."""

    criteria_id_index: int
    criteria_name_index: int
    applies_index: int
    problem_statement_index: int
    solution_statement_index: int
    image_mockup_index: int
    insights_index: int
    severity_index: int
    default_image_mockup: str
    template_deck_id: str
    recommendation_layout: str
    insights_deck_id: str
    end_slide_id: str
    images_folder_name: str
    audit_sheet_name: str
    recommendations_sheet_name: str
    base_dir: Optional[Path] = None

    def resolve_document(self, document_id: str) -> Path:
        """Map a linked document id (a path, relative to the workbook) to a file."""
        path = Path(document_id.strip()).expanduser()
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        return path.resolve()


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def read_configuration_sheet(rows: Iterable[Iterable[Any]]) -> Dict[str, str]:
    """Collect key/value pairs from the first two columns of the configuration sheet."""
    properties: Dict[str, str] = {}
    for row in rows:
        cells = list(row)
        if not cells:
            continue
        key = _stringify(cells[0])
        if not key:
            continue
        properties[key] = _stringify(cells[1]) if len(cells) > 1 else ""
    return properties


def _parse_offset(key: str, value: Optional[str], issues: list[str]) -> int:
    try:
        offset = int(str(value).strip())
    except (TypeError, ValueError):
        issues.append(f"{key} must be a 1-based column number (got {value!r})")
        return -1
    if offset < 1:
        issues.append(f"{key} must be a 1-based column number (got {value!r})")
        return -1
    return offset - 1


def validate_properties(properties: Dict[str, str], *, base_dir: Optional[Path] = None) -> AuditConfig:
    """Validate the raw property mapping and build an AuditConfig."""
    if not isinstance(properties, dict):
        raise ConfigValidationError(["Document properties must be a key/value mapping"])

    issues: list[str] = []
    for key in PROPERTY_KEYS:
        if key not in properties:
            issues.append(f"{key} is missing")

    indices = {}
    for key in ROW_KEYS:
        if key in properties:
            indices[key] = _parse_offset(key, properties[key], issues)

    for key in TEXT_KEYS:
        if key == "DEFAULT_IMAGE_MOCKUP":
            continue
        if key in properties and not str(properties[key]).strip():
            issues.append(f"{key} must not be blank")

    if issues:
        raise ConfigValidationError(issues)

    return AuditConfig(
        criteria_id_index=indices["RECOMMENDATIONS_CRITERIA_ID_ROW"],
        criteria_name_index=indices["RECOMMENDATIONS_CRITERIA_NAME_ROW"],
        applies_index=indices["RECOMMENDATIONS_APPLIES_ROW"],
        problem_statement_index=indices["RECOMMENDATIONS_PROBLEM_STATEMENT_ROW"],
        solution_statement_index=indices["RECOMMENDATIONS_SOLUTION_STATEMENT_ROW"],
        image_mockup_index=indices["RECOMMENDATIONS_IMAGE_MOCKUP_ROW"],
        insights_index=indices["RECOMMENDATIONS_INSIGHTS_ROW"],
        severity_index=indices["RECOMMENDATIONS_SEVERITY_ROW"],
        default_image_mockup=str(properties["DEFAULT_IMAGE_MOCKUP"]).strip(),
        template_deck_id=str(properties["TEMPLATE_DECK_ID"]).strip(),
        recommendation_layout=str(properties["RECOMMENDATION_LAYOUT"]).strip(),
        insights_deck_id=str(properties["INSIGHTS_DECK_ID"]).strip(),
        end_slide_id=str(properties["END_SLIDE_ID"]),
        images_folder_name=str(properties["IMAGES_FOLDER_NAME"]).strip(),
        audit_sheet_name=str(properties["AUDIT_SHEET_NAME"]).strip(),
        recommendations_sheet_name=str(properties["RECOMMENDATIONS_SHEET_NAME"]).strip(),
        base_dir=base_dir,
    )


class PropertyStore:
    """Persistent key/value properties scoped to one workbook."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigValidationError([f"No document properties stored at {self.path}; run load-config"]) from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigValidationError(
                [f"Invalid JSON in {self.path} at line {exc.lineno}, column {exc.colno}: {exc.msg}"]
            ) from exc

        if not isinstance(data, dict):
            raise ConfigValidationError([f"{self.path} must contain a JSON object"])
        return {str(k): _stringify(v) for k, v in data.items()}

    def save(self, properties: Dict[str, str]) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(properties, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        return self.path
