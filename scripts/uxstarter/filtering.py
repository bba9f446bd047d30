"""Select the failing criteria from the audit sheet and order them by severity."""

from __future__ import annotations

from typing import List, Sequence

from .config import AuditConfig

SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def severity_rank(value: str) -> int:
    return SEVERITY_ORDER.get(value.strip().lower(), len(SEVERITY_ORDER))


def filter_and_sort_recommendations(rows: Sequence[Sequence[str]], config: AuditConfig) -> List[List[str]]:
    """Return the header row followed by every row with a severity, most severe first."""
    if not rows:
        return []

    header, body = list(rows[0]), rows[1:]
    index = config.severity_index

    def severity(row: Sequence[str]) -> str:
        return str(row[index]) if index < len(row) and row[index] is not None else ""

    kept = [list(row) for row in body if severity(row).strip()]
    kept.sort(key=lambda row: severity_rank(severity(row)))
    return [header] + kept
