from __future__ import annotations

from uxstarter.filtering import filter_and_sort_recommendations, severity_rank


def _row(criteria_id: str, severity: str) -> list[str]:
    return [criteria_id, "name", "Home", "p", "s", "", "", severity]


def test_filter_keeps_rows_with_severity_sorted_most_severe_first(config) -> None:
    header = ["Id", "Name", "Applies", "Problem", "Solution", "Mockup", "Insights", "Severity"]
    rows = [
        header,
        _row("A", "Low"),
        _row("B", ""),
        _row("C", "High"),
        _row("D", "medium"),
        _row("E", "High"),
        _row("F", "Cosmetic"),
    ]

    result = filter_and_sort_recommendations(rows, config)

    assert result[0] == header
    assert [r[0] for r in result[1:]] == ["C", "E", "D", "A", "F"]


def test_filter_handles_short_rows_and_empty_input(config) -> None:
    assert filter_and_sort_recommendations([], config) == []
    assert filter_and_sort_recommendations([["Id"], ["A", "name"]], config) == [["Id"]]


def test_severity_rank_is_case_insensitive() -> None:
    assert severity_rank(" HIGH ") < severity_rank("Medium") < severity_rank("low") < severity_rank("n/a")
