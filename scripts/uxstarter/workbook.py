"""Audit workbook access through openpyxl."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Iterable, List, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .errors import NoSpreadsheetError

PROPERTIES_SUFFIX = ".properties.json"


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class AuditWorkbook:
    """The spreadsheet the audit lives in, plus its notification surface."""

    def __init__(self, path: Path, workbook: Workbook, values: Optional[Workbook] = None):
        self.path = Path(path)
        self.workbook = workbook
        # Cached formula results; `workbook` keeps the formulas so saving does not flatten them.
        self.values = values if values is not None else workbook
        self.toasts: List[str] = []
        self.alerts: List[str] = []

    @classmethod
    def open(cls, path: Optional[str]) -> "AuditWorkbook":
        if not path:
            raise NoSpreadsheetError("no workbook given")
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise NoSpreadsheetError(f"{resolved} does not exist")
        try:
            workbook = load_workbook(str(resolved))
            values = load_workbook(str(resolved), data_only=True)
        except (InvalidFileException, OSError, KeyError, ValueError) as exc:
            raise NoSpreadsheetError(f"{resolved}: {exc}") from exc
        return cls(resolved, workbook, values)

    @property
    def directory(self) -> Path:
        return self.path.parent

    @property
    def properties_path(self) -> Path:
        return self.path.with_name(self.path.name + PROPERTIES_SUFFIX)

    def rows(self, sheet_name: str) -> List[List[str]]:
        if sheet_name not in self.values.sheetnames:
            raise NoSpreadsheetError(f"sheet '{sheet_name}' not found in {self.path.name}")
        sheet = self.values[sheet_name]
        rows = []
        for raw in sheet.iter_rows(values_only=True):
            row = [_cell_text(value) for value in raw]
            if any(cell.strip() for cell in row):
                rows.append(row)
        return rows

    def write_rows(self, sheet_name: str, rows: Iterable[Iterable[str]]) -> None:
        rows = [list(row) for row in rows]
        targets = [self.workbook] if self.values is self.workbook else [self.workbook, self.values]
        for book in targets:
            if sheet_name in book.sheetnames:
                position = book.sheetnames.index(sheet_name)
                book.remove(book[sheet_name])
                sheet = book.create_sheet(sheet_name, position)
            else:
                sheet = book.create_sheet(sheet_name)
            for row in rows:
                sheet.append(row)

    def save(self) -> Path:
        self.workbook.save(str(self.path))
        return self.path

    def toast(self, message: str) -> None:
        self.toasts.append(message)
        print(f"⚠️  {message}", file=sys.stderr)

    def alert(self, message: str) -> None:
        """Report a failure that stopped the current action."""
        self.alerts.append(message)
        print(f"❌  {message}", file=sys.stderr)

