"""User-facing messages and exceptions for UX Starter."""

from __future__ import annotations

# Error messages
ERROR_NO_SPREADSHEET = "UX Starter must be attached to a spreadsheet."
ERROR_NO_DECK = "There was a problem opening the generated deck."
ERROR_CREATING_IMAGES = "There was a problem creating the image mockups."
ERROR_MULTIPLE_FOLDERS = "Please ensure there is only one folder named "

# Warning messages
WARNING_NO_IMAGES = "No image found for criteria id "
WARNING_MULTIPLE_IMAGES = "Multiple images found for criteria id "


class UxStarterError(RuntimeError):
    """Base class for errors surfaced to the user as an alert."""


class NoSpreadsheetError(UxStarterError):
    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(ERROR_NO_SPREADSHEET)


class DeckOpenError(UxStarterError):
    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(ERROR_NO_DECK)


class ImageMockupError(UxStarterError):
    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(ERROR_CREATING_IMAGES)


class MultipleFoldersError(UxStarterError):
    def __init__(self, folder_name: str):
        self.folder_name = folder_name
        super().__init__(ERROR_MULTIPLE_FOLDERS + folder_name)


class SlideNotFoundError(UxStarterError):
    def __init__(self, slide_id: str):
        self.slide_id = slide_id
        super().__init__(f"Slide '{slide_id}' was not found in the insights deck.")


class ConfigValidationError(ValueError):
    """Raised when the document properties cannot drive deck generation."""

    def __init__(self, issues: list[str]):
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Invalid configuration"]
        super().__init__(self._format())

    def _format(self) -> str:
        lines = ["Configuration validation failed:"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)


class PlaceholderNotFoundError(UxStarterError):
    def __init__(self, kind: str, layout_name: str):
        self.kind = kind
        self.layout_name = layout_name
        super().__init__(f"Layout '{layout_name}' has no {kind} placeholder.")
