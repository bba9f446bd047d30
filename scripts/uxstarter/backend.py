"""Capabilities the deck builder needs from the document backend.

The recommendation pipeline only talks to these protocols, so the python-pptx
/ openpyxl implementations and the in-memory doubles used by the tests are
interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, NamedTuple, Protocol, Union

PLACEHOLDER_TITLE = "title"
PLACEHOLDER_SUBTITLE = "subtitle"
PLACEHOLDER_BODY = "body"

BEST_PRACTICE_SHAPE = "best-practice"
CLIENT_MOCKUP_SHAPE = "client-mockup"


class Bounds(NamedTuple):
    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True)
class StoredFile:
    """A file found in the storage folder."""

    name: str
    path: Path
    mime_type: str


# Either a file from the images folder or a plain URL/path (the default mockup).
ImageSource = Union[StoredFile, str]


class Notifier(Protocol):
    def toast(self, message: str) -> None: ...


class Folder(Protocol):
    def search_files(self, title_contains: str, mime_contains: str) -> Iterator[StoredFile]: ...


class Slide(Protocol):
    def set_placeholder_text(self, kind: str, text: str) -> None: ...

    def shape_bounds(self, name: str) -> Bounds: ...

    def insert_image(self, image: ImageSource, bounds: Bounds) -> None: ...


class Deck(Protocol):
    def find_layout(self, name: str) -> Any: ...

    def create_slide(self, layout: Any) -> Slide: ...

    def get_slide_by_id(self, slide_id: str) -> Any: ...

    def append_slide_copy(self, source: Any) -> Slide: ...
