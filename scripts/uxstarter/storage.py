"""Local directory tree standing in for the shared storage drive."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Iterator

from .backend import StoredFile
from .errors import MultipleFoldersError


class LocalFolder:
    def __init__(self, path: Path):
        self.path = Path(path)

    def search_files(self, title_contains: str, mime_contains: str) -> Iterator[StoredFile]:
        """Yield files whose name contains ``title_contains`` and whose MIME type contains ``mime_contains``."""
        for entry in sorted(self.path.iterdir(), key=lambda p: p.name):
            if not entry.is_file() or title_contains not in entry.name:
                continue
            mime_type = mimetypes.guess_type(entry.name)[0] or "application/octet-stream"
            if mime_contains not in mime_type:
                continue
            yield StoredFile(name=entry.name, path=entry, mime_type=mime_type)


def find_folder(root: Path, name: str) -> LocalFolder:
    """Return the single folder called ``name`` under ``root``."""
    root = Path(root)
    matches = [root] if root.name == name and root.is_dir() else []
    # Compared by name; folder names may contain glob characters.
    matches.extend(p for p in sorted(root.rglob("*")) if p.name == name and p.is_dir())
    if len(matches) != 1:
        raise MultipleFoldersError(name)
    return LocalFolder(matches[0])
