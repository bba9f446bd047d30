"""Fetch and normalize image references before they are placed on a slide."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

from .backend import ImageSource, StoredFile
from .errors import ImageMockupError

REQUEST_TIMEOUT = 30

# Formats python-pptx can embed without conversion.
EMBEDDABLE_FORMATS = {"PNG", "JPEG", "GIF", "BMP", "TIFF"}


def is_url(value: str) -> bool:
    return value.strip().lower().startswith(("http://", "https://"))


def _read_source(source: ImageSource, base_dir: Optional[Path]) -> bytes:
    if isinstance(source, StoredFile):
        return source.path.read_bytes()

    raw = str(source or "").strip()
    if not raw:
        raise ImageMockupError("empty image reference")

    if is_url(raw):
        response = requests.get(raw, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.content

    path = Path(raw).expanduser()
    if not path.is_absolute() and base_dir is not None:
        candidate = Path(base_dir) / path
        if candidate.exists():
            path = candidate
    return path.read_bytes()


def load_image(source: ImageSource, *, base_dir: Optional[Path] = None) -> io.BytesIO:
    """Return an in-memory image stream python-pptx can embed."""
    try:
        blob = _read_source(source, base_dir)
    except ImageMockupError:
        raise
    except (OSError, requests.RequestException) as exc:
        raise ImageMockupError(f"{source}: {exc}") from exc

    try:
        with Image.open(io.BytesIO(blob)) as im:
            if im.format in EMBEDDABLE_FORMATS:
                return io.BytesIO(blob)
            converted = io.BytesIO()
            im.convert("RGBA").save(converted, format="PNG")
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageMockupError(f"{source}: {exc}") from exc

    converted.seek(0)
    return converted
