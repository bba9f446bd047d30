"""python-pptx implementation of the deck and slide capabilities."""

from __future__ import annotations

import io
import re
import sys
import zipfile
from copy import deepcopy
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from pptx import Presentation
from pptx.enum.shapes import PP_PLACEHOLDER
from pptx.exc import PackageNotFoundError
from pptx.opc.constants import RELATIONSHIP_TYPE as RT
from pptx.oxml.ns import qn

from .backend import (
    PLACEHOLDER_BODY,
    PLACEHOLDER_SUBTITLE,
    PLACEHOLDER_TITLE,
    Bounds,
    ImageSource,
)
from .errors import DeckOpenError, ImageMockupError, PlaceholderNotFoundError, SlideNotFoundError
from .images import load_image

R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
HYPERLINK_TAGS = (qn("a:hlinkClick"), qn("a:hlinkHover"))

PLACEHOLDER_TYPES = {
    PLACEHOLDER_TITLE: {PP_PLACEHOLDER.TITLE, PP_PLACEHOLDER.CENTER_TITLE},
    PLACEHOLDER_SUBTITLE: {PP_PLACEHOLDER.SUBTITLE},
    PLACEHOLDER_BODY: {PP_PLACEHOLDER.BODY, PP_PLACEHOLDER.OBJECT},
}


def _shape_titles(shape) -> Tuple[str, ...]:
    names = [getattr(shape, "name", "") or ""]
    for cnvpr in shape._element.xpath("./*[1]/p:cNvPr"):
        names.append(cnvpr.get("title", ""))
        names.append(cnvpr.get("descr", ""))
    return tuple(n.strip() for n in names if n and n.strip())


class PptxSlide:
    """A slide in a python-pptx deck."""

    def __init__(self, slide, *, base_dir: Optional[Path] = None):
        self.slide = slide
        self.base_dir = base_dir

    @property
    def slide_id(self) -> str:
        return str(self.slide.slide_id)

    def set_placeholder_text(self, kind: str, text: str) -> None:
        wanted = PLACEHOLDER_TYPES[kind]
        for placeholder in self.slide.placeholders:
            if placeholder.placeholder_format.type in wanted and placeholder.has_text_frame:
                placeholder.text_frame.text = text
                return
        raise PlaceholderNotFoundError(kind, self.slide.slide_layout.name)

    def shape_bounds(self, name: str) -> Bounds:
        # Anchors usually live on the layout; python-pptx only clones placeholders onto new slides.
        for shapes in (self.slide.shapes, self.slide.slide_layout.shapes):
            for shape in shapes:
                if shape.left is None or shape.width is None:
                    continue
                if name in _shape_titles(shape):
                    return Bounds(int(shape.left), int(shape.top), int(shape.width), int(shape.height))
        raise ImageMockupError(f"no shape named '{name}' on slide {self.slide_id}")

    def insert_image(self, image: ImageSource, bounds: Bounds) -> None:
        stream = load_image(image, base_dir=self.base_dir)
        try:
            self.slide.shapes.add_picture(stream, bounds.left, bounds.top, width=bounds.width, height=bounds.height)
        except (ValueError, OSError) as exc:
            raise ImageMockupError(f"{image}: {exc}") from exc


class PptxDeck:
    """A .pptx presentation opened for reading or generation."""

    def __init__(self, prs, *, path: Optional[Path] = None, base_dir: Optional[Path] = None):
        self.prs = prs
        self.path = path
        self.base_dir = base_dir

    @classmethod
    def open(cls, path: Path, *, base_dir: Optional[Path] = None) -> "PptxDeck":
        path = Path(path)
        try:
            prs = Presentation(str(path))
        except (PackageNotFoundError, zipfile.BadZipFile, OSError, KeyError) as exc:
            raise DeckOpenError(f"{path}: {exc}") from exc
        return cls(prs, path=path, base_dir=base_dir)

    @classmethod
    def from_template(
        cls,
        template_path: Path,
        *,
        keep_template_slides: bool = True,
        base_dir: Optional[Path] = None,
    ) -> "PptxDeck":
        """Start a new deck as a copy of the template."""
        deck = cls.open(template_path, base_dir=base_dir)
        deck.path = None
        if not keep_template_slides:
            deck._remove_all_slides()
        return deck

    def _remove_all_slides(self) -> None:
        # python-pptx has no public delete API; remove slide relationships directly.
        slide_id_list = self.prs.slides._sldIdLst  # type: ignore[attr-defined]
        for slide_id in list(slide_id_list):
            self.prs.part.drop_rel(slide_id.rId)
            slide_id_list.remove(slide_id)

    def __len__(self) -> int:
        return len(self.prs.slides)

    def slides(self) -> List[PptxSlide]:
        return [PptxSlide(slide, base_dir=self.base_dir) for slide in self.prs.slides]

    def list_layouts(self) -> List[Tuple[int, str]]:
        return [(i, getattr(layout, "name", "") or "") for i, layout in enumerate(self.prs.slide_layouts)]

    def find_layout(self, name: str):
        layout = self._find_layout([name])
        if layout is None:
            raise DeckOpenError(f"layout '{name}' not found")
        return layout

    def _find_layout(self, name_candidates: Iterable[str]):
        candidates = [c.strip().lower() for c in name_candidates if c.strip()]
        if not candidates:
            return None

        def normalize(name: str) -> str:
            return re.sub(r"[^a-z0-9]+", " ", (name or "").strip().lower()).strip()

        for slide_layout in self.prs.slide_layouts:
            name = getattr(slide_layout, "name", "") or ""
            if name.strip().lower() in candidates:
                return slide_layout

        best_layout = None
        best_score = 0
        for slide_layout in self.prs.slide_layouts:
            normalized = normalize(getattr(slide_layout, "name", "") or "")

            score = 0
            for candidate in candidates:
                c = normalize(candidate)
                if not c:
                    continue
                if normalized == c:
                    score = max(score, 200 + len(c))
                elif re.search(rf"\b{re.escape(c)}\b", normalized):
                    score = max(score, 120 + len(c))
                elif c in normalized:
                    score = max(score, 80 + len(c))

            if score > best_score:
                best_layout = slide_layout
                best_score = score

        return best_layout

    def create_slide(self, layout) -> PptxSlide:
        return PptxSlide(self.prs.slides.add_slide(layout), base_dir=self.base_dir)

    def get_slide_by_id(self, slide_id: str):
        key = str(slide_id).strip()
        slide = None
        if key.isdigit():
            slide = self.prs.slides.get(int(key))
        if slide is None:
            raise SlideNotFoundError(key)
        return slide

    def _matching_layout(self, source_layout):
        name = (getattr(source_layout, "name", "") or "").strip().lower()
        for layout in self.prs.slide_layouts:
            if (getattr(layout, "name", "") or "").strip().lower() == name:
                return layout
        return min(self.prs.slide_layouts, key=lambda layout: len(layout.placeholders))

    def _copy_relationships(self, source, target) -> Dict[str, str]:
        rid_map: Dict[str, str] = {}
        for rel in list(source.part.rels.values()):
            if rel.is_external:
                rid_map[rel.rId] = target.part.relate_to(rel.target_ref, rel.reltype, is_external=True)
            elif rel.reltype == RT.IMAGE:
                _, new_rid = target.part.get_or_add_image_part(io.BytesIO(rel.target_part.blob))
                rid_map[rel.rId] = new_rid
        return rid_map

    def append_slide_copy(self, source) -> PptxSlide:
        """Append an unlinked copy of ``source`` (a slide from any deck)."""
        new_slide = self.prs.slides.add_slide(self._matching_layout(source.slide_layout))
        rid_map = self._copy_relationships(source, new_slide)

        target_tree = new_slide.shapes._spTree
        for child in list(target_tree):
            target_tree.remove(child)
        for child in source.shapes._spTree:
            element = _strip_unmapped_links(deepcopy(child), rid_map)
            if _unmapped_refs(element, rid_map):
                print(
                    f"⚠️  Skipped '{child.xpath('string(./*[1]/p:cNvPr/@name)')}' while copying slide "
                    f"{source.slide_id}: it references a chart or embedded object that cannot be copied",
                    file=sys.stderr,
                )
                continue
            target_tree.append(_remap(element, rid_map))

        source_bg = source.element.cSld.xpath("./p:bg")
        if source_bg:
            target_csld = new_slide.element.cSld
            for old in target_csld.xpath("./p:bg"):
                target_csld.remove(old)
            target_csld.insert(0, _remap(_strip_unmapped_links(deepcopy(source_bg[0]), rid_map), rid_map))

        return PptxSlide(new_slide, base_dir=self.base_dir)

    def save(self, output_path: Path) -> Path:
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        self.prs.save(str(output))
        self.path = output
        return output


def _relationship_attrs(element):
    for node in element.iter():
        if not isinstance(node.tag, str):
            continue
        for attr, value in node.attrib.items():
            if attr.startswith(f"{{{R_NS}}}"):
                yield node, attr, value


def _unmapped_refs(element, rid_map: Dict[str, str]) -> bool:
    return any(value and value not in rid_map for _, _, value in _relationship_attrs(element))


def _remap(element, rid_map: Dict[str, str]):
    for node, attr, value in list(_relationship_attrs(element)):
        node.set(attr, rid_map.get(value, value))
    return element


def _strip_unmapped_links(element, rid_map: Dict[str, str]):
    """Drop hyperlinks whose target stays behind in the source deck, such as slide jumps."""
    for link in list(element.iter(*HYPERLINK_TAGS)):
        rid = link.get(f"{{{R_NS}}}id", "")
        if rid and rid not in rid_map:
            link.getparent().remove(link)
    return element
