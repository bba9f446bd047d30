from __future__ import annotations

import sys
from copy import deepcopy
from pathlib import Path
from typing import Dict, List

import pytest
from PIL import Image
from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE, PP_PLACEHOLDER
from pptx.util import Inches

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from uxstarter.backend import Bounds, StoredFile  # noqa: E402
from uxstarter.config import validate_properties  # noqa: E402
from uxstarter.errors import SlideNotFoundError  # noqa: E402

LAYOUT_NAME = "Recommendation"
BEST_PRACTICE_BOUNDS = Bounds(int(Inches(0.5)), int(Inches(3)), int(Inches(4)), int(Inches(3)))
CLIENT_MOCKUP_BOUNDS = Bounds(int(Inches(5)), int(Inches(3)), int(Inches(4.5)), int(Inches(3.5)))

PROPERTIES = {
    "RECOMMENDATIONS_CRITERIA_ID_ROW": "1",
    "RECOMMENDATIONS_CRITERIA_NAME_ROW": "2",
    "RECOMMENDATIONS_APPLIES_ROW": "3",
    "RECOMMENDATIONS_PROBLEM_STATEMENT_ROW": "4",
    "RECOMMENDATIONS_SOLUTION_STATEMENT_ROW": "5",
    "RECOMMENDATIONS_IMAGE_MOCKUP_ROW": "6",
    "RECOMMENDATIONS_INSIGHTS_ROW": "7",
    "RECOMMENDATIONS_SEVERITY_ROW": "8",
    "DEFAULT_IMAGE_MOCKUP": "https://example.com/default-mockup.png",
    "TEMPLATE_DECK_ID": "template.pptx",
    "RECOMMENDATION_LAYOUT": LAYOUT_NAME,
    "INSIGHTS_DECK_ID": "insights.pptx",
    "END_SLIDE_ID": "258",
    "IMAGES_FOLDER_NAME": "Client screenshots",
    "AUDIT_SHEET_NAME": "Audit",
    "RECOMMENDATIONS_SHEET_NAME": "Recommendations",
}


class FakeSlide:
    def __init__(self, layout) -> None:
        self.layout = layout
        self.text: Dict[str, str] = {}
        self.images: List[tuple] = []
        self.anchors = {"best-practice": BEST_PRACTICE_BOUNDS, "client-mockup": CLIENT_MOCKUP_BOUNDS}

    def set_placeholder_text(self, kind: str, text: str) -> None:
        self.text[kind] = text

    def shape_bounds(self, name: str) -> Bounds:
        return self.anchors[name]

    def insert_image(self, image, bounds: Bounds) -> None:
        self.images.append((image, bounds))


class FakeDeck:
    def __init__(self, slides: Dict[str, str] = None) -> None:
        self.source_slides = dict(slides or {})
        self.slides: list = []

    def find_layout(self, name: str):
        return name

    def create_slide(self, layout) -> FakeSlide:
        slide = FakeSlide(layout)
        self.slides.append(slide)
        return slide

    def get_slide_by_id(self, slide_id: str):
        if slide_id not in self.source_slides:
            raise SlideNotFoundError(slide_id)
        return self.source_slides[slide_id]

    def append_slide_copy(self, source):
        copy = {"copied_from": source}
        self.slides.append(copy)
        return copy


class FakeFolder:
    def __init__(self, names: List[str]) -> None:
        self.files = [StoredFile(name=n, path=Path("/drive") / n, mime_type="image/png") for n in names]
        self.queries: List[tuple] = []

    def search_files(self, title_contains: str, mime_contains: str):
        self.queries.append((title_contains, mime_contains))
        for f in self.files:
            if title_contains in f.name and mime_contains in f.mime_type:
                yield f


class FakeNotifier:
    def __init__(self) -> None:
        self.toasts: List[str] = []

    def toast(self, message: str) -> None:
        self.toasts.append(message)


@pytest.fixture
def properties() -> Dict[str, str]:
    return dict(PROPERTIES)


@pytest.fixture
def config(properties):
    return validate_properties(properties)


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


def write_png(path: Path, color=(200, 30, 30), size=(40, 30)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format="PNG")
    return path


def _drop_all_slides(prs) -> None:
    slide_id_list = prs.slides._sldIdLst
    for slide_id in list(slide_id_list):
        prs.part.drop_rel(slide_id.rId)
        slide_id_list.remove(slide_id)


def build_template(path: Path, *, cover_title: str = "UX Audit") -> Path:
    """A deck whose "Recommendation" layout has title/subtitle/body placeholders and both image anchors."""
    prs = Presentation()
    layout = prs.slide_layouts[1]
    layout._element.cSld.set("name", LAYOUT_NAME)

    subtitle = next(
        ph for ph in prs.slide_layouts[0].placeholders if ph.placeholder_format.type == PP_PLACEHOLDER.SUBTITLE
    )
    subtitle_el = deepcopy(subtitle._element)
    subtitle_el.xpath("./p:nvSpPr/p:nvPr/p:ph")[0].set("idx", "13")
    layout.shapes._spTree.append(subtitle_el)

    scratch = prs.slides.add_slide(prs.slide_layouts[6])
    for name, bounds in (("best-practice", BEST_PRACTICE_BOUNDS), ("client-mockup", CLIENT_MOCKUP_BOUNDS)):
        box = scratch.shapes.add_shape(MSO_SHAPE.RECTANGLE, *bounds)
        box._element.xpath("./p:nvSpPr/p:cNvPr")[0].set("name", name)
        layout.shapes._spTree.append(deepcopy(box._element))
    _drop_all_slides(prs)

    cover = prs.slides.add_slide(prs.slide_layouts[0])
    cover.shapes.title.text = cover_title

    path.parent.mkdir(parents=True, exist_ok=True)
    prs.save(str(path))
    return path


def build_insights_deck(path: Path, image_path: Path) -> Dict[str, int]:
    """Two insight slides and an end slide; returns their slide ids by title."""
    prs = Presentation()
    ids = {}
    for title in ("Insight one", "Insight two", "Thank you"):
        slide = prs.slides.add_slide(prs.slide_layouts[5])
        slide.shapes.title.text = title
        ids[title] = slide.slide_id
    first = prs.slides.get(ids["Insight one"])
    first.shapes.add_picture(str(image_path), Inches(1), Inches(2), width=Inches(3), height=Inches(2))

    path.parent.mkdir(parents=True, exist_ok=True)
    prs.save(str(path))
    return ids
