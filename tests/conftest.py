"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import fitz
import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.exceptions import DestinationResolutionFailure
from core.models import GlyphRun


PAGE_WIDTH = 612
PAGE_HEIGHT = 792


def build_pdf(pages, toc=None) -> bytes:
    """
    Build a PDF in memory.

    Args:
        pages: One list per page of (x, y_from_top, text) tuples
        toc: Optional PyMuPDF outline, [[level, title, page], ...]

    Returns:
        PDF bytes
    """
    doc = fitz.open()
    for items in pages:
        page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        for x, y, text in items:
            page.insert_text((x, y), text, fontsize=11)
    if toc:
        doc.set_toc(toc)
    data = doc.tobytes()
    doc.close()
    return data


class FakeDocument:
    """In-memory stand-in for PDFDocument."""

    def __init__(self, page_count, runs=None, outline=None, destinations=None,
                 page_size=(PAGE_WIDTH, PAGE_HEIGHT)):
        self.page_count = page_count
        self.runs = runs or {}
        self.outline = outline or []
        self.destinations = destinations or {}
        self.size = page_size
        self.rendered = []
        self.closed = False

    def page_size(self, index):
        return self.size

    def get_positioned_text(self, index):
        if index < 1 or index > self.page_count:
            raise IndexError(index)
        return list(self.runs.get(index, []))

    def get_outline(self):
        return self.outline

    def resolve_destination(self, destination):
        if destination not in self.destinations:
            raise DestinationResolutionFailure(f"dangling {destination!r}")
        return self.destinations[destination]

    def render_page(self, index, scale=2.0):
        self.rendered.append((index, scale))
        image = Image.new('RGB', (10, 10), color='white')
        image.info['page'] = index
        return image

    def close(self):
        self.closed = True


class FakeOCREngine:
    """OCR engine returning canned text per page."""

    def __init__(self, texts=None, fail_pages=()):
        self.texts = texts or {}
        self.fail_pages = set(fail_pages)
        self.calls = []

    async def recognize(self, image, language="eng"):
        page = image.info.get('page')
        self.calls.append((page, language))
        if page in self.fail_pages:
            raise RuntimeError(f"OCR crashed on page {page}")
        return self.texts.get(page, "")


def toc_runs(lines, top=700.0, step=18.0):
    """Glyph runs for one TOC page, one run per line."""
    return [GlyphRun(text=line, x=72.0, y=top - i * step) for i, line in enumerate(lines)]


def footer_runs(text, y=30.0):
    """Glyph run near the bottom of a page."""
    return [GlyphRun(text=text, x=300.0, y=y)]


@pytest.fixture
def pdf_builder():
    """Provide the in-memory PDF builder."""
    return build_pdf


@pytest.fixture
def fake_document():
    """Provide the FakeDocument class."""
    return FakeDocument


@pytest.fixture
def fake_ocr():
    """Provide the FakeOCREngine class."""
    return FakeOCREngine


@pytest.fixture
def make_toc_runs():
    return toc_runs


@pytest.fixture
def make_footer_runs():
    return footer_runs


@pytest.fixture
def book_pdf(pdf_builder):
    """
    Ten-page book without an outline.

    Pages 1-3 are front matter, page 4 holds the TOC and printed numbering
    starts at 1 on physical page 5.
    """
    pages = [
        [(72, 100, "A Sample Book")],
        [(72, 100, "Copyright 2024")],
        [(72, 100, "Dedication")],
        [
            (72, 80, "Contents"),
            (72, 120, "Introduction .......... 1"),
            (72, 140, "Chapter 1 Basics .......... 2"),
            (72, 160, "Getting started .......... 3"),
            (72, 180, "Chapter 2 Advanced .......... 4"),
        ],
    ]
    for printed in range(1, 7):
        pages.append([
            (72, 100, f"Body text of printed page {printed}"),
            (300, 760, str(printed)),
        ])
    return pdf_builder(pages)


@pytest.fixture
def outline_pdf(pdf_builder):
    """Six-page PDF carrying a native outline."""
    pages = [[(72, 100, f"Page {i}")] for i in range(1, 7)]
    toc = [
        [1, "Part One", 1],
        [2, "Chapter A", 2],
        [2, "Chapter B", 3],
        [1, "Part Two", 5],
    ]
    return pdf_builder(pages, toc=toc)


@pytest.fixture
def short_pdf(pdf_builder):
    """Three-page PDF without outline."""
    return pdf_builder([[(72, 100, f"Page {i}")] for i in range(1, 4)])


@pytest.fixture
def sample_image():
    """Provide a small RGB image."""
    return Image.new('RGB', (100, 100), color='blue')
