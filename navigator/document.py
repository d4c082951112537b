"""
PDF Document adapter.

Wraps a PyMuPDF document behind the handful of calls the TOC pipeline needs:
page count, positioned text, native outline, destination resolution and
rasterization. Page indices are 1-based throughout.
"""

import logging
from typing import Any, Dict, List, Tuple

import fitz  # PyMuPDF
from PIL import Image

from core.exceptions import DocumentLoadFailure, DestinationResolutionFailure
from core.models import GlyphRun, OutlineNode
from utils.image_utils import render_page_to_image

logger = logging.getLogger(__name__)


class PDFDocument:
    """A loaded PDF document."""

    def __init__(self, doc: fitz.Document):
        self._doc = doc

    @classmethod
    def open(cls, data: bytes) -> 'PDFDocument':
        """
        Parse PDF bytes.

        Args:
            data: Raw file content

        Returns:
            PDFDocument

        Raises:
            DocumentLoadFailure: If the bytes are not a readable PDF
        """
        if not data:
            raise DocumentLoadFailure("Empty file")

        try:
            doc = fitz.open(stream=data, filetype="pdf")
            page_count = doc.page_count
        except Exception as e:
            raise DocumentLoadFailure(f"Cannot open PDF: {e}") from e

        if doc.needs_pass:
            doc.close()
            raise DocumentLoadFailure("PDF is password protected")
        if page_count == 0:
            doc.close()
            raise DocumentLoadFailure("PDF has no pages")

        logger.info("PDF loaded: %d pages", doc.page_count)
        return cls(doc)

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def _page(self, index: int) -> fitz.Page:
        if index < 1 or index > self.page_count:
            raise IndexError(f"Page {index} out of range 1..{self.page_count}")
        return self._doc.load_page(index - 1)

    def page_size(self, index: int) -> Tuple[float, float]:
        """Return (width, height) of a page in PDF units."""
        rect = self._page(index).rect
        return rect.width, rect.height

    def get_positioned_text(self, index: int) -> List[GlyphRun]:
        """
        Extract positioned text spans from a page.

        Args:
            index: 1-indexed page number

        Returns:
            List of GlyphRun with baselines in bottom-up PDF coordinates
        """
        page = self._page(index)
        height = page.rect.height
        runs = []

        for block in page.get_text("dict")["blocks"]:
            if block.get("type", 0) != 0:
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text.strip():
                        continue
                    x, y = span["origin"]
                    runs.append(GlyphRun(text=text, x=x, y=height - y))

        return runs

    def get_outline(self) -> List[OutlineNode]:
        """
        Read the native outline as a tree.

        Returns:
            Top-level outline nodes, empty when the document has none
        """
        toc = self._doc.get_toc(simple=False)
        roots: List[OutlineNode] = []
        stack: List[Tuple[int, OutlineNode]] = []

        for item in toc:
            level, title, page = item[0], item[1], item[2]
            dest = dict(item[3]) if len(item) > 3 and item[3] else {}
            # PyMuPDF resolves most links into the 1-based page column
            dest.setdefault('resolved_page', page)
            node = OutlineNode(title=title or "", destination=dest or None)

            while stack and stack[-1][0] >= level:
                stack.pop()
            if stack:
                stack[-1][1].children.append(node)
            else:
                roots.append(node)
            stack.append((level, node))

        return roots

    def resolve_destination(self, destination: Any) -> int:
        """
        Resolve an outline destination to a physical page index.

        Args:
            destination: Link dictionary from get_outline()

        Returns:
            1-indexed page number

        Raises:
            DestinationResolutionFailure: If the destination is missing,
                external, malformed or points outside the document
        """
        if not isinstance(destination, dict):
            raise DestinationResolutionFailure(f"Unsupported destination: {destination!r}")

        kind = destination.get('kind', fitz.LINK_GOTO)
        if kind not in (fitz.LINK_GOTO, fitz.LINK_NAMED):
            raise DestinationResolutionFailure(f"Destination kind {kind} is not a local page")

        page = self._page_from_destination(destination)
        if page < 1 or page > self.page_count:
            raise DestinationResolutionFailure(f"Destination page {page} out of range")
        return page

    def _page_from_destination(self, destination: Dict) -> int:
        try:
            resolved = destination.get('resolved_page')
            if isinstance(resolved, int) and resolved >= 1:
                return resolved

            zero_based = destination.get('page')
            if isinstance(zero_based, int) and zero_based >= 0:
                return zero_based + 1

            name = destination.get('nameddest') or destination.get('name')
            if name:
                target = self._doc.resolve_link(f"#{name}")
                if target and target[0] >= 0:
                    return target[0] + 1
        except (TypeError, ValueError, RuntimeError) as e:
            raise DestinationResolutionFailure(f"Malformed destination: {e}") from e

        raise DestinationResolutionFailure("Destination does not name a page")

    def render_page(self, index: int, scale: float = 2.0) -> Image.Image:
        """Rasterize a page at the given zoom factor."""
        return render_page_to_image(self._page(index), scale=scale)

    def close(self) -> None:
        self._doc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
