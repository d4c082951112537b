"""
Page Number Resolution Component.

Responsible for mapping printed page numbers to physical page indices.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from core.constants import (
    OCR_RENDER_SCALE,
    OCR_TAIL_LINES,
    PAGE_NUMBER_BOTTOM_RATIO,
    PAGE_SOURCE_IDENTITY,
    PAGE_SOURCE_OCR,
    PAGE_SOURCE_TEXT
)
from core.exceptions import PageNumberDetectionFailure
from core.models import PrintedPageMap
from utils.text_utils import find_page_number, split_lines

logger = logging.getLogger(__name__)


class PageNumberResolver:
    """
    Detects the printed page number of every physical page.

    The embedded text layer near the bottom of the page is tried first.
    OCR runs only for pages where that fails. Pages with no legible number
    are mapped to themselves.
    """

    def __init__(
        self,
        document,
        ocr_engine=None,
        language: str = "eng",
        bottom_ratio: float = PAGE_NUMBER_BOTTOM_RATIO,
        ocr_scale: float = OCR_RENDER_SCALE,
        tail_lines: int = OCR_TAIL_LINES
    ):
        """
        Initialize resolver.

        Args:
            document: PDFDocument (or any object with the same page API)
            ocr_engine: Optional OCREngine used when the text layer fails
            language: OCR language hint
            bottom_ratio: Fraction of page height searched from the bottom
            ocr_scale: Rasterization scale for OCR input
            tail_lines: Number of trailing OCR lines searched
        """
        self.document = document
        self.ocr_engine = ocr_engine
        self.language = language
        self.bottom_ratio = bottom_ratio
        self.ocr_scale = ocr_scale
        self.tail_lines = tail_lines

    def detect_from_text(self, index: int) -> Optional[int]:
        """
        Read the printed number from the page's bottom text.

        Args:
            index: 1-indexed physical page

        Returns:
            Printed page number or None
        """
        _, height = self.document.page_size(index)
        limit = height * self.bottom_ratio

        runs = [run for run in self.document.get_positioned_text(index) if run.y < limit]
        runs.sort(key=lambda run: (-run.y, run.x))
        bottom_text = ' '.join(run.text.strip() for run in runs)
        return find_page_number(bottom_text, self.document.page_count)

    async def detect_from_ocr(self, index: int) -> Optional[int]:
        """
        Read the printed number from an OCR pass over the page.

        Args:
            index: 1-indexed physical page

        Returns:
            Printed page number or None
        """
        if self.ocr_engine is None:
            return None

        image = await asyncio.to_thread(self.document.render_page, index, self.ocr_scale)
        text = await self.ocr_engine.recognize(image, self.language)

        tail = split_lines(text)[-self.tail_lines:] if self.tail_lines > 0 else []
        for line in reversed(tail):
            number = find_page_number(line, self.document.page_count)
            if number is not None:
                return number
        return None

    async def detect(self, index: int) -> Tuple[int, str]:
        """
        Detect one page's printed number.

        Returns:
            (printed number, source)

        Raises:
            PageNumberDetectionFailure: If neither text nor OCR found one
        """
        try:
            number = self.detect_from_text(index)
        except (RuntimeError, ValueError) as e:
            logger.warning("Text extraction failed on page %d: %s", index, e)
            number = None
        if number is not None:
            return number, PAGE_SOURCE_TEXT

        try:
            number = await self.detect_from_ocr(index)
        except Exception as e:
            logger.warning("OCR failed on page %d: %s", index, e)
            number = None
        if number is not None:
            return number, PAGE_SOURCE_OCR

        raise PageNumberDetectionFailure(f"No printed number on page {index}")

    async def build_map(self) -> PrintedPageMap:
        """
        Build the printed-to-physical map for the whole document.

        Pages are processed in physical order, one at a time.

        Returns:
            PrintedPageMap with one assignment per physical page
        """
        detections: List[Tuple[int, Optional[int], str]] = []

        for index in range(1, self.document.page_count + 1):
            try:
                number, source = await self.detect(index)
            except PageNumberDetectionFailure as e:
                logger.debug("%s, using identity", e)
                number, source = None, PAGE_SOURCE_IDENTITY
            detections.append((index, number, source))

        printed_map = PrintedPageMap()
        pending = []

        for index, number, source in detections:
            if number is not None and not printed_map.is_claimed(number):
                printed_map.add(number, index, source)
            else:
                if number is not None:
                    logger.info(
                        "Page %d claims printed %d already used by page %d",
                        index, number, printed_map.physical_for(number)
                    )
                pending.append(index)

        for index in pending:
            if printed_map.is_claimed(index):
                logger.info("Page %d has no free printed key, reachable by index only", index)
                printed_map.add(None, index, PAGE_SOURCE_IDENTITY)
            else:
                printed_map.add(index, index, PAGE_SOURCE_IDENTITY)

        logger.info(
            "Printed page map built: %d pages, %d identity fallbacks",
            len(printed_map), len(pending)
        )
        return printed_map
