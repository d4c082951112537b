"""
TOC Extraction Processor.

High-level orchestrator choosing how a document's TOC is discovered.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from core import constants
from core.models import MenuNode, PrintedPageMap, TocEntry, TocResult, TocSection
from ..core import LineReconstructor, OutlineAdapter, TocHierarchyBuilder, TocLineParser

logger = logging.getLogger(__name__)


class StrategyStatus(Enum):
    """Result kind of one extraction strategy."""
    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


@dataclass
class StrategyOutcome:
    """What a strategy produced."""
    status: StrategyStatus
    source: str
    menu: List[MenuNode] = field(default_factory=list)
    message: str = ""


class TocExtractionOrchestrator:
    """
    Runs the TOC strategies in order of cost.

    The native outline wins whenever it exists. Otherwise the text layer of
    the candidate TOC page is parsed, and only if that produces nothing are
    the leading pages scanned with OCR. A strategy that succeeds ends the chain.
    """

    def __init__(
        self,
        ocr_engine=None,
        language: str = "eng",
        line_tolerance: float = constants.LINE_TOLERANCE,
        section_keywords: Sequence[str] = constants.SECTION_KEYWORDS,
        section_page_gap: int = constants.SECTION_PAGE_GAP,
        toc_candidate_page: int = constants.TOC_CANDIDATE_PAGE,
        min_toc_pages: int = constants.MIN_TOC_PAGES,
        ocr_scan_window: int = constants.OCR_SCAN_WINDOW,
        ocr_scale: float = constants.OCR_RENDER_SCALE
    ):
        self.ocr_engine = ocr_engine
        self.language = language
        self.toc_candidate_page = toc_candidate_page
        self.min_toc_pages = min_toc_pages
        self.ocr_scan_window = ocr_scan_window
        self.ocr_scale = ocr_scale

        self.line_reconstructor = LineReconstructor(tolerance=line_tolerance)
        self.parser = TocLineParser()
        self.hierarchy_builder = TocHierarchyBuilder(
            keywords=section_keywords,
            page_gap=section_page_gap
        )

    @classmethod
    def from_settings(cls, settings, ocr_engine=None) -> 'TocExtractionOrchestrator':
        """Create an orchestrator from a Settings instance."""
        return cls(
            ocr_engine=ocr_engine,
            language=settings.ocr_language,
            ocr_scale=settings.ocr_render_scale,
            **settings.get_toc_config()
        )

    async def extract(self, document, printed_map: Optional[PrintedPageMap] = None) -> TocResult:
        """
        Discover the TOC of a document.

        Args:
            document: PDFDocument
            printed_map: Printed page map; when given, heuristic entries keep
                their printed numbers and are translated at navigation time

        Returns:
            TocResult describing the menu and where it came from
        """
        outcome = await self.from_outline(document)
        if outcome.status is StrategyStatus.SUCCESS:
            return self._found(outcome)

        if document.page_count < self.min_toc_pages:
            logger.info("PDF too short for TOC (%d pages)", document.page_count)
            return TocResult(
                source=constants.TOC_SOURCE_NONE,
                status=constants.TOC_STATUS_TOO_SHORT,
                message="PDF too short for TOC."
            )

        for strategy in (self.from_text_layer, self.from_ocr_scan):
            outcome = await strategy(document, printed_map)
            if outcome.status is StrategyStatus.SUCCESS:
                return self._found(outcome)
            logger.info("%s strategy: %s %s", outcome.source, outcome.status.value, outcome.message)

        return TocResult(
            source=constants.TOC_SOURCE_NONE,
            status=constants.TOC_STATUS_NOT_FOUND,
            message="No TOC found. Use page controls."
        )

    @staticmethod
    def _found(outcome: StrategyOutcome) -> TocResult:
        logger.info("Built TOC menu from %s", outcome.source)
        return TocResult(
            source=outcome.source,
            status=constants.TOC_STATUS_FOUND,
            menu=outcome.menu,
            message=outcome.message
        )

    async def from_outline(self, document) -> StrategyOutcome:
        """Build the menu from the document's native outline."""
        source = constants.TOC_SOURCE_OUTLINE
        try:
            outline = document.get_outline()
        except (RuntimeError, ValueError) as e:
            logger.warning("Cannot read outline: %s", e)
            return StrategyOutcome(StrategyStatus.FAILURE, source, message=str(e))

        if not outline:
            return StrategyOutcome(StrategyStatus.EMPTY, source, message="no outline")

        adapter = OutlineAdapter(document)
        menu = adapter.build(outline)
        unresolved = adapter.count_unresolved(menu)
        message = f"{unresolved} entries without target" if unresolved else ""
        return StrategyOutcome(StrategyStatus.SUCCESS, source, menu, message)

    async def from_text_layer(self, document, printed_map: Optional[PrintedPageMap] = None) -> StrategyOutcome:
        """Parse the candidate TOC page's embedded text."""
        source = constants.TOC_SOURCE_TEXT
        index = self.toc_candidate_page
        try:
            runs = document.get_positioned_text(index)
        except (IndexError, RuntimeError, ValueError) as e:
            logger.warning("TOC error on page %d: %s", index, e)
            return StrategyOutcome(StrategyStatus.FAILURE, source, message=str(e))

        if not runs:
            return StrategyOutcome(StrategyStatus.EMPTY, source, message=f"no text on page {index}")

        lines = self.line_reconstructor.reconstruct(runs)
        entries = self.parser.parse(lines)
        menu = self.entries_to_menu(entries, index, document.page_count, printed_map)
        if not menu:
            return StrategyOutcome(StrategyStatus.EMPTY, source, message=f"no entries on page {index}")

        return StrategyOutcome(StrategyStatus.SUCCESS, source, menu, f"page {index}")

    async def from_ocr_scan(self, document, printed_map: Optional[PrintedPageMap] = None) -> StrategyOutcome:
        """OCR the leading pages until one of them parses as a TOC."""
        source = constants.TOC_SOURCE_OCR
        if self.ocr_engine is None:
            return StrategyOutcome(StrategyStatus.EMPTY, source, message="OCR disabled")

        last_page = min(self.ocr_scan_window, document.page_count)
        for index in range(1, last_page + 1):
            try:
                image = await asyncio.to_thread(document.render_page, index, self.ocr_scale)
                text = await self.ocr_engine.recognize(image, self.language)
            except Exception as e:
                logger.warning("OCR failed on page %d: %s", index, e)
                continue

            entries = self.parser.parse_text(text)
            menu = self.entries_to_menu(entries, index, document.page_count, printed_map)
            if menu:
                return StrategyOutcome(StrategyStatus.SUCCESS, source, menu, f"page {index}")

        return StrategyOutcome(StrategyStatus.EMPTY, source, message=f"no TOC in first {last_page} pages")

    def entries_to_menu(
        self,
        entries: List[TocEntry],
        toc_page: int,
        page_count: int,
        printed_map: Optional[PrintedPageMap] = None
    ) -> List[MenuNode]:
        """
        Turn parsed entries into menu nodes.

        Unless the printed page map holds detected numbers, the offset policy
        converts entries to physical indices; otherwise they stay printed
        numbers and are translated at navigation time.
        """
        if printed_map is None or not printed_map.has_detections():
            entries = self.apply_offset(entries, toc_page)
            page_kind = "physical"
        else:
            page_kind = "printed"

        entries = [entry for entry in entries if 1 <= entry.page <= page_count]
        sections = self.hierarchy_builder.build(entries)
        return self.sections_to_menu(sections, page_kind)

    @staticmethod
    def apply_offset(entries: List[TocEntry], toc_page: int) -> List[TocEntry]:
        """
        Shift entries by the TOC page's index when numbering restarts at 1.

        Args:
            entries: Entries sorted by page
            toc_page: Physical index of the page the entries came from

        Returns:
            New list of entries
        """
        if not entries or entries[0].page != 1:
            return list(entries)
        return [TocEntry(title=entry.title, page=entry.page + toc_page) for entry in entries]

    @staticmethod
    def sections_to_menu(sections: List[TocSection], page_kind: str = "physical") -> List[MenuNode]:
        """Convert sections to two-level menu nodes."""
        return [
            MenuNode(
                title=section.title,
                page=section.page,
                page_kind=page_kind,
                children=[
                    MenuNode(title=entry.title, page=entry.page, page_kind=page_kind)
                    for entry in section.sub_entries
                ]
            )
            for section in sections
        ]
