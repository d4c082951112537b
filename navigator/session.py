"""
Document sessions.

A DocumentSession owns everything derived from one loaded file: the
document, its printed page map, its TOC and the current page. The
SessionManager replaces the session wholesale on every new load.
"""

import asyncio
import logging
import uuid
from typing import Optional, Union

from core.exceptions import (
    DocumentLoadFailure,
    ExtractionTimeout,
    FileTooLargeError,
    StaleLoadError
)
from core.models import MenuNode, PrintedPageMap, TocResult
from .core import PageNumberResolver
from .document import PDFDocument
from .processors import TocExtractionOrchestrator

logger = logging.getLogger(__name__)


class DocumentSession:
    """State of one loaded document."""

    def __init__(
        self,
        document: PDFDocument,
        filename: str,
        toc: TocResult,
        printed_map: Optional[PrintedPageMap] = None
    ):
        self.session_id = uuid.uuid4().hex
        self.document = document
        self.filename = filename
        self.toc = toc
        self.printed_map = printed_map
        self.current_page = 1
        self._active_renders = 0
        self._close_pending = False
        self.closed = False

    @property
    def page_count(self) -> int:
        return self.document.page_count

    def resolve_target(self, target: Union[MenuNode, int], page_kind: str = "physical") -> Optional[int]:
        """
        Translate a menu node (or bare page number) into a physical page.

        Printed numbers go through the printed page map and fall back to
        the same physical index when the map has no such key.

        Args:
            target: MenuNode or page number
            page_kind: "physical" or "printed", used for bare numbers

        Returns:
            1-indexed physical page, or None when not navigable
        """
        if isinstance(target, MenuNode):
            page, page_kind = target.page, target.page_kind
        else:
            page = target

        if page is None:
            return None

        physical = page
        if page_kind == "printed" and self.printed_map is not None:
            mapped = self.printed_map.physical_for(page)
            if mapped is not None:
                physical = mapped

        if physical < 1 or physical > self.page_count:
            return None
        return physical

    def go_to_page(self, page: int) -> bool:
        """Move to a physical page. Out-of-range requests are ignored."""
        if page < 1 or page > self.page_count:
            return False
        self.current_page = page
        logger.debug("Navigated to page %d", page)
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.current_page - 1)

    async def render_page(self, page: int, scale: float):
        """
        Rasterize a page in a worker thread.

        A close requested while renders are in flight waits for them.
        """
        if self.closed or self._close_pending:
            raise DocumentLoadFailure("Document is no longer loaded")

        self._active_renders += 1
        task = asyncio.ensure_future(asyncio.to_thread(self.document.render_page, page, scale))
        task.add_done_callback(self._render_finished)
        return await asyncio.shield(task)

    def _render_finished(self, task: asyncio.Future) -> None:
        self._active_renders -= 1
        if self._close_pending and self._active_renders == 0:
            self._release()

    def close(self) -> None:
        if self.closed:
            return
        if self._active_renders:
            logger.debug("Deferring close of %s until %d renders finish", self.filename, self._active_renders)
            self._close_pending = True
            return
        self._release()

    def _release(self) -> None:
        self._close_pending = False
        self.closed = True
        self.document.close()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'session_id': self.session_id,
            'filename': self.filename,
            'page_count': self.page_count,
            'current_page': self.current_page,
            'toc': self.toc.to_dict(),
            'printed_pages': self.printed_map.to_dict() if self.printed_map is not None else None
        }


class SessionManager:
    """
    Loads documents and keeps the active session.

    Loads are raced against a timeout. A load that is overtaken by a newer
    one is discarded instead of replacing the active session.
    """

    def __init__(self, settings, ocr_engine=None):
        """
        Initialize session manager.

        Args:
            settings: Settings instance
            ocr_engine: Optional OCREngine for page numbers and TOC scanning
        """
        self.settings = settings
        self.ocr_engine = ocr_engine
        self.orchestrator = TocExtractionOrchestrator.from_settings(settings, ocr_engine)
        self.current: Optional[DocumentSession] = None
        self._generation = 0

    def validate(self, data: bytes, filename: str = "", content_type: Optional[str] = None) -> None:
        """
        Reject input that cannot be a loadable PDF.

        Raises:
            DocumentLoadFailure: Not a PDF
            FileTooLargeError: Over the size limit
        """
        looks_like_pdf = (
            (filename or "").lower().endswith('.pdf')
            or 'pdf' in (content_type or "").lower()
            or data[:5] == b'%PDF-'
        )
        if not data or not looks_like_pdf:
            raise DocumentLoadFailure("Please select a valid PDF file.")

        limit_mb = self.settings.max_file_size // (1024 * 1024)
        if len(data) > self.settings.max_file_size:
            raise FileTooLargeError(f"File too large (>{limit_mb}MB).")

    async def _build_session(self, data: bytes, filename: str) -> DocumentSession:
        document = await asyncio.to_thread(PDFDocument.open, data)
        try:
            printed_map = None
            if self.settings.resolve_printed_pages:
                resolver = PageNumberResolver(
                    document,
                    ocr_engine=self.ocr_engine,
                    language=self.settings.ocr_language,
                    bottom_ratio=self.settings.page_number_bottom_ratio,
                    ocr_scale=self.settings.ocr_render_scale,
                    tail_lines=self.settings.ocr_tail_lines
                )
                printed_map = await resolver.build_map()

            toc = await self.orchestrator.extract(document, printed_map)
        except BaseException:
            document.close()
            raise

        return DocumentSession(document, filename, toc, printed_map)

    async def load(
        self,
        data: bytes,
        filename: str = "",
        content_type: Optional[str] = None
    ) -> DocumentSession:
        """
        Load a document and make it the active session.

        Args:
            data: Raw file content
            filename: Original file name
            content_type: MIME type reported by the client

        Returns:
            The new DocumentSession

        Raises:
            DocumentLoadFailure: Invalid or unreadable input
            ExtractionTimeout: Load exceeded settings.load_timeout
            StaleLoadError: A newer load started while this one ran
        """
        self.validate(data, filename, content_type)

        self._generation += 1
        generation = self._generation
        logger.info("Starting PDF load for %s, size %d", filename, len(data))

        task = asyncio.ensure_future(self._build_session(data, filename))
        try:
            session = await asyncio.wait_for(asyncio.shield(task), timeout=self.settings.load_timeout)
        except asyncio.TimeoutError:
            task.add_done_callback(_close_abandoned)
            raise ExtractionTimeout(f"Loading timeout after {self.settings.load_timeout:g}s")

        if generation != self._generation:
            session.close()
            raise StaleLoadError(f"Load of {filename} was superseded")

        previous, self.current = self.current, session
        if previous is not None:
            previous.close()

        logger.info("Loaded %s: %d pages, TOC %s", filename, session.page_count, session.toc.status)
        return session

    def close(self) -> None:
        """Drop the active session."""
        if self.current is not None:
            self.current.close()
            self.current = None


def _close_abandoned(task: asyncio.Future) -> None:
    """Release the document of a load whose result is no longer wanted."""
    if task.cancelled():
        return
    if task.exception() is not None:
        logger.info("Abandoned load failed: %s", task.exception())
        return
    task.result().close()
