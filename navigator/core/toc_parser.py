"""
TOC Line Parsing Component.

Responsible for turning text lines of a TOC page into (title, page) entries.
"""

import re
from typing import Iterable, List, Optional

from core.constants import MIN_TITLE_LENGTH, TOC_PAGE_PATTERN
from core.models import TocEntry
from utils.text_utils import (
    collapse_leader_dots,
    collapse_whitespace,
    fix_confusables,
    split_lines
)


class TocLineParser:
    """
    Classifies lines as TOC entries.

    A line is an entry when it ends in a 1-3 digit page number and what
    precedes it is a usable title.
    """

    def __init__(self, min_title_length: int = MIN_TITLE_LENGTH):
        self.min_title_length = min_title_length
        self._page_re = re.compile(TOC_PAGE_PATTERN)

    def parse_line(self, line: str) -> Optional[TocEntry]:
        """
        Parse one line.

        Args:
            line: Line of text

        Returns:
            TocEntry, or None if the line is not an entry
        """
        match = self._page_re.search(line)
        if not match:
            return None

        page = int(match.group(1))
        if page == 0:
            return None

        title = self.normalize_title(line[:match.start()])
        if len(title) < self.min_title_length:
            return None

        return TocEntry(title=title, page=page)

    @staticmethod
    def normalize_title(title: str) -> str:
        """Drop leader dots, collapse whitespace and fix numeral misreads."""
        title = collapse_whitespace(collapse_leader_dots(title))
        return fix_confusables(title)

    def parse(self, lines: Iterable[str]) -> List[TocEntry]:
        """
        Parse lines into entries sorted by page.

        Args:
            lines: Lines of one candidate TOC page

        Returns:
            Entries in ascending page order
        """
        entries = []
        for line in lines:
            entry = self.parse_line(line)
            if entry is not None:
                entries.append(entry)

        entries.sort(key=lambda entry: entry.page)
        return entries

    def parse_text(self, text: str) -> List[TocEntry]:
        """Parse a block of text such as OCR output."""
        return self.parse(split_lines(text))
