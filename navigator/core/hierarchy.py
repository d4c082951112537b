"""
TOC Hierarchy Component.

Groups a flat, page-ordered list of entries into sections with sub-entries.
"""

from typing import Iterable, List, Optional, Sequence

from core.constants import SECTION_KEYWORDS, SECTION_PAGE_GAP
from core.models import TocEntry, TocSection


class TocHierarchyBuilder:
    """
    Builds two-level TOC structures.

    An entry opens a new section when its title contains a section keyword,
    when no section exists yet, or when its page jumps more than
    ``page_gap`` pages past the current section. Everything else becomes
    a sub-entry of the nearest preceding section.
    """

    def __init__(
        self,
        keywords: Sequence[str] = SECTION_KEYWORDS,
        page_gap: int = SECTION_PAGE_GAP
    ):
        self.keywords = tuple(keyword.lower() for keyword in keywords)
        self.page_gap = page_gap

    def is_section_start(self, entry: TocEntry, current: Optional[TocSection]) -> bool:
        if current is None:
            return True
        title = entry.title.lower()
        if any(keyword in title for keyword in self.keywords):
            return True
        return entry.page > current.page + self.page_gap

    def build(self, entries: Iterable[TocEntry]) -> List[TocSection]:
        """
        Group entries into sections.

        Args:
            entries: Entries sorted by page

        Returns:
            Sections in input order
        """
        sections = []
        current = None

        for entry in entries:
            if self.is_section_start(entry, current):
                current = TocSection(title=entry.title, page=entry.page)
                sections.append(current)
            else:
                current.sub_entries.append(TocEntry(title=entry.title, page=entry.page))

        return sections

    @staticmethod
    def flatten(sections: Iterable[TocSection]) -> List[TocEntry]:
        """Return sections and their sub-entries as one ordered list."""
        flat = []
        for section in sections:
            flat.append(TocEntry(title=section.title, page=section.page))
            flat.extend(section.sub_entries)
        return flat
