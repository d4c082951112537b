"""
Core domain models for the PDF navigator.

These are pure data structures without business logic.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .constants import PAGE_SOURCE_IDENTITY


@dataclass(frozen=True)
class GlyphRun:
    """A positioned text fragment on one page.

    ``y`` is the baseline in PDF user space (origin at the bottom-left),
    so a larger value is higher on the page.
    """
    text: str
    x: float
    y: float


@dataclass
class TocEntry:
    """A single (title, page) pair parsed from a TOC page."""
    title: str
    page: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'title': self.title, 'page': self.page}


@dataclass
class TocSection:
    """Top-level TOC grouping with its nested sub-entries."""
    title: str
    page: int
    sub_entries: List[TocEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'title': self.title,
            'page': self.page,
            'sub_entries': [entry.to_dict() for entry in self.sub_entries]
        }


@dataclass
class OutlineNode:
    """A node of the document-supplied outline tree."""
    title: str
    destination: Any = None
    children: List['OutlineNode'] = field(default_factory=list)


@dataclass
class MenuNode:
    """
    A navigable menu entry.

    ``page`` is None when the target could not be resolved; such nodes are
    shown but cannot be activated. ``page_kind`` tells whether ``page`` is a
    physical index or a printed page number still to be translated.
    """
    title: str
    page: Optional[int] = None
    page_kind: str = "physical"
    children: List['MenuNode'] = field(default_factory=list)

    @property
    def navigable(self) -> bool:
        """Whether the node has a target."""
        return self.page is not None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'title': self.title,
            'page': self.page,
            'page_kind': self.page_kind,
            'navigable': self.navigable,
            'children': [child.to_dict() for child in self.children]
        }


@dataclass
class PageNumberAssignment:
    """How one physical page got its printed number."""
    physical: int
    printed: Optional[int]
    source: str


class PrintedPageMap:
    """
    Mapping from printed page numbers to physical page indices.

    Every physical page is recorded exactly once. A printed key belongs to at
    most one physical page; pages that could not claim a key are still listed
    under ``physical_pages`` with ``printed_for()`` returning None.
    """

    def __init__(self):
        self._by_printed: Dict[int, int] = {}
        self._assignments: Dict[int, PageNumberAssignment] = {}

    def add(self, printed: Optional[int], physical: int, source: str) -> None:
        if physical in self._assignments:
            raise ValueError(f"Physical page {physical} already mapped")
        if printed is not None:
            if printed in self._by_printed:
                raise ValueError(f"Printed page {printed} already mapped")
            self._by_printed[printed] = physical
        self._assignments[physical] = PageNumberAssignment(physical, printed, source)

    def is_claimed(self, printed: int) -> bool:
        """Whether a printed key is already taken."""
        return printed in self._by_printed

    def physical_for(self, printed: int) -> Optional[int]:
        """Translate a printed page number into a physical index."""
        return self._by_printed.get(printed)

    def printed_for(self, physical: int) -> Optional[int]:
        """Printed page number recorded for a physical page."""
        assignment = self._assignments.get(physical)
        return assignment.printed if assignment else None

    def has_detections(self) -> bool:
        """Whether any page number was read from the page rather than assumed."""
        return any(
            assignment.source != PAGE_SOURCE_IDENTITY and assignment.printed is not None
            for assignment in self._assignments.values()
        )

    def source_for(self, physical: int) -> Optional[str]:
        assignment = self._assignments.get(physical)
        return assignment.source if assignment else None

    @property
    def physical_pages(self) -> List[int]:
        return sorted(self._assignments)

    def items(self) -> Iterator:
        """Iterate ``(printed, physical)`` pairs ordered by physical page."""
        for printed, physical in sorted(self._by_printed.items(), key=lambda kv: kv[1]):
            yield printed, physical

    def __contains__(self, printed: int) -> bool:
        return printed in self._by_printed

    def __getitem__(self, printed: int) -> int:
        return self._by_printed[printed]

    def __len__(self) -> int:
        return len(self._assignments)

    def to_dict(self) -> dict:
        """Convert to dictionary keyed by physical page."""
        return {
            str(physical): {
                'printed': assignment.printed,
                'source': assignment.source
            }
            for physical, assignment in sorted(self._assignments.items())
        }


@dataclass
class TocResult:
    """Outcome of TOC extraction for one document."""
    source: str
    status: str
    menu: List[MenuNode] = field(default_factory=list)
    message: str = ""

    @property
    def found(self) -> bool:
        return self.status == "found"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'source': self.source,
            'status': self.status,
            'message': self.message,
            'menu': [node.to_dict() for node in self.menu]
        }
