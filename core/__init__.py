"""Core package - Domain models, constants and errors."""

from .models import (
    GlyphRun,
    TocEntry,
    TocSection,
    OutlineNode,
    MenuNode,
    PrintedPageMap,
    TocResult
)
from .exceptions import (
    NavigatorError,
    DocumentLoadFailure,
    ExtractionTimeout,
    DestinationResolutionFailure,
    PageNumberDetectionFailure,
    StaleLoadError,
    FileTooLargeError
)

__all__ = [
    'GlyphRun',
    'TocEntry',
    'TocSection',
    'OutlineNode',
    'MenuNode',
    'PrintedPageMap',
    'TocResult',
    'NavigatorError',
    'DocumentLoadFailure',
    'ExtractionTimeout',
    'DestinationResolutionFailure',
    'PageNumberDetectionFailure',
    'StaleLoadError',
    'FileTooLargeError'
]
