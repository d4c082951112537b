"""
Error kinds raised by the navigator.

Only DocumentLoadFailure and ExtractionTimeout reach the user. The
per-page and per-node errors are recovered where they occur.
"""


class NavigatorError(Exception):
    """Base class for navigator errors."""


class DocumentLoadFailure(NavigatorError):
    """Input is corrupt, unsupported, or rejected before loading."""


class ExtractionTimeout(NavigatorError):
    """Loading the document exceeded the time budget."""


class DestinationResolutionFailure(NavigatorError):
    """An outline destination does not point at a page of the document."""


class PageNumberDetectionFailure(NavigatorError):
    """Neither embedded text nor OCR produced a printed page number."""


class StaleLoadError(NavigatorError):
    """A load finished after a newer load had already started."""


class FileTooLargeError(DocumentLoadFailure):
    """Input exceeds the configured size limit."""
