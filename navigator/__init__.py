"""
Navigator - Table of contents discovery for PDF documents.

Builds a navigable menu from a PDF's outline, its TOC page text or OCR,
and maps printed page numbers to physical pages.
"""

from .document import PDFDocument
from .session import DocumentSession, SessionManager
from .entry_points import navigator_main, load_pdf_async, create_session_manager

__all__ = [
    'PDFDocument',
    'DocumentSession',
    'SessionManager',
    'navigator_main',
    'load_pdf_async',
    'create_session_manager',
]
