"""
Entry points for the navigator.

Provides simple functions to load a PDF from disk and get its TOC.
"""

import asyncio
import os
from typing import Dict, Optional

from core.exceptions import DocumentLoadFailure
from services.ocr_service import create_ocr_engine
from .session import DocumentSession, SessionManager


def create_session_manager(settings, ocr_engine=None) -> SessionManager:
    """
    Create a SessionManager with the OCR engine named in settings.

    Args:
        settings: Settings instance
        ocr_engine: Explicit engine overriding settings.ocr_backend

    Returns:
        SessionManager
    """
    if ocr_engine is None:
        ocr_engine = create_ocr_engine(settings)
    return SessionManager(settings, ocr_engine=ocr_engine)


async def load_pdf_async(pdf_path: str, manager: SessionManager) -> DocumentSession:
    """
    Read a PDF file and load it into the manager.

    Args:
        pdf_path: Path to PDF file
        manager: SessionManager to load into

    Returns:
        The loaded session
    """
    if not os.path.exists(pdf_path):
        raise DocumentLoadFailure(f"File not found: {pdf_path}")

    with open(pdf_path, 'rb') as f:
        data = f.read()

    return await manager.load(data, filename=os.path.basename(pdf_path))


def navigator_main(pdf_path: str, settings, ocr_engine=None) -> Dict:
    """
    Main entry point for TOC extraction.

    Args:
        pdf_path: Path to PDF file
        settings: Settings instance
        ocr_engine: Optional OCR engine override

    Returns:
        Session dictionary with 'toc' and 'printed_pages'
    """
    async def _run() -> Dict:
        manager = create_session_manager(settings, ocr_engine)
        try:
            session = await load_pdf_async(pdf_path, manager)
            return session.to_dict()
        finally:
            manager.close()

    return asyncio.run(_run())
