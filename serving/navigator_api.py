"""
Navigator API.

Provides endpoints for:
- Uploading a PDF and building its TOC
- Reading the TOC and printed page map of the loaded document
- Resolving menu targets to physical pages
- Rendering pages and moving the current page
"""
import logging

from fastapi import FastAPI, File, UploadFile, Depends, HTTPException, Query
from fastapi.responses import Response

from api.dependencies import get_current_session, get_session_manager
from api.schemas import SessionResponse, TargetResponse, TocResponse
from config.settings import settings
from core.exceptions import (
    DocumentLoadFailure,
    ExtractionTimeout,
    FileTooLargeError,
    StaleLoadError
)
from navigator.session import DocumentSession, SessionManager
from utils.image_utils import image_to_png_bytes

logger = logging.getLogger(__name__)


navigator_app = FastAPI(
    title="PDF Navigator API",
    description="Table of contents discovery and page navigation for PDF documents",
    version="1.2.2"
)


@navigator_app.post("/documents", response_model=SessionResponse)
async def upload_document(
    file: UploadFile = File(...),
    manager: SessionManager = Depends(get_session_manager)
):
    """Load a PDF, replacing the current document."""
    data = await file.read()
    logger.info("Upload received: %s (%d bytes)", file.filename, len(data))
    try:
        session = await manager.load(data, filename=file.filename or "", content_type=file.content_type)
    except FileTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except DocumentLoadFailure as e:
        logger.warning("PDF load error: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except ExtractionTimeout as e:
        raise HTTPException(status_code=504, detail=str(e))
    except StaleLoadError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return session.to_dict()


@navigator_app.get("/documents/current", response_model=SessionResponse)
async def get_document(session: DocumentSession = Depends(get_current_session)):
    """Describe the loaded document."""
    return session.to_dict()


@navigator_app.get("/documents/current/toc", response_model=TocResponse)
async def get_toc(session: DocumentSession = Depends(get_current_session)):
    """Return the navigation menu."""
    return session.toc.to_dict()


@navigator_app.get("/documents/current/target", response_model=TargetResponse)
async def resolve_target(
    page: int = Query(..., ge=1),
    page_kind: str = Query("physical", pattern="^(physical|printed)$"),
    session: DocumentSession = Depends(get_current_session)
):
    """Translate a menu page number into a physical page."""
    return {
        'page': page,
        'page_kind': page_kind,
        'physical_page': session.resolve_target(page, page_kind)
    }


@navigator_app.post("/documents/current/pages/{page}")
async def go_to_page(page: int, session: DocumentSession = Depends(get_current_session)):
    """Make a page the current page."""
    if not session.go_to_page(page):
        raise HTTPException(status_code=404, detail=f"Page {page} out of range")
    return {'current_page': session.current_page, 'page_count': session.page_count}


@navigator_app.get("/documents/current/pages/{page}/image")
async def render_page(page: int, session: DocumentSession = Depends(get_current_session)):
    """Render a page as PNG."""
    if page < 1 or page > session.page_count:
        raise HTTPException(status_code=404, detail=f"Page {page} out of range")

    try:
        image = await session.render_page(page, settings.display_render_scale)
    except DocumentLoadFailure as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(content=image_to_png_bytes(image), media_type="image/png")


@navigator_app.get("/")
async def root():
    """Describe the API."""
    return {
        "name": "PDF Navigator API",
        "version": "1.2.2",
        "endpoints": {
            "upload_document": "POST /documents",
            "get_document": "GET /documents/current",
            "get_toc": "GET /documents/current/toc",
            "resolve_target": "GET /documents/current/target?page=N&page_kind=printed",
            "go_to_page": "POST /documents/current/pages/{page}",
            "render_page": "GET /documents/current/pages/{page}/image"
        }
    }


# Export app for uvicorn
app = navigator_app
