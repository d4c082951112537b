"""
Pydantic schemas for API request/response validation.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel


class MenuNodeResponse(BaseModel):
    """One entry of the navigation menu."""
    title: str
    page: Optional[int] = None
    page_kind: str = "physical"
    navigable: bool = True
    children: List['MenuNodeResponse'] = []


class TocResponse(BaseModel):
    """Response for a document's TOC."""
    source: str
    status: str
    message: str = ""
    menu: List[MenuNodeResponse] = []


class PrintedPageResponse(BaseModel):
    """Printed number detected for one physical page."""
    printed: Optional[int] = None
    source: str


class SessionResponse(BaseModel):
    """Response for the loaded document."""
    session_id: str
    filename: str
    page_count: int
    current_page: int
    toc: TocResponse
    printed_pages: Optional[Dict[str, PrintedPageResponse]] = None


class TargetResponse(BaseModel):
    """Physical page a menu target resolves to."""
    page: int
    page_kind: str
    physical_page: Optional[int] = None


MenuNodeResponse.model_rebuild()
