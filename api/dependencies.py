"""
API Dependencies - Dependency injection for FastAPI.

Provides the process-wide session manager.
"""
from functools import lru_cache

from fastapi import Depends, HTTPException

from config.settings import settings
from navigator.entry_points import create_session_manager
from navigator.session import DocumentSession, SessionManager


@lru_cache(maxsize=1)
def get_session_manager() -> SessionManager:
    """
    Dependency for the session manager.

    Returns:
        SessionManager configured from settings
    """
    return create_session_manager(settings)


def get_current_session(manager: SessionManager = Depends(get_session_manager)) -> DocumentSession:
    """
    Dependency for the active document session.

    Raises:
        HTTPException: 404 when no document is loaded
    """
    session = manager.current
    if session is None:
        raise HTTPException(status_code=404, detail="No document loaded")
    return session
