"""
Unit tests for navigator.entry_points module.
"""
import asyncio

import pytest
from config.settings import Settings
from core.exceptions import DocumentLoadFailure
from navigator.entry_points import create_session_manager, load_pdf_async, navigator_main


@pytest.fixture
def settings():
    """Settings without OCR."""
    return Settings(ocr_backend="none")


class TestNavigatorMain:
    """Tests for navigator_main function."""

    def test_outline_document(self, settings, outline_pdf, tmp_path):
        """Test a file on disk produces a session dictionary."""
        path = tmp_path / "outline.pdf"
        path.write_bytes(outline_pdf)

        result = navigator_main(str(path), settings)

        assert result['filename'] == "outline.pdf"
        assert result['page_count'] == 6
        assert result['toc']['source'] == "outline"
        assert result['toc']['status'] == "found"

    def test_missing_file(self, settings, tmp_path):
        """Test a missing path is a load failure."""
        with pytest.raises(DocumentLoadFailure):
            navigator_main(str(tmp_path / "missing.pdf"), settings)


class TestCreateSessionManager:
    """Tests for create_session_manager function."""

    def test_no_backend(self, settings):
        """Test OCR can be disabled."""
        assert create_session_manager(settings).ocr_engine is None

    def test_explicit_engine(self, settings, fake_ocr):
        """Test an explicit engine overrides settings."""
        engine = fake_ocr({})

        assert create_session_manager(settings, engine).ocr_engine is engine

    def test_load_pdf_async(self, settings, short_pdf, tmp_path):
        """Test loading sets the manager's current session."""
        path = tmp_path / "short.pdf"
        path.write_bytes(short_pdf)
        manager = create_session_manager(settings)

        async def run():
            session = await load_pdf_async(str(path), manager)
            current = manager.current
            status = session.toc.status
            manager.close()
            return session, current, status

        session, current, status = asyncio.run(run())

        assert current is session
        assert status == "too_short"
