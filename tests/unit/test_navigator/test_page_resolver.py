"""
Unit tests for navigator.core.page_resolver module.
"""
import asyncio

import pytest
from core.exceptions import PageNumberDetectionFailure
from core.models import GlyphRun
from navigator.core.page_resolver import PageNumberResolver


class TestDetectFromText:
    """Tests for PageNumberResolver.detect_from_text."""

    def test_number_in_footer(self, fake_document, make_footer_runs):
        """Test a footer number is read from the bottom band."""
        doc = fake_document(20, runs={3: make_footer_runs("- 12 -")})

        assert PageNumberResolver(doc).detect_from_text(3) == 12

    def test_number_above_band_ignored(self, fake_document):
        """Test numbers higher on the page are not page numbers."""
        doc = fake_document(20, runs={1: [GlyphRun("Chapter 7", 72, 600)]})

        assert PageNumberResolver(doc).detect_from_text(1) is None

    def test_out_of_range_rejected(self, fake_document, make_footer_runs):
        """Test numbers beyond the page count are rejected."""
        doc = fake_document(5, runs={1: make_footer_runs("2024")})

        assert PageNumberResolver(doc).detect_from_text(1) is None

    def test_last_token_wins(self, fake_document):
        """Test the last plausible number in the footer is used."""
        runs = [GlyphRun("Vol 3", 72, 40), GlyphRun("17", 500, 40)]
        doc = fake_document(50, runs={1: runs})

        assert PageNumberResolver(doc).detect_from_text(1) == 17

    def test_bottom_ratio_configurable(self, fake_document):
        """Test the searched band follows bottom_ratio."""
        doc = fake_document(20, runs={1: [GlyphRun("9", 300, 100)]})

        assert PageNumberResolver(doc, bottom_ratio=0.1).detect_from_text(1) is None
        assert PageNumberResolver(doc, bottom_ratio=0.15).detect_from_text(1) == 9


class TestDetectFromOcr:
    """Tests for PageNumberResolver.detect_from_ocr."""

    def test_no_engine(self, fake_document):
        """Test OCR is skipped without an engine."""
        doc = fake_document(5)

        assert asyncio.run(PageNumberResolver(doc).detect_from_ocr(1)) is None
        assert doc.rendered == []

    def test_reads_tail_lines(self, fake_document, fake_ocr):
        """Test the last lines of OCR output are searched, last first."""
        ocr = fake_ocr({2: "Header 1\nBody text\n\nsome words\n4\n"})
        doc = fake_document(10)

        number = asyncio.run(PageNumberResolver(doc, ocr_engine=ocr).detect_from_ocr(2))

        assert number == 4
        assert doc.rendered == [(2, 2.0)]
        assert ocr.calls == [(2, "eng")]

    def test_number_outside_tail_ignored(self, fake_document, fake_ocr):
        """Test numbers above the trailing lines are ignored."""
        ocr = fake_ocr({1: "Page 3\nline a\nline b\nline c"})
        doc = fake_document(10)

        assert asyncio.run(PageNumberResolver(doc, ocr_engine=ocr).detect_from_ocr(1)) is None


class TestDetect:
    """Tests for PageNumberResolver.detect."""

    def test_text_preferred_over_ocr(self, fake_document, fake_ocr, make_footer_runs):
        """Test OCR does not run when the text layer has a number."""
        ocr = fake_ocr({1: "9"})
        doc = fake_document(10, runs={1: make_footer_runs("3")})

        result = asyncio.run(PageNumberResolver(doc, ocr_engine=ocr).detect(1))

        assert result == (3, "text")
        assert ocr.calls == []

    def test_ocr_fallback(self, fake_document, fake_ocr):
        """Test OCR is used when the text layer is empty."""
        ocr = fake_ocr({1: "5"})
        doc = fake_document(10)

        assert asyncio.run(PageNumberResolver(doc, ocr_engine=ocr).detect(1)) == (5, "ocr")

    def test_failure_raised(self, fake_document):
        """Test detection failure is reported per page."""
        doc = fake_document(10)

        with pytest.raises(PageNumberDetectionFailure):
            asyncio.run(PageNumberResolver(doc).detect(1))

    def test_ocr_error_isolated(self, fake_document, fake_ocr):
        """Test an OCR crash becomes a detection failure."""
        ocr = fake_ocr(fail_pages=[1])
        doc = fake_document(10)

        with pytest.raises(PageNumberDetectionFailure):
            asyncio.run(PageNumberResolver(doc, ocr_engine=ocr).detect(1))


class TestBuildMap:
    """Tests for PageNumberResolver.build_map."""

    def test_front_matter_offset(self, fake_document, make_footer_runs):
        """Test printed numbering starting after front matter."""
        runs = {index: make_footer_runs(str(index - 2)) for index in range(3, 7)}
        doc = fake_document(6, runs=runs)

        printed_map = asyncio.run(PageNumberResolver(doc).build_map())

        assert printed_map.physical_for(1) == 3
        assert printed_map.physical_for(4) == 6
        assert printed_map.printed_for(1) is None
        assert printed_map.source_for(1) == "identity"
        assert printed_map.source_for(3) == "text"

    def test_one_assignment_per_page(self, fake_document, fake_ocr, make_footer_runs):
        """Test every physical page is recorded exactly once."""
        runs = {2: make_footer_runs("1"), 3: make_footer_runs("2")}
        ocr = fake_ocr({4: "footer\n3"}, fail_pages=[5])
        doc = fake_document(6, runs=runs)

        printed_map = asyncio.run(PageNumberResolver(doc, ocr_engine=ocr).build_map())

        assert len(printed_map) == 6
        assert printed_map.physical_pages == [1, 2, 3, 4, 5, 6]
        assert printed_map.source_for(4) == "ocr"
        assert [call[0] for call in ocr.calls] == [1, 4, 5, 6]

    def test_totality_without_detections(self, fake_document):
        """Test identity fallback makes every page reachable."""
        doc = fake_document(4)

        printed_map = asyncio.run(PageNumberResolver(doc).build_map())

        for physical in range(1, 5):
            assert printed_map.physical_for(physical) == physical

    def test_duplicate_printed_number_first_wins(self, fake_document, make_footer_runs):
        """Test a repeated printed number stays with the earlier page."""
        runs = {1: make_footer_runs("1"), 2: make_footer_runs("1")}
        doc = fake_document(3, runs=runs)

        printed_map = asyncio.run(PageNumberResolver(doc).build_map())

        assert printed_map.physical_for(1) == 1
        assert printed_map.physical_for(2) == 2
        assert printed_map.source_for(2) == "identity"
        assert printed_map.physical_for(3) == 3
