"""
Unit tests for utils.text_utils module.
"""
import pytest
from utils.text_utils import (
    collapse_leader_dots,
    collapse_whitespace,
    fix_confusables,
    split_lines,
    find_page_number
)


class TestCollapseLeaderDots:
    """Tests for collapse_leader_dots function."""

    def test_leader_dots(self):
        """Test dot runs become a space."""
        assert collapse_leader_dots("Intro.......end") == "Intro end"

    def test_single_dot_kept(self):
        """Test single dots are punctuation and stay."""
        assert collapse_leader_dots("IV. Results") == "IV. Results"


class TestCollapseWhitespace:
    """Tests for collapse_whitespace function."""

    def test_collapse(self):
        """Test runs of whitespace collapse and ends are trimmed."""
        assert collapse_whitespace("  a \t b\n c  ") == "a b c"

    def test_empty(self):
        """Test with empty string."""
        assert collapse_whitespace("") == ""


class TestFixConfusables:
    """Tests for fix_confusables function."""

    def test_all_rules(self):
        """Test each table entry."""
        assert fix_confusables("lV") == "IV"
        assert fix_confusables("1V") == "IV"
        assert fix_confusables("Vl") == "vi"
        assert fix_confusables("l V") == "I V"

    def test_custom_table(self):
        """Test a caller-supplied table."""
        assert fix_confusables("0ne", [(r'0', 'O')]) == "One"


class TestSplitLines:
    """Tests for split_lines function."""

    def test_split(self):
        """Test blank lines are dropped and lines trimmed."""
        assert split_lines(" a \n\n b\r\n") == ["a", "b"]

    def test_none(self):
        """Test empty input."""
        assert split_lines("") == []


class TestFindPageNumber:
    """Tests for find_page_number function."""

    def test_last_valid_token(self):
        """Test the last in-range number wins."""
        assert find_page_number("Chapter 3 - 41", 100) == 41

    def test_skip_out_of_range(self):
        """Test out-of-range tokens are skipped."""
        assert find_page_number("7 2024", 100) == 7

    def test_zero_rejected(self):
        """Test page 0 is not a page number."""
        assert find_page_number("0", 10) is None

    def test_no_digits(self):
        """Test text without numbers."""
        assert find_page_number("Preface", 10) is None
        assert find_page_number("", 10) is None
