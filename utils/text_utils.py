"""
Text utilities for TOC parsing.

Handles title cleaning and number token extraction.
"""
import re
from typing import List, Optional, Sequence, Tuple

from core.constants import PAGE_NUMBER_TOKEN_PATTERN, TITLE_CONFUSABLES


def collapse_leader_dots(text: str) -> str:
    """Replace runs of two or more dots with a single space."""
    return re.sub(r'\.{2,}', ' ', text)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs and trim."""
    return re.sub(r'\s+', ' ', text).strip()


def fix_confusables(text: str, table: Sequence[Tuple[str, str]] = TITLE_CONFUSABLES) -> str:
    """
    Correct common Roman-numeral misreads.

    Args:
        text: Title text
        table: Ordered (pattern, replacement) pairs

    Returns:
        Corrected text
    """
    for pattern, replacement in table:
        text = re.sub(pattern, replacement, text)
    return text


def split_lines(text: str) -> List[str]:
    """Split OCR output into trimmed, non-empty lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def find_page_number(text: str, page_count: int) -> Optional[int]:
    """
    Find the last plausible page number in a text fragment.

    Args:
        text: Text to search
        page_count: Highest acceptable value

    Returns:
        Page number within [1, page_count] or None
    """
    if not text:
        return None

    candidates = [int(token) for token in re.findall(PAGE_NUMBER_TOKEN_PATTERN, text)]
    for number in reversed(candidates):
        if 1 <= number <= page_count:
            return number
    return None
