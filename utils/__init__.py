"""Utilities package - Helper functions for images and text."""

from .image_utils import (
    render_page_to_image,
    image_to_png_bytes,
    image_to_base64
)

from .text_utils import (
    collapse_leader_dots,
    collapse_whitespace,
    fix_confusables,
    split_lines,
    find_page_number
)

__all__ = [
    # Image utils
    'render_page_to_image',
    'image_to_png_bytes',
    'image_to_base64',

    # Text utils
    'collapse_leader_dots',
    'collapse_whitespace',
    'fix_confusables',
    'split_lines',
    'find_page_number'
]
