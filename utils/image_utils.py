"""
Image utilities for rendering and OCR.

Handles page rasterization and image encoding.
"""
import base64
from io import BytesIO

import fitz  # PyMuPDF
from PIL import Image


def render_page_to_image(page: fitz.Page, scale: float = 2.0) -> Image.Image:
    """
    Rasterize a PDF page to a PIL image.

    Args:
        page: PyMuPDF page object
        scale: Zoom factor relative to 72 DPI

    Returns:
        RGB PIL Image
    """
    mat = fitz.Matrix(scale, scale)
    pix = page.get_pixmap(matrix=mat, alpha=False)

    img = Image.open(BytesIO(pix.tobytes("png")))
    img.load()
    return img.convert('RGB')


def image_to_png_bytes(img: Image.Image) -> bytes:
    """Encode a PIL image as PNG bytes."""
    buf = BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


def image_to_base64(img: Image.Image) -> str:
    """
    Encode a PIL image as base64 PNG.

    Args:
        img: PIL Image

    Returns:
        Base64-encoded PNG string
    """
    return base64.b64encode(image_to_png_bytes(img)).decode()
