"""
Configuration management using Pydantic Settings.

Environment variables (prefix PDFNAV_):
- PDFNAV_OCR_BACKEND: OCR engine ("tesseract", "vllm" or "none")
- PDFNAV_OCR_LANGUAGE: Language passed to the OCR engine
- PDFNAV_VLLM_API_KEY: API key for vLLM server
- PDFNAV_VLLM_SERVER_URL: Base URL for vLLM server
- PDFNAV_LOAD_TIMEOUT: Seconds before a document load is abandoned
- PDFNAV_RESOLVE_PRINTED_PAGES: Build the printed-to-physical page map
"""
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

from core import constants


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Line reconstruction
    line_tolerance: float = Field(default=constants.LINE_TOLERANCE)

    # TOC parsing and hierarchy
    section_keywords: List[str] = Field(default_factory=lambda: list(constants.SECTION_KEYWORDS))
    section_page_gap: int = Field(default=constants.SECTION_PAGE_GAP)
    toc_candidate_page: int = Field(default=constants.TOC_CANDIDATE_PAGE)
    min_toc_pages: int = Field(default=constants.MIN_TOC_PAGES)
    ocr_scan_window: int = Field(default=constants.OCR_SCAN_WINDOW)

    # Printed page numbers
    resolve_printed_pages: bool = Field(default=True)
    page_number_bottom_ratio: float = Field(default=constants.PAGE_NUMBER_BOTTOM_RATIO)
    ocr_tail_lines: int = Field(default=constants.OCR_TAIL_LINES)

    # Rendering
    ocr_render_scale: float = Field(default=constants.OCR_RENDER_SCALE)
    display_render_scale: float = Field(default=constants.DISPLAY_RENDER_SCALE)

    # Loading
    load_timeout: float = Field(default=constants.LOAD_TIMEOUT_SECONDS)
    max_file_size: int = Field(default=constants.MAX_FILE_SIZE_BYTES)

    # OCR engine
    ocr_backend: str = Field(default=constants.DEFAULT_OCR_PARAMS['backend'])
    ocr_language: str = Field(default=constants.DEFAULT_OCR_PARAMS['language'])
    ocr_max_tokens: int = Field(default=constants.DEFAULT_OCR_PARAMS['max_tokens'])
    ocr_temperature: float = Field(default=constants.DEFAULT_OCR_PARAMS['temperature'])
    vllm_api_key: str = Field(default="123")
    vllm_server_url: str = Field(default="http://localhost:8000/v1")
    vllm_model: str = Field(default="ocr")

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8002)

    class Config:
        env_prefix = "PDFNAV_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def get_toc_config(self) -> dict:
        """Get TOC heuristic configuration as dictionary."""
        return {
            'line_tolerance': self.line_tolerance,
            'section_keywords': list(self.section_keywords),
            'section_page_gap': self.section_page_gap,
            'toc_candidate_page': self.toc_candidate_page,
            'min_toc_pages': self.min_toc_pages,
            'ocr_scan_window': self.ocr_scan_window,
        }


# Global settings instance
settings = Settings()
