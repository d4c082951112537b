"""
Constants and default values for TOC discovery.

These are heuristics tuned on sample books, not derived from document
structure. Every one of them can be overridden through config.settings.
"""

# Maximum vertical distance (PDF units) between runs on the same line
LINE_TOLERANCE = 5.0

# Trailing page number of a TOC line (1-3 digits)
TOC_PAGE_PATTERN = r'\s*(\d{1,3})\s*$'

# Minimum title length after normalization
MIN_TITLE_LENGTH = 3

# Roman-numeral misreads, applied in order
TITLE_CONFUSABLES = [
    (r'lV', 'IV'),
    (r'1V', 'IV'),
    (r'Vl', 'vi'),
    (r'l\sV', 'I V'),
]

# Titles containing one of these start a new section
SECTION_KEYWORDS = (
    'chapter',
    'section',
    'progressions',
    'about the book',
)

# A jump of more than this many pages starts a new section
SECTION_PAGE_GAP = 5

# Physical page expected to hold the TOC (after title/copyright pages)
TOC_CANDIDATE_PAGE = 4

# Documents shorter than this are not scanned for a TOC
MIN_TOC_PAGES = 5

# Leading pages scanned with OCR when the text layer yields nothing
OCR_SCAN_WINDOW = 10

# Rasterization scale for OCR input and for display
OCR_RENDER_SCALE = 2.0
DISPLAY_RENDER_SCALE = 2.0

# Fraction of page height (from the bottom) searched for a printed number
PAGE_NUMBER_BOTTOM_RATIO = 0.15

# Number of trailing OCR lines searched for a printed number
OCR_TAIL_LINES = 3

# Printed page-number token
PAGE_NUMBER_TOKEN_PATTERN = r'(?<!\d)(\d{1,4})(?!\d)'

# Document loading limits
LOAD_TIMEOUT_SECONDS = 60.0
MAX_FILE_SIZE_BYTES = 100 * 1024 * 1024

# OCR engine defaults
DEFAULT_OCR_PARAMS = {
    'backend': 'tesseract',
    'language': 'eng',
    'max_tokens': 2048,
    'temperature': 0.0,
}

# Prompt sent to a vLLM OCR server
OCR_PROMPTS = {
    'free_ocr': '<image>\nFree OCR.',
}

# Page-number sources recorded in PrintedPageMap
PAGE_SOURCE_TEXT = 'text'
PAGE_SOURCE_OCR = 'ocr'
PAGE_SOURCE_IDENTITY = 'identity'

# TocResult sources and statuses
TOC_SOURCE_OUTLINE = 'outline'
TOC_SOURCE_TEXT = 'text'
TOC_SOURCE_OCR = 'ocr'
TOC_SOURCE_NONE = 'none'

TOC_STATUS_FOUND = 'found'
TOC_STATUS_TOO_SHORT = 'too_short'
TOC_STATUS_NOT_FOUND = 'not_found'
