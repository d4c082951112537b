"""
OCR Service - Turns rasterized pages into text.

Two engines are available: a local Tesseract install driven through
pytesseract, and a vLLM OCR model served behind an OpenAI-compatible API.
"""
import asyncio
import logging
from typing import Optional

from PIL import Image

from core.constants import DEFAULT_OCR_PARAMS, OCR_PROMPTS
from utils.image_utils import image_to_base64

logger = logging.getLogger(__name__)


class OCREngine:
    """Interface for OCR engines."""

    async def recognize(self, image: Image.Image, language: str = "eng") -> str:
        """
        Recognize text on an image.

        Args:
            image: Page bitmap
            language: Language hint for the engine

        Returns:
            Recognized text, lines separated by newlines
        """
        raise NotImplementedError


class TesseractOCREngine(OCREngine):
    """OCR through the Tesseract command line tool."""

    def __init__(self, config: str = "--psm 3", tesseract_cmd: Optional[str] = None):
        self.config = config
        self.tesseract_cmd = tesseract_cmd

    def _recognize_sync(self, image: Image.Image, language: str) -> str:
        import pytesseract

        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
        return pytesseract.image_to_string(image, lang=language, config=self.config)

    async def recognize(self, image: Image.Image, language: str = "eng") -> str:
        return await asyncio.to_thread(self._recognize_sync, image, language)


class VLLMOCREngine(OCREngine):
    """OCR using a vision model served by vLLM."""

    def __init__(
        self,
        client,
        model: str = "ocr",
        max_tokens: int = DEFAULT_OCR_PARAMS['max_tokens'],
        temperature: float = DEFAULT_OCR_PARAMS['temperature']
    ):
        """
        Initialize vLLM OCR engine.

        Args:
            client: AsyncOpenAI client instance
            model: Model name (default: "ocr")
            max_tokens: Maximum tokens in the response
            temperature: Sampling temperature
        """
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def recognize(self, image: Image.Image, language: str = "eng") -> str:
        img_b64 = image_to_base64(image)
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{
                "role": "user",
                "content": [
                    {"type": "text", "text": OCR_PROMPTS['free_ocr']},
                    {"type": "image_url", "image_url": {"url": f"data:image/png;base64,{img_b64}"}}
                ]
            }],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            extra_body={
                "skip_special_tokens": False,
            },
            stream=False
        )
        return response.choices[0].message.content or ""


def create_ocr_engine(settings) -> Optional[OCREngine]:
    """
    Build the OCR engine selected in settings.

    Args:
        settings: Settings instance

    Returns:
        OCREngine, or None when OCR is disabled
    """
    backend = (settings.ocr_backend or "none").lower()

    if backend == "none":
        return None
    if backend == "tesseract":
        return TesseractOCREngine()
    if backend == "vllm":
        from openai import AsyncOpenAI

        client = AsyncOpenAI(
            api_key=settings.vllm_api_key,
            base_url=settings.vllm_server_url
        )
        return VLLMOCREngine(
            client=client,
            model=settings.vllm_model,
            max_tokens=settings.ocr_max_tokens,
            temperature=settings.ocr_temperature
        )

    raise ValueError(f"Unknown OCR backend: {settings.ocr_backend}")
