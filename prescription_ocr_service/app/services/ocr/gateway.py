# app/services/ocr/gateway.py
import logging
import os
from typing import List, Optional, Sequence

from app.services.errors import OCRFailure
from app.services.ocr.base import OCRProvider
from app.services.ocr.google_vision import GoogleVisionOCR
from app.services.ocr.openai_vision import OpenAIVisionOCR

logger = logging.getLogger(__name__)

def choose_primary(providers: Sequence[OCRProvider], override: Optional[str] = None) -> OCRProvider:
    """
    Explicit override wins (OCR_PROVIDER), otherwise the first provider whose
    credential is configured, otherwise the last one.
    """
    by_name = {p.name: p for p in providers}
    wanted = (override if override is not None else os.getenv("OCR_PROVIDER", "")).strip().lower()
    if wanted in by_name:
        return by_name[wanted]
    if wanted:
        logger.warning("unknown OCR_PROVIDER=%r, falling back to credential check", wanted)
    for p in providers[:-1]:
        if p.credential_set():
            return p
    return providers[-1]

class OCRGateway:
    """Primary provider first, the other one once if it fails."""

    def __init__(self, providers: Optional[Sequence[OCRProvider]] = None, override: Optional[str] = None):
        self.providers: List[OCRProvider] = list(providers or (GoogleVisionOCR(), OpenAIVisionOCR()))
        if len(self.providers) != 2:
            raise ValueError("OCRGateway expects exactly two providers.")
        self._override = override

    def order(self) -> List[OCRProvider]:
        primary = choose_primary(self.providers, self._override)
        return [primary] + [p for p in self.providers if p is not primary]

    def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        primary, secondary = self.order()

        try:
            logger.info("ocr attempt provider=%s", primary.name)
            return primary.extract_text(image_bytes, mime_type)
        except Exception as primary_err:
            logger.warning("ocr provider=%s failed: %s; trying %s", primary.name, primary_err, secondary.name)
            try:
                text = secondary.extract_text(image_bytes, mime_type)
                logger.info("ocr fallback provider=%s succeeded", secondary.name)
                return text
            except Exception as secondary_err:
                logger.error("ocr provider=%s failed too: %s", secondary.name, secondary_err)
                raise OCRFailure(
                    f"{primary.name} OCR failed: {primary_err} "
                    f"(fallback {secondary.name} also failed: {secondary_err})"
                ) from secondary_err
