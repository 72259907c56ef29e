# app/services/ocr/google_vision.py
import os
from typing import Any, Dict, Optional

import requests

from app.core.ocr_config import GOOGLE_VISION_URL, OCR_TIMEOUT_S
from app.services.ocr.base import OCRProviderError, encode_image_to_base64, require_text

class GoogleVisionOCR:
    """Cloud Vision images:annotate with TEXT_DETECTION."""

    name = "google"

    def __init__(self, api_key: Optional[str] = None, url: str = GOOGLE_VISION_URL, timeout_s: int = OCR_TIMEOUT_S):
        self._api_key = api_key
        self._url = url
        self._timeout_s = timeout_s

    def _key(self) -> str:
        if self._api_key is not None:
            return self._api_key.strip()
        return os.getenv("GOOGLE_VISION_API_KEY", "").strip()

    def credential_set(self) -> bool:
        return bool(self._key())

    def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        key = self._key()
        if not key:
            raise OCRProviderError("GOOGLE_VISION_API_KEY is missing.")

        payload: Dict[str, Any] = {
            "requests": [
                {
                    "image": {"content": encode_image_to_base64(image_bytes)},
                    "features": [{"type": "TEXT_DETECTION"}],
                }
            ]
        }
        try:
            r = requests.post(self._url, params={"key": key}, json=payload, timeout=self._timeout_s)
        except requests.RequestException as e:
            raise OCRProviderError(f"Google Vision request failed: {e}") from e

        if r.status_code >= 400:
            raise OCRProviderError(f"Google Vision {r.status_code}: {r.text[:300]}")

        try:
            first = (r.json().get("responses") or [{}])[0]
        except (ValueError, AttributeError) as e:
            raise OCRProviderError(f"Unexpected Google Vision response: {r.text[:300]}") from e

        if first.get("error"):
            msg = first["error"].get("message") if isinstance(first["error"], dict) else first["error"]
            raise OCRProviderError(f"Google Vision error: {msg}")

        annotations = first.get("textAnnotations") or []
        if not annotations:
            raise OCRProviderError("No text found in the image")

        return require_text(annotations[0].get("description", ""), self.name)
