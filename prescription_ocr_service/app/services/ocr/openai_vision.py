# app/services/ocr/openai_vision.py
import os
from typing import Any, Dict, Optional

import requests

from app.core.ocr_config import OCR_TIMEOUT_S, OPENAI_BASE_URL, OPENAI_MODEL_OCR
from app.services.ocr.base import OCRProviderError, encode_image_to_base64, require_text

OCR_INSTRUCTION = (
    "Extract ONLY the medication instructions from this prescription image. "
    "Focus on medication names, dosages, and administration instructions "
    "(like \"take 1 tablet by mouth twice daily\"). Ignore patient information, "
    "doctor information, and other non-medication details. "
    "Return only the medication instructions as plain text."
)

class OpenAIVisionOCR:
    """Vision-capable chat completion used as a text reader."""

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = OPENAI_BASE_URL,
        model: str = OPENAI_MODEL_OCR,
        timeout_s: int = OCR_TIMEOUT_S,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout_s = timeout_s

    def _key(self) -> str:
        if self._api_key is not None:
            return self._api_key.strip()
        return os.getenv("OPENAI_API_KEY", "").strip()

    def credential_set(self) -> bool:
        return bool(self._key())

    def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        key = self._key()
        if not key:
            raise OCRProviderError("OPENAI_API_KEY is missing.")

        payload: Dict[str, Any] = {
            "model": self._model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": OCR_INSTRUCTION},
                        {"type": "image_url", "image_url": {
                            "url": f"data:{mime_type};base64,{encode_image_to_base64(image_bytes)}"
                        }},
                    ],
                }
            ],
            "temperature": 0,
        }
        try:
            r = requests.post(
                f"{self._base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {key}",
                    "Content-Type": "application/json",
                },
                json=payload,
                timeout=self._timeout_s,
            )
        except requests.RequestException as e:
            raise OCRProviderError(f"OpenAI request failed: {e}") from e

        if r.status_code >= 400:
            raise OCRProviderError(f"OpenAI {r.status_code}: {r.text[:300]}")

        try:
            content = r.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise OCRProviderError(f"Unexpected OpenAI response: {r.text[:300]}") from e

        return require_text(content or "", self.name)
