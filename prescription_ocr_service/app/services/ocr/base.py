# app/services/ocr/base.py
import base64
from typing import Protocol

class OCRProviderError(RuntimeError):
    pass

class OCRProvider(Protocol):
    name: str

    def credential_set(self) -> bool: ...

    def extract_text(self, image_bytes: bytes, mime_type: str) -> str: ...

def encode_image_to_base64(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("utf-8")

def require_text(text: str, provider: str) -> str:
    # whitespace-only output is as useless as an error
    if not (text or "").strip():
        raise OCRProviderError(f"{provider}: No text found in the image")
    return text
