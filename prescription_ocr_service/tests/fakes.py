from typing import List, Optional

from app.services.ocr.base import OCRProviderError

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"

class FakeProvider:
    def __init__(self, name: str, text: Optional[str] = None, error: Optional[str] = None, cred: bool = True):
        self.name = name
        self._text = text
        self._error = error
        self._cred = cred
        self.calls = 0

    def credential_set(self) -> bool:
        return self._cred

    def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        self.calls += 1
        if self._error is not None:
            raise OCRProviderError(self._error)
        return self._text or ""

class FakeGenerator:
    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or ("" if payload is None else str(payload))

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload
