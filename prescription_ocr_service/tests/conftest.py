import pytest

@pytest.fixture(autouse=True)
def _no_provider_env(monkeypatch):
    # tests never talk to real providers
    for name in ("OCR_PROVIDER", "GOOGLE_VISION_API_KEY", "OPENAI_API_KEY", "HF_TOKEN"):
        monkeypatch.delenv(name, raising=False)
