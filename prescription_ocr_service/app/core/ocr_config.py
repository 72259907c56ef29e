import os

from app.core.env import load_env

load_env()

GOOGLE_VISION_URL = os.getenv("GOOGLE_VISION_URL", "https://vision.googleapis.com/v1/images:annotate")

OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_MODEL_OCR = os.getenv("OPENAI_MODEL_OCR", "gpt-4o")

OCR_TIMEOUT_S = int(os.getenv("OCR_TIMEOUT_S", "60"))

# matches the upload hint shown in the UI ("PNG, JPG up to 10MB")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
