# app/services/llm/extraction.py
import logging
from typing import Callable, Optional

from app.schemas.models import EXTRACTION_FAILED, NOT_SPECIFIED, MedicationRecord
from app.services.admin_times import detect_admin_times
from app.services.hf_client import hf_generate_text
from app.services.llm.extraction_prompt import build_extraction_prompt
from app.services.llm.extraction_sanitize import parse_record_json, sanitize_record
from app.services.llm.extraction_schema import RECORD_KEYS
from app.services.normalization import normalize_text

logger = logging.getLogger(__name__)

TextGenerator = Callable[[str], str]

def degraded_record(raw_text: str) -> MedicationRecord:
    """Record shown when the model call or its output could not be used."""
    normalized = normalize_text(raw_text)
    return MedicationRecord(
        medicine_name=EXTRACTION_FAILED,
        medicine_type=NOT_SPECIFIED,
        quantity=NOT_SPECIFIED,
        frequency=NOT_SPECIFIED,
        taking_method=NOT_SPECIFIED,
        admin_times=detect_admin_times(normalized),
        full_text=normalized,
    )

class StructuredExtractor:
    """
    Turns OCR text into a MedicationRecord using a text-generation model.
    extract() never raises: any failure yields degraded_record().
    """

    def __init__(self, generate: Optional[TextGenerator] = None):
        self._generate = generate or hf_generate_text

    def extract(self, raw_text: str) -> MedicationRecord:
        try:
            prompt = build_extraction_prompt(raw_text, RECORD_KEYS)
            reply = self._generate(prompt)
            data = parse_record_json(reply)
            return sanitize_record(data, raw_text)
        except Exception as e:
            logger.warning("structured extraction degraded: %s", e)
            return degraded_record(raw_text)
