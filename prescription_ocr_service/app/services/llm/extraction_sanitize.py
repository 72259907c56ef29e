# app/services/llm/extraction_sanitize.py
import json
import re
from typing import Any, Dict, List

from app.schemas.models import NOT_SPECIFIED, MedicationRecord
from app.services.admin_times import ADMIN_TIMES
from app.services.llm.extraction_schema import LIST_FIELDS, SCALAR_FIELDS, TEXT_FIELDS
from app.services.normalization import normalize_text

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")

class ExtractionParseError(ValueError):
    pass

def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", (text or "").strip()).strip()

def parse_record_json(text: str) -> Dict[str, Any]:
    """Parse JSON even if the model wraps it in fences or extra text."""
    text = strip_code_fences(text)
    data: Any = None
    try:
        data = json.loads(text)
    except ValueError:
        start = text.find("{")
        end = text.rfind("}")
        if start != -1 and end != -1 and end > start:
            try:
                data = json.loads(text[start : end + 1])
            except ValueError:
                pass

    if not isinstance(data, dict):
        raise ExtractionParseError(f"Model did not return a JSON object. Got: {text[:200]}...")
    return data

def _clean_scalar(v: Any) -> str:
    if v is None or isinstance(v, (dict, list)):
        return NOT_SPECIFIED
    s = str(v).strip()
    return s or NOT_SPECIFIED

def _clean_admin_times(v: Any) -> List[str]:
    if isinstance(v, str):
        v = [v]
    if not isinstance(v, list):
        return []
    given = {str(item).strip().lower() for item in v if item is not None}
    # only known phrases, in ADMIN_TIMES order
    return [p for p in ADMIN_TIMES if p.lower() in given]

def sanitize_record(raw: Dict[str, Any], raw_text: str) -> MedicationRecord:
    fields: Dict[str, Any] = {}
    for key, attr in SCALAR_FIELDS.items():
        fields[attr] = _clean_scalar(raw.get(key))
    for key, attr in LIST_FIELDS.items():
        fields[attr] = _clean_admin_times(raw.get(key))
    for key, attr in TEXT_FIELDS.items():
        full = raw.get(key)
        full = str(full).strip() if isinstance(full, str) else ""
        fields[attr] = full or normalize_text(raw_text)
    return MedicationRecord(**fields)
