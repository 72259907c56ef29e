from typing import Any, Dict, TypedDict

class PipelineState(TypedDict, total=False):
    # inputs (image path)
    image_bytes: bytes
    mime_type: str

    # OCR output, or the input when text is supplied directly
    raw_text: str

    # outputs
    record: Dict[str, Any]      # MedicationRecord dict (snake_case)
    result: Dict[str, Any]      # ExtractionResult dict (snake_case)
    error: Dict[str, str]       # {"kind": "validation" | "ocr" | "no_text", "message": ...}
