# app/agent/nodes.py
import logging
from typing import Any, Dict

from langchain_core.runnables import RunnableConfig

from app.agent.state import PipelineState
from app.core.ocr_config import MAX_UPLOAD_BYTES
from app.schemas.models import MedicationRecord
from app.services.admin_times import detect_admin_times
from app.services.errors import OCRFailure
from app.services.normalization import normalize_text

logger = logging.getLogger(__name__)

def _collaborator(config: RunnableConfig, key: str):
    try:
        return config["configurable"][key]
    except (KeyError, TypeError):
        raise RuntimeError(f"pipeline run config is missing configurable.{key}")

def _error(kind: str, message: str) -> Dict[str, Any]:
    return {"error": {"kind": kind, "message": message}}

def route_start(state: PipelineState) -> str:
    # text supplied directly skips upload validation + OCR
    return "check_text" if state.get("raw_text") is not None else "validate"

def route_ok(state: PipelineState) -> str:
    return "error" if state.get("error") else "ok"

def validate_node(state: PipelineState) -> Dict[str, Any]:
    data = state.get("image_bytes") or b""
    mime_type = (state.get("mime_type") or "").strip().lower()

    if not data:
        return _error("validation", "No file provided")
    if not mime_type.startswith("image/"):
        return _error("validation", "Please upload a valid image file (PNG or JPEG).")
    if len(data) > MAX_UPLOAD_BYTES:
        limit_mb = MAX_UPLOAD_BYTES / (1024 * 1024)
        return _error("validation", f"Image is too large. Maximum size is {limit_mb:g} MB.")
    return {}

def ocr_node(state: PipelineState, config: RunnableConfig) -> Dict[str, Any]:
    gateway = _collaborator(config, "ocr_gateway")
    try:
        text = gateway.extract_text(state["image_bytes"], state["mime_type"])
    except OCRFailure as e:
        return _error("ocr", f"Failed to read the prescription image: {e.message}")
    logger.info("ocr done chars=%d", len(text or ""))
    return {"raw_text": text or ""}

def check_text_node(state: PipelineState) -> Dict[str, Any]:
    if not (state.get("raw_text") or "").strip():
        return _error("no_text", "No readable text was found in the image. Please upload a clearer photo.")
    return {}

def extract_node(state: PipelineState, config: RunnableConfig) -> Dict[str, Any]:
    extractor = _collaborator(config, "extractor")
    record = extractor.extract(state["raw_text"])
    return {"record": record.model_dump()}

def assemble_node(state: PipelineState) -> Dict[str, Any]:
    record = MedicationRecord(**state["record"])
    # displayed text always comes from the fixed tables, never from the model
    normalized = normalize_text(state["raw_text"])
    admin_times = detect_admin_times(normalized)
    return {
        "result": {
            "raw_text": state["raw_text"],
            "normalized_text": normalized,
            "admin_times": admin_times,
            "medication_info": record.info().model_dump(),
        }
    }
